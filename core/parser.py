"""
UpdateParser — превращает событие Telegram в RequestData.

Принимает aiogram Update, CallbackQuery или Message
(подойдёт любой объект с теми же атрибутами).
Командами становятся только новые сообщения и нажатия кнопок.
Правки сообщений, посты каналов и прочие события с чатом дают IgnoredCommand,
события без чата отбрасываются (parse возвращает None).
"""

import logging
from typing import Any, Optional

from .commands import (
    IgnoredCommand,
    RequestData,
    parse_callback_data,
    parse_text_command,
)

logger = logging.getLogger(__name__)

# Поля Update, в которых лежит сообщение с чатом; команды читаются только из message
_MESSAGE_FIELDS = (
    "message",
    "edited_message",
    "channel_post",
    "edited_channel_post",
    "business_message",
    "edited_business_message",
)


class UpdateParser:
    """Разбор входящих событий в команды."""

    def parse(self, event: Any) -> Optional[RequestData]:
        """
        Args:
            event: Update, CallbackQuery или Message

        Returns:
            RequestData с chat_id, message_id и командой;
            None, если в событии нет чата и отвечать некуда
        """
        if getattr(event, "update_id", None) is not None:
            return self._parse_update(event)

        if hasattr(event, "data") and hasattr(event, "message"):
            return self._parse_callback(event)

        return self._parse_message(event, commands=True)

    def _parse_update(self, update) -> Optional[RequestData]:
        callback = getattr(update, "callback_query", None)
        if callback is not None:
            return self._parse_callback(callback)

        for field in _MESSAGE_FIELDS:
            message = getattr(update, field, None)
            if message is not None:
                return self._parse_message(message, commands=field == "message")

        return self._drop(update)

    def _parse_message(self, message, commands: bool) -> Optional[RequestData]:
        chat_id = self._chat_id(message)
        if chat_id is None:
            return self._drop(message)

        if commands:
            command = parse_text_command(getattr(message, "text", None))
        else:
            command = IgnoredCommand()

        return RequestData(
            chat_id=chat_id,
            message_id=getattr(message, "message_id", None),
            command=command,
        )

    def _parse_callback(self, callback) -> Optional[RequestData]:
        message = callback.message
        chat_id = self._chat_id(message) if message is not None else None

        if chat_id is None:
            # Старое сообщение без чата: отвечаем в личку нажавшему
            from_user = getattr(callback, "from_user", None)
            chat_id = getattr(from_user, "id", None)
        if chat_id is None:
            return self._drop(callback)

        command = parse_callback_data(callback.data)
        if isinstance(command, IgnoredCommand):
            logger.debug(f"Unknown callback data: {callback.data!r}")

        return RequestData(
            chat_id=chat_id,
            message_id=getattr(message, "message_id", None),
            command=command,
        )

    @staticmethod
    def _drop(event) -> None:
        logger.debug(f"Skip {type(event).__name__} without chat")
        return None

    @staticmethod
    def _chat_id(message) -> Optional[int]:
        chat = getattr(message, "chat", None)
        return getattr(chat, "id", None)
