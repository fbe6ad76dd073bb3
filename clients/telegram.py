"""
Telegram: доставка исходящих сообщений и приём входящих событий.

TelegramSender получает OutgoingMessage от контроллера и отправляет
или редактирует сообщение через aiogram. Ошибки доставки логируются
и в сценарий не возвращаются.

build_router() создаёт роутер aiogram, который только кладёт
события в очередь MessageReceiver.
"""

from typing import Optional

from aiogram import Bot, Router
from aiogram.exceptions import TelegramAPIError
from aiogram.types import CallbackQuery, InlineKeyboardButton, InlineKeyboardMarkup, Message

from config import get_logger
from core.responses import OutgoingMessage

logger = get_logger(__name__)


def build_keyboard(response: OutgoingMessage) -> Optional[InlineKeyboardMarkup]:
    """Одна кнопка в ряд; без кнопок — без клавиатуры."""
    if not response.buttons:
        return None
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text=button.text, callback_data=button.callback_data)]
        for button in response.buttons
    ])


class TelegramSender:
    """Получатель исходящих сообщений."""

    def __init__(self, bot: Bot):
        self.bot = bot

    async def receive(self, response: OutgoingMessage) -> None:
        markup = build_keyboard(response)
        try:
            if response.is_edit:
                await self.bot.edit_message_text(
                    text=response.text,
                    chat_id=response.chat_id,
                    message_id=response.edit_message_id,
                    reply_markup=markup
                )
            else:
                await self.bot.send_message(response.chat_id, response.text, reply_markup=markup)
        except TelegramAPIError as e:
            logger.error(f"Failed to deliver message to {response.chat_id}: {e}")


def build_router(receiver) -> Router:
    """Роутер, который передаёт сообщения и нажатия кнопок в очередь.

    Args:
        receiver: MessageReceiver
    """
    router = Router(name="langtest")

    @router.callback_query()
    async def on_callback(callback: CallbackQuery):
        receiver.add(callback)
        try:
            await callback.answer()
        except TelegramAPIError as e:
            logger.warning(f"Failed to answer callback {callback.id}: {e}")

    @router.message()
    async def on_message(message: Message):
        receiver.add(message)

    return router
