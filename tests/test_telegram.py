"""
Тест доставки сообщений через aiogram и роутера входящих событий.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

from aiogram.exceptions import TelegramBadRequest
from aiogram.methods import EditMessageText, SendMessage

from clients.telegram import TelegramSender, build_keyboard, build_router
from conftest import CHAT_ID, MESSAGE_ID, run
from core.responses import Button, OutgoingMessage


class CollectingReceiver:
    def __init__(self):
        self.events = []

    def add(self, event):
        self.events.append(event)


def test_keyboard_one_button_per_row():
    response = OutgoingMessage(CHAT_ID, "Начать тест?", buttons=(
        Button("Да", "start_quiz:1"),
        Button("Нет", "start_quiz:0"),
    ))

    keyboard = build_keyboard(response)

    assert [[b.text for b in row] for row in keyboard.inline_keyboard] == [["Да"], ["Нет"]]
    assert keyboard.inline_keyboard[0][0].callback_data == "start_quiz:1"


def test_no_buttons_no_keyboard():
    assert build_keyboard(OutgoingMessage(CHAT_ID, "Привет")) is None


def test_send_new_message():
    bot = AsyncMock()

    run(TelegramSender(bot).receive(OutgoingMessage(CHAT_ID, "Привет")))

    bot.send_message.assert_awaited_once_with(CHAT_ID, "Привет", reply_markup=None)
    bot.edit_message_text.assert_not_awaited()


def test_edit_message():
    bot = AsyncMock()
    response = OutgoingMessage(CHAT_ID, "Правильно!", edit_message_id=MESSAGE_ID)

    run(TelegramSender(bot).receive(response))

    bot.edit_message_text.assert_awaited_once_with(
        text="Правильно!", chat_id=CHAT_ID, message_id=MESSAGE_ID, reply_markup=None
    )
    bot.send_message.assert_not_awaited()


def test_delivery_error_is_logged(caplog):
    bot = AsyncMock()
    bot.send_message.side_effect = TelegramBadRequest(
        method=SendMessage(chat_id=CHAT_ID, text="x"), message="chat not found"
    )

    run(TelegramSender(bot).receive(OutgoingMessage(CHAT_ID, "x")))

    assert "Failed to deliver message to 42" in caplog.text


def test_edit_error_is_logged(caplog):
    bot = AsyncMock()
    bot.edit_message_text.side_effect = TelegramBadRequest(
        method=EditMessageText(text="x", chat_id=CHAT_ID, message_id=MESSAGE_ID),
        message="message is not modified",
    )

    run(TelegramSender(bot).receive(OutgoingMessage(CHAT_ID, "x", edit_message_id=MESSAGE_ID)))

    assert "message is not modified" in caplog.text


def test_router_puts_events_into_queue():
    receiver = CollectingReceiver()
    router = build_router(receiver)
    callback = SimpleNamespace(id="cb", data="start_quiz:1", answer=AsyncMock())
    message = SimpleNamespace(text="/start")

    run(router.callback_query.handlers[0].callback(callback))
    run(router.message.handlers[0].callback(message))

    assert receiver.events == [callback, message]
    callback.answer.assert_awaited_once()
