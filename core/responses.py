"""
Исходящие сообщения: абстрактная директива для отправки и её сборка.

Контроллер ничего не знает о Telegram: он собирает OutgoingMessage
(текст, какое сообщение редактировать, кнопки), а доставкой занимается
получатель (clients.telegram.TelegramSender).

    response = (
        ResponseFactory.builder(chat_id)
        .message("Начать тест?")
        .add_button("Да", StartQuizCallback(True).callback_data())
        .build()
    )
"""

import random
from dataclasses import dataclass
from typing import Iterable, Optional

from .commands import CorrectAnswerCallback, IncorrectAnswerCallback


@dataclass(frozen=True)
class Button:
    text: str
    callback_data: str


@dataclass(frozen=True)
class OutgoingMessage:
    """Директива отправки: новое сообщение или правка существующего."""
    chat_id: int
    text: str
    edit_message_id: Optional[int] = None
    buttons: tuple = ()

    @property
    def is_edit(self) -> bool:
        return self.edit_message_id is not None


class ResponseBuilder:
    """Пошаговая сборка OutgoingMessage."""

    def __init__(self, chat_id: int):
        self._chat_id = chat_id
        self._text = ""
        self._edit_message_id: Optional[int] = None
        self._buttons: list[Button] = []

    def message(self, text: str) -> "ResponseBuilder":
        self._text = text
        return self

    def edit_current(self, message_id: Optional[int]) -> "ResponseBuilder":
        """Редактировать сообщение вместо отправки нового (None — отправить новое)."""
        self._edit_message_id = message_id
        return self

    def add_button(self, text: str, callback_data: str) -> "ResponseBuilder":
        self._buttons.append(Button(text, callback_data))
        return self

    def set_buttons(self, buttons: Iterable[Button]) -> "ResponseBuilder":
        self._buttons = list(buttons)
        return self

    def build(self) -> OutgoingMessage:
        if not self._text:
            raise ValueError("Response text is empty")
        return OutgoingMessage(
            chat_id=self._chat_id,
            text=self._text,
            edit_message_id=self._edit_message_id,
            buttons=tuple(self._buttons),
        )


class ResponseFactory:
    @staticmethod
    def builder(chat_id: int) -> ResponseBuilder:
        return ResponseBuilder(chat_id)


def quiz_word_buttons(word, rng: random.Random = None) -> list[Button]:
    """Кнопки вариантов ответа для слова теста в случайном порядке.

    Args:
        word: QuizWord
        rng: генератор случайных чисел (для воспроизводимости в тестах)

    Returns:
        Неправильные переводы с колбэком incorrect, правильный — с correct

    Raises:
        ValueError: если у слова нет правильного перевода
    """
    if not word.correct_translation:
        raise ValueError(f"Quiz word {word.id} has no correct translation")

    buttons = [
        Button(text, IncorrectAnswerCallback(word.id).callback_data())
        for text in word.wrong_translations
        if text
    ]
    buttons.append(Button(word.correct_translation, CorrectAnswerCallback(word.id).callback_data()))
    (rng or random).shuffle(buttons)
    return buttons
