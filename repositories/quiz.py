"""
Тест: набор слов пользователя, следующее слово, ответы.
"""

from abc import ABC, abstractmethod

from clients.backend import LangTestApi
from core.state import DataState

from .base import call_flag, fetch_state
from .models import QuizWord, QuizWordStats


class QuizRepository(ABC):
    @abstractmethod
    async def get_next_quiz_word(self, chat_id: int) -> DataState:
        """Success(QuizWord) или Empty, если слова в тесте закончились."""

    @abstractmethod
    async def create_quiz_words(self, chat_id: int) -> bool:
        """Собирает новый набор слов для теста."""

    @abstractmethod
    async def set_answer_for_quiz_word(self, chat_id: int, word_id: int, is_correct: bool) -> DataState:
        """Записывает ответ, возвращает Success(QuizWordStats)."""

    @abstractmethod
    async def reset_quiz(self, chat_id: int) -> bool:
        """Сбрасывает тест пользователя целиком."""

    @abstractmethod
    async def reset_quiz_word_number(self, chat_id: int) -> bool:
        """Возвращает тест к первому слову."""


class HttpQuizRepository(QuizRepository):
    def __init__(self, api: LangTestApi):
        self.api = api

    async def get_next_quiz_word(self, chat_id: int) -> DataState:
        return await fetch_state(self.api.get_next_quiz_word(chat_id), QuizWord.from_dict, "get_next_quiz_word")

    async def create_quiz_words(self, chat_id: int) -> bool:
        return await call_flag(self.api.create_quiz_words(chat_id), "create_quiz_words")

    async def set_answer_for_quiz_word(self, chat_id: int, word_id: int, is_correct: bool) -> DataState:
        return await fetch_state(
            self.api.set_answer(chat_id, word_id, is_correct),
            QuizWordStats.from_dict,
            "set_answer"
        )

    async def reset_quiz(self, chat_id: int) -> bool:
        return await call_flag(self.api.reset_quiz(chat_id), "reset_quiz")

    async def reset_quiz_word_number(self, chat_id: int) -> bool:
        return await call_flag(self.api.reset_quiz_word_number(chat_id), "reset_quiz_word_number")
