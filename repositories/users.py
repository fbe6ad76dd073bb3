"""
Пользователи: chat_id, выбранные язык и категория, перерыв между тестами.
"""

from abc import ABC, abstractmethod

from clients.backend import LangTestApi
from core.state import DataState

from .base import call_flag, fetch_state
from .models import User


class UserRepository(ABC):
    @abstractmethod
    async def get_user_by_chat_id(self, chat_id: int) -> DataState:
        """Success(User), Empty если пользователь не зарегистрирован."""

    @abstractmethod
    async def add_user(self, chat_id: int, category_id: int, language_id: int) -> DataState:
        """Регистрирует пользователя, возвращает созданную запись."""

    @abstractmethod
    async def delete_user_chat_id(self, chat_id: int) -> bool:
        """Удаляет пользователя. True если бэкенд подтвердил удаление."""


class HttpUserRepository(UserRepository):
    def __init__(self, api: LangTestApi):
        self.api = api

    async def get_user_by_chat_id(self, chat_id: int) -> DataState:
        return await fetch_state(self.api.get_user(chat_id), User.from_dict, "get_user")

    async def add_user(self, chat_id: int, category_id: int, language_id: int) -> DataState:
        return await fetch_state(
            self.api.add_user(chat_id, category_id, language_id),
            User.from_dict,
            "add_user"
        )

    async def delete_user_chat_id(self, chat_id: int) -> bool:
        return await call_flag(self.api.delete_user(chat_id), "delete_user")
