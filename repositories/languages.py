"""
Изучаемые языки.
"""

from abc import ABC, abstractmethod

from clients.backend import LangTestApi
from core.state import DataState

from .base import fetch_list_state, fetch_state
from .models import Language


class LanguageRepository(ABC):
    @abstractmethod
    async def get_language_by_id(self, language_id: int) -> DataState:
        ...

    @abstractmethod
    async def get_available_languages(self) -> DataState:
        """Success(list[Language]); пустой список — Empty."""


class HttpLanguageRepository(LanguageRepository):
    def __init__(self, api: LangTestApi):
        self.api = api

    async def get_language_by_id(self, language_id: int) -> DataState:
        return await fetch_state(self.api.get_language(language_id), Language.from_dict, "get_language")

    async def get_available_languages(self) -> DataState:
        return await fetch_list_state(self.api.get_languages(), Language.from_dict, "get_languages")
