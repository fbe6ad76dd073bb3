"""
Категории слов (привязаны к языку).
"""

from abc import ABC, abstractmethod

from clients.backend import LangTestApi
from core.state import DataState

from .base import fetch_list_state, fetch_state
from .models import Category


class CategoryRepository(ABC):
    @abstractmethod
    async def get_category(self, category_id: int) -> DataState:
        ...

    @abstractmethod
    async def get_categories_by_language(self, language_id: int) -> DataState:
        """Success(list[Category]); пустой список — Empty."""


class HttpCategoryRepository(CategoryRepository):
    def __init__(self, api: LangTestApi):
        self.api = api

    async def get_category(self, category_id: int) -> DataState:
        return await fetch_state(self.api.get_category(category_id), Category.from_dict, "get_category")

    async def get_categories_by_language(self, language_id: int) -> DataState:
        return await fetch_list_state(
            self.api.get_categories_by_language(language_id),
            Category.from_dict,
            "get_categories_by_language"
        )
