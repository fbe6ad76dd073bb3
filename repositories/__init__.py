"""
Репозитории бэкенда LangTest.

Каждый метод чтения возвращает DataState (Success / Empty / Failure).

Использование:
    api = LangTestApi(BACKEND_URL)
    users = HttpUserRepository(api)

    user = await users.get_user_by_chat_id(chat_id)
"""

from .models import User, QuizWord, QuizWordStats, Category, Language
from .users import UserRepository, HttpUserRepository
from .quiz import QuizRepository, HttpQuizRepository
from .categories import CategoryRepository, HttpCategoryRepository
from .languages import LanguageRepository, HttpLanguageRepository

__all__ = [
    # models
    'User',
    'QuizWord',
    'QuizWordStats',
    'Category',
    'Language',
    # interfaces
    'UserRepository',
    'QuizRepository',
    'CategoryRepository',
    'LanguageRepository',
    # http
    'HttpUserRepository',
    'HttpQuizRepository',
    'HttpCategoryRepository',
    'HttpLanguageRepository',
]
