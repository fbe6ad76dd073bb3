"""
Общие фикстуры и фейки для тестов без Telegram и бэкенда.

Запуск: python -m pytest tests -v
"""

import asyncio
import os
import sys
from datetime import datetime
from types import SimpleNamespace

import pytest

# Добавляем путь к проекту
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import TRANSITIONS_PATH  # noqa: E402
from core.controller import QuizController  # noqa: E402
from core.machine import StateMachine  # noqa: E402
from core.scheduler import ReengagementScheduler  # noqa: E402
from core.state import Empty, Success  # noqa: E402
from i18n import I18n  # noqa: E402
from repositories.models import Category, Language, QuizWord, User  # noqa: E402

CHAT_ID = 42
MESSAGE_ID = 7


# ============= ФЕЙКИ РЕПОЗИТОРИЕВ =============

class FakeUserRepository:
    def __init__(self, user=Empty, added=None, deleted=True):
        self.user = user
        self.added = added
        self.deleted = deleted
        self.calls = []

    async def get_user_by_chat_id(self, chat_id):
        self.calls.append(("get", chat_id))
        return self.user

    async def add_user(self, chat_id, category_id, language_id):
        self.calls.append(("add", chat_id, category_id, language_id))
        return self.added if self.added is not None else self.user

    async def delete_user_chat_id(self, chat_id):
        self.calls.append(("delete", chat_id))
        return self.deleted

    def called(self, name):
        return [call for call in self.calls if call[0] == name]


class FakeQuizRepository:
    def __init__(self, words=None, created=True, answer=Empty):
        # Ответы get_next_quiz_word по порядку, потом Empty
        self.words = list(words or [])
        self.created = created
        self.answer = answer
        self.answers = []
        self.created_for = []

    async def get_next_quiz_word(self, chat_id):
        return self.words.pop(0) if self.words else Empty

    async def create_quiz_words(self, chat_id):
        self.created_for.append(chat_id)
        return self.created

    async def set_answer_for_quiz_word(self, chat_id, word_id, is_correct):
        self.answers.append((chat_id, word_id, is_correct))
        return self.answer

    async def reset_quiz(self, chat_id):
        return True

    async def reset_quiz_word_number(self, chat_id):
        return True


class FakeCategoryRepository:
    def __init__(self, category=Empty, categories=Empty):
        self.category = category
        self.categories = categories
        self.requested_languages = []

    async def get_category(self, category_id):
        return self.category

    async def get_categories_by_language(self, language_id):
        self.requested_languages.append(language_id)
        return self.categories


class FakeLanguageRepository:
    def __init__(self, language=Empty, languages=Empty):
        self.language = language
        self.languages = languages

    async def get_language_by_id(self, language_id):
        return self.language

    async def get_available_languages(self):
        return self.languages


class RecordingSink:
    """Получатель исходящих сообщений, который всё запоминает."""

    def __init__(self):
        self.messages = []

    async def receive(self, response):
        self.messages.append(response)

    @property
    def texts(self):
        return [m.text for m in self.messages]


class FakeApsScheduler:
    """Минимальная замена AsyncIOScheduler: хранит задачи, ничего не запускает."""

    def __init__(self):
        self.jobs = {}
        self.running = False

    def start(self):
        self.running = True

    def shutdown(self, wait=True):
        self.running = False

    def add_job(self, func, trigger=None, run_date=None, args=None, id=None,
                replace_existing=False, **kwargs):
        if id in self.jobs and not replace_existing:
            raise ValueError(f"Job {id} already exists")
        self.jobs[id] = SimpleNamespace(
            id=id, func=func, args=args or [], trigger=trigger, next_run_time=run_date
        )

    def get_jobs(self):
        return list(self.jobs.values())


# ============= ДАННЫЕ =============

ENGLISH = Language(id=1, language_name="English")
GERMAN = Language(id=2, language_name="Deutsch")
ANIMALS = Category(id=10, category_name="Animals", language_id=1)
FOOD = Category(id=11, category_name="Food", language_id=1)
USER = User(chat_id=CHAT_ID, category_id=10, language_id=1, break_time_in_millis=3_600_000)
CAT = QuizWord(id=100, original_word="cat", correct_translation="кошка",
               wrong_translations=["собака", "мышь"])


def run(coro):
    return asyncio.run(coro)


def message_event(chat_id=CHAT_ID, message_id=MESSAGE_ID, text="/start"):
    """Сообщение в форме aiogram Message (только нужные атрибуты)."""
    return SimpleNamespace(
        message_id=message_id,
        date=datetime.now(),
        chat=SimpleNamespace(id=chat_id),
        text=text,
    )


# ============= ФИКСТУРЫ =============

@pytest.fixture
def machine():
    return StateMachine(TRANSITIONS_PATH)


@pytest.fixture
def i18n():
    return I18n()


@pytest.fixture
def ru(i18n):
    """Текст системного сообщения на русском."""
    def text(key, **kwargs):
        return i18n.t(f"messages.{key}", "ru", **kwargs)
    return text


@pytest.fixture
def make_controller(machine, i18n):
    """Контроллер с фейковыми репозиториями.

    Возвращает (controller, sink, aps_scheduler).
    """
    def factory(users=None, quiz=None, categories=None, languages=None, replace_pending=True):
        sink = RecordingSink()
        aps = FakeApsScheduler()
        scheduler = ReengagementScheduler(aps, replace_pending=replace_pending)
        controller = QuizController(
            users=users or FakeUserRepository(),
            quiz=quiz or FakeQuizRepository(),
            categories=categories or FakeCategoryRepository(),
            languages=languages or FakeLanguageRepository(),
            sink=sink,
            scheduler=scheduler,
            machine=machine,
            i18n=i18n,
            lang="ru",
        )
        scheduler.bind(controller.resume)
        return controller, sink, aps
    return factory


def success(value):
    return Success(value)
