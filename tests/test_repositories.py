"""
Тест перевода ответов бэкенда в DataState.
"""

import asyncio

import aiohttp

from conftest import run
from core.state import Empty, Failure, Success
from repositories import (
    HttpCategoryRepository,
    HttpLanguageRepository,
    HttpQuizRepository,
    HttpUserRepository,
)
from repositories.models import Category, Language, QuizWord, QuizWordStats, User


class FakeApi:
    """LangTestApi, который отдаёт заранее заданные ответы."""

    def __init__(self, **responses):
        self.responses = responses
        self.calls = []

    def __getattr__(self, name):
        async def method(*args):
            self.calls.append((name, args))
            response = self.responses.get(name)
            if isinstance(response, BaseException):
                raise response
            return response
        return method


def test_user_found():
    api = FakeApi(get_user={"chatId": 42, "categoryId": 10, "languageId": 1, "breakTimeInMillis": 60000})

    result = run(HttpUserRepository(api).get_user_by_chat_id(42))

    assert result == Success(User(chat_id=42, category_id=10, language_id=1, break_time_in_millis=60000))
    assert api.calls == [("get_user", (42,))]


def test_user_not_found():
    assert run(HttpUserRepository(FakeApi(get_user=None)).get_user_by_chat_id(42)) is Empty


def test_user_request_failure():
    error = aiohttp.ClientConnectionError("refused")

    result = run(HttpUserRepository(FakeApi(get_user=error)).get_user_by_chat_id(42))

    assert isinstance(result, Failure)
    assert result.error is error


def test_timeout_is_failure():
    result = run(HttpUserRepository(FakeApi(get_user=asyncio.TimeoutError())).get_user_by_chat_id(42))

    assert isinstance(result, Failure)


def test_malformed_response_is_failure(caplog):
    result = run(HttpUserRepository(FakeApi(get_user={"chatId": 42})).get_user_by_chat_id(42))

    assert isinstance(result, Failure)
    assert isinstance(result.error, KeyError)
    assert "unexpected response shape" in caplog.text


def test_add_user():
    api = FakeApi(add_user={"chatId": 42, "categoryId": 11, "languageId": 2})

    result = run(HttpUserRepository(api).add_user(42, 11, 2))

    assert result.value.category_id == 11
    assert result.value.break_time_in_millis == 0
    assert api.calls == [("add_user", (42, 11, 2))]


def test_delete_user():
    assert run(HttpUserRepository(FakeApi(delete_user=True)).delete_user_chat_id(42)) is True
    assert run(HttpUserRepository(FakeApi(delete_user=False)).delete_user_chat_id(42)) is False
    assert run(HttpUserRepository(FakeApi(delete_user=RuntimeError())).delete_user_chat_id(42)) is False


def test_next_quiz_word():
    api = FakeApi(get_next_quiz_word={
        "id": 100,
        "originalWord": "cat",
        "correctTranslation": "кошка",
        "wrongTranslations": ["собака", "мышь"],
    })

    result = run(HttpQuizRepository(api).get_next_quiz_word(42))

    assert result == Success(QuizWord(100, "cat", "кошка", ["собака", "мышь"]))


def test_quiz_finished():
    assert run(HttpQuizRepository(FakeApi(get_next_quiz_word=None)).get_next_quiz_word(42)) is Empty


def test_set_answer():
    api = FakeApi(set_answer={"wordId": 100, "correctAnswers": 3, "incorrectAnswers": 1})

    result = run(HttpQuizRepository(api).set_answer_for_quiz_word(42, 100, False))

    assert result == Success(QuizWordStats(word_id=100, correct_answers=3, incorrect_answers=1))
    assert api.calls == [("set_answer", (42, 100, False))]


def test_quiz_flags():
    repo = HttpQuizRepository(FakeApi(create_quiz_words=True, reset_quiz=False, reset_quiz_word_number=True))

    assert run(repo.create_quiz_words(42)) is True
    assert run(repo.reset_quiz(42)) is False
    assert run(repo.reset_quiz_word_number(42)) is True


def test_categories_by_language():
    api = FakeApi(get_categories_by_language=[
        {"id": 10, "categoryName": "Animals", "languageId": 1},
        {"id": 11, "categoryName": "Food", "languageId": 1},
    ])

    result = run(HttpCategoryRepository(api).get_categories_by_language(1))

    assert [c.category_name for c in result.value] == ["Animals", "Food"]
    assert isinstance(result.value[0], Category)


def test_empty_category_list_is_empty():
    api = FakeApi(get_categories_by_language=[])

    assert run(HttpCategoryRepository(api).get_categories_by_language(1)) is Empty


def test_category_list_of_wrong_shape():
    api = FakeApi(get_categories_by_language={"id": 10})

    assert isinstance(run(HttpCategoryRepository(api).get_categories_by_language(1)), Failure)


def test_category():
    api = FakeApi(get_category={"id": 10, "categoryName": "Animals", "languageId": 1})

    assert run(HttpCategoryRepository(api).get_category(10)) == Success(Category(10, "Animals", 1))


def test_languages():
    api = FakeApi(
        get_language={"id": 1, "languageName": "English"},
        get_languages=[{"id": 1, "languageName": "English"}, {"id": 2, "languageName": "Deutsch"}],
    )
    repo = HttpLanguageRepository(api)

    assert run(repo.get_language_by_id(1)) == Success(Language(1, "English"))
    assert [lang.id for lang in run(repo.get_available_languages()).value] == [1, 2]


def test_no_languages():
    assert run(HttpLanguageRepository(FakeApi(get_languages=None)).get_available_languages()) is Empty
