"""
Модели данных бэкенда.

Бэкенд отдаёт JSON в camelCase. from_dict бросает KeyError/TypeError/ValueError,
если в ответе нет обязательного поля — репозиторий превращает это в Failure.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class User:
    chat_id: int
    category_id: int
    language_id: int
    break_time_in_millis: int

    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            chat_id=int(data["chatId"]),
            category_id=int(data["categoryId"]),
            language_id=int(data["languageId"]),
            break_time_in_millis=int(data.get("breakTimeInMillis") or 0),
        )


@dataclass(frozen=True)
class QuizWord:
    id: int
    original_word: str
    correct_translation: str
    wrong_translations: list = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "QuizWord":
        return cls(
            id=int(data["id"]),
            original_word=str(data["originalWord"]),
            correct_translation=str(data["correctTranslation"]),
            wrong_translations=[str(w) for w in data.get("wrongTranslations") or []],
        )


@dataclass(frozen=True)
class QuizWordStats:
    word_id: int
    correct_answers: int = 0
    incorrect_answers: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "QuizWordStats":
        return cls(
            word_id=int(data["wordId"]),
            correct_answers=int(data.get("correctAnswers") or 0),
            incorrect_answers=int(data.get("incorrectAnswers") or 0),
        )


@dataclass(frozen=True)
class Category:
    id: int
    category_name: str
    language_id: int

    @classmethod
    def from_dict(cls, data: dict) -> "Category":
        return cls(
            id=int(data["id"]),
            category_name=str(data["categoryName"]),
            language_id=int(data["languageId"]),
        )


@dataclass(frozen=True)
class Language:
    id: int
    language_name: str

    @classmethod
    def from_dict(cls, data: dict) -> "Language":
        return cls(
            id=int(data["id"]),
            language_name=str(data["languageName"]),
        )
