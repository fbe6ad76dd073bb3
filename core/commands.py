"""
Команды бота и формат callback-данных кнопок.

Каждое входящее событие превращается ровно в одну команду.
Команды неизменяемы. Команды-колбэки умеют собрать свою строку
callback_data, а parse_callback_data() разбирает её обратно:

    SetLanguageCallback(3).callback_data()  # -> "set_language:3"
    parse_callback_data("set_language:3")   # -> SetLanguageCallback(language_id=3)
"""

from dataclasses import dataclass
from typing import Optional

CALLBACK_SEPARATOR = ":"


@dataclass(frozen=True)
class Command:
    """Базовый класс команд."""

    # Имя в callback_data или текстовая команда
    name = ""

    def callback_data(self) -> str:
        return self.name


# ============= ТЕКСТОВЫЕ КОМАНДЫ =============

@dataclass(frozen=True)
class StartCommand(Command):
    name = "/start"


@dataclass(frozen=True)
class StopCommand(Command):
    name = "/stop"


@dataclass(frozen=True)
class TimeToNextTest(Command):
    name = "/next"


@dataclass(frozen=True)
class GetQuizTest(Command):
    """Следующее слово теста: и текстом /test, и кнопкой «Продолжить»."""
    name = "get_quiz_test"


@dataclass(frozen=True)
class IgnoredCommand(Command):
    """Нераспознанное событие — обработчика нет."""
    name = "ignored"


# ============= КОЛБЭКИ =============

@dataclass(frozen=True)
class CorrectAnswerCallback(Command):
    word_id: int
    name = "correct"

    def callback_data(self) -> str:
        return f"{self.name}{CALLBACK_SEPARATOR}{self.word_id}"


@dataclass(frozen=True)
class IncorrectAnswerCallback(Command):
    word_id: int
    name = "incorrect"

    def callback_data(self) -> str:
        return f"{self.name}{CALLBACK_SEPARATOR}{self.word_id}"


@dataclass(frozen=True)
class StartQuizCallback(Command):
    start: bool
    name = "start_quiz"

    def callback_data(self) -> str:
        return f"{self.name}{CALLBACK_SEPARATOR}{int(self.start)}"


@dataclass(frozen=True)
class SetCategoryCallback(Command):
    category_id: int
    name = "set_category"

    def callback_data(self) -> str:
        return f"{self.name}{CALLBACK_SEPARATOR}{self.category_id}"


@dataclass(frozen=True)
class SetLanguageCallback(Command):
    language_id: int
    name = "set_language"

    def callback_data(self) -> str:
        return f"{self.name}{CALLBACK_SEPARATOR}{self.language_id}"


@dataclass(frozen=True)
class AskExamCallback(Command):
    accepted: bool
    name = "ask_exam"

    def callback_data(self) -> str:
        return f"{self.name}{CALLBACK_SEPARATOR}{int(self.accepted)}"


@dataclass(frozen=True)
class RequestData:
    """Разобранное событие: куда отвечать и что делать."""
    chat_id: int
    message_id: Optional[int]
    command: Command


TEXT_COMMANDS = {
    "/start": StartCommand(),
    "/stop": StopCommand(),
    "/test": GetQuizTest(),
    "/next": TimeToNextTest(),
}

# Колбэки с целым аргументом
_ID_CALLBACKS = {
    CorrectAnswerCallback.name: CorrectAnswerCallback,
    IncorrectAnswerCallback.name: IncorrectAnswerCallback,
    SetCategoryCallback.name: SetCategoryCallback,
    SetLanguageCallback.name: SetLanguageCallback,
}

# Колбэки с аргументом 1/0
_FLAG_CALLBACKS = {
    StartQuizCallback.name: StartQuizCallback,
    AskExamCallback.name: AskExamCallback,
}


def parse_callback_data(data: Optional[str]) -> Command:
    """Разбирает callback_data кнопки.

    Args:
        data: строка вида "name" или "name:arg"

    Returns:
        Команда или IgnoredCommand, если строку не удалось разобрать
    """
    if not data:
        return IgnoredCommand()

    name, _, arg = data.strip().partition(CALLBACK_SEPARATOR)

    if name == GetQuizTest.name and not arg:
        return GetQuizTest()

    if name in _ID_CALLBACKS:
        try:
            return _ID_CALLBACKS[name](int(arg))
        except ValueError:
            return IgnoredCommand()

    if name in _FLAG_CALLBACKS and arg in ("0", "1"):
        return _FLAG_CALLBACKS[name](arg == "1")

    return IgnoredCommand()


def parse_text_command(text: Optional[str]) -> Command:
    """Разбирает текстовую команду (/start, /stop@my_bot и т.п.)."""
    if not text:
        return IgnoredCommand()

    word = text.strip().split(maxsplit=1)[0] if text.strip() else ""
    word = word.split("@", 1)[0].lower()
    return TEXT_COMMANDS.get(word, IgnoredCommand())
