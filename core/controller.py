"""
QuizController — сценарий теста по словам.

Контроллер не хранит состояние между командами: на каждом шаге он
читает данные с бэкенда, передаёт исход запроса (success/empty/failure)
в таблицу переходов и выполняет действие, которое она вернула.

Сценарий:
    /start → выбор языка → выбор категории → «Начать тест?»
    → слово → ответ → слово → ... → слова закончились
    → повторный тест через перерыв пользователя (ReengagementScheduler)
"""

import logging
import random
from dataclasses import dataclass, replace
from typing import Any, Optional

from config import BOT_LANGUAGE
from i18n import I18n, get_i18n

from .commands import (
    Command,
    CorrectAnswerCallback,
    GetQuizTest,
    IncorrectAnswerCallback,
    RequestData,
    SetCategoryCallback,
    SetLanguageCallback,
    StartCommand,
    StartQuizCallback,
    StopCommand,
    TimeToNextTest,
)
from .machine import InvalidTransition, StateMachine, Transition
from .responses import Button, ResponseFactory, quiz_word_buttons
from .scheduler import ReengagementScheduler
from .state import Empty, Failure, Success, is_data_state

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Turn:
    """Контекст одного шага сценария."""
    chat_id: int
    message_id: Optional[int] = None
    command: Optional[Command] = None
    # Значение последнего успешного запроса
    data: Any = None
    # Данные предыдущего шага, нужные следующему (например, выбранная категория)
    related: Any = None


class QuizController:
    """Обработка команд пользователя."""

    def __init__(
        self,
        users,
        quiz,
        categories,
        languages,
        sink,
        scheduler: ReengagementScheduler,
        machine: StateMachine,
        i18n: I18n = None,
        lang: str = BOT_LANGUAGE,
        rng: random.Random = None
    ):
        """
        Args:
            users, quiz, categories, languages: Репозитории бэкенда
            sink: Получатель исходящих сообщений (метод receive)
            scheduler: Планировщик повторных тестов
            machine: Таблица переходов
            i18n: Локализация (по умолчанию глобальная)
            lang: Язык системных сообщений
            rng: Генератор для перемешивания вариантов ответа

        Raises:
            InvalidTransition: если в таблице есть действие, которого нет у контроллера
        """
        self.users = users
        self.quiz = quiz
        self.categories = categories
        self.languages = languages
        self.sink = sink
        self.scheduler = scheduler
        self.machine = machine
        self.i18n = i18n or get_i18n()
        self.lang = lang
        self.rng = rng

        self._actions = {}
        for action in machine.actions():
            handler = getattr(self, f"_{action}", None)
            if handler is None:
                raise InvalidTransition(f"Controller has no handler for action '{action}'")
            self._actions[action] = handler

    # =========================================
    # Точки входа
    # =========================================

    async def handle(self, request: RequestData) -> None:
        """Обрабатывает одну команду."""
        command = request.command
        turn = Turn(chat_id=request.chat_id, message_id=request.message_id, command=command)

        if isinstance(command, StartCommand):
            await self._step("start", await self.users.get_user_by_chat_id(turn.chat_id), turn)
        elif isinstance(command, StopCommand):
            await self._step("stop", "always", turn)
        elif isinstance(command, GetQuizTest):
            await self._try_send_next_word(turn)
        elif isinstance(command, TimeToNextTest):
            await self._step("time_to_next_test", await self.users.get_user_by_chat_id(turn.chat_id), turn)
        elif isinstance(command, CorrectAnswerCallback):
            await self._step("answer", "correct", turn)
        elif isinstance(command, IncorrectAnswerCallback):
            await self._step("answer", "incorrect", turn)
        elif isinstance(command, StartQuizCallback):
            await self._step("start_quiz", "yes" if command.start else "no", turn)
        elif isinstance(command, SetLanguageCallback):
            language = await self.languages.get_language_by_id(command.language_id)
            await self._step("set_language", language, turn)
        elif isinstance(command, SetCategoryCallback):
            category = await self.categories.get_category(command.category_id)
            await self._step("set_category", category, turn)
        else:
            # AskExamCallback и нераспознанные события
            await self._step("ignored", "always", turn)

    async def resume(self, chat_id: int) -> None:
        """Повторный тест по таймеру: ответа на команду нет, ошибки только в лог."""
        logger.info(f"Resume quiz flow for {chat_id}")
        await self._step("resume", await self.users.get_user_by_chat_id(chat_id), Turn(chat_id=chat_id))

    async def _step(self, event: str, result: Any, turn: Turn) -> Transition:
        """
        Разрешает переход и выполняет действие.

        Args:
            event: Событие таблицы переходов
            result: DataState запроса к бэкенду или готовый исход ("yes", "always", ...)
            turn: Контекст шага

        Returns:
            Выполненный переход
        """
        if is_data_state(result):
            outcome = result.outcome
            if isinstance(result, Failure):
                logger.error(f"[ERROR] {event}: backend failure for chat {turn.chat_id}: {result.error!r}")
            turn = replace(turn, data=result.value if isinstance(result, Success) else None)
        else:
            outcome = result

        transition = self.machine.resolve(event, outcome)
        state = "state unchanged" if transition.keeps_state else self.machine.describe(transition.next_state)
        logger.debug(f"[{event}] chat {turn.chat_id}: {outcome} -> {transition.action} ({state})")
        await self._actions[transition.action](turn)
        return transition

    # =========================================
    # Отправка
    # =========================================

    def _t(self, key: str, **kwargs) -> str:
        return self.i18n.t(f"messages.{key}", self.lang, **kwargs)

    async def _send(self, chat_id: int, text: str, edit_message_id: Optional[int] = None, buttons=()) -> None:
        response = (
            ResponseFactory.builder(chat_id)
            .edit_current(edit_message_id)
            .message(text)
            .set_buttons(buttons)
            .build()
        )
        await self.sink.receive(response)

    # =========================================
    # Общие действия
    # =========================================

    async def _unexpected_error(self, turn: Turn) -> None:
        await self._send(turn.chat_id, self._t("unexpected_error"))

    async def _user_not_found(self, turn: Turn) -> None:
        await self._send(turn.chat_id, self._t("user_not_found"))

    async def _log_only(self, turn: Turn) -> None:
        # Фоновый вызов: ошибка уже залогирована в _step
        pass

    async def _ignore(self, turn: Turn) -> None:
        logger.debug(f"Ignored {type(turn.command).__name__} for chat {turn.chat_id}")

    # =========================================
    # Регистрация: язык и категория
    # =========================================

    async def _ask_language(self, turn: Turn) -> None:
        await self._step("language_list", await self.languages.get_available_languages(), turn)

    async def _send_language_list(self, turn: Turn) -> None:
        buttons = [
            Button(language.language_name, SetLanguageCallback(language.id).callback_data())
            for language in turn.data
        ]
        await self._send(turn.chat_id, self._t("choose_language"), buttons=buttons)

    async def _confirm_language(self, turn: Turn) -> None:
        language = turn.data
        await self._send(
            turn.chat_id,
            self._t("language_chosen", language=language.language_name),
            edit_message_id=turn.message_id
        )
        categories = await self.categories.get_categories_by_language(language.id)
        await self._step("category_list", categories, turn)

    async def _language_not_found(self, turn: Turn) -> None:
        await self._send(turn.chat_id, self._t("language_not_found"), edit_message_id=turn.message_id)
        await self._ask_language(turn)

    async def _send_category_list(self, turn: Turn) -> None:
        buttons = [
            Button(category.category_name, SetCategoryCallback(category.id).callback_data())
            for category in turn.data
        ]
        await self._send(turn.chat_id, self._t("choose_category"), buttons=buttons)

    async def _category_not_found(self, turn: Turn) -> None:
        await self._send(turn.chat_id, self._t("category_not_found"))

    async def _register_user(self, turn: Turn) -> None:
        category = turn.data
        user = await self.users.add_user(
            chat_id=turn.chat_id,
            category_id=category.id,
            language_id=category.language_id
        )
        await self._step("register", user, replace(turn, related=category))

    async def _confirm_category(self, turn: Turn) -> None:
        category = turn.related
        await self._send(
            turn.chat_id,
            self._t("category_chosen", category=category.category_name),
            edit_message_id=turn.message_id
        )
        await self._offer_quiz(turn)

    # =========================================
    # Начало теста
    # =========================================

    async def _offer_quiz(self, turn: Turn) -> None:
        await self._step("offer_quiz", await self.quiz.get_next_quiz_word(turn.chat_id), turn)

    async def _ask_start_quiz(self, turn: Turn) -> None:
        await self._send_current_user_settings(turn.chat_id)
        await self._send(turn.chat_id, self._t("quiz_start_question"), buttons=[
            Button(self._t("yes"), StartQuizCallback(True).callback_data()),
            Button(self._t("no"), StartQuizCallback(False).callback_data()),
        ])

    async def _ask_continue_quiz(self, turn: Turn) -> None:
        await self._send_current_user_settings(turn.chat_id)
        await self._send(turn.chat_id, self._t("quiz_continue_question"), buttons=[
            Button(self._t("yes"), GetQuizTest().callback_data()),
            Button(self._t("no"), StartQuizCallback(False).callback_data()),
            Button(self._t("start_again"), StartQuizCallback(True).callback_data()),
        ])

    async def _send_current_user_settings(self, chat_id: int) -> None:
        """Показывает язык и категорию пользователя.

        Любая ошибка здесь превращается в одно сообщение об ошибке
        и не прерывает основной сценарий.
        """
        user = await self.users.get_user_by_chat_id(chat_id)
        if user is Empty:
            await self._send(chat_id, self._t("user_not_found"))
            return
        if isinstance(user, Failure):
            logger.error(f"[ERROR] unexpected error {chat_id}: {user.error!r}")
            await self._send(chat_id, self._t("unexpected_error"))
            return

        category = await self.categories.get_category(user.value.category_id)
        language = await self.languages.get_language_by_id(user.value.language_id)
        if not (isinstance(category, Success) and isinstance(language, Success)):
            logger.error(f"[ERROR] Category or language not found for {chat_id}: {category!r}, {language!r}")
            await self._send(chat_id, self._t("unexpected_error"))
            return

        await self._send(chat_id, self._t(
            "user_settings",
            language=language.value.language_name,
            category=category.value.category_name
        ))

    async def _begin_quiz(self, turn: Turn) -> None:
        if not await self.quiz.create_quiz_words(turn.chat_id):
            logger.error(f"[ERROR] Quiz words were not created for {turn.chat_id}")
            await self._unexpected_error(turn)
            return

        await self._send(turn.chat_id, self._t("start_quiz"), edit_message_id=turn.message_id)
        await self._try_send_next_word(turn)

    async def _quiz_help(self, turn: Turn) -> None:
        await self._send(turn.chat_id, self._t("start_quiz_help"), edit_message_id=turn.message_id)

    # =========================================
    # Слова и ответы
    # =========================================

    async def _accept_answer(self, turn: Turn) -> None:
        if not await self._record_answer(turn, is_correct=True):
            return
        await self._send(turn.chat_id, self._t("right_answer"), edit_message_id=turn.message_id)
        await self._try_send_next_word(turn)

    async def _reject_answer(self, turn: Turn) -> None:
        if not await self._record_answer(turn, is_correct=False):
            return
        await self._send(turn.chat_id, self._t("wrong_answer"), edit_message_id=turn.message_id)
        await self._try_send_next_word(turn)

    async def _record_answer(self, turn: Turn, is_correct: bool) -> bool:
        """Сохраняет ответ. Ошибка бэкенда: сообщение об ошибке, слово остаётся на экране."""
        word_id = turn.command.word_id
        stats = await self.quiz.set_answer_for_quiz_word(turn.chat_id, word_id, is_correct)
        if isinstance(stats, Success):
            logger.debug(f"Answer saved for {turn.chat_id}, word {word_id}: {stats.value}")
        elif isinstance(stats, Failure):
            logger.error(f"[ERROR] Answer not saved for {turn.chat_id}, word {word_id}: {stats.error!r}")
            await self._unexpected_error(turn)
            return False
        else:
            logger.warning(f"Word {word_id} not found in quiz of {turn.chat_id}")
        return True

    async def _try_send_next_word(self, turn: Turn) -> None:
        await self._step("next_word", await self.quiz.get_next_quiz_word(turn.chat_id), turn)

    async def _send_word(self, turn: Turn) -> None:
        word = turn.data
        try:
            buttons = quiz_word_buttons(word, self.rng)
        except ValueError as e:
            logger.error(f"Can't find words for {turn.chat_id}: {e}")
            await self._end_quiz(turn)
            return

        await self._send(turn.chat_id, self._t("quiz_text", word=word.original_word), buttons=buttons)

    # =========================================
    # Конец теста и перерыв
    # =========================================

    async def _end_quiz(self, turn: Turn) -> None:
        await self._step("end_quiz", await self.users.get_user_by_chat_id(turn.chat_id), turn)

    async def _schedule_next_test(self, turn: Turn) -> None:
        user = turn.data
        time = self.i18n.format_duration(user.break_time_in_millis, self.lang)
        await self._send(turn.chat_id, self._t("next_test_notify", time=time))
        self.scheduler.schedule(turn.chat_id, user.break_time_in_millis)

    async def _report_break_time(self, turn: Turn) -> None:
        left = self.scheduler.time_left(turn.chat_id)
        if left is not None:
            millis = int(left.total_seconds() * 1000)
        else:
            millis = turn.data.break_time_in_millis
        time = self.i18n.format_duration(millis, self.lang)
        await self._send(turn.chat_id, self._t("time_to_next_test", time=time))

    async def _delete_user(self, turn: Turn) -> None:
        if not await self.users.delete_user_chat_id(turn.chat_id):
            logger.error(f"[ERROR] User {turn.chat_id} was not deleted")
            await self._unexpected_error(turn)
            return
        logger.info(f"User {turn.chat_id} deleted")
        await self._send(turn.chat_id, self._t("stopped"))
