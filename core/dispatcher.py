"""
CommandDispatcher — запуск обработки команд в фоне.

Цикл очереди не ждёт окончания обработки: каждая команда становится
отдельной asyncio-задачей. Команды одного чата и повторный тест по таймеру
(submit) выполняются строго по очереди (asyncio.Lock на чат),
разные чаты — параллельно.
"""

import asyncio
import logging
from typing import Awaitable, Callable

from .commands import RequestData

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """Фоновый запуск обработчика команд."""

    def __init__(
        self,
        handler: Callable[[RequestData], Awaitable[None]],
        serialize_per_chat: bool = True
    ):
        """
        Args:
            handler: Корутина обработки команды (QuizController.handle)
            serialize_per_chat: Выполнять команды одного чата последовательно
        """
        self.handler = handler
        self.serialize_per_chat = serialize_per_chat

        self._locks: dict[int, asyncio.Lock] = {}
        self._waiting: dict[int, int] = {}
        self._tasks: set[asyncio.Task] = set()

    def dispatch(self, request: RequestData) -> asyncio.Task:
        """Запускает обработку команды и сразу возвращает задачу."""
        return self.submit(request.chat_id, self.handler, request)

    def submit(self, chat_id: int, handler: Callable[..., Awaitable[None]], *args) -> asyncio.Task:
        """
        Запускает любую работу с чатом в той же очереди, что и команды.

        Args:
            chat_id: Чат, к которому относится работа
            handler: Корутина-функция (например, QuizController.resume)
            *args: Аргументы handler

        Returns:
            Фоновая задача
        """
        if self.serialize_per_chat:
            coro = self._run_serialized(chat_id, handler, args)
        else:
            coro = self._run(chat_id, handler, args)

        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _run_serialized(self, chat_id: int, handler, args: tuple) -> None:
        lock = self._locks.setdefault(chat_id, asyncio.Lock())
        self._waiting[chat_id] = self._waiting.get(chat_id, 0) + 1
        try:
            async with lock:
                await self._run(chat_id, handler, args)
        finally:
            self._waiting[chat_id] -= 1
            if not self._waiting[chat_id]:
                del self._waiting[chat_id]
                del self._locks[chat_id]

    async def _run(self, chat_id: int, handler, args: tuple) -> None:
        try:
            await handler(*args)
        except Exception:
            name = getattr(handler, "__name__", type(handler).__name__)
            logger.exception(f"[ERROR] Unhandled error in {name}, chat {chat_id}")

    @property
    def active_chats(self) -> int:
        """Сколько чатов сейчас обрабатывается или ждёт."""
        return len(self._locks)

    async def join(self) -> None:
        """Ждёт завершения всех запущенных задач (включая порождённые ими)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
