"""
MessageReceiver — очередь входящих событий и цикл её разбора.

Транспорт (aiogram polling/webhook) только кладёт события в очередь
через add(). Единственный цикл start() забирает их в порядке поступления,
разбирает в команды и передаёт диспетчеру, не дожидаясь обработки.

Использование:
    receiver = MessageReceiver(UpdateParser(), dispatcher)
    task = asyncio.create_task(receiver.start())
    receiver.add(update)
    ...
    receiver.stop()
    await task
"""

import asyncio
import logging
import threading
from typing import Any, Optional

from config import SLEEP_TIME

from .parser import UpdateParser

logger = logging.getLogger(__name__)

# Будит цикл при stop(), в обработку не попадает
_WAKEUP = object()


class MessageReceiver:
    """Неограниченная FIFO-очередь событий с одним потребителем."""

    def __init__(self, parser: UpdateParser, dispatcher, poll_interval: float = SLEEP_TIME):
        """
        Args:
            parser: Разбор событий в RequestData
            dispatcher: Объект с методом dispatch(request_data)
            poll_interval: Максимальное ожидание события, секунды
        """
        self.parser = parser
        self.dispatcher = dispatcher
        self.poll_interval = poll_interval

        self._queue: asyncio.Queue = asyncio.Queue()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._loop_thread: Optional[int] = None
        self._running = False
        self._stop_requested = False

    def add(self, update: Any) -> None:
        """Кладёт событие в очередь. Можно вызывать из любого потока."""
        self._put(update)

    def _put(self, item: Any) -> None:
        loop = self._loop
        if loop is not None and self._loop_thread != threading.get_ident() and not loop.is_closed():
            loop.call_soon_threadsafe(self._queue.put_nowait, item)
        else:
            self._queue.put_nowait(item)

    def is_running(self) -> bool:
        return self._running

    def qsize(self) -> int:
        """Сколько событий ждёт разбора."""
        return self._queue.qsize()

    async def start(self) -> None:
        """Цикл разбора очереди. Работает до stop().

        stop(), вызванный до первого шага цикла, не теряется: start() сразу выходит.
        Второй одновременный start() не запускает ещё один цикл.
        """
        if self._running:
            logger.warning("[WARN] Message receiver already running.")
            return
        if self._stop_requested:
            self._stop_requested = False
            logger.info("[STOP] Message receiver stopped before start.")
            return

        self._loop = asyncio.get_running_loop()
        self._loop_thread = threading.get_ident()
        self._running = True
        logger.info(f"[START] Message receiver. Receiver.class: {type(self).__name__}")

        try:
            while self._running:
                try:
                    update = await asyncio.wait_for(self._queue.get(), timeout=self.poll_interval)
                except asyncio.TimeoutError:
                    continue

                while update is not None:
                    if update is not _WAKEUP:
                        logger.debug(f"New object for analyze in queue: {type(update).__name__}")
                        self._receive(update)
                    update = self._poll()
        except asyncio.CancelledError:
            logger.error("[STOP] Message receiver cancelled. Exit.")
            raise
        finally:
            self._running = False
            self._stop_requested = False

    def _poll(self) -> Any:
        try:
            return self._queue.get_nowait()
        except asyncio.QueueEmpty:
            return None

    def _receive(self, update: Any) -> None:
        try:
            request = self.parser.parse(update)
            if request is not None:
                self.dispatcher.dispatch(request)
        except Exception:
            logger.exception(f"[ERROR] Failed to handle {type(update).__name__}")

    def stop(self) -> bool:
        """
        Останавливает цикл.

        Запрос на остановку запоминается и тогда, когда цикл ещё не начал
        работу: ближайший start() сразу завершится.

        Returns:
            True если цикл работал и остановлен, False если он не работал
        """
        self._stop_requested = True
        if not self._running:
            logger.info("[WARN] Message receiver is not running.")
            return False

        self._running = False
        self._put(_WAKEUP)
        logger.info(f"[STOP] Message receiver stopped. Events left in queue: {self.qsize()}")
        return True
