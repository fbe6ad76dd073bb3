"""
ReengagementScheduler — отложенное возвращение пользователя к тесту.

Когда слова в тесте заканчиваются, контроллер планирует разовый вызов
resume(chat_id) через перерыв пользователя (break_time_in_millis).

Политики:
- replace_pending=True: задача на чат одна, новая заменяет ожидающую
- replace_pending=False: каждый вызов — независимый таймер

Использование:
    from apscheduler.schedulers.asyncio import AsyncIOScheduler

    scheduler = ReengagementScheduler(AsyncIOScheduler(timezone=SCHEDULER_TZ))
    scheduler.bind(controller.resume)
    scheduler.start()
    scheduler.schedule(chat_id, 3_600_000)
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Optional

from config import SCHEDULER_TZ

logger = logging.getLogger(__name__)

JOB_PREFIX = "reengage"


@dataclass(frozen=True)
class ScheduledTask:
    """Ожидающий повторный тест."""
    chat_id: int
    fire_at: datetime
    job_id: str


class ReengagementScheduler:
    """Разовые отложенные вызовы resume(chat_id) поверх APScheduler."""

    def __init__(self, scheduler, replace_pending: bool = True):
        """
        Args:
            scheduler: APScheduler (AsyncIOScheduler) или совместимый объект
            replace_pending: Заменять ожидающую задачу того же чата
        """
        self.scheduler = scheduler
        self.replace_pending = replace_pending
        self._on_fire: Optional[Callable[[int], Awaitable[None]]] = None

    def bind(self, on_fire: Callable[[int], Awaitable[None]]) -> None:
        """Задаёт корутину, которую нужно вызвать по таймеру."""
        self._on_fire = on_fire

    def start(self) -> None:
        if not self.scheduler.running:
            self.scheduler.start()
            logger.info("[START] Re-engagement scheduler")

    def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("[STOP] Re-engagement scheduler")

    @staticmethod
    def _now() -> datetime:
        return datetime.now(SCHEDULER_TZ)

    def _job_id(self, chat_id: int) -> str:
        if self.replace_pending:
            return f"{JOB_PREFIX}_{chat_id}"
        return f"{JOB_PREFIX}_{chat_id}_{uuid.uuid4().hex[:8]}"

    def schedule(self, chat_id: int, delay_millis: int) -> ScheduledTask:
        """
        Планирует resume(chat_id) через delay_millis от текущего момента.

        Args:
            chat_id: Чат пользователя
            delay_millis: Задержка в миллисекундах (отрицательная считается нулём)

        Returns:
            ScheduledTask
        """
        fire_at = self._now() + timedelta(milliseconds=max(int(delay_millis), 0))
        job_id = self._job_id(chat_id)

        self.scheduler.add_job(
            self._fire,
            trigger="date",
            run_date=fire_at,
            args=[chat_id],
            id=job_id,
            name=f"Повторный тест для чата {chat_id}",
            replace_existing=self.replace_pending,
            misfire_grace_time=None,
        )
        logger.info(f"Next test scheduled for {chat_id} at {fire_at.isoformat()}")
        return ScheduledTask(chat_id=chat_id, fire_at=fire_at, job_id=job_id)

    async def _fire(self, chat_id: int) -> None:
        if self._on_fire is None:
            logger.error(f"[ERROR] Re-engagement fired for {chat_id}, but no handler bound")
            return
        try:
            await self._on_fire(chat_id)
        except Exception:
            logger.exception(f"[ERROR] Re-engagement failed for {chat_id}")

    def pending(self, chat_id: int) -> list[ScheduledTask]:
        """Ожидающие задачи чата, по времени срабатывания."""
        prefix = f"{JOB_PREFIX}_{chat_id}"
        tasks = [
            ScheduledTask(chat_id=chat_id, fire_at=job.next_run_time, job_id=job.id)
            for job in self.scheduler.get_jobs()
            if (job.id == prefix or job.id.startswith(prefix + "_"))
            and getattr(job, "next_run_time", None) is not None
        ]
        return sorted(tasks, key=lambda task: task.fire_at)

    def time_left(self, chat_id: int) -> Optional[timedelta]:
        """Сколько осталось до ближайшего повторного теста чата."""
        tasks = self.pending(chat_id)
        if not tasks:
            return None
        return max(tasks[0].fire_at - self._now(), timedelta(0))
