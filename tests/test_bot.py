"""
Тест сборки компонентов бота без подключения к Telegram.
"""

import asyncio
from unittest.mock import AsyncMock

from bot import build_receiver
from conftest import FakeApsScheduler, run
from core import CommandDispatcher, MessageReceiver, ReengagementScheduler


class GatedApi:
    """LangTestApi, который держит get_user до открытия ворот; пользователя нет."""

    def __init__(self):
        self.gate = asyncio.Event()

    async def get_user(self, chat_id):
        await self.gate.wait()
        return None

    async def get_languages(self):
        return None


def test_build_receiver_wires_components():
    aps = FakeApsScheduler()

    receiver, dispatcher, reengagement = build_receiver(AsyncMock(), aps)

    assert isinstance(receiver, MessageReceiver)
    assert isinstance(dispatcher, CommandDispatcher)
    assert isinstance(reengagement, ReengagementScheduler)
    assert receiver.dispatcher is dispatcher
    assert reengagement.scheduler is aps
    assert reengagement.replace_pending is True
    assert dispatcher.serialize_per_chat is True
    assert not receiver.is_running()


def test_scheduled_resume_runs_in_chat_queue():
    async def scenario():
        aps = FakeApsScheduler()
        bot = AsyncMock()
        api = GatedApi()
        _, dispatcher, reengagement = build_receiver(bot, aps, api=api)

        reengagement.schedule(42, 0)
        job = aps.jobs["reengage_42"]
        fire = asyncio.create_task(job.func(*job.args))
        await asyncio.sleep(0.01)
        active = dispatcher.active_chats

        api.gate.set()
        await fire
        await dispatcher.join()
        return active, bot

    active, bot = run(scenario())

    assert active == 1
    bot.send_message.assert_awaited_once()
    assert bot.send_message.await_args.args[0] == 42
