"""
LangTest Bot — Telegram-бот для тренировки слов иностранного языка.

Пользователь выбирает язык и категорию, проходит тест по словам,
а после перерыва бот сам предлагает пройти следующий тест.
Слова, категории и состояние пользователей хранит бэкенд LangTest (REST).
"""

import asyncio

from aiogram import Bot, Dispatcher
from aiogram.types import BotCommand
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from config import (
    BACKEND_URL,
    BOT_LANGUAGE,
    BOT_TOKEN,
    SCHEDULER_TZ,
    SLEEP_TIME,
    TRANSITIONS_PATH,
    get_logger,
    setup_logging,
    validate_env,
)
from config.features import flags
from clients.backend import LangTestApi
from clients.telegram import TelegramSender, build_router
from core import (
    CommandDispatcher,
    MessageReceiver,
    QuizController,
    ReengagementScheduler,
    StateMachine,
    UpdateParser,
)
from repositories import (
    HttpCategoryRepository,
    HttpLanguageRepository,
    HttpQuizRepository,
    HttpUserRepository,
)

logger = get_logger(__name__)


def build_receiver(bot: Bot, scheduler: AsyncIOScheduler, api: LangTestApi = None) -> tuple:
    """Собирает очередь, диспетчер, контроллер и планировщик.

    Повторный тест по таймеру идёт через диспетчер, в одной очереди
    с командами того же чата.

    Args:
        bot: aiogram Bot
        scheduler: APScheduler
        api: Клиент бэкенда (по умолчанию LangTestApi(BACKEND_URL))

    Returns:
        (receiver, dispatcher, reengagement)
    """
    api = api or LangTestApi(BACKEND_URL)

    reengagement = ReengagementScheduler(
        scheduler,
        replace_pending=flags.is_enabled("scheduler.replace_pending", default=True)
    )
    controller = QuizController(
        users=HttpUserRepository(api),
        quiz=HttpQuizRepository(api),
        categories=HttpCategoryRepository(api),
        languages=HttpLanguageRepository(api),
        sink=TelegramSender(bot),
        scheduler=reengagement,
        machine=StateMachine(TRANSITIONS_PATH),
        lang=BOT_LANGUAGE,
    )
    dispatcher = CommandDispatcher(
        controller.handle,
        serialize_per_chat=flags.is_enabled("dispatch.serialize_per_chat", default=True)
    )

    async def resume(chat_id: int) -> None:
        await dispatcher.submit(chat_id, controller.resume, chat_id)

    reengagement.bind(resume)

    receiver = MessageReceiver(
        UpdateParser(),
        dispatcher,
        poll_interval=float(flags.get("queue.poll_interval", SLEEP_TIME))
    )
    return receiver, dispatcher, reengagement


async def main():
    setup_logging()
    validate_env()

    bot = Bot(token=BOT_TOKEN)
    dp = Dispatcher()

    receiver, dispatcher, reengagement = build_receiver(
        bot, AsyncIOScheduler(timezone=SCHEDULER_TZ)
    )
    dp.include_router(build_router(receiver))

    # Установка команд бота (Menu-кнопка)
    await bot.set_my_commands([
        BotCommand(command="start", description="Начать / выбрать язык"),
        BotCommand(command="test", description="Следующее слово"),
        BotCommand(command="next", description="Когда следующий тест"),
        BotCommand(command="stop", description="Отписаться"),
    ])

    reengagement.start()
    receiver_task = asyncio.create_task(receiver.start())

    logger.info(f"🚀 Бот запущен, бэкенд: {BACKEND_URL}")
    try:
        await dp.start_polling(bot)
    finally:
        receiver.stop()
        await receiver_task
        await dispatcher.join()
        reengagement.shutdown()
        await bot.session.close()


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
