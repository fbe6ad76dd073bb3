"""
Настройки бота: токены, адреса, пути, логирование.

Все значения читаются из переменных окружения при импорте.
Проверка обязательных переменных вынесена в validate_env(),
чтобы модули можно было импортировать в тестах без токена.
"""

import logging
import os
from datetime import timezone
from pathlib import Path

# ============= ТОКЕНЫ И АДРЕСА =============

BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN")
BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8080")
BACKEND_TIMEOUT = float(os.getenv("BACKEND_TIMEOUT", "10"))

# Язык системных сообщений бота
BOT_LANGUAGE = os.getenv("BOT_LANGUAGE", "ru")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def validate_env() -> None:
    """Проверяет обязательные переменные окружения.

    Raises:
        ValueError: если не задан TELEGRAM_BOT_TOKEN
    """
    if not BOT_TOKEN:
        raise ValueError("TELEGRAM_BOT_TOKEN не установлен!")


# ============= ЛОГИРОВАНИЕ =============

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = None) -> None:
    """Настраивает корневой логгер (вызывается один раз при запуске)."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format=LOG_FORMAT
    )


def get_logger(name: str) -> logging.Logger:
    """Возвращает логгер модуля."""
    return logging.getLogger(name)


# ============= ПУТИ =============

BASE_DIR = Path(__file__).resolve().parent.parent
CONFIG_DIR = BASE_DIR / "config"
TRANSITIONS_PATH = CONFIG_DIR / "transitions.yaml"
FEATURES_PATH = CONFIG_DIR / "features.yaml"

# ============= ОЧЕРЕДЬ И ПЛАНИРОВЩИК =============

# Максимальное ожидание новых событий в очереди, секунды
SLEEP_TIME = 1.0

# Часовой пояс планировщика повторных тестов
SCHEDULER_TZ = timezone.utc
