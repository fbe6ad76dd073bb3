"""
Модуль конфигурации бота.

Содержит:
- settings.py: токены, адреса бэкенда, пути, логирование
- features.py: feature flags (features.yaml)
- transitions.yaml: таблица переходов сценария теста
"""

from .settings import (
    # Токены и адреса
    BOT_TOKEN,
    BACKEND_URL,
    BACKEND_TIMEOUT,
    BOT_LANGUAGE,
    validate_env,

    # Логирование
    LOG_LEVEL,
    setup_logging,
    get_logger,

    # Пути
    BASE_DIR,
    CONFIG_DIR,
    TRANSITIONS_PATH,
    FEATURES_PATH,

    # Очередь и планировщик
    SLEEP_TIME,
    SCHEDULER_TZ,
)

__all__ = [
    'BOT_TOKEN',
    'BACKEND_URL',
    'BACKEND_TIMEOUT',
    'BOT_LANGUAGE',
    'validate_env',
    'LOG_LEVEL',
    'setup_logging',
    'get_logger',
    'BASE_DIR',
    'CONFIG_DIR',
    'TRANSITIONS_PATH',
    'FEATURES_PATH',
    'SLEEP_TIME',
    'SCHEDULER_TZ',
]
