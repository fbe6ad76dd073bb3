"""
Feature Flags для управления поведением очереди, диспетчера и планировщика.

Позволяет:
- Менять политику повторных тестов без изменения кода
- Отключать последовательную обработку команд одного чата
- Переопределять значения через переменные окружения

Использование:
    from config.features import flags

    if flags.is_enabled("scheduler.replace_pending"):
        # Один отложенный тест на чат
    poll_interval = flags.get("queue.poll_interval", 1.0)
"""

import os
from pathlib import Path
from typing import Any

import yaml

from .settings import FEATURES_PATH


def _parse_env_value(raw: str) -> Any:
    """Приводит строку из окружения к int, float или оставляет строкой."""
    for cast in (int, float):
        try:
            return cast(raw)
        except ValueError:
            pass
    return raw


class FeatureFlags:
    """
    Флаги из features.yaml.

    Переменные окружения имеют приоритет над файлом.
    Путь с точками превращается в имя переменной в верхнем регистре:
    "scheduler.replace_pending" → "SCHEDULER_REPLACE_PENDING"
    """

    def __init__(self, config_path: Path = None):
        """
        Args:
            config_path: Путь к features.yaml. По умолчанию config/features.yaml
        """
        self._path = Path(config_path) if config_path else FEATURES_PATH
        self._config: dict = {}
        self._load_config()

    def _load_config(self) -> None:
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
        except FileNotFoundError:
            self._config = {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {self._path.name}: {e}")

    @staticmethod
    def _env_name(path: str) -> str:
        return path.upper().replace(".", "_")

    def is_enabled(self, path: str, default: bool = False) -> bool:
        """
        Проверяет, включён ли флаг.

        Args:
            path: Путь к флагу через точку
            default: Значение, если флаг не задан нигде

        Returns:
            True если флаг включён
        """
        env_value = os.getenv(self._env_name(path))
        if env_value is not None:
            return env_value.lower() in ("true", "1", "yes", "on")

        value = self._get_value(path)
        if value is None:
            return default
        return bool(value)

    def get(self, path: str, default: Any = None) -> Any:
        """Возвращает значение флага (число, строку, список)."""
        env_value = os.getenv(self._env_name(path))
        if env_value is not None:
            return _parse_env_value(env_value)

        value = self._get_value(path)
        return value if value is not None else default

    def _get_value(self, path: str) -> Any:
        value = self._config
        for key in path.split("."):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return None
        return value


# Глобальный экземпляр для использования во всём приложении
flags = FeatureFlags()
