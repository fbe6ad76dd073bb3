"""
I18n — системные сообщения бота.

Структура файлов:
    i18n/
    ├── ru/
    │   └── messages.yaml
    └── en/
        └── messages.yaml

Имя файла — пространство ключей: messages.yaml → "messages.right_answer".

Использование:
    from i18n import t

    t("messages.language_chosen", "ru", language="English")
"""

import logging
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "ru"


class I18n:
    """Загружает переводы из YAML и отдаёт строки по ключу через точку."""

    def __init__(self, i18n_dir: str = None, default_lang: str = DEFAULT_LANGUAGE):
        """
        Args:
            i18n_dir: Папка с переводами. По умолчанию — папка пакета i18n/
            default_lang: Язык, на который откатываемся, если перевода нет
        """
        self._dir = Path(i18n_dir) if i18n_dir else Path(__file__).parent
        self._default_lang = default_lang
        self._translations: dict[str, dict[str, str]] = {}
        self._load_all()

    def _load_all(self) -> None:
        if not self._dir.exists():
            logger.warning(f"i18n directory not found: {self._dir}")
            return

        for lang_dir in sorted(self._dir.iterdir()):
            if not lang_dir.is_dir() or lang_dir.name.startswith(("_", ".")):
                continue
            strings: dict[str, str] = {}
            for yaml_file in sorted(lang_dir.glob("*.yaml")):
                try:
                    with open(yaml_file, "r", encoding="utf-8") as f:
                        data = yaml.safe_load(f) or {}
                except yaml.YAMLError as e:
                    logger.error(f"Invalid YAML in {yaml_file}: {e}")
                    continue
                self._flatten(data, yaml_file.stem, strings)
            self._translations[lang_dir.name] = strings
            logger.debug(f"Loaded {len(strings)} keys for language: {lang_dir.name}")

    def _flatten(self, data: dict, prefix: str, result: dict) -> None:
        for key, value in data.items():
            full_key = f"{prefix}.{key}" if prefix else str(key)
            if isinstance(value, dict):
                self._flatten(value, full_key, result)
            else:
                result[full_key] = str(value)

    def t(self, key: str, lang: str = None, **kwargs) -> str:
        """
        Возвращает перевод.

        Args:
            key: Ключ (например, "messages.right_answer")
            lang: Код языка; неизвестный язык заменяется языком по умолчанию
            **kwargs: Параметры форматирования

        Returns:
            Строка перевода; сам ключ, если перевода нет ни на одном языке
        """
        lang = lang if lang in self._translations else self._default_lang
        text = self._translations.get(lang, {}).get(key)

        if text is None and lang != self._default_lang:
            text = self._translations.get(self._default_lang, {}).get(key)

        if text is None:
            logger.warning(f"Translation not found: {key} ({lang})")
            return key

        if kwargs:
            try:
                return text.format(**kwargs)
            except KeyError as e:
                logger.warning(f"Missing format parameter in '{key}': {e}")
        return text

    def get_available_languages(self) -> list[str]:
        return list(self._translations.keys())

    def format_duration(self, millis: int, lang: str = None) -> str:
        """Перерыв в миллисекундах → «1 ч 30 мин» / «1 h 30 min».

        Секунды показываются только если перерыв короче минуты.
        """
        total_seconds = max(int(millis) // 1000, 0)
        days, rest = divmod(total_seconds, 86400)
        hours, rest = divmod(rest, 3600)
        minutes, seconds = divmod(rest, 60)

        parts = []
        for value, unit in ((days, "days"), (hours, "hours"), (minutes, "minutes")):
            if value:
                parts.append(f"{value} {self.t(f'messages.units.{unit}', lang)}")
        if not parts:
            parts.append(f"{seconds} {self.t('messages.units.seconds', lang)}")
        return " ".join(parts)


# Глобальный экземпляр
i18n = I18n()


def t(key: str, lang: str = DEFAULT_LANGUAGE, **kwargs) -> str:
    """Shortcut для получения перевода."""
    return i18n.t(key, lang, **kwargs)
