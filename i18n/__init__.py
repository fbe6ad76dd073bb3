"""
Локализация системных сообщений бота.

    from i18n import t, get_i18n

    t('messages.right_answer', 'en')
    get_i18n().format_duration(5_400_000, 'ru')  # "1 ч 30 мин"
"""

from .loader import DEFAULT_LANGUAGE, I18n, i18n, t


def get_i18n() -> I18n:
    """Глобальный экземпляр I18n."""
    return i18n


__all__ = [
    't',
    'get_i18n',
    'I18n',
    'DEFAULT_LANGUAGE',
]
