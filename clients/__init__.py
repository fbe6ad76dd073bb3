"""
Внешние клиенты бота.

Содержит:
- backend.py: LangTestApi — REST API бэкенда (aiohttp)
- telegram.py: TelegramSender и роутер входящих событий (aiogram)
"""

from .backend import LangTestApi, BackendError

__all__ = ['LangTestApi', 'BackendError']
