"""
Клиент REST API бэкенда LangTest.

Бэкенд хранит языки, категории, слова и состояние пользователей.
Клиент возвращает разобранный JSON, None если записи нет
(404 или пустое тело) и бросает исключение при любой другой ошибке.
Перевод в DataState делают репозитории.
"""

import asyncio
from typing import Any, Optional

import aiohttp

from config import BACKEND_TIMEOUT, get_logger

logger = get_logger(__name__)


class BackendError(Exception):
    """Бэкенд ответил ошибкой."""

    def __init__(self, status: int, message: str = ""):
        self.status = status
        self.message = message
        super().__init__(f"Backend HTTP error {status}: {message}")


class LangTestApi:
    """HTTP-клиент бэкенда"""

    def __init__(self, base_url: str, timeout: float = BACKEND_TIMEOUT):
        """
        Args:
            base_url: Адрес бэкенда, например http://localhost:8080
            timeout: Таймаут запроса в секундах
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def _request(self, method: str, path: str, **kwargs) -> Optional[Any]:
        """Выполняет запрос к бэкенду

        Args:
            method: HTTP метод
            path: путь относительно base_url
            **kwargs: параметры aiohttp (json, params)

        Returns:
            Разобранный JSON или None, если записи нет

        Raises:
            BackendError: при статусе ответа >= 400 (кроме 404)
            aiohttp.ClientError, asyncio.TimeoutError: при сетевой ошибке
        """
        url = f"{self.base_url}{path}"
        try:
            async with aiohttp.ClientSession() as session:
                async with session.request(
                    method,
                    url,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                    **kwargs
                ) as resp:
                    if resp.status == 404:
                        return None
                    if resp.status >= 400:
                        error = await resp.text()
                        raise BackendError(resp.status, error)

                    body = await resp.text()
                    if not body.strip():
                        return None
                    return await resp.json(content_type=None)
        except asyncio.TimeoutError:
            logger.error(f"Backend request timeout: {method} {path}")
            raise
        except aiohttp.ClientError as e:
            logger.error(f"Backend exception {method} {path}: {e}")
            raise

    async def _succeeds(self, method: str, path: str, **kwargs) -> bool:
        """Запрос, от которого нужен только статус 2xx."""
        url = f"{self.base_url}{path}"
        async with aiohttp.ClientSession() as session:
            async with session.request(
                method,
                url,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                **kwargs
            ) as resp:
                return 200 <= resp.status < 300

    # ============= ПОЛЬЗОВАТЕЛИ =============

    async def get_user(self, chat_id: int) -> Optional[dict]:
        return await self._request("GET", f"/users/{chat_id}")

    async def add_user(self, chat_id: int, category_id: int, language_id: int) -> Optional[dict]:
        payload = {"chatId": chat_id, "categoryId": category_id, "languageId": language_id}
        return await self._request("POST", "/users", json=payload)

    async def delete_user(self, chat_id: int) -> bool:
        return await self._succeeds("DELETE", f"/users/{chat_id}")

    # ============= ТЕСТ =============

    async def get_next_quiz_word(self, chat_id: int) -> Optional[dict]:
        return await self._request("GET", f"/quiz/{chat_id}/next")

    async def create_quiz_words(self, chat_id: int) -> bool:
        return await self._succeeds("POST", f"/quiz/{chat_id}")

    async def set_answer(self, chat_id: int, word_id: int, is_correct: bool) -> Optional[dict]:
        return await self._request(
            "POST",
            f"/quiz/{chat_id}/words/{word_id}/answer",
            json={"correct": is_correct}
        )

    async def reset_quiz(self, chat_id: int) -> bool:
        return await self._succeeds("POST", f"/quiz/{chat_id}/reset")

    async def reset_quiz_word_number(self, chat_id: int) -> bool:
        return await self._succeeds("POST", f"/quiz/{chat_id}/reset-number")

    # ============= КАТЕГОРИИ И ЯЗЫКИ =============

    async def get_category(self, category_id: int) -> Optional[dict]:
        return await self._request("GET", f"/categories/{category_id}")

    async def get_categories_by_language(self, language_id: int) -> Optional[list]:
        return await self._request("GET", f"/languages/{language_id}/categories")

    async def get_language(self, language_id: int) -> Optional[dict]:
        return await self._request("GET", f"/languages/{language_id}")

    async def get_languages(self) -> Optional[list]:
        return await self._request("GET", "/languages")
