"""
Общие функции репозиториев: перевод ответа бэкенда в DataState.
"""

from typing import Any, Awaitable, Callable

from config import get_logger
from core.state import DataState, Empty, Failure, Success

logger = get_logger(__name__)


async def fetch_state(request: Awaitable[Any], parse: Callable[[Any], Any], operation: str) -> DataState:
    """Выполняет запрос и разбирает ответ.

    Args:
        request: корутина запроса к LangTestApi
        parse: функция разбора JSON в модель
        operation: имя операции для логов

    Returns:
        Success(модель), Empty если записи нет, Failure при ошибке запроса
        или если ответ не удалось разобрать
    """
    try:
        payload = await request
    except Exception as e:
        logger.warning(f"[{operation}] request failed: {e!r}")
        return Failure(e)

    if payload is None:
        return Empty

    try:
        return Success(parse(payload))
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"[{operation}] unexpected response shape: {e!r}")
        return Failure(e)


def parse_list(parse_item: Callable[[dict], Any]) -> Callable[[Any], list]:
    """Разбор JSON-массива; не-массив считается ошибкой формата."""
    def parse(payload: Any) -> list:
        if not isinstance(payload, list):
            raise TypeError(f"Expected list, got {type(payload).__name__}")
        return [parse_item(item) for item in payload]
    return parse


async def fetch_list_state(request: Awaitable[Any], parse_item: Callable[[dict], Any], operation: str) -> DataState:
    """Как fetch_state, но пустой список тоже считается Empty."""
    result = await fetch_state(request, parse_list(parse_item), operation)
    if isinstance(result, Success) and not result.value:
        return Empty
    return result


async def call_flag(request: Awaitable[bool], operation: str) -> bool:
    """Запрос, результат которого — только успех или неуспех."""
    try:
        return bool(await request)
    except Exception as e:
        logger.error(f"[{operation}] request failed: {e!r}")
        return False
