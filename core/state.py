"""
DataState — результат обращения к бэкенду.

Ровно один из трёх вариантов:
- Success(value): запрос выполнен, данные есть
- Empty: запись не найдена
- Failure(error): запрос упал с ошибкой

Контроллер не проверяет тип результата сам: он берёт outcome
и передаёт его в таблицу переходов (core.machine).
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")

SUCCESS = "success"
EMPTY = "empty"
FAILURE = "failure"

OUTCOMES = (SUCCESS, EMPTY, FAILURE)


@dataclass(frozen=True)
class Success(Generic[T]):
    """Данные получены."""
    value: T

    outcome = SUCCESS


class _Empty:
    """Запись не найдена (синглтон Empty)."""

    outcome = EMPTY
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Empty"

    def __bool__(self) -> bool:
        return False


Empty = _Empty()


@dataclass(frozen=True)
class Failure:
    """Ошибка при обращении к бэкенду."""
    error: BaseException

    outcome = FAILURE


DataState = Union[Success[Any], _Empty, Failure]


def is_data_state(result: Any) -> bool:
    """Проверяет, что объект — один из вариантов DataState."""
    return isinstance(result, (Success, Failure)) or result is Empty
