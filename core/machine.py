"""
StateMachine — таблица переходов сценария теста.

Состояние пользователя живёт на бэкенде, бот его не хранит.
Машина — чистая функция: по событию и исходу запроса к бэкенду
возвращает действие, которое должен выполнить контроллер,
и состояние, в котором окажется пользователь.

Таблица загружается из YAML (config/transitions.yaml).

Использование:
    from core.machine import StateMachine

    machine = StateMachine("config/transitions.yaml")
    transition = machine.resolve("start", "empty")
    transition.action      # "ask_language"
    transition.next_state  # "awaiting_language"
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from .state import OUTCOMES

logger = logging.getLogger(__name__)

# Специальное значение next: состояние не меняется
SAME_STATE = "_same"


class InvalidTransition(Exception):
    """Таблица не описывает исход события или описывает его неполно."""
    pass


class StateNotFound(Exception):
    """Переход ведёт в состояние, которого нет в таблице."""
    pass


@dataclass(frozen=True)
class Transition:
    """Результат разрешения перехода."""
    event: str
    outcome: str
    action: str
    next_state: str

    @property
    def keeps_state(self) -> bool:
        return self.next_state == SAME_STATE


class StateMachine:
    """
    Движок переходов.

    Проверяет таблицу при загрузке: у событий с tri_state должны быть
    описаны все три исхода (success, empty, failure), а все next —
    указывать на объявленные состояния.
    """

    def __init__(self, transitions_path: str):
        """
        Args:
            transitions_path: Путь к transitions.yaml

        Raises:
            FileNotFoundError: если файла нет
            InvalidTransition: если таблица неполная
        """
        self.states: dict[str, dict] = {}
        self.events: dict[str, dict] = {}
        self._load_transitions(Path(transitions_path))

    @classmethod
    def from_dict(cls, config: dict) -> "StateMachine":
        """Создаёт машину из уже загруженной таблицы (для тестов)."""
        machine = cls.__new__(cls)
        machine.states = {}
        machine.events = {}
        machine._apply(config)
        return machine

    def _load_transitions(self, path: Path) -> None:
        """Загружает таблицу переходов из YAML файла."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise InvalidTransition(f"Invalid YAML in transitions file {path}: {e}")

        self._apply(config)
        logger.info(f"Loaded {len(self.events)} events, {len(self.states)} states from {path.name}")

    def _apply(self, config: dict) -> None:
        self.states = config.get("states", {}) or {}
        self.events = config.get("events", {}) or {}
        self._validate()

    def _validate(self) -> None:
        for event, spec in self.events.items():
            outcomes = spec.get("outcomes") or {}
            if not outcomes:
                raise InvalidTransition(f"Event '{event}' has no outcomes")

            if spec.get("tri_state"):
                missing = [o for o in OUTCOMES if o not in outcomes]
                if missing:
                    raise InvalidTransition(
                        f"Event '{event}' does not handle outcomes: {', '.join(missing)}"
                    )

            for outcome, target in outcomes.items():
                if not target or not target.get("action"):
                    raise InvalidTransition(f"Event '{event}/{outcome}' has no action")
                next_state = target.get("next", SAME_STATE)
                if next_state != SAME_STATE and next_state not in self.states:
                    raise StateNotFound(
                        f"Event '{event}/{outcome}' leads to unknown state '{next_state}'"
                    )

    def resolve(self, event: str, outcome: str = "always") -> Transition:
        """
        Определяет действие и следующее состояние.

        Args:
            event: Имя события (например, "start", "next_word")
            outcome: Исход: success/empty/failure, yes/no и т.п.

        Returns:
            Transition

        Raises:
            InvalidTransition: если событие или исход не описаны
        """
        spec = self.events.get(event)
        if spec is None:
            raise InvalidTransition(f"Unknown event '{event}'")

        target = spec["outcomes"].get(outcome)
        if target is None:
            raise InvalidTransition(f"No transition for event '{event}' with outcome '{outcome}'")

        return Transition(
            event=event,
            outcome=outcome,
            action=target["action"],
            next_state=target.get("next", SAME_STATE),
        )

    def actions(self) -> set[str]:
        """Все действия, которые упоминаются в таблице."""
        return {
            target["action"]
            for spec in self.events.values()
            for target in spec["outcomes"].values()
        }

    def describe(self, state_name: str) -> Optional[str]:
        """Описание состояния для логов."""
        state = self.states.get(state_name)
        if state is None:
            return None
        return state.get("description", state_name)
