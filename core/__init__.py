"""
Ядро бота.

Содержит:
- state.py: DataState — Success / Empty / Failure
- commands.py: команды и формат callback-данных
- parser.py: UpdateParser — событие Telegram → RequestData
- receiver.py: MessageReceiver — очередь событий и цикл её разбора
- dispatcher.py: CommandDispatcher — фоновая обработка, по очереди для каждого чата
- machine.py: StateMachine — таблица переходов
- controller.py: QuizController — сценарий теста
- scheduler.py: ReengagementScheduler — повторный тест после перерыва
- responses.py: OutgoingMessage и сборка ответов
"""

from .state import DataState, Success, Empty, Failure
from .commands import (
    Command,
    RequestData,
    StartCommand,
    StopCommand,
    GetQuizTest,
    TimeToNextTest,
    CorrectAnswerCallback,
    IncorrectAnswerCallback,
    StartQuizCallback,
    SetCategoryCallback,
    SetLanguageCallback,
    AskExamCallback,
    IgnoredCommand,
)
from .parser import UpdateParser
from .receiver import MessageReceiver
from .dispatcher import CommandDispatcher
from .machine import StateMachine, Transition, InvalidTransition, StateNotFound
from .scheduler import ReengagementScheduler, ScheduledTask
from .responses import Button, OutgoingMessage, ResponseFactory
from .controller import QuizController

__all__ = [
    # state
    'DataState',
    'Success',
    'Empty',
    'Failure',
    # commands
    'Command',
    'RequestData',
    'StartCommand',
    'StopCommand',
    'GetQuizTest',
    'TimeToNextTest',
    'CorrectAnswerCallback',
    'IncorrectAnswerCallback',
    'StartQuizCallback',
    'SetCategoryCallback',
    'SetLanguageCallback',
    'AskExamCallback',
    'IgnoredCommand',
    # parser / queue / dispatch
    'UpdateParser',
    'MessageReceiver',
    'CommandDispatcher',
    # machine
    'StateMachine',
    'Transition',
    'InvalidTransition',
    'StateNotFound',
    # scheduler
    'ReengagementScheduler',
    'ScheduledTask',
    # responses
    'Button',
    'OutgoingMessage',
    'ResponseFactory',
    # controller
    'QuizController',
]
