"""Commands: requests that change state, and their gated handlers."""

from abc import abstractmethod
from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel

from rolegate.domain.shared.authorization.gate import Gate
from rolegate.domain.shared.handler import HandlerMeta


class Command(BaseModel): ...


class Result(BaseModel): ...


C = TypeVar("C", bound=Command)
R = TypeVar("R", bound=Result)


class CommandHandler(Generic[C, R], metaclass=HandlerMeta):
    """Base class for command handlers. Subclasses are automatically dataclasses.

    Declare __auth__ to enforce role-based access:
        class MyHandler(CommandHandler[MyCmd, MyResult]):
            __auth__ = at_least(Role.ADMIN)
            identity: Identity
    """

    __auth__: ClassVar[Gate]

    @abstractmethod
    async def run(self, cmd: C) -> R: ...
