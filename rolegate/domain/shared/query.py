"""Queries: read-only requests, and their gated handlers."""

from abc import abstractmethod
from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel

from rolegate.domain.shared.authorization.gate import Gate
from rolegate.domain.shared.handler import HandlerMeta


class Query(BaseModel): ...


class Result(BaseModel): ...


Q = TypeVar("Q", bound=Query)
R = TypeVar("R", bound=Result)


class QueryHandler(Generic[Q, R], metaclass=HandlerMeta):
    """Base class for query handlers; same contract as CommandHandler."""

    __auth__: ClassVar[Gate]

    @abstractmethod
    async def run(self, query: Q) -> R: ...
