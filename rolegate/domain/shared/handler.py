"""Shared machinery for command and query handlers.

A handler class declares its dependencies as annotated fields and its access
rule as ``__auth__``. Subclassing a handler base turns the class into a
dataclass, so the DI container can build it, and guards its ``run`` so the
gate is enforced before any handler code executes.
"""

from abc import ABCMeta
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from functools import wraps
from typing import Any, dataclass_transform

from rolegate.domain.shared.authorization.gate import enforce_gate

_RunMethod = Callable[..., Coroutine[Any, Any, Any]]


def _guard_run(run: _RunMethod) -> _RunMethod:
    @wraps(run)
    async def guarded_run(self: Any, message: Any) -> Any:
        enforce_gate(self)
        return await run(self, message)

    return guarded_run


@dataclass_transform()
class HandlerMeta(ABCMeta):
    """ABCMeta that makes concrete handler subclasses gated dataclasses."""

    def __new__(mcs, name: str, bases: tuple[type, ...], namespace: dict[str, Any]):
        cls = super().__new__(mcs, name, bases, namespace)
        if not any(isinstance(b, mcs) for b in bases):
            return cls  # A handler base class itself

        cls = dataclass(cls)
        run = cls.__dict__.get("run")
        if run is not None:
            cls.run = _guard_run(run)
        return cls
