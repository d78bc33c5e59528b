"""Startup validation for handler authorization declarations."""

import logging

from rolegate.domain.shared.authorization.gate import Gate
from rolegate.domain.shared.command import CommandHandler
from rolegate.domain.shared.error import ConfigurationError
from rolegate.domain.shared.query import QueryHandler

logger = logging.getLogger(__name__)


def _all_subclasses(cls: type) -> list[type]:
    found: list[type] = []
    for sub in cls.__subclasses__():
        found.append(sub)
        found.extend(_all_subclasses(sub))
    return found


def _check_handler_class(handler_cls: type) -> None:
    """Raise ConfigurationError if the handler lacks a Gate in __auth__."""
    if not isinstance(getattr(handler_cls, "__auth__", None), Gate):
        raise ConfigurationError(f"Handler {handler_cls.__name__} has no __auth__ declaration")


def validate_all_handlers(package: str = "rolegate") -> None:
    """Scan CommandHandler and QueryHandler subclasses defined under ``package``.

    Raises ConfigurationError listing all handlers missing __auth__ declarations.
    """
    violations: list[str] = []

    for handler_cls in _all_subclasses(CommandHandler) + _all_subclasses(QueryHandler):
        module = handler_cls.__module__
        if module != package and not module.startswith(f"{package}."):
            continue
        try:
            _check_handler_class(handler_cls)
        except ConfigurationError as e:
            violations.append(str(e))

    if violations:
        raise ConfigurationError(
            f"Authorization validation failed for {len(violations)} handler(s):\n"
            + "\n".join(f"  - {v}" for v in violations)
        )

    logger.info("Authorization startup validation passed for all handlers")
