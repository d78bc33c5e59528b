from rolegate.util.di.base import Provider
from rolegate.util.di.scope import Scope

__all__ = ["Provider", "Scope"]
