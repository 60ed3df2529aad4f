"""Argument environment shared by a render call and everything it composes."""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Iterator, Optional

from ..core.exceptions import UndefinedVariableError


class ArgumentEnvironment(Mapping):
    """
    Immutable name -> value mapping for one top-level render call.

    Composed prompts are rendered against the same instance, so a nested
    prompt sees every argument of the caller. There is no shadowing.
    """

    def __init__(self, arguments: Optional[Mapping[str, Any]] = None):
        values = {}
        for name, value in (arguments or {}).items():
            if not isinstance(name, str):
                raise TypeError(f"Argument names must be strings, got {type(name).__name__}")
            values[name] = value if isinstance(value, str) else str(value)
        self._values = MappingProxyType(values)

    @classmethod
    def of(cls, arguments: Optional[Mapping[str, Any]] = None) -> "ArgumentEnvironment":
        """Return arguments unchanged if already an environment, else wrap them."""
        if isinstance(arguments, cls):
            return arguments
        return cls(arguments)

    def lookup(self, name: str) -> str:
        """
        Get the value bound to name.

        Raises:
            UndefinedVariableError: If name is not bound
        """
        try:
            return self._values[name]
        except KeyError:
            raise UndefinedVariableError(name) from None

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ArgumentEnvironment({dict(self._values)!r})"
