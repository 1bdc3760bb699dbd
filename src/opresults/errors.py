"""Usage errors raised at the API boundary.

Domain failures never surface here; they travel as ERROR messages inside a
result. ArgumentError is reserved for programmer mistakes such as passing
``None`` where a value is required.
"""

from __future__ import annotations

from typing import Self


class ArgumentError(ValueError):
    """Raised when a required argument is absent or unusable.

    Attributes:
        param_name: Name of the offending parameter
    """

    __slots__ = ("param_name",)

    def __init__(self, param_name: str, message: str = "") -> None:
        self.param_name = param_name
        super().__init__(f"{param_name}: {message}" if message else f"{param_name} is required")

    @classmethod
    def missing(cls, param_name: str) -> Self:
        """Argument was None."""
        return cls(param_name, "value cannot be None")

    @classmethod
    def empty(cls, param_name: str) -> Self:
        """Argument was an empty sequence."""
        return cls(param_name, "at least one item is required")


def require(value: object, param_name: str) -> None:
    """Raise ArgumentError.missing if value is None."""
    if value is None:
        raise ArgumentError.missing(param_name)
