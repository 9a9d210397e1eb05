from __future__ import annotations

from enum import Enum
from typing import List

from .errors import InvalidArgument, UnsupportedOperation


class Operation(str, Enum):
    ADD = "ADD"
    SUBTRACT = "SUBTRACT"
    MULTIPLY = "MULTIPLY"
    DIVIDE = "DIVIDE"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value) -> "Operation":
        """Turn a transport value (enum member or case-insensitive name) into a catalog member."""
        if value is None:
            raise InvalidArgument("Operation cannot be None")
        if isinstance(value, cls):
            return value
        name = str(value).strip().upper()
        try:
            return cls[name]
        except KeyError:
            raise UnsupportedOperation(f"Operation {value} is not supported") from None

    @classmethod
    def names(cls) -> List[str]:
        return [member.value for member in cls]
