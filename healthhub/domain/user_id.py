import uuid
from typing import Optional

from healthhub.exceptions.errors import InvalidUserIdError


class UserId:
    """Opaque per-user identifier backed by a UUID v4."""

    __slots__ = ("_value",)

    def __init__(self, value: uuid.UUID):
        if not isinstance(value, uuid.UUID):
            raise TypeError(f"UserId expects a UUID, got {type(value).__name__}")
        self._value = value

    @classmethod
    def new(cls) -> "UserId":
        return cls(uuid.uuid4())

    @classmethod
    def parse(cls, text: Optional[str]) -> "UserId":
        """Parse the canonical hyphenated form produced by ``str()``."""
        if not text:
            raise InvalidUserIdError()
        try:
            value = uuid.UUID(text.strip())
        except ValueError:
            raise InvalidUserIdError(f"Malformed user id: {text!r}")
        return cls(value)

    @property
    def uuid(self) -> uuid.UUID:
        return self._value

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"UserId('{self._value}')"

    def __eq__(self, other) -> bool:
        if not isinstance(other, UserId):
            return NotImplemented
        return self._value == other._value

    def __hash__(self) -> int:
        return hash(self._value)
