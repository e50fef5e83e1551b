"""Error types recognised by the error middleware.

Application and persistence code signal failures by raising errors that
expose one of two capabilities:

- ``Debuggable``: a stable ``identifier`` plus a human readable ``reason``.
  Persistence collaborators use the ``modelNotFound`` identifier for a
  missing entity.
- ``AbortError``: a ``reason`` plus the HTTP ``status`` the application
  wants the client to see.

Anything else is rendered from its string form.
"""

from typing import Protocol, runtime_checkable

MODEL_NOT_FOUND = "modelNotFound"


@runtime_checkable
class Debuggable(Protocol):
    identifier: str
    reason: str


@runtime_checkable
class AbortError(Protocol):
    reason: str
    status: int


class APIError(Exception):
    """An error with a message and status chosen by application code."""

    def __init__(self, reason: str, status: int = 400) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status = status

    def __str__(self) -> str:
        return str(self.reason)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(reason={self.reason!r}, status={self.status})"


class ModelNotFoundError(Exception):
    """Raised by the data layer when a requested record does not exist.

    The data layer reports this as a server error; the middleware maps it
    to 404 based on ``identifier``.
    """

    identifier = MODEL_NOT_FOUND
    status = 500

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason

    @classmethod
    def for_model(cls, model: str, key: object | None = None) -> "ModelNotFoundError":
        if key is None:
            return cls(f"{model} not found")
        return cls(f"{model} {key} not found")

    def __str__(self) -> str:
        return self.reason
