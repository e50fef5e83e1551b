"""Shared test fixtures."""

import pytest

from apierror.config import Settings
from apierror.errors import APIError, ModelNotFoundError
from apierror.responder import ErrorResponder


class FluentStyleError(Exception):
    """Duck-typed data-layer error: identifier and reason, no base class from us."""

    def __init__(self, identifier: str, reason: str) -> None:
        super().__init__(f"{identifier}: {reason}")
        self.identifier = identifier
        self.reason = reason


class AbortWithIdentifier(Exception):
    """Exposes both the not-found identifier and an explicit status."""

    identifier = "modelNotFound"

    def __init__(self, reason: str, status: int) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status = status


@pytest.fixture
def settings() -> Settings:
    return Settings(debug=True)


@pytest.fixture
def responder() -> ErrorResponder:
    return ErrorResponder()


@pytest.fixture
def not_found_error() -> ModelNotFoundError:
    return ModelNotFoundError("Widget not found")


@pytest.fixture
def declared_error() -> APIError:
    return APIError("Invalid token", status=401)
