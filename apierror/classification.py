"""Error classification: map an arbitrary error to a message and HTTP status.

Classifiers are plain functions tried in priority order. Each returns a
``ClassifiedError`` when it recognises the error, or ``None`` to let the
next one try. The first match wins, so more specific rules go first:

1. ``classify_not_found``: persistence "not found" signal -> 404.
2. ``classify_declared``: error carrying its own reason and status.
3. ``classify_validation``: FastAPI request validation failure -> 422.
4. ``classify_generic``: anything else, described by ``str(error)``.

A classifier that raises is skipped. ``classify`` never raises.
"""

import enum
import logging
from dataclasses import dataclass
from http import HTTPStatus
from typing import Callable, Iterable, Iterator

from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException

from apierror.errors import MODEL_NOT_FOUND, AbortError, Debuggable

logger = logging.getLogger(__name__)

FALLBACK_MESSAGE = "An unknown error occurred"


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    DECLARED = "declared"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class ClassifiedError:
    message: str
    status: int | None
    kind: ErrorKind


Classifier = Callable[[BaseException], ClassifiedError | None]


def _valid_status(value: object) -> int | None:
    """Return ``value`` as an int if it is a usable HTTP status code."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if 100 <= value <= 599:
        return int(value)
    return None


def _as_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _phrase(status: int | None) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


def classify_not_found(error: BaseException, identifier: str = MODEL_NOT_FOUND) -> ClassifiedError | None:
    """Persistence layer reported a missing record. Always 404."""
    if not isinstance(error, Debuggable) or error.identifier != identifier:
        return None
    message = _as_text(error.reason) or HTTPStatus.NOT_FOUND.phrase
    return ClassifiedError(message, HTTPStatus.NOT_FOUND.value, ErrorKind.NOT_FOUND)


def classify_declared(error: BaseException) -> ClassifiedError | None:
    """Application error that names its own reason and status."""
    if isinstance(error, AbortError):
        reason, raw_status = error.reason, error.status
    elif isinstance(error, HTTPException):
        reason, raw_status = error.detail, error.status_code
    else:
        return None

    status = _valid_status(raw_status)
    message = _as_text(reason) or _phrase(status)
    if not message:
        return None
    return ClassifiedError(message, status, ErrorKind.DECLARED)


def classify_validation(error: BaseException) -> ClassifiedError | None:
    """Request failed FastAPI validation. Lists each failing field."""
    if not isinstance(error, RequestValidationError):
        return None
    problems = []
    for item in error.errors():
        loc = ".".join(str(part) for part in item.get("loc", ()))
        msg = item.get("msg", "")
        problems.append(f"{loc}: {msg}" if loc else msg)
    message = "; ".join(p for p in problems if p) or HTTPStatus.UNPROCESSABLE_ENTITY.phrase
    return ClassifiedError(message, HTTPStatus.UNPROCESSABLE_ENTITY.value, ErrorKind.DECLARED)


def classify_generic(error: BaseException, fallback_message: str = FALLBACK_MESSAGE) -> ClassifiedError:
    """Catch-all. Uses the error's string form; status is left to the caller."""
    try:
        message = str(error)
    except Exception:
        message = ""
    return ClassifiedError(message or fallback_message, None, ErrorKind.UNCLASSIFIED)


DEFAULT_CLASSIFIERS: tuple[Classifier, ...] = (
    classify_not_found,
    classify_declared,
    classify_validation,
    classify_generic,
)


def classify(
    error: BaseException,
    classifiers: Iterable[Classifier] | None = None,
    fallback_message: str = FALLBACK_MESSAGE,
) -> ClassifiedError:
    """Run ``error`` through ``classifiers`` and return the first match."""
    for classifier in classifiers if classifiers is not None else DEFAULT_CLASSIFIERS:
        try:
            result = classifier(error)
        except Exception:
            logger.debug(
                "Classifier %s failed on %s",
                getattr(classifier, "__name__", classifier),
                type(error).__name__,
                exc_info=True,
            )
            continue
        if result is not None:
            return result
    return ClassifiedError(fallback_message, None, ErrorKind.UNCLASSIFIED)


class ClassifierRegistry:
    """Ordered, extensible set of classifiers.

    Custom classifiers registered with ``first=True`` run before the
    defaults; otherwise they are inserted just before the generic
    catch-all so they still get a chance to match.
    """

    def __init__(
        self,
        classifiers: Iterable[Classifier] | None = None,
        fallback_message: str = FALLBACK_MESSAGE,
    ) -> None:
        self._classifiers: list[Classifier] = list(
            classifiers if classifiers is not None else DEFAULT_CLASSIFIERS
        )
        self.fallback_message = fallback_message

    def register(self, classifier: Classifier, *, first: bool = False) -> Classifier:
        if first:
            self._classifiers.insert(0, classifier)
        elif self._classifiers:
            self._classifiers.insert(len(self._classifiers) - 1, classifier)
        else:
            self._classifiers.append(classifier)
        return classifier

    def __iter__(self) -> Iterator[Classifier]:
        return iter(self._classifiers)

    def __len__(self) -> int:
        return len(self._classifiers)

    def classify(self, error: BaseException) -> ClassifiedError:
        return classify(error, self._classifiers, self.fallback_message)
