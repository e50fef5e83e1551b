"""Global error handling middleware."""

from functools import partial

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.utils import is_body_allowed_for_status_code
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from apierror.classification import (
    Classifier,
    ClassifierRegistry,
    classify_declared,
    classify_generic,
    classify_not_found,
    classify_validation,
)
from apierror.config import Settings, get_settings
from apierror.responder import ErrorResponder


def registry_from_settings(settings: Settings) -> ClassifierRegistry:
    """Default rules with the configured not-found identifier and fallback text."""
    return ClassifierRegistry(
        [
            partial(classify_not_found, identifier=settings.not_found_identifier),
            classify_declared,
            classify_validation,
            partial(classify_generic, fallback_message=settings.fallback_message),
        ],
        fallback_message=settings.fallback_message,
    )


def build_responder(
    settings: Settings | None = None,
    classifiers: ClassifierRegistry | list[Classifier] | None = None,
) -> ErrorResponder:
    settings = settings or get_settings()
    if classifiers is None:
        classifiers = registry_from_settings(settings)
    return ErrorResponder(
        default_status=settings.default_status,
        classifiers=classifiers,
        fallback_message=settings.fallback_message,
    )


class APIErrorMiddleware(BaseHTTPMiddleware):
    """Catch errors from further down the stack and return ``{"error": ...}`` JSON.

    Errors with the ``modelNotFound`` identifier get a 404; errors that
    declare a status keep it; everything else is a 400.
    """

    def __init__(
        self,
        app: ASGIApp,
        settings: Settings | None = None,
        classifiers: ClassifierRegistry | list[Classifier] | None = None,
    ) -> None:
        super().__init__(app)
        self._responder = build_responder(settings, classifiers)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        return await self._responder.respond(request, call_next)


def install(
    app: FastAPI,
    settings: Settings | None = None,
    classifiers: ClassifierRegistry | list[Classifier] | None = None,
) -> None:
    """Add ``APIErrorMiddleware`` to ``app``. Call last so it is outermost.

    FastAPI renders ``HTTPException`` and ``RequestValidationError`` inside
    its own exception middleware, before any user middleware sees them, so
    handlers for both are registered here too and share the same responder.
    """
    responder = build_responder(settings, classifiers)

    async def handle_framework_error(request: Request, exc: Exception) -> Response:
        headers = getattr(exc, "headers", None)
        response = responder.response_for(exc)
        if not is_body_allowed_for_status_code(response.status_code):
            return Response(status_code=response.status_code, headers=headers)
        if headers:
            response.headers.update(headers)
        return response

    app.add_exception_handler(StarletteHTTPException, handle_framework_error)
    app.add_exception_handler(RequestValidationError, handle_framework_error)
    app.add_middleware(APIErrorMiddleware, settings=settings, classifiers=classifiers)
