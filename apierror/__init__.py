"""Convert errors raised while handling a request into JSON error responses."""

from apierror.classification import ClassifiedError, ClassifierRegistry, ErrorKind, classify
from apierror.envelope import encode_envelope
from apierror.errors import MODEL_NOT_FOUND, AbortError, APIError, Debuggable, ModelNotFoundError
from apierror.middleware.error_handler import APIErrorMiddleware, install, registry_from_settings
from apierror.responder import ErrorResponder

__all__ = [
    "MODEL_NOT_FOUND",
    "APIError",
    "APIErrorMiddleware",
    "AbortError",
    "ClassifiedError",
    "ClassifierRegistry",
    "Debuggable",
    "ErrorKind",
    "ErrorResponder",
    "ModelNotFoundError",
    "classify",
    "encode_envelope",
    "install",
    "registry_from_settings",
]
