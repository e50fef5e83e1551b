"""Turn the outcome of the next responder into a response that never fails."""

import inspect
import logging
from typing import Any, Awaitable, Callable, Iterable

from starlette.responses import Response

from apierror.classification import FALLBACK_MESSAGE, Classifier, ClassifierRegistry
from apierror.envelope import encode_envelope

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"

NextResponder = Callable[[Any], Response | Awaitable[Response]]


class ErrorResponder:
    """Error boundary for one link of the responder chain.

    ``respond`` calls the next responder once. A successful response is
    returned untouched. An exception, whether raised by the call itself or
    by the awaitable it returned, is classified and rendered as JSON.
    """

    def __init__(
        self,
        default_status: int = 400,
        classifiers: ClassifierRegistry | Iterable[Classifier] | None = None,
        fallback_message: str = FALLBACK_MESSAGE,
    ) -> None:
        self.default_status = default_status
        if isinstance(classifiers, ClassifierRegistry):
            self.classifiers = classifiers
        else:
            self.classifiers = ClassifierRegistry(classifiers, fallback_message=fallback_message)

    async def respond(self, request: Any, next_responder: NextResponder) -> Response:
        try:
            result = next_responder(request)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:
            return self.response_for(exc)
        return result

    def response_for(self, error: BaseException) -> Response:
        """Build the JSON error response for ``error``."""
        classified = self.classifiers.classify(error)
        status = classified.status if classified.status is not None else self.default_status
        logger.debug(
            "Converted %s to %d response (%s)",
            type(error).__name__,
            status,
            classified.kind.value,
        )
        return Response(
            content=encode_envelope(classified.message),
            status_code=status,
            media_type=JSON_MEDIA_TYPE,
        )
