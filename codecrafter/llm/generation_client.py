"""
Retrying client around the external generation service.

Each request runs a small state machine:

    Idle -> Calling -> Succeeded
                    -> Retrying -> Calling ...
                    -> FailedFatal

Overload failures are retried with a linearly growing delay
(base_delay * attempt_number) up to max_attempts total calls. Anything
else fails immediately. The caller only ever sees a GenerationResult.
"""

import logging
import time
from typing import Any, Callable, Optional, Protocol

from codecrafter.errors import FatalServiceError, ServiceError, TransientServiceError
from codecrafter.llm.azure_openai_client import normalize_response_text
from codecrafter.notify import Notifier
from codecrafter.prompt_builder import build_prompt
from codecrafter.schemas import GenerationAttempt, GenerationRequest, GenerationResult


logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY = 2.0  # seconds

OVERLOAD_STATUS_CODE = 503
OVERLOAD_MARKER = str(OVERLOAD_STATUS_CODE)


class GenerationService(Protocol):
    """Anything that turns a prompt into model output."""

    def complete(self, prompt: str) -> Any:
        ...


# =============================================================================
# ERROR CLASSIFICATION
# =============================================================================

def classify_failure(error: Exception) -> ServiceError:
    """
    Classify a service exception as transient or fatal.

    An explicit ``status_code`` attribute (as carried by OpenAI SDK status
    errors) wins; otherwise the error message is searched for the overload
    marker.

    Args:
        error: Exception raised by the service

    Returns:
        TransientServiceError or FatalServiceError wrapping the original
    """
    if isinstance(error, ServiceError):
        return error

    message = str(error) or error.__class__.__name__
    status_code = getattr(error, "status_code", None)

    if isinstance(status_code, int):
        overloaded = status_code == OVERLOAD_STATUS_CODE
    else:
        overloaded = OVERLOAD_MARKER in message

    if overloaded:
        return TransientServiceError(message, cause=error)
    return FatalServiceError(message, cause=error)


# =============================================================================
# CLIENT
# =============================================================================

class GenerationClient:
    """Calls the generation service with retry and backoff."""

    def __init__(
        self,
        service: GenerationService,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        base_delay: float = DEFAULT_BASE_DELAY,
        sleep: Callable[[float], None] = time.sleep,
        notifier: Optional[Notifier] = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.service = service
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self._sleep = sleep
        self._notifier = notifier

    def generate(self, request: GenerationRequest) -> GenerationResult:
        """
        Run one generation request to a terminal outcome.

        Args:
            request: Description and target framework

        Returns:
            GenerationResult holding the raw model text or the error
        """
        prompt = build_prompt(request)
        last_error: Optional[ServiceError] = None

        for attempt_number in range(self.max_attempts):
            attempt = GenerationAttempt(attempt_number=attempt_number)
            calls = attempt_number + 1

            try:
                raw = self.service.complete(prompt)
            except Exception as e:
                last_error = classify_failure(e)
            else:
                text = normalize_response_text(raw)
                if not text.strip():
                    attempt.resolve("fatal_failure", reason="Model returned empty content")
                    logger.error("Generation failed: model returned empty content")
                    return GenerationResult.failure("other", attempt.reason, calls)
                attempt.resolve("success", raw_text=text)
                logger.info("Generated %s component in %d attempt(s)",
                            request.framework.id, calls)
                return GenerationResult.success(text, calls)

            if isinstance(last_error, FatalServiceError):
                attempt.resolve("fatal_failure", reason=str(last_error))
                logger.error("Generation failed: %s", last_error)
                return GenerationResult.failure("other", str(last_error), calls)

            attempt.resolve("transient_failure", reason=str(last_error))

            if calls >= self.max_attempts:
                break

            self._notice_retry(calls)
            self._sleep(self.base_delay * calls)

        if self.max_attempts == 1:
            logger.error("Generation failed: model overloaded (%s)", last_error)
            return GenerationResult.failure("overloaded", str(last_error), self.max_attempts)

        logger.error("Generation failed: model unavailable after %d attempts (%s)",
                     self.max_attempts, last_error)
        return GenerationResult.failure(
            "unavailable",
            "Model unavailable after multiple retries",
            self.max_attempts,
        )

    def _notice_retry(self, calls: int) -> None:
        message = f"Retrying ({calls}/{self.max_attempts}) due to model overload..."
        logger.warning(message)
        if self._notifier is not None:
            self._notifier.notify("info", message)
