"""Text-generation provider interface and the shared retry policy."""

import time
from abc import ABC, abstractmethod
from typing import Callable, Optional, TypeVar

from loguru import logger

from ..exceptions import LLMError

# Attempts per request and the fixed pause between them.
MAX_ATTEMPTS = 3
RETRY_DELAY_SECONDS = 2

T = TypeVar("T")


class LLMProvider(ABC):
    """A service that turns a note-taking prompt into one raw text reply.

    The reply carries no structural guarantee; callers hand it to
    ``parse_response`` as-is.
    """

    name = "llm"

    # Errors worth another attempt (rate limits, dropped connections, timeouts).
    transient_errors: tuple[type[Exception], ...] = ()

    @abstractmethod
    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        max_output_tokens: Optional[int] = None,
    ) -> str:
        """Return the raw reply text, possibly empty."""

    @property
    @abstractmethod
    def max_input_tokens(self) -> int:
        """Largest prompt, in tokens, the model accepts."""

    @property
    @abstractmethod
    def default_max_output_tokens(self) -> int:
        """Reply length used when the caller does not ask for one."""

    def _with_retries(self, call: Callable[[], T]) -> T:
        """Run ``call`` up to MAX_ATTEMPTS times, pausing between transient failures.

        Raises LLMError once the attempts are used up. Any other error
        propagates to the provider, which wraps its own SDK errors.
        """
        last_error = None
        for attempt in range(MAX_ATTEMPTS):
            try:
                return call()
            except self.transient_errors as e:
                last_error = e
                logger.warning(
                    f"{self.name} attempt {attempt + 1}/{MAX_ATTEMPTS} failed: {e}"
                )
                if attempt < MAX_ATTEMPTS - 1:
                    time.sleep(RETRY_DELAY_SECONDS)
        raise LLMError(
            f"{self.name} failed after {MAX_ATTEMPTS} attempts: {last_error}"
        ) from last_error
