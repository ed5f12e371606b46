"""OpenAI LLM provider."""

from typing import Optional

import openai

from ..exceptions import LLMError
from .base import LLMProvider

_DEFAULT_MAX_OUTPUT = 16_384


class OpenAIProvider(LLMProvider):
    name = "OpenAI"
    transient_errors = (
        openai.RateLimitError,
        openai.APIConnectionError,
        openai.APITimeoutError,
    )

    def __init__(self, api_key: str, model: str = "gpt-4o"):
        self._client = openai.OpenAI(api_key=api_key)
        self._model = model
        self._max_output = _DEFAULT_MAX_OUTPUT
        # Newer models (o1, o3, gpt-4.1, gpt-5, etc.) require
        # max_completion_tokens instead of max_tokens.
        self._use_max_completion_tokens = not self._is_legacy_model(model)

    @property
    def max_input_tokens(self) -> int:
        if "gpt-3.5" in self._model:
            return 14_000
        return 120_000

    @property
    def default_max_output_tokens(self) -> int:
        return self._max_output

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        max_output_tokens: Optional[int] = None,
    ) -> str:
        tokens = min(max_output_tokens or self._max_output, self._max_output)
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        try:
            response = self._with_retries(lambda: self._call_api(tokens, messages))
        except openai.APIError as e:
            raise LLMError(f"OpenAI API error: {e}") from e
        return response.choices[0].message.content or ""

    def _call_api(self, tokens: int, messages: list):
        """Call the chat API, switching to the other token parameter if rejected."""
        try:
            return self._create(tokens, messages)
        except openai.BadRequestError as e:
            if "unsupported parameter" not in str(e).lower().replace("_", " "):
                raise
            self._use_max_completion_tokens = not self._use_max_completion_tokens
            return self._create(tokens, messages)

    def _create(self, tokens: int, messages: list):
        token_param = (
            "max_completion_tokens"
            if self._use_max_completion_tokens
            else "max_tokens"
        )
        return self._client.chat.completions.create(
            model=self._model,
            messages=messages,
            **{token_param: tokens},
        )

    @staticmethod
    def _is_legacy_model(model: str) -> bool:
        """Check if the model uses the legacy max_tokens parameter."""
        legacy_prefixes = ("gpt-3.5", "gpt-4o", "gpt-4-turbo", "gpt-4-")
        return any(model.startswith(p) for p in legacy_prefixes)
