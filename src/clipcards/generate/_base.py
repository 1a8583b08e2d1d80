"""Base generator mixin for LLM generation providers."""

from __future__ import annotations

import json
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from clipcards.core.exceptions import ProviderError, ResponseValidationError
from clipcards.core.logging_config import get_logger
from clipcards.core.retry_config import RetryConfig, create_retry_decorator

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class GeneratorMixin:
    """Mixin providing common functionality for generation providers.

    Subclasses must set:
    - _provider_name: str
    - _retryable_exceptions: tuple[type[Exception], ...]
    """

    _provider_name: str = "generator"
    _retryable_exceptions: tuple[type[Exception], ...] = (
        ConnectionError,
        TimeoutError,
    )

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            api_key: Provider API key. If None, the SDK reads its environment variable.
            model: LLM model to use.
            retry_config: Retry configuration. Uses default if not provided.
        """
        self._model = model
        self._retry_config = retry_config or RetryConfig()
        self._logger = logger.bind(provider=self._provider_name, model=model)
        self._api_key = api_key

    @property
    def model(self) -> str:
        """Get the current model name."""
        return self._model

    @model.setter
    def model(self, value: str) -> None:
        self._model = value
        self._logger = self._logger.bind(model=value)

    def _get_retry_decorator(self) -> Any:
        """Get retry decorator configured for provider API calls."""
        return create_retry_decorator(
            config=self._retry_config,
            exception_types=self._retryable_exceptions,
        )

    async def _wrap_error(self, e: Exception, operation: str) -> ProviderError:
        """Wrap an SDK error in a ProviderError carrying retryability."""
        return ProviderError(
            message=f"{self._provider_name} {operation} failed: {e}",
            provider=self._provider_name,
            retryable=isinstance(e, self._retryable_exceptions),
        )

    def _parse_response(self, content: str | None, schema: type[ModelT]) -> ModelT:
        """Validate raw JSON content against ``schema``.

        Raises:
            ResponseValidationError: If the content is empty, not JSON, or does
                not match the schema. Nothing is coerced or guessed.
        """
        if not content:
            raise ResponseValidationError(
                "No response content from LLM", provider=self._provider_name
            )

        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as e:
            raise ResponseValidationError(
                "Failed to parse LLM response as JSON",
                provider=self._provider_name,
                raw_content=content,
            ) from e

        try:
            return schema.model_validate(parsed)
        except ValidationError as e:
            self._logger.error(
                "response_validation_failed",
                schema=schema.__name__,
                errors=e.errors(include_url=False),
            )
            raise ResponseValidationError(
                f"LLM response did not match expected {schema.__name__} format",
                provider=self._provider_name,
                raw_content=content,
            ) from e
