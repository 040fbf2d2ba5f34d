"""Custom exceptions and error handling utilities for the image variants service."""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Optional, TypeVar

from .logging_config import get_logger


class ImageVariantsError(Exception):
    """Base exception for all image variants errors.

    ``step`` names the pipeline sub-step that failed when an operation is
    made of several steps (for example ``resize`` inside a watermark request).
    """

    def __init__(self, message: str, step: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.step = step

    def with_step(self, step: str) -> "ImageVariantsError":
        """Return a copy of this error tagged with the failing step."""
        error = type(self)(f"Unable to process {step}: {self.message}", step=step)
        error.__cause__ = self
        return error


class DecodeError(ImageVariantsError):
    """Error raised for malformed base64 payloads or unreadable image bytes."""


class NotFoundError(ImageVariantsError):
    """Error raised when a lineage record or an artifact does not exist."""


class StoreWriteError(ImageVariantsError):
    """Error raised when an artifact or metadata write fails."""


class ValidationError(ImageVariantsError):
    """Error raised when a request is missing a required field."""


class ConfigurationError(ImageVariantsError):
    """Error raised for invalid configuration options."""


F = TypeVar("F", bound=Callable[..., Any])


def with_error_handling(func: F) -> F:
    """Wrap a function with standardized error handling."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:  # type: ignore[override]
        logger = get_logger("image-variants.pipeline")
        try:
            return func(*args, **kwargs)
        except ImageVariantsError as exc:
            logger.error(f"{type(exc).__name__} in {func.__name__}: {exc}")
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error(f"Unhandled error in {func.__name__}: {exc}", exc_info=True)
            raise ImageVariantsError(str(exc)) from exc

    return wrapper  # type: ignore[return-value]
