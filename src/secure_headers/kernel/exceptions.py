"""Unified exception hierarchy for secure-headers.

All library exceptions inherit from SecureHeadersException so callers can
catch one type at the HTTP boundary or target a specific failure.

Categories:
- ConfigurationException: operator configuration that could not be used as given
- CompositionException: failures while composing the per-request header set
"""

from __future__ import annotations

from typing import Any


# =============================================================================
# Base Exception
# =============================================================================


class SecureHeadersException(Exception):
    """Base exception for all secure-headers errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CONFIG_001").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(SecureHeadersException):
    """Operator configuration problems."""


class ConfigParseError(ConfigurationException):
    """A configured value could not be parsed and was replaced by a fallback.

    Never propagated out of the resolver: instances are collected on
    ``ConfigResolver.issues`` and logged so operators notice the problem.
    """

    def __init__(self, field: str, value: Any, fallback: Any, reason: str) -> None:
        super().__init__(
            f"Invalid value {value!r} for '{field}': {reason}; using {fallback!r}",
            code="CONFIG_PARSE",
            context={"field": field, "value": value, "fallback": fallback},
        )
        self.field = field
        self.value = value
        self.fallback = fallback
        self.reason = reason


# =============================================================================
# Composition Exceptions
# =============================================================================


class CompositionException(SecureHeadersException):
    """The header set for a request could not be composed."""


class NonceGenerationError(CompositionException):
    """No usable CSP nonce is available for the request.

    Fatal to composition: a CSP must never be emitted with a missing or
    predictable nonce.
    """


class DirectiveMergeError(CompositionException):
    """A directive list contains clauses that cannot be merged safely."""
