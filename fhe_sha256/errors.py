"""Exceptions raised by fhe_sha256.

Every failure is fatal to the hash computation: nothing here is meant to be
caught and retried, and a partial digest is never returned.
"""


class FheShaError(Exception):
    """Base class for all library errors."""


class ConfigurationError(FheShaError):
    """Invalid or mismatched evaluation key, backend or setting."""


class ShapeError(FheShaError, ValueError):
    """An encrypted word, block, state or bit stream has the wrong size."""


class GateBatchError(FheShaError):
    """A lane failed while a gate batch was being evaluated."""
