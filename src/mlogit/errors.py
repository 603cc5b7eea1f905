"""
Exception types raised by the mlogit orchestration layer.

All errors are raised synchronously to the caller of ``train_mlogit`` or
``predict_mlogit``; nothing in this package retries or recovers.
"""


class MLogitError(Exception):
    """Base class for every mlogit error."""


class ValidationError(MLogitError, ValueError):
    """A training configuration or input matrix is not well-formed."""


class MissingDataError(ValidationError):
    """No training data was supplied."""


class EngineInvocationError(MLogitError, RuntimeError):
    """The external engine failed to run a script."""


class HydrationError(MLogitError):
    """Engine outputs do not have the shape the caller expects."""
