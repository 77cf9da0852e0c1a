"""Exception hierarchy for validchain.

Faults raised by user predicates and actions are never wrapped: when no
``on_exception`` handler is supplied they propagate to the caller exactly as
raised. The exceptions below cover misuse of the library itself and the
opt-in ``ensure_valid()`` check.

Example:
    ```python
    from validchain import wrap_for_validation
    from validchain.exceptions import InvalidTargetError

    try:
        wrap_for_validation(order).validate(lambda o: o.total > 0).ensure_valid()
    except InvalidTargetError as e:
        logger.error("Rejected: %s (%s)", e, e.context)
    ```
"""

from typing import Any, Dict


class ValidchainError(Exception):
    """Base exception for validchain.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context
        details: Alternative to context (both are supported)
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        # Details takes precedence if both are provided
        self.context = details or context or {}
        self.details = self.context


class ValidatorUsageError(ValidchainError, TypeError):
    """Raised when a validator is handed something it cannot use.

    Typical causes are a ``None`` or non-callable predicate, action or
    force-skip condition, or a ``PendingValidation`` source that is neither a
    validator nor an awaitable.

    Example:
        ```python
        raise ValidatorUsageError(
            "predicate must be callable",
            context={"argument": "predicate", "received": "NoneType"}
        )
        ```
    """

    pass


class ConfigurationError(ValidchainError):
    """Raised when a validator configuration mapping is invalid.

    Example:
        ```python
        raise ConfigurationError(
            "Unknown validator configuration keys",
            context={"unknown": ["skip"], "allowed": ["name", "skip_if_already_invalid"]}
        )
        ```
    """

    pass


class InvalidTargetError(ValidchainError):
    """Raised by ``ensure_valid()`` when a validation chain ended invalid.

    Carries no failure reasons; validity is a single flag. The context holds
    the validator name (if configured) and a short representation of the
    target.
    """

    pass


__all__ = [
    "ValidchainError",
    "ValidatorUsageError",
    "ConfigurationError",
    "InvalidTargetError",
]
