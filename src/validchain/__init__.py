"""Fluent validation chains for single values and sequences.

This package provides:

- **ScalarValidator**: validation chain over one value
- **SequenceValidator**: the same chain applied to every element of a sequence
- **Validated**: the runtime-checkable protocol both implement
- **PendingValidation**: fluent chaining across async steps
- **adapters**: helpers taking zero-argument ``on_fail`` / exception-only
  ``on_exception`` callbacks

Example:
    ```python
    from validchain import wrap_for_validation, wrap_sequence_for_validation

    wrap_for_validation(42).validate(lambda n: n > 0).is_valid()
    # True

    failed = []
    (
        wrap_sequence_for_validation(["a", "", "c"])
        .validate(bool, on_fail=failed.append)
        .is_valid()
    )
    # False; failed == [""]
    ```
"""

from validchain import adapters
from validchain.config import ValidatorConfig
from validchain.exceptions import (
    ConfigurationError,
    InvalidTargetError,
    ValidatorUsageError,
    ValidchainError,
)
from validchain.pending import PendingValidation, pending
from validchain.protocol import Validated
from validchain.scalar import ScalarValidator, wrap_for_validation
from validchain.sequence import SequenceValidator, wrap_sequence_for_validation

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Validators
    "Validated",
    "ScalarValidator",
    "SequenceValidator",
    "wrap_for_validation",
    "wrap_sequence_for_validation",
    # Async chaining
    "PendingValidation",
    "pending",
    # Adapters
    "adapters",
    # Configuration
    "ValidatorConfig",
    # Exceptions
    "ValidchainError",
    "ValidatorUsageError",
    "ConfigurationError",
    "InvalidTargetError",
]
