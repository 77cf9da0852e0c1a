"""Configuration for validators.

Example:
    ```python
    from validchain import ValidatorConfig, wrap_for_validation

    config = ValidatorConfig(skip_if_already_invalid=True, name="signup_form")
    validator = wrap_for_validation(form, config=config)

    # Or from a plain mapping, e.g. loaded from a settings file
    config = ValidatorConfig.from_dict({"name": "signup_form"})
    ```
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

from validchain.exceptions import ConfigurationError


@dataclass
class ValidatorConfig:
    """Configuration for a validator.

    Attributes:
        skip_if_already_invalid: Initial skip-on-invalid policy. Once a step
            marks the validator invalid, later steps become no-ops.
        name: Optional label used in log lines, ``repr`` and the context of
            ``InvalidTargetError``.
    """

    skip_if_already_invalid: bool = False
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert the configuration to a plain dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ValidatorConfig:
        """Create a configuration from a plain dictionary.

        Args:
            data: Mapping with any of the dataclass field names as keys.

        Returns:
            The configuration.

        Raises:
            ConfigurationError: If the mapping has unknown keys or a value of
                the wrong type.
        """
        allowed = {f.name for f in fields(cls)}
        unknown = set(data) - allowed
        if unknown:
            raise ConfigurationError(
                "Unknown validator configuration keys",
                context={"unknown": sorted(unknown), "allowed": sorted(allowed)},
            )

        skip = data.get("skip_if_already_invalid", False)
        if not isinstance(skip, bool):
            raise ConfigurationError(
                "skip_if_already_invalid must be a bool",
                context={"value": skip},
            )

        name = data.get("name")
        if name is not None and not isinstance(name, str):
            raise ConfigurationError(
                "name must be a string or None",
                context={"value": name},
            )

        return cls(skip_if_already_invalid=skip, name=name)
