"""Tests for validchain.config."""

import pytest

from validchain import (
    ConfigurationError,
    ValidatorConfig,
    wrap_for_validation,
    wrap_sequence_for_validation,
)


class TestValidatorConfig:

    def test_defaults(self):
        config = ValidatorConfig()
        assert config.skip_if_already_invalid is False
        assert config.name is None

    def test_to_dict(self):
        config = ValidatorConfig(skip_if_already_invalid=True, name="form")
        assert config.to_dict() == {"skip_if_already_invalid": True, "name": "form"}

    def test_from_dict(self):
        config = ValidatorConfig.from_dict({"name": "form"})
        assert config == ValidatorConfig(name="form")

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ValidatorConfig.from_dict({"skip": True})
        assert exc_info.value.context["unknown"] == ["skip"]

    def test_from_dict_rejects_non_bool_skip(self):
        with pytest.raises(ConfigurationError):
            ValidatorConfig.from_dict({"skip_if_already_invalid": "yes"})

    def test_from_dict_rejects_non_string_name(self):
        with pytest.raises(ConfigurationError):
            ValidatorConfig.from_dict({"name": 5})


class TestConfigApplied:

    def test_config_enables_skip(self, log):
        validator = wrap_for_validation(1, config=ValidatorConfig(skip_if_already_invalid=True))
        validator.validate(lambda _: False).validate(log.predicate())
        assert log.calls == []

    def test_positional_flag_overrides_config(self, log):
        validator = wrap_for_validation(1, True, config=ValidatorConfig())
        validator.validate(lambda _: False).validate(log.predicate())
        assert log.calls == []

    def test_name_appears_in_repr(self):
        validator = wrap_for_validation(1, config=ValidatorConfig(name="age"))
        assert validator.name == "age"
        assert repr(validator) == "ScalarValidator(age, valid)"

    def test_sequence_uses_config(self, log):
        config = ValidatorConfig(skip_if_already_invalid=True, name="rows")
        validator = wrap_sequence_for_validation([1, 2, 3], config=config)
        validator.validate(log.predicate(lambda n: n != 1))
        assert log.calls == [("predicate", 1)]
        assert validator.name == "rows"
        assert repr(validator) == "SequenceValidator(rows, invalid)"
