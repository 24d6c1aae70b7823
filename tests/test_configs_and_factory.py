#!/usr/bin/env python3
"""
Tests for package configuration and the substitute factory.
"""
import logging


import pytest


from substitute import Configs, Substitute, Surface, configs, make_configs, make_substitute, substitute_for
from substitute.recorder import CallRecorder
from ._calculator import ICalculator


class TestConfigs:

    def test_when_configs_are_loaded_then_yaml_defaults_apply(self):
        """
        GIVEN the packaged configs.yaml
        WHEN making configs without overrides
        THEN ANY_ARGS_PRECEDENCE is last_registered
        """
        EXPECTED = "last_registered"

        result = make_configs().ANY_ARGS_PRECEDENCE

        assert result == EXPECTED, f"Expected {EXPECTED!r}, got {result!r}"

    def test_when_configs_are_loaded_then_package_logs_warnings_only(self):
        """
        GIVEN the packaged configs.yaml
        WHEN making configs without overrides
        THEN LOG_LEVEL is WARNING, so dispatch traces are not written
        """
        EXPECTED = logging.WARNING

        result = make_configs().LOG_LEVEL

        assert result == EXPECTED, f"Expected {EXPECTED}, got {result}"

    def test_when_override_is_given_then_it_replaces_default(self):
        """
        GIVEN an override for MAX_NEAR_MISSES
        WHEN making configs
        THEN the override applies
        """
        EXPECTED = 2

        result = make_configs({"MAX_NEAR_MISSES": EXPECTED}).MAX_NEAR_MISSES

        assert result == EXPECTED, f"Expected {EXPECTED}, got {result}"

    def test_when_override_key_is_unknown_then_attribute_error_is_raised(self):
        """
        GIVEN an override for a key Configs does not define
        WHEN making configs
        THEN AttributeError is raised
        """
        with pytest.raises(AttributeError, match="NOT_A_SETTING"):
            make_configs({"NOT_A_SETTING": 1})

    @pytest.mark.parametrize(
        "key, value",
        [
            ("ANY_ARGS_PRECEDENCE", "first_registered"),
            ("MAX_NEAR_MISSES", -1),
            ("LOG_LEVEL", 15),
        ],
        ids=["precedence", "negative_near_misses", "log_level"]
    )
    def test_when_override_is_invalid_then_value_error_is_raised(self, key, value):
        """
        GIVEN an override that fails validation
        WHEN making configs
        THEN ValueError is raised
        """
        with pytest.raises(ValueError, match=key):
            make_configs({key: value})

    def test_when_item_access_is_used_then_value_is_returned(self):
        """
        GIVEN the module-level configs
        WHEN reading LOG_LEVEL by key
        THEN the attribute value is returned
        """
        result = configs["LOG_LEVEL"]

        assert result == configs.LOG_LEVEL, f"Expected {configs.LOG_LEVEL}, got {result}"

    def test_when_item_is_set_to_invalid_value_then_value_error_is_raised(self):
        """
        GIVEN a fresh Configs object
        WHEN setting MAX_NEAR_MISSES to a negative number by key
        THEN ValueError is raised
        """
        fresh = make_configs()

        with pytest.raises(ValueError):
            fresh["MAX_NEAR_MISSES"] = -3

    def test_when_unknown_key_is_read_with_get_then_default_is_returned(self):
        """
        GIVEN a Configs object
        WHEN reading an unknown key with get
        THEN the default is returned
        """
        DEFAULT = "fallback"

        result = Configs().get("UNKNOWN", DEFAULT)

        assert result == DEFAULT, f"Expected {DEFAULT!r}, got {result!r}"

    def test_when_unknown_key_is_read_by_item_then_key_error_is_raised(self):
        """
        GIVEN a Configs object
        WHEN reading an unknown key by item
        THEN KeyError is raised
        """
        with pytest.raises(KeyError):
            Configs()["UNKNOWN"]


class TestMakeSubstitute:

    def test_when_class_is_given_then_substitute_controller_is_returned(self):
        """
        GIVEN ICalculator
        WHEN making a substitute
        THEN a Substitute for the ICalculator surface is returned
        """
        sub = make_substitute(ICalculator)

        result = (type(sub), sub.surface.name)
        assert result == (Substitute, "ICalculator"), f"Unexpected substitute {sub!r}"

    def test_when_surface_is_given_then_it_is_used_as_is(self):
        """
        GIVEN a Surface object
        WHEN making a substitute
        THEN the substitute implements that exact surface
        """
        surface = Surface.from_class(ICalculator)

        sub = make_substitute(surface)

        assert sub.surface is surface, f"Expected {surface!r}, got {sub.surface!r}"

    def test_when_resource_key_is_unexpected_then_key_error_is_raised(self):
        """
        GIVEN a mock resource under an unknown key
        WHEN making a substitute
        THEN KeyError is raised
        """
        with pytest.raises(KeyError, match="database"):
            make_substitute(ICalculator, mock_resources={"database": object()})

    def test_when_recorder_is_injected_then_calls_go_to_it(self):
        """
        GIVEN an injected recorder
        WHEN the substitute is called
        THEN the injected recorder holds the call
        """
        recorder = CallRecorder(configs=make_configs())
        calculator = substitute_for(ICalculator, mock_resources={"recorder": recorder})

        calculator.add(1, 2)

        assert len(recorder.calls()) == 1, f"Expected one recorded call, got {recorder.calls()}"

    def test_when_logger_is_injected_then_verification_failures_are_logged_to_it(self, caplog):
        """
        GIVEN an injected logger
        WHEN a verification fails
        THEN the failure is logged at INFO level
        """
        logger = logging.getLogger("tests.factory")
        sub = make_substitute(ICalculator, mock_resources={"logger": logger})

        with caplog.at_level(logging.INFO, logger=logger.name), pytest.raises(AssertionError):
            sub.received().add(1, 1)

        assert "Expected to receive at least one call" in caplog.text, f"Unexpected log {caplog.text!r}"

    def test_when_source_is_neither_surface_nor_class_then_type_error_is_raised(self):
        """
        GIVEN a plain string
        WHEN making a substitute
        THEN TypeError is raised
        """
        with pytest.raises(TypeError):
            make_substitute("ICalculator")

    def test_when_object_is_not_a_substitute_then_controller_cannot_wrap_it(self):
        """
        GIVEN an ordinary object
        WHEN wrapping it with Substitute.of
        THEN TypeError is raised
        """
        with pytest.raises(TypeError):
            Substitute.of(object())


if __name__ == "__main__":
    pytest.main([__file__])
