from pathlib import Path
from typing import Any, Literal, Optional
import logging


from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError
)
import yaml


_HOME_DIR = Path(__file__).parent


class Configs(BaseModel):
    """
    Configuration class for substitute instances.

    This pydantic class holds the settings that shape how every substitute
    resolves calls, fills in default values and reports verification failures.
    It loads settings from the `configs.yaml` file that ships with the package.

    Attributes:
        LOG_LEVEL (int): Logging level for the package logger. WARNING by default; DEBUG traces every dispatch.
        ANY_ARGS_PRECEDENCE (str): How bindings registered for any arguments compete with
            bindings registered with positional matchers. "last_registered" lets the most
            recent registration win; "dominated" consults any-args bindings only after every
            positional binding for the member has failed to match.
        RAISE_ON_PREDICATE_ERROR (bool): Re-raise errors thrown by argument predicates
            instead of warning and treating the binding as a non-match.
        AUTO_SUBSTITUTE_NESTED (bool): Return a nested substitute for unconfigured members
            whose return type is itself a substitutable surface.
        AUTO_PROPERTY_VALUES (bool): Make an unconfigured property getter return the last
            value assigned through its setter.
        MAX_NEAR_MISSES (int): Maximum number of near-miss calls listed in a verification failure.
    """
    model_config = ConfigDict(validate_assignment=True)

    LOG_LEVEL:                  Literal[10, 20, 30, 40, 50] = logging.WARNING
    ANY_ARGS_PRECEDENCE:        Literal["last_registered", "dominated"] = "last_registered"
    RAISE_ON_PREDICATE_ERROR:   bool = False
    AUTO_SUBSTITUTE_NESTED:     bool = True
    AUTO_PROPERTY_VALUES:       bool = True
    MAX_NEAR_MISSES:            int = Field(default=5, ge=0)

    def __getitem__(self, key: str) -> Any:
        """
        Allows dictionary-like access to the configuration attributes.

        Args:
            key (str): The name of the configuration attribute.

        Returns:
            Any: The value of the requested configuration attribute.
        """
        if key not in type(self).model_fields:
            raise KeyError(f"Configuration key '{key}' not found.")
        return getattr(self, key)

    def __setitem__(self, key: str, value: Any) -> None:
        """
        Allows dictionary-like setting of the configuration attributes.

        Args:
            key (str): The name of the configuration attribute.
            value (Any): The value to set for the configuration attribute.

        Raises:
            KeyError: If the attribute does not exist.
            ValueError: If the new value fails validation.
        """
        if key not in type(self).model_fields:
            raise KeyError(f"Configuration key '{key}' not found.")
        try:
            setattr(self, key, value)
        except ValidationError as e:
            raise ValueError(f"Validation error setting '{key}' to '{value}': {e.errors()}") from e

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        """Retrieves the value of a configuration attribute.

        Args:
            key (str): The name of the configuration attribute.
            default (Any): The default value to return if the key is not found. Defaults to None.

        Returns:
            Any: The value of the requested configuration attribute or the default value.
        """
        if key not in type(self).model_fields:
            return default
        return getattr(self, key)


def set_mock_configs(configs: Configs, mock_configs: dict[str, Any]) -> Configs:
    """
    Sets multiple configuration attributes on a Configs instance.

    This function updates the attributes of a Configs object based on the
    provided dictionary of configuration overrides. Each attribute is
    validated as it is set.

    Args:
        configs (Configs): The Configs instance to update.
        mock_configs (dict[str, Any]): A dictionary of configuration overrides.

    Returns:
        Configs: The updated Configs instance.

    Raises:
        AttributeError: If an attribute in mock_configs does not exist in Configs.
        ValueError: If setting an attribute fails validation.
    """
    for attr, value in mock_configs.items():
        if not attr.startswith('_') and attr in Configs.model_fields:
            try:
                setattr(configs, attr, value)
            except ValidationError as e:
                raise ValueError(f"Validation error setting '{attr}' to '{value}': {e.errors()}") from e
        else:
            raise AttributeError(f"Unexpected config attribute in mock_configs: {attr}")
    return configs


def make_configs(mock_configs: Optional[dict[str, Any]] = None) -> Configs:
    """
    Factory function to create a Configs instance.

    This function loads `configs.yaml`, validates it, and applies the
    provided dictionary of configuration overrides on top.

    Args:
        mock_configs (dict[str, Any], optional): A dictionary of configuration overrides. Defaults to None.

    Returns:
        Configs: A new instance of the Configs pydantic model.
    """
    config_path = _HOME_DIR / "configs.yaml"
    try:
        with open(config_path, "r") as config_file:
            config_dict = yaml.safe_load(config_file) or {}
    except FileNotFoundError as e:
        raise FileNotFoundError(f"Configuration file '{config_path}' not found.") from e
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing the config file '{config_path}'.") from e

    try:
        configs = Configs.model_validate(config_dict)
    except ValidationError as e:
        raise ValueError(
            f"Validation error in configs: {e.errors()}"
        ) from e

    if mock_configs is not None:
        configs = set_mock_configs(configs, mock_configs)
    return configs

try:
    configs = CONFIGS = make_configs()
except Exception as e:
    raise AssertionError(f"Failed to initialize configs: {e}") from e
