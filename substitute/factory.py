"""
Factory for substitutes.

This module wires a dispatcher, its recorder, registry and action engine to a
generated adapter instance, and wraps the result in a `Substitute` controller.
"""
from typing import Any, Optional, Union


from .actions import ActionEngine
from .adapter import build_adapter
from .configs import configs as project_configs, Configs
from .dispatcher import Dispatcher, SubstituteState
from .dsl import Substitute
from .logger import logger as module_logger
from .recorder import CallRecorder
from .registry import ExpectationRegistry
from .surface import Surface


def _as_surface(surface: Union[Surface, type]) -> Surface:
    if isinstance(surface, Surface):
        return surface
    if isinstance(surface, type):
        return Surface.from_class(surface)
    raise TypeError(f"surface must be a Surface or a class, got {type(surface).__name__}.")


def make_substitute(surface: Union[Surface, type],
                    mock_resources: Optional[dict[str, Any]] = None,
                    mock_configs: Optional[Configs] = None
                    ) -> Substitute:
    """
    Factory function to create a new substitute.

    Args:
        surface (Surface | type): The surface to implement, or a class to derive it from.
        mock_resources (dict[str, Any], optional): Objects overriding injected defaults.
            Accepted keys are "logger", "recorder", "registry" and "engine". Defaults to None.
        mock_configs (Configs, optional): A Configs object to override default configurations. Defaults to None.

    Returns:
        Substitute: Controller of the new substitute; its `instance` attribute is
            the object to hand to the code under test.

    Raises:
        TypeError: If `surface` is neither a Surface nor a class.
        KeyError: If `mock_resources` contains an unexpected key.
    """
    configs = mock_configs or project_configs
    _resources = dict(mock_resources or {})
    logger = _resources.pop("logger", module_logger)

    resources = {
        "recorder": _resources.pop("recorder", None) or CallRecorder(configs=configs, logger=logger),
        "registry": _resources.pop("registry", None) or ExpectationRegistry(configs=configs, logger=logger),
        "engine": _resources.pop("engine", None) or ActionEngine(configs=configs, logger=logger),
    }

    for key in _resources.keys():
        raise KeyError(f"Unexpected resource key: {key}")

    surface = _as_surface(surface)
    state = SubstituteState(surface, resources["recorder"], resources["registry"])

    def nested_factory(nested_surface: Union[Surface, type]) -> Any:
        return make_substitute(
            nested_surface, mock_resources={"logger": logger}, mock_configs=configs
        ).instance

    dispatcher = Dispatcher(
        state,
        resources["engine"],
        nested_factory,
        configs=configs,
        logger=logger,
    )
    instance = build_adapter(surface)(dispatcher)
    logger.debug(f"Created substitute for {surface.name}")
    return Substitute(instance, logger=logger)


def substitute_for(surface: Union[Surface, type], **kwargs: Any) -> Any:
    """Shortcut returning just the substitute instance; see `make_substitute`."""
    return make_substitute(surface, **kwargs).instance

