"""
Routes every intercepted call through the recorder, the registry and the action engine.
"""
import logging
from typing import Any, Callable, Optional, Sequence


from .actions import ActionEngine, ReturnConstant
from .configs import configs as project_configs, Configs
from .invocation import Accessor, Invocation, Ref
from .logger import logger as module_logger
from .patterns import build_pattern
from .recorder import CallRecorder
from .registry import NO_CONFIGURATION, ExpectationBinding, ExpectationRegistry
from .surface import Member, Surface


class SubstituteState:
    """
    Everything one substitute remembers: its call log, its bindings and its nested substitutes.
    """

    def __init__(self, surface: Surface, recorder: CallRecorder, registry: ExpectationRegistry):
        self.surface = surface
        self.recorder = recorder
        self.registry = registry
        self.nested: dict[str, Any] = {}
        self.property_values: dict[str, ExpectationBinding] = {}

    def clear_received_calls(self) -> None:
        self.recorder.clear()

    def clear_configuration(self, member: Optional[str] = None) -> None:
        """Drop bindings and recorded calls, for every member or only the named one."""
        self.registry.clear(member)
        self.recorder.clear(member)
        if member is None:
            self.nested.clear()
            self.property_values.clear()
        else:
            self.nested.pop(member, None)
            self.property_values.pop(member, None)


class Dispatcher:
    """
    The single entry point generated adapters call into.

    For each call: record it, run the matching side effects in registration
    order, then either execute the winning result binding or fall back to the
    default-value policy.
    """

    def __init__(self,
                 state: SubstituteState,
                 engine: ActionEngine,
                 nested_factory: Callable[[Any], Any],
                 configs: Configs = project_configs,
                 logger: logging.Logger = module_logger
                 ):
        self.state = state
        self.engine = engine
        self.nested_factory = nested_factory
        self.configs = configs
        self.logger = logger

    @property
    def surface(self) -> Surface:
        return self.state.surface

    def dispatch(self, member: Member, accessor: Accessor, args: Sequence[Any], slots: Optional[dict[int, Ref]] = None) -> Any:
        """
        Handle one intercepted call.

        Args:
            member (Member): The member that was called.
            accessor (Accessor): Method call, property get or property set.
            args (Sequence[Any]): Argument values in parameter order.
            slots (dict[int, Ref], optional): Output slots for out and ref positions.

        Returns:
            Any: The configured result, or the default value for the member.
        """
        invocation = Invocation(member, accessor, args, slots)
        self.state.recorder.record(invocation)
        self.logger.debug(f"Dispatching {invocation!r} on {self.surface.name}")

        registry = self.state.registry
        for binding in registry.side_effects(invocation):
            binding.pattern.dispatch(invocation)
            self.engine.execute(binding.action, invocation)

        binding = registry.resolve_binding(invocation)
        if binding is NO_CONFIGURATION:
            if accessor == Accessor.SET and self.configs.AUTO_PROPERTY_VALUES:
                self._remember_property(invocation)
            return self.engine.default_for(invocation, self._nested)

        binding.pattern.dispatch(invocation)
        return self.engine.execute(binding.action, invocation)

    def _remember_property(self, invocation: Invocation) -> None:
        # One remembered value per property; the newest assignment replaces it.
        name = invocation.name
        registry = self.state.registry
        previous = self.state.property_values.get(name)
        if previous is not None:
            registry.remove(previous)
        pattern = build_pattern(invocation.member, Accessor.GET)
        self.state.property_values[name] = registry.bind(pattern, ReturnConstant(invocation[0]))

    def _nested(self, member: Member, returns: Any) -> Any:
        if member.name not in self.state.nested:
            self.logger.debug(f"Creating nested substitute for {self.surface.name}.{member.name}")
            self.state.nested[member.name] = self.nested_factory(returns)
        return self.state.nested[member.name]
