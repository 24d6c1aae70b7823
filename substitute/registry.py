"""
Ordered store of configured behaviour for one substitute.
"""
import itertools
import logging
from enum import Enum
from typing import Optional, Union


from .actions import Action, ActionSequence, CompositeAction
from .configs import configs as project_configs, Configs
from .errors import ConfigurationError
from .invocation import Invocation
from .logger import logger as module_logger
from .patterns import CallPattern


class BindingKind(str, Enum):
    RESULT = "result"
    SIDE_EFFECT = "side_effect"


class _NoConfiguration:

    def __repr__(self) -> str:
        return "NO_CONFIGURATION"

    def __bool__(self) -> bool:
        return False


NO_CONFIGURATION = _NoConfiguration()


class ExpectationBinding:
    """
    A call pattern tied to the action it triggers.

    Result bindings compete: one of them decides what a call returns.
    Side-effect bindings do not compete: every matching one runs.
    """

    def __init__(self, pattern: CallPattern, action: Action, order: int, kind: BindingKind = BindingKind.RESULT):
        self.pattern = pattern
        self.action = action
        self.order = order
        self.kind = kind

    @property
    def key(self):
        return self.pattern.key

    @property
    def any_args(self) -> bool:
        return self.pattern.any_args

    def append(self, step: Action) -> None:
        """Add a step that runs once the binding's current steps are used up."""
        target = self.action.result if isinstance(self.action, CompositeAction) else self.action
        if not isinstance(target, ActionSequence):
            raise ConfigurationError(f"{self.pattern.describe()} is not configured with a chainable result.")
        target.append(step)

    def __repr__(self) -> str:
        return f"ExpectationBinding(#{self.order} {self.pattern.describe()} -> {self.action!r})"


class ExpectationRegistry:
    """
    Bindings in registration order, resolved newest first.

    With `ANY_ARGS_PRECEDENCE="last_registered"` the newest matching binding
    wins, any-args bindings included. With "dominated", any-args bindings are
    only consulted after every positional binding for the member has failed.
    """

    def __init__(self, configs: Configs = project_configs, logger: logging.Logger = module_logger):
        self.configs = configs
        self.logger = logger
        self._bindings: list[ExpectationBinding] = []
        self._order = itertools.count()

    def bind(self, pattern: CallPattern, action: Action, kind: BindingKind = BindingKind.RESULT) -> ExpectationBinding:
        """Create a binding with the next registration index and register it."""
        binding = ExpectationBinding(pattern, action, next(self._order), kind)
        self.register(binding)
        return binding

    def register(self, binding: ExpectationBinding) -> None:
        self._bindings.append(binding)
        self.logger.debug(f"Registered {binding!r}")

    def bindings(self) -> list[ExpectationBinding]:
        return list(self._bindings)

    def remove(self, binding: ExpectationBinding) -> None:
        self._bindings = [kept for kept in self._bindings if kept is not binding]

    def _matches(self, binding: ExpectationBinding, invocation: Invocation) -> bool:
        return binding.pattern.matches(
            invocation,
            raise_errors=self.configs.RAISE_ON_PREDICATE_ERROR,
            logger=self.logger
        )

    def resolve_binding(self, invocation: Invocation) -> Union[ExpectationBinding, _NoConfiguration]:
        """
        Find the result binding that decides what a call returns.

        Args:
            invocation (Invocation): The call being dispatched.

        Returns:
            ExpectationBinding | NO_CONFIGURATION: The winning binding, or the
                sentinel when no result binding matches.
        """
        candidates = [
            binding for binding in reversed(self._bindings)
            if binding.kind == BindingKind.RESULT and binding.key == invocation.key
        ]
        if self.configs.ANY_ARGS_PRECEDENCE == "dominated":
            # Stable sort keeps newest-first order within each group.
            candidates.sort(key=lambda binding: binding.any_args)

        for binding in candidates:
            if self._matches(binding, invocation):
                return binding
        return NO_CONFIGURATION

    def resolve(self, invocation: Invocation) -> Union[Action, _NoConfiguration]:
        binding = self.resolve_binding(invocation)
        if binding is NO_CONFIGURATION:
            return NO_CONFIGURATION
        return binding.action

    def side_effects(self, invocation: Invocation) -> list[ExpectationBinding]:
        """Every matching side-effect binding, in registration order."""
        return [
            binding for binding in self._bindings
            if binding.kind == BindingKind.SIDE_EFFECT
            and binding.key == invocation.key
            and self._matches(binding, invocation)
        ]

    def clear(self, member: Optional[str] = None) -> None:
        """Remove every binding, or only the bindings for one member name."""
        if member is None:
            removed = len(self._bindings)
            self._bindings.clear()
        else:
            kept = [binding for binding in self._bindings if binding.key[0] != member]
            removed = len(self._bindings) - len(kept)
            self._bindings = kept
        self.logger.debug(f"Cleared {removed} bindings (member={member!r}).")
