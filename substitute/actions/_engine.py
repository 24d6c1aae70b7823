import logging
from typing import Any, Callable


from ..configs import configs as project_configs, Configs
from ..invocation import Accessor, Invocation
from ..logger import logger as module_logger
from ..surface import Member, is_surface_type
from ._action import Action
from ._defaults import canonical_empty


NestedFactory = Callable[[Member, Any], Any]


class ActionEngine:
    """
    Executes resolved actions and supplies default results for unconfigured calls.
    """

    def __init__(self, configs: Configs = project_configs, logger: logging.Logger = module_logger):
        self.configs = configs
        self.logger = logger

    def execute(self, action: Action, invocation: Invocation) -> Any:
        """
        Run an action for one call.

        Errors raised by the action, including errors from user callbacks,
        propagate unchanged.
        """
        return action.execute(invocation)

    def default_for(self, invocation: Invocation, nested: NestedFactory) -> Any:
        """
        The result of a call no binding matched.

        Args:
            invocation (Invocation): The unmatched call.
            nested (NestedFactory): Returns the memoized nested substitute for a
                member whose type is itself a surface.

        Returns:
            Any: The canonical empty value of the member's type, or a nested substitute.
        """
        if invocation.accessor == Accessor.SET:
            return None
        returns = invocation.member.returns
        if self.configs.AUTO_SUBSTITUTE_NESTED and is_surface_type(returns):
            return nested(invocation.member, returns)
        value = canonical_empty(returns)
        self.logger.debug(f"No configuration for {invocation!r}; returning {value!r}.")
        return value
