from typing import Any, Iterable, Optional


from ..invocation import Invocation
from ._action import Action, ReturnConstant


class ActionSequence(Action):
    """
    A finite list of steps, advanced one step per matching call.

    Once the list is used up, every further call runs `terminal`. Without a
    terminal action the last step repeats forever.
    """

    def __init__(self, steps: Iterable[Action] = (), terminal: Optional[Action] = None):
        self.steps: list[Action] = list(steps)
        self.terminal = terminal
        self._position = 0

    def append(self, step: Action) -> None:
        self.steps.append(step)

    def execute(self, invocation: Invocation) -> Any:
        if self._position < len(self.steps):
            step = self.steps[self._position]
            self._position += 1
        elif self.terminal is not None:
            step = self.terminal
        elif self.steps:
            step = self.steps[-1]
        else:
            return None
        return step.execute(invocation)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.steps!r}, terminal={self.terminal!r})"


class ReturnSequence(ActionSequence):
    """Returns `values` in order, then keeps returning the last one."""

    def __init__(self, values: Iterable[Any]):
        values = list(values)
        if not values:
            raise ValueError("ReturnSequence needs at least one value.")
        super().__init__(ReturnConstant(value) for value in values)
