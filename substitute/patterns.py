"""
Call patterns: a member, an accessor, and one matcher per parameter position.

Patterns are built the same way for configuration and for verification, so
the two always agree on what a given argument list means.
"""
import logging
import warnings
from typing import Any, Optional


from .actions._defaults import is_canonical_empty
from .errors import (
    AmbiguousArgumentsError,
    ArgumentCountError,
    ConfigurationError,
    PredicateErrorWarning
)
from .invocation import Accessor, Invocation, Ref
from .logger import logger as module_logger
from .matchers import ExactValue, Matcher, Wildcard
from .surface import Direction, Member, Param


class CallPattern:
    """
    The member, accessor and per-position matchers a binding or verification applies to.

    Attributes:
        member (Member): The member the pattern targets.
        accessor (Accessor): Method call, property get or property set.
        matchers (tuple[Matcher, ...]): One matcher per parameter position.
        any_args (bool): True when the pattern was built to accept any arguments.
    """

    def __init__(self, member: Member, accessor: Accessor, matchers: tuple[Matcher, ...], any_args: bool = False):
        self.member = member
        self.accessor = accessor
        self.matchers = matchers
        self.any_args = any_args

    @property
    def key(self) -> tuple[str, Accessor]:
        return (self.member.name, self.accessor)

    def matches(self, invocation: Invocation, *,
                raise_errors: bool = False,
                logger: logging.Logger = module_logger
                ) -> bool:
        """
        Check every matcher against the invocation's argument snapshot.

        A matcher that raises makes the whole pattern a non-match. The error is
        logged and reported as a `PredicateErrorWarning`, or re-raised
        unchanged when `raise_errors` is True.

        Args:
            invocation (Invocation): The call to check.
            raise_errors (bool): Propagate matcher errors instead of warning.
            logger (logging.Logger): Where matcher errors are logged.

        Returns:
            bool: True when every position matches.
        """
        if invocation.key != self.key:
            return False
        args = invocation.args()
        for idx, matcher in enumerate(self.matchers):
            try:
                if not matcher.matches(args[idx]):
                    return False
            except Exception as e:
                if raise_errors:
                    raise
                message = (
                    f"Matcher {matcher.describe()} for argument {idx} of {self.describe()} "
                    f"raised {type(e).__name__}: {e}; treating the pattern as a non-match."
                )
                logger.warning(message)
                warnings.warn(message, PredicateErrorWarning, stacklevel=2)
                return False
        return True

    def failed_positions(self, invocation: Invocation) -> list[int]:
        """Positions whose matcher rejects the invocation's argument, errors included."""
        failed = []
        for idx, matcher in enumerate(self.matchers):
            try:
                ok = matcher.matches(invocation.args()[idx])
            except Exception:
                ok = False
            if not ok:
                failed.append(idx)
        return failed

    def dispatch(self, invocation: Invocation) -> None:
        """Run each matcher's dispatch hook with its argument, in position order."""
        args = invocation.args()
        for idx, matcher in enumerate(self.matchers):
            matcher.on_dispatch(args[idx])

    def verify(self, invocation: Invocation) -> None:
        """Run each matcher's verification hook with its argument."""
        args = invocation.args()
        for idx, matcher in enumerate(self.matchers):
            matcher.on_verify(args[idx])

    def describe(self) -> str:
        name = self.member.name
        if self.accessor == Accessor.GET:
            return name
        if self.accessor == Accessor.SET:
            return f"{name} = {self.matchers[0].describe()}"
        if self.any_args:
            return f"{name}(<any arguments>)"
        return f"{name}({', '.join(matcher.describe() for matcher in self.matchers)})"

    def __repr__(self) -> str:
        return f"CallPattern({self.describe()})"


def params_for(member: Member, accessor: Accessor) -> tuple[Param, ...]:
    if accessor == Accessor.CALL:
        return member.params
    if accessor == Accessor.SET:
        return (Param(name="value", annotation=member.returns),)
    return ()


def _bind(member: Member, params: tuple[Param, ...], args: tuple, kwargs: dict[str, Any]) -> list[Any]:
    if len(args) > len(params):
        raise ArgumentCountError(
            f"{member.name} takes {len(params)} arguments, pattern gave {len(args)}."
        )
    missing = object()
    bound = list(args) + [missing] * (len(params) - len(args))
    names = [param.name for param in params]
    for name, value in kwargs.items():
        if name not in names:
            raise ArgumentCountError(f"{member.name} has no parameter named '{name}'.")
        idx = names.index(name)
        if bound[idx] is not missing:
            raise ArgumentCountError(f"{member.name} got two values for parameter '{name}'.")
        bound[idx] = value

    for idx, param in enumerate(params):
        if bound[idx] is not missing:
            continue
        if param.direction == Direction.OUT:
            bound[idx] = Wildcard(param.annotation)
        elif param.has_default:
            bound[idx] = param.default
        else:
            raise ArgumentCountError(
                f"Pattern for {member.name} gives no value for parameter '{param.name}'; "
                "use Arg.any() to accept anything."
            )
    return bound


def _check_types(member: Member, params: tuple[Param, ...], values: list[Any]) -> None:
    for param, value in zip(params, values):
        if not isinstance(value, Matcher):
            continue
        declared, wanted = param.annotation, value.annotation
        if not isinstance(declared, type) or not isinstance(wanted, type):
            continue
        if not (issubclass(wanted, declared) or issubclass(declared, wanted)):
            raise ConfigurationError(
                f"{value.describe()} cannot match parameter '{param.name}' of {member.name}, "
                f"which is declared as {declared.__name__}."
            )


def _check_ambiguity(member: Member, params: tuple[Param, ...], values: list[Any]) -> None:
    inputs = [
        (idx, param, value) for idx, (param, value) in enumerate(zip(params, values))
        if param.direction != Direction.OUT
    ]
    literal = [not isinstance(value, Matcher) for _, _, value in inputs]
    if all(literal) or not any(literal):
        return
    declared = [param.annotation for _, param, _ in inputs if param.annotation is not None]
    for idx, param, value in inputs:
        if isinstance(value, Matcher):
            continue
        if declared.count(param.annotation) < 2:
            continue
        if isinstance(value, Ref):
            value = value.value
        if is_canonical_empty(param.annotation, value):
            raise AmbiguousArgumentsError(
                f"Cannot tell how to read argument {idx} ({value!r}) of {member.name}: it mixes "
                "plain values with argument matchers, and the value is the default for a type "
                f"shared by several parameters. Use Arg.is_({value!r}) to match it exactly."
            )


def build_pattern(member: Member,
                  accessor: Accessor,
                  args: tuple = (),
                  kwargs: Optional[dict[str, Any]] = None,
                  *,
                  any_args: bool = False
                  ) -> CallPattern:
    """
    Turn the arguments of a configuration or verification call into a pattern.

    Plain values become exact-value matchers, matchers are kept as given, out
    positions always match, and ref positions given a `Ref` match its current
    value. Omitted parameters with a default match that default.

    Args:
        member (Member): The member the pattern targets.
        accessor (Accessor): Method call, property get or property set.
        args (tuple): Positional pattern arguments.
        kwargs (dict[str, Any], optional): Keyword pattern arguments.
        any_args (bool): Ignore the given arguments and match every call.

    Returns:
        CallPattern: The normalised pattern.

    Raises:
        ArgumentCountError: If the arguments do not fit the member's parameters.
        AmbiguousArgumentsError: If a plain value could be misread next to matchers.
        ConfigurationError: If a matcher's type cannot fit its parameter.
    """
    kwargs = kwargs or {}
    params = params_for(member, accessor)

    if any_args:
        matchers = tuple(Wildcard(param.annotation) for param in params)
        return CallPattern(member, accessor, matchers, any_args=True)

    values = _bind(member, params, tuple(args), kwargs)
    _check_ambiguity(member, params, values)
    _check_types(member, params, values)

    matchers = []
    for param, value in zip(params, values):
        if isinstance(value, Matcher):
            matchers.append(value)
        elif param.direction == Direction.OUT:
            matchers.append(Wildcard(param.annotation))
        elif isinstance(value, Ref):
            matchers.append(ExactValue(value.value))
        else:
            matchers.append(ExactValue(value))
    return CallPattern(member, accessor, tuple(matchers))
