"""
Append-only log of the calls made on one substitute.
"""
import logging
from typing import NamedTuple, Optional


from .configs import configs as project_configs, Configs
from .invocation import Accessor, Invocation
from .logger import logger as module_logger
from .patterns import CallPattern


class NearMiss(NamedTuple):
    """A recorded call to the right member that failed at least one matcher."""
    invocation: Invocation
    failed_positions: list[int]

    def describe(self) -> str:
        positions = ", ".join(str(idx) for idx in self.failed_positions)
        return f"{self.invocation!r} (arguments not matched at positions: {positions})"


class CallRecorder:
    """
    Keeps every invocation made on a substitute, in call order.

    The log only grows until `clear` is called, for every member or one. Clearing it does not touch
    any configured behaviour.
    """

    def __init__(self, configs: Configs = project_configs, logger: logging.Logger = module_logger):
        self.configs = configs
        self.logger = logger
        self._calls: list[Invocation] = []

    def record(self, invocation: Invocation) -> None:
        self._calls.append(invocation)

    def calls(self) -> list[Invocation]:
        return list(self._calls)

    def matching(self, pattern: CallPattern) -> list[Invocation]:
        return [
            invocation for invocation in self._calls
            if pattern.matches(
                invocation,
                raise_errors=self.configs.RAISE_ON_PREDICATE_ERROR,
                logger=self.logger
            )
        ]

    def query(self, pattern: CallPattern) -> int:
        """
        Count the recorded calls that match every matcher of a pattern.

        Capturing matchers in the pattern receive the argument of each counted call.

        Args:
            pattern (CallPattern): The member and matchers to count calls for.

        Returns:
            int: Number of matching calls.
        """
        matched = self.matching(pattern)
        for invocation in matched:
            pattern.verify(invocation)
        return len(matched)

    def query_any_args(self, name: str, accessor: Accessor) -> int:
        """Count the recorded calls to a member whatever their arguments."""
        return sum(1 for invocation in self._calls if invocation.key == (name, accessor))

    def near_misses(self, pattern: CallPattern, limit: int) -> list[NearMiss]:
        """
        Calls to the pattern's member that failed at least one of its matchers.

        Args:
            pattern (CallPattern): The pattern that was verified.
            limit (int): Maximum number of near misses to return.

        Returns:
            list[NearMiss]: The earliest near misses, at most `limit` of them.
        """
        misses = []
        for invocation in self._calls:
            if len(misses) >= limit:
                break
            if invocation.key != pattern.key:
                continue
            failed = pattern.failed_positions(invocation)
            if failed:
                misses.append(NearMiss(invocation, failed))
        return misses

    def clear(self, member: Optional[str] = None) -> None:
        """Forget every recorded call, or only the calls to one member name."""
        if member is None:
            removed = len(self._calls)
            self._calls.clear()
        else:
            kept = [invocation for invocation in self._calls if invocation.name != member]
            removed = len(self._calls) - len(kept)
            self._calls = kept
        self.logger.debug(f"Cleared {removed} recorded calls (member={member!r}).")
