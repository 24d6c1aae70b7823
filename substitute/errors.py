"""
Exceptions and warnings raised by substitutes.

Configuration errors mean the caller used the configuration or verification
surface in a way that cannot be resolved. Unsupported members are structural
limits of the substituted surface. Verification failures are assertion errors,
so test runners report them as ordinary failed assertions.
"""


class SubstituteError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(SubstituteError):
    """A configuration or verification call cannot be resolved."""


class AmbiguousArgumentsError(ConfigurationError):
    """Arguments could be read in more than one way."""


class ArgumentCountError(ConfigurationError):
    """A call pattern does not fit the parameter list of its member."""


class ArgumentNotFoundError(ConfigurationError):
    """A typed argument lookup found no matching parameter."""


class ArgumentIsNotOutOrRefError(ConfigurationError):
    """An indexed write targeted a parameter that is neither out nor ref."""


class UnknownMemberError(ConfigurationError, AttributeError):
    """The member is not part of the substituted surface."""


class UnsupportedMemberError(SubstituteError):
    """The member exists on the surface but cannot be intercepted."""


class VerificationFailure(SubstituteError, AssertionError):
    """
    A received-call assertion did not hold.

    Attributes:
        member (str): Name of the verified member.
        expected (str): Human readable description of the expected count.
        actual (int): Number of matching calls that were recorded.
        near_misses (list): Calls to the member that failed at least one matcher.
    """

    def __init__(self, message: str, *, member: str, expected: str, actual: int, near_misses: list):
        super().__init__(message)
        self.member = member
        self.expected = expected
        self.actual = actual
        self.near_misses = near_misses


class ConfigurationWarning(UserWarning):
    """Configuration was accepted but did something the caller may not expect."""


class PredicateErrorWarning(ConfigurationWarning):
    """An argument predicate raised, so its binding was treated as a non-match."""
