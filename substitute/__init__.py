"""
Substitutes for test collaborators: configure results, raise errors, run
callbacks, write out parameters, and verify the calls that were received.
"""
from .__version__ import __version__
from .actions import Callback
from .configs import Configs, configs, make_configs
from .dsl import ResultBuilder, ResultChain, Substitute, WhenBuilder
from .errors import (
    AmbiguousArgumentsError,
    ArgumentCountError,
    ArgumentIsNotOutOrRefError,
    ArgumentNotFoundError,
    ConfigurationError,
    ConfigurationWarning,
    PredicateErrorWarning,
    SubstituteError,
    UnknownMemberError,
    UnsupportedMemberError,
    VerificationFailure,
)
from .factory import make_substitute, substitute_for
from .invocation import Accessor, Invocation, Ref
from .matchers import Arg, Matcher
from .surface import Direction, InOut, Member, MemberKind, Out, Param, Surface


__all__ = [
    "__version__",
    "Accessor",
    "AmbiguousArgumentsError",
    "Arg",
    "ArgumentCountError",
    "ArgumentIsNotOutOrRefError",
    "ArgumentNotFoundError",
    "Callback",
    "ConfigurationError",
    "ConfigurationWarning",
    "Configs",
    "Direction",
    "InOut",
    "Invocation",
    "Matcher",
    "Member",
    "MemberKind",
    "Out",
    "Param",
    "PredicateErrorWarning",
    "Ref",
    "ResultBuilder",
    "ResultChain",
    "Substitute",
    "SubstituteError",
    "Surface",
    "UnknownMemberError",
    "UnsupportedMemberError",
    "VerificationFailure",
    "WhenBuilder",
    "configs",
    "make_configs",
    "make_substitute",
    "substitute_for",
]
