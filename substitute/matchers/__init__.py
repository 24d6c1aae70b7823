from ._arg import Arg
from ._exact import ExactValue
from ._matcher import Matcher
from ._predicate import InRange, Predicate, Regex
from ._wildcard import CaptureSink, InvokeArgument, Wildcard


__all__ = [
    "Arg",
    "CaptureSink",
    "ExactValue",
    "InRange",
    "InvokeArgument",
    "Matcher",
    "Predicate",
    "Regex",
    "Wildcard",
]
