r"""
argtree argument definitions and parsed argument values.

Overview
- Definitions (schema side)
  • ArgKind: FLAG (presence only) or VALUE (consumes exactly one following word).
  • ArgDef: short name, long name (canonical key), description and kind.

- Values (result side)
  • Arg: base of parsed values.
  • Flag: marker recorded for a present flag argument.
  • Value: wraps the string bound to a value argument.

Names are stored without their dashes: ArgDef("n", "name", ...) answers to both
"-n" and "--name", and the parsed value is always keyed by "name".
"""
from collections import namedtuple
from enum import Enum

from .utils import Variant


class ArgKind(Enum):
    """kind of an argument definition; the value is the label used in help."""
    FLAG = "flag"
    VALUE = "value"


class ArgDef(namedtuple("ArgDef", ("short", "long", "kind", "description"))):
    """
    immutable argument definition owned by a command node.

    uniqueness of short/long names inside one node is an authoring invariant;
    lookups resolve ambiguity by definition order.
    """
    __slots__ = ()

    def __new__(cls, short, long, kind=ArgKind.FLAG, description=""):
        if not isinstance(kind, ArgKind):
            raise TypeError(f"{cls.__name__} 'kind' must be an ArgKind")
        return super().__new__(cls, short, long, kind, description)

    @property
    def takes_value(self):
        return self.kind is ArgKind.VALUE

    def matches(self, name, /):
        return name == self.long or name == self.short

    def __rich_repr__(self):
        yield "short", self.short
        yield "long", self.long
        yield "kind", self.kind.value
        yield "description", self.description, ""


class Arg(Variant):
    """Base of every parsed argument value."""
    __slots__ = ()


class Flag(Arg, namedtuple("Flag", ())):
    __slots__ = ()


class Value(Arg, namedtuple("Value", ("text",))):
    __slots__ = ()


__all__ = (
    "ArgKind",
    "ArgDef",
    "Arg",
    "Flag",
    "Value",
)
