"""
argtree lexical layer: classify raw argv strings into tokens.

Token grammar
- "--"            → EndOfOptions; every later string is a Word, verbatim.
- "--key=value"   → LongNameWithValue("key", "value")  (split on the first '=')
- "--key"         → LongName("key")
- "-key"          → ShortName("key")  (one atomic name, never a cluster like -abc)
- anything else   → Word(text)

The tokenizer knows nothing about the schema and never fails: one token is
produced per raw string, in order.
"""
from collections import namedtuple

from .utils import Variant


class Token(Variant):
    """Base of every token case."""
    __slots__ = ()


class ShortName(Token, namedtuple("ShortName", ("name",))):
    __slots__ = ()


class LongName(Token, namedtuple("LongName", ("name",))):
    __slots__ = ()


class LongNameWithValue(Token, namedtuple("LongNameWithValue", ("name", "value"))):
    __slots__ = ()


class EndOfOptions(Token, namedtuple("EndOfOptions", ())):
    __slots__ = ()


class Word(Token, namedtuple("Word", ("text",))):
    __slots__ = ()


def tokenize(arguments, /):
    """
    convert raw argument strings into a list of tokens of the same length.

    the only state is a one-way latch: once "--" has been seen, every
    following string becomes a Word even when it looks like an option.
    """
    tokens = []
    positional = False
    for argument in arguments:
        if positional:
            tokens.append(Word(argument))
        elif argument == "--":
            tokens.append(EndOfOptions())
            positional = True
        elif argument.startswith("--"):
            key, separator, value = argument[2:].partition("=")
            if separator:
                tokens.append(LongNameWithValue(key, value))
            else:
                tokens.append(LongName(key))
        elif argument.startswith("-"):
            tokens.append(ShortName(argument[1:]))
        else:
            tokens.append(Word(argument))
    return tokens


__all__ = (
    "Token",
    "ShortName",
    "LongName",
    "LongNameWithValue",
    "EndOfOptions",
    "Word",
    "tokenize",
)
