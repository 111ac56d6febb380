"""
argtree command layer: declare a command tree, parse argv against it, render help.

What this module provides
- CommandNode: one node of the static schema, with:
  • a name and a description,
  • ordered argument definitions (ArgDef, flag or value kind),
  • ordered child nodes (subcommands).
  Nodes are assembled once through a fluent builder (add_arg / add_subcommand)
  and only read afterwards.

- Command: the parse result handed to the dispatch layer:
  • path of node names from the root to the deepest node reached,
  • named arguments keyed by their canonical long name,
  • positional words in order.

- invoke(root, prompt): parse from sys.argv, a shell-like string or an
  iterable of strings, routing faults through faults.trigger().

Quick start
    from argtree import CommandNode, ArgKind, invoke

    root = (
        CommandNode("wsm", "workspace multiplexer")
        .add_subcommand(
            CommandNode("add", "add a workspace")
            .add_arg("n", "name", ArgKind.VALUE, "custom workspace name")
        )
    )

    command = invoke(root, "wsm add --name=notes ~/notes")
    command.route               # ("add",)
    command.get_value("name")   # "notes"
    command.positional          # ("~/notes",)

Parsing rules (per node, left to right)
- after "--" every word is positional.
- the word "help", and -h/--help, stop the parse with HelpRequested.
- a subcommand is only recognized as the very first token handled by a node;
  any other token closes that window for the rest of the node.
- -x/--x name an argument: flags are recorded, value arguments take the next word.
- --x=v gives an inline value (rejected for flags).
- remaining words are positional.
The first fault wins; there is no backtracking.
"""
import difflib
import shlex
import sys
from collections.abc import Iterable

from rich.text import Text

from .arguments import ArgKind, ArgDef, Flag, Value
from .faults import *
from .tokens import EndOfOptions, LongName, LongNameWithValue, ShortName, Word, tokenize
from .utils import Unset, mirror


class CommandNode:
    """
    Static schema node: a named command with arguments and subcommands.

    Responsibilities
    - Composition: add_arg()/add_subcommand() return the node itself so a whole
      tree can be written as one chained expression.
    - Lookup: find_subcommand()/find_arg() by exact name, first match wins.
    - Parsing: parse() runs the recursive descent starting at this node.
    - Rendering: help()/render_help() describe any node addressed by a path.

    Notes
    - No validation of duplicate names happens at build time; keeping short and
      long names unique within a node is up to the author of the schema.
    - arguments/children are exposed as tuples so parsing can never mutate the tree.
    """

    name = mirror("name")
    description = mirror("description")
    arguments = mirror("arguments")
    children = mirror("children")

    def __init__(self, name, description="", /):
        if not isinstance(name, str):
            raise TypeError(f"{type(self).__name__} 'name' must be a string")
        if not isinstance(description, str):
            raise TypeError(f"{type(self).__name__} 'description' must be a string")
        self._name = name
        self._description = description
        self._arguments = []
        self._children = []

    def add_arg(self, short, long, kind=ArgKind.FLAG, description=""):
        """append an argument definition answering to -short and --long; returns self."""
        self._arguments.append(ArgDef(short, long, kind, description))
        return self

    def add_subcommand(self, subcommand, /):
        """append a child node; returns self."""
        if not isinstance(subcommand, CommandNode):
            raise TypeError("add_subcommand() argument must be a command node")
        self._children.append(subcommand)
        return self

    def find_subcommand(self, name, /):
        return next((child for child in self._children if child._name == name), None)

    def find_arg(self, name, /):
        return next((argument for argument in self._arguments if argument.matches(name)), None)

    def resolve(self, path, /):
        """
        return the node addressed by `path`, or None.

        each step consumes the head of the path and matches it against the
        current node's own name, then continues with the tail in the child
        named by the next element. an empty path addresses nothing.
        """
        head, *tail = path or (None,)
        if head != self._name:
            return None
        if not tail:
            return self
        child = self.find_subcommand(tail[0])
        if child is None:
            return None
        return child.resolve(tail)

    def parse(self, argv, /, *, strict=False):
        """
        parse raw arguments against this node and return a Command.

        argv
        - the full argument list, including the leading program-name token;
          that token stands for this node and is never matched against it.

        strict
        - when True, a first word that names no subcommand of a node with
          subcommands raises UnknownCommandError instead of becoming positional.

        Raises
        - ParseError subclasses (HelpRequested included) on the first fault.
        """
        return self._parseargs(tokenize(argv), (), index=0, strict=strict)

    def _parseargs(self, tokens, path, *, index, strict):
        # `index` points at the token holding this node's name; the cursor is
        # local and moves forward only. a matched subcommand continues from the
        # token that named it and its outcome becomes ours.
        path = (*path, self._name)
        args = {}
        positional = []
        routable = bool(self._children)
        literal = False

        index += 1
        while index < len(tokens):
            token = tokens[index]

            if literal:
                if isinstance(token, Word):
                    positional.append(token.text)
                index += 1
                continue

            if isinstance(token, EndOfOptions):
                literal = True
                index += 1
                continue

            if token == Word("help"):
                raise HelpRequested(path)

            if routable and isinstance(token, Word):
                child = self.find_subcommand(token.text)
                if child is not None:
                    return child._parseargs(tokens, path, index=index, strict=strict)
                if strict:
                    raise UnknownCommandError(path, token.text, suggestions=difflib.get_close_matches(
                        token.text, [child._name for child in self._children], 5
                    ))

            routable = False

            match token:
                case ShortName(name) | LongName(name):
                    if name in ("help", "h"):
                        raise HelpRequested(path)
                    argument = self._getarg(name, path)
                    if argument.takes_value:
                        following = tokens[index + 1] if index + 1 < len(tokens) else None
                        if not isinstance(following, Word):
                            raise MissingArgValueError(path, name)
                        args[argument.long] = Value(following.text)
                        index += 1
                    else:
                        args[argument.long] = Flag()
                case LongNameWithValue(name, value):
                    argument = self._getarg(name, path)
                    if not argument.takes_value:
                        raise UnexpectedArgValueError(path, name)
                    args[argument.long] = Value(value)
                case Word(text):
                    positional.append(text)

            index += 1

        return Command(path, args, positional)

    def _getarg(self, name, path):
        argument = self.find_arg(name)
        if argument is None:
            names = [spelling for argument in self._arguments for spelling in (argument.long, argument.short)]
            raise UnknownArgError(path, name, suggestions=difflib.get_close_matches(name, names, 5))
        return argument

    def render_help(self, path, /, *, colorful=False):
        """
        Render help for the node addressed by `path` as rich Text.

        Layout
            Command: <name>
            <description>
            Arguments:
              -<short>, --<long>: <description> (flag|value)

            Subcommands:
              <name>: <description>

        Palette keys
        - program-name, description-section, group-label
        - flag-name, option-name, argument-description, kind
        - children, children-description, unknown

        Customization
        - Define a mapping named __styles__ in __main__ to override any palette entry.
        - When colorful is False, no style is applied and the plain text is unchanged.
        """
        styles = {
            "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "description-section": "italic #A3A3A3",  # Neutral gray
            "group-label": "bold #FFFFFF",  # Pure white headers
            "flag-name": "bold #22C55E",  # GREEN for flags
            "option-name": "bold #00E6FF",  # CYAN for value arguments
            "argument-description": "#9CA3AF",  # Muted gray
            "kind": "#FFD600 dim",  # AMBER kind label
            "children": "bold #36C5F0",  # Sky-blue subcommands
            "children-description": "#9CA3AF",
            "unknown": "bold #EF4444",
        } | getattr(__import__("__main__"), "__styles__", {})

        def styler(style):
            return styles.get(style, "") if colorful else ""

        node = self.resolve(path)
        if node is None:
            return Text("Unknown command: %s" % " ".join(path), styler("unknown"))

        help = Text()
        help.append("Command: ").append(node._name, styler("program-name")).append("\n")
        help.append(node._description, styler("description-section")).append("\n")

        help.append("Arguments:", styler("group-label")).append("\n")
        for argument in node._arguments:
            style = styler("option-name" if argument.takes_value else "flag-name")
            help.append("  ")
            help.append("-" + argument.short, style).append(", ").append("--" + argument.long, style)
            help.append(": ").append(argument.description, styler("argument-description"))
            help.append(" (").append(argument.kind.value, styler("kind")).append(")").append("\n")

        help.append("\n").append("Subcommands:", styler("group-label")).append("\n")
        for child in node._children:
            help.append("  ").append(child._name, styler("children"))
            help.append(": ").append(child._description, styler("children-description")).append("\n")

        return help

    def help(self, path, /):
        """plain-text help for the node addressed by `path` (see render_help)."""
        return self.render_help(path).plain

    def __repr__(self):
        return f"{type(self).__name__}({self._name!r})"

    def __rich_repr__(self):
        yield "name", self._name
        yield "description", self._description, ""
        yield "arguments", self.arguments, ()
        yield "children", self.children, ()


class Command:
    """
    Result of a successful parse.

    Attributes
    - path: names of the nodes descended into, root first.
    - route: path without the root name (what a dispatcher usually matches on).
    - args: read-only mapping from an argument's long name to Flag() or Value(text).
    - positional: the positional words, in order.
    """

    path = mirror("path")
    args = mirror("args")
    positional = mirror("positional")

    def __init__(self, path, args, positional):
        self._path = tuple(path)
        self._args = dict(args)
        self._positional = tuple(positional)

    @property
    def route(self):
        return self._path[1:]

    def get_arg(self, long, /):
        return self._args.get(long)

    def has_arg(self, long, /):
        return long in self._args

    def get_value(self, long, default=None, /):
        argument = self._args.get(long)
        return argument.text if isinstance(argument, Value) else default

    @property
    def positional_string(self):
        """
        positional words joined by single spaces.

        lossy: ["a b"] and ["a", "b"] give the same string; prefer `positional`
        unless a single path-like string is wanted.
        """
        return " ".join(self._positional)

    def require_positional(self, name="value", /):
        """
        return positional_string, raising MissingValueError when nothing was given.

        `name` labels what was expected (e.g. "workspace path") in the message.
        """
        if not self._positional:
            raise MissingValueError(self._path, name)
        return self.positional_string

    def __eq__(self, other):
        if not isinstance(other, Command):
            return NotImplemented
        return (self._path, self._args, self._positional) == (other._path, other._args, other._positional)

    __hash__ = None

    def __repr__(self):
        return f"{type(self).__name__}(path={self._path!r}, args={self._args!r}, positional={self._positional!r})"

    def __rich_repr__(self):
        yield "path", self._path
        yield "args", self._args, {}
        yield "positional", self._positional, ()


def invoke(root, prompt=Unset, /, *, strict=False, shell=True, colorful=False, fancy=False, output=Unset):
    """
    Parse a prompt against `root` and return the Command.

    Parameters
    - prompt:
      • Unset: use sys.argv (its first item stands for the root).
      • str: shell-like string, split with shlex.split; include the program name.
      • Iterable[str]: pre-tokenized argv; include the program name.
    - strict: see CommandNode.parse().
    - shell, colorful, fancy, output: forwarded to faults.trigger().

    Behavior
    - With shell=True (the default) faults are rendered and the process exits
      (status 0 for help, 1 otherwise); with shell=False they are raised.

    Raises
    - TypeError: when root is not a CommandNode or prompt is not Unset/str/Iterable[str].
    """
    if not isinstance(root, CommandNode):
        raise TypeError("invoke() first argument must be a command node")

    if prompt is Unset:
        argv = list(sys.argv)
    elif isinstance(prompt, str):
        argv = shlex.split(prompt)
    elif isinstance(prompt, Iterable):
        argv = list(prompt)
        if not all(isinstance(item, str) for item in argv):
            raise TypeError("invoke() argument must be a string or an iterable of strings")
    else:
        raise TypeError("invoke() argument must be a string or an iterable of strings")

    try:
        return root.parse(argv, strict=strict)
    except ParseError as fault:
        trigger(fault, root, shell=shell, colorful=colorful, fancy=fancy, output=output)


__all__ = (
    # Public API surface for consumers of argtree.commands.
    "CommandNode",
    "Command",
    "invoke",
)
