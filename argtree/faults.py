"""
argtree faults (parse errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every parse outcome that
  stops the parser. Codes are grouped by domain to keep logs/searches predictable.
- ParseError: base exception; every case carries the command path reached when
  parsing stopped, and (except HelpRequested) the offending name.
- trigger(): the caller policy. Outside shell mode faults are raised; in shell
  mode they are rendered through rich and the process exits.

Cases
- UnknownCommandError      — a word names no subcommand (strict routing only).
- UnknownArgError          — -x / --x / --x=v names no argument of the node.
- MissingArgValueError     — a value argument is last, or followed by a non-word.
- UnexpectedArgValueError  — --x=v gives a value to a flag argument.
- MissingValueError        — a command requires positional input and got none.
- HelpRequested            — "help", -h or --help; not a failure, a control signal.

Host hooks (read from __main__ when present)
- __styles__: palette overrides for the fault renderer.
- __codes__:  FaultCode → label mapping used by FaultCode.normalize().
- __prog__:   program name shown in fault headers (defaults to the root name).
"""
import sys
from collections import defaultdict
from enum import IntEnum

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping
    - control (1000x)
      • HELP_REQUESTED
    - routing (1110x)
      • UNKNOWN_COMMAND
    - arguments (1111x)
      • UNKNOWN_ARG, UNEXPECTED_ARG_VALUE, MISSING_ARG_VALUE
    - positionals (1112x)
      • MISSING_VALUE
    """
    # --- control (10xxx) ---
    HELP_REQUESTED       = 10001

    # --- routing errors (11xxx) ---
    UNKNOWN_COMMAND      = 11101

    # --- argument errors (11xxx) ---
    UNKNOWN_ARG          = 11112
    UNEXPECTED_ARG_VALUE = 11113
    MISSING_ARG_VALUE    = 11117

    # --- positional errors (11xxx) ---
    MISSING_VALUE        = 11125

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParseError(Exception):
    """
    base of every parse fault.

    attributes
    - path: tuple of command names from the root to the node being parsed.
    - name: the offending command/argument name (Unset for HelpRequested).
    - suggestions: close matches offered in the hint, if any.
    """
    title = "parse error"
    code = None
    template = "Parse error at '{route}'"

    def __init__(self, path, name=Unset, /, *, suggestions=()):
        self.path = tuple(path)
        self.name = name
        self.suggestions = tuple(suggestions)
        super().__init__(str(self))

    @property
    def route(self):
        return " ".join(self.path)

    @property
    def hint(self):
        return "try '%s --help' to see the available arguments and subcommands" % self.route

    def __str__(self):
        return self.template.format(name=coalesce(self.name, ""), route=self.route)

    def __repr__(self):
        if self.name is Unset:
            return f"{type(self).__name__}(path={self.path!r})"
        return f"{type(self).__name__}(path={self.path!r}, name={self.name!r})"

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return (self.path, self.name) == (other.path, other.name)

    def __hash__(self):
        return hash((type(self).__name__, self.path, self.name))

    def __reduce__(self):
        args = (self.path,) if self.name is Unset else (self.path, self.name)
        return type(self), args, {"suggestions": self.suggestions}

    def render(self, *, colorful=False, fancy=False, width=None):
        """
        build a rich renderable: a "[ prog — code | title ]" header, the message and a hint.
        """
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        prog = text(getattr(main, "__prog__", self.path[0] if self.path else "?"), "prog-name")
        code = self.code.normalize() if self.code is not None else "-"

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code, "code"),
            " | ",
            text(self.title.title(), "error-title"),
            " ]"
        )
        message = text(str(self), "error-message")
        hint = Text.assemble(text(" → ", "hint-arrow"), text(self.hint, "hint"))

        if fancy:
            return Panel(Group(message, hint), title=header, title_align="left", width=width)

        return Group(header, message, hint)

    def __rich__(self):
        return self.render()


class UnknownCommandError(ParseError):
    title = "unknown command"
    code = FaultCode.UNKNOWN_COMMAND
    template = "Unknown command '{name}' at '{route}'"

    @property
    def hint(self):
        if self.suggestions:
            return "did you mean %r? you can also run '%s --help' to see available commands" % (
                self.suggestions[0], self.route
            )
        return "run '%s --help' to see available commands" % self.route


class UnknownArgError(ParseError):
    title = "unknown argument"
    code = FaultCode.UNKNOWN_ARG
    template = "Unknown argument '{name}' at '{route}'"

    @property
    def hint(self):
        if self.suggestions:
            return "did you mean %r? you can also run '%s --help' to see all arguments" % (
                self.suggestions[0], self.route
            )
        return "try '%s --help' to see all available arguments" % self.route


class MissingArgValueError(ParseError):
    title = "missing argument value"
    code = FaultCode.MISSING_ARG_VALUE
    template = "Missing value for argument '{name}' at '{route}'"

    @property
    def hint(self):
        return "put a value right after %r; options and '--' do not count as values" % self.name


class UnexpectedArgValueError(ParseError):
    title = "flag cannot take a value"
    code = FaultCode.UNEXPECTED_ARG_VALUE
    template = "Unexpected value for flag argument '{name}' at '{route}'"

    @property
    def hint(self):
        return "remove everything from '=' (for example: --%s)" % self.name


class MissingValueError(ParseError):
    title = "missing value"
    code = FaultCode.MISSING_VALUE
    template = "Missing value for command '{name}' at '{route}'"

    @property
    def hint(self):
        return "add the missing %s or run '%s --help' to see the expected usage" % (self.name, self.route)


class HelpRequested(ParseError):
    title = "help requested"
    code = FaultCode.HELP_REQUESTED
    template = "Help requested at '{route}'"

    def __init__(self, path, /):
        super().__init__(path)


def trigger(fault, root, /, *, shell=False, colorful=False, fancy=False, output=Unset):
    """
    surface a fault raised while parsing against `root`.

    policy
    - shell=False: the fault is re-raised unchanged; the caller owns it.
    - shell=True and HelpRequested: help for fault.path goes to stdout, exit status 0.
    - shell=True otherwise: the fault and help for fault.path go to stderr, exit status 1.

    `root` is the CommandNode the parse ran against; only its render_help()
    is used. `output` replaces both consoles (useful for capturing).
    """
    if not isinstance(fault, ParseError):
        raise TypeError("trigger() argument must be a parse error")
    if not shell:
        raise fault

    if isinstance(fault, HelpRequested):
        out = coalesce(output, Console())
        help = root.render_help(fault.path, colorful=colorful)
        help.rstrip()
        out.print(help)
        sys.exit(0)

    err = coalesce(output, console)
    width = int(err.width * 2 / 3) if fancy else None
    err.print(fault.render(colorful=colorful, fancy=fancy, width=width))
    help = root.render_help(fault.path, colorful=colorful)
    help.rstrip()
    err.print(help)
    sys.exit(1)


__all__ = (
    "FaultCode",
    "ParseError",
    "UnknownCommandError",
    "UnknownArgError",
    "MissingArgValueError",
    "UnexpectedArgValueError",
    "MissingValueError",
    "HelpRequested",
    "trigger",
)
