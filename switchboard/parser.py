"""
Switchboard parser: match raw arguments against declared commands.

What this module provides
- Parser: scans an argument sequence against an ordered collection of
  commands (Flag, Path, Property), invoking the callback of the first
  declared command that matches each token.
- Parser.help(): fixed-format listing of the declared flags and properties.
- invoke(commands, args): build a Parser and scan in one call.

Scan rules
- Blank (empty or whitespace-only) tokens are skipped.
- A token starting with "-" or "/" is a switch; the rest of the token is the
  name looked up among flags and properties (exact, case-sensitive).
- Any other token is positional and goes to the first declared Path.
- A matched Property consumes the following token verbatim as its value.
- Commands are tried in declaration order and the first hit wins; nothing
  after it is tried for that token.
- An unmatched "-help", "/help", "-?" or "/?" renders the help listing.
- Properties with a non-blank default that never matched run once, after the
  whole sequence was consumed, with their default.

Faults
- A Property with no following token raises MissingValueError; no callback
  runs for it and defaults are not applied.
- Unmatched switches and positionals are reported as warnings (or raised as
  errors when strict=True) and otherwise ignored.
- Exceptions raised by callbacks propagate unchanged and abort the scan.

Quick start
    from switchboard import Flag, Path, Property, invoke

    invoke([
        Flag("v", lambda output, value: print("verbose", file=output), "verbose output"),
        Property("o", lambda output, value: print("output:", value, file=output), "output file", "out.txt"),
        Path(lambda output, value: print("input:", value, file=output), "input file"),
    ], ["-v", "data.csv"])
"""
import difflib
import sys
from collections.abc import Iterable

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .commands import Command, Kind
from .faults import *
from .utils import *

# Characters that mark a token as a switch.
PREFIXES = ("-", "/")

# Switch names answered with the help listing when no command claims them.
HELPERS = ("help", "?")


class Parser:
    """
    Argument scanner bound to an ordered collection of commands.

    Parameters
    - commands: Iterable[Command]
      Declared commands; their order is the match priority.
    - stdout: text stream (optional)
      Sink handed to every callback and used for the help listing. Defaults
      to sys.stdout, looked up at scan time.
    - shell: bool
      Render faults on stderr with rich (warnings are then not emitted
      through the warnings module).
    - colorful: bool
      Style fault renderings and the fancy help listing.
    - fancy: bool
      Render faults and the help listing inside rich panels.
    - strict: bool
      Raise unmatched switches/positionals as errors instead of warnings.

    Notes
    - A Parser keeps no state between scans; pending defaults live only for
      the duration of one check() call.
    """

    commands = mirror("commands")
    shell = mirror("shell")
    colorful = mirror("colorful")
    fancy = mirror("fancy")
    strict = mirror("strict")

    def __init__(self, commands, /, stdout=Unset, *, shell=False, colorful=True, fancy=False, strict=False):
        if not isinstance(commands, Iterable):
            raise TypeError("Parser() argument must be an iterable of commands")
        commands = tuple(commands)
        for command in commands:
            if not isinstance(command, Command):
                raise TypeError("Parser() argument must be an iterable of commands")

        self._commands = commands
        self._stdout = stdout
        self._shell = bool(shell)
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._strict = bool(strict)

    @property
    def stdout(self):
        """
        The output sink: the stream given at construction, else sys.stdout.
        """
        return coalesce(self._stdout, sys.stdout)

    def __rich_repr__(self):
        yield "commands", self.commands
        yield "shell", self.shell
        yield "colorful", self.colorful
        yield "fancy", self.fancy
        yield "strict", self.strict

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this parser's runtime options merged in.
        """
        trigger(fault, **options, shell=self.shell, fancy=self.fancy, colorful=self.colorful)

    def help(self):
        """
        Write the help listing to the output sink.

        Plain layout (<TAB> stands for a literal tab, one entry per line):
            Available flags:
            <TAB>help<TAB>Displays this help text
            <TAB>?<TAB>Displays this help text
            <TAB><flag><TAB><descr>
            Available Properties:
            <TAB><property><TAB><descr>
            <TAB><property>(=<default>)<TAB><descr>

        Flags and properties keep their declaration order; paths are not
        listed. With fancy=True the same entries are rendered as rich tables.
        """
        flags = [("help", "Displays this help text"), ("?", "Displays this help text")]
        properties = []

        for command in self.commands:
            if command.kind is Kind.FLAG:
                flags.append((command.name, command.descr))
            elif command.kind is Kind.PROPERTY:
                if command.default.strip():
                    properties.append((f"{command.name}(={command.default})", command.descr))
                else:
                    properties.append((command.name, command.descr))

        if self.fancy:
            return self._fancy_help(flags, properties)

        output = self.stdout
        output.write("Available flags:\n")
        for name, descr in flags:
            output.write(f"\t{name}\t{descr}\n")
        output.write("Available Properties:\n")
        for name, descr in properties:
            output.write(f"\t{name}\t{descr}\n")

    def _fancy_help(self, flags, properties):
        """
        Render the help entries as rich tables inside a panel.

        Palette keys
        - section-label, flag-name, property-name, description, panel-title
        Define a mapping named __styles__ in __main__ to override any entry.
        """
        console = Console(file=self.stdout, highlight=False, no_color=not self.colorful)
        styles = {
            "section-label": "bold #FFFFFF",  # Pure white headers
            "flag-name": "bold #22C55E",  # GREEN for flags
            "property-name": "bold #00E6FF",  # CYAN for properties
            "description": "#9CA3AF",  # Muted gray
            "panel-title": "bold #FF4D94",  # Magenta branding
        } | getattr(__import__("__main__"), "__styles__", {})

        def styler(style):
            return styles.get(style, "") if self.colorful else ""

        def table(entries, style):
            table = Table(box=None, show_header=False, padding=(0, 2, 0, 0))
            table.add_column(style=styler(style), no_wrap=True)
            table.add_column(style=styler("description"))
            for name, descr in entries:
                table.add_row(Text(name), Text(descr))
            return table

        console.print(Panel(
            Group(
                Text("Available flags:", styler("section-label")),
                table(flags, "flag-name"),
                Text("Available Properties:", styler("section-label")),
                table(properties, "property-name"),
            ),
            title=Text("help", styler("panel-title")),
            title_align="left",
        ))

    def check(self, args=Unset, /):
        """
        Scan the arguments and run the matching callbacks.

        Parameters
        - args:
          • Unset: read tokens from sys.argv[1:].
          • Iterable[str]: tokens, used verbatim (no splitting or quoting rules).

        Raises
        - TypeError: when args is a bare string or holds non-string items.
        - MissingValueError: when a property is the last token.
        - UnknownSwitchError / UnexpectedPathError: only when strict=True.
        - Any exception raised by a callback, unchanged.
        """
        tokens = _tokenize(args)
        output = self.stdout

        # Default-bearing properties not matched yet (insertion-ordered, keyed by identity).
        pending = dict.fromkeys(
            command for command in self.commands if command.kind is Kind.PROPERTY and command.default.strip()
        )

        cursor = iter(enumerate(tokens, start=1))
        for index, token in cursor:
            if not token.strip():
                continue

            prefixed = token.startswith(PREFIXES)
            name = token[1:] if prefixed else Unset

            for command in self.commands:
                match command.kind:
                    case Kind.FLAG:
                        if not prefixed or name != command.name:
                            continue
                        command(output, "")
                    case Kind.PATH:
                        if prefixed:
                            continue
                        command(output, token)
                    case Kind.PROPERTY:
                        if not prefixed or name != command.name:
                            continue
                        try:
                            _, value = next(cursor)
                        except StopIteration:
                            self.trigger(MissingValueError(
                                "property %r at %s position is missing its value" % (token, ordinal(index)),
                                title="missing value",
                                code=FaultCode.MISSING_VALUE,
                                input=token,
                                index=index,
                                command=command,
                                hint="add a value right after it: %s <value>" % token,
                                docs=getdoc(FaultCode.MISSING_VALUE),
                            ))
                        pending.pop(command, None)
                        command(output, value)
                    case _:
                        raise RuntimeError("unexpected command kind")
                break
            else:
                if prefixed and name in HELPERS:
                    self.help()
                elif prefixed:
                    self._unknown_switch(token, name, index)
                else:
                    self._unexpected_path(token, index)

        for command in pending:
            command(output, command.default)

    def _unknown_switch(self, token, name, index):
        names = [command.name for command in self.commands if command.kind is not Kind.PATH]
        suggestions = difflib.get_close_matches(name, names, 5)
        try:
            hint = "did you mean %r? you can also run '%shelp' to see available flags and properties" % (
                token[0] + suggestions[0], token[0]
            )
        except IndexError:
            hint = "run '%shelp' to see available flags and properties" % token[0]

        fault = UnknownSwitchError if self.strict else UnknownSwitchWarning
        self.trigger(fault(
            "unknown switch %r at %s position" % (token, ordinal(index)),
            title="unknown switch",
            code=FaultCode.UNKNOWN_SWITCH,
            input=token,
            index=index,
            suggestions=suggestions,
            hint=hint,
            docs=getdoc(FaultCode.UNKNOWN_SWITCH),
        ))

    def _unexpected_path(self, token, index):
        fault = UnexpectedPathError if self.strict else UnexpectedPathWarning
        self.trigger(fault(
            "unexpected positional argument %r at %s position" % (token, ordinal(index)),
            title="unexpected positional",
            code=FaultCode.UNEXPECTED_PATH,
            input=token,
            index=index,
            hint="remove this extra value; no positional argument is accepted",
            docs=getdoc(FaultCode.UNEXPECTED_PATH),
        ))


def _tokenize(args, /):
    """
    Internal: normalize the check() argument into a list of tokens.
    """
    if args is Unset:
        return sys.argv[1:]
    if isinstance(args, str) or not isinstance(args, Iterable):
        raise TypeError("check() argument must be an iterable of strings")
    tokens = list(args)
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("check() argument must be an iterable of strings")
    return tokens


def invoke(commands, args=Unset, /, stdout=Unset, **options):
    """
    Convenience runner: Parser(commands, stdout, **options).check(args).

    Parameters
    - commands: Iterable[Command], in match-priority order.
    - args: Unset (sys.argv[1:]) or an iterable of string tokens.
    - stdout: output sink (defaults to sys.stdout).
    - options: shell, colorful, fancy, strict (see Parser).

    Returns
    - The Parser used for the scan, so help() can be rendered again.
    """
    parser = Parser(commands, stdout, **options)
    parser.check(args)
    return parser


__all__ = (
    "Parser",
    "invoke",
)
