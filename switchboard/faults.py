"""
Switchboard faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  raised while scanning arguments.
- CommandException / CommandWarning: base types that carry message + options and
  know how to render themselves in a short, lowercased, actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Policy
- Exceptions are always raised. In shell mode they are rendered on stderr first.
- Warnings never stop a scan. Outside shell mode they go through warnings.warn,
  in shell mode they are only rendered on stderr.

Host hooks (optional attributes of __main__)
- __prog__: program label shown in fault headers.
- __codes__: mapping FaultCode -> label used instead of the numeric value.
- __styles__: palette overrides for the renderers.
- __docs__: mapping FaultCode -> short documentation string (see getdoc()).
"""
import copy
import inspect
import os.path
import sys
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the scanner (stable identifiers).

    grouping
    - switches (1111x): UNKNOWN_SWITCH, MISSING_VALUE
    - positionals (1112x): UNEXPECTED_PATH

    the same code is used whether the issue surfaces as an error (strict mode)
    or as a warning (lenient mode).
    """
    # --- switch errors (11xxx) ---
    UNKNOWN_SWITCH              = 11112
    MISSING_VALUE               = 11117

    # --- positional errors (11xxx) ---
    UNEXPECTED_PATH             = 11121

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, /):
    """
    Internal: build the rich renderable shared by exceptions and warnings.

    The palette maps the generic keys (prog-name, code, title, message,
    hint-arrow, hint, docs-mark, docs) to styles and is merged with
    __styles__ from __main__. The docs line only shows when a fault carries
    a non-empty "docs" option.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", False)
    fancy = options.get("fancy", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), styles[style])

    prog = getattr(main, "__prog__", os.path.basename(sys.argv[0]) or "switchboard")
    code = options.get("code")

    header = Text.assemble(
        "[ ",
        text(prog, "prog-name"),
        " — ",
        text(code.normalize() if code is not None else "", "code"),
        " | ",
        text(options.get("title", "").title(), "title"),
        " ]"
    )
    message = text(fault.message, "message")
    hint = Text.assemble(text(" → ", "hint-arrow"), text(options.get("hint", ""), "hint"))

    body = [message, hint]
    if docs := options.get("docs"):
        body.append(Text.assemble(text(" ≡ ", "docs-mark"), text(docs, "docs")))

    if fancy:
        return Panel(Group(*body), title=header, title_align="left")

    return Group(header, *body)


class CommandException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # friendly pinky title
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
            "docs-mark": "#00E5FF dim",  # dim cyan docs marker
            "docs": "underline #00E5FF dim",  # docs line
        })

    def __trigger__(self) -> None:
        if self.options.get("shell", False):
            console.print(self)
        raise self from None

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MissingValueError(CommandException): ...
class UnknownSwitchError(CommandException): ...
class UnexpectedPathError(CommandException): ...


class CommandWarning(ABC, Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "title": "bold #FFC2E0",  # softer pinky title for warnings
            "message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
            "docs-mark": "#FFB400 dim",  # dim amber docs marker
            "docs": "underline #FFB400 dim",  # docs line
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnknownSwitchWarning(CommandWarning): ...
class UnexpectedPathWarning(CommandWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - exceptions always propagate; warnings are emitted or rendered.

    typical options
    - shell, fancy, colorful, title, code, hint, docs, and any other context the
      reporter may want to show (e.g., input/index/suggestions).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "CommandException",
    "MissingValueError",
    "UnknownSwitchError",
    "UnexpectedPathError",
    "CommandWarning",
    "UnknownSwitchWarning",
    "UnexpectedPathWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
