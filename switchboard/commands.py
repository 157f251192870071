r"""
Switchboard command descriptors.

Overview
- Kind: the three recognised argument shapes (FLAG, PATH, PROPERTY).
- Command: immutable descriptor of one recognised argument. It is never built
  directly; use one of the sealed factories below.
  • Flag(name, callback, /, descr="", default=""): presence-only switch, e.g. -v or /v.
  • Path(callback, /, descr="", name="", default=""): positional token passed through verbatim.
  • Property(name, callback, /, descr="", default=""): named switch bound to
    the next token, with an optional default applied when it never appears.

Callbacks
- Every callback receives (output, value): output is the text sink the parser
  writes to, value is "" for flags, the token for paths, and the bound value
  (or the default) for properties.
- Calling a descriptor forwards to its callback: flag(output, "").

Metadata
- Only types are checked (names, descr and default must be strings, callbacks
  callable). Name legality and uniqueness are not validated: duplicated names
  simply resolve to the first declared descriptor at scan time.
- Fields that do not apply to a kind are accepted, type-checked and normalised
  to "": a Flag never has a default, a Path has neither name nor default.

Quick example:
    >>> from switchboard import Flag, Path, Property
    >>> verbose = Flag("v", lambda output, value: print("verbose", file=output), descr="verbose")
    >>> output = Property("o", lambda output, value: ..., descr="output", default="out.txt")
    >>> source = Path(lambda output, value: ..., descr="file")
"""
import functools
import operator
import re
from enum import IntEnum

from .utils import *


class Kind(IntEnum):
    """
    Argument shapes understood by the parser.
    """
    FLAG     = 0
    PATH     = 1
    PROPERTY = 2


class CommandType(type):
    """
    Metaclass that turns descriptor classes into introspectable, sealed factories.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      backed by a private "_name" slot (see mirror()).
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    - Seal classes created with sealed=True against subclassing.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - flag(kind=<Kind.FLAG: 0>, name='v', default='', descr='verbose', ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        if options.get("sealed", False):
            @rename("__init_subclass__")
            def __init_subclass__(cls, **options):  # NOQA: F-841
                raise TypeError(f"type {self.__name__!r} is not an acceptable base type")
            self.__init_subclass__ = classmethod(__init_subclass__)

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate the shared descriptor metadata in place.

    Raises
    - TypeError: when name/descr/default are not strings or callback is not callable.
    """
    for field in ("name", "descr", "default"):
        if not isinstance(metadata[field], str):
            raise TypeError(f"{cls.__typename__} {field!r} must be a string")
    if not callable(metadata["callback"]):
        raise TypeError(f"{cls.__typename__} 'callback' must be callable")


class Command(metaclass=CommandType):
    """
    Immutable descriptor of one recognised argument.

    Instances are created once by the host before scanning and are read-only
    afterwards: every public field is a property without setter, and the slots
    reject any other assignment. Descriptors hash and compare by identity.
    """

    __introspectable__ = (
        "kind",
        "name",
        "default",
        "descr",
        "callback",
    )

    __slots__ = (
        "_kind",
        "_name",
        "_default",
        "_descr",
        "_callback",
    )

    def __new__(cls, *args, **kwargs):
        if cls is Command:
            raise TypeError("use Flag(), Path() or Property() to create a command")
        return super().__new__(cls)

    @classmethod
    def _build(cls, kind, /, **metadata):
        _sanitize_metadata(cls, metadata)

        self = object.__new__(cls)
        object.__setattr__(self, "_kind", kind)
        for name, value in metadata.items():
            object.__setattr__(self, "_" + name, value)
        return self

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__typename__} is immutable")

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__typename__} is immutable")

    def __call__(self, output, value, /):
        return self._callback(output, value)


class Flag(Command, sealed=True):
    """
    Presence-only switch matched by "-name" or "/name"; its callback gets "".
    """
    __slots__ = ()

    def __new__(cls, name, callback, /, descr="", default=""):
        # default does not apply to flags: checked, then dropped
        _sanitize_metadata(cls, {"name": name, "callback": callback, "descr": descr, "default": default})
        return cls._build(Kind.FLAG, name=name, callback=callback, descr=descr, default="")


class Path(Command, sealed=True):
    """
    Positional argument: any token without a "-" or "/" prefix, passed verbatim.

    It is recommended to declare a single Path; when several are declared only
    the first one ever matches.
    """
    __slots__ = ()

    def __new__(cls, callback, /, descr="", name="", default=""):
        # name and default do not apply to paths: checked, then dropped
        _sanitize_metadata(cls, {"name": name, "callback": callback, "descr": descr, "default": default})
        return cls._build(Kind.PATH, name="", callback=callback, descr=descr, default="")


class Property(Command, sealed=True):
    """
    Named switch whose value is the token that follows it.

    A non-blank default makes the property always trigger: when "-name" never
    appears, the callback runs once at the end of the scan with the default.
    """
    __slots__ = ()

    def __new__(cls, name, callback, /, descr="", default=""):
        return cls._build(Kind.PROPERTY, name=name, callback=callback, descr=descr, default=default)


__all__ = (
    "Kind",
    "Command",
    "Flag",
    "Path",
    "Property",
)

# Not part of the public API.
del CommandType
