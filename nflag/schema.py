"""
nflag declarations: flag schemas and parser configuration.

Overview
- FlagSchema: the declaration of a single flag (type, default, descr, required,
  allow_nothing). A schema built by the caller holds the raw input; the
  registry validates it and stores a normalized copy (see Registry.register).
- Config: process-level parser configuration (flag prefix, auto-help on empty
  arguments, program description, program name, colors).

Both are immutable records: fields are exposed as read-only properties and
copies with changes are produced through copy.replace().

Metadata (sanitized on construction)
- FlagSchema
  • type: anything; validated at registration (unsupported types are a
    registration fault, not a construction error).
  • default: any value or Unset (Unset means "use the kind's zero value").
  • descr: str, trimmed (may be empty).
  • required / allow_nothing: bool.
- Config
  • prefix: non-empty str without '='.
  • show_help: bool.
  • description: str, trimmed (may be empty).
  • program: Unset | non-empty str.
  • colorful: bool.
"""
import builtins
import functools
import operator
import re

from .utils import *


class RecordType(type):
    """
    Metaclass for immutable, introspectable records.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      backed by "_<name>" (see mirror()).
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    - Provide __replace__ so copy.replace() rebuilds the record through its
      constructor (changes are sanitized like the original input).

    Conventions
    - __typename__ is derived from the class name (camel-case split with
      hyphens) and used in messages.
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
            Return a concise, stable representation, e.g. flag-schema(type='int', ...).
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

        @rename("__replace__")
        def __replace__(self, /, **overrides):
            """
            Rebuild the record with the given fields replaced (copy.replace protocol).
            """
            if unknown := overrides.keys() - set(type(self).__introspectable__):
                raise TypeError(f"{type(self).__typename__} got unexpected fields: {", ".join(sorted(unknown))}")
            return type(self)(**{
                name: getattr(self, "_" + name) for name in type(self).__introspectable__
            } | overrides)
        self.__replace__ = __replace__

        return self


def _sanitize_string(cls, name, value, /, *, empty=True):
    if not isinstance(value, str):
        raise TypeError(f"{cls.__typename__} {name!r} must be a string")
    value = value.strip()
    if not empty and not value:
        raise ValueError(f"{cls.__typename__} {name!r} cannot be empty")
    return value


def _sanitize_boolean(cls, name, value, /):
    if not isinstance(value, bool):
        raise TypeError(f"{cls.__typename__} {name!r} must be a boolean")
    return value


class FlagSchema(metaclass=RecordType):
    """
    Declaration of a flag.

    Parameters
    - type: str | type
      "bool", "float64", "int", "string" (or "" for bool), or one of the builtins
      bool, float, int, str. Only checked when the schema is registered.
    - default: Any
      Explicit default. Omit it to get the zero value of the type. Declaring a
      default makes the flag usable without a value (allow_nothing is forced).
    - descr: str
      Help text shown next to the flag.
    - required: bool
      The flag must appear on the command line.
    - allow_nothing: bool
      The flag may appear without a value ("--name" or "--name=").
    """

    __introspectable__ = (
        "type",
        "default",
        "descr",
        "required",
        "allow_nothing",
    )

    def __init__(
            self,
            type="",
            default=Unset,
            descr="",
            *,
            required=False,
            allow_nothing=False,
    ):
        cls = builtins.type(self)
        self._type = type
        self._default = default
        self._descr = _sanitize_string(cls, "descr", descr)
        self._required = _sanitize_boolean(cls, "required", required)
        self._allow_nothing = _sanitize_boolean(cls, "allow_nothing", allow_nothing)

    def __eq__(self, other):
        if not isinstance(other, FlagSchema):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in FlagSchema.__introspectable__)

    __hash__ = None


class Config(metaclass=RecordType):
    """
    Parser configuration.

    Parameters
    - prefix: str
      The string that introduces a flag ("--" by default; the shell picks "/" on
      Windows hosts).
    - show_help: bool
      Render help and stop when no argument at all is given.
    - description: str
      Program description printed at the top of the help.
    - program: str
      Program name for the usage line. When omitted, __main__.__prog__ or the
      basename of sys.argv[0] is used at render time.
    - colorful: bool
      Style help and faults with the rich palette.
    """

    __introspectable__ = (
        "prefix",
        "show_help",
        "description",
        "program",
        "colorful",
    )

    def __init__(
            self,
            prefix="--",
            show_help=False,
            description="",
            *,
            program=Unset,
            colorful=False,
    ):
        cls = builtins.type(self)
        # prefix is matched literally, surrounding spaces are significant
        if not isinstance(prefix, str):
            raise TypeError(f"{cls.__typename__} 'prefix' must be a string")
        elif not prefix:
            raise ValueError(f"{cls.__typename__} 'prefix' cannot be empty")
        elif "=" in prefix:
            raise ValueError(f"{cls.__typename__} 'prefix' cannot contain '='")
        self._prefix = prefix
        self._show_help = _sanitize_boolean(cls, "show_help", show_help)
        self._description = _sanitize_string(cls, "description", description)
        self._program = program if program is Unset else _sanitize_string(cls, "program", program, empty=False)
        self._colorful = _sanitize_boolean(cls, "colorful", colorful)


__all__ = (
    "FlagSchema",
    "Config",
)
