"""
nflag resolver: turn raw arguments into a fully resolved value set.

Phases
- short-circuit
  • no arguments and config.show_help → HELP_REQUESTED.
  • first argument is prefix + "help" → HELP_REQUESTED.
- tokens (left to right)
  • split on the first '='; the left side with every occurrence of the prefix
    removed is the flag name.
  • no '=': the value is "" ("true" for bool flags).
  • unknown name → UnknownFlagError.
  • non-empty value → converted by the flag's kind; failure → IncorrectValueError.
  • empty value → True for bool / default otherwise when the flag allows
    nothing; RequiredValueError when it does not.
  • a later occurrence of the same flag overwrites an earlier one.
- sweep (flags in sorted order)
  • every flag no token touched resolves to its default, or fails with
    RequiredValueError when it is required.

The first fault stops the pass. Nothing is committed by this module: the
registry commits the values of a RESOLVED outcome and ignores the others.
"""
import collections
from enum import IntEnum
from types import MappingProxyType

from .faults import *
from .kinds import FlagKind
from .states import NotProvided


class Status(IntEnum):
    RESOLVED = 0
    HELP_REQUESTED = 1
    FATAL = 2


class ParseOutcome(collections.namedtuple("ParseOutcome", ("status", "fault", "values"))):
    """
    Result of a parse pass.

    Fields
    - status: Status
    - fault: ParseFault | None (set when FATAL)
    - values: read-only mapping name → value (filled when RESOLVED)
    """
    __slots__ = ()

    @property
    def resolved(self):
        return self.status is Status.RESOLVED

    @property
    def fatal(self):
        return self.status is Status.FATAL

    @property
    def help(self):
        """
        Whether the help listing should follow (explicit request or missing value).
        """
        return self.status is Status.HELP_REQUESTED or isinstance(self.fault, RequiredValueError)


_EMPTY = MappingProxyType({})


def tokenize(token, prefix, /):
    """
    Split a raw argument into (name, value).

    value is None when the token carries no '='; "" when it carries an empty one.
    """
    input, separator, value = token.partition("=")
    return input.replace(prefix, ""), value if separator else None


def _fail(fault):
    return ParseOutcome(Status.FATAL, fault, _EMPTY)


def _hint(prefix):
    return "run '%shelp' to see all available flags" % prefix


def resolve(schemas, config, args, /):
    """
    Resolve `args` against the registered `schemas` under `config`.

    Parameters
    - schemas: Mapping[str, FlagSchema], normalized schemas by flag name.
    - config: Config
    - args: Sequence[str], raw arguments without the program name.

    Returns
    - ParseOutcome
    """
    prefix = config.prefix

    if not args and config.show_help:
        return ParseOutcome(Status.HELP_REQUESTED, None, _EMPTY)
    if args and args[0] == prefix + "help":
        return ParseOutcome(Status.HELP_REQUESTED, None, _EMPTY)

    values = dict.fromkeys(schemas, NotProvided)

    for token in args:
        name, value = tokenize(token, prefix)

        try:
            schema = schemas[name]
        except KeyError:
            return _fail(UnknownFlagError(
                "%s does not exist" % (prefix + name),
                code=FaultCode.UNKNOWN_FLAG,
                flag=name,
                input=prefix + name,
                hint=_hint(prefix),
            ))

        if value is None:
            value = "true" if schema.type is FlagKind.BOOL else ""

        if value:
            try:
                values[name] = schema.type.convert(value)
            except ValueError:
                return _fail(IncorrectValueError(
                    "an incorrect value was provided when using %s" % (prefix + name),
                    code=FaultCode.INCORRECT_VALUE,
                    flag=name,
                    input=prefix + name,
                    value=value,
                    hint="expected a value of type %s (for example: %s%s=<%s>)" % (
                        schema.type, prefix, name, schema.type
                    ),
                ))
        elif schema.allow_nothing:
            values[name] = True if schema.type is FlagKind.BOOL else schema.default
        else:
            return _fail(_missing(prefix, name, schema))

    for name in sorted(values):
        if values[name] is not NotProvided:
            continue
        schema = schemas[name]
        if schema.required:
            return _fail(_missing(prefix, name, schema))
        values[name] = schema.default

    return ParseOutcome(Status.RESOLVED, None, MappingProxyType(values))


def _missing(prefix, name, schema):
    return RequiredValueError(
        "a required value for %s was not provided" % (prefix + name),
        code=FaultCode.REQUIRED_VALUE,
        flag=name,
        input=prefix + name,
        hint="provide it as %s%s=<%s>" % (prefix, name, schema.type),
    )


__all__ = (
    "Status",
    "ParseOutcome",
    "tokenize",
    "resolve",
)
