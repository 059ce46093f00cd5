"""
nflag faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
  Codes are grouped by domain (parse, registration, lookup) to keep logs and
  searches predictable.
- FlagException: base type that carries a message + options and knows how to
  render itself through rich and how to surface itself (raise or print & exit).
- trigger(): central entry point to surface any fault.

Domains
- parse faults (11xxx) are never raised by the resolver: they travel inside a
  ParseOutcome and the shell decides to print them and terminate.
- registration faults (12xxx) and lookup faults (13xxx) are raised to the
  caller, which may correct its input and retry.

Integration
- Every parse fault names the offending flag with the configured prefix
  (options "input") so the message can be printed as-is.
- In non-shell mode, trigger() raises; in shell mode the fault is printed on
  stderr and the process exits with status 1 unless the fault is deferred.
"""
import copy
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - parse (111xx): UNKNOWN_FLAG, INCORRECT_VALUE, REQUIRED_VALUE
    - registration (121xx): UNSUPPORTED_TYPE, SCHEMA_TYPE_MISMATCH
    - lookup (131xx): FLAG_NOT_FOUND, UNRESOLVED_VALUE, ACCESSOR_TYPE_MISMATCH
    """
    # --- parse faults (11xxx) ---
    UNKNOWN_FLAG                = 11101
    INCORRECT_VALUE             = 11102
    REQUIRED_VALUE              = 11103

    # --- registration faults (12xxx) ---
    UNSUPPORTED_TYPE            = 12101
    SCHEMA_TYPE_MISMATCH        = 12102

    # --- lookup faults (13xxx) ---
    FLAG_NOT_FOUND              = 13101
    UNRESOLVED_VALUE            = 13102
    ACCESSOR_TYPE_MISMATCH      = 13103

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class FlagException(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message if self.message is not Unset else ""

    @property
    def code(self):
        return self.options.get("code")

    @property
    def flag(self):
        return self.options.get("flag")

    def __rich__(self):
        colorful = self.options.get("colorful", False)
        styles = defaultdict(str, {
            "error-message": "bold #FF4DA6",  # friendly pinky message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(__import__("__main__"), "__styles__", {}))

        def text(fragment, style):
            return Text(str(fragment), styles[style] if colorful else "")

        message = text(self, "error-message")
        if not (hint := self.options.get("hint")):
            return message
        return Group(message, Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self, soft_wrap=True)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnsupportedTypeError(FlagException, ValueError): ...
class SchemaTypeMismatchError(FlagException, TypeError): ...

class FlagNotFoundError(FlagException, LookupError): ...
class UnresolvedValueError(FlagException, LookupError): ...
class AccessorTypeError(FlagException, TypeError): ...

class ParseFault(FlagException): ...
class UnknownFlagError(ParseFault): ...
class IncorrectValueError(ParseFault): ...
class RequiredValueError(ParseFault): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see FlagException).
    - options are merged into the fault via copy.replace() before triggering.
    - typical options: shell, deferred, colorful.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FlagException",
    "UnsupportedTypeError",
    "SchemaTypeMismatchError",
    "FlagNotFoundError",
    "UnresolvedValueError",
    "AccessorTypeError",
    "ParseFault",
    "UnknownFlagError",
    "IncorrectValueError",
    "RequiredValueError",
    "FaultCode",
    "trigger",
)
