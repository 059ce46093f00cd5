"""
nflag shell: the process-facing side of the library.

The registry never touches the process. This module does:
- picks the default flag prefix from the host platform ("/" on Windows,
  "--" elsewhere);
- reads sys.argv when no arguments are given;
- prints faults and help through rich, then exits with status 1 when the
  parse did not resolve.

Typical program
    from nflag import shell

    registry = shell.create(description="greets people")
    registry.register("name", type="string", default="world", descr="who to greet")

    shell.invoke(registry)  # exits on --help, unknown flags, bad values...
    print("hello", registry.get_as_string("name"))
"""
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console

from .faults import trigger
from .registry import Registry
from .schema import Config
from .utils import *


def host_prefix(platform=Unset, /, *, os_specific=True):
    """
    Return the flag prefix for a host platform (sys.platform by default).

    With os_specific=False the prefix is always "--".
    """
    platform = coalesce(platform, sys.platform)
    if not isinstance(platform, str):
        raise TypeError("host_prefix() argument must be a string")
    if os_specific and platform.startswith("win"):
        return "/"
    return "--"


def create(*, os_specific=True, **options):
    """
    Build a Registry whose prefix follows the host platform unless one is given.

    options are forwarded to Config (prefix, show_help, description, program, colorful).
    """
    options.setdefault("prefix", host_prefix(os_specific=os_specific))
    return Registry(Config(**options))


def invoke(registry, args=Unset, /):
    """
    Parse arguments into a registry, terminating the process when they do not resolve.

    Parameters
    - registry: Registry
    - args:
      • Unset: read tokens from sys.argv[1:].
      • str: shell-like string; will be split via shlex.split.
      • Iterable[str]: pre-tokenized sequence.

    Behavior
    - resolved: return the ParseOutcome.
    - fault: print it on stderr; for a missing required value, print the help
      on stderr as well; exit with status 1.
    - help requested: print the help on stdout and exit with status 1.
    """
    if not isinstance(registry, Registry):
        raise TypeError("invoke() first argument must be a registry")

    if args is Unset:
        tokens = sys.argv[1:]
    elif isinstance(args, str):
        tokens = shlex.split(args)
    elif isinstance(args, Iterable):
        tokens = list(args)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("invoke() second argument must be a string or an iterable of strings")
    else:
        raise TypeError("invoke() second argument must be a string or an iterable of strings")

    outcome = registry.parse(tokens)
    if outcome.resolved:
        return outcome

    if outcome.fault is not None:
        trigger(outcome.fault, shell=True, deferred=True, colorful=registry.config.colorful)
    if outcome.help:
        Console(stderr=outcome.fault is not None).print(registry.help(), soft_wrap=True)
    sys.exit(1)


__all__ = (
    "host_prefix",
    "create",
    "invoke",
)
