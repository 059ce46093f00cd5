"""
Resolution-state sentinels (implementation detail).

A flag's value slot is either a concrete value (bool, float, int or str) or one
of the two singletons defined here:

- `Unresolved`: the slot exists but no parse has committed a value yet. This is
  what every slot holds right after registration.
- `NotProvided`: used inside a parse pass for flags that no token touched. The
  resolver replaces it with the default (or fails on required flags) before
  anything is committed.

Both are falsy, have a stable repr and render dimmed in Rich. Neither of them
can be produced from command-line text, so a user typing any literal value can
never be mistaken for "flag omitted".
"""
import functools
from typing import final

from rich.text import Text


@final
class UnresolvedType:
    """
    Singleton type marking a value slot that no parse has committed yet.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __rich__(self):
        return Text(repr(self), style="dim")

    def __repr__(self):
        return "Unresolved"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnresolvedType' is not an acceptable base type")


@final
class NotProvidedType:
    """
    Singleton type marking a flag that was omitted from the arguments.

    Notes
    - Lives only in the working set of a parse pass.
    - Distinct from an empty value: "--name=" is provided (with ""), while a
      missing "--name" is NotProvided.
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __rich__(self):
        return Text(repr(self), style="dim")

    def __repr__(self):
        return "NotProvided"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'NotProvidedType' is not an acceptable base type")


Unresolved = UnresolvedType()
NotProvided = NotProvidedType()


def pending(value, /):
    """
    Return True when the slot holds one of the state sentinels instead of a value.
    """
    return value is Unresolved or value is NotProvided


__all__ = (
    "UnresolvedType",
    "NotProvidedType",
    "Unresolved",
    "NotProvided",
    "pending",
)
