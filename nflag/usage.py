"""
Help rendering.

Layout (plain form; this is what scripts consuming the help rely on)

    <description>
    <blank>
    Usage: <program> <prefix>novalueflag <prefix>valueflag=value
    The following options are available:
    <prefix><name><padding><descr>
    Default Value:  <value>
    Allows Providing Only Flag
    <blank>

- the description and its blank line only appear when a description is set;
- flags are listed by sorted name, the descriptor column starts at the
  registry width (longest name + 4) after the prefix;
- "Default Value:" is followed by two spaces and omitted when the default is
  "" or false;
- "Allows Providing Only Flag" appears for flags that accept no value.

Palette keys
- description-section, usage-label, program-name, usage-example, listing-label
- flag-name, flag-description, default-label, default-value, allow-nothing

Customization
- Define a mapping named __styles__ in __main__ to override any palette entry.
- Styles only apply when the config is colorful; the plain text is identical.
"""
import os.path
import sys
from collections import defaultdict

from rich.text import Text

from .kinds import display
from .utils import Unset


def program(config, /):
    """
    Return the program name shown in the usage line.

    Falls back to __main__.__prog__, then to the basename of sys.argv[0]
    (empty when sys.argv is empty).
    """
    if config.program is not Unset:
        return config.program
    main = __import__("__main__")
    if hasattr(main, "__prog__"):
        return main.__prog__
    return os.path.basename(sys.argv[0]) if sys.argv else ""


def render(registry, /):
    config = registry.config
    prefix = config.prefix

    styles = defaultdict(str, {
        "description-section": "italic #A3A3A3",  # Neutral gray
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "usage-example": "bold #36C5F0",  # SKY-BLUE
        "listing-label": "bold #FFFFFF",  # Pure white header

        "flag-name": "bold #22C55E",  # GREEN for flags
        "flag-description": "#9CA3AF",  # Muted gray
        "default-label": "#737373",  # Dim gray
        "default-value": "bold #FFD600",  # AMBER for values
        "allow-nothing": "italic #36C5F0",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def text(fragment, style=""):
        return Text(str(fragment), styles[style] if config.colorful and style else "")

    lines = []

    if config.description:
        lines.append(text(config.description, "description-section"))
        lines.append(Text())

    lines.append(Text.assemble(
        text("Usage: ", "usage-label"),
        text(program(config), "program-name"),
        " ",
        text(prefix + "novalueflag", "usage-example"),
        " ",
        text(prefix + "valueflag=value", "usage-example"),
    ))
    lines.append(text("The following options are available:", "listing-label"))

    for name in registry:
        schema = registry[name]

        lines.append(Text.assemble(
            text(prefix + name, "flag-name"),
            " " * (registry.width - len(name)),
            text(schema.descr, "flag-description"),
        ))
        # 0 == False in Python, only the literal false and "" are silent
        if schema.default is not False and schema.default != "":
            lines.append(Text.assemble(
                text("Default Value:  ", "default-label"),
                text(display(schema.default), "default-value"),
            ))
        if schema.allow_nothing:
            lines.append(text("Allows Providing Only Flag", "allow-nothing"))
        lines.append(Text())

    return Text("\n").join(lines)


__all__ = (
    "program",
    "render",
)
