"""
nflag registry: flag registration, parsing entry point and typed accessors.

What this module provides
- Registry: owns the parser configuration, the registered (normalized) flag
  schemas and one value slot per flag.
  • register(): validates a FlagSchema and stores its normalized copy.
  • parse(): resolves raw arguments once and commits the values.
  • get()/get_as_*()/is_default(): typed accessors over the committed values.
  • help(): the help listing as a rich Text.

Lifecycle
- construct → configure (optional, before anything else) → register flags →
  parse exactly once → read values.
- A registry is an explicit object: create one per program invocation and pass
  it to whoever needs the values. Nothing is shared at module level, and there
  is no locking: finish registering before anything reads.

Quick start
    from nflag import Registry

    registry = Registry()
    registry.register("name", type="string", default="x", descr="who to greet")
    registry.register("verbose", descr="talk more")

    outcome = registry.parse(["--name=hello", "--verbose"])
    if outcome.resolved:
        registry.get_as_string("name")   # "hello"
        registry.get_as_bool("verbose")  # True
"""
import copy

from .faults import *
from .kinds import FlagKind
from .parser import resolve
from .schema import Config, FlagSchema
from .states import Unresolved, pending
from .usage import render
from .utils import *

# help column: longest flag name plus this many spaces
PADDING = 4


class Registry:
    """
    Mapping of flag names to normalized schemas, with their resolved values.

    Iteration yields flag names in sorted order (the help order); parsing does
    not depend on registration order.
    """

    def __init__(self, config=Unset, /):
        config = coalesce(config, Config())
        if not isinstance(config, Config):
            raise TypeError("Registry() argument must be a config")
        self._config = config
        self._schemas = {}
        self._values = {}
        self._longest = 0
        self._parsed = False

    @property
    def config(self):
        return self._config

    @property
    def width(self):
        """
        Column where flag descriptions start in the help (after the prefix).
        """
        return self._longest + PADDING

    @property
    def parsed(self):
        return self._parsed

    def configure(self, **options):
        """
        Replace configuration fields (prefix, show_help, description, program, colorful).

        Must run before any flag is registered: names are validated against the
        prefix at registration time.
        """
        if self._schemas or self._parsed:
            raise RuntimeError("configure() must be called before registering flags or parsing")
        self._config = copy.replace(self._config, **options)
        return self._config

    def register(self, name, schema=Unset, /, **metadata):
        """
        Validate and store a flag schema under `name`.

        Parameters
        - name: str
          Flag name without prefix; non-empty, must not contain the prefix or '='.
        - schema: FlagSchema
          The declaration. When omitted, one is built from `metadata`
          (type, default, descr, required, allow_nothing).

        Returns
        - FlagSchema: the normalized schema that was stored.

        Raises
        - UnsupportedTypeError: the declared type is not one of the four kinds.
        - SchemaTypeMismatchError: the explicit default does not match the type.
        - TypeError / ValueError: malformed name or schema arguments.

        Registering a name again silently replaces the previous schema and
        clears its value.
        """
        if not isinstance(name, str):
            raise TypeError("register() flag name must be a string")
        elif not name:
            raise ValueError("register() flag name cannot be empty")
        elif self._config.prefix in name:
            raise ValueError("register() flag name %r cannot contain the prefix %r" % (name, self._config.prefix))
        elif "=" in name:
            raise ValueError("register() flag name %r cannot contain '='" % name)

        if schema is Unset:
            schema = FlagSchema(**metadata)
        elif metadata:
            raise TypeError("register() takes either a schema or keyword metadata, not both")
        elif not isinstance(schema, FlagSchema):
            raise TypeError("register() second argument must be a flag schema")

        try:
            kind = FlagKind.lookup(schema.type)
        except ValueError:
            raise UnsupportedTypeError(
                "type %r of flag %r is not allowed, use bool, float64, int or string" % (schema.type, name),
                code=FaultCode.UNSUPPORTED_TYPE,
                flag=name,
                type=schema.type,
            ) from None

        if schema.default is Unset:
            schema = copy.replace(schema, type=kind, default=kind.zero)
        elif kind.accepts(schema.default):
            schema = copy.replace(schema, type=kind, allow_nothing=True)
        else:
            raise SchemaTypeMismatchError(
                "default %r of flag %r does not match its type %s" % (schema.default, name, kind),
                code=FaultCode.SCHEMA_TYPE_MISMATCH,
                flag=name,
                type=kind,
                default=schema.default,
            )

        self._schemas[name] = schema
        self._values[name] = Unresolved
        self._longest = max(self._longest, len(name))
        return schema

    def parse(self, args, /):
        """
        Resolve raw arguments (program name excluded) and commit the values.

        Returns a ParseOutcome; values are committed only when it is resolved.
        Faults are not raised: they travel in the outcome (see nflag.shell for
        printing and exiting).

        A registry parses once. Calling parse() again raises RuntimeError, as
        already resolved values would hide which flags were omitted.
        """
        if self._parsed:
            raise RuntimeError("parse() can only be called once per registry")
        if isinstance(args, str):
            raise TypeError("parse() argument must be a sequence of strings, not a string")
        args = list(args)
        for arg in args:
            if not isinstance(arg, str):
                raise TypeError("parse() argument must be a sequence of strings")

        self._parsed = True
        outcome = resolve(self._schemas, self._config, args)
        if outcome.resolved:
            self._values.update(outcome.values)
        return outcome

    def get(self, name, /):
        """
        Return the resolved value of a flag.

        Raises
        - FlagNotFoundError: no flag is registered under `name`.
        - UnresolvedValueError: the flag holds no value (parse did not resolve it).
        """
        try:
            value = self._values[name]
        except KeyError:
            raise FlagNotFoundError(
                "flag %r does not exist" % name,
                code=FaultCode.FLAG_NOT_FOUND,
                flag=name,
            ) from None
        if pending(value):
            raise UnresolvedValueError(
                "value of flag %r is not resolved" % name,
                code=FaultCode.UNRESOLVED_VALUE,
                flag=name,
            )
        return value

    def _get_as(self, name, kind, /):
        value = self.get(name)
        if (declared := self._schemas[name].type) is not kind:
            raise AccessorTypeError(
                "flag %r is declared as %s, not %s" % (name, declared, kind),
                code=FaultCode.ACCESSOR_TYPE_MISMATCH,
                flag=name,
                type=declared,
            )
        return value

    def get_as_bool(self, name, /):
        return self._get_as(name, FlagKind.BOOL)

    def get_as_int(self, name, /):
        return self._get_as(name, FlagKind.INT)

    def get_as_float(self, name, /):
        return self._get_as(name, FlagKind.FLOAT64)

    def get_as_string(self, name, /):
        return self._get_as(name, FlagKind.STRING)

    def is_default(self, name, /):
        """
        Whether the resolved value of a flag equals its declared default.
        """
        return self.get(name) == self._schemas[name].default

    def help(self):
        """
        Render the help listing (see nflag.usage).
        """
        return render(self)

    def __getitem__(self, name, /):
        try:
            return self._schemas[name]
        except KeyError:
            raise FlagNotFoundError(
                "flag %r does not exist" % name,
                code=FaultCode.FLAG_NOT_FOUND,
                flag=name,
            ) from None

    def __contains__(self, name, /):
        return name in self._schemas

    def __iter__(self):
        return iter(sorted(self._schemas))

    def __len__(self):
        return len(self._schemas)

    def __repr__(self):
        return "registry(config=%r, flags=%r)" % (self._config, list(self))


__all__ = (
    "Registry",
)
