r"""
Switchboard switch specifications and builders.

Overview
- SwitchSpec: immutable description of one switch: specifier/names, description,
  handler, arity and declared value type. Validated on construction.
- SwitchSet: an ordered, registry-backed collection of specs with a builder API
  (define(...), @switch(...), @handler(...)). It is the usual parse target.
- FieldScanner: protocol turning a parse target into its ordered specs.
- MemberScanner: default scanner. Understands SwitchSet targets, plain iterables of
  specs, and classes/modules/objects that carry SwitchSpec attributes (declaration order).
- resolve_handler(target, spec): turn a spec's handler into a callable.

Arity
- FLAG (-1): no trailing values (the default).
- N >= 0: exactly N trailing values.
- UNTIL_NEXT (-2): every following value up to the next switch-looking token or '--'.

Handler call contract (one call per occurrence)
- no value type, arity FLAG or 0      → handler()
- no value type, any other arity      → handler(list of raw strings)
- array value type                    → handler(list of converted values)
- scalar value type (arity must be 1) → handler(value)

Quick example
    >>> switches = SwitchSet()
    >>> @switches.switch("--count/-c", "How many", arity=1, type=Int32)
    ... def on_count(count): ...
    ...
    >>> class Args:
    ...     verbose = SwitchSpec("--verbose/-v", "Print more", "on_verbose")
    ...     @staticmethod
    ...     def on_verbose(): ...
"""
import builtins
import functools
import operator
import re
import types
from collections.abc import Iterable, Mapping
from typing import Protocol

from .faults import InvalidSpecError, MissingHandlerError
from .kinds import resolve
from .names import split
from .registry import SwitchRegistry
from .utils import *

FLAG = -1
UNTIL_NEXT = -2


class SwitchType(type):
    """
    Metaclass giving specs read-only fields, a stable repr and a rich repr.

    - __typename__ is derived from the class name (camel-case split with hyphens).
    - every name in __introspectable__ becomes a read-only property over "_<name>".
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
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: validate and normalize the fields of a SwitchSpec in place.

    Raises
    - MalformedSpecifierError: the specifier does not parse (see names.split).
    - InvalidSpecError: empty description, empty/non-callable handler, bad arity, or
      an arity that cannot feed the declared value type.
    - UnsupportedTypeError: the value type is outside the supported kinds.
    """
    if not isinstance(specifier := metadata["specifier"], str):
        raise InvalidSpecError(f"{cls.__typename__} 'specifier' must be a string")
    metadata["names"] = split(specifier)
    metadata["specifier"] = specifier = specifier.strip()

    if not isinstance(description := metadata["description"], str):
        raise InvalidSpecError(f"{cls.__typename__} 'description' must be a string", input=specifier)
    elif not (description := description.strip()):
        raise InvalidSpecError(
            "switch description must have a value",
            input=specifier,
            hint="describe what %s does; it is shown by --help" % specifier,
        )
    metadata["description"] = description

    if isinstance(handler := metadata["handler"], str):
        if not (handler := handler.strip()):
            raise InvalidSpecError("switch argument handler must have a value", input=specifier)
        metadata["handler"] = handler
    elif not callable(handler):
        raise InvalidSpecError(
            f"{cls.__typename__} 'handler' must be a callable or a handler name",
            input=specifier,
        )

    if not isinstance(arity := metadata["arity"], int) or isinstance(arity, bool):
        raise InvalidSpecError(f"{cls.__typename__} 'arity' must be an integer", input=specifier)
    elif arity < UNTIL_NEXT:
        raise InvalidSpecError(
            "switch arity must be -2 (until next switch), -1 (flag) or a value count",
            input=specifier,
        )

    if (type := metadata["type"]) is Unset:
        return

    metadata["type"] = type = resolve(type)

    if arity == FLAG:
        raise InvalidSpecError(
            "flag %r cannot declare a value type" % specifier,
            input=specifier,
            hint="give the switch an arity to receive values",
        )
    if not type.array and arity != 1:
        raise InvalidSpecError(
            "switch %r with scalar type %s must take exactly one value" % (specifier, type.label),
            input=specifier,
            hint="use arity=1 or the array form of the type",
        )


class SwitchSpec(metaclass=SwitchType):
    """
    Immutable specification of one switch.

    Properties
    - specifier: str, the full specifier as supplied (trimmed), e.g. "--foo/-f".
    - names: Names(long, short).
    - description: str, shown by help.
    - handler: callable | str, resolved against the parse target when a str.
    - arity: int, FLAG (-1), UNTIL_NEXT (-2) or an exact value count.
    - type: ValueType | Unset.

    Specs do not register themselves: SwitchSet.define() and the processor register
    them into a SwitchRegistry.
    """

    __introspectable__ = (
        "specifier",
        "names",
        "description",
        "handler",
        "arity",
        "type",
    )

    def __init__(self, specifier, description, handler, arity=FLAG, type=Unset):
        metadata = {
            "specifier": specifier,
            "description": description,
            "handler": handler,
            "arity": arity,
            "type": type,
        }
        _sanitize_metadata(builtins.type(self), metadata)

        for name, object in metadata.items():
            builtins.object.__setattr__(self, "_" + name, object)

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{builtins.type(self).__typename__} is read-only")

    def __delattr__(self, name, /):
        raise AttributeError(f"{builtins.type(self).__typename__} is read-only")

    def __contains__(self, token):
        """
        True when 'token' is this switch's long or short form.
        """
        return token in self.names


class FieldScanner(Protocol):
    def scan(self, target, /): ...


class MemberScanner:
    """
    Default FieldScanner.

    Targets
    - SwitchSet or any iterable of SwitchSpec: specs in iteration order.
    - class: SwitchSpec attributes along the MRO, base classes first, each in
      declaration order (a subclass attribute of the same name replaces the base one).
    - module: SwitchSpec globals in definition order.
    - other objects: the class scan followed by SwitchSpec instance attributes.

    Scanning has no side effects and is deterministic for a given target.
    """

    def scan(self, target, /):
        if isinstance(target, SwitchSet):
            return tuple(target)
        if isinstance(target, type):
            members = {}
            for klass in reversed(target.__mro__):
                members.update(
                    (name, object) for name, object in vars(klass).items() if isinstance(object, SwitchSpec)
                )
            return tuple(members.values())
        if isinstance(target, types.ModuleType):
            return tuple(object for object in vars(target).values() if isinstance(object, SwitchSpec))
        if isinstance(target, Iterable) and not isinstance(target, str | Mapping):
            specs = tuple(target)
            if not all(isinstance(spec, SwitchSpec) for spec in specs):
                raise TypeError("scan() iterable target must only contain switch specs")
            return specs
        if hasattr(target, "__dict__"):
            return self.scan(type(target)) + tuple(
                object for object in vars(target).values() if isinstance(object, SwitchSpec)
            )
        raise TypeError("scan() argument must be a switch set, a class, a module or an object")


def resolve_handler(target, spec, /):
    """
    Turn a spec's handler into a callable.

    - callables are returned as-is;
    - names are looked up in target.handlers when the target is a SwitchSet,
      otherwise as an attribute of the target.

    Raises
    - MissingHandlerError when the name does not resolve to a callable.
    """
    if callable(handler := spec.handler):
        return handler

    if isinstance(target, SwitchSet):
        callback = target.handlers.get(handler)
    else:
        callback = getattr(target, handler, None)

    if not callable(callback):
        owner = getattr(target, "__name__", type(target).__name__)
        raise MissingHandlerError(
            "failed to find handler %r for switch %r in %r" % (handler, spec.specifier, owner),
            input=spec.specifier,
            handler=handler,
            hint="define a callable named %r on the target" % handler,
        )
    return callback


class SwitchSet:
    """
    Ordered collection of switch specs bound to a registry.

    Parameters
    - registry: Unset | SwitchRegistry
      Registry the defined switches are registered into; a fresh one when Unset.
    - handlers: Mapping[str, Callable]
      Initial handler table for specs whose handler is given by name.

    Building
    - define(specifier, description, handler, arity=FLAG, type=Unset) -> SwitchSpec
    - add(spec) -> SwitchSpec
    - @switch(specifier, description, arity=FLAG, type=Unset): decorated function is
      the handler; the function is returned unchanged.
    - @handler(name=Unset): add a function to the handler table (for named handlers).

    Registration happens immediately, so duplicates fail at definition time.
    """

    def __init__(self, registry=Unset, /, handlers=()):
        if not isinstance(registry, SwitchRegistry | Unset):
            raise TypeError("switch set 'registry' must be a switch registry")
        self._registry = SwitchRegistry() if registry is Unset else registry
        self._specs = []
        self._handlers = dict(handlers)

    registry = mirror("registry")
    handlers = mirror("handlers")

    def add(self, spec, /):
        if not isinstance(spec, SwitchSpec):
            raise TypeError("add() argument must be a switch spec")
        self._registry.register(spec.specifier, spec.description)
        self._specs.append(spec)
        return spec

    def define(self, specifier, description, handler, arity=FLAG, type=Unset):
        return self.add(SwitchSpec(specifier, description, handler, arity, type))

    def switch(self, specifier, description, arity=FLAG, type=Unset):
        @rename("switch")
        def wrapper(callback, /):
            if not callable(callback):
                raise TypeError("@switch() must be applied to a callable")
            self.define(specifier, description, callback, arity, type)
            return callback
        return wrapper

    def handler(self, name=Unset, /):
        @rename("handler")
        def wrapper(callback, /):
            if not callable(callback):
                raise TypeError("@handler() must be applied to a callable")
            key = coalesce(name, callback.__name__)
            if key in self._handlers:
                raise TypeError(f"handler {key!r} is already defined")
            self._handlers[key] = callback
            return callback
        return wrapper

    def __iter__(self):
        return iter(self._specs)

    def __len__(self):
        return len(self._specs)

    def __getitem__(self, token):
        for spec in self._specs:
            if token == spec.specifier or token in spec:
                return spec
        raise KeyError(token)

    def __repr__(self):
        return f"{type(self).__name__}({", ".join(spec.specifier for spec in self._specs)})"


__all__ = (
    "SwitchSpec",
    "SwitchSet",
    "FieldScanner",
    "MemberScanner",
    "resolve_handler",
    "FLAG",
    "UNTIL_NEXT",
)

del SwitchType
