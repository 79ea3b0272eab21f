"""
Switchboard utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the switch, registry, processor and output modules.

Overview
- UnsetType / Unset
  • The "argument not given" marker, kept apart from None so None stays a real value.
  • Falsey, prints as "Unset", cannot be subclassed and composes in unions
    (str | Unset) for isinstance checks.

- coalesce(value, default=None)
  • Fall back to a default only when the value is Unset.

- @rename("name")
  • Stable __name__/__qualname__ for functions generated inside factories.

- mirror("attr")
  • Read-only property factory exposing a private backing field (self._attr).

- prefixed(token)
  • Classify a raw token as a long switch, short switch, or plain text.

- palette(defaults, colorful=True)
  • Style lookup for rich output; __main__.__styles__ overrides the defaults.

Quick examples
    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
"""
import builtins
from collections import defaultdict
from collections.abc import Sequence, Mapping
from types import MappingProxyType
from typing import final

LONG_PREFIX = "--"
SHORT_PREFIX = "-"


@final
class UnsetType:
    """
    Type of the Unset marker; there is only ever one instance.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init_subclass__(cls, **options):
        raise TypeError("UnsetType cannot be subclassed")

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    # 'str | Unset' builds the union 'str | UnsetType'
    def __or__(self, other, /):
        try:
            return UnsetType | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | UnsetType
        except TypeError:
            return NotImplemented


def coalesce(object, default=None, /):
    """
    Return 'default' when 'object' is Unset, 'object' itself otherwise.
    """
    if object is Unset:
        return default
    return object


def rename(name, /):
    """
    Decorator naming a generated function: sets both __name__ and __qualname__.
    """
    if not isinstance(name, str):
        raise TypeError("rename() argument must be a string")

    def decorator(function):
        if not builtins.callable(function):
            raise TypeError("@rename() must be applied to a callable")
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


def mirror(name, /):
    """
    Define a read-only property that mirrors a private backing attribute.

    The property reads "_{name}" from the instance. Sequences (non-string) are
    handed out as tuples and mappings as read-only proxies, so the public view
    cannot be used to mutate the backing state.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        object = getattr(self, "_" + name)
        if isinstance(object, Sequence) and not isinstance(object, str | tuple):
            return tuple(object)
        if isinstance(object, Mapping):
            return MappingProxyType(object)
        return object

    return property(getter)


def prefixed(token, /):
    """
    Classify a raw token by its switch prefix.

    Returns
    - "long" for tokens like '--name' (at least one character after the prefix),
    - "short" for tokens like '-x' or '-abc' (anything else starting with one '-'),
    - None for plain text, the bare '-' and the '--' passthrough boundary.
    """
    if not isinstance(token, str):
        raise TypeError("prefixed() argument must be a string")
    if token.startswith(LONG_PREFIX):
        return "long" if len(token) > len(LONG_PREFIX) else None
    if token.startswith(SHORT_PREFIX):
        return "short" if len(token) > len(SHORT_PREFIX) else None
    return None


def palette(defaults, /, *, colorful=True):
    """
    Build a style lookup for rich output.

    - defaults: Mapping[str, str], the style of every known key.
    - colorful: when False every key maps to no style.

    A __styles__ mapping defined in __main__ overrides the defaults key by key;
    unknown keys map to no style.
    """
    if not isinstance(defaults, Mapping):
        raise TypeError("palette() argument must be a mapping")
    styles = defaultdict(str, dict(defaults) | getattr(__import__("__main__"), "__styles__", {}))

    def styler(key, /):
        return styles[key] if colorful else ""

    return styler


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Use Unset as a default when None is a valid value but you still need to
distinguish “no input” from “explicitly passed None”.
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "prefixed",
    "palette",

    # Types
    "UnsetType",

    # Constants
    "Unset",
    "LONG_PREFIX",
    "SHORT_PREFIX",
)
