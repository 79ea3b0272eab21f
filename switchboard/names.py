"""
Switch specifier parsing.

A specifier names a switch in one of three shapes:
- "--long"          long form only
- "-s"              short form only
- "--long/-s"       both forms; "-s/--long" is accepted too (order-insensitive)

split() turns a specifier into Names(long, short), where a missing form is None.
"""
import functools
import re
from typing import NamedTuple

from .faults import MalformedSpecifierError
from .utils import LONG_PREFIX

SEPARATOR = "/"

_LONG = re.compile(r"--[^\s\-/][^\s/]*")
_SHORT = re.compile(r"-[^\s\-/]")


class Names(NamedTuple):
    long: str | None
    short: str | None

    def __contains__(self, token):
        return token is not None and (token == self.long or token == self.short)

    @property
    def forms(self):
        """present forms, long first"""
        return tuple(name for name in (self.long, self.short) if name is not None)


def _validate(specifier, long, short):
    if long is not None and not _LONG.fullmatch(long):
        raise MalformedSpecifierError(
            "bad long form %r in switch specifier %r" % (long, specifier),
            input=specifier,
            hint="long forms are '--' followed by a name (for example: --output)",
        )
    if short is not None and not _SHORT.fullmatch(short):
        raise MalformedSpecifierError(
            "bad short form %r in switch specifier %r" % (short, specifier),
            input=specifier,
            hint="short forms are '-' followed by a single character (for example: -o)",
        )


@functools.cache
def split(specifier, /):
    """
    Parse a switch specifier into its long and short forms.

    Rules
    - At most one '/' separator; more is a MalformedSpecifierError.
    - A single part starting with '--' is the long form, anything else the short form.
    - Two parts: the part starting with '--' is the long form, the other the short
      form, whatever their order. Both or neither starting with '--' is rejected.
    - Each form is validated: '--' + name, or '-' + one character.

    Returns
    - Names(long, short) with None for a missing form.
    """
    if not isinstance(specifier, str):
        raise TypeError("split() argument must be a string")
    if not (specifier := specifier.strip()):
        raise MalformedSpecifierError(
            "switch specifier cannot be empty",
            input=specifier,
            hint="use --long-hand/-s (or just one of them)",
        )

    parts = specifier.split(SEPARATOR)

    match parts:
        case [single]:
            if single.startswith(LONG_PREFIX):
                names = Names(single, None)
            else:
                names = Names(None, single)
        case [first, second]:
            longs = [part.startswith(LONG_PREFIX) for part in parts]
            if all(longs) or not any(longs):
                raise MalformedSpecifierError(
                    "switch specifier %r must pair one long form with one short form" % specifier,
                    input=specifier,
                    hint="use --long-hand/-s",
                )
            names = Names(first, second) if longs[0] else Names(second, first)
        case _:
            raise MalformedSpecifierError(
                "switch specifier %r has more than one %r separator" % (specifier, SEPARATOR),
                input=specifier,
                hint="a specifier holds one long and one short form at most (--long-hand/-s)",
            )

    _validate(specifier, *names)
    return names


def join(names, /):
    """
    Build the canonical "--long/-s" specifier for a Names pair.
    """
    return SEPARATOR.join(names.forms)


__all__ = (
    "Names",
    "split",
    "join",
    "SEPARATOR",
)
