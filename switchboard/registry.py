"""
Switch registry: the name → description table every parse and help render consults.

Overview
- SwitchRegistry maps full specifiers (as supplied, e.g. "--foo/-f") to descriptions.
- Insertion order is preserved and is the order used by help-all.
- Long and short forms are unique across the whole registry; registering a form that
  already resolves is a DuplicateSwitchError.
- "--help" and "-h" are reserved for the built-in help entry.

Ownership
- A registry is an ordinary object owned by the caller. Create one per application
  (or per test) and pass it to the processor; reset() empties it.

Quick example
    >>> registry = SwitchRegistry()
    >>> registry.register("--verbose/-v", "Print more")
    >>> registry.lookup("-v")
    'Print more'
    >>> registry.describe("--verbose")
    ('Print more', '--verbose/-v')
"""
from .faults import DuplicateSwitchError, InvalidSpecError
from .names import split
from .utils import prefixed

HELP_SPECIFIER = "--help/-h"
HELP_DESCRIPTION = "Displays this help information (--help/-h <arg(s)>)"


class SwitchRegistry:
    """
    Ordered table of registered switch specifiers and their descriptions.

    Invariants
    - Every key is a valid specifier (see names.split).
    - No long form and no short form appears in two keys.
    - Entries are only added (register) or dropped all at once (reset).
    """

    def __init__(self):
        self._entries = {}

    def register(self, specifier, description, /):
        """
        Add a specifier and its description.

        Raises
        - MalformedSpecifierError: the specifier does not parse.
        - InvalidSpecError: the description is not a non-empty string.
        - DuplicateSwitchError: the long or short form is already registered or reserved.
        """
        if not isinstance(description, str):
            raise InvalidSpecError(
                "description for switch %r must be a string" % specifier,
                input=specifier,
            )
        if not (description := description.strip()):
            raise InvalidSpecError(
                "switch %r must have a description" % specifier,
                input=specifier,
                hint="describe what the switch does; it is shown by --help",
            )

        names = split(specifier)
        reserved = split(HELP_SPECIFIER)

        for form in names.forms:
            if form in reserved:
                raise DuplicateSwitchError(
                    "%r is reserved for help" % form,
                    input=form,
                    hint="choose another name; %s is always available" % HELP_SPECIFIER,
                )
            if self.lookup(form) is not None:
                raise DuplicateSwitchError(
                    "%r is already being used by %r" % (form, self.describe(form)[1]),
                    input=form,
                    hint="each long and short form can be registered only once",
                )

        self._entries[specifier.strip()] = description

    def lookup(self, token, /):
        """
        Resolve a bare '--long' or '-s' token to its description.

        Long tokens are compared against long forms only and short tokens against
        short forms only. Combined specifiers and plain text never resolve.
        """
        match prefixed(token):
            case "long":
                side = 0
            case "short":
                side = 1
            case _:
                return None

        for specifier, description in self._entries.items():
            if split(specifier)[side] == token:
                return description
        return None

    def describe(self, token, /):
        """
        Resolve a long form, a short form or a full stored specifier.

        Returns
        - (description, specifier) for the matching entry, or None.
        """
        if not isinstance(token, str) or not token:
            return None
        for specifier, description in self._entries.items():
            if token == specifier or token in split(specifier):
                return description, specifier
        return None

    def reset(self):
        self._entries.clear()

    def items(self):
        return self._entries.items()

    def __contains__(self, specifier):
        return specifier in self._entries

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"{type(self).__name__}({self._entries!r})"


__all__ = (
    "SwitchRegistry",
    "HELP_SPECIFIER",
    "HELP_DESCRIPTION",
)
