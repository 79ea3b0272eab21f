"""
Help rendering from the switch registry.

Layout
    Usage: <args>
    	--some-str/-s: This is a switch, for an arg
    	-b: This is a test for only shorthand switches
    	--help/-h: Displays this help information (--help/-h <arg(s)>)
    Unknown switch '-x'

- render_all(): every registered switch in registration order, then the built-in
  help entry.
- render_filtered(tokens): only the requested switches. '--name' tokens (and full
  specifiers) are looked up as given; short clusters like '-abc' are expanded to
  '-a', '-b', '-c'. Plain tokens are ignored. Tokens that do not resolve are listed
  once each after all known entries.
- render(argv): help-all when argv holds at most the help token itself, filtered on
  argv[1:] otherwise.

Palette keys
- usage, switch, description, unknown-label, unknown-switch
Define __styles__ in __main__ to override any of them; colorful=False drops styling.
"""
from rich.console import Console
from rich.text import Text

from .config import Settings
from .names import split
from .registry import HELP_SPECIFIER, HELP_DESCRIPTION, SwitchRegistry
from .utils import *


class HelpRenderer:
    """
    Render help text for the switches of a registry.

    Parameters
    - registry: SwitchRegistry
    - settings: Settings (usage headline and colour policy)
    """

    def __init__(self, registry, /, settings=Unset):
        if not isinstance(registry, SwitchRegistry):
            raise TypeError("help renderer 'registry' must be a switch registry")
        if not isinstance(settings, Settings | Unset):
            raise TypeError("help renderer 'settings' must be settings")
        self.registry = registry
        self.settings = Settings() if settings is Unset else settings

    def _styler(self):
        return palette({
            "usage": "bold",
            "switch": "red",
            "description": "",
            "unknown-label": "",
            "unknown-switch": "red",
        }, colorful=self.settings.colorful)

    def _describe(self, token):
        if (found := self.registry.describe(token)) is not None:
            return found
        if token == HELP_SPECIFIER or token in split(HELP_SPECIFIER):
            return HELP_DESCRIPTION, HELP_SPECIFIER
        return None

    def _compose(self, entries, unknown=()):
        styler = self._styler()
        lines = [Text(self.settings.usage, styler("usage"))]
        for description, specifier in entries:
            lines.append(Text.assemble(
                "\t",
                (specifier, styler("switch")),
                ": ",
                (description, styler("description")),
            ))
        for token in unknown:
            lines.append(Text.assemble(
                ("Unknown switch ", styler("unknown-label")),
                "'",
                (token, styler("unknown-switch")),
                "'",
            ))
        return Text("\n").join(lines)

    def render_all(self):
        entries = [(description, specifier) for specifier, description in self.registry.items()]
        entries.append((HELP_DESCRIPTION, HELP_SPECIFIER))
        return self._compose(entries)

    def render_filtered(self, tokens):
        known = []
        unknown = []

        def attempt(token):
            if (found := self._describe(token)) is None:
                unknown.append(token)
            else:
                known.append(found)

        for token in tokens:
            match prefixed(token):
                case "long":
                    attempt(token)
                case "short":
                    for char in token[len(SHORT_PREFIX):]:
                        attempt(SHORT_PREFIX + char)

        # unknown tokens go last so every valid entry is read first
        return self._compose(known, unknown)

    def render(self, argv):
        argv = list(argv)
        if len(argv) < 2:
            return self.render_all()
        return self.render_filtered(argv[1:])

    def show(self, argv, /, console=Unset):
        console = Console(highlight=False) if console is Unset else console
        console.print(self.render(argv))


__all__ = (
    "HelpRenderer",
)
