"""
Switchboard processor: tokenize an argument vector and dispatch switch handlers.

What this module provides
- ArgumentProcessor: walks argv once, resolves switch tokens through the registry and
  the active specs of a target, slices their values by arity, converts them and
  invokes the handlers in the order the switches appeared.
- ArgStorage: one queued handler call (transient, per matched occurrence).
- process_arguments(target, argv): convenience runner building a processor.

Phases of process(argv, target)
- refresh: scan the target for its specs (every call) and register unseen ones.
- help: empty argv, or '-h'/'--help' as first token → show help and return.
- scan: left to right over a working copy of argv
  • '--' stops scanning; it and everything after it stay in the residual.
  • plain tokens (and the bare '-') are positionals, left in place.
  • switch tokens that resolve nowhere are collected as unknown and left in place.
  • matched switches take their values (stopping at '--'); the switch token and its
    values are removed from the working copy. Values are converted now, so a bad
    value is known before any handler runs.
- report: unknown switches are reported once each, after the scan.
- dispatch: when nothing failed (or strict is off) queued handlers run in order.

Faults
- Input faults are handed to the logger and kept on processor.faults; the
  processor itself never raises them. MissingHandlerError is raised.

Quick example
    >>> switches = SwitchSet()
    >>> @switches.switch("--name/-n", "Who to greet", arity=1, type=String)
    ... def greet(name):
    ...     print("hello", name)
    ...
    >>> ArgumentProcessor(switches.registry).process(["-n", "you", "--", "rest"], switches)
    hello you
    ['--', 'rest']
"""
import difflib
import functools
import shlex
import sys
from collections.abc import Iterable
from typing import NamedTuple

from .config import Settings
from .faults import *
from .help import HelpRenderer
from .kinds import coerce
from .logger import ConsoleLogger
from .registry import HELP_SPECIFIER, SwitchRegistry
from .names import split
from .switches import FLAG, UNTIL_NEXT, MemberScanner, SwitchSet, SwitchSpec, resolve_handler
from .utils import *

PASSTHROUGH = "--"


class ArgStorage(NamedTuple):
    handler: object
    type: object
    values: list
    token: str
    arguments: tuple


_ORDINAL_WORDS = ("first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth", "tenth")


@functools.cache
def _ordinal(position):
    """
    Position label used in reports: 'first' to 'tenth', then '11th', '22nd', '103rd'.
    """
    if 0 < position <= len(_ORDINAL_WORDS):
        return _ORDINAL_WORDS[position - 1]
    if position % 100 in (11, 12, 13):
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(position % 10, "th")
    return "%d%s" % (position, suffix)


class ArgumentProcessor:
    """
    Parse argument vectors against the switches of a target.

    Parameters
    - registry: Unset | SwitchRegistry
      Name table used for resolution and help; a fresh one when Unset.
    - scanner: FieldScanner (keyword-only)
      Turns the target into its ordered specs; MemberScanner by default.
    - logger: Logger (keyword-only)
      Receives input faults; a ConsoleLogger following the settings by default.
    - settings: Settings (keyword-only)
    - helper: HelpRenderer (keyword-only)

    State
    - active: specs of the target of the last process() call.
    - faults: input faults reported during the last process() call.

    Not reentrant: one parse at a time per processor.
    """

    def __init__(self, registry=Unset, /, *, scanner=Unset, logger=Unset, settings=Unset, helper=Unset):
        if not isinstance(registry, SwitchRegistry | Unset):
            raise TypeError("processor 'registry' must be a switch registry")
        if not isinstance(settings, Settings | Unset):
            raise TypeError("processor 'settings' must be settings")

        self.registry = SwitchRegistry() if registry is Unset else registry
        self.settings = Settings() if settings is Unset else settings
        self.scanner = MemberScanner() if scanner is Unset else scanner
        self.logger = ConsoleLogger(self.settings.prog, colorful=self.settings.colorful) if logger is Unset else logger
        self.helper = HelpRenderer(self.registry, self.settings) if helper is Unset else helper

        self._active = ()
        self._faults = []

    active = mirror("active")
    faults = mirror("faults")

    def refresh(self, target, /):
        """
        Rebuild the active specs from the target and register the unseen ones.

        A spec whose specifier is already registered with the same description is
        not registered again, so a target can be processed any number of times.
        """
        specs = tuple(self.scanner.scan(target))
        for spec in specs:
            if not isinstance(spec, SwitchSpec):
                raise TypeError("scanner must yield switch specs")
            if self.registry.describe(spec.specifier) != (spec.description, spec.specifier):
                self.registry.register(spec.specifier, spec.description)
        self._active = specs
        return specs

    def report(self, fault, /):
        self._faults.append(fault)
        self.logger.log(fault.message, fault.severity)

    def _match(self, token):
        if self.registry.lookup(token) is None:
            return None
        for spec in self._active:
            if token in spec:
                return spec
        return None

    def _slice(self, args, index, spec):
        """
        Values following the switch at 'index', per the switch's arity.

        The passthrough boundary ends the values for every arity; UNTIL_NEXT also
        stops at the next switch-looking token.
        """
        if spec.arity == FLAG:
            return []
        values = []
        for token in args[index + 1:]:
            if token == PASSTHROUGH or len(values) == spec.arity:
                break
            if spec.arity == UNTIL_NEXT and prefixed(token) is not None:
                break
            values.append(token)
        return values

    def _arguments(self, spec, values, token, position):
        """
        Positional arguments for one handler call, or None when the call is dropped.
        """
        if (type := spec.type) is Unset:
            if spec.arity in (FLAG, 0):
                return ()
            return (list(values),)

        converted = []
        malformed = False
        for offset, raw in enumerate(values, start=1):
            try:
                converted.append(coerce(raw, type))
            except MalformedValueError as exception:
                malformed = True
                self.report(MalformedValueError(
                    "%s for switch %r at %s position" % (exception.message, token, _ordinal(position + offset)),
                    **(dict(exception.options) | {"input": token, "index": position + offset}),
                ))

        if malformed:
            return None
        if type.array:
            return (converted,)
        return (converted[0],)

    def _suggest(self, token):
        forms = [form for spec in self._active for form in spec.names.forms]
        suggestions = difflib.get_close_matches(token, forms, 5)
        try:
            return suggestions, "did you mean %r? run '-h' to see all switches" % suggestions[0]
        except IndexError:
            return suggestions, "run '-h' to see all switches"

    def process(self, argv, target, /):
        """
        Parse 'argv' (program name excluded) against the switches of 'target'.

        Returns
        - the residual argv: every token not consumed as a switch or a switch value,
          in original order (including '--' and all that follows it).

        Raises
        - MissingHandlerError: a named handler does not resolve on the target.
        - SystemExit: when the settings ask to quit after help or on errors.
        """
        if isinstance(argv, str) or not isinstance(argv, Iterable):
            raise TypeError("process() first argument must be an iterable of strings")
        args = list(argv)
        if not all(isinstance(arg, str) for arg in args):
            raise TypeError("process() first argument must be an iterable of strings")

        self._faults.clear()
        self.refresh(target)

        if not args or args[0] in split(HELP_SPECIFIER):
            self.helper.show(args)
            if self.settings.quit_after_help:
                sys.exit(0)
            return args

        # original 1-based positions, kept aligned with args while tokens are removed
        positions = list(range(1, len(args) + 1))
        unknown = []
        queue = []
        seen = set()
        failed = False

        index = 0
        while index < len(args):
            token = args[index]
            if token == PASSTHROUGH:
                break
            if prefixed(token) is None:
                index += 1
                continue

            position = positions[index]
            if (spec := self._match(token)) is None:
                unknown.append((token, position))
                index += 1
                continue

            values = self._slice(args, index, spec)
            if spec.arity >= 0 and len(values) < spec.arity:
                self.report(InsufficientArgumentsError(
                    "insufficient argument count for switch %r at %s position (expected %d, got %d)" % (
                        token, _ordinal(position), spec.arity, len(values)
                    ),
                    input=token,
                    index=position,
                    expected=spec.arity,
                    got=len(values),
                    hint="add the missing value%s after %s" % ("" if spec.arity == 1 else "s", token),
                ))

            # the switch and its values leave the working copy; index stays on the next token
            del args[index:index + 1 + len(values)]
            del positions[index:index + 1 + len(values)]

            if spec in seen and not self.settings.allow_repeats:
                failed = True
                self.report(RepeatedSwitchError(
                    "switch %r at %s position was already provided" % (token, _ordinal(position)),
                    input=token,
                    index=position,
                    hint="keep a single %s" % spec.specifier,
                ))
                continue
            seen.add(spec)

            handler = resolve_handler(target, spec)
            if spec.type is not Unset and not spec.type.array and not values:
                # scalar switch without its value, already reported as insufficient
                continue
            if (arguments := self._arguments(spec, values, token, position)) is None:
                failed = True
                continue
            queue.append(ArgStorage(handler, spec.type, values, token, arguments))

        for token, position in unknown:
            suggestions, hint = self._suggest(token)
            self.report(UnknownSwitchError(
                "unknown switch %r at %s position" % (token, _ordinal(position)),
                input=token,
                index=position,
                suggestions=suggestions,
                hint=hint,
            ))

        if unknown or failed:
            if self.settings.quit_on_error:
                sys.exit(1)
            if self.settings.strict:
                return args

        for storage in queue:
            storage.handler(*storage.arguments)

        return args


def process_arguments(target, argv=Unset, /, **options):
    """
    Convenience runner: parse argv against a target with a freshly built processor.

    Parameters
    - target: SwitchSet, class, module or object carrying switch specs.
    - argv:
      • Unset: sys.argv[1:].
      • str: split with shlex.split.
      • Iterable[str]: used as-is.
    - **options: forwarded to ArgumentProcessor (registry, scanner, logger,
      settings, helper). A SwitchSet target lends its own registry by default.

    Returns
    - the residual argv (see ArgumentProcessor.process).
    """
    if argv is Unset:
        tokens = sys.argv[1:]
    elif isinstance(argv, str):
        tokens = shlex.split(argv)
    elif isinstance(argv, Iterable):
        tokens = list(argv)
    else:
        raise TypeError("process_arguments() argument must be a string or an iterable of strings")

    registry = options.pop("registry", target.registry if isinstance(target, SwitchSet) else Unset)
    return ArgumentProcessor(registry, **options).process(tokens, target)


__all__ = (
    "ArgumentProcessor",
    "ArgStorage",
    "process_arguments",
    "PASSTHROUGH",
)
