"""
Runtime policy for the processor and help renderer.

Settings is an immutable, keyword-only bundle of switches that decide what happens
around parsing (not how tokens are matched):

- usage: str               headline printed above help ("Usage: <args>")
- prog: Unset | str        program name for reports (see logger.program_name)
- quit_after_help: bool    exit(0) after help was shown
- quit_on_error: bool      exit(1) after unknown switches or rejected values
- strict: bool             skip every handler when any input fault was found
- allow_repeats: bool      a switch may appear more than once (one call each)
- colorful: bool           styled help/report output

Derive variants with copy.replace(settings, strict=False).
"""
from .utils import *


def _sanitize_settings(metadata, /):
    if not isinstance(usage := metadata["usage"], str):
        raise TypeError("settings 'usage' must be a string")
    elif not (usage := usage.strip()):
        raise ValueError("settings 'usage' cannot be empty")
    metadata["usage"] = usage

    if not isinstance(prog := metadata["prog"], str | Unset):
        raise TypeError("settings 'prog' must be a string")
    elif isinstance(prog, str) and not (prog := prog.strip()):
        raise ValueError("settings 'prog' cannot be empty")
    metadata["prog"] = prog

    for name in ("quit_after_help", "quit_on_error", "strict", "allow_repeats", "colorful"):
        if not isinstance(metadata[name], bool):
            raise TypeError(f"settings {name!r} must be a boolean")


class Settings:
    __introspectable__ = (
        "usage",
        "prog",
        "quit_after_help",
        "quit_on_error",
        "strict",
        "allow_repeats",
        "colorful",
    )

    def __init__(
            self,
            *,
            usage="Usage: <args>",
            prog=Unset,
            quit_after_help=True,
            quit_on_error=True,
            strict=True,
            allow_repeats=True,
            colorful=True,
    ):
        metadata = {
            "usage": usage,
            "prog": prog,
            "quit_after_help": quit_after_help,
            "quit_on_error": quit_on_error,
            "strict": strict,
            "allow_repeats": allow_repeats,
            "colorful": colorful,
        }
        _sanitize_settings(metadata)
        for name, object in metadata.items():
            super().__setattr__("_" + name, object)

    usage = mirror("usage")
    prog = mirror("prog")
    quit_after_help = mirror("quit_after_help")
    quit_on_error = mirror("quit_on_error")
    strict = mirror("strict")
    allow_repeats = mirror("allow_repeats")
    colorful = mirror("colorful")

    def __setattr__(self, name, value, /):
        raise AttributeError("settings are read-only; use copy.replace()")

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        unknown = overrides.keys() - set(type(self).__introspectable__)
        if unknown:
            raise TypeError("unknown settings: %s" % ", ".join(sorted(unknown)))
        return type(self)(**{
            name: getattr(self, name) for name in type(self).__introspectable__
        } | overrides)

    def __eq__(self, other):
        if not isinstance(other, Settings):
            return NotImplemented
        return all(getattr(self, name) == getattr(other, name) for name in type(self).__introspectable__)

    def __hash__(self):
        return hash(tuple(getattr(self, name) for name in type(self).__introspectable__))

    def __repr__(self):
        return f"settings({", ".join("%s=%r" % (name, getattr(self, name)) for name in type(self).__introspectable__)})"


__all__ = (
    "Settings",
)
