"""
Switchboard logging collaborator.

Scope
- Severity: the three levels a report can carry (info, warning, fatal).
- Logger: the protocol the processor reports input faults through.
- ConsoleLogger: default implementation printing through a rich console and
  terminating the process on fatal reports.

Integration
- The processor never exits on its own for bad user input. It hands a message and a
  severity to its logger; whether that ends the process is the logger's decision.
- Replace the logger to collect reports (tests) or to route them elsewhere.

Styling
- Severity labels are coloured white/yellow/red. The palette can be overridden by a
  __styles__ mapping in __main__ (keys: "prog-name", "info", "warning", "fatal",
  "message").
"""
import os.path
import sys
from enum import IntEnum
from typing import Protocol

from rich.console import Console
from rich.text import Text

from .utils import Unset, palette


class Severity(IntEnum):
    """
    report severities, ordered from least to most serious.

    the numeric value doubles as the process exit status used by ConsoleLogger
    when a fatal report terminates the run.
    """
    INFO = 1
    WARNING = 2
    FATAL = 3

    @property
    def label(self):
        return {Severity.INFO: "message", Severity.WARNING: "warning", Severity.FATAL: "fatal"}[self]


class Logger(Protocol):
    def log(self, message, severity, /): ...


def program_name(prog=Unset, /):
    """
    resolve the program name shown in reports and help.

    lookup order
    - an explicit name,
    - __prog__ defined in __main__,
    - the basename of sys.argv[0] (or "app" when it is empty).
    """
    if prog is not Unset:
        return prog
    if prog := getattr(__import__("__main__"), "__prog__", None):
        return prog
    return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "app"


class ConsoleLogger:
    """
    Default logger: prints "<prog>: <severity>: <message>" lines to stderr.

    Parameters
    - prog: Unset | str
      Program name for the line prefix (see program_name()).
    - colorful: bool
      Colour the prefix and severity label; plain text otherwise.
    - exit_on_fatal: bool
      Terminate the process with the severity value as exit status on fatal reports.
    - console: Unset | rich.console.Console
      Destination console; defaults to a stderr console.
    """

    def __init__(self, prog=Unset, /, *, colorful=True, exit_on_fatal=True, console=Unset):
        if not isinstance(prog, str | Unset):
            raise TypeError("logger 'prog' must be a string")
        self.prog = prog
        self.colorful = bool(colorful)
        self.exit_on_fatal = bool(exit_on_fatal)
        self.console = Console(stderr=True, highlight=False) if console is Unset else console

    def render(self, message, severity, /):
        severity = Severity(severity)
        style = palette({
            "prog-name": "bold #E6E6F0",
            "info": "white",
            "warning": "yellow",
            "fatal": "bold red",
            "message": "",
        }, colorful=self.colorful)

        return Text.assemble(
            (program_name(self.prog), style("prog-name")),
            ": ",
            (severity.label, style(severity.name.lower())),
            ": ",
            (str(message), style("message")),
        )

    def log(self, message, severity=Severity.INFO, /):
        severity = Severity(severity)
        self.console.print(self.render(message, severity))
        if severity >= Severity.FATAL and self.exit_on_fatal:
            sys.exit(int(severity))


__all__ = (
    "Severity",
    "Logger",
    "ConsoleLogger",
    "program_name",
)
