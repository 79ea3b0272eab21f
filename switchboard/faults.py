"""
Switchboard faults (errors raised or reported while defining and parsing switches).

Scope
- FaultCode: canonical, stable numeric identifiers for every fault, grouped by domain.
- SwitchException: base type carrying a message plus read-only options (input, hint,
  value, ...) and knowing its default severity.
- Definition faults (InvalidSpecError and friends, UnsupportedTypeError,
  MissingHandlerError) are raised: they are integration mistakes.
- Input faults (UnknownSwitchError, InsufficientArgumentsError, MalformedValueError,
  RepeatedSwitchError) are never raised by the processor. They are reported through
  the logger collaborator and collected on the processor for inspection.

Conventions
- Messages are lowercased, short and name the offending token.
- Hints are optional one-line suggestions; renderers treat them as optional.
"""
from enum import IntEnum
from types import MappingProxyType

from .logger import Severity
from .utils import Unset


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - definition (211xx): MALFORMED_SPECIFIER, DUPLICATE_SWITCH, INVALID_SPEC,
      UNSUPPORTED_TYPE, MISSING_HANDLER
    - input (212xx): UNKNOWN_SWITCH, INSUFFICIENT_ARGUMENTS, MALFORMED_VALUE,
      REPEATED_SWITCH

    normalize() lets the host remap codes to its own labels through a __codes__
    mapping in __main__.
    """
    # --- definition faults (211xx) ---
    INVALID_SPEC                = 21101
    MALFORMED_SPECIFIER         = 21102
    DUPLICATE_SWITCH            = 21103
    UNSUPPORTED_TYPE            = 21104
    MISSING_HANDLER             = 21105

    # --- input faults (212xx) ---
    UNKNOWN_SWITCH              = 21201
    INSUFFICIENT_ARGUMENTS      = 21202
    MALFORMED_VALUE             = 21203
    REPEATED_SWITCH             = 21204

    def normalize(self):
        """
        return a host-normalized string for this code.

        when __main__ defines no __codes__ mapping (or the code is not in it), the
        numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class SwitchException(Exception):
    """
    base type of every switchboard fault.

    attributes
    - message: str, the human-readable, lowercased message.
    - options: read-only mapping of context (input, hint, value, specifier, ...).
    - code: FaultCode of the concrete type.
    - severity: Severity used when the fault is reported rather than raised.
    """
    code = FaultCode.INVALID_SPEC
    severity = Severity.FATAL

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__} message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def hint(self):
        return self.options.get("hint", Unset)

    @property
    def input(self):
        return self.options.get("input", Unset)


class InvalidSpecError(SwitchException):
    code = FaultCode.INVALID_SPEC


class MalformedSpecifierError(InvalidSpecError):
    code = FaultCode.MALFORMED_SPECIFIER


class DuplicateSwitchError(InvalidSpecError):
    code = FaultCode.DUPLICATE_SWITCH


class UnsupportedTypeError(SwitchException):
    code = FaultCode.UNSUPPORTED_TYPE


class MissingHandlerError(SwitchException):
    code = FaultCode.MISSING_HANDLER


class UnknownSwitchError(SwitchException):
    code = FaultCode.UNKNOWN_SWITCH
    severity = Severity.WARNING


class InsufficientArgumentsError(SwitchException):
    code = FaultCode.INSUFFICIENT_ARGUMENTS


class MalformedValueError(SwitchException):
    code = FaultCode.MALFORMED_VALUE


class RepeatedSwitchError(SwitchException):
    code = FaultCode.REPEATED_SWITCH


__all__ = (
    "FaultCode",
    "SwitchException",
    "InvalidSpecError",
    "MalformedSpecifierError",
    "DuplicateSwitchError",
    "UnsupportedTypeError",
    "MissingHandlerError",
    "UnknownSwitchError",
    "InsufficientArgumentsError",
    "MalformedValueError",
    "RepeatedSwitchError",
)
