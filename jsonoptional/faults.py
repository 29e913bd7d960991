"""
jsonoptional faults (errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every error the
  library raises. Codes are grouped by domain (construction, access,
  callbacks, schema) to keep logs and searches predictable.
- JsonOptionalException: base type that carries message + options and knows
  how to render itself through rich.
- trigger(): central entry point that raises any fault with its context.

Taxonomy
- IllegalArgumentError   (ValueError)   of(None)
- NoSuchElementError     (LookupError)  get() / or_else_raise() while undefined
- NullContractError      (TypeError)    flat_map() / or_() callback returned None
- SchemaError            (TypeError)    payload decoder cannot be resolved
- UndefinedEncodingError (SchemaError)  an undefined value reached an encoder

Every fault also derives from the builtin listed above so callers that do
not know this module can still catch it the usual way.

Integration
- Library code builds a fault and calls trigger(fault, code=..., title=..., hint=...).
- Faults are never retried, recovered or logged internally; they propagate.
"""
from enum import IntEnum
from types import MappingProxyType

from rich.console import Group
from rich.text import Text

from .utils import styles


class FaultCode(IntEnum):
    """
    canonical fault codes used across the library (stable identifiers).

    grouping (by high-level domain)
    - construction (2110x)
      • ILLEGAL_ARGUMENT
    - access (2111x)
      • NO_SUCH_ELEMENT
    - callbacks (2112x)
      • NULL_CONTRACT
    - schema/binding (2113x)
      • UNRESOLVED_SCHEMA, UNDEFINED_ENCODING

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- construction (21xxx) ---
    ILLEGAL_ARGUMENT   = 21101

    # --- access (21xxx) ---
    NO_SUCH_ELEMENT    = 21111

    # --- callbacks (21xxx) ---
    NULL_CONTRACT      = 21121

    # --- schema/binding (21xxx) ---
    UNRESOLVED_SCHEMA  = 21131
    UNDEFINED_ENCODING = 21132

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class JsonOptionalException(Exception):
    """
    base class of every fault raised by jsonoptional.

    message is the one-sentence body; options hold the rendering context
    (code, title, hint) and any extra detail the raiser attached.
    """
    code = None

    def __init__(self, message, /, **options):
        assert isinstance(message, str)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return self.message

    def __rich__(self):
        style = styles({
            # header parts
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

        code = self.options.get("code", self.code)
        title = self.options.get("title", type(self).__name__)

        header = Text.assemble(
            "[ ",
            (code.normalize() if code is not None else "?", style["code"]),
            " | ",
            (title.title(), style["error-title"]),
            " ]"
        )
        message = Text(self.message, style["error-message"])

        if not self.options.get("hint"):
            return Group(header, message)

        hint = Text.assemble((" → ", style["hint-arrow"]), (self.options["hint"], style["hint"]))
        return Group(header, message, hint)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class IllegalArgumentError(JsonOptionalException, ValueError):
    code = FaultCode.ILLEGAL_ARGUMENT


class NoSuchElementError(JsonOptionalException, LookupError):
    code = FaultCode.NO_SUCH_ELEMENT


class NullContractError(JsonOptionalException, TypeError):
    code = FaultCode.NULL_CONTRACT


class SchemaError(JsonOptionalException, TypeError):
    code = FaultCode.UNRESOLVED_SCHEMA


class UndefinedEncodingError(SchemaError):
    code = FaultCode.UNDEFINED_ENCODING


def trigger(fault, /, cause=None, **options):
    """
    raise a fault with the given context options.

    contract
    - fault must be a JsonOptionalException (any __replace__-capable exception works).
    - options are merged into the fault via __replace__(**options) before raising.
    - cause, when given, becomes the __cause__ of the raised fault; otherwise
      the implicit context is suppressed so tracebacks stay short.
    """
    if not hasattr(fault, "__replace__") or not callable(fault.__replace__):
        raise TypeError("trigger() argument must have a __replace__ method")
    raise fault.__replace__(**options) from cause


__all__ = (
    "FaultCode",
    "JsonOptionalException",
    "IllegalArgumentError",
    "NoSuchElementError",
    "NullContractError",
    "SchemaError",
    "UndefinedEncodingError",
    "trigger",
)
