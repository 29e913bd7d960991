"""
Tri-state optional for JSON fields.

This module defines `JsonOptional`, an immutable value that tells apart the
three ways a JSON object can carry (or not carry) a field:

    undefined      the key is absent:                {}
    null           the key is present with null:     {"value": null}
    defined(v)     the key is present with a value:  {"value": "v"}

It reads like a classic optional, with one deliberate difference: callbacks
given to if_present(), if_present_or_else(), filter(), filter_to_null(),
map(), map_to_null() and flat_map() are invoked with the raw payload
whenever the key is present, which means they receive None in the null
state. Only the undefined state skips them.

Important
- undefined() and null_value() return cached instances. That is an
  implementation detail: compare with is_undefined()/is_null() or ==, never
  with `is`.
- defined(None) cannot exist. of(None) is an error; of_nullable(None) and
  every other possibly-None entry point resolve to null.

Example
    >>> name = JsonOptional.of_nullable(payload.get("name"))
    >>> name.map(str.upper).or_else("anonymous")
"""
import functools
from enum import Enum
from typing import Generic, TypeVar

from rich.text import Text

from .faults import IllegalArgumentError, NoSuchElementError, NullContractError, trigger
from .utils import requirecallable, styles

T = TypeVar("T")


class Presence(Enum):
    """
    The three states of a JsonOptional (tag of the tagged union).
    """
    UNDEFINED = "undefined"
    NULL = "null"
    DEFINED = "defined"

    def __repr__(self):
        return "Presence.%s" % self.name


class JsonOptional(Generic[T]):
    """
    Immutable tri-state value: undefined, null, or defined(payload).

    Notes
    - This type is final; subclassing is blocked to preserve semantics.
    - Instances are created through the class-method factories only.
    - Equality and hashing are structural over (presence, payload).
    """
    __slots__ = ("_presence", "_value")

    def __new__(cls, *unused, **ignored):
        raise TypeError(
            "cannot create 'JsonOptional' instances directly; "
            "use undefined(), null_value(), of() or of_nullable()"
        )

    @classmethod
    def _make(cls, presence, value=None, /):
        self = object.__new__(cls)
        object.__setattr__(self, "_presence", presence)
        object.__setattr__(self, "_value", value)
        return self

    # --- construction -------------------------------------------------------

    @classmethod
    @functools.cache
    def undefined(cls):
        """
        Return the undefined JsonOptional (the key is absent).
        """
        return cls._make(Presence.UNDEFINED)

    @classmethod
    def empty(cls):
        """
        Alias of undefined().
        """
        return cls.undefined()

    @classmethod
    def absent(cls):
        """
        Alias of undefined().
        """
        return cls.undefined()

    @classmethod
    @functools.cache
    def null_value(cls):
        """
        Return the null JsonOptional (the key is present with a null value).
        """
        return cls._make(Presence.NULL)

    @classmethod
    def of(cls, value, /):
        """
        Return a defined JsonOptional holding value.

        Raises IllegalArgumentError when value is None; use of_nullable() when
        None is a legitimate input.
        """
        if value is None:
            trigger(
                IllegalArgumentError("of() argument must not be None"),
                title="illegal argument",
                hint="use JsonOptional.of_nullable() to map None to the null state",
            )
        return cls._make(Presence.DEFINED, value)

    @classmethod
    def of_nullable(cls, value, /):
        """
        Return null_value() when value is None, otherwise of(value).
        """
        return cls.null_value() if value is None else cls.of(value)

    # --- queries ------------------------------------------------------------

    @property
    def presence(self):
        return self._presence

    def get(self):
        """
        Return the payload, None in the null state.

        The result is None for null even though the call "succeeded": check
        is_null() first when that distinction matters.

        Raises NoSuchElementError when undefined.
        """
        if self._presence is Presence.UNDEFINED:
            trigger(NoSuchElementError("no value present"), title="no such element")
        return self._value

    def is_present(self):
        """
        True when the key exists, whatever its value (null or defined).
        """
        return self._presence is not Presence.UNDEFINED

    def is_null(self):
        return self._presence is Presence.NULL

    def is_undefined(self):
        return self._presence is Presence.UNDEFINED

    is_empty = is_undefined

    # --- callbacks ----------------------------------------------------------

    def if_present(self, action, /):
        """
        Call action(payload) when present; the payload is None in the null state.
        """
        requirecallable(action, "if_present()")
        if self.is_present():
            action(self._value)

    def if_present_or_else(self, action, fallback, /):
        """
        Call action(payload) when present, otherwise call fallback().

        As with if_present(), action receives None in the null state.
        """
        requirecallable(action, "if_present_or_else()")
        requirecallable(fallback, "if_present_or_else()")
        if self.is_present():
            action(self._value)
        else:
            fallback()

    def filter(self, predicate, /):
        """
        Keep self when undefined or when predicate(payload) holds, else undefined().

        predicate receives None in the null state.
        """
        requirecallable(predicate, "filter()")
        if not self.is_present():
            return self
        return self if predicate(self._value) else type(self).undefined()

    def filter_to_null(self, predicate, /):
        """
        Like filter(), but a failing predicate yields null_value() instead.
        """
        requirecallable(predicate, "filter_to_null()")
        if not self.is_present():
            return self
        return self if predicate(self._value) else type(self).null_value()

    def map(self, mapper, /):
        """
        Apply mapper to the payload when present.

        - undefined                      -> undefined
        - mapper(payload) returns None   -> undefined
        - otherwise                      -> of(result)

        mapper receives None in the null state, so map(identity) turns a
        null into undefined. Use map_to_null() to keep null as null.
        """
        requirecallable(mapper, "map()")
        if not self.is_present():
            return type(self).undefined()
        result = mapper(self._value)
        return type(self).undefined() if result is None else type(self).of(result)

    def map_to_null(self, mapper, /):
        """
        Like map(), but a None result yields null_value() instead of undefined.
        """
        requirecallable(mapper, "map_to_null()")
        if not self.is_present():
            return type(self).undefined()
        return type(self).of_nullable(mapper(self._value))

    def flat_map(self, mapper, /):
        """
        Return mapper(payload) as-is when present, undefined otherwise.

        mapper must return a JsonOptional; None raises NullContractError.
        """
        requirecallable(mapper, "flat_map()")
        if not self.is_present():
            return type(self).undefined()
        return _checked(mapper(self._value), "flat_map()")

    def or_(self, supplier, /):
        """
        Return self when present, otherwise the JsonOptional produced by supplier().

        supplier must return a JsonOptional; None raises NullContractError.
        """
        requirecallable(supplier, "or_()")
        if self.is_present():
            return self
        return _checked(supplier(), "or_()")

    def stream(self):
        """
        Return a fresh iterator over zero (undefined) or one item (the raw payload).
        """
        if not self.is_present():
            return iter(())
        return iter((self._value,))

    __iter__ = stream

    # --- fallbacks ----------------------------------------------------------

    def or_else(self, other, /):
        """
        Return the payload (None for null) when present, otherwise other.
        """
        return self._value if self.is_present() else other

    def or_else_get(self, supplier, /):
        """
        Return the payload (None for null) when present, otherwise supplier().
        """
        if self.is_present():
            return self._value
        return requirecallable(supplier, "or_else_get()")()

    def or_else_raise(self, exception_supplier=None, /):
        """
        Return the payload (None for null) when present.

        When undefined, raise exception_supplier() if given, otherwise
        NoSuchElementError.
        """
        if self.is_present():
            return self._value
        if exception_supplier is None:
            trigger(NoSuchElementError("no value present"), title="no such element")
        raise requirecallable(exception_supplier, "or_else_raise()")()

    # --- value protocol -----------------------------------------------------

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, JsonOptional):
            return NotImplemented
        return self._presence is other._presence and self._value == other._value

    def __hash__(self):
        return hash((self._presence, self._value))

    def __repr__(self):
        match self._presence:
            case Presence.UNDEFINED:
                return "JsonOptional.undefined"
            case Presence.NULL:
                return "JsonOptional.null"
            case _:
                return "JsonOptional[%r]" % (self._value,)

    def __rich__(self):
        """
        Rich protocol hook: render the state with host-overridable styles.
        """
        style = styles({
            "optional-name": "bold",
            "optional-undefined": "dim",
            "optional-null": "italic #FFB400",
            "optional-value": "#9CE19C",
        })
        match self._presence:
            case Presence.UNDEFINED:
                return Text.assemble(("JsonOptional", style["optional-name"]), ".", ("undefined", style["optional-undefined"]))
            case Presence.NULL:
                return Text.assemble(("JsonOptional", style["optional-name"]), ".", ("null", style["optional-null"]))
            case _:
                return Text.assemble(("JsonOptional", style["optional-name"]), "[", (repr(self._value), style["optional-value"]), "]")

    def __setattr__(self, name, value):
        raise AttributeError("'JsonOptional' object is immutable")

    def __delattr__(self, name):
        raise AttributeError("'JsonOptional' object is immutable")

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        match self._presence:
            case Presence.UNDEFINED:
                return JsonOptional.undefined, ()
            case Presence.NULL:
                return JsonOptional.null_value, ()
            case _:
                return JsonOptional.of, (self._value,)

    def __init_subclass__(cls, **options):
        """
        Prevent subclassing to preserve the tri-state guarantees.
        """
        raise TypeError("type 'JsonOptional' is not an acceptable base type")

    @classmethod
    def __get_pydantic_core_schema__(cls, source, handler):
        from .models import schema
        return schema(source, handler)


def _checked(result, name, /):
    # The callback contract of flat_map()/or_(): a JsonOptional, never None.
    if result is None:
        trigger(
            NullContractError("%s callback returned None" % name),
            title="null contract",
            hint="return JsonOptional.undefined() or JsonOptional.null_value() instead",
        )
    if not isinstance(result, JsonOptional):
        raise TypeError("%s callback must return a JsonOptional, not %s" % (name, type(result).__name__))
    return result


__all__ = (
    "Presence",
    "JsonOptional",
)
