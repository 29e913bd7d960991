"""
Framework-neutral (de)serialization contract for JsonOptional.

A JSON framework binds JsonOptional by giving this module a small cursor,
the `Decoder` collaborator:

    decode_null()  -> bool     is the current token a JSON null? (consumes it)
    decode(type)   -> object   decode the current token as the payload type

`JsonOptionalDeserializer` turns that cursor into null_value() or
of(decoded), and `default_value()` is what the framework must use for a
field that is absent from the payload. Detecting absence is the framework's
job, not the deserializer's: by the time deserialize() runs the framework has
already decided the field takes part in decoding.

`JsonOptionalSerializer` is the encoding half: undefined fields are omitted
by the host, null encodes as JSON null, defined(v) encodes as v.

Both classes are stateless; the module-level `deserializer` and `serializer`
instances are what the pydantic (models) and msgspec (structs) bindings use.
"""
from typing import Protocol

from .faults import SchemaError, UndefinedEncodingError, trigger
from .optional import JsonOptional
from .utils import typeargument


class Decoder(Protocol):
    def decode_null(self): ...
    def decode(self, type, /): ...


def argument(type, /):
    """
    Return the payload type declared by a JsonOptional annotation.

    - JsonOptional[X] -> X
    - JsonOptional    -> Any

    Raises SchemaError for anything else.
    """
    try:
        return typeargument(type, JsonOptional)
    except TypeError as error:
        trigger(SchemaError(str(error)), cause=error, title="unresolved schema")


class JsonOptionalDeserializer:
    """
    Decode one field value into a JsonOptional.
    """

    def deserialize(self, decoder, type, /):
        """
        Return null_value() for a JSON null, otherwise of(decoder.decode(payload type)).

        Errors raised by decoder.decode() propagate unchanged.
        """
        inner = argument(type)
        if decoder.decode_null():
            return JsonOptional.null_value()
        return JsonOptional.of_nullable(decoder.decode(inner))

    def default_value(self, type=None, /):
        """
        Value for a field absent from the payload: undefined().
        """
        if type is not None:
            argument(type)
        return JsonOptional.undefined()

    def __repr__(self):
        return "JsonOptionalDeserializer()"


class JsonOptionalSerializer:
    """
    Encode one JsonOptional field value.
    """

    def omit(self, value, /):
        """
        True when the host must leave the field out of the encoded object.
        """
        return value.is_undefined()

    def serialize(self, value, encode=None, /):
        """
        Return None for null, encode(payload) for defined (payload when encode is None).

        Raises UndefinedEncodingError for undefined: the host should have
        omitted the field (see omit()).
        """
        if value.is_undefined():
            trigger(
                UndefinedEncodingError("cannot encode an undefined JsonOptional"),
                title="undefined encoding",
                hint="omit undefined fields (JsonOptionalModel / JsonOptionalStruct do this)",
            )
        if value.is_null():
            return None
        payload = value.get()
        return payload if encode is None else encode(payload)

    def __repr__(self):
        return "JsonOptionalSerializer()"


deserializer = JsonOptionalDeserializer()
serializer = JsonOptionalSerializer()


__all__ = (
    "Decoder",
    "argument",
    "JsonOptionalDeserializer",
    "JsonOptionalSerializer",
    "deserializer",
    "serializer",
)
