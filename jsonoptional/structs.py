"""
msgspec binding for JsonOptional.

msgspec treats JsonOptional as a custom type: it decodes the field's JSON
token generically and hands it to dec_hook(type, obj), and it hands
JsonOptional values to enc_hook(obj) when encoding. The hooks here forward
to the framework-neutral contract in jsonoptional.serde.

Absence is handled by the struct default, exactly like pydantic:

    class Patch(JsonOptionalStruct):
        name: JsonOptional[str] = JsonOptional.undefined()

    decode(b'{}', type=Patch).name                 -> undefined
    decode(b'{"name": null}', type=Patch).name     -> null
    decode(b'{"name": "x"}', type=Patch).name      -> JsonOptional['x']

JsonOptionalStruct sets omit_defaults=True, so an undefined field (the
default) is left out of the encoded object and encode(decode(buf)) keeps
the shape of buf.
"""
from typing import Any, get_origin

import msgspec

from .optional import JsonOptional
from .serde import deserializer, serializer


class _HookDecoder:
    # One-token cursor over an object msgspec already decoded generically.
    __slots__ = ("_object",)

    def __init__(self, object):
        self._object = object

    def decode_null(self):
        return self._object is None

    def decode(self, type, /):
        return msgspec.convert(self._object, type, dec_hook=dec_hook)


def dec_hook(type, obj):
    """
    msgspec decode hook: JsonOptional / JsonOptional[X] from a decoded JSON token.

    Other types raise NotImplementedError, msgspec's signal for unsupported types.
    """
    if type is JsonOptional or get_origin(type) is JsonOptional:
        if isinstance(obj, JsonOptional):
            return obj
        return deserializer.deserialize(_HookDecoder(obj), type)
    raise NotImplementedError("objects of type %r are not supported" % (type,))


def enc_hook(obj):
    """
    msgspec encode hook: null -> None, defined(v) -> v.

    Undefined raises UndefinedEncodingError; declare the field on a
    JsonOptionalStruct (omit_defaults=True) so it is omitted instead.
    """
    if isinstance(obj, JsonOptional):
        return serializer.serialize(obj)
    raise NotImplementedError("objects of type %s are not supported" % type(obj).__name__)


class JsonOptionalStruct(msgspec.Struct, omit_defaults=True):
    """
    msgspec.Struct base whose undefined JsonOptional fields are omitted on encode.
    """


def encoder(**options):
    return msgspec.json.Encoder(enc_hook=enc_hook, **options)


def decoder(type=Any, /, **options):
    return msgspec.json.Decoder(type, dec_hook=dec_hook, **options)


def encode(obj, /):
    return msgspec.json.encode(obj, enc_hook=enc_hook)


def decode(buf, /, *, type=Any):
    return msgspec.json.decode(buf, type=type, dec_hook=dec_hook)


def convert(obj, type, /):
    """
    Convert already-parsed builtins (e.g. a dict from another JSON parser) to type.
    """
    return msgspec.convert(obj, type, dec_hook=dec_hook)


def to_builtins(obj, /):
    return msgspec.to_builtins(obj, enc_hook=enc_hook)


__all__ = (
    "dec_hook",
    "enc_hook",
    "JsonOptionalStruct",
    "encoder",
    "decoder",
    "encode",
    "decode",
    "convert",
    "to_builtins",
)
