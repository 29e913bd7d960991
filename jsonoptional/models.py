"""
pydantic binding for JsonOptional.

Declaring a field

    class Patch(JsonOptionalModel):
        name: JsonOptional[str] = JsonOptional.undefined()

gives the three JSON states a distinct value on the model:

    Patch.model_validate_json('{}')                -> name == undefined
    Patch.model_validate_json('{"name": null}')    -> name == null
    Patch.model_validate_json('{"name": "x"}')     -> name == JsonOptional['x']

The field default is pydantic's absence hook: it is the only way an
undefined value gets into a model. The core schema built here only decides
null versus value, and forwards the value to the payload type's own schema.

On the way out, null dumps as null, defined(v) dumps as the payload's own
serialization, and JsonOptionalModel drops undefined fields entirely so the
dump reproduces the shape of the input. On a plain BaseModel an undefined
field dumps as null; use model_dump(exclude_defaults=True) there.
"""
from pydantic import BaseModel, model_serializer
from pydantic.errors import PydanticSchemaGenerationError
from pydantic_core import core_schema

from .faults import SchemaError, trigger
from .optional import JsonOptional
from .serde import argument, deserializer, serializer


class _ValidatorDecoder:
    # One-token cursor over the input of a wrap validator.
    __slots__ = ("_value", "_handler")

    def __init__(self, value, handler):
        self._value = value
        self._handler = handler

    def decode_null(self):
        return self._value is None

    def decode(self, type, /):
        return self._handler(self._value)


def schema(source, handler):
    """
    Build the pydantic-core schema of JsonOptional[X].

    Raises SchemaError when pydantic cannot generate a schema for X.
    """
    inner = argument(source)
    try:
        payload = handler.generate_schema(inner)
    except PydanticSchemaGenerationError as error:
        trigger(
            SchemaError("cannot resolve a schema for the payload type %r" % (inner,)),
            cause=error,
            title="unresolved schema",
            hint="declare a pydantic-compatible payload type or allow arbitrary types",
        )
    nullable = core_schema.nullable_schema(payload)

    def validate(value, validator):
        if isinstance(value, JsonOptional):
            if value.is_undefined():
                return value
            # re-validate the payload of an instance given in python mode
            value = value.get()
        return deserializer.deserialize(_ValidatorDecoder(value, validator), source)

    def serialize(value, encode):
        if serializer.omit(value):
            # dropped by JsonOptionalModel
            return None
        return serializer.serialize(value, encode)

    return core_schema.no_info_wrap_validator_function(
        validate,
        nullable,
        serialization=core_schema.wrap_serializer_function_ser_schema(serialize, info_arg=False, schema=nullable),
    )


class JsonOptionalModel(BaseModel):
    """
    BaseModel that leaves undefined JsonOptional fields out of its dumps.
    """

    @model_serializer(mode="wrap")
    def omit_undefined(self, handler):
        data = handler(self)
        if not isinstance(data, dict):
            return data
        for name, field in type(self).model_fields.items():
            value = getattr(self, name, None)
            if not isinstance(value, JsonOptional) or not serializer.omit(value):
                continue
            for key in {name, field.alias, field.serialization_alias} - {None}:
                data.pop(key, None)
        return data


__all__ = (
    "schema",
    "JsonOptionalModel",
)
