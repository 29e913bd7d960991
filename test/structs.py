"""
Tests for the msgspec binding.

Scope
- Decoding {}, {"value": null} and {"value": "x"} into the three states.
- Encoding back to the same JSON shape through JsonOptionalStruct.
- Payload validation, hook fallbacks and the encoder/decoder factories.
"""
import unittest
from typing import Any
from unittest import TestCase

import msgspec

from jsonoptional import JsonOptional, UndefinedEncodingError
from jsonoptional.structs import (
    JsonOptionalStruct,
    convert,
    dec_hook,
    decode,
    decoder,
    enc_hook,
    encode,
    encoder,
    to_builtins,
)


class Patch(JsonOptionalStruct):
    value: JsonOptional[str] = JsonOptional.undefined()


class Counted(JsonOptionalStruct):
    count: JsonOptional[int] = JsonOptional.undefined()
    tags: JsonOptional[list[str]] = JsonOptional.undefined()


class Outer(JsonOptionalStruct):
    inner: JsonOptional[Patch] = JsonOptional.undefined()


class DecodeTest(TestCase):
    """
    JSON input to the three states.
    """

    def testAbsentIsUndefined(self) -> None:
        self.assertEqual(decode(b'{}', type=Patch).value, JsonOptional.undefined())

    def testNullIsNull(self) -> None:
        self.assertEqual(decode(b'{"value": null}', type=Patch).value, JsonOptional.null_value())

    def testValueIsDefined(self) -> None:
        self.assertEqual(decode(b'{"value": "x"}', type=Patch).value, JsonOptional.of("x"))

    def testPayloadValidated(self) -> None:
        with self.assertRaises(msgspec.ValidationError):
            decode(b'{"count": "x"}', type=Counted)

    def testContainerPayload(self) -> None:
        decoded = decode(b'{"tags": ["a", "b"]}', type=Counted)
        self.assertEqual(decoded.tags, JsonOptional.of(["a", "b"]))
        self.assertTrue(decoded.count.is_undefined())

    def testNested(self) -> None:
        outer = decode(b'{"inner": {"value": null}}', type=Outer)
        self.assertTrue(outer.inner.get().value.is_null())
        self.assertTrue(decode(b'{"inner": null}', type=Outer).inner.is_null())

    def testDecoderFactory(self) -> None:
        self.assertEqual(decoder(Patch).decode(b'{"value": "x"}'), Patch(JsonOptional.of("x")))

    def testConvert(self) -> None:
        self.assertEqual(convert({"value": None}, Patch), Patch(JsonOptional.null_value()))
        self.assertEqual(convert({}, Patch), Patch())


class EncodeTest(TestCase):
    """
    Encoding back to the input shape.
    """

    def testRoundTrip(self) -> None:
        for text in (b'{}', b'{"value":null}', b'{"value":"x"}'):
            with self.subTest(text=text):
                self.assertEqual(encode(decode(text, type=Patch)), text)

    def testEncoderFactory(self) -> None:
        self.assertEqual(encoder().encode(Patch(JsonOptional.of("x"))), b'{"value":"x"}')

    def testNestedEncode(self) -> None:
        self.assertEqual(encode(Outer(JsonOptional.of(Patch()))), b'{"inner":{}}')

    def testToBuiltins(self) -> None:
        self.assertEqual(to_builtins(Counted(count=JsonOptional.null_value())), {"count": None})
        self.assertEqual(to_builtins(Counted()), {})


class HookTest(TestCase):
    """
    The hooks called directly.
    """

    def testDecHook(self) -> None:
        self.assertEqual(dec_hook(JsonOptional[int], 1), JsonOptional.of(1))
        self.assertEqual(dec_hook(JsonOptional[int], None), JsonOptional.null_value())
        self.assertEqual(dec_hook(JsonOptional, {"a": 1}), JsonOptional.of({"a": 1}))

    def testDecHookKeepsInstances(self) -> None:
        self.assertEqual(dec_hook(JsonOptional[int], JsonOptional.of(1)), JsonOptional.of(1))

    def testDecHookPayloadError(self) -> None:
        with self.assertRaises(msgspec.ValidationError):
            dec_hook(JsonOptional[int], "x")

    def testDecHookForeignType(self) -> None:
        with self.assertRaises(NotImplementedError):
            dec_hook(complex, 1)

    def testEncHook(self) -> None:
        self.assertIsNone(enc_hook(JsonOptional.null_value()))
        self.assertEqual(enc_hook(JsonOptional.of("x")), "x")

    def testEncHookUndefined(self) -> None:
        with self.assertRaises(UndefinedEncodingError):
            enc_hook(JsonOptional.undefined())

    def testEncHookForeignType(self) -> None:
        with self.assertRaises(NotImplementedError):
            enc_hook(object())

    def testAnyPayload(self) -> None:
        self.assertEqual(decode(b'{"a": null}', type=dict[str, JsonOptional[Any]]), {"a": JsonOptional.null_value()})


if __name__ == '__main__':
    unittest.main()
