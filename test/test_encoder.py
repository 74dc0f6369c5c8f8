import json
import os
import sys
from collections import OrderedDict
from datetime import date
from decimal import Decimal

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from flow_debug.debug import UNDEFINED, DebugConfig, DebugEncoder, EncodedValue


class Error(Exception):
    pass


class AppError(Exception):
    def __init__(self, message):
        super().__init__("wrapped")
        self.message = message


class ValidationError:
    """Error-shaped object that is not an exception."""

    def __init__(self):
        self.name = "ValidationError"
        self.message = "field is required"
        self.field = "email"


class Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y

    def __str__(self):
        return f"Point({self.x}, {self.y})"


class Unprintable:
    def __str__(self):
        raise RuntimeError("no string form")


class Weird:
    @property
    def __class__(self):
        raise RuntimeError("no class for you")


class TestEncoderProperties:
    """Bounded, deterministic encoding of every kind of value."""

    def setup_method(self):
        self.encoder = DebugEncoder(DebugConfig(max_length=1000))

    def test_zero_is_a_number(self):
        assert self.encoder.encode(0) == EncodedValue(format="number", payload="0")

    def test_null_and_undefined_share_placeholder(self):
        null = self.encoder.encode(None)
        undefined = self.encoder.encode(UNDEFINED)
        assert null == EncodedValue(format="null", payload="(undefined)")
        assert undefined == EncodedValue(format="undefined", payload="(undefined)")
        assert null.format != undefined.format

    def test_error(self):
        encoded = self.encoder.encode(Error("boom"))
        assert encoded.format == "error"
        assert json.loads(encoded.payload) == {"name": "Error", "message": "boom"}

    def test_error_prefers_message_attribute(self):
        encoded = self.encoder.encode(AppError("explicit"))
        assert json.loads(encoded.payload) == {"name": "AppError", "message": "explicit"}

    def test_large_array_is_cut_to_max_length(self):
        encoded = self.encoder.encode(list(range(2000)))
        assert encoded.format == "array[2000]"
        decoded = json.loads(encoded.payload)
        assert len(decoded) == 1000
        assert decoded == list(range(1000))

    def test_internal_handles_are_redacted(self):
        request = {"headers": {"host": "example"}, "body": "x" * 100000}
        request["self"] = request
        encoded = self.encoder.encode({"payload": 1, "_req": request, "_res": object()})
        assert encoded.format == "Object"
        decoded = json.loads(encoded.payload)
        assert decoded == {"payload": 1, "_req": "[internal]", "_res": "[internal]"}

    def test_long_string(self):
        encoded = self.encoder.encode("a" * 5000)
        assert encoded.format == "string[5000]"
        assert encoded.payload == "a" * 1000 + "..."
        assert len(encoded.payload) == 1003

    def test_short_string_untouched(self):
        assert self.encoder.encode("hello") == EncodedValue(format="string[5]", payload="hello")

    def test_encoding_is_idempotent(self):
        value = {"a": [1, 2, {"b": "c" * 2000}], "err": ValueError("x")}
        value["loop"] = value
        assert self.encoder.encode(value) == self.encoder.encode(value)

    def test_self_referencing_object_terminates(self):
        value = {"a": 1}
        value["self"] = value
        encoded = self.encoder.encode(value)
        assert json.loads(encoded.payload) == {"a": 1, "self": "[Circular ~]"}

    def test_self_referencing_array_terminates(self):
        value = [1]
        value.append(value)
        encoded = self.encoder.encode(value)
        assert encoded.format == "array[2]"
        assert json.loads(encoded.payload) == [1, "[Circular ~]"]

    def test_deep_nesting_is_elided(self):
        value = []
        for _ in range(20000):
            value = [value]
        encoded = self.encoder.encode(value)
        assert encoded.format == "array[1]"
        assert '"[Array]"' in encoded.payload
        json.loads(encoded.payload)

    def test_internal_handles_never_leak_next_to_other_leaves(self):
        encoded = self.encoder.encode({
            "_req": {"authorization": "Bearer SECRET-TOKEN"},
            "when": date(2024, 1, 1),
        })
        assert "SECRET-TOKEN" not in encoded.payload
        assert json.loads(encoded.payload) == {"_req": "[internal]", "when": "2024-01-01"}

    def test_shared_references_stay_small(self):
        value = [1]
        for _ in range(40):
            value = [value, value]
        encoded = DebugEncoder(DebugConfig(max_length=10)).encode(value)
        assert encoded.format == "array[2]"
        assert len(encoded.payload) < 20000
        assert "[Repeated ~.0]" in json.loads(encoded.payload)

    def test_wide_mappings_are_bounded(self):
        encoder = DebugEncoder(DebugConfig(max_length=10))
        wide = {str(i): i for i in range(50000)}

        encoded = encoder.encode(wide)
        assert encoded.format == "Object"
        assert json.loads(encoded.payload) == {str(i): i for i in range(10)}

        nested = json.loads(encoder.encode({"m": wide}).payload)
        assert nested["m"]["kind"] == "object"
        assert nested["m"]["length"] == 50000
        assert len(nested["m"]["data"]) == 10

    def test_non_finite_floats_are_null(self):
        def reject(constant):
            raise ValueError(constant)

        encoded = self.encoder.encode({"x": float("nan"), "y": [float("inf")]})
        assert json.loads(encoded.payload, parse_constant=reject) == {"x": None, "y": [None]}


class TestEncoderCategories:
    """Format tag and payload per value category."""

    def setup_method(self):
        self.encoder = DebugEncoder(DebugConfig(max_length=10))

    def test_booleans(self):
        assert self.encoder.encode(True) == EncodedValue(format="boolean", payload="true")
        assert self.encoder.encode(False) == EncodedValue(format="boolean", payload="false")

    @pytest.mark.parametrize("value, payload", [
        (42, "42"),
        (-1.5, "-1.5"),
        (Decimal("1.10"), "1.10"),
    ])
    def test_numbers(self, value, payload):
        assert self.encoder.encode(value) == EncodedValue(format="number", payload=payload)

    def test_long_number_is_cut(self):
        assert self.encoder.encode(10 ** 50) == EncodedValue(format="number", payload="1000000000...")

    def test_error_message_is_bounded(self):
        encoded = self.encoder.encode(Error("x" * 50))
        assert json.loads(encoded.payload) == {"name": "Error", "message": "x" * 10 + "..."}

    def test_binary_is_hex(self):
        assert self.encoder.encode(b"\x01\xff") == EncodedValue(format="buffer[2]", payload="01ff")
        assert self.encoder.encode(bytearray(b"\x00")) == EncodedValue(format="buffer[1]", payload="00")

    def test_binary_cut_by_characters(self):
        encoded = self.encoder.encode(bytes(range(11)))
        assert encoded.format == "buffer[11]"
        # 10 hex characters: five whole bytes
        assert encoded.payload == "0001020304"

        encoded = DebugEncoder(DebugConfig(max_length=3)).encode(b"\xab\xcd")
        assert encoded.payload == "abc"

    def test_error_like_object_keeps_name_and_message_only(self):
        encoded = self.encoder.encode(ValidationError())
        assert encoded.format == "ValidationError"
        assert json.loads(encoded.payload) == {"name": "ValidationError", "message": "field is required"}

    def test_opaque_object_uses_string_form(self):
        assert self.encoder.encode(Point(1, 2)) == EncodedValue(format="Point", payload="Point(1, 2)")

    def test_opaque_object_string_form_is_bounded(self):
        encoded = self.encoder.encode(Point("x" * 50, 0))
        assert encoded.payload == "Point(xxxx..."

    def test_unprintable_object(self):
        encoded = self.encoder.encode(Unprintable())
        assert encoded == EncodedValue(format="Unprintable", payload="[Type not printable]")

    def test_dict_subclass_is_opaque(self):
        encoded = self.encoder.encode(OrderedDict(a=1))
        assert encoded.format == "OrderedDict"
        assert encoded.payload.startswith("OrderedD")

    def test_tuple_is_an_array(self):
        encoded = self.encoder.encode((1, 2, 3))
        assert encoded.format == "array[3]"
        assert json.loads(encoded.payload) == [1, 2, 3]

    def test_nested_values_are_redacted(self):
        encoded = self.encoder.encode({
            "text": "y" * 20,
            "items": list(range(15)),
            "err": ValueError("bad"),
        })
        assert json.loads(encoded.payload) == {
            "text": "y" * 10 + "...",
            "items": {"truncated": True, "kind": "array", "data": list(range(10)), "length": 15},
            "err": "bad",
        }

    def test_unencodable_leaf_uses_its_string_form(self):
        encoded = DebugEncoder(DebugConfig(max_length=1000)).encode({"when": object()})
        assert encoded.format == "Object"
        assert json.loads(encoded.payload)["when"].startswith("<object object at")

    def test_unencodable_array_item_uses_its_string_form(self):
        encoded = DebugEncoder(DebugConfig(max_length=1000)).encode([object(), {1, 2}])
        assert encoded.format == "array[2]"
        decoded = json.loads(encoded.payload)
        assert decoded[0].startswith("<object object at")
        assert decoded[1] == "{1, 2}"

    def test_unclassifiable_value_does_not_raise(self):
        encoded = self.encoder.encode(Weird())
        assert encoded.format == "Object"
        assert isinstance(encoded.payload, str)
