from __future__ import annotations

import hashlib
import math
from enum import IntEnum, StrEnum

import pytest
from pydantic import BaseModel

from sset import CanonicalizationFailure, Collection, SSet, SSetConfig, canonicalize, hash_of
from sset.kernel.canonical import encode


class Point(BaseModel):
    x: int
    y: int


class Color(StrEnum):
    RED = "red"


class Level(IntEnum):
    HIGH = 3


class TestCanonicalize:
    """Reduction to the serialization-safe form."""

    def test_primitives_pass_through(self) -> None:
        for value in (None, True, False, 0, -7, 2.5, "text", ""):
            assert canonicalize(value) == value

    def test_tuples_become_lists(self) -> None:
        assert canonicalize((1, (2, 3))) == [1, [2, 3]]

    def test_integral_floats_become_ints(self) -> None:
        result = canonicalize(3.0)
        assert result == 3
        assert isinstance(result, int)

    def test_bool_is_not_an_int(self) -> None:
        assert canonicalize(True) is True
        assert hash_of(True) != hash_of(1)
        assert hash_of(False) != hash_of(0)

    def test_nested_structures(self) -> None:
        value = {"a": [1, {"b": (None, 2.0)}], "c": "d"}
        assert canonicalize(value) == {"a": [1, {"b": [None, 2]}], "c": "d"}

    def test_input_is_not_modified(self) -> None:
        value = {"a": (1, 2)}
        result = canonicalize(value)
        result["a"].append(3)
        assert value == {"a": (1, 2)}

    def test_shared_references_are_not_cycles(self) -> None:
        shared = [1]
        assert canonicalize([shared, shared]) == [[1], [1]]

    def test_pydantic_models_reduce_to_mappings(self) -> None:
        assert canonicalize(Point(x=1, y=2)) == {"x": 1, "y": 2}
        assert hash_of(Point(x=1, y=2)) == hash_of({"y": 2, "x": 1})

    def test_enum_members_reduce_to_plain_values(self) -> None:
        text = canonicalize({"color": Color.RED})
        assert type(text["color"]) is str
        assert text == {"color": "red"}
        number = canonicalize([Level.HIGH])
        assert type(number[0]) is int
        assert hash_of(Color.RED) == hash_of("red")
        assert type(SSet.from_array([Color.RED]).to_array()[0]) is str

    def test_nested_sets_reduce_to_their_serialized_form(self) -> None:
        inner = SSet.from_array(["b", "a"])
        assert canonicalize({"labels": inner}) == {"labels": inner.to_json()}
        assert canonicalize([Collection.from_array(["a", "b"])]) == [inner.to_json()]
        assert hash_of({"labels": inner}) == hash_of({"labels": SSet.from_array(["a", "b"])})


class TestCanonicalizationFailure:
    """Unsupported constructs are rejected, never dropped."""

    def test_cycle_in_list(self) -> None:
        value: list = []
        value.append(value)
        with pytest.raises(CanonicalizationFailure) as info:
            canonicalize(value)
        assert info.value.path == "$[0]"
        assert "Cyclic" in str(info.value)

    def test_cycle_in_mapping(self) -> None:
        value: dict = {"items": []}
        value["items"].append(value)
        with pytest.raises(CanonicalizationFailure) as info:
            canonicalize(value)
        assert info.value.path == "$.items[0]"

    def test_non_string_key(self) -> None:
        with pytest.raises(CanonicalizationFailure):
            canonicalize({1: "one"})

    @pytest.mark.parametrize("number", [math.nan, math.inf, -math.inf])
    def test_non_finite_numbers(self, number: float) -> None:
        with pytest.raises(CanonicalizationFailure):
            canonicalize([number])

    @pytest.mark.parametrize("value", [{1, 2}, b"raw", lambda: None, object()])
    def test_unsupported_types(self, value: object) -> None:
        with pytest.raises(CanonicalizationFailure) as info:
            canonicalize({"field": value})
        assert info.value.path == "$.field"
        assert info.value.raw_value is value

    def test_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            canonicalize(object())


class TestHashOf:
    """Identity keys."""

    def test_matches_sha256_of_compact_sorted_json(self) -> None:
        expected = hashlib.sha256(b'{"a":[1,2],"b":"x"}').hexdigest()
        assert hash_of({"b": "x", "a": [1, 2]}) == expected

    def test_key_order_does_not_matter(self) -> None:
        assert hash_of({"a": 1, "b": 2}) == hash_of({"b": 2, "a": 1})

    def test_stable_across_calls(self) -> None:
        value = {"name": "set", "tags": ["a", "b"], "weight": 0.25}
        assert hash_of(value) == hash_of(value) == hash_of(dict(value))

    def test_list_order_matters(self) -> None:
        assert hash_of([1, 2]) != hash_of([2, 1])

    def test_unicode_is_encoded_as_utf8(self) -> None:
        assert encode("é") == '"é"'.encode("utf-8")

    def test_configured_algorithm(self) -> None:
        config = SSetConfig(hash_algorithm="md5")
        assert hash_of(1, config) == hashlib.md5(b"1").hexdigest()
        assert len(hash_of(1, config)) == 32

    def test_float_normalization_can_be_disabled(self) -> None:
        config = SSetConfig(normalize_integral_floats=False)
        assert hash_of(1.0, config) != hash_of(1, config)
        assert hash_of(1.0) == hash_of(1)


class TestSSetConfig:
    def test_unknown_algorithm_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            SSetConfig(hash_algorithm="not-a-hash")

    def test_variable_length_digest_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            SSetConfig(hash_algorithm="shake_128")
