"""Unit tests for the ARC69 document and property lookup."""

from __future__ import annotations

import json

import pytest

from arc69.errors import MetadataEncodingError, PropertyError
from arc69.features.metadata.document import (
    STANDARD,
    Attribute,
    Metadata,
    get_property,
)


def check_property(meta: Metadata, path: str, want):
    assert meta.property(path) == want


class TestMetadataProperty:
    def test_property_success(self):
        meta = Metadata(
            properties={
                "a": "aa",
                "b": {"bb": "bbb"},
                "c": {"cc": {"ccc": "cccc"}},
            }
        )

        check_property(meta, "a", "aa")
        check_property(meta, "b.bb", "bbb")
        check_property(meta, "c.cc.ccc", "cccc")

    def test_property_returns_nested_map_unchanged(self):
        nested = {"cc": {"ccc": "cccc"}}
        meta = Metadata(properties={"c": nested})

        assert meta.property("c") is nested
        assert meta.property("c.cc") is nested["cc"]

    def test_property_returns_leaf_types(self):
        meta = Metadata(
            properties={
                "count": 3,
                "ratio": 0.5,
                "flag": False,
                "tags": ["x", "y"],
                "empty": None,
            }
        )

        assert meta.property("count") == 3
        assert meta.property("ratio") == 0.5
        assert meta.property("flag") is False
        assert meta.property("tags") == ["x", "y"]
        assert meta.property("empty") is None

    def test_missing_root_key(self):
        meta = Metadata(properties={"a": "aa"})

        with pytest.raises(PropertyError) as exc_info:
            meta.property("b")

        assert str(exc_info.value) == "unable to get property b: property b is not valid"
        assert exc_info.value.prefix == "b"

    def test_missing_root_key_reports_only_first_segment(self):
        meta = Metadata(properties={"a": "aa"})

        with pytest.raises(PropertyError) as exc_info:
            meta.property("x.y.z")

        assert str(exc_info.value) == (
            "unable to get property x.y.z: property x is not valid"
        )

    def test_missing_nested_key_includes_missing_segment(self):
        meta = Metadata(properties={"c": {"cc": {"ccc": "cccc"}}})

        with pytest.raises(PropertyError) as exc_info:
            meta.property("c.cc.ddd")

        assert str(exc_info.value) == (
            "unable to get property c.cc.ddd: property c.cc.ddd is not valid"
        )

    def test_leaf_is_not_a_map(self):
        meta = Metadata(properties={"a": "aa"})

        with pytest.raises(PropertyError) as exc_info:
            meta.property("a.aa")

        assert str(exc_info.value) == (
            "unable to get property a.aa: property a is not a map"
        )
        assert exc_info.value.prefix == "a"

    def test_deep_leaf_is_not_a_map(self):
        meta = Metadata(properties={"b": {"bb": "bbb"}})

        with pytest.raises(PropertyError) as exc_info:
            meta.property("b.bb.bbb.bbbb")

        assert str(exc_info.value) == (
            "unable to get property b.bb.bbb.bbbb: property b.bb is not a map"
        )

    def test_null_and_list_values_are_not_maps(self):
        meta = Metadata(properties={"n": None, "l": [{"x": 1}]})

        with pytest.raises(PropertyError, match="property n is not a map"):
            meta.property("n.x")
        with pytest.raises(PropertyError, match="property l is not a map"):
            meta.property("l.0")

    def test_empty_path(self):
        meta = Metadata(properties={"a": "aa"})

        with pytest.raises(PropertyError) as exc_info:
            meta.property("")

        assert str(exc_info.value) == "no path provided"

    def test_empty_properties(self):
        with pytest.raises(PropertyError) as exc_info:
            get_property(None, "a")

        assert str(exc_info.value) == "unable to get property a: property a is not valid"

    def test_lookup_does_not_mutate_properties(self):
        properties = {"b": {"bb": "bbb"}}
        snapshot = json.dumps(properties)

        get_property(properties, "b.bb")
        with pytest.raises(PropertyError):
            get_property(properties, "b.missing")

        assert json.dumps(properties) == snapshot


class TestMetadataIsValid:
    def test_valid_standard(self):
        assert Metadata(standard="arc69").is_valid() is True

    def test_other_standard(self):
        assert Metadata(standard="arc68").is_valid() is False

    def test_empty_standard(self):
        assert Metadata(standard="").is_valid() is False

    def test_standard_is_case_sensitive(self):
        assert Metadata(standard="ARC69").is_valid() is False
        assert Metadata(standard=" arc69").is_valid() is False

    def test_default_standard(self):
        assert Metadata().standard == STANDARD


class TestMetadataSerialization:
    def test_to_dict_field_names(self, sample_metadata):
        data = sample_metadata.to_dict()

        assert list(data) == [
            "standard",
            "description",
            "external_url",
            "media_url",
            "properties",
            "mime_type",
            "attributes",
        ]
        assert data["attributes"][0] == {"trait_type": "Background", "value": "Sunset"}

    def test_to_note_is_compact_utf8_json(self):
        meta = Metadata(description="café")

        note = meta.to_note()

        assert isinstance(note, bytes)
        assert "café".encode("utf-8") in note
        assert b", " not in note

    def test_from_json_reads_note(self, sample_metadata):
        parsed = Metadata.from_note(sample_metadata.to_note())

        assert parsed == sample_metadata
        assert parsed.property("traits.rarity.tier") == 2

    def test_from_json_ignores_unknown_fields_and_defaults_missing(self):
        parsed = Metadata.from_json('{"standard": "arc69", "name": "ignored"}')

        assert parsed.standard == "arc69"
        assert parsed.description == ""
        assert parsed.properties == {}
        assert parsed.attributes == []

    def test_from_json_missing_standard_is_invalid(self):
        parsed = Metadata.from_json('{"description": "no standard"}')

        assert parsed.is_valid() is False

    def test_from_json_null_properties(self):
        parsed = Metadata.from_json('{"standard": "arc69", "properties": null}')

        assert parsed.properties == {}

    def test_from_json_malformed(self):
        with pytest.raises(MetadataEncodingError, match="unable to parse metadata"):
            Metadata.from_json("{not json")

    def test_from_json_not_an_object(self):
        with pytest.raises(MetadataEncodingError, match="unable to parse metadata"):
            Metadata.from_json('["arc69"]')

    def test_from_json_bad_attributes(self):
        with pytest.raises(MetadataEncodingError):
            Metadata.from_json('{"attributes": "Sunset"}')

    def test_to_json_unserializable_property(self):
        meta = Metadata(properties={"bad": object()})

        with pytest.raises(MetadataEncodingError, match="unable to convert metadata to JSON"):
            meta.to_json()


class TestAttribute:
    def test_from_dict(self):
        attribute = Attribute.from_dict({"trait_type": "Level", "value": 3})

        assert attribute.trait_type == "Level"
        assert attribute.value == 3

    def test_from_dict_defaults(self):
        attribute = Attribute.from_dict({})

        assert attribute == Attribute(trait_type="", value="")
