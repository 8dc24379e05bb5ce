"""ARC69 metadata document and nested property lookup.

Reference: https://github.com/algokittens/arc69
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union

from arc69.errors import MetadataEncodingError, PropertyError

STANDARD = "arc69"
PATH_SEPARATOR = "."

JSONValue = Union[
    None, bool, int, float, str, list["JSONValue"], dict[str, "JSONValue"]
]


def get_property(properties: Mapping[str, Any] | None, path: str) -> JSONValue:
    """Resolve a dot-delimited ``path`` (e.g. ``"p1.p2.p3"``) in ``properties``.

    The stored value is returned as-is, whether it is a leaf or a nested
    mapping. On failure a :class:`PropertyError` names the part of the path
    that was walked.
    """
    if path == "":
        raise PropertyError("no path provided")

    cursor: Any = properties if properties is not None else {}
    seen: list[str] = []

    for key in path.split(PATH_SEPARATOR):
        if not isinstance(cursor, Mapping):
            prefix = PATH_SEPARATOR.join(seen)
            raise PropertyError(
                f"unable to get property {path}: property {prefix} is not a map",
                path=path,
                prefix=prefix,
            )

        seen.append(key)
        if key not in cursor:
            prefix = PATH_SEPARATOR.join(seen)
            raise PropertyError(
                f"unable to get property {path}: property {prefix} is not valid",
                path=path,
                prefix=prefix,
            )
        cursor = cursor[key]

    return cursor


@dataclass
class Attribute:
    trait_type: str = ""
    value: Any = ""

    def to_dict(self) -> dict[str, Any]:
        return {"trait_type": self.trait_type, "value": self.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Attribute":
        return cls(
            trait_type=data.get("trait_type", ""),
            value=data.get("value", ""),
        )


@dataclass
class Metadata:
    standard: str = STANDARD
    description: str = ""
    external_url: str = ""
    media_url: str = ""
    properties: dict[str, JSONValue] = field(default_factory=dict)
    mime_type: str = ""
    attributes: list[Attribute] = field(default_factory=list)

    def is_valid(self) -> bool:
        return self.standard == STANDARD

    def property(self, path: str) -> JSONValue:
        return get_property(self.properties, path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "standard": self.standard,
            "description": self.description,
            "external_url": self.external_url,
            "media_url": self.media_url,
            "properties": self.properties,
            "mime_type": self.mime_type,
            "attributes": [attribute.to_dict() for attribute in self.attributes],
        }

    def to_json(self) -> str:
        try:
            return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise MetadataEncodingError(
                f"unable to convert metadata to JSON: {e}"
            ) from e

    def to_note(self) -> bytes:
        return self.to_json().encode("utf-8")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Metadata":
        properties = data.get("properties") or {}
        if not isinstance(properties, dict):
            raise MetadataEncodingError(
                "unable to parse metadata: properties must be an object"
            )

        attributes = data.get("attributes") or []
        if not isinstance(attributes, list) or not all(
            isinstance(item, Mapping) for item in attributes
        ):
            raise MetadataEncodingError(
                "unable to parse metadata: attributes must be a list of objects"
            )

        return cls(
            standard=data.get("standard", ""),
            description=data.get("description", ""),
            external_url=data.get("external_url", ""),
            media_url=data.get("media_url", ""),
            properties=properties,
            mime_type=data.get("mime_type", ""),
            attributes=[Attribute.from_dict(item) for item in attributes],
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> "Metadata":
        try:
            data = json.loads(text)
        except (ValueError, UnicodeDecodeError) as e:
            raise MetadataEncodingError(f"unable to parse metadata: {e}") from e

        if not isinstance(data, dict):
            raise MetadataEncodingError(
                "unable to parse metadata: document must be a JSON object"
            )
        return cls.from_dict(data)

    @classmethod
    def from_note(cls, note: bytes) -> "Metadata":
        return cls.from_json(note)
