"""Metadata feature module for the ARC69 toolkit.

Provides reading, querying and publishing of ARC69 asset metadata.
"""

from arc69.features.metadata.document import (
    STANDARD,
    Attribute,
    JSONValue,
    Metadata,
    get_property,
)
from arc69.features.metadata.service import Arc69Service, MetadataRecord

__all__ = [
    "STANDARD",
    "Attribute",
    "JSONValue",
    "Metadata",
    "MetadataRecord",
    "Arc69Service",
    "get_property",
]
