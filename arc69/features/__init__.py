"""Feature modules for the ARC69 toolkit.

- metadata: ARC69 document model, property lookup, fetch and update
"""

from arc69.features import metadata

__all__ = ["metadata"]
