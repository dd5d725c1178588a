"""Core type definitions."""

from typing import NewType

# Content item identifier (e.g., a page ID from the content store)
# Zero is reserved for "no parent"
ItemId = NewType("ItemId", int)
