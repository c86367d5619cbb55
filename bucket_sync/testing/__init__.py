"""Test helpers shipped with the package."""

from bucket_sync.testing.memory_store import MemoryS3Store, StoreOp

__all__ = ["MemoryS3Store", "StoreOp"]
