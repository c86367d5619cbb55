"""Object store abstractions and implementations."""

from bucket_sync.store.object_store import ListPage, ObjectStore
from bucket_sync.store.stores import Boto3S3Store

__all__ = ["Boto3S3Store", "ListPage", "ObjectStore"]
