from __future__ import annotations

from typing import Any, BinaryIO

import boto3
from boto3.s3.transfer import TransferConfig
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from bucket_sync.config import StoreSettings
from bucket_sync.errors import ClientInitError, ObjectNotFoundError
from bucket_sync.store.object_store import ListPage, ObjectStore

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


def _error_code(exc: ClientError) -> str:
    response = getattr(exc, "response", None) or {}
    error = response.get("Error") or {}
    return str(error.get("Code") or "")


def build_client_config(settings: StoreSettings) -> Config:
    return Config(
        s3={"addressing_style": settings.url_style},
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
        retries={"max_attempts": settings.max_attempts, "mode": "standard"},
    )


def build_transfer_config() -> TransferConfig:
    # Multipart parts go out one at a time on the calling thread.
    return TransferConfig(use_threads=False)


class Boto3S3Store(ObjectStore):
    """S3/MinIO adapter using boto3."""

    def __init__(self, client: Any, *, page_size: int | None = None) -> None:
        self._client = client
        self.page_size = page_size

    @classmethod
    def from_profile(cls, profile: str, settings: StoreSettings | None = None) -> Boto3S3Store:
        """Build a store from a named profile in the shared AWS config files.

        Raises ClientInitError when the profile is unknown, the client cannot be
        created, or no credentials resolve for the profile.
        """

        settings = settings or StoreSettings()
        try:
            session = boto3.Session(profile_name=profile)
            if session.get_credentials() is None:
                raise ClientInitError(profile, "no credentials resolved")
            client = session.client(
                "s3",
                endpoint_url=settings.endpoint_url,
                region_name=settings.region,
                config=build_client_config(settings),
            )
        except BotoCoreError as exc:
            raise ClientInitError(profile, str(exc)) from exc
        return cls(client, page_size=settings.page_size)

    def list_page(
        self, bucket: str, prefix: str | None = None, start_after: str | None = None
    ) -> ListPage:
        kwargs: dict[str, Any] = {"Bucket": bucket}
        if prefix:
            kwargs["Prefix"] = prefix
        if start_after:
            kwargs["StartAfter"] = start_after
        if self.page_size:
            kwargs["MaxKeys"] = self.page_size

        response = self._client.list_objects_v2(**kwargs)
        keys: list[str] = []
        for obj in response.get("Contents", []) or []:
            key = obj.get("Key")
            if key is not None:
                keys.append(key)
        return ListPage(keys=keys, truncated=bool(response.get("IsTruncated")))

    def get_object(self, bucket: str, key: str) -> BinaryIO:
        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
        except ClientError as exc:
            if _error_code(exc) in _NOT_FOUND_CODES:
                raise ObjectNotFoundError(bucket, key) from exc
            raise
        return response["Body"]

    def put_object(self, bucket: str, key: str, body: BinaryIO) -> None:
        # upload_fileobj accepts non-seekable streams such as a get_object body.
        self._client.upload_fileobj(
            Fileobj=body, Bucket=bucket, Key=key, Config=build_transfer_config()
        )
