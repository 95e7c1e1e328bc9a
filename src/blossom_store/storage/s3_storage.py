"""S3-compatible blob storage

Blobs live under their digest as the object key, with the detected content
type as the object's Content-Type. Works with AWS S3 and compatible stores
(Tigris, R2, MinIO).
"""

import io
import threading
from typing import Any, Dict, Iterator, List, Optional

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from blossom_store.config.settings import S3Settings, validate_base_url
from blossom_store.logger import Logger, get_logger

from .base import BlobStorage, BlobStream, LoadResult, Redirect, require_blob_key
from .content_type import DEFAULT_CONTENT_TYPE, detect_content_type
from .exceptions import (
    BackendReadError,
    BackendWriteError,
    NotFoundError,
    OperationCancelledError,
)
from .metadata import BlobInfo, blob_url, is_blob_key

_NOT_FOUND_CODES = frozenset({"NoSuchKey", "NotFound", "404"})

_BACKEND_ERRORS = (BotoCoreError, ClientError)


def _error_code(exc: Exception) -> Optional[str]:
    if isinstance(exc, ClientError):
        return exc.response.get("Error", {}).get("Code")
    return None


def is_not_found(exc: Exception) -> bool:
    """True if a backend error means the key does not exist."""
    return _error_code(exc) in _NOT_FOUND_CODES


def create_s3_client(settings: S3Settings) -> Any:
    """Build a boto3 S3 client for the configured endpoint.

    Automatic retries are disabled: every operation makes exactly one
    attempt and reports its outcome to the caller.
    """
    boto_config = BotoConfig(
        region_name=settings.region,
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
        retries={"total_max_attempts": 1, "mode": "standard"},
        s3={"addressing_style": "virtual"},
    )
    return boto3.client(
        "s3",
        endpoint_url=settings.endpoint,
        region_name=settings.region,
        aws_access_key_id=settings.access_key_id,
        aws_secret_access_key=settings.secret_access_key,
        config=boto_config,
    )


class S3BlobStorage(BlobStorage):
    """
    Blob storage in a single S3 bucket

    The client handle and configuration are fixed at construction and
    shared read-only by all calls, so one instance may serve concurrent
    requests. Concurrent stores of the same digest are last-write-wins.
    """

    def __init__(
        self,
        client: Any,
        bucket: str,
        public_url: Optional[str] = None,
        service_url: str = "",
        logger: Optional[Logger] = None,
    ):
        """
        Initialize storage and run the advisory bucket check

        Args:
            client: boto3 S3 client (or compatible)
            bucket: Bucket holding the blobs
            public_url: Public/CDN base URL; enables redirect mode
            service_url: Base URL of this service, used for blob URLs otherwise
            logger: Logger, defaults to the package logger
        """
        self._client = client
        self._bucket = bucket
        self._public_url = public_url.rstrip("/") if public_url else None
        self._service_url = service_url.rstrip("/")
        self._logger = logger or get_logger()

        # Startup continues even if the check fails
        self.verify_bucket_access()

        self._logger.info(
            "S3 storage initialized",
            bucket=bucket,
            redirect_mode=self._public_url is not None,
        )

    @classmethod
    def from_settings(cls, settings: S3Settings, logger: Optional[Logger] = None) -> "S3BlobStorage":
        """Create storage with a client built from settings"""
        storage_logger = logger or get_logger()
        storage_logger.debug("Creating S3 client", endpoint=settings.endpoint, region=settings.region)
        return cls(
            client=create_s3_client(settings),
            bucket=settings.bucket,
            public_url=settings.public_url,
            service_url=settings.service_url,
            logger=storage_logger,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def redirect_enabled(self) -> bool:
        return self._public_url is not None

    def verify_bucket_access(self) -> bool:
        """
        Check that the bucket is reachable

        Returns:
            True if HeadBucket succeeded. Failures are logged, never raised.
        """
        try:
            self._client.head_bucket(Bucket=self._bucket)
        except _BACKEND_ERRORS as e:
            self._logger.warning(
                "Could not verify S3 bucket access",
                bucket=self._bucket,
                error=str(e),
            )
            return False
        return True

    def _base_url(self) -> str:
        """Base URL for blob URLs; a malformed public URL raises ConfigurationError"""
        if self._public_url is not None:
            return validate_base_url(self._public_url, "S3_PUBLIC_URL")
        return self._service_url

    def blob_url(self, sha256: str) -> str:
        return blob_url(self._base_url(), sha256)

    def store_blob(self, sha256: str, data: bytes) -> str:
        require_blob_key(sha256, "store")
        content_type = detect_content_type(data)

        try:
            self._client.put_object(
                Bucket=self._bucket,
                Key=sha256,
                Body=data,
                ContentType=content_type,
            )
        except _BACKEND_ERRORS as e:
            self._logger.error("Failed to store blob", sha256=sha256, error=str(e))
            raise BackendWriteError(
                f"Failed to upload blob to S3: {e}",
                operation="put_object",
                key=sha256,
                bucket=self._bucket,
            ) from e

        self._logger.info("Blob stored", sha256=sha256, size=len(data), content_type=content_type)
        return content_type

    def load_blob(self, sha256: str, buffered: bool = True) -> LoadResult:
        require_blob_key(sha256, "load")

        if self._public_url is not None:
            redirect_url = self.blob_url(sha256)
            self._logger.debug("Redirecting blob load", sha256=sha256, url=redirect_url)
            return Redirect(url=redirect_url)

        try:
            response = self._client.get_object(Bucket=self._bucket, Key=sha256)
        except _BACKEND_ERRORS as e:
            if is_not_found(e):
                raise NotFoundError(
                    f"Blob not found: {sha256}",
                    operation="get_object",
                    key=sha256,
                    bucket=self._bucket,
                ) from e
            raise BackendReadError(
                f"Failed to get blob from S3: {e}",
                operation="get_object",
                key=sha256,
                bucket=self._bucket,
            ) from e

        body = response["Body"]
        content_type = response.get("ContentType")
        size = response.get("ContentLength")

        if not buffered:
            return BlobStream(reader=body, content_type=content_type, size=size)

        try:
            data = body.read()
        except _BACKEND_ERRORS as e:
            raise BackendReadError(
                f"Failed to read blob data: {e}",
                operation="get_object",
                key=sha256,
                bucket=self._bucket,
            ) from e
        finally:
            body.close()

        return BlobStream(reader=io.BytesIO(data), content_type=content_type, size=len(data))

    def delete_blob(self, sha256: str) -> None:
        require_blob_key(sha256, "delete")

        try:
            self._client.delete_object(Bucket=self._bucket, Key=sha256)
        except _BACKEND_ERRORS as e:
            if is_not_found(e):
                raise NotFoundError(
                    f"Blob not found: {sha256}",
                    operation="delete_object",
                    key=sha256,
                    bucket=self._bucket,
                ) from e
            raise BackendWriteError(
                f"Failed to delete blob from S3: {e}",
                operation="delete_object",
                key=sha256,
                bucket=self._bucket,
            ) from e

        self._logger.info("Blob deleted", sha256=sha256)

    def blob_exists(self, sha256: str) -> bool:
        require_blob_key(sha256, "exists")

        try:
            self._client.head_object(Bucket=self._bucket, Key=sha256)
        except _BACKEND_ERRORS as e:
            if is_not_found(e):
                return False
            raise BackendReadError(
                f"Failed to check blob in S3: {e}",
                operation="head_object",
                key=sha256,
                bucket=self._bucket,
            ) from e
        return True

    def list_blobs(self, cancel_event: Optional[threading.Event] = None) -> List[BlobInfo]:
        base_url = self._base_url()
        blobs: List[BlobInfo] = []
        skipped = 0

        for page in self._iter_pages(cancel_event):
            for obj in page.get("Contents", []):
                key = obj["Key"]
                if not is_blob_key(key):
                    skipped += 1
                    continue

                self._check_cancelled(cancel_event, key)
                blobs.append(
                    BlobInfo(
                        sha256=key,
                        size=obj.get("Size", 0),
                        content_type=self._lookup_content_type(key),
                        url=blob_url(base_url, key),
                        uploaded_at=obj["LastModified"],
                    )
                )

        self._logger.info("Listed blobs", count=len(blobs), skipped=skipped)
        return blobs

    def _iter_pages(self, cancel_event: Optional[threading.Event]) -> Iterator[Dict[str, Any]]:
        """Yield ListObjectsV2 pages until the backend reports no more"""
        paginator = self._client.get_paginator("list_objects_v2")
        pages = iter(paginator.paginate(Bucket=self._bucket))
        while True:
            self._check_cancelled(cancel_event)
            try:
                page = next(pages)
            except StopIteration:
                return
            except _BACKEND_ERRORS as e:
                raise BackendReadError(
                    f"Failed to list S3 objects: {e}",
                    operation="list_objects_v2",
                    bucket=self._bucket,
                ) from e
            yield page

    def _lookup_content_type(self, key: str) -> str:
        """Stored Content-Type of an object, or the default when unavailable"""
        try:
            head = self._client.head_object(Bucket=self._bucket, Key=key)
        except _BACKEND_ERRORS as e:
            self._logger.debug("Content type lookup failed", sha256=key, error=str(e))
            return DEFAULT_CONTENT_TYPE
        return head.get("ContentType") or DEFAULT_CONTENT_TYPE

    def _check_cancelled(self, cancel_event: Optional[threading.Event], key: Optional[str] = None) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise OperationCancelledError(
                "Blob listing cancelled",
                operation="list_objects_v2",
                key=key,
                bucket=self._bucket,
            )
