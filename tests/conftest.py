"""Shared fixtures for blossom-store tests.

The S3 client is replaced by a dict-backed fake that mimics the boto3 calls
the storage makes and raises real botocore errors.
"""

import hashlib
import io
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional
from unittest import mock

import pytest
from botocore.exceptions import ClientError

from blossom_store.logger import Logger
from blossom_store.storage import S3BlobStorage

UPLOADED_AT = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def client_error(code: str, operation: str) -> ClientError:
    """Build a botocore ClientError with the given error code."""
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


def sha256_of(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


class FakePaginator:
    def __init__(self, client: "FakeS3Client"):
        self._client = client

    def paginate(self, Bucket: str) -> Iterator[Dict[str, Any]]:
        self._client.calls.append(("list_objects_v2", {"Bucket": Bucket}))
        keys = list(self._client.objects)
        size = self._client.page_size
        for page_number, start in enumerate(range(0, max(len(keys), 1), size)):
            if page_number == self._client.fail_list_at_page:
                raise client_error("InternalError", "ListObjectsV2")
            contents = [
                {
                    "Key": key,
                    "Size": len(self._client.objects[key]["Body"]),
                    "LastModified": self._client.objects[key]["LastModified"],
                }
                for key in keys[start:start + size]
            ]
            yield {"Contents": contents} if contents else {"KeyCount": 0}


class FakeS3Client:
    """In-memory stand-in for a boto3 S3 client"""

    def __init__(self, page_size: int = 1000):
        self.objects: Dict[str, Dict[str, Any]] = {}
        self.calls: List[tuple] = []
        self.failures: Dict[str, Exception] = {}
        self.page_size = page_size
        self.fail_list_at_page: Optional[int] = None

    def _call(self, operation: str, **kwargs: Any) -> None:
        self.calls.append((operation, kwargs))
        if operation in self.failures:
            raise self.failures[operation]

    def operations(self) -> List[str]:
        return [operation for operation, _ in self.calls]

    def head_bucket(self, Bucket: str) -> Dict[str, Any]:
        self._call("head_bucket", Bucket=Bucket)
        return {}

    def put_object(self, Bucket: str, Key: str, Body: bytes, ContentType: str) -> Dict[str, Any]:
        self._call("put_object", Bucket=Bucket, Key=Key, ContentType=ContentType)
        self.objects[Key] = {"Body": bytes(Body), "ContentType": ContentType, "LastModified": UPLOADED_AT}
        return {}

    def get_object(self, Bucket: str, Key: str) -> Dict[str, Any]:
        self._call("get_object", Bucket=Bucket, Key=Key)
        if Key not in self.objects:
            raise client_error("NoSuchKey", "GetObject")
        obj = self.objects[Key]
        return {
            "Body": io.BytesIO(obj["Body"]),
            "ContentType": obj["ContentType"],
            "ContentLength": len(obj["Body"]),
        }

    def head_object(self, Bucket: str, Key: str) -> Dict[str, Any]:
        self._call("head_object", Bucket=Bucket, Key=Key)
        if Key not in self.objects:
            raise client_error("404", "HeadObject")
        obj = self.objects[Key]
        head: Dict[str, Any] = {"ContentLength": len(obj["Body"])}
        if obj["ContentType"] is not None:
            head["ContentType"] = obj["ContentType"]
        return head

    def delete_object(self, Bucket: str, Key: str) -> Dict[str, Any]:
        self._call("delete_object", Bucket=Bucket, Key=Key)
        self.objects.pop(Key, None)
        return {}

    def get_paginator(self, operation: str) -> FakePaginator:
        assert operation == "list_objects_v2"
        return FakePaginator(self)

    def add_object(self, key: str, body: bytes, content_type: Optional[str] = None) -> None:
        """Place an object directly, bypassing the storage layer."""
        self.objects[key] = {"Body": body, "ContentType": content_type, "LastModified": UPLOADED_AT}


@pytest.fixture
def fake_client() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def mock_logger() -> mock.MagicMock:
    return mock.MagicMock(spec=Logger)


@pytest.fixture
def storage(fake_client: FakeS3Client, mock_logger: mock.MagicMock) -> S3BlobStorage:
    """Storage in stream mode"""
    return S3BlobStorage(
        client=fake_client,
        bucket="blobs",
        service_url="https://swarm.example",
        logger=mock_logger,
    )


@pytest.fixture
def redirect_storage(fake_client: FakeS3Client, mock_logger: mock.MagicMock) -> S3BlobStorage:
    """Storage in redirect mode"""
    return S3BlobStorage(
        client=fake_client,
        bucket="blobs",
        public_url="https://cdn.example",
        service_url="https://swarm.example",
        logger=mock_logger,
    )
