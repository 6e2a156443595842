"""
S3 blob store.

Pathname-addressable get/put over one bucket. Pathnames are used
verbatim as object keys.

Dependencies: boto3, botocore
System role: Storage for uploaded source files
"""

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ocrchat.core.exceptions import BlobNotFoundError, StoreUnavailableError

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


class S3BlobStore:
    """Blob store backed by an S3 (or S3-compatible) bucket."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        client: Any | None = None,
    ) -> None:
        """
        Initialize the blob store.

        The boto3 client is created lazily so an unconfigured bucket only
        fails when a blob is actually requested.

        Args:
            bucket: Bucket name; empty means storage is not configured
            region: AWS region of the bucket
            endpoint_url: Optional endpoint for S3-compatible stores
            client: Preconfigured boto3 S3 client (tests inject a mock)
        """
        self._bucket = bucket
        self._region = region
        self._endpoint_url = endpoint_url
        self._s3_client = client

    @property
    def bucket(self) -> str:
        return self._bucket

    def _client(self, operation: str) -> Any:
        if not self._bucket:
            raise StoreUnavailableError(
                "Blob store bucket is not configured", operation=operation
            )
        if self._s3_client is None:
            self._s3_client = boto3.client(
                "s3", region_name=self._region, endpoint_url=self._endpoint_url
            )
        return self._s3_client

    def get(self, pathname: str) -> bytes:
        """
        Read an object's bytes.

        Args:
            pathname: Object key

        Returns:
            bytes: Object body

        Raises:
            BlobNotFoundError: If the key does not exist
            StoreUnavailableError: On configuration or connectivity errors
        """
        client = self._client("get")
        try:
            response = client.get_object(Bucket=self._bucket, Key=pathname)
            return response["Body"].read()
        except ClientError as e:
            code = str(e.response.get("Error", {}).get("Code", ""))
            if code in _NOT_FOUND_CODES:
                raise BlobNotFoundError(pathname) from e
            logger.error(f"{__name__}:get - S3 error {code} for {pathname}")
            raise StoreUnavailableError(
                f"Blob store error: {code or e}", operation="get"
            ) from e
        except BotoCoreError as e:
            logger.error(f"{__name__}:get - S3 unreachable: {e}")
            raise StoreUnavailableError(f"Blob store unreachable: {e}", operation="get") from e

    def put(
        self,
        pathname: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        """
        Write bytes under a pathname, overwriting any existing object.

        Args:
            pathname: Object key
            data: Bytes to store
            content_type: MIME type recorded on the object

        Returns:
            str: The pathname written

        Raises:
            StoreUnavailableError: On configuration or connectivity errors
        """
        client = self._client("put")
        try:
            client.put_object(
                Bucket=self._bucket, Key=pathname, Body=data, ContentType=content_type
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"{__name__}:put - S3 write failed for {pathname}: {e}")
            raise StoreUnavailableError(f"Blob store write failed: {e}", operation="put") from e
        logger.info(f"{__name__}:put - Stored {len(data)} bytes at {pathname}")
        return pathname
