"""AWS-backed adapters."""

from ocrchat.boundary.aws.s3_client import S3BlobStore

__all__ = ["S3BlobStore"]
