"""S3-backed avatar store.

boto3 is synchronous, so every call runs in a worker thread via
``asyncio.to_thread``.
"""

import asyncio
import time
from typing import Any, Optional
from urllib.parse import urlparse

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError, EndpointConnectionError

from core.config import settings
from core.exceptions import AvatarStorageError
from domain.entities.profile import AvatarUpload

logger = structlog.get_logger()


class S3AvatarStore:
    """Stores profile images under ``{key_prefix}/{user_id}-{epoch_ms}.{ext}``."""

    def __init__(
        self,
        bucket: str = settings.aws_s3_bucket_name,
        region: str = settings.aws_region,
        key_prefix: str = settings.avatar_key_prefix,
        client: Optional[Any] = None,
    ) -> None:
        self.bucket = bucket
        self.region = region or "us-east-1"
        self.key_prefix = key_prefix.strip("/")
        self._client = client

    @property
    def s3_client(self) -> Any:
        if self._client is None:
            self._client = boto3.client(
                "s3",
                region_name=self.region,
                aws_access_key_id=settings.aws_access_key_id or None,
                aws_secret_access_key=settings.aws_secret_access_key or None,
            )
        return self._client

    async def upload(self, user_id: str, avatar: AvatarUpload) -> str:
        if not self.bucket:
            raise AvatarStorageError("AWS_S3_BUCKET_NAME environment variable is not set")

        key = self._object_key(user_id, avatar.extension)
        try:
            await asyncio.to_thread(self._upload_sync, key, avatar)
        except ClientError as e:
            logger.error("avatar_upload_failed", key=key, code=_error_code(e))
            raise AvatarStorageError(self._describe(e)) from e
        except EndpointConnectionError as e:
            logger.error("avatar_upload_failed", key=key, code="NetworkingError")
            raise AvatarStorageError("Network error. Check your internet connection.") from e
        except BotoCoreError as e:
            logger.error("avatar_upload_failed", key=key, error=str(e))
            raise AvatarStorageError(f"AWS S3 Error: {e}") from e

        url = self.public_url(key)
        logger.info("avatar_uploaded", user_id=user_id, key=key)
        return url

    async def delete(self, url: str) -> None:
        key = self.key_from_url(url)
        if not key:
            raise AvatarStorageError("Failed to delete image")
        try:
            await asyncio.to_thread(self.s3_client.delete_object, Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            logger.warning("avatar_delete_failed", key=key, error=str(e))
            raise AvatarStorageError("Failed to delete image") from e
        logger.info("avatar_deleted", key=key)

    def public_url(self, key: str) -> str:
        # us-east-1 buckets are addressed without a region segment
        if self.region == "us-east-1":
            return f"https://{self.bucket}.s3.amazonaws.com/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    @staticmethod
    def key_from_url(url: str) -> str:
        return urlparse(url).path.lstrip("/")

    def _object_key(self, user_id: str, extension: str) -> str:
        epoch_ms = int(time.time() * 1000)
        return f"{self.key_prefix}/{user_id}-{epoch_ms}.{extension}"

    def _upload_sync(self, key: str, avatar: AvatarUpload) -> None:
        self.s3_client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=avatar.data,
            ContentType=avatar.content_type or "application/octet-stream",
        )

    def _describe(self, error: ClientError) -> str:
        code = _error_code(error)
        if code == "InvalidAccessKeyId":
            return "Invalid AWS Access Key ID. Please check your AWS credentials."
        if code == "SignatureDoesNotMatch":
            return "Invalid AWS Secret Access Key. Please check your AWS credentials."
        if code == "NoSuchBucket":
            return f"S3 bucket '{self.bucket}' does not exist or is not accessible."
        if code == "AccessDenied":
            return "Access denied. Check your IAM permissions and bucket policy."
        if code in ("PermanentRedirect", "AuthorizationHeaderMalformed"):
            return (
                f"Region mismatch! Bucket '{self.bucket}' is not in region '{self.region}'. "
                "Check the bucket's region and update AWS_REGION."
            )
        message = error.response.get("Error", {}).get("Message") or str(error)
        return f"AWS S3 Error: {message}"


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")
