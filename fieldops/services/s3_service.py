"""S3 service for pre-signed photo/PDF upload URLs and object cleanup"""

import logging
from datetime import datetime
from typing import Dict, Optional, Any
from uuid import uuid4
import boto3
from botocore.exceptions import ClientError
from botocore.config import Config

from fieldops.config import settings

logger = logging.getLogger(__name__)


class S3ServiceError(Exception):
    """Base exception for S3 service errors"""
    pass


class S3ConnectionError(S3ServiceError):
    """S3 connection error"""
    pass


class InvalidFileTypeError(S3ServiceError):
    """Invalid file type error"""
    pass


class FileTooLargeError(S3ServiceError):
    """File too large error"""
    pass


class S3Service:
    """Service for S3 operations including pre-signed URL generation"""

    # Constants
    MIN_FILE_SIZE = 1  # bytes
    ALLOWED_MIME_TYPES = {
        "image/jpeg": "jpg",
        "image/png": "png",
        "image/webp": "webp",
        "image/heic": "heic",
        "application/pdf": "pdf",
    }
    PRESIGNED_URL_EXPIRATION = 900  # 15 minutes in seconds

    def __init__(self):
        """Initialize S3 client with retry configuration"""
        retry_config = Config(
            retries={
                "max_attempts": 3,
                "mode": "standard",
            },
            connect_timeout=5,
            read_timeout=10,
        )

        client_kwargs = {
            "region_name": settings.aws_region,
            "config": retry_config,
        }

        # Add credentials if provided (not needed for IAM roles)
        if settings.aws_access_key_id and settings.aws_secret_access_key:
            client_kwargs["aws_access_key_id"] = settings.aws_access_key_id
            client_kwargs["aws_secret_access_key"] = settings.aws_secret_access_key

        # Use custom endpoint for local development (MinIO)
        if settings.aws_endpoint_url:
            client_kwargs["endpoint_url"] = settings.aws_endpoint_url

        try:
            self.s3_client = boto3.client("s3", **client_kwargs)
            logger.info(f"S3 client initialized for bucket: {settings.s3_bucket}")
        except Exception as e:
            logger.error(f"Failed to initialize S3 client: {e}")
            raise S3ConnectionError(f"Failed to initialize S3 client: {e}")

    @staticmethod
    def file_type_for(mime_type: str) -> str:
        """Photo file_type ('image' or 'pdf') for an allowed MIME type"""
        return "pdf" if mime_type == "application/pdf" else "image"

    def validate_file(self, file_size: int, mime_type: str) -> None:
        """
        Validate file size and MIME type.

        Args:
            file_size: File size in bytes
            mime_type: MIME type of the file

        Raises:
            FileTooLargeError: If file exceeds maximum size or is empty
            InvalidFileTypeError: If MIME type is not allowed
        """
        if file_size > settings.upload_max_file_size:
            raise FileTooLargeError(
                f"File size {file_size} bytes exceeds maximum of {settings.upload_max_file_size} bytes"
            )

        if file_size < self.MIN_FILE_SIZE:
            raise FileTooLargeError(
                f"File size {file_size} bytes is below minimum of {self.MIN_FILE_SIZE} bytes"
            )

        if mime_type not in self.ALLOWED_MIME_TYPES:
            raise InvalidFileTypeError(
                f"MIME type {mime_type} not allowed. Allowed types: {sorted(self.ALLOWED_MIME_TYPES)}"
            )

    def generate_s3_key(self, user_id: str, mime_type: str) -> str:
        """
        Generate S3 key following the structure:
        uploads/{user_id}/{year}/{month}/{day}/{object_id}.{extension}

        Args:
            user_id: Uploading user UUID
            mime_type: MIME type, used to pick the extension

        Returns:
            S3 key string
        """
        now = datetime.utcnow()
        extension = self.ALLOWED_MIME_TYPES.get(mime_type, "bin")
        return f"uploads/{user_id}/{now:%Y/%m/%d}/{uuid4()}.{extension}"

    def object_url(self, s3_key: str) -> str:
        """Public URL of an object in the upload bucket"""
        if settings.aws_endpoint_url:
            # For local development with MinIO
            return f"{settings.aws_endpoint_url}/{settings.s3_bucket}/{s3_key}"
        return f"https://{settings.s3_bucket}.s3.{settings.aws_region}.amazonaws.com/{s3_key}"

    def generate_presigned_upload_url(
        self,
        s3_key: str,
        mime_type: str,
        expiration: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Generate a pre-signed URL for uploading a file to S3.

        Args:
            s3_key: S3 key where the file will be stored
            mime_type: MIME type of the file
            expiration: URL expiration time in seconds (default: 900)

        Returns:
            Dict containing upload_url and other metadata

        Raises:
            S3ConnectionError: If S3 operation fails
        """
        if expiration is None:
            expiration = self.PRESIGNED_URL_EXPIRATION

        try:
            presigned_url = self.s3_client.generate_presigned_url(
                "put_object",
                Params={
                    "Bucket": settings.s3_bucket,
                    "Key": s3_key,
                    "ContentType": mime_type,
                },
                ExpiresIn=expiration,
            )

            logger.info(f"Generated pre-signed URL for key: {s3_key}")

            return {
                "upload_url": presigned_url,
                "object_url": self.object_url(s3_key),
                "storage_key": s3_key,
                "expires_in_seconds": expiration,
                "headers": {"Content-Type": mime_type},
            }

        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error(f"S3 ClientError generating pre-signed URL: {error_code} - {e}")
            raise S3ConnectionError(f"Failed to generate pre-signed URL: {error_code}")
        except Exception as e:
            logger.error(f"Unexpected error generating pre-signed URL: {e}")
            raise S3ConnectionError(f"Failed to generate pre-signed URL: {str(e)}")

    def delete_object(self, s3_key: str) -> bool:
        """
        Delete an object from S3.

        Args:
            s3_key: S3 key of the object to delete

        Returns:
            True if deletion was successful
        """
        try:
            self.s3_client.delete_object(Bucket=settings.s3_bucket, Key=s3_key)
            logger.info(f"Deleted object: {s3_key}")
            return True
        except ClientError as e:
            logger.error(f"Error deleting object: {e}")
            raise S3ConnectionError(f"Failed to delete object: {e}")

    def check_bucket(self) -> None:
        """Raise ClientError if the upload bucket is unreachable"""
        self.s3_client.head_bucket(Bucket=settings.s3_bucket)
