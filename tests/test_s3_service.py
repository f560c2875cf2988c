"""Unit tests for S3 service"""

import pytest
from unittest.mock import Mock, patch
from botocore.exceptions import ClientError

from fieldops.services.s3_service import (
    S3Service,
    S3ConnectionError,
    InvalidFileTypeError,
    FileTooLargeError,
)


@pytest.fixture
def mock_s3_client():
    """Mock S3 client"""
    with patch("boto3.client") as mock_client:
        mock_instance = Mock()
        mock_client.return_value = mock_instance
        yield mock_instance


@pytest.fixture
def s3_service(mock_s3_client):
    """S3 service instance with mocked client"""
    with patch("fieldops.services.s3_service.settings") as mock_settings:
        mock_settings.aws_region = "us-east-1"
        mock_settings.s3_bucket = "test-bucket"
        mock_settings.aws_access_key_id = None
        mock_settings.aws_secret_access_key = None
        mock_settings.aws_endpoint_url = None
        mock_settings.upload_max_file_size = 50 * 1024 * 1024
        service = S3Service()
        yield service


class TestS3ServiceValidation:
    """Test file validation"""

    def test_validate_file_success(self, s3_service):
        """Test successful file validation"""
        # Should not raise exception
        s3_service.validate_file(1024 * 100, "image/jpeg")
        s3_service.validate_file(1024 * 100, "image/png")
        s3_service.validate_file(1024 * 100, "application/pdf")

    def test_validate_file_too_large(self, s3_service):
        """Test file size exceeds maximum"""
        with pytest.raises(FileTooLargeError, match="exceeds maximum"):
            s3_service.validate_file(51 * 1024 * 1024, "image/jpeg")

    def test_validate_file_empty(self, s3_service):
        """Test empty file is rejected"""
        with pytest.raises(FileTooLargeError, match="below minimum"):
            s3_service.validate_file(0, "image/jpeg")

    def test_validate_file_invalid_mime_type(self, s3_service):
        """Test invalid MIME type"""
        with pytest.raises(InvalidFileTypeError, match="not allowed"):
            s3_service.validate_file(1024 * 100, "image/gif")

    def test_file_type_for_mime(self):
        """Test PDFs map to 'pdf' and everything else to 'image'"""
        assert S3Service.file_type_for("application/pdf") == "pdf"
        assert S3Service.file_type_for("image/heic") == "image"


class TestS3KeyGeneration:
    """Test S3 key generation"""

    def test_generate_s3_key(self, s3_service):
        """Test S3 key generation follows correct format"""
        user_id = "550e8400-e29b-41d4-a716-446655440000"

        key = s3_service.generate_s3_key(user_id, "image/png")

        assert key.startswith(f"uploads/{user_id}/")
        assert key.endswith(".png")
        # uploads/user_id/year/month/day/object.ext
        assert len(key.split("/")) == 6

    def test_generate_s3_key_is_unique(self, s3_service):
        """Test two uploads never share a key"""
        first = s3_service.generate_s3_key("u", "application/pdf")
        second = s3_service.generate_s3_key("u", "application/pdf")

        assert first != second
        assert first.endswith(".pdf")


class TestPresignedUrlGeneration:
    """Test pre-signed URL generation"""

    def test_generate_presigned_upload_url_success(self, s3_service, mock_s3_client):
        """Test successful pre-signed URL generation"""
        mock_s3_client.generate_presigned_url.return_value = "https://s3.aws.com/test-url"

        result = s3_service.generate_presigned_upload_url(
            s3_key="uploads/u/key.jpg",
            mime_type="image/jpeg",
        )

        assert result["upload_url"] == "https://s3.aws.com/test-url"
        assert result["storage_key"] == "uploads/u/key.jpg"
        assert result["object_url"].endswith("/uploads/u/key.jpg")
        assert result["expires_in_seconds"] == 900
        assert result["headers"] == {"Content-Type": "image/jpeg"}

        # Verify S3 client was called correctly
        mock_s3_client.generate_presigned_url.assert_called_once()
        call_args = mock_s3_client.generate_presigned_url.call_args
        assert call_args[0][0] == "put_object"
        assert call_args[1]["Params"]["ContentType"] == "image/jpeg"

    def test_generate_presigned_url_s3_error(self, s3_service, mock_s3_client):
        """Test pre-signed URL generation with S3 error"""
        mock_s3_client.generate_presigned_url.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "Access denied"}},
            "generate_presigned_url",
        )

        with pytest.raises(S3ConnectionError, match="Failed to generate pre-signed URL"):
            s3_service.generate_presigned_upload_url(
                s3_key="uploads/u/key.jpg",
                mime_type="image/jpeg",
            )

    def test_generate_presigned_url_custom_expiration(self, s3_service, mock_s3_client):
        """Test pre-signed URL with custom expiration"""
        mock_s3_client.generate_presigned_url.return_value = "https://s3.aws.com/test-url"

        result = s3_service.generate_presigned_upload_url(
            s3_key="uploads/u/key.jpg",
            mime_type="image/jpeg",
            expiration=1800,  # 30 minutes
        )

        assert result["expires_in_seconds"] == 1800


class TestS3ObjectOperations:
    """Test S3 object operations"""

    def test_delete_object_success(self, s3_service, mock_s3_client):
        """Test delete object"""
        mock_s3_client.delete_object.return_value = {}

        result = s3_service.delete_object("uploads/u/key.jpg")

        assert result is True
        mock_s3_client.delete_object.assert_called_once()

    def test_delete_object_error(self, s3_service, mock_s3_client):
        """Test delete object with error"""
        mock_s3_client.delete_object.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "Access denied"}},
            "delete_object",
        )

        with pytest.raises(S3ConnectionError):
            s3_service.delete_object("uploads/u/key.jpg")

    def test_check_bucket(self, s3_service, mock_s3_client):
        """Test bucket check issues a head_bucket call"""
        s3_service.check_bucket()

        mock_s3_client.head_bucket.assert_called_once_with(Bucket="test-bucket")
