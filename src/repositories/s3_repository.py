"""
S3 Repository for file storage operations.
Handles object uploads, deletes and presigned download URLs on Amazon S3.
"""
import os
import uuid
from datetime import datetime, timezone
from typing import BinaryIO
import boto3
from botocore.exceptions import ClientError
from src.core import config
from src.core.exceptions import S3Exception


class S3Repository:
    """Repository for S3 file operations."""

    def __init__(self):
        self.s3_client = boto3.client('s3', region_name=config.settings.aws_region)
        self.bucket_name = config.settings.s3_bucket_name

    def upload_file(self, file: BinaryIO, filename: str, content_type: str) -> dict:
        """
        Upload a file to S3 under a freshly generated key.

        Args:
            file: File object to upload
            filename: Original filename, used for its extension
            content_type: MIME type stored with the object

        Returns:
            dict: Upload metadata including s3_key and location

        Raises:
            S3Exception: If upload fails
        """
        try:
            s3_key = self._generate_s3_key(filename)

            self.s3_client.upload_fileobj(
                file,
                self.bucket_name,
                s3_key,
                ExtraArgs={'ContentType': content_type}
            )

            return {
                's3_key': s3_key,
                's3_location': f"s3://{self.bucket_name}/{s3_key}",
                'bucket': self.bucket_name,
                'upload_timestamp': datetime.now(timezone.utc).isoformat()
            }

        except ClientError as e:
            raise S3Exception(f"Failed to upload file to S3: {str(e)}") from e
        except Exception as e:
            raise S3Exception(f"Unexpected error during S3 upload: {str(e)}") from e

    def _generate_s3_key(self, filename: str) -> str:
        """
        Generate unique S3 key for file.

        Format: {uuid}{extension}
        """
        return f"{uuid.uuid4()}{os.path.splitext(filename)[1].lower()}"

    def delete_file(self, s3_key: str) -> None:
        """
        Delete an object from S3.

        Args:
            s3_key: S3 object key

        Raises:
            S3Exception: If delete fails
        """
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=s3_key)
        except ClientError as e:
            raise S3Exception(f"Failed to delete file from S3: {str(e)}") from e
        except Exception as e:
            raise S3Exception(f"Unexpected error deleting file from S3: {str(e)}") from e

    def generate_presigned_url(self, s3_key: str, expires_in: int = 3600) -> str:
        """
        Generate a presigned URL granting temporary read access to an object.

        Args:
            s3_key: S3 object key
            expires_in: URL lifetime in seconds

        Returns:
            str: Presigned GET URL

        Raises:
            S3Exception: If URL generation fails
        """
        try:
            return self.s3_client.generate_presigned_url(
                'get_object',
                Params={'Bucket': self.bucket_name, 'Key': s3_key},
                ExpiresIn=expires_in
            )
        except ClientError as e:
            raise S3Exception(f"Failed to generate presigned URL: {str(e)}") from e
