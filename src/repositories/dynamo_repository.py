"""
DynamoDB Repository for file metadata storage.
Handles CRUD operations for file metadata in DynamoDB.
"""
from datetime import datetime
from typing import List, Optional, Tuple
import boto3
from botocore.exceptions import ClientError
from src.core import config
from src.core.exceptions import DynamoDBException
from src.models.file_metadata import FileMetadata
from src.repositories.db_repository import FileMetadataRepository

CATEGORY_INDEX = 'FileCategoryIndex'


class DynamoFileMetadataRepository(FileMetadataRepository):
    """Repository for file metadata DynamoDB operations."""

    def __init__(self):
        self.dynamodb = boto3.resource('dynamodb', region_name=config.settings.aws_region)
        self.table = self.dynamodb.Table(config.settings.file_metadata_table_name)

    def save(self, metadata: FileMetadata) -> None:
        """
        Save file metadata to DynamoDB.

        Args:
            metadata: FileMetadata domain model

        Raises:
            DynamoDBException: If save operation fails
        """
        try:
            self.table.put_item(Item=self._metadata_to_item(metadata))
        except ClientError as e:
            raise DynamoDBException(f"Failed to save file metadata: {str(e)}") from e
        except Exception as e:
            raise DynamoDBException(f"Unexpected error saving file metadata: {str(e)}") from e

    def find_by_id(self, file_id: str) -> Optional[FileMetadata]:
        """
        Retrieve file metadata by id.

        Args:
            file_id: File identifier

        Returns:
            FileMetadata or None if not found

        Raises:
            DynamoDBException: If lookup fails
        """
        try:
            response = self.table.get_item(Key={'file_id': file_id})

            if 'Item' not in response:
                return None

            return self._item_to_metadata(response['Item'])

        except ClientError as e:
            raise DynamoDBException(f"Failed to get file metadata: {str(e)}") from e
        except Exception as e:
            raise DynamoDBException(f"Unexpected error getting file metadata: {str(e)}") from e

    def find_page(self, page: int = 1, limit: int = 10) -> Tuple[List[FileMetadata], int]:
        """
        Retrieve one page of file metadata, newest first, using the category GSI.

        Args:
            page: 1-based page number
            limit: Page size

        Returns:
            Tuple of (records on the page, total record count)

        Raises:
            DynamoDBException: If query fails
        """
        try:
            query_kwargs = {
                'IndexName': CATEGORY_INDEX,
                'KeyConditionExpression': 'file_category = :cat',
                'ExpressionAttributeValues': {':cat': 'ALL'},
                'ScanIndexForward': False
            }

            items = []
            while True:
                response = self.table.query(**query_kwargs)
                items.extend(response.get('Items', []))
                if 'LastEvaluatedKey' not in response:
                    break
                query_kwargs['ExclusiveStartKey'] = response['LastEvaluatedKey']

            start = (page - 1) * limit
            page_items = items[start:start + limit]

            return [self._item_to_metadata(item) for item in page_items], len(items)

        except ClientError as e:
            raise DynamoDBException(f"Failed to query file metadata: {str(e)}") from e
        except Exception as e:
            raise DynamoDBException(f"Unexpected error querying file metadata: {str(e)}") from e

    def delete(self, file_id: str) -> None:
        """
        Delete file metadata by id. Deleting a missing id is not an error.

        Raises:
            DynamoDBException: If delete fails
        """
        try:
            self.table.delete_item(Key={'file_id': file_id})
        except ClientError as e:
            raise DynamoDBException(f"Failed to delete file metadata: {str(e)}") from e
        except Exception as e:
            raise DynamoDBException(f"Unexpected error deleting file metadata: {str(e)}") from e

    def _metadata_to_item(self, metadata: FileMetadata) -> dict:
        """Convert FileMetadata domain model to DynamoDB item."""
        return {
            'file_id': metadata.file_id,
            'file_category': 'ALL',
            'filename': metadata.filename,
            'original_name': metadata.original_name,
            'mime_type': metadata.mime_type,
            'size': metadata.size,
            's3_key': metadata.s3_key,
            's3_bucket': metadata.s3_bucket,
            'upload_id': metadata.upload_id,
            'upload_date': metadata.upload_date.isoformat()
        }

    def _item_to_metadata(self, item: dict) -> FileMetadata:
        """Convert DynamoDB item to FileMetadata domain model."""
        return FileMetadata(
            file_id=item['file_id'],
            filename=item['filename'],
            original_name=item['original_name'],
            mime_type=item['mime_type'],
            size=int(item['size']),
            s3_key=item['s3_key'],
            s3_bucket=item['s3_bucket'],
            upload_id=item['upload_id'],
            upload_date=datetime.fromisoformat(item['upload_date'])
        )
