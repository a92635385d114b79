"""
Shared test fixtures and utilities.
"""
from datetime import datetime, timedelta, timezone
import pytest
import boto3
from moto import mock_aws
from src.core import config
from src.core import dependencies

BUCKET_NAME = "test-bucket"
METADATA_TABLE_NAME = "FileMetadata-test"


class FakeClock:
    """Controllable clock for progress store tests."""

    def __init__(self, start: datetime = None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def aws_env(monkeypatch):
    """Point settings at test AWS resources and reset cached dependencies."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_REGION", "us-east-1")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.setenv("S3_BUCKET_NAME", BUCKET_NAME)
    monkeypatch.setenv("FILE_METADATA_TABLE_NAME", METADATA_TABLE_NAME)
    monkeypatch.setenv("ENVIRONMENT", "test")

    original_settings = config.settings
    config.settings = config.Settings()
    dependencies.clear_caches()

    yield

    config.settings = original_settings
    dependencies.clear_caches()


@pytest.fixture
def aws(aws_env):
    with mock_aws():
        yield


@pytest.fixture
def s3_bucket(aws):
    s3 = boto3.client("s3", region_name="us-east-1")
    s3.create_bucket(Bucket=BUCKET_NAME)
    return s3


@pytest.fixture
def metadata_table(aws):
    dynamodb = boto3.resource("dynamodb", region_name="us-east-1")
    return dynamodb.create_table(
        TableName=METADATA_TABLE_NAME,
        KeySchema=[{"AttributeName": "file_id", "KeyType": "HASH"}],
        AttributeDefinitions=[
            {"AttributeName": "file_id", "AttributeType": "S"},
            {"AttributeName": "file_category", "AttributeType": "S"},
            {"AttributeName": "upload_date", "AttributeType": "S"}
        ],
        GlobalSecondaryIndexes=[
            {
                "IndexName": "FileCategoryIndex",
                "KeySchema": [
                    {"AttributeName": "file_category", "KeyType": "HASH"},
                    {"AttributeName": "upload_date", "KeyType": "RANGE"}
                ],
                "Projection": {"ProjectionType": "ALL"}
            }
        ],
        BillingMode="PAY_PER_REQUEST"
    )
