"""
Unit tests for UploadService.
Storage and metadata collaborators are mocked; the progress store is real.
"""
import io
from unittest.mock import Mock, call
import pytest
from src.core.exceptions import (
    DynamoDBException,
    FileTooLargeException,
    S3Exception,
    UploadNotFoundException,
    ValidationException
)
from src.models.upload_progress import UploadState
from src.services.file_validation_service import FileValidationService
from src.services.progress_store import ProgressStore
from src.services.upload_service import UploadService


class TestUploadService:
    """Test suite for the upload lifecycle."""

    @pytest.fixture
    def store(self):
        return Mock(wraps=ProgressStore())

    @pytest.fixture
    def s3_repo(self):
        repo = Mock()
        repo.upload_file.return_value = {
            's3_key': 'k1',
            's3_location': 's3://test-bucket/k1',
            'bucket': 'test-bucket'
        }
        return repo

    @pytest.fixture
    def metadata_repo(self):
        return Mock()

    @pytest.fixture
    def service(self, store, s3_repo, metadata_repo):
        return UploadService(
            progress_store=store,
            s3_repository=s3_repo,
            metadata_repository=metadata_repo,
            validation_service=FileValidationService(max_file_size_bytes=1024)
        )

    def _upload(self, service, upload_id=None, filename="a.png", content_type="image/png", size=4):
        return service.upload_file(
            io.BytesIO(b"\x89PNG"), filename, content_type, size, upload_id=upload_id
        )

    def test_begin_upload_tracks_pending_record(self, service, store):
        response = service.begin_upload("a.png")

        record = store.get_progress(response.upload_id)
        assert record.status == UploadState.PENDING
        assert record.filename == "a.png"
        assert response.message == "Upload tracking initialized"

    def test_begin_upload_requires_filename(self, service, store):
        with pytest.raises(ValidationException) as exc_info:
            service.begin_upload("   ")

        assert exc_info.value.message == "Filename is required"
        store.start_upload.assert_not_called()

    def test_upload_completes_tracked_record(self, service, store, s3_repo, metadata_repo):
        upload_id = service.begin_upload("a.png").upload_id

        result = self._upload(service, upload_id=upload_id)

        record = store.get_progress(upload_id)
        assert record.status == UploadState.COMPLETED
        assert record.progress == 100
        assert store.update_progress.call_args_list == [call(upload_id, 50), call(upload_id, 90)]
        store.complete_upload.assert_called_once_with(upload_id)
        s3_repo.upload_file.assert_called_once()

        saved = metadata_repo.save.call_args[0][0]
        assert saved.s3_key == "k1"
        assert saved.filename == "k1"
        assert saved.original_name == "a.png"
        assert saved.mime_type == "image/png"
        assert saved.size == 4
        assert saved.s3_bucket == "test-bucket"
        assert saved.upload_id == upload_id

        assert result.message == "File uploaded successfully"
        assert result.file.id == saved.file_id
        assert result.file.filename == "a.png"
        assert result.file.upload_id == upload_id

    def test_upload_without_id_starts_tracking(self, service, store):
        result = self._upload(service)

        store.start_upload.assert_called_once_with("a.png")
        record = store.get_progress(result.file.upload_id)
        assert record.status == UploadState.COMPLETED

    def test_metadata_failure_deletes_orphaned_object(self, service, store, s3_repo, metadata_repo):
        upload_id = service.begin_upload("a.png").upload_id
        metadata_repo.save.side_effect = DynamoDBException("Failed to save file metadata: boom")

        with pytest.raises(DynamoDBException):
            self._upload(service, upload_id=upload_id)

        s3_repo.delete_file.assert_called_once_with("k1")
        store.fail_upload.assert_called_once_with(upload_id, "Failed to save file metadata: boom")
        record = store.get_progress(upload_id)
        assert record.status == UploadState.FAILED
        assert record.error == "Failed to save file metadata: boom"
        store.complete_upload.assert_not_called()

    def test_cleanup_failure_keeps_original_error(self, service, store, s3_repo, metadata_repo):
        upload_id = service.begin_upload("a.png").upload_id
        metadata_repo.save.side_effect = DynamoDBException("metadata down")
        s3_repo.delete_file.side_effect = S3Exception("delete failed")

        with pytest.raises(DynamoDBException):
            self._upload(service, upload_id=upload_id)

        s3_repo.delete_file.assert_called_once_with("k1")
        record = store.get_progress(upload_id)
        assert record.status == UploadState.FAILED
        assert record.error == "metadata down"

    def test_storage_failure_fails_record_without_cleanup(self, service, store, s3_repo, metadata_repo):
        upload_id = service.begin_upload("a.png").upload_id
        s3_repo.upload_file.side_effect = S3Exception("Failed to upload file to S3: denied")

        with pytest.raises(S3Exception):
            self._upload(service, upload_id=upload_id)

        metadata_repo.save.assert_not_called()
        s3_repo.delete_file.assert_not_called()
        store.update_progress.assert_not_called()
        record = store.get_progress(upload_id)
        assert record.status == UploadState.FAILED
        assert record.error == "Failed to upload file to S3: denied"

    def test_unexpected_error_fails_auto_created_record(self, service, store, s3_repo):
        s3_repo.upload_file.side_effect = RuntimeError("socket closed")

        with pytest.raises(RuntimeError):
            self._upload(service)

        store.start_upload.assert_called_once_with("a.png")
        failed_id = store.fail_upload.call_args[0][0]
        record = store.get_progress(failed_id)
        assert record.status == UploadState.FAILED
        assert record.error == "socket closed"

    def test_missing_payload_fails_supplied_record(self, service, store, s3_repo):
        upload_id = service.begin_upload("a.png").upload_id

        with pytest.raises(ValidationException) as exc_info:
            service.upload_file(None, None, None, 0, upload_id=upload_id)

        assert exc_info.value.message == "No file uploaded"
        record = store.get_progress(upload_id)
        assert record.status == UploadState.FAILED
        assert record.error == "No file uploaded"
        s3_repo.upload_file.assert_not_called()

    def test_missing_payload_without_id_rejects_directly(self, service, store):
        with pytest.raises(ValidationException):
            service.upload_file(None, None, None, 0)

        store.start_upload.assert_not_called()
        store.fail_upload.assert_not_called()

    def test_disallowed_type_fails_supplied_record(self, service, store, s3_repo):
        upload_id = service.begin_upload("run.exe").upload_id

        with pytest.raises(ValidationException):
            self._upload(service, upload_id=upload_id, filename="run.exe",
                         content_type="application/x-msdownload")

        record = store.get_progress(upload_id)
        assert record.status == UploadState.FAILED
        assert record.error == "File type not allowed"
        s3_repo.upload_file.assert_not_called()

    def test_invalid_upload_without_id_creates_no_record(self, service, store):
        with pytest.raises(FileTooLargeException):
            self._upload(service, size=4096)

        store.start_upload.assert_not_called()
        store.fail_upload.assert_not_called()

    def test_retry_with_failed_upload_id_is_rejected(self, service, store, s3_repo, metadata_repo):
        upload_id = service.begin_upload("a.png").upload_id
        with pytest.raises(ValidationException):
            self._upload(service, upload_id=upload_id, filename="run.exe",
                         content_type="application/x-msdownload")

        with pytest.raises(ValidationException) as exc_info:
            self._upload(service, upload_id=upload_id)

        assert "already failed" in exc_info.value.message
        s3_repo.upload_file.assert_not_called()
        metadata_repo.save.assert_not_called()
        record = store.get_progress(upload_id)
        assert record.status == UploadState.FAILED
        assert record.error == "File type not allowed"

    def test_reuse_of_completed_upload_id_is_rejected(self, service, store, s3_repo, metadata_repo):
        upload_id = service.begin_upload("a.png").upload_id
        self._upload(service, upload_id=upload_id)

        with pytest.raises(ValidationException) as exc_info:
            self._upload(service, upload_id=upload_id)

        assert "already completed" in exc_info.value.message
        assert s3_repo.upload_file.call_count == 1
        assert metadata_repo.save.call_count == 1
        assert store.get_progress(upload_id).status == UploadState.COMPLETED

    def test_filename_is_stored_stripped(self, service, store, metadata_repo):
        result = self._upload(service, filename="  a.png  ")

        saved = metadata_repo.save.call_args[0][0]
        assert saved.original_name == "a.png"
        assert result.file.filename == "a.png"
        store.start_upload.assert_called_once_with("a.png")
        assert store.get_progress(result.file.upload_id).filename == "a.png"

    def test_unknown_upload_id_is_tolerated(self, service, store):
        result = self._upload(service, upload_id="expired-id")

        assert result.file.upload_id == "expired-id"
        assert store.get_progress("expired-id") is None

    def test_get_progress_returns_record(self, service):
        upload_id = service.begin_upload("a.png").upload_id

        response = service.get_progress(upload_id)

        assert response.id == upload_id
        assert response.status == "pending"
        assert response.progress == 0
        assert response.error is None

    def test_get_progress_unknown_id_raises_not_found(self, service):
        with pytest.raises(UploadNotFoundException):
            service.get_progress("nonexistent")
