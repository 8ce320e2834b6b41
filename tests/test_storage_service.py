# =============================================================================
# tests/test_storage_service.py - Filesystem Storage Tests
# =============================================================================

import re
from pathlib import Path

import pytest

from app.config import settings
from app.exceptions import StorageUploadError
from core.services.storage_service import StorageService

GENERATED_NAME = re.compile(r"^(?P<stem>.+)-\d{13}-\d{1,9}(?P<ext>\.[a-z0-9]+)?$")


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    """Point storage at a per-test directory."""
    directory = tmp_path / "uploads"
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(directory))
    return directory


class TestGenerateFilename:
    """Test stored filename generation."""

    def test_keeps_stem_and_extension(self):
        name = StorageService.generate_filename("vacation.jpg")

        match = GENERATED_NAME.match(name)
        assert match is not None
        assert match.group("stem") == "vacation"
        assert match.group("ext") == ".jpg"

    def test_names_are_unique(self):
        names = {StorageService.generate_filename("a.png") for _ in range(50)}
        assert len(names) == 50

    @pytest.mark.parametrize("original", ["../../etc/passwd.png", "..\\..\\evil.png", "/abs/path/evil.png"])
    def test_drops_directory_components(self, original):
        name = StorageService.generate_filename(original)

        assert "/" not in name
        assert "\\" not in name
        assert not name.startswith(".")

    def test_replaces_unsafe_characters(self):
        name = StorageService.generate_filename("my summer photo (1).PNG")

        assert name.startswith("my_summer_photo_1-")
        assert name.endswith(".png")

    def test_empty_stem_gets_default(self):
        assert StorageService.generate_filename("###.png").startswith("image-")


class TestSaveAndDelete:
    """Test writing and removing files."""

    def test_save_file_creates_directory(self, upload_dir):
        stored = StorageService.save_file(b"abc", "photo.png")

        path = Path(stored.path)
        assert path.parent == upload_dir
        assert path.read_bytes() == b"abc"
        assert stored.size == 3
        assert stored.filename == path.name

    def test_save_file_wraps_os_errors(self, upload_dir, monkeypatch):
        def _fail(self, content):
            raise PermissionError("read-only filesystem")

        monkeypatch.setattr(Path, "write_bytes", _fail)

        with pytest.raises(StorageUploadError) as exc_info:
            StorageService.save_file(b"abc", "photo.png")

        assert exc_info.value.status_code == 500

    def test_delete_existing_file(self, upload_dir):
        stored = StorageService.save_file(b"abc", "photo.png")

        assert StorageService.delete_file(stored.path) is True
        assert not Path(stored.path).exists()

    def test_delete_missing_file_returns_false(self, upload_dir):
        assert StorageService.delete_file(str(upload_dir / "nope.png")) is False

    def test_build_url(self):
        assert StorageService.build_url("a-1-2.png") == "/uploads/a-1-2.png"

    def test_is_writable(self, upload_dir):
        assert StorageService.is_writable() is True
        assert upload_dir.is_dir()
