"""
Tests pour la classification des fichiers et FileSystemAdapter.
"""

import os

import pytest

from shadowcrawler.adapters.file_system import (
    FileSystemAdapter,
    is_skipped_file,
    is_video_file,
)


class TestIsVideoFile:
    """Tests de la classification par nom de fichier."""

    @pytest.mark.parametrize(
        "name",
        ["clip.mp4", "CLIP.MP4", "movie.MkV", "a.b.webm", "old.3gp", "x.ogv", "y.mpeg"],
    )
    def test_video_extensions_accepted(self, name):
        assert is_video_file(name) is True

    @pytest.mark.parametrize("name", ["notes.txt", "image.jpg", "archive.mp4.zip", "README"])
    def test_other_files_rejected(self, name):
        assert is_video_file(name) is False

    @pytest.mark.parametrize("name", ["Thumbs.db", ".DS_Store", "Folder.jpg", "desktop.ini"])
    def test_skipped_names_rejected(self, name):
        assert is_skipped_file(name) is True
        assert is_video_file(name) is False

    def test_skip_list_is_case_sensitive(self):
        assert is_skipped_file("thumbs.db") is False

    def test_dotfile_without_extension_rejected(self):
        """Un nom commencant par un point n'a pas d'extension."""
        assert is_video_file(".mp4") is False


class TestFileSystemAdapter:
    """Tests de l'adaptateur sur un vrai systeme de fichiers."""

    @pytest.fixture
    def adapter(self):
        return FileSystemAdapter()

    @pytest.mark.asyncio
    async def test_list_directory_splits_and_sorts(self, adapter, tmp_path):
        (tmp_path / "b.mp4").write_bytes(b"x")
        (tmp_path / "a.txt").write_bytes(b"x")
        (tmp_path / "zdir").mkdir()
        (tmp_path / "adir").mkdir()

        listing = await adapter.list_directory(tmp_path)

        assert listing.path == tmp_path
        assert listing.files == ["a.txt", "b.mp4"]
        assert listing.directories == ["adir", "zdir"]
        st = os.stat(tmp_path)
        assert listing.identity == (st.st_dev, st.st_ino)

    @pytest.mark.asyncio
    async def test_directory_symlinks_not_followed(self, adapter, tmp_path):
        (tmp_path / "real").mkdir()
        (tmp_path / "loop").symlink_to(tmp_path, target_is_directory=True)

        listing = await adapter.list_directory(tmp_path)

        assert listing.directories == ["real"]
        assert "loop" not in listing.files

    @pytest.mark.asyncio
    async def test_list_missing_directory_raises_oserror(self, adapter, tmp_path):
        with pytest.raises(OSError):
            await adapter.list_directory(tmp_path / "missing")

    @pytest.mark.asyncio
    async def test_stat_and_size(self, adapter, tmp_path):
        file_path = tmp_path / "clip.mp4"
        file_path.write_bytes(b"0123456789")

        assert await adapter.get_size(file_path) == 10
        assert (await adapter.stat(file_path)).st_size == 10
