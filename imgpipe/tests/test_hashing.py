"""Tests for content hashing."""

import hashlib

import pytest

from imgpipe.hashing import file_hash


class TestFileHash:
    """Tests for file_hash."""

    def test_matches_sha256(self, tmp_path, sample_image_bytes):
        """Test digest equals hashlib.sha256 over the whole file."""
        path = tmp_path / 'img.jpg'
        path.write_bytes(sample_image_bytes)

        assert file_hash(path) == hashlib.sha256(sample_image_bytes).hexdigest()

    def test_small_chunks_same_digest(self, tmp_path, sample_image_bytes):
        """Test chunk size does not affect the digest."""
        path = tmp_path / 'img.jpg'
        path.write_bytes(sample_image_bytes)

        assert file_hash(path, chunk_size=7) == file_hash(path)

    def test_empty_file(self, tmp_path):
        """Test hashing an empty file."""
        path = tmp_path / 'empty.png'
        path.write_bytes(b'')

        assert file_hash(path) == hashlib.sha256(b'').hexdigest()

    def test_content_change_changes_digest(self, tmp_path):
        """Test different bytes produce different digests."""
        path = tmp_path / 'a.png'
        path.write_bytes(b'one')
        first = file_hash(path)
        path.write_bytes(b'two')

        assert file_hash(path) != first

    def test_missing_file_raises(self, tmp_path):
        """Test I/O errors propagate."""
        with pytest.raises(FileNotFoundError):
            file_hash(tmp_path / 'missing.jpg')
