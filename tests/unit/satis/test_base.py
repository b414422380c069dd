"""Tests for Satis data structures."""

import pytest

from perseus.satis.base import SatisRepository
from perseus.satis.exceptions import MalformedDataError


class TestSatisRepository:
    """Tests for SatisRepository class."""

    def test_to_dict(self):
        """Test conversion to the manifest entry shape."""
        repo = SatisRepository(type="git", url="https://example.com/a.git")

        assert repo.to_dict() == {"type": "git", "url": "https://example.com/a.git"}
        assert list(repo.to_dict()) == ["type", "url"]

    def test_from_dict(self):
        """Test parsing a regular entry."""
        repo = SatisRepository.from_dict({"type": "svn", "url": "svn://example.com/repo"})

        assert repo.type == "svn"
        assert repo.url == "svn://example.com/repo"

    def test_from_dict_missing_fields(self):
        """Test missing fields default to empty strings."""
        repo = SatisRepository.from_dict({"url": "https://example.com/a.git"})

        assert repo.type == ""
        assert repo.url == "https://example.com/a.git"

    def test_from_dict_drops_unknown_fields(self):
        """Test unknown fields are not kept."""
        repo = SatisRepository.from_dict(
            {"type": "git", "url": "u1", "options": {"ssl": {"verify_peer": False}}}
        )

        assert repo.to_dict() == {"type": "git", "url": "u1"}

    def test_from_dict_rejects_non_object(self):
        """Test non-object entries are malformed."""
        with pytest.raises(MalformedDataError):
            SatisRepository.from_dict("https://example.com/a.git")

    def test_from_dict_rejects_non_string_field(self):
        """Test non-string field values are malformed."""
        with pytest.raises(MalformedDataError, match="url"):
            SatisRepository.from_dict({"type": "git", "url": 42})

    def test_equality(self):
        """Test entries compare by value."""
        assert SatisRepository("git", "u1") == SatisRepository("git", "u1")
        assert SatisRepository("git", "u1") != SatisRepository("vcs", "u1")
