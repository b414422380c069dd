"""Pytest configuration and shared fixtures."""

import json

import pytest


@pytest.fixture
def satis_document():
    """Satis document with repositories and unrelated settings."""
    return {
        "name": "perseus/mirror",
        "homepage": "https://satis.example.com",
        "repositories": [
            {"type": "git", "url": "https://github.com/symfony/console.git"},
            {"type": "vcs", "url": "https://github.com/guzzle/guzzle.git"},
        ],
        "require-all": True,
        "archive": {"directory": "dist", "format": "tar", "skip-dev": True},
    }


@pytest.fixture
def satis_file(tmp_path, satis_document):
    """Satis document written to a temporary file."""
    path = tmp_path / "satis.json"
    path.write_text(json.dumps(satis_document, indent=4))
    return path
