"""Shared fixtures for privileged tests."""

import json
from pathlib import Path

import pytest

from privileged import PrivilegeBuilder, PrivilegeContext, PrivilegeMatch, PrivilegeModel


@pytest.fixture
def blog_context() -> PrivilegeContext:
    """Context with a wildcard allow and one forbid on Post."""
    return PrivilegeBuilder().allow("*", "Post").forbid("publish", "Post").build()


@pytest.fixture
def blog_model() -> PrivilegeModel:
    """Model exercising aliases of every type, qualifiers and a forbid."""
    return (
        PrivilegeBuilder()
        .alias("Manage", ["create", "update", "delete"], PrivilegeMatch.ACTION)
        .alias("Content", ["Post", "Comment"], PrivilegeMatch.SUBJECT)
        .alias("Public", ["title", "summary"], PrivilegeMatch.QUALIFIER)
        .allow("read", "Content", ["Public", "id"])
        .allow("Manage", "Post")
        .forbid("delete", "Comment")
        .build_model()
    )


@pytest.fixture
def write_json(tmp_path: Path):
    """Factory fixture writing JSON data to a file under tmp_path."""

    def _write(data: object, name: str = "privileges.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
