"""Shared fixtures and pytest marker auto-assignment by folder."""

from __future__ import annotations

from pathlib import Path

import pytest

from b64viewer import logger
from b64viewer.settings import Settings


def _mark_tests_by_directory(
    config: pytest.Config,
    items: list[pytest.Item],
    marker: str,
) -> None:
    """Mark collected tests located under tests/<marker>/."""
    target_dir = (Path(config.rootpath) / "tests" / marker).resolve()

    for item in items:
        try:
            path = Path(str(item.fspath)).resolve()
        except OSError:
            logger.warning(f"Could not resolve path for test item {item.name!s}; skipping {marker!s} marker")
            continue

        if path == target_dir or target_dir in path.parents:
            item.add_marker(getattr(pytest.mark, marker))


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Apply directory-based markers to test items."""
    for marker in ("unit", "integration", "end2end"):
        _mark_tests_by_directory(config, items, marker)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings writing every artifact under the test's temporary directory."""
    return Settings(
        log_json=False,
        output_dir=str(tmp_path / "results"),
        storage_path=str(tmp_path / "session" / "session.json"),
    )
