from __future__ import annotations

import pytest

from b64viewer.dependencies import _collect_missing_dependencies, ensure_cli_dependencies_for_pdf
from b64viewer.exceptions import DependencyError


def test_ensure_cli_dependencies_for_pdf_succeeds(monkeypatch) -> None:
    monkeypatch.setattr("b64viewer.dependencies._is_module_available", lambda module_name: True)
    ensure_cli_dependencies_for_pdf()


def test_ensure_cli_dependencies_for_pdf_raises(monkeypatch) -> None:
    monkeypatch.setattr("b64viewer.dependencies._is_module_available", lambda module_name: False)
    with pytest.raises(DependencyError, match="pymupdf"):
        ensure_cli_dependencies_for_pdf()


def test_collect_missing_dependencies_reports_package_names(monkeypatch) -> None:
    monkeypatch.setattr("b64viewer.dependencies._is_module_available", lambda module_name: module_name == "json")

    assert _collect_missing_dependencies({"stdlib-json": "json", "pymupdf": "fitz"}) == ["pymupdf"]
