from __future__ import annotations

import pytest

from b64viewer.typing.enums import CopyMode, PreviewKind, StorageKey


def test_preview_kind_from_str() -> None:
    assert PreviewKind.from_str("pdf") == PreviewKind.PDF


def test_copy_mode_from_str_raises_on_invalid_value() -> None:
    with pytest.raises(ValueError, match="Expected one of: raw, data_uri"):
        CopyMode.from_str("hex")


def test_storage_keys_are_namespaced() -> None:
    assert all(key.to_str().startswith("b64_") for key in StorageKey)
