from __future__ import annotations

import json
from typing import TYPE_CHECKING

from b64viewer.decoder import encode_bytes
from b64viewer.storage import SessionStorage
from b64viewer.typing.enums import StorageKey

if TYPE_CHECKING:
    from pathlib import Path

    from b64viewer.settings import Settings


def test_save_and_load_stored_file(tmp_path: Path) -> None:
    storage = SessionStorage(tmp_path / "nested" / "session.json")
    stored = encode_bytes(b"hi", name="a.txt", mime="text/plain")

    assert storage.save(StorageKey.ENCODER_FILE, stored) is True

    assert storage.path.exists()
    assert storage.load(StorageKey.ENCODER_FILE) == stored
    assert storage.load(StorageKey.VIEWER_FILE) is None


def test_save_string_keeps_other_slots(tmp_path: Path) -> None:
    storage = SessionStorage(tmp_path / "session.json")

    storage.save_string(StorageKey.DECODER_INPUT, "aGk=")
    storage.save_string(StorageKey.ACTIVE_TAB, "viewer")

    assert storage.load_string(StorageKey.DECODER_INPUT) == "aGk="
    assert storage.load_string(StorageKey.ACTIVE_TAB) == "viewer"


def test_load_returns_none_for_invalid_entry(tmp_path: Path) -> None:
    storage = SessionStorage(tmp_path / "session.json")
    storage.save_string(StorageKey.VIEWER_FILE, '{"name": "x"}')

    assert storage.load(StorageKey.VIEWER_FILE) is None


def test_corrupt_file_reads_as_empty_and_is_overwritten(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    path.write_text("not json", encoding="utf-8")
    storage = SessionStorage(path)

    assert storage.load_string(StorageKey.DECODER_INPUT) is None
    assert storage.save_string(StorageKey.DECODER_INPUT, "QQ==") is True
    assert json.loads(path.read_text(encoding="utf-8")) == {"b64_decoder_input": "QQ=="}


def test_save_reports_write_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    storage = SessionStorage(blocker / "session.json")

    assert storage.save_string(StorageKey.DECODER_INPUT, "QQ==") is False


def test_remove_drops_one_slot(tmp_path: Path) -> None:
    storage = SessionStorage(tmp_path / "session.json")
    storage.save_string(StorageKey.DECODER_INPUT, "QQ==")
    storage.save_string(StorageKey.ACTIVE_TAB, "decoder")

    storage.remove(StorageKey.DECODER_INPUT)

    assert storage.load_string(StorageKey.DECODER_INPUT) is None
    assert storage.load_string(StorageKey.ACTIVE_TAB) == "decoder"


def test_clear_all_deletes_owned_slots(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    storage = SessionStorage(path)
    storage.save_string(StorageKey.DECODER_INPUT, "QQ==")
    storage.save(StorageKey.ENCODER_FILE, encode_bytes(b"x", name="x.bin"))

    storage.clear_all()

    assert not path.exists()
    assert storage.load(StorageKey.ENCODER_FILE) is None


def test_clear_all_keeps_foreign_entries(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    path.write_text(json.dumps({"b64_active_tab": "viewer", "theme": "dark"}), encoding="utf-8")

    SessionStorage(path).clear_all()

    assert json.loads(path.read_text(encoding="utf-8")) == {"theme": "dark"}


def test_clear_all_without_file_is_noop(tmp_path: Path) -> None:
    SessionStorage(tmp_path / "missing.json").clear_all()

    assert not (tmp_path / "missing.json").exists()


def test_from_settings_uses_storage_path(settings: Settings) -> None:
    storage = SessionStorage.from_settings(settings)

    assert str(storage.path) == settings.storage_path
