from __future__ import annotations

import pytest

from b64viewer.normalizer import (
    clean,
    decoded_size,
    get_raw_base64,
    is_valid,
    split_data_uri,
    to_data_url,
)


def test_clean_trims_and_removes_wrapped_line_breaks() -> None:
    assert clean("  aGVs\nbG8g\td29y bGQ=\r\n") == "aGVsbG8gd29ybGQ="


def test_clean_strips_data_uri_prefix() -> None:
    assert clean("data:text/plain;base64,aGVsbG8=") == "aGVsbG8="


def test_clean_keeps_text_without_prefix_untouched() -> None:
    assert clean("aGVsbG8=") == "aGVsbG8="


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        "aGVs bG8=",
        "data:image/png;base64,iVBORw0KGgo=",
        "data:a;base64,data:b;base64,QQ==",
        "data:a; base64,QQ==",
        "AB=CD",
        "not base64 at all!",
    ],
)
def test_clean_is_idempotent(text: str) -> None:
    once = clean(text)
    assert clean(once) == once


@pytest.mark.parametrize(
    "text",
    [
        "QQ==",
        "QUI=",
        "QUJD",
        "aGVsbG8gd29ybGQ=",
        "+/+/",
        "data:application/pdf;base64,JVBERi0x",
        "  aGVs\nbG8=  ",
    ],
)
def test_is_valid_accepts_well_formed_payloads(text: str) -> None:
    assert is_valid(text) is True


@pytest.mark.parametrize(
    "text",
    [
        "",
        "QQ=",
        "QUJDR",
        "AB=CD",
        "QQ===",
        "Q===",
        "QU-_",
        "QUJD!",
        "   ",
    ],
)
def test_is_valid_rejects_malformed_payloads(text: str) -> None:
    assert is_valid(text) is False


def test_split_data_uri_returns_declared_type() -> None:
    assert split_data_uri("data:image/png;base64,iVBO") == ("image/png", "iVBO")
    assert split_data_uri("iVBO") == (None, "iVBO")


def test_get_raw_base64_and_to_data_url() -> None:
    data_url = to_data_url("aGk=", "text/plain")

    assert data_url == "data:text/plain;base64,aGk="
    assert get_raw_base64(data_url) == "aGk="
    assert get_raw_base64("aGk=") == "aGk="


@pytest.mark.parametrize(
    ("payload", "expected"),
    [("", 0), ("QQ==", 1), ("QUI=", 2), ("QUJD", 3), ("aGVsbG8gd29ybGQ=", 11)],
)
def test_decoded_size_accounts_for_padding(payload: str, expected: int) -> None:
    assert decoded_size(payload) == expected
