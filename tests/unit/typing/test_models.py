from __future__ import annotations

import pytest
from pydantic import ValidationError

from b64viewer.typing.models import DecodedDocument, PointerSample, StoredFile, TypeGuess, ViewportTransform


def test_type_guess_is_immutable() -> None:
    guess = TypeGuess(mime="image/png", ext="png")

    with pytest.raises(ValidationError):
        guess.mime = "image/gif"


def test_stored_file_requires_base64_data_url() -> None:
    with pytest.raises(ValidationError, match="base64 data URL"):
        StoredFile(name="a.txt", type="text/plain", size=2, data="aGk=", timestamp=0)


def test_stored_file_round_trips_through_json() -> None:
    stored = StoredFile(name="a.txt", type="text/plain", size=2, data="data:text/plain;base64,aGk=", timestamp=1)

    assert StoredFile.model_validate_json(stored.model_dump_json()) == stored


def test_pointer_sample_rejects_page_zero() -> None:
    with pytest.raises(ValidationError):
        PointerSample(pixel_x=1.0, pixel_y=1.0, page=0)


def test_decoded_document_rejects_negative_size() -> None:
    with pytest.raises(ValidationError):
        DecodedDocument(payload="", data_url="", mime_type="x/y", extension="y", filename="document.y", size=-1)


def test_viewport_transform_coefficients() -> None:
    transform = ViewportTransform(a=1, b=2, c=3, d=4, e=5, f=6, scale=1, width=10, height=20)

    assert transform.coefficients == (1.0, 2.0, 3.0, 4.0, 5.0, 6.0)
    assert transform.view_box is None
    assert transform.rotation == 0
