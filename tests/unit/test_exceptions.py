from b64viewer.exceptions import (
    DependencyError,
    InvalidBase64Error,
    PackageError,
    PreviewError,
    RenderError,
    SettingsError,
)


def test_root_exception_hierarchy() -> None:
    assert issubclass(SettingsError, PackageError)
    assert issubclass(InvalidBase64Error, PackageError)
    assert issubclass(PreviewError, PackageError)
    assert issubclass(RenderError, PackageError)
    assert issubclass(DependencyError, PackageError)


def test_exception_messages() -> None:
    assert str(InvalidBase64Error()) == "Invalid base64 string. Please check your input."
    assert str(SettingsError(exc=ValueError("bad"))) == "Failed to load settings: bad"
    assert str(DependencyError(missing_package=["pymupdf"], message="pdf")) == (
        "Missing runtime dependencies for 'pdf': pymupdf"
    )
