"""CLI entry point for b64viewer."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from b64viewer import __version__, logger
from b64viewer.decoder import (
    decode_base64,
    decode_bytes,
    encode_file,
    export_filename,
    export_text,
    format_bytes,
    get_extension,
    sniff_text,
)
from b64viewer.dependencies import ensure_cli_dependencies_for_pdf
from b64viewer.exceptions import InvalidBase64Error, PackageError, PreviewError
from b64viewer.logging import configure_logging
from b64viewer.pdf_render import PdfViewer
from b64viewer.preview import file_category, select_preview, text_preview
from b64viewer.settings import Settings, get_settings
from b64viewer.storage import SessionStorage
from b64viewer.typing.enums import CopyMode, PreviewKind, StorageKey

_PDF_COMMANDS = frozenset({"pdf-info", "pdf-render", "pdf-point"})


def _copy_mode_from_cli(value: str) -> CopyMode:
    """Convert `--mode` CLI value into copy mode.

    Args:
        value (str): CLI value (`raw` or `data_uri`).

    Raises:
        argparse.ArgumentTypeError: If value is not supported.

    Returns:
        CopyMode: Selected copy mode.
    """
    try:
        return CopyMode.from_str(value.replace("-", "_"))
    except ValueError as exc:
        raise argparse.ArgumentTypeError("--mode must be one of: raw, data_uri") from exc


def _add_pdf_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--input", required=True, type=Path, dest="input_path")
    parser.add_argument("--base64", action="store_true", dest="is_base64", help="Input holds base64 text")
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--scale", type=float, default=None)


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="b64viewer")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    detect_parser = subparsers.add_parser("detect", help="Guess the type of a base64 payload")
    detect_parser.add_argument("--input", type=Path, default=None, dest="input_path")

    decode_parser = subparsers.add_parser("decode", help="Decode base64 text into a document")
    decode_parser.add_argument("--input", type=Path, default=None, dest="input_path")
    decode_parser.add_argument("--output-dir", type=Path, default=None, dest="output_dir")
    decode_parser.add_argument("--show", action="store_true", help="Print the text preview when available")

    encode_parser = subparsers.add_parser("encode", help="Encode a file as base64")
    encode_parser.add_argument("--input", required=True, type=Path, dest="input_path")
    encode_parser.add_argument("--mode", default=CopyMode.RAW, type=_copy_mode_from_cli)
    encode_parser.add_argument("--output", type=Path, default=None, dest="output_path")

    view_parser = subparsers.add_parser("view", help="Open any file in the viewer and describe its preview")
    view_parser.add_argument("--input", type=Path, default=None, dest="input_path")
    view_parser.add_argument("--show", action="store_true", help="Print the text preview when available")

    info_parser = subparsers.add_parser("pdf-info", help="Show PDF page count and page size")
    _add_pdf_source_arguments(info_parser)

    render_parser = subparsers.add_parser("pdf-render", help="Render a PDF page to an image")
    _add_pdf_source_arguments(render_parser)
    render_parser.add_argument("--format", default=None, dest="image_format")
    render_parser.add_argument("--output", type=Path, default=None, dest="output_path")

    point_parser = subparsers.add_parser("pdf-point", help="Convert a canvas pixel to PDF coordinates")
    _add_pdf_source_arguments(point_parser)
    point_parser.add_argument("--x", type=float, required=True, dest="pixel_x")
    point_parser.add_argument("--y", type=float, required=True, dest="pixel_y")

    subparsers.add_parser("clear-session", help="Forget stored inputs and files")

    return parser


def _read_text(input_path: Path | None) -> str:
    """Read pasted text from a file, or from stdin when no file is given."""
    if input_path is None:
        return sys.stdin.read()
    return input_path.read_text(encoding="utf-8")


def _read_pasted_text(input_path: Path | None, settings: Settings) -> str:
    """Read pasted text, restoring the last decoder input on an interactive terminal.

    Args:
        input_path (Path | None): File holding the text, if any.
        settings (Settings): Runtime settings.

    Raises:
        InvalidBase64Error: If nothing was given and no input was saved.

    Returns:
        str: Pasted text.
    """
    if input_path is not None or not sys.stdin.isatty():
        return _read_text(input_path)
    restored = SessionStorage.from_settings(settings).load_string(StorageKey.DECODER_INPUT)
    if restored is None:
        raise InvalidBase64Error(message="No input given and no saved input to restore")
    logger.info("Restored saved decoder input", extra={"length": len(restored)})
    return restored


def _run_detect(args: argparse.Namespace, settings: Settings) -> int:
    guess = sniff_text(_read_pasted_text(args.input_path, settings))
    print(f"{guess.mime}\t{guess.ext}")  # noqa: T201
    return 0


def _run_decode(args: argparse.Namespace, settings: Settings) -> int:
    text = _read_pasted_text(args.input_path, settings)
    SessionStorage.from_settings(settings).save_string(StorageKey.DECODER_INPUT, text)
    document = decode_base64(text)

    output_dir = args.output_dir or Path(settings.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / document.filename
    output_path.write_bytes(decode_bytes(document.payload))

    kind = select_preview(document.mime_type)
    print(f"{document.filename}\t{document.mime_type}\t{format_bytes(document.size)}\t{kind}")  # noqa: T201
    if args.show and kind == PreviewKind.TEXT:
        print(text_preview(document))  # noqa: T201
    logger.info("Document written", extra={"output_path": str(output_path)})
    return 0


def _run_encode(args: argparse.Namespace, settings: Settings) -> int:
    stored = encode_file(args.input_path)
    SessionStorage.from_settings(settings).save(StorageKey.ENCODER_FILE, stored)

    payload = export_text(stored, args.mode)
    if args.output_path is None:
        print(payload)  # noqa: T201
        return 0

    output_path = args.output_path
    if output_path.is_dir():
        output_path /= export_filename(stored)
    output_path.write_text(payload, encoding="utf-8")
    logger.info("Base64 export written", extra={"output_path": str(output_path)})
    return 0


def _run_view(args: argparse.Namespace, settings: Settings) -> int:
    storage = SessionStorage.from_settings(settings)
    if args.input_path is None:
        stored = storage.load(StorageKey.VIEWER_FILE)
        if stored is None:
            raise PreviewError(message="No file to view. Pass --input to open one")
    else:
        stored = encode_file(args.input_path)
        storage.save(StorageKey.VIEWER_FILE, stored)

    kind = select_preview(stored.type)
    category = file_category(get_extension(stored.name, stored.type))
    print(f"{stored.name}\t{stored.type}\t{format_bytes(stored.size)}\t{kind}\t{category}")  # noqa: T201
    if args.show and kind == PreviewKind.TEXT and stored.size:
        print(text_preview(decode_base64(stored.data)))  # noqa: T201
    return 0


def _open_viewer(args: argparse.Namespace, settings: Settings) -> PdfViewer:
    if args.is_base64:
        viewer = PdfViewer.from_base64(_read_text(args.input_path), scale=args.scale, settings=settings)
    else:
        viewer = PdfViewer.open(args.input_path.read_bytes(), scale=args.scale, settings=settings)
    viewer.go_to(args.page)
    return viewer


def _run_pdf_info(args: argparse.Namespace, settings: Settings) -> int:
    with _open_viewer(args, settings) as viewer:
        transform = viewer.viewport()
        x1, y1, x2, y2 = transform.view_box or (0.0, 0.0, 0.0, 0.0)
        print(f"pages\t{viewer.page_count}")  # noqa: T201
        print(f"page\t{viewer.current_page}")  # noqa: T201
        print(f"size\t{abs(x2 - x1):.0f} x {abs(y2 - y1):.0f} pt")  # noqa: T201
        print(f"rotation\t{transform.rotation}")  # noqa: T201
        print(f"canvas\t{transform.width:.0f} x {transform.height:.0f} px @ {round(viewer.scale * 100)}%")  # noqa: T201
    return 0


def _run_pdf_render(args: argparse.Namespace, settings: Settings) -> int:
    with _open_viewer(args, settings) as viewer:
        page = viewer.render_page(args.image_format)
    extension = page.mime_type.split("/", 1)[1].replace("jpeg", "jpg")
    output_path = args.output_path or Path(settings.output_dir) / f"page-{page.page_number}.{extension}"
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(decode_bytes(page.data_base64))
    logger.info("Page image written", extra={"output_path": str(output_path)})
    print(output_path)  # noqa: T201
    return 0


def _run_pdf_point(args: argparse.Namespace, settings: Settings) -> int:
    with _open_viewer(args, settings) as viewer:
        coordinates = viewer.locate(args.pixel_x, args.pixel_y)
    print(coordinates.model_dump_json(indent=2))  # noqa: T201
    return 0


def _run_clear_session(args: argparse.Namespace, settings: Settings) -> int:  # noqa: ARG001
    SessionStorage.from_settings(settings).clear_all()
    return 0


_HANDLERS = {
    "detect": _run_detect,
    "decode": _run_decode,
    "encode": _run_encode,
    "view": _run_view,
    "pdf-info": _run_pdf_info,
    "pdf-render": _run_pdf_render,
    "pdf-point": _run_pdf_point,
    "clear-session": _run_clear_session,
}


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv (list[str] | None): Arguments; defaults to `sys.argv[1:]`.

    Returns:
        int: Exit code (0 for success, 1 for error, 2 for invalid input).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args(argv)

    handler = _HANDLERS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        if args.command in _PDF_COMMANDS:
            ensure_cli_dependencies_for_pdf()
        return handler(args, settings)
    except InvalidBase64Error as exc:
        logger.error("Invalid input", extra={"error": str(exc)})  # noqa: TRY400
        print(str(exc), file=sys.stderr)  # noqa: T201
        return 2
    except PackageError:
        logger.exception("Command failed", extra={"command": args.command})
        return 1
    except KeyboardInterrupt:
        logger.info("Command aborted by user")
        return 130
    except OSError:
        logger.exception("Unexpected error during command", extra={"command": args.command})
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
