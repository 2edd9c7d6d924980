"""Unit tests for the CLI store command (src.cli.store)."""

from __future__ import annotations

import json
from argparse import Namespace
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.cli.store import _build_parser, _format_json_output, _format_text_output, _run, main
from src.models.media import StoreResult, UploadResult
from src.utils.errors import MediaTooLarge
from tests.conftest import make_image_bytes, make_settings


def _args(file: str, **overrides) -> Namespace:
    defaults = {
        "file": file,
        "backend": None,
        "owner_id": None,
        "content_type": None,
        "json_output": False,
        "output": None,
        "quiet": True,
    }
    defaults.update(overrides)
    return Namespace(**defaults)


# ======================================================================
# _build_parser
# ======================================================================


class TestBuildParser:
    def test_file_only(self) -> None:
        args = _build_parser().parse_args(["avatar.png"])
        assert args.file == "avatar.png"
        assert args.backend is None
        assert args.owner_id is None
        assert args.json_output is False
        assert args.quiet is False

    def test_all_options(self) -> None:
        args = _build_parser().parse_args(
            [
                "cv.pdf",
                "--backend", "cloudinary",
                "--owner-id", "u1",
                "--content-type", "application/pdf",
                "--json",
                "-o", "out.json",
                "-q",
            ]
        )
        assert args.backend == "cloudinary"
        assert args.owner_id == "u1"
        assert args.content_type == "application/pdf"
        assert args.json_output is True
        assert args.output == "out.json"
        assert args.quiet is True

    def test_unknown_backend_rejected(self) -> None:
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["a.png", "--backend", "s3"])


# ======================================================================
# Formatting
# ======================================================================


class TestFormatTextOutput:
    def test_short_payload_printed_whole(self) -> None:
        text = _format_text_output(StoreResult.ok("endpoint", "https://drive.example/a"))
        assert text.splitlines() == ["STORED [endpoint]", "  https://drive.example/a"]

    def test_long_payload_truncated(self) -> None:
        data = "data:image/jpeg;base64," + "A" * 500
        text = _format_text_output(StoreResult.ok("embedded", data))
        assert "..." in text
        assert f"({len(data):,} chars)" in text
        assert data not in text

    def test_external_id_shown(self) -> None:
        upload = UploadResult(url="https://res.example/a.png", external_id="pub-1", provider="cloudinary")
        text = _format_text_output(StoreResult.ok("cloudinary", upload.url, upload=upload))
        assert "id: pub-1" in text

    def test_failure(self) -> None:
        text = _format_text_output(StoreResult.failed("embedded", MediaTooLarge("Image must be smaller than 5 MB")))
        assert text == "FAILED [embedded] MediaTooLarge: Image must be smaller than 5 MB"


class TestFormatJsonOutput:
    def test_full_result(self) -> None:
        data = "data:image/jpeg;base64," + "A" * 500
        parsed = json.loads(_format_json_output(StoreResult.ok("embedded", data)))
        assert parsed["success"] is True
        assert parsed["backend"] == "embedded"
        assert parsed["data"] == data
        assert parsed["error"] is None


# ======================================================================
# _run
# ======================================================================


class TestRun:
    @pytest.mark.asyncio
    async def test_file_not_found(self, tmp_path: Path, capsys) -> None:
        code = await _run(_args(str(tmp_path / "missing.png")), make_settings())
        assert code == 1
        assert "File not found" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_unreadable_file(self, image_file: Path, capsys) -> None:
        with patch.object(Path, "read_bytes", side_effect=PermissionError(13, "Permission denied")):
            code = await _run(_args(str(image_file)), make_settings())

        assert code == 1
        assert "Cannot read" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_embedded_success(self, image_file: Path, capsys) -> None:
        code = await _run(_args(str(image_file)), make_settings())
        assert code == 0
        out = capsys.readouterr().out
        assert "STORED [embedded]" in out
        assert "data:image/jpeg;base64," in out

    @pytest.mark.asyncio
    async def test_wrong_type_fails(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "cv.pdf"
        path.write_bytes(b"%PDF-1.4 fake")

        code = await _run(_args(str(path)), make_settings())

        assert code == 1
        assert "FAILED [embedded] InvalidMediaType" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_content_type_override(self, tmp_path: Path) -> None:
        path = tmp_path / "upload.bin"
        path.write_bytes(make_image_bytes())

        assert await _run(_args(str(path)), make_settings()) == 1
        assert await _run(_args(str(path), content_type="image/png"), make_settings()) == 0

    @pytest.mark.asyncio
    async def test_json_to_file(self, image_file: Path, tmp_path: Path) -> None:
        out_path = tmp_path / "result.json"

        code = await _run(_args(str(image_file), json_output=True, output=str(out_path)), make_settings())

        assert code == 0
        parsed = json.loads(out_path.read_text(encoding="utf-8"))
        assert parsed["success"] is True
        assert parsed["data"].startswith("data:image/jpeg;base64,")

    @pytest.mark.asyncio
    async def test_owner_and_backend_passed_through(self, image_file: Path) -> None:
        service = MagicMock()
        service.store = AsyncMock(return_value=StoreResult.ok("endpoint", "https://drive.example/a"))

        with patch("src.main.build_ingestion_service", return_value=service) as build:
            code = await _run(
                _args(str(image_file), backend="endpoint", owner_id="u1"), make_settings()
            )

        assert code == 0
        assert build.call_args.kwargs["backend"] == "endpoint"
        media = service.store.call_args.args[0]
        assert media.filename == "avatar.png"
        assert media.content_type == "image/png"
        assert service.store.call_args.kwargs["owner_id"] == "u1"


# ======================================================================
# main
# ======================================================================


class TestMain:
    def test_returns_exit_code(self, image_file: Path) -> None:
        assert main([str(image_file), "--quiet"], app_settings=make_settings()) == 0

    def test_failure_exit_code(self, tmp_path: Path) -> None:
        assert main([str(tmp_path / "nope.png"), "-q"], app_settings=make_settings()) == 1
