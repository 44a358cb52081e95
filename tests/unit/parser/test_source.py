"""ソースローダーのテスト。

read_source — 末尾 LF 付加, 空ファイル, 不在, 権限なし, 短い読み込み, メモリ不足
parse_file — 空ファイル, 最終行の改行なし
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from confreader.errors import OutOfMemoryError, ReadFailureError
from confreader.models.error_kind import ErrorKind
from confreader.parser import parse_file, read_source

_SKIP_PERMISSION = pytest.mark.skipif(
    os.name == "nt" or os.getuid() == 0,
    reason="POSIX permissions required and not running as root",
)


def _write(path: Path, content: bytes) -> Path:
    path.write_bytes(content)
    return path


class TestReadSourceValid:
    """読み込み成功。"""

    def test_appends_line_feed(self, tmp_path: Path) -> None:
        """ファイル内容の後ろに LF が 1 バイト追加される。"""
        path = _write(tmp_path / "app.conf", b"a=1\n")
        assert read_source(path) == bytearray(b"a=1\n\n")

    def test_appends_line_feed_without_trailing_newline(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "app.conf", b"a=1")
        assert read_source(path) == bytearray(b"a=1\n")

    def test_empty_file_returns_empty_buffer(self, tmp_path: Path) -> None:
        """空ファイル → 空バッファ（エラーではない）。"""
        path = _write(tmp_path / "empty.conf", b"")
        assert read_source(path) == bytearray()


class TestReadSourceFailure:
    """読み込み失敗。"""

    def test_missing_file_raises_read_failure(self, tmp_path: Path) -> None:
        with pytest.raises(ReadFailureError) as exc_info:
            read_source(tmp_path / "missing.conf")
        assert exc_info.value.kind == ErrorKind.READ_FAILURE

    def test_directory_raises_read_failure(self, tmp_path: Path) -> None:
        with pytest.raises(ReadFailureError):
            read_source(tmp_path)

    @_SKIP_PERMISSION
    def test_unreadable_file_raises_read_failure(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "secret.conf", b"a=1\n")
        path.chmod(0o000)
        try:
            with pytest.raises(ReadFailureError):
                read_source(path)
        finally:
            path.chmod(0o644)

    def test_short_read_raises_read_failure(self, tmp_path: Path) -> None:
        """報告されたサイズより少ないバイト数しか読めない → ReadFailureError。"""
        path = _write(tmp_path / "app.conf", b"a=1\n")
        real_size = path.stat().st_size

        class _FakeStat:
            st_size = real_size + 16

        with (
            patch("confreader.parser._source.os.fstat", return_value=_FakeStat()),
            pytest.raises(ReadFailureError, match="Short read"),
        ):
            read_source(path)

    def test_allocation_failure_raises_out_of_memory(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "app.conf", b"a=1\n")
        with (
            patch(
                "confreader.parser._source.bytearray",
                side_effect=MemoryError,
                create=True,
            ),
            pytest.raises(OutOfMemoryError) as exc_info,
        ):
            read_source(path)
        assert exc_info.value.kind == ErrorKind.OUT_OF_MEMORY


class TestParseFile:
    """parse_file() の統合。"""

    def test_empty_file_yields_bucket_only(self, tmp_path: Path) -> None:
        parsed = parse_file(_write(tmp_path / "empty.conf", b""))
        assert parsed.buffer == b""
        assert len(parsed.sections) == 1
        assert parsed.sections[0].name is None
        assert parsed.parameters == ()

    def test_last_line_without_newline_is_parsed(self, tmp_path: Path) -> None:
        parsed = parse_file(_write(tmp_path / "app.conf", b"[S]\nlast = 42"))
        value = parsed.parameters[0].value
        assert parsed.buffer[value.start : value.end] == b"42"

    def test_buffer_is_immutable_bytes(self, tmp_path: Path) -> None:
        parsed = parse_file(_write(tmp_path / "app.conf", b"a=1\n"))
        assert isinstance(parsed.buffer, bytes)
