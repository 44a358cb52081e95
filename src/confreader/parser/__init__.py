"""設定ファイルパーサー。

読み込み → 行分割（1 パス目）→ リンク（2 パス目）の順に実行し、
不変バッファとセクション・パラメーターテーブルを返す。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from confreader.errors import OutOfMemoryError
from confreader.models.tables import Parameter, Section
from confreader.parser._ascii import eq_ignore_case
from confreader.parser._linker import LinkedTables, link_tables
from confreader.parser._source import read_source
from confreader.parser._splitter import LineTable, split_lines

logger = logging.getLogger(__name__)

_EMPTY_TABLES = LinkedTables(sections=(Section(),), parameters=())


@dataclass(frozen=True)
class ParsedConfig:
    """パース結果。

    Attributes:
        buffer: 行末・区切りを NUL に書き換えた後の不変バッファ。
        sections: セクションテーブル。インデックス 0 はセクションなしバケット。
        parameters: パラメーターテーブル。
    """

    buffer: bytes
    sections: tuple[Section, ...]
    parameters: tuple[Parameter, ...]


def parse_buffer(buffer: bytearray) -> ParsedConfig:
    """読み込み済みのバッファをパースする。

    Args:
        buffer: read_source() が返したバッファ。書き換えられる。

    Returns:
        パース結果。

    Raises:
        ParseError: 構文エラーの場合。
        OutOfMemoryError: テーブルを確保できない場合。
    """
    if not buffer:
        return ParsedConfig(
            buffer=b"",
            sections=_EMPTY_TABLES.sections,
            parameters=_EMPTY_TABLES.parameters,
        )
    try:
        lines = split_lines(buffer)
        tables = link_tables(buffer, lines)
        frozen = bytes(buffer)
    except MemoryError:
        raise OutOfMemoryError("Cannot allocate parser tables") from None
    logger.debug(
        "Split %d lines: %d section headers, %d parameter lines",
        lines.line_count,
        lines.section_count,
        lines.parameter_count,
    )
    return ParsedConfig(
        buffer=frozen,
        sections=tables.sections,
        parameters=tables.parameters,
    )


def parse_file(path: Path) -> ParsedConfig:
    """設定ファイルを読み込みパースする。

    Args:
        path: 設定ファイルのパス。

    Returns:
        パース結果。

    Raises:
        ReadFailureError: ファイルを読み込めない場合。
        OutOfMemoryError: バッファまたはテーブルを確保できない場合。
        ParseError: 構文エラーの場合。
    """
    return parse_buffer(read_source(path))


__all__ = [
    "LineTable",
    "LinkedTables",
    "ParsedConfig",
    "eq_ignore_case",
    "link_tables",
    "parse_buffer",
    "parse_file",
    "read_source",
    "split_lines",
]
