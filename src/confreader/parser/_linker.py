"""セクション・パラメーターのリンク（2 パス目）。

1 パス目の件数からセクションテーブルとパラメーターテーブルを
ちょうどのサイズで確保し、記録済みの行を順に解析して
各パラメーターを直前のセクション（なければバケット 0）に結び付ける。
キー・値・セクション名の終端はバッファ内でその場で NUL に書き換える。
"""

from __future__ import annotations

from dataclasses import dataclass

from confreader.errors import ParseError
from confreader.models.tables import Parameter, Section, Span
from confreader.parser._ascii import (
    CLOSE_BRACKET,
    COMMENT_MARKERS,
    INLINE_WHITESPACE,
    KEY_TERMINATORS,
    NUL,
    OPEN_BRACKET,
)
from confreader.parser._splitter import LineTable

_VALUE_SEPARATORS = KEY_TERMINATORS


@dataclass(frozen=True)
class LinkedTables:
    """2 パス目の結果。

    Attributes:
        sections: セクションテーブル。インデックス 0 はセクションなしバケット。
        parameters: パラメーターテーブル（ファイル内の出現順）。
    """

    sections: tuple[Section, ...]
    parameters: tuple[Parameter, ...]


class _Cursor:
    """NUL 終端されたバッファ上の読み取り位置。

    バッファ末尾を越えた位置は NUL として扱う。
    """

    __slots__ = ("buffer", "pos", "size")

    def __init__(self, buffer: bytearray, pos: int) -> None:
        self.buffer = buffer
        self.size = len(buffer)
        self.pos = pos

    def peek(self) -> int:
        return self.buffer[self.pos] if self.pos < self.size else NUL

    def terminate(self) -> None:
        """現在位置に NUL を書き込む。"""
        if self.pos < self.size:
            self.buffer[self.pos] = NUL

    def skip(self, chars: frozenset[int]) -> None:
        while self.pos < self.size and self.buffer[self.pos] in chars:
            self.pos += 1


def _link_section_header(cursor: _Cursor, line_number: int) -> Span:
    """``[name]`` 行を解析し、セクション名のビューを返す。

    Raises:
        ParseError: ``]`` が見つからない場合、または ``]`` の後に
            コメント以外の文字がある場合。
    """
    cursor.pos += 1
    start = cursor.pos
    while cursor.peek() != CLOSE_BRACKET:
        if cursor.peek() == NUL:
            raise ParseError(line_number, "section header is missing ']'")
        cursor.pos += 1
    cursor.terminate()
    name = Span(start=start, end=cursor.pos)
    cursor.pos += 1

    cursor.skip(INLINE_WHITESPACE)
    tail = cursor.peek()
    if tail != NUL and tail not in COMMENT_MARKERS:
        raise ParseError(
            line_number, "unexpected characters after section header"
        )
    return name


def _link_parameter(cursor: _Cursor, line_number: int) -> Parameter:
    """``key = value`` 行を解析し、Parameter を返す。

    値の途中の ``#`` / ``;`` は、直前が空白の場合に限りコメント開始とみなす。

    Raises:
        ParseError: 区切り文字がない、値がない、キーが空、
            またはコメントが値と空白で区切られていない場合。
    """
    buffer = cursor.buffer
    key_start = cursor.pos
    while cursor.peek() not in _VALUE_SEPARATORS:
        if cursor.peek() == NUL:
            raise ParseError(line_number, "parameter has no value")
        cursor.pos += 1
    if cursor.pos == key_start:
        raise ParseError(line_number, "parameter has an empty key")
    cursor.terminate()
    key = Span(start=key_start, end=cursor.pos)
    cursor.pos += 1

    cursor.skip(_VALUE_SEPARATORS)
    if cursor.peek() == NUL or cursor.peek() in COMMENT_MARKERS:
        raise ParseError(line_number, "parameter has no value")

    value_start = cursor.pos
    while cursor.peek() != NUL:
        if cursor.peek() in COMMENT_MARKERS:
            if buffer[cursor.pos - 1] not in INLINE_WHITESPACE:
                raise ParseError(
                    line_number, "comment must be separated from the value by whitespace"
                )
            break
        cursor.pos += 1

    # 値の先頭は非空白なので value_start より前には戻らない
    end = cursor.pos
    while buffer[end - 1] in INLINE_WHITESPACE:
        end -= 1
    if end < cursor.size:
        buffer[end] = NUL
    return Parameter(key=key, value=Span(start=value_start, end=end))


def link_tables(buffer: bytearray, lines: LineTable) -> LinkedTables:
    """記録済みの行を解析し、セクションとパラメーターをリンクする。

    Args:
        buffer: split_lines() で行末を NUL 終端済みのバッファ。書き換えられる。
        lines: split_lines() の結果。

    Returns:
        セクションテーブルとパラメーターテーブル。

    Raises:
        ParseError: 構文エラーの場合。行番号は 1 始まり。
            1 パス目と 2 パス目でパラメーター数が食い違った場合も送出する。
    """
    section_names: list[Span | None] = [None] * (lines.section_count + 1)
    section_firsts: list[int] = [0] * (lines.section_count + 1)
    section_sizes: list[int] = [0] * (lines.section_count + 1)
    parameters: list[Parameter | None] = [None] * lines.parameter_count

    section_index = 0
    parameter_index = 0
    for line_index, offset in enumerate(lines.offsets):
        line_number = line_index + 1
        cursor = _Cursor(buffer, offset)
        first = cursor.peek()

        if first == OPEN_BRACKET:
            section_index += 1
            if section_index > lines.section_count:
                raise ParseError(line_number, "section table overflow")
            section_names[section_index] = _link_section_header(cursor, line_number)
            section_firsts[section_index] = parameter_index
            continue

        if first == NUL or first in COMMENT_MARKERS:
            continue

        if parameter_index >= lines.parameter_count:
            raise ParseError(line_number, "parameter table overflow")
        parameters[parameter_index] = _link_parameter(cursor, line_number)
        section_sizes[section_index] += 1
        parameter_index += 1

    sections = tuple(
        Section(name=name, first_param=first_param, size=size)
        for name, first_param, size in zip(
            section_names, section_firsts, section_sizes, strict=True
        )
    )
    linked = tuple(p for p in parameters if p is not None)
    return LinkedTables(sections=sections, parameters=linked)
