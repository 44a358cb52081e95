"""行分割（1 パス目）。

バッファを 1 回走査し、各行の開始オフセットを記録しながら改行バイトを
その場で NUL に書き換える。同時にセクションヘッダー行とパラメーター行を
数え、2 パス目のテーブルを過不足なく確保できるようにする。
"""

from __future__ import annotations

from dataclasses import dataclass

from confreader.errors import ParseError
from confreader.parser._ascii import (
    COMMENT_MARKERS,
    CR,
    INLINE_WHITESPACE,
    LF,
    NUL,
    OPEN_BRACKET,
)


@dataclass(frozen=True)
class LineTable:
    """1 パス目の結果。

    Attributes:
        offsets: 各行の最初の非空白文字のオフセット（行順）。
        section_count: セクションヘッダー行の数。
        parameter_count: パラメーター行の数。
    """

    offsets: list[int]
    section_count: int
    parameter_count: int

    @property
    def line_count(self) -> int:
        return len(self.offsets)


def split_lines(buffer: bytearray) -> LineTable:
    """バッファを行に分割し、行末をその場で NUL 終端する。

    行の分類は先頭の非空白文字で決まる:
    ``[`` はセクションヘッダー、``#`` / ``;`` はコメント、
    LF / CR は空行、それ以外はパラメーター行。

    Args:
        buffer: 末尾が LF のバッファ。書き換えられる。

    Returns:
        行オフセットと行種別ごとの件数。

    Raises:
        ParseError: CR の直後が LF でない場合。
    """
    size = len(buffer)
    offsets: list[int] = []
    section_count = 0
    parameter_count = 0

    i = 0
    while i < size:
        while i < size and buffer[i] in INLINE_WHITESPACE:
            i += 1
        if i == size:
            break
        offsets.append(i)

        first = buffer[i]
        if first == OPEN_BRACKET:
            section_count += 1
        elif first not in COMMENT_MARKERS and first != LF and first != CR:
            parameter_count += 1

        while i < size:
            if buffer[i] == CR:
                buffer[i] = NUL
                i += 1
                if i == size or buffer[i] != LF:
                    raise ParseError(
                        len(offsets), "carriage return must be followed by a line feed"
                    )
                buffer[i] = NUL
                break
            if buffer[i] == LF:
                buffer[i] = NUL
                break
            i += 1
        i += 1

    return LineTable(
        offsets=offsets,
        section_count=section_count,
        parameter_count=parameter_count,
    )
