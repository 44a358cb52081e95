"""パーサーが参照するバイト定数と ASCII 比較。"""

from __future__ import annotations

from typing import Final

NUL: Final[int] = 0x00
TAB: Final[int] = 0x09
LF: Final[int] = 0x0A
CR: Final[int] = 0x0D
SPACE: Final[int] = 0x20
HASH: Final[int] = ord("#")
SEMICOLON: Final[int] = ord(";")
EQUALS: Final[int] = ord("=")
OPEN_BRACKET: Final[int] = ord("[")
CLOSE_BRACKET: Final[int] = ord("]")

INLINE_WHITESPACE: Final[frozenset[int]] = frozenset({SPACE, TAB})
"""行内の空白文字（スペース・タブ）。"""

COMMENT_MARKERS: Final[frozenset[int]] = frozenset({HASH, SEMICOLON})
"""コメント開始文字。"""

KEY_TERMINATORS: Final[frozenset[int]] = frozenset({EQUALS, SPACE, TAB})
"""キーと値の区切り文字。"""


def eq_ignore_case(a: bytes, b: bytes) -> bool:
    """ASCII の大文字小文字を区別せずにバイト列を比較する。

    bytes.lower() は ASCII 範囲外のバイトを変換しないため、
    Unicode の大文字小文字規則は適用されない。
    """
    return len(a) == len(b) and a.lower() == b.lower()
