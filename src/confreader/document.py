"""Document — パース済み設定ファイルと参照 API。

読み込みは不可分で、成功すればバッファとテーブルが揃った状態になり、
失敗すれば未読み込み状態のまま例外を送出する。
参照系 API は例外を送出せず、見つからない・不正な値の場合は
既定値を返して last_error にエラー種別を記録する。
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterator
from pathlib import Path
from types import TracebackType
from typing import Final, Self, TypeVar

from confreader.errors import BusyError, ConfreaderError, ParseError
from confreader.models.config import DEFAULT_ENCODING
from confreader.models.error_kind import ErrorKind
from confreader.models.tables import Parameter, Section, Span
from confreader.parser import eq_ignore_case, parse_file

logger = logging.getLogger(__name__)

T = TypeVar("T")

_INT_RE: Final[re.Pattern[str]] = re.compile(r"-?[0-9]+")
_DOUBLE_CHARS_RE: Final[re.Pattern[str]] = re.compile(r"[0-9-][0-9.]*")

_TRUE_WORDS: Final[tuple[bytes, ...]] = (b"yes", b"true")
_FALSE_WORDS: Final[tuple[bytes, ...]] = (b"no", b"false")

_UNSCOPED: Final[int] = 0
"""セクションなしバケットのインデックス。"""


class Document:
    """パース済みの設定ファイル。

    1 インスタンスにつき同時に保持できるのは 1 ファイルのみ。
    読み込み済みのインスタンスに load() すると BusyError となり、
    既存のデータは変更されない。再利用する場合は release() を先に呼ぶ。

    Attributes:
        last_error: 直前の操作で記録されたエラー種別。成功時は None。
        error_line: 直前の構文エラーの行番号（1 始まり）。構文エラー以外では None。
    """

    def __init__(
        self,
        path: str | os.PathLike[str] | None = None,
        *,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        self._encoding = encoding
        self._buffer: bytes | None = None
        self._sections: tuple[Section, ...] = ()
        self._parameters: tuple[Parameter, ...] = ()
        self.path: Path | None = None
        self.last_error: ErrorKind | None = None
        self.error_line: int | None = None
        if path is not None:
            self.load(path)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()

    def __repr__(self) -> str:
        if not self.loaded:
            return "Document(<not loaded>)"
        return (
            f"Document({str(self.path)!r}, sections={len(self._sections) - 1}, "
            f"parameters={len(self._parameters)})"
        )

    # --- ライフサイクル ---

    @property
    def loaded(self) -> bool:
        """ファイルを読み込み済みかどうか。"""
        return self._buffer is not None

    def load(self, path: str | os.PathLike[str]) -> None:
        """設定ファイルを読み込みパースする。

        失敗した場合は途中の状態を一切残さず、未読み込みのまま例外を送出する。

        Args:
            path: 設定ファイルのパス。

        Raises:
            BusyError: 既に読み込み済みの場合。
            ReadFailureError: ファイルを読み込めない場合。
            OutOfMemoryError: バッファまたはテーブルを確保できない場合。
            ParseError: 構文エラーの場合。error_line に行番号が記録される。
        """
        self.error_line = None
        if self.loaded:
            self.last_error = ErrorKind.BUSY
            raise BusyError(
                f"Document already holds '{self.path}'; call release() before loading again"
            )

        source = Path(path)
        try:
            parsed = parse_file(source)
        except ParseError as e:
            self.last_error = e.kind
            self.error_line = e.line_number
            raise
        except ConfreaderError as e:
            self.last_error = e.kind
            raise

        self._buffer = parsed.buffer
        self._sections = parsed.sections
        self._parameters = parsed.parameters
        self.path = source
        self.last_error = None
        logger.debug(
            "Loaded '%s': %d sections, %d parameters",
            source,
            len(self._sections) - 1,
            len(self._parameters),
        )

    def release(self) -> None:
        """バッファとテーブルを破棄し、未読み込み状態に戻す。"""
        self._buffer = None
        self._sections = ()
        self._parameters = ()
        self.path = None

    # --- テーブル参照 ---

    @property
    def sections(self) -> tuple[Section, ...]:
        """セクションテーブル。インデックス 0 はセクションなしバケット。"""
        return self._sections

    @property
    def parameters(self) -> tuple[Parameter, ...]:
        """パラメーターテーブル（ファイル内の出現順）。"""
        return self._parameters

    def text(self, span: Span) -> str:
        """ビューが指す範囲を文字列として返す。

        Raises:
            RuntimeError: 未読み込みの場合。
        """
        return self._raw(span).decode(self._encoding, errors="surrogateescape")

    def section_names(self) -> list[str]:
        """名前付きセクションの名前をファイル内の出現順で返す（重複を含む）。"""
        return [
            self.text(section.name)
            for section in self._sections[1:]
            if section.name is not None
        ]

    def items(self, section: str | None = None) -> list[tuple[str, str]]:
        """セクション内の (キー, 値) をファイル内の出現順で返す。

        section が None の場合はセクションなしバケットを対象とする。
        同名セクションが複数ある場合は最初のものが対象となる。
        セクションが見つからない場合は空リストを返し NO_SUCH_SECTION を記録する。
        """
        index = self._section_index(section)
        if index is None:
            self.last_error = ErrorKind.NO_SUCH_SECTION
            return []
        self.last_error = None
        return self._section_items(self._sections[index])

    def iter_sections(self) -> Iterator[tuple[str | None, list[tuple[str, str]]]]:
        """全セクションを (名前, [(キー, 値), ...]) としてテーブル順に返す。

        最初の要素はセクションなしバケットで、名前は None となる。
        """
        for section in self._sections:
            name = self.text(section.name) if section.name is not None else None
            yield name, self._section_items(section)

    # --- 検索 ---

    def find(self, key: str, section: str | None = None) -> str | None:
        """キーに対応する値を返す。

        section が None の場合はセクションなしバケットのみを検索し、
        指定した場合は名前が一致する最初のセクションのみを検索する。
        キー・セクション名の比較は ASCII の大文字小文字を区別しない。

        Returns:
            値の文字列。見つからない場合は None（NO_SUCH_PARAMETER を記録）。
        """
        span = self._find_span(key, section)
        if span is None:
            self.last_error = ErrorKind.NO_SUCH_PARAMETER
            return None
        self.last_error = None
        return self.text(span)

    def has(self, key: str, section: str | None = None) -> bool:
        """キーが存在するかどうか。"""
        return self.find(key, section) is not None

    def has_section(self, name: str) -> bool:
        """名前付きセクションが存在するかどうか。セクションなしバケットは対象外。"""
        if self._section_index(name) is None:
            self.last_error = ErrorKind.NO_SUCH_SECTION
            return False
        self.last_error = None
        return True

    # --- 型付きアクセサ ---

    def get_string(
        self, key: str, section: str | None = None, default: str | None = None
    ) -> str | None:
        """値を文字列として返す。見つからない場合は default。"""
        value = self.find(key, section)
        return value if value is not None else default

    def get_char(
        self, key: str, section: str | None = None, default: str | None = None
    ) -> str | None:
        """値の先頭 1 文字を返す。見つからない場合は default。

        先頭バイトではなくデコード後の先頭文字を返すため、
        マルチバイト文字で始まる値ではその文字全体が返る。
        """
        value = self.find(key, section)
        return value[0] if value is not None else default

    def get_int(self, key: str, section: str | None = None, default: int = 0) -> int:
        """値を 10 進整数として返す。

        値は ``-?[0-9]+`` に完全一致しなければならない。
        見つからない場合や形式が不正な場合は default を返す。
        """
        value = self.find(key, section)
        if value is None:
            return default
        if not _INT_RE.fullmatch(value):
            return self._invalid(key, section, value, "integer", default)
        return int(value, 10)

    def get_double(
        self, key: str, section: str | None = None, default: float = 0.0
    ) -> float:
        """値を浮動小数点数として返す。

        先頭は数字または ``-``、以降は数字と ``.`` のみで構成されていなければならない。
        文字種の検査を通過しても数値に変換できない値（``1.2.3`` 等）は不正とみなす。
        見つからない場合や形式が不正な場合は default を返す。
        """
        value = self.find(key, section)
        if value is None:
            return default
        if not _DOUBLE_CHARS_RE.fullmatch(value):
            return self._invalid(key, section, value, "float", default)
        try:
            return float(value)
        except ValueError:
            return self._invalid(key, section, value, "float", default)

    def get_bool(
        self, key: str, section: str | None = None, default: bool = False
    ) -> bool:
        """値を真偽値として返す。

        ``yes`` / ``true`` / ``1`` は True、``no`` / ``false`` / ``0`` は False。
        単語は大文字小文字を区別しない。それ以外は default を返す。
        """
        span = self._find_span(key, section)
        if span is None:
            self.last_error = ErrorKind.NO_SUCH_PARAMETER
            return default
        self.last_error = None
        raw = self._raw(span)
        if raw == b"1" or any(eq_ignore_case(raw, word) for word in _TRUE_WORDS):
            return True
        if raw == b"0" or any(eq_ignore_case(raw, word) for word in _FALSE_WORDS):
            return False
        return self._invalid(key, section, self.text(span), "boolean", default)

    # --- 内部ヘルパー ---

    def _raw(self, span: Span) -> bytes:
        if self._buffer is None:
            raise RuntimeError("Document is not loaded")
        return self._buffer[span.start : span.end]

    def _encode(self, text: str) -> bytes | None:
        """照合用のバイト列に変換する。エンコードできない名前は None。"""
        try:
            return text.encode(self._encoding, errors="surrogateescape")
        except UnicodeEncodeError:
            return None

    def _section_index(self, name: str | None) -> int | None:
        """セクション名に一致する最初のセクションのインデックスを返す。"""
        if not self._sections:
            return None
        if name is None:
            return _UNSCOPED
        wanted = self._encode(name)
        if wanted is None:
            return None
        for index in range(1, len(self._sections)):
            span = self._sections[index].name
            if span is not None and eq_ignore_case(self._raw(span), wanted):
                return index
        return None

    def _find_span(self, key: str, section: str | None) -> Span | None:
        index = self._section_index(section)
        if index is None:
            return None
        wanted = self._encode(key)
        if wanted is None:
            return None
        for param_index in self._sections[index].param_range:
            parameter = self._parameters[param_index]
            if eq_ignore_case(self._raw(parameter.key), wanted):
                return parameter.value
        return None

    def _section_items(self, section: Section) -> list[tuple[str, str]]:
        return [
            (self.text(p.key), self.text(p.value))
            for p in (self._parameters[i] for i in section.param_range)
        ]

    def _invalid(
        self, key: str, section: str | None, value: str, type_name: str, default: T
    ) -> T:
        """不正な値を記録し default を返す。"""
        self.last_error = ErrorKind.INVALID_VALUE
        location = f"[{section}] " if section is not None else ""
        logger.warning(
            "Invalid %s value for %s'%s': %r, using default %r",
            type_name,
            location,
            key,
            value,
            default,
        )
        return default


def load(
    path: str | os.PathLike[str], *, encoding: str = DEFAULT_ENCODING
) -> Document:
    """設定ファイルを読み込み、新しい Document を返す。

    Raises:
        ReadFailureError: ファイルを読み込めない場合。
        OutOfMemoryError: バッファまたはテーブルを確保できない場合。
        ParseError: 構文エラーの場合。
    """
    return Document(path, encoding=encoding)
