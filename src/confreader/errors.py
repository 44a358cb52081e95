"""読み込み時に送出される例外。

全例外は ConfreaderError を基底とし、対応する ErrorKind を kind 属性に持つ。
参照系 API（find / get_* 等）はこれらを送出せず、Document.last_error に記録する。
"""

from __future__ import annotations

from typing import ClassVar

from confreader.models.error_kind import ErrorKind


class ConfreaderError(Exception):
    """confreader の全例外の基底クラス。"""

    kind: ClassVar[ErrorKind]


class ReadFailureError(ConfreaderError):
    """ファイルのオープン・サイズ取得・読み込みに失敗した。"""

    kind = ErrorKind.READ_FAILURE


class ParseError(ConfreaderError):
    """設定ファイルの構文エラー。

    Attributes:
        line_number: エラーが検出された行番号（1 始まり）。
        reason: エラー内容。
    """

    kind = ErrorKind.PARSE_FAILURE

    def __init__(self, line_number: int, reason: str) -> None:
        self.line_number = line_number
        self.reason = reason
        super().__init__(f"line {line_number}: {reason}")


class BusyError(ConfreaderError):
    """読み込み済みの Document に再度読み込もうとした。

    先に release() を呼び出す必要がある。
    """

    kind = ErrorKind.BUSY


class OutOfMemoryError(ConfreaderError):
    """バッファまたはテーブルを確保できなかった。"""

    kind = ErrorKind.OUT_OF_MEMORY
