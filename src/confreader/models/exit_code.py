"""ExitCode — 終了コードの定義。"""

from enum import IntEnum


class ExitCode(IntEnum):
    """プロセス終了コード。

    0-3 は設定ファイルの内容に対応し、4 は CLI 層固有の入力エラー。
    """

    SUCCESS = 0
    NOT_FOUND = 1
    INVALID_VALUE = 2
    PARSE_ERROR = 3
    INPUT_ERROR = 4
