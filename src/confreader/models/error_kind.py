"""ErrorKind — 読み込み・参照時のエラー種別。"""

from enum import StrEnum


class ErrorKind(StrEnum):
    """Document の操作で発生しうるエラー種別。

    READ_FAILURE / PARSE_FAILURE / BUSY / OUT_OF_MEMORY は読み込み時に例外として送出される。
    NO_SUCH_SECTION / NO_SUCH_PARAMETER / INVALID_VALUE は参照系 API が
    Document.last_error に記録するのみで、例外にはならない。
    """

    READ_FAILURE = "read_failure"
    PARSE_FAILURE = "parse_failure"
    NO_SUCH_SECTION = "no_such_section"
    NO_SUCH_PARAMETER = "no_such_parameter"
    INVALID_VALUE = "invalid_value"
    BUSY = "busy"
    OUT_OF_MEMORY = "out_of_memory"
