"""confreader — key=value 形式の設定ファイルリーダー。

使い方:
    1. load() または Document(path) で読み込みパースする。
    2. find() / get_int() 等で値を参照する。
    3. release() で破棄する（with 文でも可）。
"""

from confreader.document import Document, load
from confreader.errors import (
    BusyError,
    ConfreaderError,
    OutOfMemoryError,
    ParseError,
    ReadFailureError,
)
from confreader.models import ErrorKind, Parameter, Section, Span


def main() -> None:
    """パッケージエントリポイント。cli.main() に委譲する。

    pyproject.toml の [project.scripts] は confreader.cli:main を直接参照するため、
    この関数はプログラムから confreader.main() として呼び出す場合の互換用。
    """
    from confreader.cli import main as cli_main

    cli_main()


__all__ = [
    "BusyError",
    "ConfreaderError",
    "Document",
    "ErrorKind",
    "OutOfMemoryError",
    "Parameter",
    "ParseError",
    "ReadFailureError",
    "Section",
    "Span",
    "load",
    "main",
]
