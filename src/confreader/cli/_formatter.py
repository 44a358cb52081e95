"""DumpFormatter — Document を表示用文字列に変換する。

text 形式は Rich のテーブル、json 形式は pydantic のシリアライズを使用する。
"""

from __future__ import annotations

import io
from typing import Final

from rich.console import Console
from rich.table import Table
from rich.text import Text

from confreader.document import Document
from confreader.models._base import ConfreaderBaseModel

_TEXT_WIDTH: Final[int] = 120
_UNSCOPED_LABEL: Final[str] = "(none)"


class DumpParameter(ConfreaderBaseModel):
    """出力用のパラメーター。"""

    key: str
    value: str


class DumpSection(ConfreaderBaseModel):
    """出力用のセクション。name が None はセクションなしバケット。"""

    name: str | None
    parameters: tuple[DumpParameter, ...] = ()


class DocumentDump(ConfreaderBaseModel):
    """出力用の Document 全体。

    キーの重複を保持するため、パラメーターは辞書ではなく配列で表現する。
    """

    path: str
    sections: tuple[DumpSection, ...]


def build_dump(document: Document) -> DocumentDump:
    """Document から出力用モデルを構築する。"""
    return DocumentDump(
        path=str(document.path) if document.path is not None else "",
        sections=tuple(
            DumpSection(
                name=name,
                parameters=tuple(
                    DumpParameter(key=key, value=value) for key, value in items
                ),
            )
            for name, items in document.iter_sections()
        ),
    )


def format_json(document: Document) -> str:
    """Document を JSON 文字列に変換する。"""
    return build_dump(document).model_dump_json(indent=2)


def format_text(document: Document) -> str:
    """Document を Rich テーブルの文字列に変換する。

    セクションなしバケットのパラメーターは Section 列に "(none)" と表示する。
    パラメーターのない名前付きセクションも 1 行として表示する。
    """
    table = Table(
        title=Text(str(document.path)) if document.path is not None else None
    )
    table.add_column("Section")
    table.add_column("Key")
    table.add_column("Value")

    for name, items in document.iter_sections():
        label = name if name is not None else _UNSCOPED_LABEL
        if not items:
            if name is not None:
                table.add_row(Text(label), "", "")
            continue
        for key, value in items:
            table.add_row(Text(label), Text(key), Text(value))

    buffer = io.StringIO()
    console = Console(file=buffer, width=_TEXT_WIDTH, color_system=None)
    console.print(table)
    return buffer.getvalue().rstrip("\n")
