"""DumpFormatter のテスト。

build_dump — バケット, 空セクション, 重複キー
format_json — JSON としてパース可能
format_text — Rich テーブル出力
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from confreader.cli._formatter import (
    DocumentDump,
    DumpParameter,
    build_dump,
    format_json,
    format_text,
)
from confreader.document import Document


@pytest.fixture
def document(tmp_path: Path) -> Document:
    path = tmp_path / "app.conf"
    path.write_text(
        "Top = 1\n[Net]\nHost = example.org\nHost = backup.org\n[Empty]\n",
        encoding="utf-8",
    )
    return Document(path)


class TestBuildDump:
    def test_bucket_first_with_none_name(self, document: Document) -> None:
        dump = build_dump(document)
        assert isinstance(dump, DocumentDump)
        assert dump.sections[0].name is None
        assert dump.sections[0].parameters == (DumpParameter(key="Top", value="1"),)

    def test_duplicate_keys_preserved(self, document: Document) -> None:
        """同名キーは出現順にすべて保持される。"""
        net = build_dump(document).sections[1]
        assert net.name == "Net"
        assert [p.value for p in net.parameters] == ["example.org", "backup.org"]

    def test_empty_section(self, document: Document) -> None:
        empty = build_dump(document).sections[2]
        assert empty.name == "Empty"
        assert empty.parameters == ()

    def test_path_recorded(self, document: Document) -> None:
        assert build_dump(document).path == str(document.path)


class TestFormatJson:
    def test_parses_back(self, document: Document) -> None:
        data = json.loads(format_json(document))
        assert [s["name"] for s in data["sections"]] == [None, "Net", "Empty"]


class TestFormatText:
    def test_contains_rows(self, document: Document) -> None:
        text = format_text(document)
        assert "example.org" in text
        assert "backup.org" in text
        assert "(none)" in text
        assert "Empty" in text

    def test_markup_not_interpreted(self, tmp_path: Path) -> None:
        """値に含まれる Rich マークアップ風の文字列はそのまま表示される。"""
        path = tmp_path / "markup.conf"
        path.write_text("Style = [bold]x[/bold]\n", encoding="utf-8")
        text = format_text(Document(path))
        assert "[bold]x[/bold]" in text

    def test_no_trailing_newline(self, document: Document) -> None:
        assert not format_text(document).endswith("\n")
