"""CLI テスト共通フィクスチャ・ヘルパー。"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from confreader.config._resolver import filter_cli_overrides
from confreader.models.config import ReaderSettings

PATCH_RESOLVE_SETTINGS = "confreader.cli._app.resolve_settings"

SAMPLE_CONF = """\
# first comment
ParamWithoutSection = yes
[SectName]
; second comment
ParamWithSection = 123456
Ratio = 3.14
Broken = 3.14.5
Flag = maybe   # not a boolean
[Empty]
"""


def _settings_from_cli_only(
    start_dir: Path | None = None,
    cli_overrides: dict[str, object] | None = None,
) -> ReaderSettings:
    """ユーザー環境の設定ファイルを読まずに CLI オプションのみで設定を構築する。"""
    return ReaderSettings.model_validate(filter_cli_overrides(cli_overrides or {}))


@pytest.fixture(autouse=True)
def mock_resolve_settings() -> Iterator[MagicMock]:
    """テストがユーザーの ~/.config や pyproject.toml に依存しないようにする。"""
    with patch(PATCH_RESOLVE_SETTINGS, side_effect=_settings_from_cli_only) as mock:
        yield mock


@pytest.fixture
def write_conf(tmp_path: Path) -> Callable[..., Path]:
    """設定ファイルを書き込みパスを返すファクトリ。"""

    def _write(content: str = SAMPLE_CONF, name: str = "app.conf") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
