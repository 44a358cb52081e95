"""設定ファイル探索。

pyproject.toml のカレント→親探索と、ユーザーグローバル設定パスを提供する。
"""

from __future__ import annotations

import stat as stat_module
from collections.abc import Callable
from pathlib import Path

_CONFIG_FILE_NAME: str = "config.toml"
_PYPROJECT_FILE_NAME: str = "pyproject.toml"


def _find_ancestor(
    start: Path,
    target_name: str,
    check: Callable[[int], bool],
) -> Path | None:
    """start から親方向に target_name を探索し、最初にマッチした候補パスを返す。

    Args:
        start: 探索開始ディレクトリ。
        target_name: 探索対象の名前（例: "pyproject.toml"）。
        check: stat.st_mode に適用する種別チェック関数（例: stat.S_ISREG）。

    Returns:
        最初にマッチした候補パス（start/…/target_name）。見つからなければ None。

    Raises:
        OSError: 探索パス上のアクセス権限エラー等。
    """
    current = start.resolve()
    while True:
        candidate = current / target_name
        try:
            st = candidate.stat()
        except FileNotFoundError:
            pass
        else:
            if check(st.st_mode):
                return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def find_pyproject_toml(start: Path) -> Path | None:
    """start ディレクトリから親方向に pyproject.toml を探索する。

    Args:
        start: 探索開始ディレクトリ。

    Returns:
        最初に見つかった pyproject.toml のフルパス。見つからなければ None。

    Raises:
        OSError: 探索パス上のアクセス権限エラー等。
    """
    return _find_ancestor(start, _PYPROJECT_FILE_NAME, stat_module.S_ISREG)


def get_user_config_path() -> Path:
    """ユーザーグローバル設定ファイルのパスを返す。

    ~/.config/confreader/config.toml を固定パスとして返す（存在チェックは行わない）。

    Raises:
        RuntimeError: ホームディレクトリを特定できない場合。
    """
    return Path.home() / ".config" / "confreader" / _CONFIG_FILE_NAME
