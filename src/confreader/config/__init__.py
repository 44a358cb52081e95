"""CLI 設定管理モジュール。"""

from confreader.config._loader import SettingsFileError
from confreader.config._locator import find_pyproject_toml, get_user_config_path
from confreader.config._resolver import resolve_settings

__all__ = [
    "SettingsFileError",
    "find_pyproject_toml",
    "get_user_config_path",
    "resolve_settings",
]
