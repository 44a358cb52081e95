"""設定リゾルバー。

デフォルト値 < ユーザーグローバル設定 < pyproject.toml [tool.confreader] < CLI オプション
の順に項目単位でマージし ReaderSettings を構築する。
"""

from __future__ import annotations

from pathlib import Path

from confreader.config._loader import load_pyproject_settings, load_user_settings
from confreader.config._locator import find_pyproject_toml, get_user_config_path
from confreader.models.config import ReaderSettings


def merge_config_layers(
    *layers: dict[str, object] | None,
) -> dict[str, object]:
    """複数の設定レイヤーを項目単位でマージする。

    後のレイヤーが先のレイヤーを上書きする。None のレイヤーはスキップされる。

    Args:
        layers: マージ対象の設定辞書。低優先度から高優先度の順。

    Returns:
        マージ済みの設定辞書。
    """
    result: dict[str, object] = {}
    for layer in layers:
        if layer is None:
            continue
        result.update(layer)
    return result


def filter_cli_overrides(cli_options: dict[str, object]) -> dict[str, object]:
    """CLI オプション辞書から None 値を除外する。

    None 値は「未指定」を意味し、マージ対象から除外する。
    """
    return {k: v for k, v in cli_options.items() if v is not None}


def resolve_settings(
    start_dir: Path | None = None,
    cli_overrides: dict[str, object] | None = None,
) -> ReaderSettings:
    """設定ソースを解決し ReaderSettings を構築する。

    設定ファイルが存在しない場合は該当レイヤーをスキップする。
    全ファイルが存在しない場合はデフォルト値のみで ReaderSettings を構築する。

    Args:
        start_dir: pyproject.toml の探索開始ディレクトリ。None の場合はカレントディレクトリ。
        cli_overrides: CLI オプションの辞書。None 値は未指定扱い。

    Returns:
        解決済みの ReaderSettings インスタンス。

    Raises:
        pydantic.ValidationError: マージ後の設定値が不正な場合。
        SettingsFileError: 設定ファイルを読み込めない、または未知のキーを含む場合。
    """
    effective_start = start_dir if start_dir is not None else Path.cwd()

    # Layer 1 (最低優先): ユーザーグローバル設定
    user_layer = load_user_settings(get_user_config_path())

    # Layer 2: pyproject.toml [tool.confreader]
    pyproject_layer: dict[str, object] | None = None
    pyproject_path = find_pyproject_toml(effective_start)
    if pyproject_path is not None:
        pyproject_layer = load_pyproject_settings(pyproject_path)

    # Layer 3 (最高優先): CLI overrides
    cli_layer: dict[str, object] | None = None
    if cli_overrides is not None:
        cli_layer = filter_cli_overrides(cli_overrides)

    merged = merge_config_layers(user_layer, pyproject_layer, cli_layer)

    # 未指定の項目には ReaderSettings のフィールドデフォルトが適用される
    return ReaderSettings.model_validate(merged)
