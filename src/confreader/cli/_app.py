"""CliApp — Typer アプリケーション定義。

サブコマンド:
    check: 設定ファイルをパースし、セクション数・パラメーター数を表示する。
    get: キーの値を型変換して表示する。
    sections: 名前付きセクションの一覧を表示する。
    dump: 全セクション・パラメーターを text / json 形式で表示する。

終了コードは ExitCode に従い、エラーメッセージは stderr に出力する。
"""

from __future__ import annotations

import importlib.metadata
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Annotated, assert_never

import typer
from pydantic import ValidationError

from confreader.cli._formatter import format_json, format_text
from confreader.config import SettingsFileError, resolve_settings
from confreader.document import Document
from confreader.errors import ConfreaderError, ParseError
from confreader.models.config import LogLevel, OutputFormat, ReaderSettings
from confreader.models.error_kind import ErrorKind
from confreader.models.exit_code import ExitCode

_OVERRIDES_KEY = "_settings_overrides"
_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class ValueType(StrEnum):
    """get サブコマンドの値の型。"""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    CHAR = "char"


app = typer.Typer(
    name="confreader",
    help="Read key=value configuration files with optional [sections].",
    add_completion=False,
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    """--version 指定時にバージョン番号を出力して終了する。"""
    if value:
        print(importlib.metadata.version("confreader"))
        raise typer.Exit()


def main() -> None:
    """CLI エントリポイント。pyproject.toml の [project.scripts] から呼び出される。"""
    app()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = None,
    log_level: Annotated[
        LogLevel | None,
        typer.Option("--log-level", help="Logging level.", case_sensitive=False),
    ] = None,
    encoding: Annotated[
        str | None,
        typer.Option("--encoding", help="Text encoding of configuration files."),
    ] = None,
) -> None:
    """Read key=value configuration files with optional [sections]."""
    obj = ctx.ensure_object(dict)
    obj[_OVERRIDES_KEY] = {"log_level": log_level, "encoding": encoding}


def _resolve(ctx: typer.Context, **extra: object) -> ReaderSettings:
    """グローバルオプションとサブコマンドのオプションから設定を解決し、ロギングを構成する。"""
    obj = ctx.ensure_object(dict)
    overrides: dict[str, object] = {**obj.get(_OVERRIDES_KEY, {}), **extra}
    try:
        settings = resolve_settings(cli_overrides=overrides)
    except ValidationError as e:
        print(
            f"Error: Invalid settings: {e}\n"
            "Check [tool.confreader] in pyproject.toml and "
            "~/.config/confreader/config.toml.",
            file=sys.stderr,
        )
        raise typer.Exit(code=ExitCode.INPUT_ERROR) from None
    except SettingsFileError as e:
        print(
            f"Error: Invalid settings file {e}\n"
            "Fix or remove the file, or override the value on the command line.",
            file=sys.stderr,
        )
        raise typer.Exit(code=ExitCode.INPUT_ERROR) from None

    logging.basicConfig(
        level=settings.log_level.to_logging(), format=_LOG_FORMAT, stream=sys.stderr
    )
    return settings


def _open_document(path: Path, settings: ReaderSettings) -> Document:
    """設定ファイルを読み込む。失敗時はエラーを表示して終了する。"""
    try:
        return Document(path, encoding=settings.encoding)
    except ParseError as e:
        print(f"Error: {path}:{e.line_number}: {e.reason}", file=sys.stderr)
        raise typer.Exit(code=ExitCode.PARSE_ERROR) from None
    except ConfreaderError as e:
        print(
            f"Error: {e}\nCheck that the file exists and is readable.",
            file=sys.stderr,
        )
        raise typer.Exit(code=ExitCode.INPUT_ERROR) from None


@app.command()
def check(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Configuration file to parse.")],
) -> None:
    """Parse a configuration file and report its size."""
    settings = _resolve(ctx)
    with _open_document(file, settings) as document:
        print(
            f"{file}: OK ({len(document.sections) - 1} sections, "
            f"{len(document.parameters)} parameters)"
        )


@app.command()
def sections(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Configuration file to parse.")],
) -> None:
    """List section names in file order."""
    settings = _resolve(ctx)
    with _open_document(file, settings) as document:
        for name in document.section_names():
            print(name)


@app.command()
def get(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Configuration file to parse.")],
    key: Annotated[str, typer.Argument(help="Parameter name (case-insensitive).")],
    section: Annotated[
        str | None,
        typer.Option("--section", "-s", help="Section name (case-insensitive)."),
    ] = None,
    value_type: Annotated[
        ValueType,
        typer.Option("--type", "-t", help="Value type.", case_sensitive=False),
    ] = ValueType.STRING,
    default: Annotated[
        str | None,
        typer.Option(
            "--default", "-d", help="Printed when the value is missing or invalid."
        ),
    ] = None,
) -> None:
    """Print the value of a parameter."""
    settings = _resolve(ctx)
    with _open_document(file, settings) as document:
        raw = document.find(key, section)
        if raw is None:
            if default is not None:
                print(default)
                return
            location = f" in section '{section}'" if section is not None else ""
            print(
                f"Error: Parameter '{key}' not found{location}.\n"
                "Run 'confreader dump' to list available parameters.",
                file=sys.stderr,
            )
            raise typer.Exit(code=ExitCode.NOT_FOUND)

        rendered = _read_typed(document, key, section, value_type)
        if rendered is None:
            if default is not None:
                print(default)
                return
            print(
                f"Error: Value {raw!r} of '{key}' is not a valid {value_type.value}.",
                file=sys.stderr,
            )
            raise typer.Exit(code=ExitCode.INVALID_VALUE)
        print(rendered)


@app.command()
def dump(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Configuration file to parse.")],
    output_format: Annotated[
        OutputFormat | None,
        typer.Option("--format", help="Output format: text or json."),
    ] = None,
) -> None:
    """Print every section and parameter."""
    settings = _resolve(ctx, output_format=output_format)
    with _open_document(file, settings) as document:
        print(_format_document(document, settings.output_format))


def _read_typed(
    document: Document, key: str, section: str | None, value_type: ValueType
) -> str | None:
    """型付きアクセサで値を読み、表示用文字列を返す。不正な値の場合は None。"""
    rendered: str | None
    if value_type == ValueType.STRING:
        rendered = document.get_string(key, section)
    elif value_type == ValueType.CHAR:
        rendered = document.get_char(key, section)
    elif value_type == ValueType.INT:
        rendered = str(document.get_int(key, section))
    elif value_type == ValueType.FLOAT:
        rendered = str(document.get_double(key, section))
    elif value_type == ValueType.BOOL:
        rendered = "true" if document.get_bool(key, section) else "false"
    else:
        assert_never(value_type)
    if document.last_error == ErrorKind.INVALID_VALUE:
        return None
    return rendered


def _format_document(document: Document, output_format: OutputFormat) -> str:
    """Document を指定形式の文字列に変換する。"""
    if output_format == OutputFormat.JSON:
        return format_json(document)
    if output_format == OutputFormat.TEXT:
        return format_text(document)
    assert_never(output_format)
