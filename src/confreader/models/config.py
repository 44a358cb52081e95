"""CLI 設定モデル。

ReaderSettings は設定ファイル・pyproject.toml・CLI オプションを
マージした結果から構築される。
"""

from __future__ import annotations

import codecs
import logging
from enum import StrEnum
from typing import Final

from pydantic import Field, field_validator

from confreader.models._base import ConfreaderBaseModel, normalize_enum_value

DEFAULT_ENCODING: Final[str] = "utf-8"


class OutputFormat(StrEnum):
    """dump サブコマンドの出力形式。"""

    TEXT = "text"
    JSON = "json"


class LogLevel(StrEnum):
    """ログレベル。logging モジュールのレベル名と一致する。"""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

    def to_logging(self) -> int:
        """logging モジュールの数値レベルに変換する。"""
        return logging.getLevelNamesMapping()[self.value]


class ReaderSettings(ConfreaderBaseModel):
    """CLI の全設定項目を統合した不変モデル。

    デフォルト値のみで有効なインスタンスを構築可能。
    """

    output_format: OutputFormat = OutputFormat.TEXT
    log_level: LogLevel = LogLevel.WARNING
    encoding: str = Field(default=DEFAULT_ENCODING, min_length=1)

    @field_validator("output_format", mode="before")
    @classmethod
    def normalize_output_format(cls, v: object) -> object:
        """output_format 入力を小文字に正規化する。"""
        return normalize_enum_value(v, OutputFormat)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        """log_level 入力を大文字に正規化する。"""
        return normalize_enum_value(v, LogLevel)

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Python が認識できるエンコーディング名であることを検証する。"""
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding '{v}'") from None
        return v
