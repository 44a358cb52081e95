"""セクション・パラメーターテーブルのモデル。

Span（バッファ内の範囲ビュー）、Parameter（キーと値の組）、
Section（名前付きセクションまたはセクションなしバケット）を定義する。
いずれも読み込み済みバッファへのオフセットのみを保持し、文字列はコピーしない。
"""

from __future__ import annotations

from pydantic import Field, model_validator

from confreader.models._base import ConfreaderBaseModel


class Span(ConfreaderBaseModel):
    """バッファ内の半開区間 [start, end)。

    Attributes:
        start: 先頭バイトのオフセット。
        end: 終端（NUL 終端子の位置）のオフセット。
    """

    start: int = Field(ge=0)
    end: int = Field(ge=0)

    @model_validator(mode="after")
    def validate_order(self) -> Span:
        """end が start 以上であることを検証する。"""
        if self.end < self.start:
            msg = f"Span end ({self.end}) must not precede start ({self.start})"
            raise ValueError(msg)
        return self

    def __len__(self) -> int:
        return self.end - self.start


class Parameter(ConfreaderBaseModel):
    """1 行から得られたキーと値の組。

    Attributes:
        key: キーのビュー。空にはならない。
        value: 値のビュー。前後の空白を除去済みで、空にはならない。
    """

    key: Span
    value: Span


class Section(ConfreaderBaseModel):
    """セクションテーブルの 1 エントリ。

    インデックス 0 は最初のヘッダーより前のパラメーターを保持する
    セクションなしバケットで、name は None となる。
    所属パラメーターはパラメーターテーブル上で連続しており、
    first_param から size 個が該当する。

    Attributes:
        name: セクション名のビュー。バケット 0 のみ None。
        first_param: 所属パラメーターの先頭インデックス。
        size: 所属パラメーター数。
    """

    name: Span | None = None
    first_param: int = Field(default=0, ge=0)
    size: int = Field(default=0, ge=0)

    @property
    def param_range(self) -> range:
        """パラメーターテーブル上のインデックス範囲を返す。"""
        return range(self.first_param, self.first_param + self.size)
