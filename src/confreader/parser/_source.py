"""ソースローダー。

ファイル全体を 1 つのバッファに読み込み、末尾に改行を 1 バイト追加する。
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from confreader.errors import OutOfMemoryError, ReadFailureError
from confreader.parser._ascii import LF

logger = logging.getLogger(__name__)


def read_source(path: Path) -> bytearray:
    """設定ファイルを読み込み、末尾に LF を追加したバッファを返す。

    最終行が改行で終わらない場合でも全行が終端されるよう、
    バッファはファイルサイズ + 1 バイトで確保し、最終バイトに LF を置く。
    空ファイルはエラーではなく、空のバッファを返す。

    Args:
        path: 設定ファイルのパス。

    Returns:
        ファイル内容 + LF のバッファ。空ファイルの場合は空のバッファ。

    Raises:
        ReadFailureError: オープン・サイズ取得・読み込みに失敗した場合、
            または読み込めたバイト数がファイルサイズに満たない場合。
        OutOfMemoryError: バッファを確保できない場合。
    """
    try:
        with path.open("rb") as f:
            size = os.fstat(f.fileno()).st_size
            if size == 0:
                logger.debug("Configuration file '%s' is empty", path)
                return bytearray()
            try:
                buffer = bytearray(size + 1)
            except MemoryError:
                raise OutOfMemoryError(
                    f"Cannot allocate {size + 1} bytes for '{path}'"
                ) from None
            read = f.readinto(memoryview(buffer)[:size])
    except OSError as e:
        raise ReadFailureError(f"Cannot read configuration file '{path}': {e}") from e

    if read != size:
        raise ReadFailureError(
            f"Short read on '{path}': expected {size} bytes, got {read}"
        )
    buffer[size] = LF
    return buffer
