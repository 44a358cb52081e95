"""confreader ドメインモデルパッケージ。"""

from confreader.models._base import ConfreaderBaseModel
from confreader.models.config import LogLevel, OutputFormat, ReaderSettings
from confreader.models.error_kind import ErrorKind
from confreader.models.exit_code import ExitCode
from confreader.models.tables import Parameter, Section, Span

__all__ = [
    "ConfreaderBaseModel",
    "ErrorKind",
    "ExitCode",
    "LogLevel",
    "OutputFormat",
    "Parameter",
    "ReaderSettings",
    "Section",
    "Span",
]
