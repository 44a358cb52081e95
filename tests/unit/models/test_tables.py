"""テーブルモデルのテスト。

Span / Parameter / Section の制約と派生プロパティ。
"""

import pytest
from pydantic import ValidationError

from confreader.models.tables import Parameter, Section, Span


class TestSpan:
    """Span のバリデーション。"""

    def test_length(self) -> None:
        assert len(Span(start=3, end=8)) == 5

    def test_empty_span_allowed(self) -> None:
        assert len(Span(start=4, end=4)) == 0

    def test_end_before_start_rejected(self) -> None:
        with pytest.raises(ValidationError, match="must not precede"):
            Span(start=5, end=2)

    def test_negative_offset_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Span(start=-1, end=2)

    def test_equality_by_value(self) -> None:
        assert Span(start=1, end=2) == Span(start=1, end=2)


class TestSection:
    """Section のデフォルトと param_range。"""

    def test_defaults_describe_empty_bucket(self) -> None:
        section = Section()
        assert section.name is None
        assert section.size == 0
        assert list(section.param_range) == []

    def test_param_range(self) -> None:
        section = Section(name=Span(start=1, end=5), first_param=2, size=3)
        assert list(section.param_range) == [2, 3, 4]

    def test_negative_size_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Section(size=-1)


class TestParameter:
    def test_holds_key_and_value(self) -> None:
        param = Parameter(key=Span(start=0, end=1), value=Span(start=2, end=3))
        assert param.key.end == 1
        assert param.value.start == 2

    def test_frozen(self) -> None:
        param = Parameter(key=Span(start=0, end=1), value=Span(start=2, end=3))
        with pytest.raises(ValidationError, match="frozen"):
            param.key = Span(start=0, end=0)
