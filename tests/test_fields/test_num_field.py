import pytest
from boxspace.core.types import FieldType, Num16Field, Num32Field, Num64Field


class TestNumFields:
    """Tests for the unsigned integer key fields."""

    @pytest.mark.parametrize("cls, field_type, max_value", [
        (Num16Field, FieldType.NUM16, 2 ** 16 - 1),
        (Num32Field, FieldType.NUM, 2 ** 32 - 1),
        (Num64Field, FieldType.NUM64, 2 ** 64 - 1),
    ])
    def test_range_limits(self, cls, field_type, max_value):
        assert cls(0).get_value() == 0
        assert cls(max_value).get_value() == max_value
        assert cls(max_value).get_type() == field_type

        with pytest.raises(ValueError, match="out of range"):
            cls(max_value + 1)
        with pytest.raises(ValueError, match="out of range"):
            cls(-1)

    def test_rejects_non_int(self):
        with pytest.raises(TypeError, match="requires int"):
            Num32Field("1")
        with pytest.raises(TypeError, match="requires int"):
            Num32Field(1.0)

    def test_rejects_bool(self):
        with pytest.raises(TypeError, match="requires int"):
            Num32Field(True)

    def test_numeric_order(self):
        assert Num32Field(9) < Num32Field(10)
        assert sorted([Num32Field(3), Num32Field(1), Num32Field(2)]) == [
            Num32Field(1), Num32Field(2), Num32Field(3)]

    def test_widths_do_not_compare(self):
        assert Num32Field(1) != Num64Field(1)
        with pytest.raises(TypeError):
            Num32Field(1) < Num64Field(2)

    def test_str_and_repr(self):
        assert str(Num64Field(7)) == "7"
        assert repr(Num16Field(7)) == "Num16Field(7)"
