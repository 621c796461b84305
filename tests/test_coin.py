# tests/test_coin.py
"""
Tests para el modelo de unidad monetaria (Coin).
"""
from decimal import Decimal

import pytest

from app.domain.coin import Coin, total_value, value_of
from app.domain.errors import InvalidArgumentError


class TestCoinValues:
    """Tests para los valores en peniques."""

    def test_values_in_pence(self):
        """Test: Cada denominación tiene su valor exacto en peniques."""
        expected = {
            Coin.ONE_P: 1,
            Coin.TWO_P: 2,
            Coin.FIVE_P: 5,
            Coin.TEN_P: 10,
            Coin.TWENTY_P: 20,
            Coin.FIFTY_P: 50,
            Coin.ONE_POUND: 100,
            Coin.TWO_POUND: 200,
            Coin.FIVE_POUND: 500,
        }
        for coin, pence in expected.items():
            assert coin.value_in_pence == pence
            assert value_of(coin) == pence

    def test_set_is_closed(self):
        """Test: El set de denominaciones es fijo."""
        assert len(Coin) == 9
        assert all(coin.value_in_pence > 0 for coin in Coin)

    def test_face_value(self):
        assert Coin.TWENTY_P.face_value == Decimal("0.2")
        assert Coin.FIVE_POUND.face_value == Decimal("5")

    def test_total_value(self):
        assert total_value([Coin.TEN_P, Coin.TWENTY_P, Coin.FIFTY_P, Coin.ONE_POUND]) == 180
        assert total_value([]) == 0


class TestCoinParse:
    """Tests para la conversión desde valores faciales."""

    @pytest.mark.parametrize(
        "face_value, expected",
        [
            (0.01, Coin.ONE_P),
            (0.02, Coin.TWO_P),
            (0.05, Coin.FIVE_P),
            (0.1, Coin.TEN_P),
            (0.2, Coin.TWENTY_P),
            (0.5, Coin.FIFTY_P),
            (1.0, Coin.ONE_POUND),
            (2.0, Coin.TWO_POUND),
            (5.0, Coin.FIVE_POUND),
        ],
    )
    def test_parse_float(self, face_value, expected):
        assert Coin.parse(face_value) is expected

    def test_parse_equivalent_representations(self):
        """Test: 0.10, "0.10", Decimal("0.10") y 1 (int) se aceptan."""
        assert Coin.parse(0.10) is Coin.TEN_P
        assert Coin.parse("0.10") is Coin.TEN_P
        assert Coin.parse(Decimal("0.10")) is Coin.TEN_P
        assert Coin.parse(1) is Coin.ONE_POUND

    @pytest.mark.parametrize("face_value", [42, 0.15, 0, -0.5, 0.011, "abc", "nan", True])
    def test_parse_unsupported(self, face_value):
        """Test: Valores fuera del set fallan con InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError):
            Coin.parse(face_value)

    def test_parse_all(self):
        assert Coin.parse_all([1.0, 0.5]) == [Coin.ONE_POUND, Coin.FIFTY_P]
        with pytest.raises(InvalidArgumentError):
            Coin.parse_all([1.0, 0.3])
