# app/domain/coin.py
from __future__ import annotations

from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Iterable, List, Union

from app.domain.errors import InvalidArgumentError, InvalidStateError

FaceValue = Union[Decimal, float, int, str]


class Coin(Enum):
    """
    Denominaciones de la Royal Mint (UK) que acepta la máquina.

    El valor de cada miembro es su valor exacto en peniques; internamente nunca
    se usa punto flotante. El valor facial (0.01, 0.2, 1.0, ...) sólo existe en
    el borde, para traducir lo que envía el cliente.
    """
    ONE_P = 1
    TWO_P = 2
    FIVE_P = 5
    TEN_P = 10
    TWENTY_P = 20
    FIFTY_P = 50
    ONE_POUND = 100
    TWO_POUND = 200
    FIVE_POUND = 500

    @property
    def value_in_pence(self) -> int:
        if self.value <= 0:
            raise InvalidStateError(f"Coin {self.name} cannot have a value of {self.value}")
        return self.value

    @property
    def face_value(self) -> Decimal:
        """Valor facial en libras, p.ej. Decimal('0.2') para TWENTY_P."""
        return Decimal(self.value_in_pence) / 100

    @classmethod
    def parse(cls, face_value: FaceValue) -> Coin:
        """
        Convierte un valor facial decimal en su denominación.

        La comparación es exacta (sin epsilon): 0.1, 0.10 y "0.10" son 10p,
        pero 0.15 o 42 no corresponden a ninguna moneda.

        Raises:
            InvalidArgumentError: Si el valor no es una denominación soportada.
        """
        if isinstance(face_value, bool):
            raise InvalidArgumentError(f"{face_value!r} is not a coin face value")
        try:
            candidate = face_value if isinstance(face_value, Decimal) else Decimal(str(face_value))
            for coin in cls:
                if coin.face_value == candidate:
                    return coin
        except (InvalidOperation, ValueError):
            raise InvalidArgumentError(f"{face_value!r} is not a coin face value")
        raise InvalidArgumentError(f"unsupported coin face value: {face_value}")

    @classmethod
    def parse_all(cls, face_values: Iterable[FaceValue]) -> List[Coin]:
        return [cls.parse(value) for value in face_values]


def value_of(coin: Coin) -> int:
    """Valor exacto de la moneda en la unidad mínima (peniques)."""
    return coin.value_in_pence


def total_value(coins: Iterable[Coin]) -> int:
    return sum(coin.value_in_pence for coin in coins)
