# app/domain/vending_machine.py
from __future__ import annotations

from collections import Counter
from dataclasses import replace
from threading import Lock
from typing import Dict, Iterable, List, Optional, Tuple

from app.domain.change import ChangeCalculator, flatten_change
from app.domain.coin import Coin, FaceValue, total_value
from app.domain.errors import (
    InsufficientChangeError,
    InsufficientFundsError,
    InvalidArgumentError,
    NotFoundError,
    OutOfRangeError,
    UnavailableError,
)
from app.domain.product import ProductSlot
from app.logger import get_logger

logger = get_logger(__name__)


class VendingMachine:
    """
    Máquina expendedora con un número fijo de slots y un set cerrado de monedas.

    Toda lectura y escritura del estado pasa por un único lock de la máquina,
    de modo que una compra (validar, calcular cambio, absorber monedas, restar
    stock) es indivisible para cualquier otro hilo. Si una compra falla, sale
    del bloque `with` sin haber tocado nada.

    Nunca se devuelven referencias al estado interno: los slots son
    `ProductSlot` inmutables y las monedas se devuelven como copia.
    """

    def __init__(
        self,
        slot_count: int,
        supported_coins: Iterable[Coin],
        change_calculator: Optional[ChangeCalculator] = None,
    ) -> None:
        if isinstance(slot_count, bool) or not isinstance(slot_count, int) or slot_count <= 0:
            raise InvalidArgumentError(f"slot count must be a positive integer, got {slot_count!r}")

        coins = list(supported_coins)
        if not coins:
            raise InvalidArgumentError("at least one supported coin is required")
        for coin in coins:
            if not isinstance(coin, Coin):
                raise InvalidArgumentError(f"{coin!r} is not a Coin")

        self._lock = Lock()
        self._slots: List[ProductSlot] = [ProductSlot(index=i) for i in range(slot_count)]
        self._coins: Dict[Coin, int] = {
            coin: 0 for coin in sorted(set(coins), key=lambda c: c.value_in_pence, reverse=True)
        }
        self._change_calculator = change_calculator or ChangeCalculator()

        logger.info(
            "Vending machine created slots=%d coins=%s",
            slot_count,
            [coin.name for coin in self._coins],
        )

    @classmethod
    def from_face_values(cls, slot_count: int, face_values: Iterable[FaceValue]) -> VendingMachine:
        """Construye la máquina a partir de valores faciales (0.01, 0.2, 1.0, ...)."""
        return cls(slot_count, Coin.parse_all(face_values))

    # ------------------------
    # Propiedades de configuración
    # ------------------------
    @property
    def slot_count(self) -> int:
        return len(self._slots)

    @property
    def supported_coins(self) -> Tuple[Coin, ...]:
        return tuple(self._coins)

    # ------------------------
    # Productos
    # ------------------------
    def set_product_price(self, index: int, new_price: int) -> None:
        with self._lock:
            if new_price <= 0:
                raise InvalidArgumentError(f"price must be positive, got {new_price}")
            slot = self._slot_or_raise(index)
            self._slots[index] = replace(slot, price=new_price)
        logger.info("Product %d price set to %d", index, new_price)

    def get_product_price(self, index: int) -> int:
        with self._lock:
            return self._slot_or_raise(index).price

    def set_product_quantity(self, index: int, new_quantity: int) -> None:
        with self._lock:
            if new_quantity < 0:
                raise InvalidArgumentError(f"quantity cannot be negative, got {new_quantity}")
            slot = self._slot_or_raise(index)
            self._slots[index] = replace(slot, quantity=new_quantity)
        logger.info("Product %d quantity set to %d", index, new_quantity)

    def get_product_quantity(self, index: int) -> int:
        with self._lock:
            return self._slot_or_raise(index).quantity

    def get_product(self, index: int) -> ProductSlot:
        with self._lock:
            return self._slot_or_raise(index)

    def get_products(self) -> Tuple[ProductSlot, ...]:
        with self._lock:
            return tuple(self._slots)

    # ------------------------
    # Monedas
    # ------------------------
    def set_coin_quantity(self, coin: Coin, new_quantity: int) -> None:
        with self._lock:
            self._ensure_supported(coin)
            if new_quantity < 0:
                raise InvalidArgumentError(f"coin quantity cannot be negative, got {new_quantity}")
            self._coins[coin] = new_quantity
        logger.info("Coin %s quantity set to %d", coin.name, new_quantity)

    def set_all_coin_quantities(self, new_quantity: int) -> None:
        with self._lock:
            if new_quantity < 0:
                raise InvalidArgumentError(f"coin quantity cannot be negative, got {new_quantity}")
            for coin in self._coins:
                self._coins[coin] = new_quantity
        logger.info("All coin quantities set to %d", new_quantity)

    def get_coin_quantity(self, coin: Coin) -> int:
        with self._lock:
            self._ensure_supported(coin)
            return self._coins[coin]

    def get_coins(self) -> Dict[Coin, int]:
        with self._lock:
            return dict(self._coins)

    def total_coin_value(self) -> int:
        with self._lock:
            return sum(coin.value_in_pence * quantity for coin, quantity in self._coins.items())

    # ------------------------
    # Compra
    # ------------------------
    def purchase_product(self, index: int, tendered_coins: Iterable[Coin]) -> List[Coin]:
        """
        Vende una unidad del slot `index` pagada con `tendered_coins`.

        Validaciones, en orden:
        1. El slot existe (OutOfRangeError).
        2. Queda stock (UnavailableError).
        3. El slot tiene precio (UnavailableError).
        4. Todas las monedas son de una denominación configurada (InvalidArgumentError).
        5. El pago cubre el precio (InsufficientFundsError).
        6. Se puede formar el cambio exacto (InsufficientChangeError).

        Sólo si todo pasa se absorben las monedas, se retira el cambio y se
        descuenta una unidad. Ante cualquier error el estado queda intacto y
        las monedas se consideran devueltas al cliente.

        Returns:
            Monedas de cambio (lista vacía si el pago fue exacto).
        """
        tendered = list(tendered_coins)

        with self._lock:
            slot = self._slot_or_raise(index)
            if not slot.in_stock:
                raise UnavailableError(index, "sold out")
            if not slot.is_priced:
                raise UnavailableError(index, "not for sale")

            for coin in tendered:
                if coin not in self._coins:
                    raise InvalidArgumentError(f"coin {coin!r} is not accepted by this machine")

            paid = total_value(tendered)
            if paid < slot.price:
                logger.warning("Purchase rejected product=%d price=%d paid=%d", index, slot.price, paid)
                raise InsufficientFundsError(price=slot.price, paid=paid)

            working_stock = Counter(self._coins)
            working_stock.update(tendered)
            try:
                change = self._change_calculator.determine(paid - slot.price, working_stock)
            except InsufficientChangeError:
                logger.warning(
                    "Purchase rejected product=%d: no exact change for %d",
                    index,
                    paid - slot.price,
                )
                raise

            # commit: a partir de aquí nada puede fallar
            for coin in tendered:
                self._coins[coin] += 1
            for coin, count in change.items():
                self._coins[coin] -= count
            self._slots[index] = replace(slot, quantity=slot.quantity - 1)

        returned = flatten_change(change)
        logger.info(
            "Purchase committed product=%d price=%d paid=%d change=%s",
            index,
            slot.price,
            paid,
            [coin.name for coin in returned],
        )
        return returned

    # ------------------------
    # Helpers (llamar con el lock tomado)
    # ------------------------
    def _slot_or_raise(self, index: int) -> ProductSlot:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._slots):
            raise OutOfRangeError(index, len(self._slots))
        return self._slots[index]

    def _ensure_supported(self, coin: Coin) -> None:
        if coin not in self._coins:
            raise NotFoundError(f"coin {coin!r} is not supported by this machine")

    def __repr__(self) -> str:
        return f"VendingMachine(slots={self.slot_count}, coins={[c.name for c in self.supported_coins]})"
