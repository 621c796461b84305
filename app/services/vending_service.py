# app/services/vending_service.py
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from app.config.settings import Settings
from app.domain.coin import Coin, FaceValue
from app.domain.product import ProductSlot
from app.domain.vending_machine import VendingMachine
from app.logger import get_logger

logger = get_logger(__name__)


class VendingMachineService:
    """
    Fachada entre el transporte (HTTP) y el núcleo de la máquina.

    Traduce los valores faciales que llegan del exterior (0.5, 1.0, ...) a
    `Coin` con el parser de la unidad monetaria, y delega todo lo demás en
    `VendingMachine` sin añadir estado propio.
    """

    def __init__(self, machine: VendingMachine) -> None:
        self.machine = machine

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> VendingMachineService:
        settings = settings or Settings()
        machine = VendingMachine.from_face_values(settings.slot_count, settings.supported_coins)
        if settings.initial_coin_quantity:
            machine.set_all_coin_quantities(settings.initial_coin_quantity)
        logger.info(
            "Service ready slots=%d coins=%s initial_coin_quantity=%d",
            settings.slot_count,
            settings.supported_coins,
            settings.initial_coin_quantity,
        )
        return cls(machine)

    # Productos
    def list_products(self) -> Tuple[ProductSlot, ...]:
        return self.machine.get_products()

    def get_product(self, index: int) -> ProductSlot:
        return self.machine.get_product(index)

    def set_product_price(self, index: int, price: int) -> ProductSlot:
        self.machine.set_product_price(index, price)
        return self.machine.get_product(index)

    def set_product_quantity(self, index: int, quantity: int) -> ProductSlot:
        self.machine.set_product_quantity(index, quantity)
        return self.machine.get_product(index)

    # Monedas
    def coin_stock(self) -> Dict[Coin, int]:
        return self.machine.get_coins()

    def set_coin_quantity(self, face_value: FaceValue, quantity: int) -> Coin:
        coin = Coin.parse(face_value)
        self.machine.set_coin_quantity(coin, quantity)
        return coin

    def set_all_coin_quantities(self, quantity: int) -> None:
        self.machine.set_all_coin_quantities(quantity)

    # Compra
    def purchase(self, index: int, face_values: Iterable[FaceValue]) -> List[Coin]:
        """
        Compra el producto `index` pagando con valores faciales.

        Raises:
            InvalidArgumentError: Si algún valor facial no es una moneda soportada.
            VendingMachineError: Cualquier rechazo del núcleo (ver VendingMachine).
        """
        tendered = Coin.parse_all(face_values)
        logger.info("Purchase requested product=%d coins=%s", index, [coin.name for coin in tendered])
        return self.machine.purchase_product(index, tendered)
