# app/domain/product.py
from dataclasses import dataclass


@dataclass(frozen=True)
class ProductSlot:
    """
    Foto inmutable de un slot de producto.

    price == 0 significa que el slot no está configurado para la venta.
    """
    index: int
    price: int = 0
    quantity: int = 0

    @property
    def is_priced(self) -> bool:
        return self.price > 0

    @property
    def in_stock(self) -> bool:
        return self.quantity > 0
