# app/api/schemas.py
from typing import Dict, List

from pydantic import BaseModel, Field

from app.domain.coin import Coin
from app.domain.product import ProductSlot


class ProductResponse(BaseModel):
    index: int = Field(..., description="Posición del slot (base 0).")
    price: int = Field(..., description="Precio en peniques; 0 = no configurado.")
    quantity: int = Field(..., description="Unidades disponibles en el slot.")

    @classmethod
    def from_domain(cls, slot: ProductSlot) -> "ProductResponse":
        return cls(index=slot.index, price=slot.price, quantity=slot.quantity)


class CoinStockEntry(BaseModel):
    coin: str = Field(..., description="Nombre de la denominación (ej: FIFTY_P).")
    face_value: float = Field(..., description="Valor facial en libras (ej: 0.5).")
    value_in_pence: int
    quantity: int

    @classmethod
    def from_domain(cls, coin: Coin, quantity: int) -> "CoinStockEntry":
        return cls(
            coin=coin.name,
            face_value=float(coin.face_value),
            value_in_pence=coin.value_in_pence,
            quantity=quantity,
        )


class CoinStockResponse(BaseModel):
    coins: List[CoinStockEntry] = Field(default_factory=list)
    total_value: int = Field(..., description="Valor total del stock en peniques.")

    @classmethod
    def from_domain(cls, stock: Dict[Coin, int]) -> "CoinStockResponse":
        return cls(
            coins=[CoinStockEntry.from_domain(coin, quantity) for coin, quantity in stock.items()],
            total_value=sum(coin.value_in_pence * quantity for coin, quantity in stock.items()),
        )


class MachineResponse(BaseModel):
    slot_count: int
    products: List[ProductResponse]
    coin_stock: CoinStockResponse


class PurchaseRequest(BaseModel):
    coins: List[float] = Field(
        ...,
        description="Monedas insertadas como valores faciales (ej: [1.0, 0.5, 0.2]).",
    )


class PurchaseResponse(BaseModel):
    status: str
    message: str
    change: List[float] = Field(default_factory=list, description="Cambio en valores faciales.")
    change_total: int = Field(0, description="Total del cambio en peniques.")

    @classmethod
    def from_change(cls, index: int, change: List[Coin]) -> "PurchaseResponse":
        total = sum(coin.value_in_pence for coin in change)
        return cls(
            status="completed",
            message=f"Product {index} dispensed" + (f" with {total} pence change" if total else ""),
            change=[float(coin.face_value) for coin in change],
            change_total=total,
        )
