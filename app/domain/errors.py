# app/domain/errors.py
"""Errores del dominio de la máquina expendedora."""
from typing import Optional


class VendingMachineError(Exception):
    """Clase base para todos los errores de la máquina."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class InvalidArgumentError(VendingMachineError):
    """El llamador envió un valor estructuralmente inválido."""

    def __init__(self, message: str):
        super().__init__(f"invalid argument: {message}")


class OutOfRangeError(VendingMachineError):
    """El índice de slot no existe en la máquina."""

    def __init__(self, index: object, slot_count: int):
        super().__init__(f"slot index {index} out of range [0, {slot_count})")
        self.index = index


class NotFoundError(VendingMachineError):
    """La denominación no forma parte del set configurado."""


class UnavailableError(VendingMachineError):
    """El slot existe pero no se puede vender (agotado o sin precio)."""

    def __init__(self, index: int, reason: str):
        super().__init__(f"product {index} unavailable: {reason}")
        self.index = index
        self.reason = reason


class InsufficientFundsError(VendingMachineError):
    """El pago no cubre el precio. Lleva el faltante para mostrarlo al cliente."""

    def __init__(self, price: int, paid: int):
        self.price = price
        self.paid = paid
        self.shortfall = price - paid
        super().__init__(
            f"not enough money: price is {price} pence but {paid} were inserted "
            f"({self.shortfall} pence short)"
        )


class InsufficientChangeError(VendingMachineError):
    """Hay fondos suficientes pero el stock no puede formar el cambio exacto."""

    def __init__(self, amount: int, message: Optional[str] = None):
        self.amount = amount
        super().__init__(
            message
            or f"cannot return exact change of {amount} pence with the coins in stock"
        )


class InvalidStateError(VendingMachineError):
    """Invariante interna rota. No debería ocurrir con una configuración correcta."""
