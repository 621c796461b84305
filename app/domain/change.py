# app/domain/change.py
from __future__ import annotations

from typing import Dict, List, Mapping, Optional

from app.domain.coin import Coin
from app.domain.errors import InsufficientChangeError, InvalidArgumentError
from app.logger import get_logger

logger = get_logger(__name__)


class ChangeCalculator:
    """
    Decide qué monedas devolver como cambio a partir de un stock disponible.

    Estrategia (greedy restringido con "techo"):
    1. Se ordenan de mayor a menor las denominaciones con cantidad > 0.
    2. Cada denominación, empezando por la mayor, se usa como techo.
    3. Con cada techo se hace una pasada greedy sobre las denominaciones
       <= techo, tomando min(restante // valor, cantidad) monedas de cada una.
    4. El primer techo que deja el restante en 0 gana.
    5. Si ningún techo llega a 0, no hay cambio exacto.

    Bajar el techo permite saltarse monedas grandes que llevaban a un callejón
    sin salida (p.ej. 60p con un 50p y tres 20p, sin 10p).

    Limitación conocida: no es una búsqueda exhaustiva. Si la única
    descomposición usa una moneda grande y después necesita saltarse una
    intermedia (160p con 1x100, 1x50, 3x20), no se encuentra.
    """

    def determine(self, target: int, available: Mapping[Coin, int]) -> Dict[Coin, int]:
        """
        Args:
            target: Cambio a devolver en peniques (>= 0).
            available: Stock de trabajo (stock actual + monedas insertadas).
                No se modifica.

        Returns:
            Monedas a devolver: denominación -> cantidad (sólo cantidades > 0).

        Raises:
            InsufficientChangeError: Si ningún techo forma el importe exacto.
        """
        if target < 0:
            raise InvalidArgumentError(f"change target cannot be negative: {target}")
        if target == 0:
            return {}

        ceilings = sorted(
            (coin for coin, quantity in available.items() if quantity > 0),
            key=lambda coin: coin.value_in_pence,
            reverse=True,
        )

        for position, ceiling in enumerate(ceilings):
            change = self._greedy_below_ceiling(target, ceilings[position:], available)
            if change is not None:
                logger.debug("Change of %d resolved with ceiling %s: %s", target, ceiling.name, change)
                return change
            logger.debug("Ceiling %s dead-ended for change of %d", ceiling.name, target)

        raise InsufficientChangeError(target)

    def _greedy_below_ceiling(
        self,
        target: int,
        candidates: List[Coin],
        available: Mapping[Coin, int],
    ) -> Optional[Dict[Coin, int]]:
        """Una pasada greedy; `candidates` empieza en el techo y va en orden descendente."""
        remaining = target
        picked: Dict[Coin, int] = {}

        for coin in candidates:
            if remaining == 0:
                break
            value = coin.value_in_pence
            wanted = remaining // value
            used = min(wanted, available[coin])
            if used:
                picked[coin] = used
            # lo que no se pudo cubrir por falta de stock sigue en el restante
            remaining -= used * value

        return picked if remaining == 0 else None


def determine_change(target: int, available: Mapping[Coin, int]) -> Dict[Coin, int]:
    return ChangeCalculator().determine(target, available)


def flatten_change(change: Mapping[Coin, int]) -> List[Coin]:
    """Expande {moneda: n} en una lista, de mayor a menor denominación."""
    coins: List[Coin] = []
    for coin in sorted(change, key=lambda c: c.value_in_pence, reverse=True):
        coins.extend([coin] * change[coin])
    return coins
