# app/api/routes.py
from typing import List, NoReturn

from fastapi import APIRouter, Depends, HTTPException, Request, status

from app.api.schemas import (
    CoinStockResponse,
    MachineResponse,
    ProductResponse,
    PurchaseRequest,
    PurchaseResponse,
)
from app.domain.errors import (
    InsufficientChangeError,
    InsufficientFundsError,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
    OutOfRangeError,
    UnavailableError,
    VendingMachineError,
)
from app.logger import get_logger
from app.services.vending_service import VendingMachineService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/vending-machine", tags=["vending-machine"])

_STATUS_BY_ERROR = (
    (InvalidArgumentError, status.HTTP_400_BAD_REQUEST),
    (OutOfRangeError, status.HTTP_404_NOT_FOUND),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InsufficientFundsError, status.HTTP_402_PAYMENT_REQUIRED),
    (UnavailableError, status.HTTP_409_CONFLICT),
    (InsufficientChangeError, status.HTTP_409_CONFLICT),
    (InvalidStateError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def get_vending_service(request: Request) -> VendingMachineService:
    """Dependency injection: una única máquina por proceso, creada en create_app()."""
    return request.app.state.vending_service


def raise_http_error(error: VendingMachineError) -> NoReturn:
    """
    Traduce un error del dominio a HTTPException.

    InsufficientFundsError incluye el faltante en el detail para que el
    cliente pueda mostrarlo.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            status_code = code
            break

    if status_code >= 500:
        logger.error("Vending machine invariant violated: %s", error, exc_info=True)
    else:
        logger.warning("Request rejected (%d): %s", status_code, error)

    detail = {"error": type(error).__name__, "message": error.message}
    if isinstance(error, InsufficientFundsError):
        detail["shortfall"] = error.shortfall
    raise HTTPException(status_code=status_code, detail=detail) from error


@router.get("/", response_model=MachineResponse)
async def get_vending_machine(
    service: VendingMachineService = Depends(get_vending_service),
) -> MachineResponse:
    products = service.list_products()
    return MachineResponse(
        slot_count=len(products),
        products=[ProductResponse.from_domain(slot) for slot in products],
        coin_stock=CoinStockResponse.from_domain(service.coin_stock()),
    )


@router.get("/products", response_model=List[ProductResponse])
async def list_products(
    service: VendingMachineService = Depends(get_vending_service),
) -> List[ProductResponse]:
    return [ProductResponse.from_domain(slot) for slot in service.list_products()]


@router.get("/products/{index}", response_model=ProductResponse)
async def get_product(
    index: int,
    service: VendingMachineService = Depends(get_vending_service),
) -> ProductResponse:
    try:
        return ProductResponse.from_domain(service.get_product(index))
    except VendingMachineError as e:
        raise_http_error(e)


@router.post("/products/{index}/quantity/{quantity}", response_model=ProductResponse)
async def set_product_quantity(
    index: int,
    quantity: int,
    service: VendingMachineService = Depends(get_vending_service),
) -> ProductResponse:
    try:
        return ProductResponse.from_domain(service.set_product_quantity(index, quantity))
    except VendingMachineError as e:
        raise_http_error(e)


@router.post("/products/{index}/price/{price}", response_model=ProductResponse)
async def set_product_price(
    index: int,
    price: int,
    service: VendingMachineService = Depends(get_vending_service),
) -> ProductResponse:
    try:
        return ProductResponse.from_domain(service.set_product_price(index, price))
    except VendingMachineError as e:
        raise_http_error(e)


@router.get("/coins", response_model=CoinStockResponse)
async def get_coins(
    service: VendingMachineService = Depends(get_vending_service),
) -> CoinStockResponse:
    return CoinStockResponse.from_domain(service.coin_stock())


# Debe registrarse antes que /coins/{face_value}/... para que "all" no se lea como moneda
@router.post("/coins/all/quantity/{quantity}", response_model=CoinStockResponse)
async def set_all_coin_quantities(
    quantity: int,
    service: VendingMachineService = Depends(get_vending_service),
) -> CoinStockResponse:
    try:
        service.set_all_coin_quantities(quantity)
    except VendingMachineError as e:
        raise_http_error(e)
    return CoinStockResponse.from_domain(service.coin_stock())


@router.post("/coins/{face_value}/quantity/{quantity}", response_model=CoinStockResponse)
async def set_coin_quantity(
    face_value: str,
    quantity: int,
    service: VendingMachineService = Depends(get_vending_service),
) -> CoinStockResponse:
    try:
        service.set_coin_quantity(face_value, quantity)
    except VendingMachineError as e:
        raise_http_error(e)
    return CoinStockResponse.from_domain(service.coin_stock())


@router.post("/products/{index}/purchase", response_model=PurchaseResponse)
async def purchase_product(
    index: int,
    request: PurchaseRequest,
    service: VendingMachineService = Depends(get_vending_service),
) -> PurchaseResponse:
    """
    Compra una unidad del producto `index`.

    El body lleva las monedas como valores faciales; la respuesta devuelve el
    cambio también como valores faciales. Si la compra se rechaza, la máquina
    no cambia y las monedas se consideran devueltas.
    """
    logger.info("Received purchase request product=%d coins=%s", index, request.coins)
    try:
        change = service.purchase(index, request.coins)
    except VendingMachineError as e:
        raise_http_error(e)
    except Exception as e:
        logger.error("Unexpected error purchasing product %d: %s", index, e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error while processing purchase",
        )
    return PurchaseResponse.from_change(index, change)
