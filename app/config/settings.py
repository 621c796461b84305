# app/config/settings.py
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="VENDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(
        default="vending-machine-service",
        description="Service name for FastAPI.",
    )
    log_level: str = Field(
        default="INFO",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )

    # Configuración de la máquina
    slot_count: int = Field(
        default=10,
        gt=0,
        description="Número fijo de slots de producto.",
    )
    supported_coins: List[float] = Field(
        default_factory=lambda: [0.01, 0.02, 0.05, 0.10, 0.20, 0.50, 1.0, 2.0, 5.0],
        min_length=1,
        description="Valores faciales de las monedas que acepta la máquina.",
    )
    initial_coin_quantity: int = Field(
        default=0,
        ge=0,
        description="Cantidad inicial de cada moneda al arrancar.",
    )
