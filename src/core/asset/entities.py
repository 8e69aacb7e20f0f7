"""Entidades do Domínio de Ativos."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from src.core.shared.entity import Entity, UniqueEntityID
from src.core.shared.exceptions import ValidationError
from src.core.shared.value_objects import DEFAULT_CURRENCY, Money


class AssetType(Enum):
    STOCK = "Stock"
    ETF = "ETF"
    FIIS = "FIIs"
    BOND = "Bond"
    CRYPTO = "Crypto"

    @classmethod
    def from_string(cls, value: str) -> "AssetType":
        """
        Raises:
            ValueError: Se tipo inválido
        """
        try:
            return cls[value.upper()]
        except KeyError:
            pass

        for asset_type in cls:
            if asset_type.value.lower() == value.lower():
                return asset_type

        raise ValueError(f"Tipo de ativo inválido: {value}")


@dataclass(eq=False)
class Asset(Entity):
    """
    Entidade de Domínio: Ativo negociável (ação, ETF, FII, título, cripto).

    Invariantes:
    - Símbolo obrigatório, armazenado em maiúsculas (ex: "PETR4")
    - Nome obrigatório
    - Moeda em código de 3 letras
    """

    symbol: str
    name: str
    asset_type: AssetType
    sector: str = ""
    exchange: str = ""
    currency: str = DEFAULT_CURRENCY
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None
    id: UniqueEntityID = field(default_factory=UniqueEntityID)

    SYMBOL_MAX_LENGTH = 12

    @classmethod
    def create(
        cls,
        symbol: str,
        name: str,
        asset_type: AssetType,
        sector: str = "",
        exchange: str = "",
        currency: str = DEFAULT_CURRENCY,
        entity_id: Optional[str] = None,
    ) -> "Asset":
        """
        Raises:
            ValidationError: Se símbolo, nome ou moeda inválidos
        """
        cls._validate_symbol(symbol)

        if not name or not name.strip():
            raise ValidationError("Nome do ativo é obrigatório.", field="name")

        # Money valida o código da moeda
        currency = Money.zero(currency).currency

        return cls(
            symbol=symbol.strip().upper(),
            name=name.strip(),
            asset_type=asset_type,
            sector=(sector or "").strip(),
            exchange=(exchange or "").strip(),
            currency=currency,
            id=UniqueEntityID.from_optional(entity_id),
        )

    @classmethod
    def _validate_symbol(cls, symbol: str) -> None:
        cleaned = (symbol or "").strip()

        if not cleaned:
            raise ValidationError("Símbolo do ativo é obrigatório.", field="symbol")

        if len(cleaned) > cls.SYMBOL_MAX_LENGTH or not cleaned.replace(".", "").replace("-", "").isalnum():
            raise ValidationError(f"Símbolo inválido: {symbol}", field="symbol")

    def deactivate(self) -> None:
        self.is_active = False
        self.updated_at = datetime.now()

    def __repr__(self) -> str:
        return f"Asset(id={self.id}, symbol={self.symbol}, type={self.asset_type.value})"
