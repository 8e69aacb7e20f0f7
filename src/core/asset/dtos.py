"""DTOs do Domínio de Ativos."""

from dataclasses import dataclass

from src.core.shared.value_objects import DEFAULT_CURRENCY

from .entities import Asset


@dataclass(frozen=True)
class RegisterAssetInputDTO:
    """
    Attributes:
        asset_type: Nome ou valor do enum (ex: "STOCK" ou "Stock")
    """

    symbol: str
    name: str
    asset_type: str
    sector: str = ""
    exchange: str = ""
    currency: str = DEFAULT_CURRENCY


@dataclass(frozen=True)
class GetAssetInputDTO:
    asset_id: str


@dataclass
class AssetOutputDTO:
    id: str
    symbol: str
    name: str
    asset_type: str
    sector: str
    exchange: str
    currency: str
    is_active: bool

    @classmethod
    def from_entity(cls, entity: Asset) -> "AssetOutputDTO":
        return cls(
            id=str(entity.id),
            symbol=entity.symbol,
            name=entity.name,
            asset_type=entity.asset_type.value,
            sector=entity.sector,
            exchange=entity.exchange,
            currency=entity.currency,
            is_active=entity.is_active,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "symbol": self.symbol,
            "name": self.name,
            "asset_type": self.asset_type,
            "sector": self.sector,
            "exchange": self.exchange,
            "currency": self.currency,
            "is_active": self.is_active,
        }
