"""Domain Events do Domínio de Ativos."""

from dataclasses import dataclass

from src.core.shared.events import DomainEvent


@dataclass
class AssetRegisteredEvent(DomainEvent):
    """Evento: Ativo foi cadastrado."""

    symbol: str = ""
    asset_type: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Asset"
