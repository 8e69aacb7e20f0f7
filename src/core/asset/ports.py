"""Ports (Interfaces) do Domínio de Ativos."""

from typing import Dict, List, Optional, Protocol, runtime_checkable

from .entities import Asset


@runtime_checkable
class AssetRepository(Protocol):
    """Interface para persistência de Ativos."""

    def find_by_id(self, asset_id: str) -> Optional[Asset]:
        ...

    def find_by_symbol(self, symbol: str) -> Optional[Asset]:
        ...

    def find_by_name(self, name: str) -> Optional[Asset]:
        ...

    def create(self, asset: Asset) -> None:
        ...

    def update(self, asset: Asset) -> None:
        ...

    def delete(self, asset_id: str) -> None:
        ...


class InMemoryAssetRepository:
    """Implementação em memória do AssetRepository."""

    def __init__(self):
        self._assets: Dict[str, Asset] = {}

    def find_by_id(self, asset_id: str) -> Optional[Asset]:
        return self._assets.get(str(asset_id))

    def find_by_symbol(self, symbol: str) -> Optional[Asset]:
        symbol = (symbol or "").strip().upper()
        return next((a for a in self._assets.values() if a.symbol == symbol), None)

    def find_by_name(self, name: str) -> Optional[Asset]:
        name = (name or "").strip().lower()
        return next((a for a in self._assets.values() if a.name.lower() == name), None)

    def create(self, asset: Asset) -> None:
        self._assets[str(asset.id)] = asset

    def update(self, asset: Asset) -> None:
        self._assets[str(asset.id)] = asset

    def delete(self, asset_id: str) -> None:
        self._assets.pop(str(asset_id), None)

    def list_all(self) -> List[Asset]:
        return list(self._assets.values())

    def clear(self) -> None:
        self._assets.clear()
