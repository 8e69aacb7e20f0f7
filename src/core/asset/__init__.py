"""
Domínio de Ativos.

Cadastro dos ativos negociáveis (ações, ETFs, FIIs, títulos, cripto)
referenciados por transações, investimentos e alertas.
"""

from .entities import Asset, AssetType
from .events import AssetRegisteredEvent
from .dtos import RegisterAssetInputDTO, GetAssetInputDTO, AssetOutputDTO
from .ports import AssetRepository, InMemoryAssetRepository

__all__ = [
    "Asset",
    "AssetType",
    "AssetRegisteredEvent",
    "RegisterAssetInputDTO",
    "GetAssetInputDTO",
    "AssetOutputDTO",
    "AssetRepository",
    "InMemoryAssetRepository",
]
