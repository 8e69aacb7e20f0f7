"""
Use Cases do Domínio de Ativos.

- RegisterAssetService: Cadastra ativo (símbolo único)
- GetAssetService: Obtém ativo por ID
"""

import logging

from src.core.shared.exceptions import (
    DomainException,
    NotAllowedError,
    ResourceNotFoundError,
    ValidationError,
)
from src.core.shared.interfaces import UnitOfWork
from src.core.shared.result import Err, Ok, Result

from .dtos import AssetOutputDTO, GetAssetInputDTO, RegisterAssetInputDTO
from .entities import Asset, AssetType
from .events import AssetRegisteredEvent
from .ports import AssetRepository


logger = logging.getLogger(__name__)


def asset_not_found(asset_id: str) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "Ativo não encontrado.",
        entity_type="Asset",
        entity_id=asset_id,
    )


class RegisterAssetService:
    """
    Use Case: Cadastrar ativo.

    Fluxo:
    1. Converter tipo do ativo
    2. Verificar unicidade do símbolo
    3. Criar entidade (validações na entidade)
    4. Persistir e disparar AssetRegistered
    """

    def __init__(self, asset_repo: AssetRepository, uow: UnitOfWork):
        self.asset_repo = asset_repo
        self.uow = uow

    def execute(self, input_dto: RegisterAssetInputDTO) -> Result:
        try:
            asset_type = AssetType.from_string(input_dto.asset_type)
        except ValueError as e:
            return Err(ValidationError(str(e), field="asset_type"))

        if self.asset_repo.find_by_symbol(input_dto.symbol):
            return Err(NotAllowedError(
                f"Ativo {input_dto.symbol.upper()} já cadastrado.",
                rule="simbolo_unico"
            ))

        try:
            asset = Asset.create(
                symbol=input_dto.symbol,
                name=input_dto.name,
                asset_type=asset_type,
                sector=input_dto.sector,
                exchange=input_dto.exchange,
                currency=input_dto.currency,
            )
        except DomainException as e:
            return Err(e)

        with self.uow:
            self.asset_repo.create(asset)
            self.uow.publish_event(
                AssetRegisteredEvent(
                    aggregate_id=str(asset.id),
                    symbol=asset.symbol,
                    asset_type=asset.asset_type.value,
                )
            )

        logger.info(f"Ativo {asset.symbol} cadastrado ({asset.id})")
        return Ok(AssetOutputDTO.from_entity(asset))


class GetAssetService:
    """Use Case: Obter ativo por ID."""

    def __init__(self, asset_repo: AssetRepository):
        self.asset_repo = asset_repo

    def execute(self, input_dto: GetAssetInputDTO) -> Result:
        asset = self.asset_repo.find_by_id(input_dto.asset_id)
        if asset is None:
            return Err(asset_not_found(input_dto.asset_id))
        return Ok(AssetOutputDTO.from_entity(asset))
