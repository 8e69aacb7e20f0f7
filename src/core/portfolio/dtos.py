"""
Data Transfer Objects (DTOs) do Domínio de Carteiras.

Tipos de DTOs:
- Input DTOs: parâmetros dos use cases
- Output DTOs: presenters de Portfolio e Investment
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Union

from .entities import Investment, Portfolio


Numeric = Union[int, float, str, Decimal]


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class CreatePortfolioInputDTO:
    investor_id: str
    name: str
    description: str = ""


@dataclass(frozen=True)
class AddInvestmentToPortfolioInputDTO:
    """
    Attributes:
        investor_id: Dono da carteira
        asset_id: Ativo do investimento
        quantity: Quantidade inicial
        current_price: Preço de entrada
    """

    investor_id: str
    asset_id: str
    quantity: Numeric
    current_price: Numeric


@dataclass(frozen=True)
class UpdateInvestmentAfterTransactionInputDTO:
    investor_id: str
    transaction_id: str


@dataclass(frozen=True)
class GetInvestmentByAssetIdInputDTO:
    investor_id: str
    asset_id: str


@dataclass(frozen=True)
class FetchAllInvestmentsByPortfolioIdInputDTO:
    investor_id: str
    page: int = 1


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class PortfolioOutputDTO:
    id: str
    investor_id: str
    name: str
    description: str
    total_value: Decimal
    currency: str
    allocations: List[str] = field(default_factory=list)
    created_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, entity: Portfolio) -> "PortfolioOutputDTO":
        return cls(
            id=str(entity.id),
            investor_id=str(entity.investor_id),
            name=entity.name,
            description=entity.description,
            total_value=entity.total_value.amount,
            currency=entity.total_value.currency,
            allocations=list(entity.allocations),
            created_at=entity.created_at,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "investor_id": self.investor_id,
            "name": self.name,
            "description": self.description,
            "total_value": float(self.total_value),
            "currency": self.currency,
            "allocations": self.allocations,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class InvestmentOutputDTO:
    """
    Presenter de investimento com os indicadores calculados.

    Attributes:
        profit_loss: Lucro/prejuízo (com sinal)
        profit_loss_percentage: Percentual sobre o total investido
    """

    id: str
    portfolio_id: str
    asset_id: str
    quantity: Decimal
    current_price: Decimal
    average_price: Decimal
    total_invested: Decimal
    current_value: Decimal
    profit_loss: Decimal
    profit_loss_percentage: float
    currency: str

    @classmethod
    def from_entity(cls, entity: Investment) -> "InvestmentOutputDTO":
        return cls(
            id=str(entity.id),
            portfolio_id=str(entity.portfolio_id),
            asset_id=str(entity.asset_id),
            quantity=entity.quantity.value,
            current_price=entity.current_price.amount,
            average_price=entity.average_price.amount,
            total_invested=entity.total_invested.amount,
            current_value=entity.current_value.amount,
            profit_loss=entity.profit_loss.amount,
            profit_loss_percentage=entity.profit_loss_percentage.value,
            currency=entity.current_price.currency,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "portfolio_id": self.portfolio_id,
            "asset_id": self.asset_id,
            "quantity": float(self.quantity),
            "current_price": float(self.current_price),
            "average_price": float(self.average_price),
            "total_invested": float(self.total_invested),
            "current_value": float(self.current_value),
            "profit_loss": float(self.profit_loss),
            "profit_loss_percentage": round(self.profit_loss_percentage, 2),
            "currency": self.currency,
        }
