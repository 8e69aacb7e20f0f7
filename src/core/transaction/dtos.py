"""
Data Transfer Objects (DTOs) do Domínio de Transações.

Valores numéricos de entrada chegam crus (int/float/str/Decimal) e são
normalizados pelo TransactionValidator em value objects.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from .entities import Transaction


Numeric = Union[int, float, str, Decimal]


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class RecordTransactionInputDTO:
    """
    DTO de entrada para registrar compra ou venda.

    Attributes:
        investor_id: Investidor dono da carteira
        asset_id: Ativo negociado
        transaction_type: "Buy"/"Sell" (deve casar com o serviço)
        quantity: Quantidade negociada
        price: Preço unitário
        fees: Taxas da operação
        date_at: Data da operação (default: agora)
        notes: Observações
    """

    investor_id: str
    asset_id: str
    transaction_type: str
    quantity: Numeric
    price: Numeric
    fees: Numeric
    date_at: Optional[datetime] = None
    notes: str = ""


@dataclass(frozen=True)
class RecordDividendInputDTO:
    investor_id: str
    asset_id: str
    price: Numeric
    income: Numeric
    transaction_type: str = "Dividend"
    date_at: Optional[datetime] = None
    notes: str = ""


@dataclass(frozen=True)
class UpdateTransactionInputDTO:
    """Pelo menos um campo de correção deve ser informado."""

    investor_id: str
    transaction_id: str
    transaction_type: Optional[str] = None
    quantity: Optional[Numeric] = None
    price: Optional[Numeric] = None
    fees: Optional[Numeric] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class FetchTransactionsHistoryInputDTO:
    """Histórico paginado da carteira do investidor (opcionalmente por ativo)."""

    investor_id: str
    page: int = 1
    asset_id: Optional[str] = None


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class TransactionOutputDTO:
    """Presenter de transação."""

    id: str
    portfolio_id: str
    asset_id: str
    transaction_type: str
    quantity: Decimal
    price: Decimal
    fees: Decimal
    income: Decimal
    total_amount: Decimal
    currency: str
    date_at: datetime
    notes: str

    @classmethod
    def from_entity(cls, entity: Transaction) -> "TransactionOutputDTO":
        return cls(
            id=str(entity.id),
            portfolio_id=str(entity.portfolio_id),
            asset_id=str(entity.asset_id),
            transaction_type=entity.transaction_type.value,
            quantity=entity.quantity.value,
            price=entity.price.amount,
            fees=entity.fees.amount,
            income=entity.income.amount,
            total_amount=entity.total_amount.amount,
            currency=entity.price.currency,
            date_at=entity.date_at,
            notes=entity.notes,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "portfolio_id": self.portfolio_id,
            "asset_id": self.asset_id,
            "transaction_type": self.transaction_type,
            "quantity": float(self.quantity),
            "price": float(self.price),
            "fees": float(self.fees),
            "income": float(self.income),
            "total_amount": float(self.total_amount),
            "currency": self.currency,
            "date_at": self.date_at.isoformat(),
            "notes": self.notes,
        }
