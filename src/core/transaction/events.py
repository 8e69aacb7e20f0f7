"""
Domain Events do Domínio de Transações.

Eventos:
- TransactionRecordedEvent: Compra/venda/dividendo registrado
- TransactionCorrectedEvent: Transação corrigida

Uso:
    TransactionRecordedEvent dispara, de forma assíncrona, a avaliação
    dos alertas de preço do ativo (ver adapters/events/handlers.py).
"""

from dataclasses import dataclass

from src.core.shared.events import DomainEvent


@dataclass
class TransactionRecordedEvent(DomainEvent):
    """
    Evento: Transação foi registrada.

    Valores monetários e quantidades trafegam como string
    para preservar a precisão decimal.

    Attributes:
        investor_id: Investidor dono da carteira
        portfolio_id: Carteira da transação
        asset_id: Ativo negociado
        transaction_type: "Buy", "Sell" ou "Dividend"
        quantity: Quantidade negociada
        price: Preço unitário
        currency: Moeda do preço
    """

    investor_id: str = ""
    portfolio_id: str = ""
    asset_id: str = ""
    transaction_type: str = ""
    quantity: str = "0"
    price: str = "0"
    currency: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Transaction"


@dataclass
class TransactionCorrectedEvent(DomainEvent):
    """Evento: Transação foi corrigida (novo snapshot persistido)."""

    investor_id: str = ""
    transaction_type: str = ""
    quantity: str = "0"
    price: str = "0"
    fees: str = "0"

    @property
    def aggregate_type(self) -> str:
        return "Transaction"
