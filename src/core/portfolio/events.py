"""
Domain Events do Domínio de Carteiras.

Eventos:
- PortfolioCreatedEvent: Carteira criada para o investidor
- InvestmentAddedEvent: Novo investimento alocado na carteira
- InvestmentUpdatedEvent: Posição recalculada após transação
"""

from dataclasses import dataclass

from src.core.shared.events import DomainEvent


@dataclass
class PortfolioCreatedEvent(DomainEvent):
    investor_id: str = ""
    name: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Portfolio"


@dataclass
class InvestmentAddedEvent(DomainEvent):
    """
    Evento: Investimento alocado na carteira.

    ``aggregate_id`` é o ID da carteira.
    """

    investment_id: str = ""
    asset_id: str = ""
    quantity: str = "0"
    price: str = "0"

    @property
    def aggregate_type(self) -> str:
        return "Portfolio"


@dataclass
class InvestmentUpdatedEvent(DomainEvent):
    """Evento: Posição atualizada por uma transação."""

    transaction_id: str = ""
    transaction_type: str = ""
    quantity: str = "0"
    current_price: str = "0"

    @property
    def aggregate_type(self) -> str:
        return "Investment"
