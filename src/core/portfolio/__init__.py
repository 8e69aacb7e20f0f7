"""
Domínio de Carteiras.

- Entidades (Portfolio, Investment, InvestmentTransaction, InvestmentYield)
- Use Cases (CreatePortfolio, AddInvestmentToPortfolio,
  UpdateInvestmentAfterTransaction, GetInvestmentByAssetId,
  FetchAllInvestmentsByPortfolioId)
- Domain Events (PortfolioCreated, InvestmentAdded, InvestmentUpdated)
- Ports (PortfolioRepository, InvestmentRepository)
"""

from .entities import Portfolio, Investment, InvestmentTransaction, InvestmentYield
from .events import PortfolioCreatedEvent, InvestmentAddedEvent, InvestmentUpdatedEvent
from .dtos import PortfolioOutputDTO, InvestmentOutputDTO
from .ports import (
    PortfolioRepository,
    InvestmentRepository,
    InMemoryPortfolioRepository,
    InMemoryInvestmentRepository,
)

__all__ = [
    "Portfolio",
    "Investment",
    "InvestmentTransaction",
    "InvestmentYield",
    "PortfolioCreatedEvent",
    "InvestmentAddedEvent",
    "InvestmentUpdatedEvent",
    "PortfolioOutputDTO",
    "InvestmentOutputDTO",
    "PortfolioRepository",
    "InvestmentRepository",
    "InMemoryPortfolioRepository",
    "InMemoryInvestmentRepository",
]
