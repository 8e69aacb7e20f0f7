"""
Domínio de Investidores.

- Entidades (Investor, RiskProfile)
- Use Cases (RegisterInvestor, UpdateInvestor, DeactivateInvestor)
- Domain Events (InvestorRegistered, InvestorDeactivated)
- Ports (InvestorRepository)
"""

from .entities import Investor, RiskProfile
from .events import InvestorRegisteredEvent, InvestorDeactivatedEvent
from .dtos import (
    RegisterInvestorInputDTO,
    UpdateInvestorInputDTO,
    DeactivateInvestorInputDTO,
    InvestorOutputDTO,
)
from .ports import InvestorRepository, InMemoryInvestorRepository

__all__ = [
    "Investor",
    "RiskProfile",
    "InvestorRegisteredEvent",
    "InvestorDeactivatedEvent",
    "RegisterInvestorInputDTO",
    "UpdateInvestorInputDTO",
    "DeactivateInvestorInputDTO",
    "InvestorOutputDTO",
    "InvestorRepository",
    "InMemoryInvestorRepository",
]
