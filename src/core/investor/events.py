"""
Domain Events do Domínio de Investidores.

Eventos:
- InvestorRegisteredEvent: Novo investidor cadastrado
- InvestorDeactivatedEvent: Cadastro desativado
"""

from dataclasses import dataclass

from src.core.shared.events import DomainEvent


@dataclass
class InvestorRegisteredEvent(DomainEvent):
    """
    Evento: Investidor foi cadastrado.

    Handlers típicos:
    - Enviar email de boas-vindas
    - Criar carteira padrão
    """

    email: str = ""
    risk_profile: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Investor"


@dataclass
class InvestorDeactivatedEvent(DomainEvent):
    """Evento: Cadastro do investidor foi desativado."""

    reason: str = ""

    @property
    def aggregate_type(self) -> str:
        return "Investor"
