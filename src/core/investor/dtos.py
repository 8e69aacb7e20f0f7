"""
Data Transfer Objects (DTOs) do Domínio de Investidores.

- Input DTOs: dados brutos vindos do controller
- Output DTOs: presenters (entidade -> dicionário)
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from .entities import Investor


# =============================================================================
# INPUT DTOs (Entrada)
# =============================================================================

@dataclass(frozen=True)
class RegisterInvestorInputDTO:
    """
    DTO de entrada para cadastro de investidor.

    Attributes:
        name: Nome completo
        email: Email
        cpf: CPF (formatado ou apenas dígitos)
        password: Senha em texto puro
        date_of_birth: Data de nascimento
    """

    name: str
    email: str
    cpf: str
    password: str
    date_of_birth: date


@dataclass(frozen=True)
class UpdateInvestorInputDTO:
    """Ao menos um entre ``name`` e ``email`` deve ser informado."""

    investor_id: str
    name: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class DeactivateInvestorInputDTO:
    investor_id: str
    reason: str = ""


# =============================================================================
# OUTPUT DTOs (Saída)
# =============================================================================

@dataclass
class InvestorOutputDTO:
    """
    DTO de saída com dados públicos do investidor.

    Hash de senha nunca é exposto.
    """

    id: str
    name: str
    email: str
    cpf: str
    date_of_birth: date
    risk_profile: str
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime]

    @classmethod
    def from_entity(cls, entity: Investor) -> "InvestorOutputDTO":
        return cls(
            id=str(entity.id),
            name=entity.name.value,
            email=entity.email.value,
            cpf=entity.cpf.value,
            date_of_birth=entity.date_of_birth.value,
            risk_profile=entity.risk_profile.value,
            is_active=entity.is_active,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def to_dict(self) -> dict:
        """Converte para dicionário (serialização JSON)."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "cpf": self.cpf,
            "date_of_birth": self.date_of_birth.isoformat(),
            "risk_profile": self.risk_profile,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
