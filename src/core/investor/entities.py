"""
Entidades do Domínio de Investidores.

Entidades:
- Investor: Agregado do investidor (dados cadastrais + perfil de risco)
- RiskProfile: Perfis de risco sugeridos por idade

Unicidade de CPF e email é garantida pelo use case de cadastro
(consulta ao repositório), não pela entidade.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional

from src.core.shared.entity import Entity, UniqueEntityID
from src.core.shared.exceptions import NotAllowedError
from src.core.shared.value_objects import CPF, DateOfBirth, Email, Name


class RiskProfile(Enum):
    """
    Perfil de risco do investidor.

    Sugestão por idade no cadastro:
        < 25 anos: AGRESSIVO
        25 a 49 anos: CONSERVADOR
        >= 50 anos: MODERADO
    """

    CONSERVATIVE = "Conservative"
    MODERATE = "Moderate"
    AGGRESSIVE = "Aggressive"

    @classmethod
    def suggest_for_age(cls, age: int) -> "RiskProfile":
        if age < 25:
            return cls.AGGRESSIVE
        if age < 50:
            return cls.CONSERVATIVE
        return cls.MODERATE

    @classmethod
    def from_string(cls, value: str) -> "RiskProfile":
        """
        Converte string (nome ou valor do enum) para RiskProfile.

        Raises:
            ValueError: Se valor inválido
        """
        try:
            return cls[value.upper()]
        except KeyError:
            pass

        for profile in cls:
            if profile.value.lower() == value.lower():
                return profile

        raise ValueError(f"Perfil de risco inválido: {value}")


@dataclass(eq=False)
class Investor(Entity):
    """
    Entidade de Domínio: Investidor.

    Invariantes:
    - Nome, email, CPF e data de nascimento são value objects válidos
    - Investidor desativado não pode ser alterado

    Attributes:
        name: Nome do investidor
        email: Email de contato/login
        cpf: CPF (somente dígitos)
        date_of_birth: Data de nascimento (maior de idade)
        password_hash: Hash da senha (gerado pelo HashGenerator)
        risk_profile: Perfil de risco
        is_active: Se o cadastro está ativo
        created_at: Data/hora de criação
        updated_at: Data/hora da última atualização
        id: Identificador único

    Example:
        investor = Investor.create(
            name=Name("Maria Silva"),
            email=Email("maria@exemplo.com"),
            cpf=CPF("529.982.247-25"),
            date_of_birth=DateOfBirth.create(date(1990, 5, 17)),
            password_hash="$2b$12$...",
        )
    """

    name: Name
    email: Email
    cpf: CPF
    date_of_birth: DateOfBirth
    password_hash: str = ""
    risk_profile: RiskProfile = RiskProfile.CONSERVATIVE
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: Optional[datetime] = None
    id: UniqueEntityID = field(default_factory=UniqueEntityID)

    @classmethod
    def create(
        cls,
        name: Name,
        email: Email,
        cpf: CPF,
        date_of_birth: DateOfBirth,
        password_hash: str = "",
        risk_profile: Optional[RiskProfile] = None,
        entity_id: Optional[str] = None,
    ) -> "Investor":
        """
        Factory method do investidor.

        Sem ``risk_profile``, usa a sugestão pela idade.
        """
        if risk_profile is None:
            risk_profile = RiskProfile.suggest_for_age(date_of_birth.age())

        return cls(
            name=name,
            email=email,
            cpf=cpf,
            date_of_birth=date_of_birth,
            password_hash=password_hash,
            risk_profile=risk_profile,
            id=UniqueEntityID.from_optional(entity_id),
        )

    def age(self, today: Optional[date] = None) -> int:
        return self.date_of_birth.age(today)

    def update_name(self, name: Name) -> None:
        self._ensure_active()
        self.name = name
        self._touch()

    def update_email(self, email: Email) -> None:
        self._ensure_active()
        self.email = email
        self._touch()

    def update_risk_profile(self, risk_profile: RiskProfile) -> None:
        self._ensure_active()
        self.risk_profile = risk_profile
        self._touch()

    def deactivate(self) -> None:
        """
        Desativa o cadastro.

        Raises:
            NotAllowedError: Se já estiver inativo
        """
        if not self.is_active:
            raise NotAllowedError(
                "Investidor já está desativado.",
                rule="investidor_inativo"
            )
        self.is_active = False
        self._touch()

    def _ensure_active(self) -> None:
        if not self.is_active:
            raise NotAllowedError(
                "Investidor desativado não pode ser alterado.",
                rule="investidor_inativo"
            )

    def _touch(self) -> None:
        self.updated_at = datetime.now()

    def __repr__(self) -> str:
        return (
            f"Investor(id={self.id}, name='{self.name}', "
            f"risk_profile={self.risk_profile.value}, is_active={self.is_active})"
        )
