"""
Use Cases (Application Services) do Domínio de Investidores.

Use Cases implementados:
- RegisterInvestorService: Cadastra investidor
- UpdateInvestorService: Altera nome e/ou email
- DeactivateInvestorService: Desativa cadastro

Todos retornam ``Result``: ``Ok(InvestorOutputDTO)`` ou ``Err(erro)``.
Falhas de negócio esperadas nunca são lançadas para o chamador.
"""

import logging

from src.core.shared.exceptions import (
    DomainException,
    NotAllowedError,
    ResourceNotFoundError,
)
from src.core.shared.interfaces import HashGenerator, UnitOfWork
from src.core.shared.result import Err, Ok, Result
from src.core.shared.value_objects import CPF, DateOfBirth, Email, Name, Password

from .dtos import (
    DeactivateInvestorInputDTO,
    InvestorOutputDTO,
    RegisterInvestorInputDTO,
    UpdateInvestorInputDTO,
)
from .entities import Investor, RiskProfile
from .events import InvestorDeactivatedEvent, InvestorRegisteredEvent
from .ports import InvestorRepository


logger = logging.getLogger(__name__)


def investor_not_found(investor_id: str) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "Investidor não encontrado.",
        entity_type="Investor",
        entity_id=investor_id,
    )


class RegisterInvestorService:
    """
    Use Case: Cadastrar investidor.

    Fluxo (ordem das validações):
    1. Email e CPF não podem estar em uso
    2. Data de nascimento válida (maior de idade)
    3. Senha atende à política de força
    4. Nome, email e CPF válidos
    5. Hash da senha via HashGenerator
    6. Perfil de risco sugerido pela idade
    7. Persistir e disparar InvestorRegistered

    Example:
        service = RegisterInvestorService(investor_repo, hasher, uow)
        result = service.execute(RegisterInvestorInputDTO(...))
        if result.is_ok():
            print(result.value.id)
    """

    def __init__(
        self,
        investor_repo: InvestorRepository,
        hash_generator: HashGenerator,
        uow: UnitOfWork,
    ):
        self.investor_repo = investor_repo
        self.hash_generator = hash_generator
        self.uow = uow

    def execute(self, input_dto: RegisterInvestorInputDTO) -> Result:
        if (
            self.investor_repo.find_by_email(input_dto.email)
            or self.investor_repo.find_by_cpf(input_dto.cpf)
        ):
            return Err(NotAllowedError(
                "Email ou CPF já está em uso.",
                rule="investidor_unico"
            ))

        try:
            date_of_birth = DateOfBirth.create(input_dto.date_of_birth)
            password = Password.create(input_dto.password)
            name = Name.create(input_dto.name)
            email = Email.create(input_dto.email)
            cpf = CPF.create(input_dto.cpf)
        except DomainException as e:
            return Err(e)

        password_hash = self.hash_generator.hash(password.get_value())

        with self.uow:
            investor = Investor.create(
                name=name,
                email=email,
                cpf=cpf,
                date_of_birth=date_of_birth,
                password_hash=password_hash,
                risk_profile=RiskProfile.suggest_for_age(date_of_birth.age()),
            )
            self.investor_repo.create(investor)

            self.uow.publish_event(
                InvestorRegisteredEvent(
                    aggregate_id=str(investor.id),
                    email=investor.email.value,
                    risk_profile=investor.risk_profile.value,
                )
            )

        logger.info(f"Investidor {investor.id} cadastrado ({investor.risk_profile.value})")
        return Ok(InvestorOutputDTO.from_entity(investor))


class UpdateInvestorService:
    """
    Use Case: Atualizar nome e/ou email do investidor.

    Regras:
    - Pelo menos um campo não vazio
    - Novo email não pode pertencer a outro investidor
    """

    def __init__(self, investor_repo: InvestorRepository, uow: UnitOfWork):
        self.investor_repo = investor_repo
        self.uow = uow

    def execute(self, input_dto: UpdateInvestorInputDTO) -> Result:
        investor = self.investor_repo.find_by_id(input_dto.investor_id)
        if investor is None:
            return Err(investor_not_found(input_dto.investor_id))

        name = (input_dto.name or "").strip()
        email = (input_dto.email or "").strip()

        if not name and not email:
            return Err(NotAllowedError("Nome ou email são obrigatórios."))

        if email:
            owner = self.investor_repo.find_by_email(email)
            if owner is not None and owner != investor:
                return Err(NotAllowedError(
                    "Email já está em uso por outro investidor.",
                    rule="investidor_unico"
                ))

        if not investor.is_active:
            return Err(NotAllowedError(
                "Investidor desativado não pode ser alterado.",
                rule="investidor_inativo"
            ))

        try:
            new_name = Name.create(name) if name else None
            new_email = Email.create(email) if email else None
        except DomainException as e:
            return Err(e)

        with self.uow:
            if new_name:
                investor.update_name(new_name)
            if new_email:
                investor.update_email(new_email)
            self.investor_repo.update(investor)

        logger.info(f"Investidor {investor.id} atualizado")
        return Ok(InvestorOutputDTO.from_entity(investor))


class DeactivateInvestorService:
    """Use Case: Desativar cadastro do investidor."""

    def __init__(self, investor_repo: InvestorRepository, uow: UnitOfWork):
        self.investor_repo = investor_repo
        self.uow = uow

    def execute(self, input_dto: DeactivateInvestorInputDTO) -> Result:
        investor = self.investor_repo.find_by_id(input_dto.investor_id)
        if investor is None:
            return Err(investor_not_found(input_dto.investor_id))

        try:
            with self.uow:
                investor.deactivate()
                self.investor_repo.update(investor)
                self.uow.publish_event(
                    InvestorDeactivatedEvent(
                        aggregate_id=str(investor.id),
                        reason=input_dto.reason,
                    )
                )
        except DomainException as e:
            return Err(e)

        logger.info(f"Investidor {investor.id} desativado")
        return Ok(InvestorOutputDTO.from_entity(investor))
