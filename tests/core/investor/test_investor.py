"""
Testes Unitários para o Domínio de Investidores.

Coverage:
- RiskProfile: sugestão por idade e conversão
- Investor: atualização e desativação
- RegisterInvestorService, UpdateInvestorService, DeactivateInvestorService
"""

from datetime import date

import pytest

from src.core.investor.dtos import (
    DeactivateInvestorInputDTO,
    RegisterInvestorInputDTO,
    UpdateInvestorInputDTO,
)
from src.core.investor.entities import RiskProfile
from src.core.investor.events import InvestorDeactivatedEvent, InvestorRegisteredEvent
from src.core.investor.use_cases import (
    DeactivateInvestorService,
    RegisterInvestorService,
    UpdateInvestorService,
)
from src.core.shared.exceptions import (
    InvalidCPFError,
    InvalidDateOfBirthError,
    NotAllowedError,
    ResourceNotFoundError,
    ValidationError,
)
from src.core.shared.value_objects import Email, Name


def years_ago(years: int) -> date:
    today = date.today()
    return today.replace(year=today.year - years, day=min(today.day, 28))


@pytest.fixture
def register_dto():
    return RegisterInvestorInputDTO(
        name="Ana Lima",
        email="ana@exemplo.com",
        cpf="123.456.789-09",
        password="Senha@123",
        date_of_birth=years_ago(30),
    )


class TestRiskProfile:

    @pytest.mark.parametrize("age,expected", [
        (18, RiskProfile.AGGRESSIVE),
        (24, RiskProfile.AGGRESSIVE),
        (25, RiskProfile.CONSERVATIVE),
        (49, RiskProfile.CONSERVATIVE),
        (50, RiskProfile.MODERATE),
        (70, RiskProfile.MODERATE),
    ])
    def test_sugestao_por_idade(self, age, expected):
        assert RiskProfile.suggest_for_age(age) is expected

    def test_from_string(self):
        assert RiskProfile.from_string("aggressive") is RiskProfile.AGGRESSIVE
        assert RiskProfile.from_string("MODERATE") is RiskProfile.MODERATE

    def test_from_string_invalido(self):
        with pytest.raises(ValueError):
            RiskProfile.from_string("Arrojado")


class TestInvestorEntity:
    """Testes para a entidade Investor."""

    def test_perfil_sugerido_na_criacao(self, investor_factory):
        investor = investor_factory(birth=years_ago(20))

        assert investor.risk_profile is RiskProfile.AGGRESSIVE
        assert investor.is_active

    def test_atualizar_nome_e_email(self, investor_factory):
        investor = investor_factory()

        investor.update_name(Name("Maria Souza"))
        investor.update_email(Email("maria.souza@exemplo.com"))

        assert investor.name.value == "Maria Souza"
        assert investor.email.value == "maria.souza@exemplo.com"
        assert investor.updated_at is not None

    def test_desativar(self, investor_factory):
        investor = investor_factory()

        investor.deactivate()

        assert not investor.is_active

    def test_desativar_duas_vezes_erro(self, investor_factory):
        investor = investor_factory()
        investor.deactivate()

        with pytest.raises(NotAllowedError):
            investor.deactivate()

    def test_inativo_nao_pode_ser_alterado(self, investor_factory):
        investor = investor_factory()
        investor.deactivate()

        with pytest.raises(NotAllowedError):
            investor.update_name(Name("Outro Nome"))


class TestRegisterInvestorService:
    """Testes para RegisterInvestorService."""

    def test_cadastrar_sucesso(self, investor_repo, hasher, uow, register_dto):
        """Deve cadastrar investidor com hash da senha."""
        service = RegisterInvestorService(investor_repo, hasher, uow)

        result = service.execute(register_dto)

        assert result.is_ok()
        output = result.value
        assert output.cpf == "12345678909"
        assert output.risk_profile == "Conservative"

        stored = investor_repo.find_by_id(output.id)
        assert stored.password_hash == "hashed:Senha@123"

    def test_cadastrar_publica_evento(self, investor_repo, hasher, uow, register_dto):
        service = RegisterInvestorService(investor_repo, hasher, uow)

        service.execute(register_dto)

        events = uow.collect_events()
        assert len(events) == 1
        assert isinstance(events[0], InvestorRegisteredEvent)
        assert events[0].email == "ana@exemplo.com"
        assert uow.committed is True

    def test_output_nao_expoe_hash(self, investor_repo, hasher, uow, register_dto):
        result = RegisterInvestorService(investor_repo, hasher, uow).execute(register_dto)

        assert "password_hash" not in result.value.to_dict()

    def test_email_em_uso(self, investor_repo, hasher, uow, investor):
        """Deve rejeitar email já cadastrado."""
        dto = RegisterInvestorInputDTO(
            name="Ana Lima",
            email="MARIA@exemplo.com",
            cpf="123.456.789-09",
            password="Senha@123",
            date_of_birth=years_ago(30),
        )

        result = RegisterInvestorService(investor_repo, hasher, uow).execute(dto)

        assert result.is_err()
        assert isinstance(result.error, NotAllowedError)
        assert result.error.rule == "investidor_unico"

    def test_cpf_em_uso(self, investor_repo, hasher, uow, investor):
        dto = RegisterInvestorInputDTO(
            name="Ana Lima",
            email="ana@exemplo.com",
            cpf="52998224725",
            password="Senha@123",
            date_of_birth=years_ago(30),
        )

        result = RegisterInvestorService(investor_repo, hasher, uow).execute(dto)

        assert isinstance(result.error, NotAllowedError)

    def test_menor_de_idade(self, investor_repo, hasher, uow):
        dto = RegisterInvestorInputDTO(
            name="Ana Lima",
            email="ana@exemplo.com",
            cpf="123.456.789-09",
            password="Senha@123",
            date_of_birth=years_ago(17),
        )

        result = RegisterInvestorService(investor_repo, hasher, uow).execute(dto)

        assert isinstance(result.error, InvalidDateOfBirthError)
        assert investor_repo.list_all() == []

    def test_senha_fraca(self, investor_repo, hasher, uow):
        dto = RegisterInvestorInputDTO(
            name="Ana Lima",
            email="ana@exemplo.com",
            cpf="123.456.789-09",
            password="senha",
            date_of_birth=years_ago(30),
        )

        result = RegisterInvestorService(investor_repo, hasher, uow).execute(dto)

        assert isinstance(result.error, ValidationError)
        assert result.error.field == "password"

    def test_cpf_invalido(self, investor_repo, hasher, uow):
        dto = RegisterInvestorInputDTO(
            name="Ana Lima",
            email="ana@exemplo.com",
            cpf="111.111.111-11",
            password="Senha@123",
            date_of_birth=years_ago(30),
        )

        result = RegisterInvestorService(investor_repo, hasher, uow).execute(dto)

        assert isinstance(result.error, InvalidCPFError)
        assert uow.collect_events() == []


class TestUpdateInvestorService:
    """Testes para UpdateInvestorService."""

    def test_atualizar_nome(self, investor_repo, uow, investor):
        service = UpdateInvestorService(investor_repo, uow)

        result = service.execute(UpdateInvestorInputDTO(
            investor_id=str(investor.id),
            name="Maria Oliveira",
        ))

        assert result.is_ok()
        assert result.value.name == "Maria Oliveira"
        assert result.value.email == "maria@exemplo.com"

    def test_investidor_inexistente(self, investor_repo, uow):
        result = UpdateInvestorService(investor_repo, uow).execute(
            UpdateInvestorInputDTO(investor_id="nao-existe", name="Maria")
        )

        assert isinstance(result.error, ResourceNotFoundError)

    def test_sem_campos(self, investor_repo, uow, investor):
        """Deve exigir nome ou email."""
        result = UpdateInvestorService(investor_repo, uow).execute(
            UpdateInvestorInputDTO(investor_id=str(investor.id), name="  ")
        )

        assert isinstance(result.error, NotAllowedError)

    def test_email_de_outro_investidor(self, investor_repo, uow, investor, other_investor):
        result = UpdateInvestorService(investor_repo, uow).execute(
            UpdateInvestorInputDTO(investor_id=str(investor.id), email="joao@exemplo.com")
        )

        assert isinstance(result.error, NotAllowedError)
        assert result.error.rule == "investidor_unico"

    def test_mesmo_email_do_proprio_investidor(self, investor_repo, uow, investor):
        result = UpdateInvestorService(investor_repo, uow).execute(
            UpdateInvestorInputDTO(investor_id=str(investor.id), email="maria@exemplo.com")
        )

        assert result.is_ok()

    def test_nome_invalido(self, investor_repo, uow, investor):
        result = UpdateInvestorService(investor_repo, uow).execute(
            UpdateInvestorInputDTO(investor_id=str(investor.id), name="M4ria")
        )

        assert isinstance(result.error, ValidationError)
        assert investor.name.value == "Maria Silva"

    def test_investidor_desativado(self, investor_repo, uow, investor):
        investor.deactivate()

        result = UpdateInvestorService(investor_repo, uow).execute(
            UpdateInvestorInputDTO(investor_id=str(investor.id), name="Maria Oliveira")
        )

        assert result.error.rule == "investidor_inativo"


class TestDeactivateInvestorService:

    def test_desativar(self, investor_repo, uow, investor):
        result = DeactivateInvestorService(investor_repo, uow).execute(
            DeactivateInvestorInputDTO(investor_id=str(investor.id), reason="Pedido do cliente")
        )

        assert result.is_ok()
        assert result.value.is_active is False
        event = uow.collect_events()[0]
        assert isinstance(event, InvestorDeactivatedEvent)
        assert event.reason == "Pedido do cliente"

    def test_desativar_novamente(self, investor_repo, uow, investor):
        service = DeactivateInvestorService(investor_repo, uow)
        service.execute(DeactivateInvestorInputDTO(investor_id=str(investor.id)))

        result = service.execute(DeactivateInvestorInputDTO(investor_id=str(investor.id)))

        assert isinstance(result.error, NotAllowedError)
        assert uow.rolled_back is True
