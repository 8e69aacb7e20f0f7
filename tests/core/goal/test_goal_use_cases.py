"""
Testes Unitários para Use Cases do Domínio de Metas.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from src.core.goal.dtos import (
    CalculateGoalProjectionInputDTO,
    EditInvestmentGoalInputDTO,
    MarkGoalAsAchievedInputDTO,
    RegisterInvestmentGoalInputDTO,
    UpdateGoalProgressInputDTO,
)
from src.core.goal.entities import Goal, GoalStatus
from src.core.goal.events import GoalAchievedEvent, GoalRegisteredEvent, GoalUpdatedEvent
from src.core.goal.projection import GoalProjectionScenarios
from src.core.goal.use_cases import (
    CalculateGoalProjectionService,
    EditInvestmentGoalService,
    MarkGoalAsAchievedService,
    RegisterInvestmentGoalService,
    UpdateGoalProgressService,
)
from src.core.shared.exceptions import (
    NegativeBalanceError,
    NotAllowedError,
    ResourceNotFoundError,
    ValidationError,
)
from src.core.shared.value_objects import Money


def in_days(days: int) -> date:
    return date.today() + timedelta(days=days)


@pytest.fixture
def goal(goal_repo, investor):
    """Meta ativa de 10.000 com 1.000 acumulados."""
    goal = Goal.create(
        investor_id=investor.id,
        name="Reserva de emergência",
        target_amount=Money.create(10000),
        target_date=in_days(365),
        current_amount=Money.create(1000),
    )
    goal_repo.create(goal)
    return goal


class TestRegisterInvestmentGoalService:
    """Testes para RegisterInvestmentGoalService."""

    def test_cadastrar_meta(self, investor_repo, goal_repo, uow, investor):
        service = RegisterInvestmentGoalService(investor_repo, goal_repo, uow)

        result = service.execute(RegisterInvestmentGoalInputDTO(
            investor_id=str(investor.id),
            name="Viagem",
            target_amount="15000.00",
            target_date=in_days(200),
            priority="high",
        ))

        assert result.is_ok()
        output = result.value
        assert output.priority == "High"
        assert output.status == "Active"
        assert output.progress == 0.0
        assert goal_repo.find_by_id(output.id) is not None
        assert isinstance(uow.collect_events()[0], GoalRegisteredEvent)

    def test_data_alvo_no_passado(self, investor_repo, goal_repo, uow, investor):
        """Deve exigir data alvo futura."""
        result = RegisterInvestmentGoalService(investor_repo, goal_repo, uow).execute(
            RegisterInvestmentGoalInputDTO(
                investor_id=str(investor.id),
                name="Viagem",
                target_amount=1000,
                target_date=date.today(),
            )
        )

        assert isinstance(result.error, ValidationError)
        assert result.error.field == "target_date"

    def test_data_alvo_como_datetime(self, investor_repo, goal_repo, uow, investor):
        """Deve aceitar datetime considerando apenas a data."""
        service = RegisterInvestmentGoalService(investor_repo, goal_repo, uow)

        result = service.execute(RegisterInvestmentGoalInputDTO(
            investor_id=str(investor.id),
            name="Viagem",
            target_amount=1000,
            target_date=datetime.now() + timedelta(days=30),
        ))

        assert result.is_ok()
        assert goal_repo.find_by_id(result.value.id).target_date == in_days(30)

    def test_datetime_de_hoje_no_passado(self, investor_repo, goal_repo, uow, investor):
        result = RegisterInvestmentGoalService(investor_repo, goal_repo, uow).execute(
            RegisterInvestmentGoalInputDTO(
                investor_id=str(investor.id),
                name="Viagem",
                target_amount=1000,
                target_date=datetime.now(),
            )
        )

        assert result.error.field == "target_date"

    def test_valor_alvo_zero(self, investor_repo, goal_repo, uow, investor):
        result = RegisterInvestmentGoalService(investor_repo, goal_repo, uow).execute(
            RegisterInvestmentGoalInputDTO(
                investor_id=str(investor.id),
                name="Viagem",
                target_amount=0,
                target_date=in_days(30),
            )
        )

        assert result.error.field == "target_amount"

    def test_prioridade_invalida(self, investor_repo, goal_repo, uow, investor):
        result = RegisterInvestmentGoalService(investor_repo, goal_repo, uow).execute(
            RegisterInvestmentGoalInputDTO(
                investor_id=str(investor.id),
                name="Viagem",
                target_amount=1000,
                target_date=in_days(30),
                priority="Urgente",
            )
        )

        assert result.error.field == "priority"
        assert goal_repo.list_all() == []

    def test_investidor_inexistente(self, investor_repo, goal_repo, uow):
        result = RegisterInvestmentGoalService(investor_repo, goal_repo, uow).execute(
            RegisterInvestmentGoalInputDTO(
                investor_id="nao-existe",
                name="Viagem",
                target_amount=1000,
                target_date=in_days(30),
            )
        )

        assert isinstance(result.error, ResourceNotFoundError)


class TestEditInvestmentGoalService:
    """Testes para EditInvestmentGoalService."""

    def test_editar_campos(self, investor_repo, goal_repo, uow, investor, goal):
        service = EditInvestmentGoalService(investor_repo, goal_repo, uow)

        result = service.execute(EditInvestmentGoalInputDTO(
            investor_id=str(investor.id),
            goal_id=str(goal.id),
            name="Reserva",
            priority="Low",
        ))

        assert result.value.name == "Reserva"
        assert result.value.priority == "Low"
        event = uow.collect_events()[0]
        assert isinstance(event, GoalUpdatedEvent)
        assert event.changed_fields == ["name", "priority"]

    def test_editar_data_alvo_com_datetime(self, investor_repo, goal_repo, uow, investor, goal):
        service = EditInvestmentGoalService(investor_repo, goal_repo, uow)

        result = service.execute(EditInvestmentGoalInputDTO(
            investor_id=str(investor.id),
            goal_id=str(goal.id),
            target_date=datetime.now() + timedelta(days=90),
        ))

        assert result.is_ok()
        assert goal_repo.find_by_id(str(goal.id)).target_date == in_days(90)

    def test_novo_alvo_atingido_publica_conquista(self, investor_repo, goal_repo, uow, investor, goal):
        service = EditInvestmentGoalService(investor_repo, goal_repo, uow)

        result = service.execute(EditInvestmentGoalInputDTO(
            investor_id=str(investor.id),
            goal_id=str(goal.id),
            target_amount=800,
        ))

        assert result.value.status == "Achieved"
        assert len(uow.events_of(GoalAchievedEvent)) == 1

    def test_status_completed(self, investor_repo, goal_repo, uow, investor, goal):
        result = EditInvestmentGoalService(investor_repo, goal_repo, uow).execute(
            EditInvestmentGoalInputDTO(
                investor_id=str(investor.id),
                goal_id=str(goal.id),
                status="Completed",
            )
        )

        assert goal.status is GoalStatus.ACHIEVED
        assert result.value.status == "Achieved"

    def test_reativar_e_alterar_alvo(self, investor_repo, goal_repo, uow, investor, goal):
        """Status é aplicado antes dos demais campos."""
        goal.cancel()

        result = EditInvestmentGoalService(investor_repo, goal_repo, uow).execute(
            EditInvestmentGoalInputDTO(
                investor_id=str(investor.id),
                goal_id=str(goal.id),
                status="Active",
                target_amount=500,
            )
        )

        assert result.value.status == "Achieved"

    def test_transicao_invalida(self, investor_repo, goal_repo, uow, investor, goal):
        goal.cancel()

        result = EditInvestmentGoalService(investor_repo, goal_repo, uow).execute(
            EditInvestmentGoalInputDTO(
                investor_id=str(investor.id),
                goal_id=str(goal.id),
                status="Achieved",
            )
        )

        assert result.error.rule == "transicao_status_invalida"

    def test_validacao_antes_de_alterar(self, investor_repo, goal_repo, uow, investor, goal):
        """Nenhum campo deve ser alterado se algum valor for inválido."""
        result = EditInvestmentGoalService(investor_repo, goal_repo, uow).execute(
            EditInvestmentGoalInputDTO(
                investor_id=str(investor.id),
                goal_id=str(goal.id),
                name="Novo nome",
                target_date=date.today() - timedelta(days=1),
            )
        )

        assert result.error.field == "target_date"
        assert goal.name == "Reserva de emergência"

    def test_sem_campos(self, investor_repo, goal_repo, uow, investor, goal):
        result = EditInvestmentGoalService(investor_repo, goal_repo, uow).execute(
            EditInvestmentGoalInputDTO(investor_id=str(investor.id), goal_id=str(goal.id))
        )

        assert isinstance(result.error, NotAllowedError)

    def test_meta_de_outro_investidor(self, investor_repo, goal_repo, uow, other_investor, goal):
        result = EditInvestmentGoalService(investor_repo, goal_repo, uow).execute(
            EditInvestmentGoalInputDTO(
                investor_id=str(other_investor.id),
                goal_id=str(goal.id),
                name="Minha",
            )
        )

        assert result.error.rule == "meta_do_investidor"


class TestMarkGoalAsAchievedService:

    def test_marcar(self, investor_repo, goal_repo, uow, investor, goal):
        result = MarkGoalAsAchievedService(investor_repo, goal_repo, uow).execute(
            MarkGoalAsAchievedInputDTO(investor_id=str(investor.id), goal_id=str(goal.id))
        )

        assert result.value.status == "Achieved"
        assert isinstance(uow.collect_events()[0], GoalAchievedEvent)

    def test_meta_inativa(self, investor_repo, goal_repo, uow, investor, goal):
        goal.cancel()

        result = MarkGoalAsAchievedService(investor_repo, goal_repo, uow).execute(
            MarkGoalAsAchievedInputDTO(investor_id=str(investor.id), goal_id=str(goal.id))
        )

        assert result.error.rule == "meta_ativa"

    def test_meta_inexistente(self, investor_repo, goal_repo, uow, investor):
        result = MarkGoalAsAchievedService(investor_repo, goal_repo, uow).execute(
            MarkGoalAsAchievedInputDTO(investor_id=str(investor.id), goal_id="nao-existe")
        )

        assert result.error.entity_type == "Goal"


class TestUpdateGoalProgressService:
    """Testes para UpdateGoalProgressService."""

    def test_consultar_progresso(self, investor_repo, goal_repo, uow, investor, goal):
        result = UpdateGoalProgressService(investor_repo, goal_repo, uow).execute(
            UpdateGoalProgressInputDTO(investor_id=str(investor.id), goal_id=str(goal.id))
        )

        assert result.value.progress == pytest.approx(10.0)
        assert result.value.remaining_amount == Decimal("9000")
        assert uow.committed is False

    def test_aporte(self, investor_repo, goal_repo, uow, investor, goal):
        result = UpdateGoalProgressService(investor_repo, goal_repo, uow).execute(
            UpdateGoalProgressInputDTO(
                investor_id=str(investor.id), goal_id=str(goal.id), contribution="1500.00"
            )
        )

        assert result.value.current_amount == Decimal("2500.00")
        assert result.value.progress == pytest.approx(25.0)

    def test_aporte_que_atinge_alvo(self, investor_repo, goal_repo, uow, investor, goal):
        result = UpdateGoalProgressService(investor_repo, goal_repo, uow).execute(
            UpdateGoalProgressInputDTO(
                investor_id=str(investor.id), goal_id=str(goal.id), contribution=9000
            )
        )

        assert result.value.status == "Achieved"
        event = uow.collect_events()[0]
        assert isinstance(event, GoalAchievedEvent)
        assert event.investor_id == str(investor.id)

    def test_resgate_maior_que_saldo(self, investor_repo, goal_repo, uow, investor, goal):
        result = UpdateGoalProgressService(investor_repo, goal_repo, uow).execute(
            UpdateGoalProgressInputDTO(
                investor_id=str(investor.id), goal_id=str(goal.id), withdrawal=5000
            )
        )

        assert isinstance(result.error, NegativeBalanceError)

    def test_aporte_e_resgate_juntos(self, investor_repo, goal_repo, uow, investor, goal):
        result = UpdateGoalProgressService(investor_repo, goal_repo, uow).execute(
            UpdateGoalProgressInputDTO(
                investor_id=str(investor.id), goal_id=str(goal.id), contribution=10, withdrawal=10
            )
        )

        assert isinstance(result.error, NotAllowedError)

    def test_aporte_zero(self, investor_repo, goal_repo, uow, investor, goal):
        result = UpdateGoalProgressService(investor_repo, goal_repo, uow).execute(
            UpdateGoalProgressInputDTO(
                investor_id=str(investor.id), goal_id=str(goal.id), contribution=0
            )
        )

        assert result.error.field == "contribution"


class TestCalculateGoalProjectionService:
    """Testes para CalculateGoalProjectionService."""

    def test_projecao(self, investor_repo, goal_repo, investor, goal):
        scenarios = GoalProjectionScenarios.multiple("BRL", 500, 1000, 2000)

        result = CalculateGoalProjectionService(investor_repo, goal_repo).execute(
            CalculateGoalProjectionInputDTO(
                investor_id=str(investor.id),
                goal_id=str(goal.id),
                scenarios=tuple(scenarios),
            )
        )

        assert result.is_ok()
        analysis = result.value
        assert [p.scenario.scenario_name for p in analysis.projections] == [
            "Conservative", "Moderate", "Aggressive"
        ]
        assert analysis.projections[1].months_to_complete == 9

    def test_sem_cenarios(self, investor_repo, goal_repo, investor, goal):
        result = CalculateGoalProjectionService(investor_repo, goal_repo).execute(
            CalculateGoalProjectionInputDTO(investor_id=str(investor.id), goal_id=str(goal.id))
        )

        assert isinstance(result.error, NotAllowedError)

    def test_moeda_diferente(self, investor_repo, goal_repo, investor, goal):
        result = CalculateGoalProjectionService(investor_repo, goal_repo).execute(
            CalculateGoalProjectionInputDTO(
                investor_id=str(investor.id),
                goal_id=str(goal.id),
                scenarios=(GoalProjectionScenarios.moderate("USD", 100),),
            )
        )

        assert isinstance(result.error, NotAllowedError)

    def test_meta_alcancada_nao_projeta(self, investor_repo, goal_repo, investor, goal):
        goal.mark_as_achieved()

        result = CalculateGoalProjectionService(investor_repo, goal_repo).execute(
            CalculateGoalProjectionInputDTO(
                investor_id=str(investor.id),
                goal_id=str(goal.id),
                scenarios=(GoalProjectionScenarios.moderate("BRL", 100),),
            )
        )

        assert result.error.rule == "meta_ativa"
