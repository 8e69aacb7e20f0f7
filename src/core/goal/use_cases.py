"""
Use Cases (Application Services) do Domínio de Metas.

Use Cases implementados:
- RegisterInvestmentGoalService: Cadastra meta
- EditInvestmentGoalService: Edita campos e status da meta
- MarkGoalAsAchievedService: Marca meta como alcançada
- UpdateGoalProgressService: Registra aporte/resgate e retorna progresso
- CalculateGoalProjectionService: Projeção por cenários de aporte

Todos retornam ``Result`` (Ok/Err).
"""

from datetime import date, datetime
import logging

from src.core.investor.ports import InvestorRepository
from src.core.investor.use_cases import investor_not_found
from src.core.shared.exceptions import (
    DomainException,
    NotAllowedError,
    ResourceNotFoundError,
    ValidationError,
)
from src.core.shared.interfaces import UnitOfWork
from src.core.shared.result import Err, Ok, Result
from src.core.shared.value_objects import Money

from .dtos import (
    CalculateGoalProjectionInputDTO,
    EditInvestmentGoalInputDTO,
    GoalOutputDTO,
    GoalProgressOutputDTO,
    MarkGoalAsAchievedInputDTO,
    RegisterInvestmentGoalInputDTO,
    UpdateGoalProgressInputDTO,
)
from .entities import Goal, GoalPriority, GoalStatus
from .events import GoalAchievedEvent, GoalRegisteredEvent, GoalUpdatedEvent
from .ports import GoalRepository
from .projection import analyze


logger = logging.getLogger(__name__)


def goal_not_found(goal_id: str) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "Meta não encontrada.",
        entity_type="Goal",
        entity_id=goal_id,
    )


def find_investor_goal(
    investor_repo: InvestorRepository,
    goal_repo: GoalRepository,
    investor_id: str,
    goal_id: str,
) -> Result:
    """
    Localiza investidor e meta, exigindo que a meta seja dele.

    Returns:
        Ok((investor, goal)), Err(ResourceNotFoundError) ou Err(NotAllowedError)
    """
    investor = investor_repo.find_by_id(investor_id)
    if investor is None:
        return Err(investor_not_found(investor_id))

    goal = goal_repo.find_by_id(goal_id)
    if goal is None:
        return Err(goal_not_found(goal_id))

    if not goal.belongs_to(investor.id):
        return Err(NotAllowedError(
            "Meta não pertence a este investidor.",
            rule="meta_do_investidor"
        ))

    return Ok((investor, goal))


def _parse_priority(value: str) -> GoalPriority:
    try:
        return GoalPriority.from_string(value or "")
    except ValueError as e:
        raise ValidationError(str(e), field="priority")


def _parse_status(value: str) -> GoalStatus:
    try:
        return GoalStatus.from_string(value or "")
    except ValueError as e:
        raise ValidationError(str(e), field="status")


def _ensure_future(target_date: date) -> None:
    if isinstance(target_date, datetime):
        target_date = target_date.date()
    if target_date <= date.today():
        raise ValidationError(
            "Data alvo deve estar no futuro.",
            field="target_date"
        )


def _achieved_event(goal: Goal) -> GoalAchievedEvent:
    return GoalAchievedEvent(
        aggregate_id=str(goal.id),
        investor_id=str(goal.investor_id),
        name=goal.name,
        target_amount=str(goal.target_amount.amount),
        current_amount=str(goal.current_amount.amount),
    )


class RegisterInvestmentGoalService:
    """
    Use Case: Cadastrar meta de investimento.

    Ordem de validação:
    1. Investidor existe
    2. Valor alvo válido (> 0)
    3. Data alvo no futuro
    4. Prioridade e nome válidos

    Example:
        result = service.execute(RegisterInvestmentGoalInputDTO(
            investor_id=investor_id,
            name="Reserva de emergência",
            target_amount=30000,
            target_date=date(2027, 12, 31),
        ))
    """

    def __init__(
        self,
        investor_repo: InvestorRepository,
        goal_repo: GoalRepository,
        uow: UnitOfWork,
    ):
        self.investor_repo = investor_repo
        self.goal_repo = goal_repo
        self.uow = uow

    def execute(self, input_dto: RegisterInvestmentGoalInputDTO) -> Result:
        investor = self.investor_repo.find_by_id(input_dto.investor_id)
        if investor is None:
            return Err(investor_not_found(input_dto.investor_id))

        try:
            target_amount = Money.create(input_dto.target_amount, input_dto.currency)
            if target_amount.is_zero():
                raise ValidationError(
                    "Valor alvo deve ser maior que zero.",
                    field="target_amount"
                )

            _ensure_future(input_dto.target_date)

            goal = Goal.create(
                investor_id=investor.id,
                name=input_dto.name,
                target_amount=target_amount,
                target_date=input_dto.target_date,
                description=input_dto.description,
                priority=_parse_priority(input_dto.priority),
            )
        except DomainException as e:
            return Err(e)

        with self.uow:
            self.goal_repo.create(goal)
            self.uow.publish_event(
                GoalRegisteredEvent(
                    aggregate_id=str(goal.id),
                    investor_id=str(investor.id),
                    name=goal.name,
                    target_amount=str(goal.target_amount.amount),
                    target_date=goal.target_date.isoformat(),
                )
            )

        logger.info(f"Meta {goal.id} cadastrada para investidor {investor.id}")
        return Ok(GoalOutputDTO.from_entity(goal))


class EditInvestmentGoalService:
    """
    Use Case: Editar meta.

    Regras:
    - Meta deve pertencer ao investidor (NotAllowedError)
    - Pelo menos um campo informado
    - Nova data alvo deve estar no futuro
    - Mudança de status segue as transições da entidade

    Todos os valores são validados antes de qualquer alteração.
    """

    def __init__(
        self,
        investor_repo: InvestorRepository,
        goal_repo: GoalRepository,
        uow: UnitOfWork,
    ):
        self.investor_repo = investor_repo
        self.goal_repo = goal_repo
        self.uow = uow

    def execute(self, input_dto: EditInvestmentGoalInputDTO) -> Result:
        lookup = find_investor_goal(
            self.investor_repo, self.goal_repo, input_dto.investor_id, input_dto.goal_id
        )
        if lookup.is_err():
            return lookup
        investor, goal = lookup.value

        fields = (
            input_dto.name,
            input_dto.description,
            input_dto.target_amount,
            input_dto.target_date,
            input_dto.priority,
            input_dto.status,
        )
        if all(value is None for value in fields):
            return Err(NotAllowedError("Informe ao menos um campo para alterar."))

        try:
            changes = self._validate(goal, input_dto)
        except DomainException as e:
            return Err(e)

        was_achieved = goal.status is GoalStatus.ACHIEVED
        self._apply(goal, changes)

        with self.uow:
            self.goal_repo.update(goal)
            self.uow.publish_event(
                GoalUpdatedEvent(
                    aggregate_id=str(goal.id),
                    investor_id=str(investor.id),
                    changed_fields=sorted(changes),
                )
            )
            if goal.status is GoalStatus.ACHIEVED and not was_achieved:
                self.uow.publish_event(_achieved_event(goal))

        logger.info(f"Meta {goal.id} editada: {', '.join(sorted(changes))}")
        return Ok(GoalOutputDTO.from_entity(goal))

    def _validate(self, goal: Goal, input_dto: EditInvestmentGoalInputDTO) -> dict:
        """
        Converte a entrada em valores de domínio.

        Raises:
            ValidationError: Valor malformado ou data no passado
            NotAllowedError: Transição de status inválida
        """
        changes = {}

        if input_dto.name is not None:
            Goal.validate_name(input_dto.name)
            changes["name"] = input_dto.name

        if input_dto.description is not None:
            changes["description"] = input_dto.description

        if input_dto.target_amount is not None:
            target_amount = Money.create(input_dto.target_amount, goal.target_amount.currency)
            Goal.validate_target_amount(target_amount)
            changes["target_amount"] = target_amount

        if input_dto.target_date is not None:
            _ensure_future(input_dto.target_date)
            changes["target_date"] = input_dto.target_date

        if input_dto.priority is not None:
            changes["priority"] = _parse_priority(input_dto.priority)

        if input_dto.status is not None:
            status = _parse_status(input_dto.status)
            if status is not goal.status:
                if not goal.can_transition_to(status):
                    raise NotAllowedError(
                        f"Transição de {goal.status.value} para {status.value} não é permitida.",
                        rule="transicao_status_invalida"
                    )
                changes["status"] = status

        return changes

    @staticmethod
    def _apply(goal: Goal, changes: dict) -> None:
        # Status primeiro: alterar o alvo pode marcar a meta como alcançada
        if "status" in changes:
            goal.change_status(changes["status"])
        if "name" in changes:
            goal.update_name(changes["name"])
        if "description" in changes:
            goal.update_description(changes["description"])
        if "target_amount" in changes:
            goal.update_target_amount(changes["target_amount"])
        if "target_date" in changes:
            goal.update_target_date(changes["target_date"])
        if "priority" in changes:
            goal.update_priority(changes["priority"])


class MarkGoalAsAchievedService:
    """
    Use Case: Marcar meta como alcançada.

    Regras:
    - Meta deve pertencer ao investidor
    - Apenas metas ativas podem ser marcadas
    """

    def __init__(
        self,
        investor_repo: InvestorRepository,
        goal_repo: GoalRepository,
        uow: UnitOfWork,
    ):
        self.investor_repo = investor_repo
        self.goal_repo = goal_repo
        self.uow = uow

    def execute(self, input_dto: MarkGoalAsAchievedInputDTO) -> Result:
        lookup = find_investor_goal(
            self.investor_repo, self.goal_repo, input_dto.investor_id, input_dto.goal_id
        )
        if lookup.is_err():
            return lookup
        _, goal = lookup.value

        if not goal.is_active():
            return Err(NotAllowedError(
                "Meta não pode ser alterada porque não está ativa.",
                rule="meta_ativa"
            ))

        goal.mark_as_achieved()

        with self.uow:
            self.goal_repo.update(goal)
            self.uow.publish_event(_achieved_event(goal))

        logger.info(
            f"Meta {goal.id} marcada como alcançada"
            + (f": {input_dto.reason}" if input_dto.reason else "")
        )
        return Ok(GoalOutputDTO.from_entity(goal))


class UpdateGoalProgressService:
    """
    Use Case: Atualizar progresso da meta.

    Aceita um aporte OU um resgate (na moeda da meta); sem nenhum
    dos dois apenas retorna o progresso atual.
    """

    def __init__(
        self,
        investor_repo: InvestorRepository,
        goal_repo: GoalRepository,
        uow: UnitOfWork,
    ):
        self.investor_repo = investor_repo
        self.goal_repo = goal_repo
        self.uow = uow

    def execute(self, input_dto: UpdateGoalProgressInputDTO) -> Result:
        lookup = find_investor_goal(
            self.investor_repo, self.goal_repo, input_dto.investor_id, input_dto.goal_id
        )
        if lookup.is_err():
            return lookup
        _, goal = lookup.value

        if input_dto.contribution is None and input_dto.withdrawal is None:
            return Ok(GoalProgressOutputDTO.from_entity(goal))

        if input_dto.contribution is not None and input_dto.withdrawal is not None:
            return Err(NotAllowedError("Informe aporte ou resgate, não ambos."))

        currency = goal.target_amount.currency
        was_achieved = goal.status is GoalStatus.ACHIEVED

        try:
            if input_dto.contribution is not None:
                amount = Money.create(input_dto.contribution, currency)
                if amount.is_zero():
                    raise ValidationError("Aporte deve ser maior que zero.", field="contribution")
                goal.add_contribution(amount)
            else:
                amount = Money.create(input_dto.withdrawal, currency)
                if amount.is_zero():
                    raise ValidationError("Resgate deve ser maior que zero.", field="withdrawal")
                goal.withdraw(amount)
        except DomainException as e:
            return Err(e)

        with self.uow:
            self.goal_repo.update(goal)
            if goal.status is GoalStatus.ACHIEVED and not was_achieved:
                self.uow.publish_event(_achieved_event(goal))

        logger.info(f"Progresso da meta {goal.id} atualizado: {goal.progress}")
        return Ok(GoalProgressOutputDTO.from_entity(goal))


class CalculateGoalProjectionService:
    """
    Use Case: Projetar conclusão da meta por cenários.

    Regras:
    - Meta deve pertencer ao investidor e estar ativa
    - Pelo menos um cenário
    - Aportes não negativos e na moeda da meta

    Example:
        scenarios = GoalProjectionScenarios.multiple("BRL", 500, 1000, 2000)
        result = service.execute(CalculateGoalProjectionInputDTO(
            investor_id=investor_id,
            goal_id=goal_id,
            scenarios=tuple(scenarios),
        ))
        result.value.to_dict()
    """

    def __init__(self, investor_repo: InvestorRepository, goal_repo: GoalRepository):
        self.investor_repo = investor_repo
        self.goal_repo = goal_repo

    def execute(self, input_dto: CalculateGoalProjectionInputDTO) -> Result:
        lookup = find_investor_goal(
            self.investor_repo, self.goal_repo, input_dto.investor_id, input_dto.goal_id
        )
        if lookup.is_err():
            return lookup
        _, goal = lookup.value

        if not goal.is_active():
            return Err(NotAllowedError(
                "Meta não pode ser projetada porque não está ativa.",
                rule="meta_ativa"
            ))

        if not input_dto.scenarios:
            return Err(NotAllowedError("Informe ao menos um cenário de projeção."))

        for scenario in input_dto.scenarios:
            contribution = scenario.monthly_contribution
            if contribution.is_negative():
                return Err(NotAllowedError("Aporte mensal não pode ser negativo."))
            if contribution.currency != goal.target_amount.currency:
                return Err(NotAllowedError(
                    "Aporte mensal deve estar na moeda da meta."
                ))

        return Ok(analyze(goal, list(input_dto.scenarios)))
