"""
Domínio de Metas de Investimento.

- Entidades (Goal, GoalPriority, GoalStatus)
- Use Cases (RegisterInvestmentGoal, EditInvestmentGoal, MarkGoalAsAchieved,
  UpdateGoalProgress, CalculateGoalProjection)
- Projeção por cenários (GoalProjectionScenarios)
- Domain Events (GoalRegistered, GoalUpdated, GoalAchieved)
- Ports (GoalRepository)
"""

from .entities import Goal, GoalPriority, GoalStatus
from .events import GoalRegisteredEvent, GoalUpdatedEvent, GoalAchievedEvent
from .projection import (
    GoalProjectionAnalysis,
    GoalProjectionScenarios,
    ProjectionResult,
    ProjectionScenario,
)
from .dtos import GoalOutputDTO, GoalProgressOutputDTO
from .ports import GoalRepository, InMemoryGoalRepository

__all__ = [
    "Goal",
    "GoalPriority",
    "GoalStatus",
    "GoalRegisteredEvent",
    "GoalUpdatedEvent",
    "GoalAchievedEvent",
    "GoalProjectionAnalysis",
    "GoalProjectionScenarios",
    "ProjectionResult",
    "ProjectionScenario",
    "GoalOutputDTO",
    "GoalProgressOutputDTO",
    "GoalRepository",
    "InMemoryGoalRepository",
]
