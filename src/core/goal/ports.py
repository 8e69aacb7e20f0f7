"""Ports (Interfaces) do Domínio de Metas."""

from typing import Dict, List, Optional, Protocol, runtime_checkable

from .entities import Goal


@runtime_checkable
class GoalRepository(Protocol):
    """Interface para persistência de Metas."""

    def find_by_id(self, goal_id: str) -> Optional[Goal]:
        ...

    def find_many_by_investor_id(self, investor_id: str) -> List[Goal]:
        ...

    def create(self, goal: Goal) -> None:
        ...

    def update(self, goal: Goal) -> None:
        ...

    def delete(self, goal_id: str) -> None:
        ...


class InMemoryGoalRepository:
    """Implementação em memória do GoalRepository."""

    def __init__(self):
        self._goals: Dict[str, Goal] = {}

    def find_by_id(self, goal_id: str) -> Optional[Goal]:
        return self._goals.get(str(goal_id))

    def find_many_by_investor_id(self, investor_id: str) -> List[Goal]:
        return [g for g in self._goals.values() if g.belongs_to(investor_id)]

    def create(self, goal: Goal) -> None:
        self._goals[str(goal.id)] = goal

    def update(self, goal: Goal) -> None:
        self._goals[str(goal.id)] = goal

    def delete(self, goal_id: str) -> None:
        self._goals.pop(str(goal_id), None)

    def list_all(self) -> List[Goal]:
        return list(self._goals.values())

    def clear(self) -> None:
        self._goals.clear()
