"""
Testes Unitários para Result, identidade de entidades,
Domain Events e exceções de domínio.
"""

from datetime import datetime

import pytest

from src.core.goal.events import GoalAchievedEvent
from src.core.shared.entity import UniqueEntityID
from src.core.shared.exceptions import (
    InsufficientQuantityError,
    NotAllowedError,
    ResourceNotFoundError,
    ValidationError,
)
from src.core.shared.result import Err, Ok
from src.core.transaction.events import TransactionRecordedEvent


class TestResult:

    def test_ok(self):
        result = Ok(42)

        assert result.is_ok()
        assert not result.is_err()
        assert result.value == 42

    def test_err(self):
        error = NotAllowedError("Proibido")
        result = Err(error)

        assert result.is_err()
        assert result.error is error


class TestUniqueEntityID:

    def test_gera_uuid(self):
        assert len(UniqueEntityID().value) == 36

    def test_reaproveita_valor(self):
        assert UniqueEntityID("abc-123") == UniqueEntityID("abc-123")
        assert str(UniqueEntityID("abc-123")) == "abc-123"

    def test_from_optional(self):
        assert UniqueEntityID.from_optional("x").value == "x"
        assert UniqueEntityID.from_optional(None).value


class TestDomainEvent:
    """Testes para serialização de eventos."""

    def test_aggregate_id_obrigatorio(self):
        with pytest.raises(ValueError):
            GoalAchievedEvent(aggregate_id="")

    def test_to_dict(self):
        event = GoalAchievedEvent(
            aggregate_id="goal-1",
            investor_id="inv-1",
            name="Viagem",
            target_amount="1000",
            current_amount="1000",
        )

        data = event.to_dict()

        assert data["event_type"] == "GoalAchievedEvent"
        assert data["aggregate_type"] == "Goal"
        assert data["aggregate_id"] == "goal-1"
        assert data["data"]["investor_id"] == "inv-1"
        assert data["data"]["name"] == "Viagem"

    def test_from_dict_reconstroi_evento(self):
        event = TransactionRecordedEvent(
            aggregate_id="tx-1",
            investor_id="inv-1",
            portfolio_id="pf-1",
            asset_id="asset-1",
            transaction_type="Buy",
            quantity="10",
            price="32.50",
            currency="BRL",
        )

        restored = TransactionRecordedEvent.from_dict(event.to_dict())

        assert restored.event_id == event.event_id
        assert restored.aggregate_id == "tx-1"
        assert restored.price == "32.50"
        assert isinstance(restored.occurred_at, datetime)


class TestExceptions:
    """Testes para serialização de exceções."""

    def test_validation_error_to_dict(self):
        error = ValidationError("CPF inválido", field="cpf")

        assert error.to_dict() == {
            "error": "VALIDATION_ERROR_CPF",
            "message": "CPF inválido",
            "field": "cpf",
        }

    def test_resource_not_found_to_dict(self):
        error = ResourceNotFoundError("Meta não encontrada.", "Goal", "goal-1")

        data = error.to_dict()

        assert data["error"] == "RESOURCE_NOT_FOUND"
        assert data["entity_type"] == "Goal"
        assert data["entity_id"] == "goal-1"

    def test_invariant_violation_tem_regra(self):
        error = InsufficientQuantityError()

        assert error.to_dict()["rule"] == "quantidade_nao_negativa"
        assert "[INVARIANT_VIOLATION]" in str(error)
