"""
Testes para os publishers de eventos.
"""

from unittest.mock import Mock, patch

import pytest

from src.adapters.events.publishers import (
    CeleryEventPublisher,
    CompositeEventPublisher,
    InMemoryEventPublisher,
    LoggingEventPublisher,
    get_event_publisher,
)
from src.core.goal.events import GoalAchievedEvent
from src.core.transaction.events import TransactionRecordedEvent


@pytest.fixture
def goal_event():
    return GoalAchievedEvent(aggregate_id="goal-1", investor_id="inv-1", name="Viagem")


class TestInMemoryEventPublisher:

    def test_armazena_eventos(self, goal_event):
        publisher = InMemoryEventPublisher()

        publisher.publish(goal_event)

        assert len(publisher.published_events) == 1
        assert publisher.published_events[0].aggregate_id == "goal-1"

    def test_filtra_por_tipo(self, goal_event):
        publisher = InMemoryEventPublisher()

        publisher.publish_batch([
            goal_event,
            TransactionRecordedEvent(aggregate_id="tx-1"),
            GoalAchievedEvent(aggregate_id="goal-2"),
        ])

        assert len(publisher.get_events_by_type("GoalAchievedEvent")) == 2
        assert len(publisher.get_events_by_type("TransactionRecordedEvent")) == 1

        publisher.clear()
        assert publisher.published_events == []


class TestLoggingEventPublisher:
    """Testes para LoggingEventPublisher."""

    def test_executa_handlers_registrados(self, goal_event):
        publisher = LoggingEventPublisher()
        received = []
        publisher.register_handler("GoalAchievedEvent", received.append)

        publisher.publish(goal_event)

        assert received == [goal_event]

    def test_falha_de_handler_nao_interrompe_os_demais(self, goal_event):
        publisher = LoggingEventPublisher()
        received = []
        publisher.register_handler("GoalAchievedEvent", Mock(side_effect=RuntimeError("erro")))
        publisher.register_handler("GoalAchievedEvent", received.append)

        publisher.publish(goal_event)

        assert received == [goal_event]


class TestCompositeEventPublisher:

    def test_propaga_para_todos(self, goal_event):
        pub1 = InMemoryEventPublisher()
        pub2 = InMemoryEventPublisher()
        composite = CompositeEventPublisher([pub1])
        composite.add_publisher(pub2)

        composite.publish(goal_event)

        assert len(pub1.published_events) == 1
        assert len(pub2.published_events) == 1

    def test_falha_isolada(self, goal_event):
        broken = Mock()
        broken.publish.side_effect = RuntimeError("erro")
        healthy = InMemoryEventPublisher()

        CompositeEventPublisher([broken, healthy]).publish(goal_event)

        assert len(healthy.published_events) == 1


class TestCeleryEventPublisher:
    """Testes para CeleryEventPublisher."""

    def test_despacha_para_o_dispatcher(self, goal_event):
        with patch("src.adapters.events.handlers.dispatch_domain_event") as mock_dispatch:
            mock_dispatch.delay = Mock()

            CeleryEventPublisher().publish(goal_event)

            mock_dispatch.delay.assert_called_once_with("GoalAchievedEvent", goal_event.to_dict())

    def test_falha_no_broker_nao_propaga(self, goal_event):
        with patch("src.adapters.events.handlers.dispatch_domain_event") as mock_dispatch:
            mock_dispatch.delay = Mock(side_effect=ConnectionError("broker"))

            CeleryEventPublisher(also_log=False).publish(goal_event)


class TestGetEventPublisher:

    @pytest.mark.parametrize("mode,expected", [
        ("memory", InMemoryEventPublisher),
        ("celery", CeleryEventPublisher),
        ("sync", LoggingEventPublisher),
        (" SYNC ", LoggingEventPublisher),
    ])
    def test_modos(self, mode, expected):
        assert isinstance(get_event_publisher(mode), expected)

    def test_modo_invalido(self):
        with pytest.raises(ValueError):
            get_event_publisher("kafka")

    def test_sync_registra_handlers_de_dominio(self, goal_event):
        """Modo sync entrega o evento serializado aos handlers locais."""
        handler = Mock()
        with patch.dict(
            "src.adapters.events.handlers.EVENT_HANDLERS",
            {"GoalAchievedEvent": handler},
            clear=True,
        ):
            publisher = get_event_publisher("sync")

        publisher.publish(goal_event)

        handler.assert_called_once()
        assert handler.call_args[0][0]["aggregate_id"] == "goal-1"
