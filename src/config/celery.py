"""
Configuração do Celery para processamento assíncrono.

O Celery é usado para:
- Processar Domain Events de forma assíncrona
- Gerar notificações (meta alcançada, alertas de preço)

Arquitetura:
- Broker: RabbitMQ (mensagens entre aplicação e workers)
- Backend: Redis (resultados de tarefas)
- Workers: Processos que executam as tarefas

Uso:
    # Iniciar worker
    celery -A src.config.celery worker -l INFO -Q default,events,notifications
"""

from celery import Celery
from kombu import Exchange, Queue

from src.config import settings

# Criar aplicação Celery
app = Celery('investment_tracker')

app.conf.update(
    broker_url=settings.CELERY_BROKER_URL,
    result_backend=settings.CELERY_RESULT_BACKEND,

    # Serialização
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',

    # Timezone
    timezone=settings.TIME_ZONE,
    enable_utc=True,

    # Configurações de execução
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,
    task_always_eager=settings.CELERY_TASK_ALWAYS_EAGER,

    # Retry
    task_default_retry_delay=60,

    # Resultados
    result_expires=3600,  # 1 hora

    task_default_queue='default',
)

# Definir filas
app.conf.task_queues = (
    Queue('default', Exchange('default'), routing_key='default'),
    Queue('events', Exchange('events'), routing_key='events.#'),
    Queue('notifications', Exchange('notifications'), routing_key='notifications.#'),
)

# Roteamento de tarefas para filas
app.conf.task_routes = {
    'src.adapters.events.handlers.dispatch_domain_event': {'queue': 'events'},
    'src.adapters.events.handlers.handle_*': {'queue': 'notifications'},
}

app.autodiscover_tasks(['src.adapters.events'], related_name='handlers')
