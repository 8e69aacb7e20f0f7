"""
Configuração do Investment Tracker.

Módulos:
- settings: Variáveis de ambiente e logging
- celery: Configuração Celery para tarefas assíncronas
- container: Dependency Injection Container

O app Celery não é importado aqui: ``src.config.celery`` é carregado
pelo worker (``celery -A src.config.celery worker``) ou sob demanda.
"""
