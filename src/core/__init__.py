"""
Core Domain Layer - O Hexágono.

Regras de negócio do acompanhamento de investimentos: investidores, ativos,
carteiras, transações, metas e notificações.
Características:
- Nenhuma dependência de framework ou banco de dados
- Persistência e publicação de eventos apenas através de ports
- Use cases retornam ``Result`` em vez de lançar exceções de negócio
"""
