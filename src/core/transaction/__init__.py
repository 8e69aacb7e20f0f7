"""
Domínio de Transações.

- Entidades (Transaction, TransactionType)
- Use Cases (RecordBuy/Sell/Dividend, UpdateTransaction, históricos)
- Domain Events (TransactionRecorded, TransactionCorrected)
- Ports (TransactionRepository)

Transações são fatos imutáveis: correções geram novos snapshots.
"""

from .entities import Transaction, TransactionType
from .events import TransactionRecordedEvent, TransactionCorrectedEvent
from .dtos import (
    RecordTransactionInputDTO,
    RecordDividendInputDTO,
    UpdateTransactionInputDTO,
    FetchTransactionsHistoryInputDTO,
    TransactionOutputDTO,
)
from .ports import TransactionRepository, InMemoryTransactionRepository

__all__ = [
    "Transaction",
    "TransactionType",
    "TransactionRecordedEvent",
    "TransactionCorrectedEvent",
    "RecordTransactionInputDTO",
    "RecordDividendInputDTO",
    "UpdateTransactionInputDTO",
    "FetchTransactionsHistoryInputDTO",
    "TransactionOutputDTO",
    "TransactionRepository",
    "InMemoryTransactionRepository",
]
