"""Application use cases package."""

from .aggregation_engine import AggregationEngine
from .balance_mutator import BalanceMutator
from .manage_accounts import ManageAccountsUseCase
from .manage_reference_data import ManageReferenceDataUseCase
from .query_movements import MovementQuery
from .reconcile_balances import ReconcileBalancesUseCase

__all__ = [
    "AggregationEngine",
    "BalanceMutator",
    "ManageAccountsUseCase",
    "ManageReferenceDataUseCase",
    "MovementQuery",
    "ReconcileBalancesUseCase",
]
