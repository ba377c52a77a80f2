"""
Organization module for screenshot reorganization.

This module scans the organizer root, plans every move up front, checks the
plan for conflicts and only then executes it, with dry-run mode and a
transaction log for rollback.
"""

from .executor import OperationExecutor
from .planner import OperationPlanner
from .scanner import scan
from .strategy import MONTH_NAMES, OrganizationStrategy
from .transaction import TransactionLog, TransactionOperation, TransactionStatus

__all__ = [
    "OperationExecutor",
    "OperationPlanner",
    "scan",
    "MONTH_NAMES",
    "OrganizationStrategy",
    "TransactionLog",
    "TransactionOperation",
    "TransactionStatus",
]
