"""Tests for transaction logging."""

import json
from pathlib import Path

import pytest

from shots_organizer.organization.transaction import (
    TransactionLog,
    TransactionOperation,
    TransactionStatus,
    transaction_log_path,
)


class TestTransactionOperation:
    """Test transaction operation model."""

    def test_create_move_operation(self):
        """Test creating a move operation."""
        op = TransactionOperation(
            operation_id="op123",
            operation_type="move",
            source_path=Path("/shots/a.png"),
            target_path=Path("/shots/06 June/a.png"),
        )

        assert op.operation_id == "op123"
        assert op.status == TransactionStatus.PENDING
        assert op.error_message is None

    def test_create_removal_operation(self):
        """Directory removals have no target."""
        op = TransactionOperation(
            operation_id="op1",
            operation_type="remove_dir",
            source_path=Path("/shots/inbox"),
        )

        assert op.target_path is None


class TestTransactionLog:
    """Test transaction log."""

    @pytest.fixture
    def log(self):
        log = TransactionLog(transaction_id="tx123", root=Path("/shots"))
        log.add_operation("op1", "move", Path("/shots/a.png"), Path("/shots/06 June/a.png"))
        log.add_operation("op2", "move", Path("/shots/b.png"), Path("/shots/06 June/b.png"))
        log.add_operation("op3", "remove_dir", Path("/shots/inbox"))
        return log

    def test_add_operation(self, log):
        assert [op.operation_id for op in log.operations] == ["op1", "op2", "op3"]

    def test_update_operation_status(self, log):
        log.update_operation_status("op1", TransactionStatus.IN_PROGRESS)
        assert log.operations[0].status == TransactionStatus.IN_PROGRESS

        log.update_operation_status("op1", TransactionStatus.FAILED, "denied")
        assert log.operations[0].status == TransactionStatus.FAILED
        assert log.operations[0].error_message == "denied"

    def test_update_unknown_operation_is_ignored(self, log):
        log.update_operation_status("missing", TransactionStatus.COMPLETED)

        assert all(op.status == TransactionStatus.PENDING for op in log.operations)

    def test_statistics(self, log):
        log.update_operation_status("op1", TransactionStatus.COMPLETED)
        log.update_operation_status("op2", TransactionStatus.FAILED)

        stats = log.get_statistics()

        assert stats["total"] == 3
        assert stats["completed"] == 1
        assert stats["failed"] == 1
        assert stats["pending"] == 1
        assert stats["rolled_back"] == 0
        assert log.has_failures()

    def test_rollback_operations_most_recent_first(self, log):
        for op_id in ("op1", "op3"):
            log.update_operation_status(op_id, TransactionStatus.COMPLETED)

        assert [op.operation_id for op in log.get_rollback_operations()] == ["op3", "op1"]

    def test_save_and_load(self, log, tmp_path):
        log.update_operation_status("op1", TransactionStatus.COMPLETED)
        log_path = tmp_path / "transactions" / "tx123.json"

        log.save(log_path)
        loaded = TransactionLog.load(log_path)

        assert json.loads(log_path.read_text())["transaction_id"] == "tx123"
        assert loaded.root == Path("/shots")
        assert loaded.operations[0].status == TransactionStatus.COMPLETED
        assert loaded.operations[2].target_path is None
        assert loaded.get_statistics() == log.get_statistics()

    def test_load_missing(self, tmp_path):
        with pytest.raises(ValueError, match="Transaction log not found"):
            TransactionLog.load(tmp_path / "nope.json")


def test_transaction_log_path():
    path = transaction_log_path(Path("/shots"), "abc")

    assert path == Path("/shots/.shots-organizer/transactions/abc.json")
    assert transaction_log_path(Path("/shots"), "abc", ".journal").parent.parent.name == ".journal"
