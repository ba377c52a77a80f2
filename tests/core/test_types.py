"""Tests for core type definitions."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from shots_organizer.core.types import (
    MoveOperation,
    Plan,
    RemoveDirectoryOperation,
    ResolvedDate,
    SkippedFile,
    SkipReason,
)


class TestResolvedDate:
    """Test date validation at construction."""

    def test_valid_date(self):
        date = ResolvedDate(year=2024, month=2, day=29)

        assert (date.year, date.month, date.day) == (2024, 2, 29)

    @pytest.mark.parametrize(
        "year,month,day",
        [(2019, 1, 1), (2024, 0, 1), (2024, 13, 1), (2024, 1, 0), (2024, 1, 32)],
    )
    def test_out_of_range_rejected(self, year, month, day):
        with pytest.raises(ValidationError):
            ResolvedDate(year=year, month=month, day=day)

    def test_immutable(self):
        date = ResolvedDate(year=2024, month=1, day=1)

        with pytest.raises(ValidationError):
            date.year = 2025


class TestPlan:
    """Test the plan container."""

    def test_keys_by_destination(self):
        plan = Plan(root=Path("/shots"))
        move = MoveOperation(source=Path("/shots/a.png"), destination=Path("/shots/06 June/a.png"))

        plan.add(move)

        assert len(plan) == 1
        assert plan.get(Path("/shots/06 June/a.png")) == move

    def test_duplicate_key_rejected(self):
        plan = Plan(root=Path("/shots"))
        destination = Path("/shots/06 June/a.png")
        plan.add(MoveOperation(source=Path("/shots/a.png"), destination=destination))

        with pytest.raises(KeyError):
            plan.add(MoveOperation(source=Path("/shots/x/a.png"), destination=destination))

    def test_preserves_insertion_order(self):
        plan = Plan(root=Path("/shots"))
        plan.add(MoveOperation(source=Path("/shots/b.png"), destination=Path("/shots/01 January/b.png")))
        plan.add(MoveOperation(source=Path("/shots/a.png"), destination=Path("/shots/02 February/a.png")))
        plan.add(RemoveDirectoryOperation(path=Path("/shots/old")))

        assert [op.kind for op in plan.operations.values()] == ["move", "move", "remove_dir"]
        assert [m.source.name for m in plan.moves()] == ["b.png", "a.png"]
        assert plan.removals() == [RemoveDirectoryOperation(path=Path("/shots/old"))]

    def test_skip_counts(self):
        plan = Plan(root=Path("/shots"))
        plan.skipped.append(SkippedFile(path=Path("/shots/a"), reason=SkipReason.NO_DATE))
        plan.skipped.append(SkippedFile(path=Path("/shots/b"), reason=SkipReason.NO_DATE))
        plan.skipped.append(
            SkippedFile(path=Path("/shots/c"), reason=SkipReason.TARGET_EXISTS)
        )

        counts = plan.skip_counts()

        assert counts["no_date"] == 2
        assert counts["target_exists"] == 1
        assert counts["not_organizable"] == 0

    def test_round_trips_through_json(self):
        plan = Plan(root=Path("/shots"))
        plan.add(MoveOperation(source=Path("/shots/a.png"), destination=Path("/shots/06 June/a.png")))
        plan.add(RemoveDirectoryOperation(path=Path("/shots/old")))

        restored = Plan.model_validate_json(plan.model_dump_json())

        assert restored.removals()[0].path == Path("/shots/old")
        assert restored.moves()[0].destination == Path("/shots/06 June/a.png")
