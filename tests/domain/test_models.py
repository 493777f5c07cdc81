"""Tests for the run domain models."""

from estimate_spine.core.errors import UpdateError
from estimate_spine.domain.models import (
    NO_TITLE,
    FieldDescriptor,
    ItemOutcome,
    ItemResult,
    ProjectFields,
    RunReport,
    RunStatistics,
    WorkItem,
)


def _project() -> ProjectFields:
    return ProjectFields(project_id="PVT_1", estimate_field=FieldDescriptor(id="F_EST", name="Days Estimate"))


class TestWorkItem:
    def test_defaults(self):
        item = WorkItem(id="PVTI_1")
        assert item.title == NO_TITLE
        assert not item.has_size
        assert not item.has_risk
        assert not item.has_estimate

    def test_empty_label_counts_as_absent(self):
        assert not WorkItem(id="PVTI_1", size_label="").has_size

    def test_zero_estimate_is_present(self):
        assert WorkItem(id="PVTI_1", current_estimate=0).has_estimate


class TestItemOutcome:
    def test_errors(self):
        assert {o for o in ItemOutcome if o.is_error} == {ItemOutcome.INVALID_CODE, ItemOutcome.UPDATE_FAILED}

    def test_skips(self):
        assert {o for o in ItemOutcome if o.is_skip} == {
            ItemOutcome.MISSING_SIZE,
            ItemOutcome.MISSING_RISK,
            ItemOutcome.UNCHANGED,
        }


class TestRunStatistics:
    def test_record_each_outcome(self):
        stats = RunStatistics()
        for outcome in ItemOutcome:
            stats.record(outcome)

        assert stats.total == len(ItemOutcome)
        assert stats.changed == 1
        assert stats.would_change == 1
        assert stats.errored == 2
        assert stats.skipped == 3

    def test_to_dict(self):
        stats = RunStatistics()
        stats.record(ItemOutcome.UPDATED)
        stats.record(ItemOutcome.MISSING_RISK)
        assert stats.to_dict() == {
            "total": 2,
            "changed": 1,
            "errored": 0,
            "skipped": 1,
            "missing_size": 0,
            "missing_risk": 1,
            "unchanged": 0,
            "would_change": 0,
        }


class TestRunReport:
    def test_add_keeps_order_and_counts(self):
        report = RunReport(project=_project())
        first = ItemResult(WorkItem(id="A"), ItemOutcome.UPDATED, computed=7.5)
        second = ItemResult(WorkItem(id="B"), ItemOutcome.UNCHANGED, computed=15)
        report.add(first)
        report.add(second)

        assert report.results == [first, second]
        assert report.statistics.total == 2

    def test_to_dict_with_items(self):
        report = RunReport(project=_project(), dry_run=True)
        report.add(
            ItemResult(
                WorkItem(id="A", title="Broken", size_label="M"),
                ItemOutcome.UPDATE_FAILED,
                computed=5,
                error=UpdateError("mutation failed"),
            )
        )

        data = report.to_dict(include_items=True)
        assert data["project_id"] == "PVT_1"
        assert data["estimate_field"] == "Days Estimate"
        assert data["dry_run"] is True
        assert data["statistics"]["errored"] == 1
        [item] = data["items"]
        assert item["item_id"] == "A"
        assert item["outcome"] == "update_failed"
        assert item["error"] == "mutation failed"

    def test_to_dict_without_items(self):
        assert "items" not in RunReport(project=_project()).to_dict()
