"""Tests for dashboard aggregation."""

from datetime import datetime, timedelta, timezone

import pytest
import pytz

from conftest import BASE_TIME, make_document
from shared.helper.dashboard_helper import (
    build_dashboard,
    closed_today_count,
    count_by_type,
    department_rollup,
    filter_by_type,
    overdue_count,
    pending_count,
    recent_activity,
    status_label,
    time_ago,
)
from shared.models.document import DocumentStatus

IST = pytz.timezone("Asia/Kolkata")


def test_pending_counts_received_and_under_process():
    documents = [make_document(id=f"doc-{n}", status=status) for n, status in enumerate(DocumentStatus)]

    assert pending_count(documents) == 2
    assert pending_count([]) == 0


def test_count_and_filter_by_type():
    documents = [
        make_document(id="a", type="inward"),
        make_document(id="b", type="outward"),
        make_document(id="c", type="inward"),
    ]

    assert count_by_type(documents, "inward") == 2
    assert count_by_type(documents, "outward") == 1
    assert [doc.id for doc in filter_by_type(documents, "inward")] == ["a", "c"]


class TestOverdue:
    def test_due_date_in_the_past_is_overdue(self):
        documents = [make_document(due_date=BASE_TIME - timedelta(seconds=1))]

        assert overdue_count(documents, now=BASE_TIME) == 1

    def test_due_date_equal_to_now_is_not_overdue(self):
        documents = [make_document(due_date=BASE_TIME)]

        assert overdue_count(documents, now=BASE_TIME) == 0

    @pytest.mark.parametrize("status", ["closed", "sent"])
    def test_finished_documents_are_never_overdue(self, status):
        documents = [make_document(status=status, due_date=BASE_TIME - timedelta(days=3))]

        assert overdue_count(documents, now=BASE_TIME) == 0

    @pytest.mark.parametrize("status", ["received", "under_process", "forwarded", "escalated", "draft"])
    def test_open_documents_can_be_overdue(self, status):
        documents = [make_document(status=status, due_date=BASE_TIME - timedelta(days=3))]

        assert overdue_count(documents, now=BASE_TIME) == 1

    def test_missing_due_date_is_not_overdue(self):
        assert overdue_count([make_document(due_date=None)], now=BASE_TIME) == 0


class TestClosedToday:
    def test_closed_and_sent_updated_today(self):
        documents = [
            make_document(id="a", status="closed", updated_at=BASE_TIME),
            make_document(id="b", status="sent", updated_at=BASE_TIME - timedelta(hours=1)),
            make_document(id="c", status="received", updated_at=BASE_TIME),
            make_document(id="d", status="closed", updated_at=BASE_TIME - timedelta(days=1)),
        ]

        assert closed_today_count(documents, now=BASE_TIME, tz=IST) == 2

    def test_today_is_the_local_date(self):
        # 23:30 IST on the 18th, still the 18th locally but the same UTC day as "now"
        updated = datetime(2026, 10, 18, 18, 0, tzinfo=timezone.utc)
        now = datetime(2026, 10, 18, 19, 0, tzinfo=timezone.utc)  # 00:30 IST on the 19th
        documents = [make_document(status="closed", updated_at=updated)]

        assert closed_today_count(documents, now=now, tz=timezone.utc) == 1
        assert closed_today_count(documents, now=now, tz=IST) == 0

    def test_midnight_due_date_edge_case(self):
        midnight = IST.localize(datetime(2026, 10, 19, 0, 0))
        documents = [make_document(status="received", due_date=midnight, updated_at=midnight)]

        assert closed_today_count(documents, now=midnight + timedelta(hours=10), tz=IST) == 0
        assert overdue_count(documents, now=midnight) == 0
        assert overdue_count(documents, now=midnight + timedelta(minutes=1)) == 1


class TestTimeAgo:
    @pytest.mark.parametrize(
        "elapsed, label",
        [
            (timedelta(0), "Just now"),
            (timedelta(seconds=59), "Just now"),
            (timedelta(minutes=1), "1 minutes ago"),
            (timedelta(minutes=59), "59 minutes ago"),
            (timedelta(minutes=60), "1 hours ago"),
            (timedelta(minutes=119), "1 hours ago"),
            (timedelta(minutes=1439), "23 hours ago"),
            (timedelta(minutes=1440), "1 days ago"),
            (timedelta(days=9, hours=23), "9 days ago"),
        ],
    )
    def test_buckets(self, elapsed, label):
        assert time_ago(BASE_TIME - elapsed, now=BASE_TIME) == label

    def test_future_timestamp_reads_just_now(self):
        assert time_ago(BASE_TIME + timedelta(minutes=5), now=BASE_TIME) == "Just now"

    def test_naive_timestamp_is_read_as_utc(self):
        assert time_ago(datetime(2026, 10, 19, 8, 0), now=BASE_TIME) == "1 hours ago"


def test_status_label():
    assert status_label("under_process") == "under process"
    assert status_label(DocumentStatus.CLOSED) == "closed"


class TestRecentActivity:
    def test_at_most_four_items_in_list_order(self):
        documents = [make_document(id=f"doc-{n}", dak_number=f"DAK/{n}") for n in range(6)]

        items = recent_activity(documents, now=BASE_TIME)

        assert [item.id for item in items] == ["doc-0", "doc-1", "doc-2", "doc-3"]

    def test_item_fields(self):
        documents = [
            make_document(id="a", type="inward", priority="urgent", created_at=BASE_TIME - timedelta(minutes=5)),
            make_document(id="b", type="outward", department=None),
        ]

        first, second = recent_activity(documents, now=BASE_TIME)

        assert first.action == "New Inward DAK Registered"
        assert first.department == "Finance"
        assert first.time == "5 minutes ago"
        assert first.priority.value == "urgent"
        assert second.action == "New Outward DAK Created"
        assert second.department == "Unknown"
        assert second.time == "Just now"


class TestDepartmentRollup:
    def test_groups_follow_first_occurrence_not_volume(self):
        documents = [
            make_document(id="1", department="Legal"),
            make_document(id="2", department="Finance"),
            make_document(id="3", department="Finance"),
            make_document(id="4", department="Finance"),
        ]

        assert [group.name for group in department_rollup(documents)] == ["Legal", "Finance"]

    def test_counts_per_group(self):
        documents = [
            make_document(id="1", department="Finance", type="inward", status="received"),
            make_document(id="2", department="Finance", type="outward", status="sent"),
            make_document(id="3", department="Finance", type="inward", status="under_process"),
            make_document(id="4", department=None, type="outward", status="draft"),
        ]

        finance, unknown = department_rollup(documents)

        assert (finance.inward, finance.outward, finance.pending) == (2, 1, 2)
        assert unknown.name == "Unknown"
        assert (unknown.inward, unknown.outward, unknown.pending) == (0, 1, 0)

    def test_at_most_five_groups(self):
        names = ["A", "B", "C", "D", "E", "F", "G"]
        documents = [make_document(id=name, department=name) for name in names]

        rollup = department_rollup(documents)

        assert [group.name for group in rollup] == ["A", "B", "C", "D", "E"]


def test_build_dashboard():
    documents = [
        make_document(id="1", type="inward", status="received", due_date=BASE_TIME - timedelta(days=1)),
        make_document(id="2", type="outward", status="sent", updated_at=BASE_TIME),
        make_document(id="3", type="inward", status="closed", updated_at=BASE_TIME - timedelta(days=2)),
    ]

    summary = build_dashboard(documents, now=BASE_TIME, tz=IST)

    assert summary.stats.total == 3
    assert summary.stats.inward == 2
    assert summary.stats.outward == 1
    assert summary.stats.pending == 1
    assert summary.stats.overdue == 1
    assert summary.stats.closed_today == 1
    assert len(summary.recent_activity) == 3
    assert [group.name for group in summary.departments] == ["Finance"]
