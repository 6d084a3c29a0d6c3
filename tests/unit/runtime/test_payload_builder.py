"""Unit tests for PayloadBuilder."""

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

from laakhay.sync.models import TimeWindow, WorkItem
from laakhay.sync.runtime import ItemChunk, PayloadBuilder, build_interval_request


def item(account_id: int, group_key: str) -> WorkItem:
    return WorkItem(account_id=account_id, group_key=group_key)


class TestPayloadBuilder:
    """Test PayloadBuilder grouping and overrides."""

    def test_groups_by_key_in_first_seen_order(self):
        """Test items sharing a key land in one bucket, keys in first-seen order."""
        chunk = ItemChunk(items=(item(1, "b"), item(2, "a"), item(3, "b"), item(4, "c")))
        payload = PayloadBuilder().build(chunk)

        assert payload.as_mapping() == {"b": [1, 3], "a": [2], "c": [4]}
        assert payload.item_count == chunk.size

    def test_every_item_appears_exactly_once(self):
        """Test the payload partitions the chunk."""
        items = [item(i, f"g{i % 4}") for i in range(37)]
        payload = PayloadBuilder().build(items)
        ids = [account_id for group in payload.groups for account_id in group.account_ids]
        assert sorted(ids) == list(range(37))

    def test_idempotent(self):
        """Test building twice from the same chunk gives equal payloads."""
        chunk = ItemChunk(items=(item(1, "x"), item(2, "y"), item(3, "x")))
        builder = PayloadBuilder(max_accounts=10)
        assert builder.build(chunk).to_wire() == builder.build(chunk).to_wire()

    def test_overrides_omitted_when_unset(self):
        """Test unset overrides are not serialized."""
        wire = PayloadBuilder().build([item(1, "a")]).to_wire()
        assert set(wire) == {"payload"}

    def test_overrides_present_when_set(self):
        """Test configured overrides are attached verbatim."""
        wire = PayloadBuilder(max_accounts=500, batch_size=25).build([item(1, "a")]).to_wire()
        assert wire == {
            "payload": [{"groupSlug": "a", "accountIds": [1]}],
            "maxAccounts": 500,
            "batchSize": 25,
        }

    def test_oversized_groups(self):
        """Test groups above the warning threshold are reported, not rejected."""
        items = [item(i, "big") for i in range(5)] + [item(10, "small")]
        builder = PayloadBuilder(group_size_warning=3)
        payload = builder.build(items)

        assert [group.group_slug for group in builder.oversized_groups(payload)] == ["big"]
        assert payload.item_count == 6

    def test_no_threshold_reports_nothing(self):
        """Test no warning threshold means no oversized groups."""
        payload = PayloadBuilder().build([item(i, "big") for i in range(500)])
        assert PayloadBuilder().oversized_groups(payload) == []


def test_build_interval_request():
    """Test interval request carries the formatted bounds."""
    start = datetime(2024, 6, 1, 5, 0, tzinfo=UTC)
    window = TimeWindow.from_bounds(start, start + timedelta(hours=2), ZoneInfo("America/Chicago"))
    request = build_interval_request(window)
    assert request.to_wire() == {
        "startTime": "2024-06-01 00:00:00",
        "endTime": "2024-06-01 02:00:00",
    }
