"""Tests for antenna.services.activity_bucketer."""

from datetime import timedelta

import pytest

from antenna.services.activity_bucketer import (
    BUCKET_COUNT,
    bucket_index,
    build_hourly_activity,
    empty_buckets,
)
from antenna.utils.timestamps import MS_PER_HOUR
from helpers import message_line, ms, write_transcript


class TestBucketIndex:
    def test_lower_bound_excluded(self, now):
        cutoff = ms(now) - 24 * MS_PER_HOUR
        assert bucket_index(cutoff, ms(now)) is None
        assert bucket_index(cutoff + 1, ms(now)) == 0

    def test_upper_bound_included_in_last_slot(self, now):
        assert bucket_index(ms(now), ms(now)) == BUCKET_COUNT - 1

    def test_future_excluded(self, now):
        assert bucket_index(ms(now) + 1, ms(now)) is None

    def test_zero_timestamp_excluded(self, now):
        assert bucket_index(0, ms(now)) is None

    def test_hour_slots(self, now):
        assert bucket_index(ms(now - timedelta(minutes=30)), ms(now)) == 23
        assert bucket_index(ms(now - timedelta(hours=1)), ms(now)) == 23
        assert bucket_index(ms(now - timedelta(hours=1, minutes=1)), ms(now)) == 22
        assert bucket_index(ms(now - timedelta(hours=23, minutes=30)), ms(now)) == 0


class TestEmptyBuckets:
    def test_labels(self, now):
        buckets = empty_buckets(now)
        assert len(buckets) == BUCKET_COUNT
        assert buckets[-1].hour == "12:00"
        assert buckets[0].hour == "13:00"
        assert all(b.messages == 0 and b.cost == 0.0 for b in buckets)

    def test_labels_keep_minutes(self, now):
        buckets = empty_buckets(now.replace(minute=37))
        assert buckets[-1].hour == "12:37"
        assert buckets[-2].hour == "11:37"

    def test_wire_shape(self, now):
        assert empty_buckets(now)[-1].to_dict() == {"hour": "12:00", "messages": 0, "cost": 0.0}


class TestBuildHourlyActivity:
    def test_window_excludes_old_messages(self, tmp_path, now):
        path = write_transcript(tmp_path, "a", [
            message_line(ms(now - timedelta(hours=1)), 0.5),
            message_line(ms(now - timedelta(hours=25)), 2.0),
        ])
        buckets = build_hourly_activity([path], now)
        assert sum(b.messages for b in buckets) == 1
        assert sum(b.cost for b in buckets) == 0.5
        assert buckets[23].messages == 1

    def test_conservation_across_files(self, tmp_path, now):
        in_window = [
            now - timedelta(minutes=1),
            now - timedelta(hours=5, minutes=10),
            now - timedelta(hours=12),
            now - timedelta(hours=23, minutes=59),
            now,
        ]
        out_of_window = [now - timedelta(hours=24), now + timedelta(minutes=1), now - timedelta(days=3)]
        a = write_transcript(tmp_path, "a", [message_line(ms(t), 0.125) for t in in_window[:3]])
        b = write_transcript(tmp_path, "b", [message_line(ms(t), 0.125) for t in in_window[3:]]
                             + ["{garbage"] + [message_line(ms(t), 1.0) for t in out_of_window])

        buckets = build_hourly_activity([a, b], now)
        assert len(buckets) == BUCKET_COUNT
        assert sum(b.messages for b in buckets) == len(in_window)
        assert sum(b.cost for b in buckets) == 0.125 * len(in_window)

    def test_messages_without_cost_still_counted(self, tmp_path, now):
        path = write_transcript(tmp_path, "a", [message_line(ms(now - timedelta(hours=2)), role="user")])
        buckets = build_hourly_activity([path], now)
        assert buckets[22].messages == 1
        assert buckets[22].cost == 0.0

    def test_missing_transcript_contributes_nothing(self, tmp_path, now):
        buckets = build_hourly_activity([tmp_path / "gone.jsonl"], now)
        assert sum(b.messages for b in buckets) == 0

    def test_no_transcripts(self, now):
        buckets = build_hourly_activity([], now)
        assert len(buckets) == BUCKET_COUNT

    @pytest.mark.parametrize("workers", [1, 3])
    def test_parallel_matches_serial(self, tmp_path, now, workers):
        paths = []
        for i in range(6):
            lines = [message_line(ms(now - timedelta(minutes=37 * j + i)), 0.25) for j in range(20)]
            paths.append(write_transcript(tmp_path, f"s{i}", lines))
        serial = build_hourly_activity(paths, now, max_workers=1)
        result = build_hourly_activity(paths, now, max_workers=workers)
        assert [b.to_dict() for b in result] == [b.to_dict() for b in serial]
        assert sum(b.messages for b in result) == 120
