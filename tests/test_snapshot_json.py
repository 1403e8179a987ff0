"""Tests for data.json snapshot files."""

import json
from datetime import datetime, timezone

import pytest

from entropyx.drift.badness import compute_badness
from entropyx.drift.models import CodeKind
from entropyx.exceptions import InvalidPathError, SnapshotFormatError
from entropyx.reporting import (
    generate_data_json,
    load_snapshot_file,
    parse_data_json,
    write_snapshot_file,
)


class TestGenerateDataJson:
    def test_document_layout(self, history, population):
        generated = datetime(2024, 2, 1, tzinfo=timezone.utc)
        doc = json.loads(generate_data_json(history, population, generated=generated))

        assert doc["generated"] == "2024-02-01T00:00:00+00:00"
        assert doc["commitCount"] == 5
        assert doc["summary"] == {
            "entropy": history[-1].drift_score,
            "files": history[-1].total_files,
            "sloc": history[-1].total_sloc,
        }
        assert [h["hash"] for h in doc["history"]] == [s.identifier for s in history]
        assert [f["path"] for f in doc["latestFiles"]] == ["small.py", "mid.py", "big.py"]
        assert doc["latestFiles"][2]["couplingProxy"] == 12.0
        assert doc["latestFiles"][2]["kind"] == "Production"

    def test_badness_is_population_relative(self, history, population):
        doc = json.loads(generate_data_json(history, population))
        assert [f["badness"] for f in doc["latestFiles"]] == compute_badness(population)

    def test_empty_history(self):
        doc = json.loads(generate_data_json([], []))
        assert doc["commitCount"] == 0
        assert doc["summary"] == {"entropy": 0.0, "files": 0, "sloc": 0}


class TestParseDataJson:
    def test_round_trip(self, history, population):
        report = parse_data_json(generate_data_json(history, population))

        assert report.commit_count == 5
        assert report.summary.drift_score == history[-1].drift_score
        assert report.history == tuple(history)
        assert report.latest_files[1].path == "mid.py"
        assert report.latest_files[1].smells_low == 1
        assert report.score_series == [s.drift_score for s in history]

    def test_missing_keys_default(self):
        report = parse_data_json('{"history": [{"hash": "abc"}], "latestFiles": [{"path": "a.py"}]}')
        assert report.commit_count == 0
        assert report.history[0].drift_score == 0.0
        assert report.history[0].timestamp == datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert report.latest_files[0].kind is CodeKind.PRODUCTION

    def test_naive_date_is_utc(self):
        report = parse_data_json('{"history": [{"hash": "a", "date": "2024-01-02T03:04:05"}]}')
        assert report.history[0].timestamp.tzinfo == timezone.utc

    def test_unknown_kind_is_production(self):
        report = parse_data_json('{"latestFiles": [{"path": "a.py", "kind": "Other"}]}')
        assert report.latest_files[0].kind is CodeKind.PRODUCTION

    @pytest.mark.parametrize(
        "text",
        [
            "not json",
            "[1, 2]",
            '{"summary": {"files": "many"}}',
            '{"history": [{"date": "yesterday"}]}',
        ],
    )
    def test_malformed(self, text):
        with pytest.raises(SnapshotFormatError):
            parse_data_json(text)


class TestSnapshotFiles:
    def test_write_then_load(self, tmp_path, history, population):
        path = write_snapshot_file(tmp_path / "data.json", history, population)
        assert load_snapshot_file(path).commit_count == len(history)

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidPathError):
            load_snapshot_file(tmp_path / "absent.json")
