"""Batch normalization entrypoint tests"""

import io
import json
import sys

import pytest

from app import normalize_entrypoint


class TestNormalizeEntrypoint:
    """Offline normalization of payload files"""

    @pytest.fixture
    def payload_file(self, tmp_path):
        path = tmp_path / "offers.json"
        path.write_text(
            json.dumps(
                [
                    {"provider_name": "ProviderA", "id": "A-1", "cost": "10.50"},
                    {"provider_name": "ProviderA", "id": "A-1", "cost": 10.5},
                    {"vendor": "ProviderB", "sku": "B-1", "pricing": {"amount": 1999, "units": "cents"}},
                    "not an object",
                ]
            )
        )
        return path

    def test_run_files_counts(self, payload_file):
        out = io.StringIO()
        counts = normalize_entrypoint.run_files([payload_file], out=out)
        assert counts == {"accepted": 2, "duplicate": 1, "unrecognized": 0, "invalid_files": 0}

        lines = [json.loads(line) for line in out.getvalue().splitlines()]
        assert [line["status"] for line in lines] == ["accepted", "duplicate", "accepted"]
        assert lines[2]["offer"]["price"] == 19.99

    def test_single_object_file(self, tmp_path):
        path = tmp_path / "one.json"
        path.write_text(json.dumps({"price": 5}))
        counts = normalize_entrypoint.run_files([path], out=io.StringIO())
        assert counts["accepted"] == 1

    def test_unrecognized_exits_nonzero(self, tmp_path, monkeypatch):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"foo": "bar"}))
        monkeypatch.setattr(sys, "argv", ["normalize_entrypoint", str(path)])
        with pytest.raises(SystemExit) as exc:
            normalize_entrypoint.main()
        assert exc.value.code == 1

    def test_missing_file_exits_with_usage_code(self, tmp_path, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["normalize_entrypoint", str(tmp_path / "missing.json")])
        with pytest.raises(SystemExit) as exc:
            normalize_entrypoint.main()
        assert exc.value.code == 2

    def test_invalid_file_is_reported_and_batch_continues(self, tmp_path, payload_file):
        bad = tmp_path / "broken.json"
        bad.write_text("{not json")
        out = io.StringIO()
        counts = normalize_entrypoint.run_files([bad, payload_file], out=out)
        assert counts == {"accepted": 2, "duplicate": 1, "unrecognized": 0, "invalid_files": 1}

        first = json.loads(out.getvalue().splitlines()[0])
        assert first["status"] == "invalid"
        assert first["source"] == str(bad)

    def test_oversized_integer_file_is_invalid(self, tmp_path):
        path = tmp_path / "huge.json"
        path.write_text('{"price": ' + "1" * 5000 + "}")
        counts = normalize_entrypoint.run_files([path], out=io.StringIO())
        assert counts["invalid_files"] == 1
        assert counts["accepted"] == 0

    def test_invalid_file_exits_nonzero(self, tmp_path, payload_file, monkeypatch):
        bad = tmp_path / "broken.json"
        bad.write_text("[1, 2")
        monkeypatch.setattr(sys, "argv", ["normalize_entrypoint", str(payload_file), str(bad)])
        with pytest.raises(SystemExit) as exc:
            normalize_entrypoint.main()
        assert exc.value.code == 1
