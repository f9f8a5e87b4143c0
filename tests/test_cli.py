"""
End-to-end tests for the grade_engine.py CLI.
"""

import json
import subprocess
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent


def _run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "grade_engine.py", *args],
        capture_output=True, text=True, timeout=60, cwd=ROOT,
    )


class TestCLI:

    @pytest.fixture
    def foot_file(self, tmp_path):
        path = tmp_path / "foot.json"
        path.write_text(json.dumps({"foot_length": 24.5, "foot_width": 9.5}))
        return str(path)

    def test_report(self, foot_file):
        result = _run("footwear", "30", foot_file)
        assert result.returncode == 0, f"stderr: {result.stderr}"
        data = json.loads(result.stdout)
        assert data["category"] == "footwear"
        assert data["recommendation"]["size_label"] == "EU 39"
        assert data["recommendation"]["confidence"] == "Medium"
        assert data["construction_specs"][0]["label"] == "Insole Length"
        assert data["last_specs"][0]["label"] == "Last Length"

    def test_size_system_argument(self, foot_file):
        result = _run("footwear", "30", foot_file, "UK")
        assert json.loads(result.stdout)["recommendation"]["size_label"] == "UK 39"

    def test_no_recommendation(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("{}")
        result = _run("jacket", "M", str(path))
        assert result.returncode == 0
        assert json.loads(result.stdout)["recommendation"] is None

    def test_infinite_value_is_ignored(self, tmp_path):
        path = tmp_path / "inf.json"
        path.write_text('{"foot_length": Infinity, "foot_width": 9.5}')
        result = _run("footwear", "30", str(path))
        assert result.returncode == 0, f"stderr: {result.stderr}"
        data = json.loads(result.stdout)
        assert data["recommendation"]["details"][0]["label"] == "Outsole Width (Forefoot)"
        assert [s["body_source"] for s in data["construction_specs"]] == ["foot_width", "foot_width"]
        assert [s["label"] for s in data["last_specs"]] == ["Ball Width"]

    def test_missing_file(self):
        result = _run("footwear", "30", "/tmp/nonexistent-measurements.json")
        assert result.returncode != 0
        assert "error" in json.loads(result.stderr)

    def test_usage(self):
        result = _run("footwear")
        assert result.returncode == 1
        assert "Usage" in result.stderr
