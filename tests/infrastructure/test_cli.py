"""End-to-end tests for the click CLI against a temporary data directory."""

import json

import pytest
from click.testing import CliRunner

from afterschool.infrastructure.cli.main import cli
from tests.fakes import ENGLISH_ID, MATH_ID

LESSONS = [
    {"_id": MATH_ID, "topic": "Math", "location": "Hendon", "price": "100.00",
     "space": 2, "totalSpace": 2, "icon": "math.png"},
    {"_id": ENGLISH_ID, "topic": "English", "location": "Colindale", "price": "80.00",
     "space": 5, "totalSpace": 5, "icon": "english.png"},
]


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    (tmp_path / "lessons.json").write_text(json.dumps(LESSONS), encoding="utf-8")
    monkeypatch.setenv("AFTERSCHOOL_DATA_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _place(runner, lessons: str, name: str = "Jo Bloggs"):
    return runner.invoke(cli, [
        "order", "place",
        "--name", name,
        "--phone", "07123456789",
        "--lessons", lessons,
    ])


class TestOrderPlace:

    def test_places_order(self, runner, data_dir):
        result = _place(runner, f"{MATH_ID}:1,{ENGLISH_ID}:2")
        assert result.exit_code == 0, result.output
        assert "Order ORD-" in result.output
        lessons = json.loads((data_dir / "lessons.json").read_text())
        assert [l["space"] for l in lessons] == [1, 3]
        assert json.loads((data_dir / "counters.json").read_text()) == {"orderNumber": 1}

    def test_capacity_error_exits_nonzero(self, runner, data_dir):
        result = _place(runner, f"{ENGLISH_ID}:1,{MATH_ID}:3")
        assert result.exit_code == 1
        assert f"Not enough space left in lesson '{MATH_ID}'" in result.output
        lessons = json.loads((data_dir / "lessons.json").read_text())
        assert [l["space"] for l in lessons] == [2, 5]

    def test_invalid_name(self, runner, data_dir):
        result = _place(runner, f"{MATH_ID}:1", name="J0")
        assert result.exit_code == 1
        assert "letters and spaces" in result.output

    def test_bad_lessons_format(self, runner, data_dir):
        result = _place(runner, "nonsense")
        assert result.exit_code == 2
        assert "Expected 'LessonId:Quantity'" in result.output


class TestOrderQueries:

    def test_list_and_search(self, runner, data_dir):
        _place(runner, f"{MATH_ID}:1", name="Alice Smith")
        _place(runner, f"{ENGLISH_ID}:1", name="Bob Jones")

        listed = runner.invoke(cli, ["order", "list"])
        assert listed.exit_code == 0
        assert "Alice Smith" in listed.output
        assert "Bob Jones" in listed.output

        found = runner.invoke(cli, ["order", "search", "alice"])
        assert "Alice Smith" in found.output
        assert "Bob Jones" not in found.output

    def test_empty_list(self, runner, data_dir):
        result = runner.invoke(cli, ["order", "list"])
        assert "No orders found." in result.output

    def test_done(self, runner, data_dir):
        _place(runner, f"{MATH_ID}:1")
        number = json.loads((data_dir / "orders.json").read_text())[0]["orderNumber"]

        result = runner.invoke(cli, ["order", "done", number])
        assert result.exit_code == 0
        assert json.loads((data_dir / "orders.json").read_text())[0]["status"] == "done"

        again = runner.invoke(cli, ["order", "done", number])
        assert again.exit_code == 1


class TestLessonCommands:

    def test_list(self, runner, data_dir):
        result = runner.invoke(cli, ["lesson", "list"])
        assert result.exit_code == 0
        assert "Math" in result.output
        assert "English" in result.output

    def test_search(self, runner, data_dir):
        result = runner.invoke(cli, ["lesson", "search", "colindale"])
        assert "English" in result.output
        assert "Math" not in result.output
