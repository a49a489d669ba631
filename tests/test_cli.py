import csv
import json

import pytest
from click.testing import CliRunner

from expense_tracker.cli import main as cli


@pytest.fixture
def run(tmp_path, monkeypatch):
    """Invoke the CLI against a data dir inside tmp_path."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("EXPENSE_TRACKER_DATA_DIR", raising=False)
    data_dir = tmp_path / "data"
    runner = CliRunner()

    def _run(*args):
        return runner.invoke(cli, ["--data-dir", str(data_dir), *args])

    _run.data_dir = data_dir
    return _run


def write_expenses(data_dir, records):
    data_dir.mkdir(parents=True, exist_ok=True)
    (data_dir / "expenses.json").write_text(json.dumps(records, indent=2))


def test_add_and_list(run):
    res = run("add", "--description", "Lunch", "--amount", "20")
    assert res.exit_code == 0, res.output
    assert "Expense added successfully (ID: 1)" in res.output
    res = run("add", "--description", "Rent", "--amount", "900", "--category", "Bills")
    assert "(ID: 2)" in res.output

    stored = json.loads((run.data_dir / "expenses.json").read_text())
    assert [r["category"] for r in stored] == ["Miscellaneous", "Bills"]

    res = run("list")
    assert res.exit_code == 0
    assert "Lunch" in res.output and "$900.00" in res.output

    res = run("list", "--category", "Bills")
    assert "Rent" in res.output and "Lunch" not in res.output

    res = run("list", "--category", "Education")
    assert 'No expense made for the category "Education".' in res.output


def test_list_empty(run):
    res = run("list")
    assert res.exit_code == 0
    assert "No expense recorded yet." in res.output


def test_add_rejects_invalid_amount_and_category(run):
    res = run("add", "--description", "Lunch", "--amount", "-5")
    assert res.exit_code != 0
    assert "Invalid amount. Please enter a positive number." in res.output

    res = run("add", "--description", "Trip", "--amount", "5", "--category", "Travel")
    assert res.exit_code != 0
    assert 'The category "Travel" is currently not available.' in res.output
    assert not (run.data_dir / "expenses.json").exists()


def test_summary_and_delete_example(run):
    write_expenses(run.data_dir, [
        {"id": 1, "date": "2025-01-05", "amount": 10, "description": "a", "category": "Bills"},
        {"id": 2, "date": "2025-03-05", "amount": 20, "description": "b", "category": "Groceries"},
    ])
    res = run("summary")
    assert res.exit_code == 0
    assert "Total expenses: $30.00" in res.output

    res = run("delete", "--id", "1")
    assert res.exit_code == 0
    assert "Deletion of expense with id:1 successful" in res.output

    res = run("list")
    rows = res.output.splitlines()
    assert len(rows) == 2
    assert "b" in rows[1] and "$20.00" in rows[1]


def test_summary_by_month_with_budget_warning(run):
    for day, amount in (("2025-01-10", "100"), ("2025-03-01", "15"), ("2025-03-20", "25")):
        run("add", "--description", "x", "--amount", amount, "--date", day)

    res = run("summary", "--month", "3")
    assert "Total expenses for March: $40.00" in res.output
    assert "Warning" not in res.output

    run("set-budget", "--month", "3", "--amount", "30")
    res = run("summary", "--month", "3")
    assert "Warning: expenses for March exceed the budget of $30.00 by $10.00." in res.output

    res = run("summary", "--month", "13")
    assert res.exit_code != 0
    assert "Month value must be between 1 and 12 (inclusive)" in res.output


def test_update(run):
    run("add", "--description", "Lunch", "--amount", "20")
    res = run("update", "--id", "1", "--description", "Brunch", "--amount", "25")
    assert res.exit_code == 0
    assert "Update of expense with id:1 successful" in res.output
    (record,) = json.loads((run.data_dir / "expenses.json").read_text())
    assert record["description"] == "Brunch"
    assert record["amount"] == 25.0

    res = run("update", "--id", "9", "--amount", "3")
    assert res.exit_code != 0
    assert "Expense with id:9 does not exist." in res.output


def test_delete_missing_id(run):
    run("add", "--description", "Lunch", "--amount", "20")
    before = (run.data_dir / "expenses.json").read_text()
    res = run("delete", "--id", "5")
    assert res.exit_code != 0
    assert "Expense with id:5 does not exist." in res.output
    assert (run.data_dir / "expenses.json").read_text() == before


def test_non_integer_id_is_a_usage_error(run):
    res = run("delete", "--id", "abc")
    assert res.exit_code == 2


def test_budgets(run):
    res = run("view-budget")
    assert "No budget set yet." in res.output

    res = run("set-budget", "--month", "4", "--amount", "300")
    assert res.exit_code == 0
    assert "Budget for April set to $300.00" in res.output
    run("set-budget", "--month", "4", "--amount", "350")
    run("set-budget", "--month", "1", "--amount", "100")

    stored = json.loads((run.data_dir / "budget.json").read_text())
    assert len(stored) == 2

    res = run("view-budget")
    lines = res.output.splitlines()
    assert "January" in lines[1] and "$100.00" in lines[1]
    assert "April" in lines[2] and "$350.00" in lines[2]

    res = run("set-budget", "--month", "0", "--amount", "10")
    assert res.exit_code != 0
    assert "between 1 and 12" in res.output


def test_export_to_csv(run, tmp_path):
    res = run("export-to-csv")
    assert "No expense recorded yet." in res.output
    assert not list(tmp_path.glob("expenses_*.csv"))

    run("add", "--description", "Books, pens", "--amount", "12.5", "--category", "Education")
    res = run("export-to-csv")
    assert res.exit_code == 0, res.output
    (out,) = tmp_path.glob("expenses_*.csv")
    with open(out, newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["id", "date", "amount", "description", "category"]
    assert rows[1][3] == "Books, pens"

    res = run("export-to-csv", "--output-dir", str(tmp_path / "exports"))
    assert len(list((tmp_path / "exports").glob("expenses_*.csv"))) == 1


def test_corrupt_store_is_reported(run):
    run.data_dir.mkdir()
    (run.data_dir / "expenses.json").write_text("{oops")
    res = run("summary")
    assert res.exit_code != 0
    assert "Invalid JSON" in res.output

    res = run("add", "--description", "Lunch", "--amount", "5")
    assert res.exit_code != 0
    assert (run.data_dir / "expenses.json").read_text() == "{oops"


def test_config_file_sets_data_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("EXPENSE_TRACKER_DATA_DIR", raising=False)
    (tmp_path / "config.yaml").write_text(f"data_dir: {tmp_path / 'store'}\n")
    res = CliRunner().invoke(cli, ["add", "--description", "Tea", "--amount", "2"])
    assert res.exit_code == 0, res.output
    assert (tmp_path / "store" / "expenses.json").exists()


def test_env_file_sets_data_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    # set then delete so the value loaded from .env is removed afterwards
    monkeypatch.setenv("EXPENSE_TRACKER_DATA_DIR", "unused")
    monkeypatch.delenv("EXPENSE_TRACKER_DATA_DIR")
    env = tmp_path / ".env"
    env.write_text(f"EXPENSE_TRACKER_DATA_DIR={tmp_path / 'envstore'}\n")
    res = CliRunner().invoke(cli, ["--env-file", str(env), "set-budget", "--month", "2", "--amount", "5"])
    assert res.exit_code == 0, res.output
    assert (tmp_path / "envstore" / "budget.json").exists()


def test_unexpected_error_is_reported_without_traceback(run, monkeypatch):
    def boom(*_a, **_k):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr("expense_tracker.cli.summarize", boom)
    res = run("summary")
    assert res.exit_code == 1
    assert "Error while generating summary: disk on fire" in res.output
    assert "Traceback" not in res.output


def test_version():
    res = CliRunner().invoke(cli, ["--version"])
    assert res.exit_code == 0
    assert "expense-tracker" in res.output


def test_update_with_empty_description_changes_nothing(run):
    run("add", "--description", "Lunch", "--amount", "20")
    res = run("update", "--id", "1", "--description", "")
    assert res.exit_code == 1
    assert "Nothing to update" in res.output
    (record,) = json.loads((run.data_dir / "expenses.json").read_text())
    assert record["description"] == "Lunch"


def test_write_failure_is_reported(run, monkeypatch):
    run("add", "--description", "Lunch", "--amount", "20")
    before = (run.data_dir / "expenses.json").read_text()

    def full_disk(*_a, **_k):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr("expense_tracker.storage.json.dump", full_disk)
    res = run("add", "--description", "Dinner", "--amount", "30")
    assert res.exit_code == 1
    assert "Could not write" in res.output
    assert "Expense added successfully" not in res.output

    res = run("set-budget", "--month", "1", "--amount", "30")
    assert res.exit_code == 1
    assert "Budget for January" not in res.output
    assert (run.data_dir / "expenses.json").read_text() == before


def test_unreadable_store_is_reported(run):
    (run.data_dir / "expenses.json").mkdir(parents=True)
    res = run("add", "--description", "Lunch", "--amount", "20")
    assert res.exit_code == 1
    assert "Could not read" in res.output
    assert "Expense added successfully" not in res.output


def test_bad_output_module_in_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("EXPENSE_TRACKER_DATA_DIR", raising=False)
    (tmp_path / "config.yaml").write_text(
        f"data_dir: {tmp_path / 'store'}\n"
        "output_modules:\n"
        "  table: expense_tracker.outputs.nowhere.Table\n"
    )
    runner = CliRunner()
    runner.invoke(cli, ["add", "--description", "Tea", "--amount", "2"])
    res = runner.invoke(cli, ["list"])
    assert res.exit_code == 1
    assert "Cannot load output 'table'" in res.output
    assert "Error while" not in res.output
