# expense_tracker/cli.py
import functools
import logging

import click
import yaml
from dotenv import load_dotenv

from expense_tracker import __version__
from expense_tracker.config import load_config, resolve_paths
from expense_tracker.core.models import Category, DEFAULT_CATEGORY
from expense_tracker.exceptions import ExpenseTrackerError, RecordNotFoundError
from expense_tracker.ledger import (
    add_expense,
    delete_expense,
    list_budgets,
    list_expenses,
    set_budget,
    summarize,
    update_expense,
)
from expense_tracker.outputs import get_output
from expense_tracker.storage import load_expenses
from expense_tracker.utils import format_amount, month_name

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _configure_logging(level_name):
    level = logging.getLevelName(str(level_name).upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("expense_tracker").setLevel(level)


def handle_errors(action):
    """
    Turn tracker errors into click errors and keep unexpected exceptions
    from surfacing as a traceback. ``action`` completes "Error while ...".
    """
    def decorator(f):
        @functools.wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except ExpenseTrackerError as e:
                raise click.ClickException(str(e)) from e
            except (click.ClickException, click.Abort):
                raise
            except Exception as e:
                logger.debug("Error while %s", action, exc_info=True)
                raise click.ClickException(f"Error while {action}: {e}") from e
        return wrapper
    return decorator


@click.group()
@click.version_option(__version__, prog_name='expense-tracker')
@click.option(
    '--config', 'config_path',
    default=None,
    type=click.Path(dir_okay=False),
    help='Path to config.yaml (defaults to ./config.yaml when present)'
)
@click.option(
    '--data-dir', 'data_dir',
    default=None,
    type=click.Path(file_okay=False),
    help='Directory holding expenses.json and budget.json'
)
@click.option(
    '--env-file', 'env_file',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Optional .env file with EXPENSE_TRACKER_* settings'
)
@click.pass_context
def main(ctx, config_path, data_dir, env_file):
    """A CLI application for tracking all your expenses."""
    if env_file:
        load_dotenv(env_file)

    try:
        cfg = load_config(config_path, data_dir)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Could not load config: {e}") from e
    _configure_logging(cfg['log_level'])

    expenses_path, budget_path = resolve_paths(cfg)
    logger.debug("Using %s and %s", expenses_path, budget_path)
    ctx.obj = {
        'config': cfg,
        'expenses_path': expenses_path,
        'budget_path': budget_path,
    }


@main.command()
@click.option('--description', required=True, help='Expense description')
@click.option('--amount', required=True, help='Expense amount')
@click.option(
    '--category',
    default=DEFAULT_CATEGORY.value,
    show_default=True,
    help=f"Expense category: {', '.join(Category.names())}"
)
@click.option(
    '--date', 'on',
    default=None,
    type=click.DateTime(formats=['%Y-%m-%d']),
    help='Expense date (YYYY-MM-DD), defaults to today'
)
@click.pass_obj
@handle_errors('adding expense')
def add(obj, description, amount, category, on):
    """Add new expense"""
    expense = add_expense(
        obj['expenses_path'],
        description,
        amount,
        category,
        on.date() if on else None,
    )
    click.echo(f"Expense added successfully (ID: {expense.id})")


@main.command('list')
@click.option('--category', default=None, help='Filter by category')
@click.pass_obj
@handle_errors('fetching all expenses list')
def list_command(obj, category):
    """List all expenses"""
    try:
        expenses = list_expenses(obj['expenses_path'], category)
    except RecordNotFoundError as e:
        click.echo(str(e))
        return

    if not expenses:
        click.echo(f'No expense made for the category "{category}".')
        return

    rows = [
        {
            'id': e.id,
            'date': e.date.isoformat(),
            'amount': format_amount(e.amount),
            'description': e.description,
            'category': e.category.value,
        }
        for e in expenses
    ]
    get_output('table', obj['config']).write(rows)


@main.command()
@click.option('--month', type=int, default=None, help='Month value in number from 1 to 12')
@click.pass_obj
@handle_errors('generating summary')
def summary(obj, month):
    """Provides summary of all the expenses"""
    result = summarize(obj['expenses_path'], obj['budget_path'], month)
    if result.month is None:
        click.echo(f"Total expenses: {format_amount(result.total)}")
        return

    name = month_name(result.month)
    click.echo(f"Total expenses for {name}: {format_amount(result.total)}")
    if result.over_budget:
        over = result.total - result.budget.amount
        click.echo(
            f"Warning: expenses for {name} exceed the budget of "
            f"{format_amount(result.budget.amount)} by {format_amount(over)}."
        )


@main.command()
@click.option('--id', 'expense_id', type=int, required=True, help='Expense id to be updated')
@click.option('--description', default=None, help='New description value')
@click.option('--amount', default=None, help='New amount value')
@click.pass_obj
@handle_errors('updating expense')
def update(obj, expense_id, description, amount):
    """Update an expense"""
    update_expense(obj['expenses_path'], expense_id, description, amount)
    click.echo(f"Update of expense with id:{expense_id} successful")


@main.command()
@click.option('--id', 'expense_id', type=int, required=True, help='Expense id to be deleted')
@click.pass_obj
@handle_errors('deleting expense')
def delete(obj, expense_id):
    """Delete an expense"""
    delete_expense(obj['expenses_path'], expense_id)
    click.echo(f"Deletion of expense with id:{expense_id} successful")


@main.command('set-budget')
@click.option('--month', type=int, required=True, help='Month value in number from 1 to 12')
@click.option('--amount', required=True, help='Budget amount for the month')
@click.pass_obj
@handle_errors('setting budget')
def set_budget_command(obj, month, amount):
    """Set the budget for a month"""
    budget = set_budget(obj['budget_path'], month, amount)
    click.echo(
        f"Budget for {month_name(budget.month)} set to {format_amount(budget.amount)}"
    )


@main.command('view-budget')
@click.pass_obj
@handle_errors('fetching budgets')
def view_budget(obj):
    """Show the budget set for each month"""
    budgets = list_budgets(obj['budget_path'])
    if not budgets:
        click.echo("No budget set yet.")
        return

    rows = [
        {'id': b.id, 'month': month_name(b.month), 'amount': format_amount(b.amount)}
        for b in budgets
    ]
    get_output('table', obj['config']).write(rows)


@main.command('export-to-csv')
@click.option(
    '--output-dir', 'output_dir',
    default=None,
    type=click.Path(file_okay=False),
    help='Directory for the CSV file (defaults to export_dir from the config)'
)
@click.pass_obj
@handle_errors('exporting expenses')
def export_to_csv(obj, output_dir):
    """Export all expenses to a CSV file"""
    expenses = load_expenses(obj['expenses_path'])
    if not expenses:
        click.echo("No expense recorded yet.")
        return

    cfg = dict(obj['config'])
    if output_dir:
        cfg['export_dir'] = output_dir
    out_path = get_output('csv', cfg).write(expenses)
    click.echo(f"Exported {len(expenses)} expense(s) to {out_path}")


if __name__ == '__main__':
    main()
