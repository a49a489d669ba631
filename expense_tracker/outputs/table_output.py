# expense_tracker/outputs/table_output.py

import click
import pandas as pd
from expense_tracker.outputs.base import BaseOutput


class TableOutput(BaseOutput):
    """Print rows (a list of dicts sharing the same keys) as an aligned text table."""

    def __init__(self, config):
        self.justify = config.get('table_justify', 'left')

    def render(self, rows):
        df = pd.DataFrame(rows)
        return df.to_string(index=False, justify=self.justify)

    def write(self, rows):
        if not rows:
            return None
        text = self.render(rows)
        click.echo(text)
        return text
