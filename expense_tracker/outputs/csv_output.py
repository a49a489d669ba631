# expense_tracker/outputs/csv_output.py

import os
import csv
import time
import logging
from expense_tracker.outputs.base import BaseOutput

logger = logging.getLogger(__name__)

FIELDS = ['id', 'date', 'amount', 'description', 'category']


class CSVOutput(BaseOutput):
    """
    Writes expenses to a new file named expenses_<unix-epoch-ms>.csv inside
    the configured export directory, one row per record after a header row.
    """
    def __init__(self, config):
        self.output_dir = config.get('export_dir', '.')

    def write(self, expenses, timestamp_ms=None):
        if not expenses:
            return None

        os.makedirs(self.output_dir, exist_ok=True)
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        out_path = os.path.join(self.output_dir, f"expenses_{timestamp_ms}.csv")

        with open(out_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.DictWriter(f, fieldnames=FIELDS)
            writer.writeheader()
            for expense in expenses:
                writer.writerow(expense.to_dict())

        logger.info("Written %d expenses to %s", len(expenses), out_path)
        return out_path
