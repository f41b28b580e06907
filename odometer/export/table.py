"""
CSV rendering of the mileage report.
"""

import csv
import io
from typing import Iterable

from odometer.export.base import Sink
from odometer.utils.timeutils import format_rfc3339
from odometer.utils.validate import MileageRow

HEADER = ("time", "mileage_in_past_month")


class CsvSink(Sink):
    """
    One `<RFC3339 UTC time>,<miles>` row per bucket under a fixed header.
    """

    def render(self, rows: Iterable[MileageRow]) -> str:
        buf = io.StringIO()
        w = csv.writer(buf, lineterminator="\n")
        w.writerow(HEADER)
        for row in rows:
            w.writerow((format_rfc3339(row.time), f"{row.miles:f}"))
        return buf.getvalue()
