"""
Lookup of report renderers by output format.
"""

from odometer.analysis.config import OutputFormat
from odometer.export.base import Sink
from odometer.export.chart import ChartSink
from odometer.export.table import CsvSink

SINKS: dict[OutputFormat, type[Sink]] = {
    OutputFormat.CSV: CsvSink,
    OutputFormat.CHART: ChartSink,
}


def get_sink(fmt: OutputFormat | str) -> Sink:
    """
    Return a renderer for `fmt`.

    Raises
    ------
    ValueError
        If `fmt` names no known format.
    """
    return SINKS[OutputFormat(fmt)]()
