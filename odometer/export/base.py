"""
Common interface for report renderers.
"""

from typing import Iterable, TextIO

from odometer.utils.validate import MileageRow


class Sink:
    """
    Renders an ordered sequence of MileageRow records to text.
    """

    def render(self, rows: Iterable[MileageRow]) -> str:
        raise NotImplementedError

    def write(self, rows: Iterable[MileageRow], stream: TextIO) -> None:
        stream.write(self.render(rows))
        stream.flush()
