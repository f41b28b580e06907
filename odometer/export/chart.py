"""
Interactive HTML chart of the mileage report.
"""

from typing import Iterable

import plotly.graph_objects as go

from odometer.export.base import Sink
from odometer.utils.validate import MileageRow

WIDTH_PX = 1800
HEIGHT_PX = 900


class ChartSink(Sink):
    """
    Self-contained HTML page (plotly.js inlined) with one time-axis line series
    and a range slider for zooming.
    """

    def __init__(self, title: str = "Mileage") -> None:
        self.title = title

    def figure(self, rows: Iterable[MileageRow]) -> go.Figure:
        rows = list(rows)
        fig = go.Figure()
        fig.add_trace(go.Scatter(
            x=[r.time for r in rows],
            y=[r.miles for r in rows],
            name=self.title,
            mode="lines",
            showlegend=True,
        ))
        fig.update_layout(
            width=WIDTH_PX,
            height=HEIGHT_PX,
            margin=dict(l=40, r=20, t=40, b=30),
            legend=dict(orientation="h"),
            xaxis=dict(type="date", rangeslider=dict(visible=True)),
            yaxis=dict(title="miles"),
        )
        return fig

    def render(self, rows: Iterable[MileageRow]) -> str:
        html = self.figure(rows).to_html(full_html=True, include_plotlyjs=True)
        return html + "\n"
