"""
Line charts of per-document indexing completion times.
"""
import logging
import random

import plotly.graph_objs as go

from sitesearch.common.config import (
    CHART_HEIGHT, CHART_WIDTH, GRAPH_TITLE, LINE_TITLES, X_AXIS_TITLE
)
from sitesearch.common.errors import IOFailure
from sitesearch.indexer.timing import load_times

logger = logging.getLogger("grapher")

Y_AXIS_TITLES = {
    'ms': "Run Time (ms)",
    'sec': "Run Time (sec)",
}

# Weighted step sizes for synthetic timing data
DUMMY_INCREMENTS = [0] * 19 + [1] * 17 + [2] * 10 + [5] * 12 + [15, 20]


def create_dataset(doc_times, unit='ms'):
    """x: 1-based document numbers, y: completion times in the requested unit."""
    if unit not in Y_AXIS_TITLES:
        raise ValueError(f"Unknown time unit '{unit}'")
    x = list(range(1, len(doc_times) + 1))
    if unit == 'sec':
        y = [int(t) // 1000 for t in doc_times]
    else:
        y = [int(t) for t in doc_times]
    return x, y


def generate_dummy_times(count, start=100, seed=None):
    """A non-decreasing synthetic series, handy for trying the chart without an index."""
    rng = random.Random(seed)
    times = []
    value = start
    for _ in range(count):
        times.append(value)
        value += rng.choice(DUMMY_INCREMENTS)
    return times


class IndexTimeGrapher:
    """Plots one or two timing series against document number."""

    def __init__(self, chart_title, series, unit='ms'):
        if not 1 <= len(series) <= 2:
            raise ValueError("IndexTimeGrapher plots one or two timing series")
        self.chart_title = chart_title
        self.unit = unit
        logger.info("Creating the graph. Please wait.")
        self.figure = self._create_chart(series)

    @classmethod
    def from_files(cls, paths, line_titles=LINE_TITLES, chart_title=GRAPH_TITLE, unit='ms'):
        """Build a chart from one or two timing files."""
        if len(line_titles) < len(paths):
            raise ValueError("Need a line title for every timing file")
        series = [(title, load_times(path)) for title, path in zip(line_titles, paths)]
        return cls(chart_title, series, unit=unit)

    def _create_chart(self, series):
        fig = go.Figure()
        for line_title, doc_times in series:
            x, y = create_dataset(doc_times, self.unit)
            fig.add_trace(go.Scatter(
                x=x,
                y=y,
                name=line_title,
                mode='lines'
            ))
        fig.update_layout(
            title=self.chart_title,
            xaxis_title=X_AXIS_TITLE,
            yaxis_title=Y_AXIS_TITLES[self.unit],
            width=CHART_WIDTH,
            height=CHART_HEIGHT,
            showlegend=len(series) > 1
        )
        return fig

    def save(self, path):
        """Write the chart as a standalone HTML page."""
        try:
            self.figure.write_html(path, include_plotlyjs=True)
        except OSError as e:
            raise IOFailure(f"Could not write chart to {path}: {e}") from e
        logger.info(f"Saved chart to {path}")

    def show(self):
        self.figure.show()
