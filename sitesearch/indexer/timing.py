"""
Per-document completion times for an indexing run.
"""
import logging
import time

from sitesearch.common.errors import IOFailure

logger = logging.getLogger("indexer")


class TimingRecorder:
    """Records cumulative elapsed milliseconds since the start of a run."""

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._start = None
        self.times = []

    def start(self):
        self._start = self._clock()
        self.times = []

    def record(self):
        """Append the elapsed time since start() and return it."""
        if self._start is None:
            self.start()
        elapsed_ms = int((self._clock() - self._start) * 1000)
        # Never let a coarse clock step backwards in the series
        if self.times and elapsed_ms < self.times[-1]:
            elapsed_ms = self.times[-1]
        self.times.append(elapsed_ms)
        return elapsed_ms

    def __len__(self):
        return len(self.times)


def save_times(path, times):
    """Write one integer per line."""
    try:
        with open(path, 'w', encoding='utf-8') as f:
            for value in times:
                f.write(f"{int(value)}\n")
    except OSError as e:
        raise IOFailure(f"Could not write timing file {path}: {e}") from e
    logger.info(f"Saved {len(times)} document times to {path}")


def load_times(path):
    """Read a timing file written by save_times()."""
    times = []
    try:
        with open(path, 'r', encoding='utf-8') as f:
            for line_number, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    times.append(int(line))
                except ValueError as e:
                    raise IOFailure(
                        f"{path}:{line_number}: not an integer: {line!r}"
                    ) from e
    except OSError as e:
        raise IOFailure(f"Could not read timing file {path}: {e}") from e
    return times
