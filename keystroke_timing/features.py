# ABOUTME: Feature derivation from timing summaries: counts, median timing vector and descriptive stats
import statistics
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from .events import TimingSummary
from .utils import round_half_up


def _down_downs(summary: TimingSummary) -> List[float]:
    return [e.down_down for e in summary.of_type("down") if e.down_down is not None]


def _dwell_times(summary: TimingSummary) -> List[float]:
    return [e.dwell_time for e in summary.of_type("up") if e.dwell_time is not None]


def _median(values: List[float], digits: int) -> Optional[float]:
    if not values:
        return None
    return round_half_up(statistics.median(values), digits)


def event_counts(summary: TimingSummary) -> Dict[str, int]:
    """Count events per kind and report the largest single insertion."""
    insertions = summary.of_type("insert")
    return {
        "down": len(summary.of_type("down")),
        "up": len(summary.of_type("up")),
        "insert": len(insertions),
        "max_insert_length": max((e.length for e in insertions), default=0),
    }


def timing_vector(summary: TimingSummary, digits: int = 2) -> List[Optional[float]]:
    """Median down-down time, median spacing of sorted down-down times, median dwell.

    Spacings are the differences between neighbouring values once the
    down-down times are sorted, e.g. [58, 59, 65, 95.5] -> [1, 6, 30.5].
    An empty list means there was not enough key data to build the vector;
    the dwell median alone may be None.
    """
    down_downs = sorted(_down_downs(summary))
    distances = sorted(
        round_half_up(later - earlier, digits) for earlier, later in zip(down_downs, down_downs[1:])
    )

    vector = [
        _median(down_downs, digits),
        _median(distances, digits),
        _median(_dwell_times(summary), digits),
    ]
    if vector[0] is None or vector[1] is None:
        return []
    return vector


def _distribution(values: List[float]) -> Dict[str, Any]:
    if not values:
        return {"count": 0}
    return {
        "count": len(values),
        "mean": statistics.mean(values),
        "median": statistics.median(values),
        "std_dev": statistics.stdev(values) if len(values) > 1 else 0,
        "percentiles": {
            "25th": float(np.percentile(values, 25)),
            "75th": float(np.percentile(values, 75)),
            "90th": float(np.percentile(values, 90)),
        },
    }


def describe(summary: TimingSummary) -> Dict[str, Any]:
    """Descriptive statistics of dwell and down-down times."""
    return {
        "total_time": summary.total_time,
        "counts": event_counts(summary),
        "dwell_time": _distribution(_dwell_times(summary)),
        "down_down": _distribution(_down_downs(summary)),
    }


def events_frame(summary: TimingSummary) -> pd.DataFrame:
    """One row per event, in recorded order."""
    rows = [
        {
            "type": event.type,
            "timestamp": event.timestamp,
            "down_down": getattr(event, "down_down", None),
            "dwell_time": getattr(event, "dwell_time", None),
            "length": getattr(event, "length", None),
        }
        for event in summary.events
    ]
    return pd.DataFrame(rows, columns=["type", "timestamp", "down_down", "dwell_time", "length"])
