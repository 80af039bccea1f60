"""Combine channel series of several components into totals."""

from __future__ import annotations

from collections.abc import Iterable
import logging

from .models import ChannelSeries

_LOGGER = logging.getLogger(__name__)


def aggregate_channel_series(
    series: Iterable[ChannelSeries],
) -> dict[str, list[float | None]]:
    """Sum series with the same channel name and date.

    Returns a dict from "<name>_<date>" to the summed data points. The first
    series seen for a key is used as the running total, so its list is
    updated in place. A None in the running total stays None. Only makes
    sense for summable channels like power and energy.
    """
    totals: dict[str, list[float | None]] = {}
    for item in series:
        key = item.key
        total = totals.get(key)
        if total is None:
            totals[key] = item.data_points
            continue
        for i, value in enumerate(item.data_points):
            if i >= len(total):
                break
            if total[i] is None or value is None:
                continue
            total[i] += value
    _LOGGER.debug("Combined series into %s channel totals", len(totals))
    return totals
