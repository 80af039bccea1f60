"""A python client library for SolarLog Online."""

from .aggregator import aggregate_channel_series
from .exceptions import ApiError, AuthError, SolarLogOnlineError
from .models import ChannelSeries, Component, Session
from .solarlog import TODAY, SolarLogOnline

__all__ = [
    "TODAY",
    "ApiError",
    "AuthError",
    "ChannelSeries",
    "Component",
    "Session",
    "SolarLogOnline",
    "SolarLogOnlineError",
    "aggregate_channel_series",
]
