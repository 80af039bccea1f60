"""Records returned by the SolarLog Online API."""

from __future__ import annotations

import dataclasses
from typing import Any


def _is_data_point(value: Any) -> bool:
    """Whether a value is a number or None, bools excluded."""
    if value is None:
        return True
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclasses.dataclass
class Session:
    """Bearer token obtained via the client credentials grant."""

    access_token: str = dataclasses.field(repr=False)
    client_id: str
    client_secret: str = dataclasses.field(repr=False)

    @property
    def authorization(self) -> str:
        """Value of the Authorization header."""
        return f"Bearer {self.access_token}"


@dataclasses.dataclass
class Component:
    """A piece of plant equipment, e.g. an inverter or MPP tracker."""

    type: str
    id: Any = None
    name: str | None = None
    cross_epoch_id: Any = None
    raw: dict[str, Any] = dataclasses.field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Component:
        """Build a component from the portal record.

        Raises KeyError if the record has no type and TypeError if it
        isn't a JSON object.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected component object, got {type(data).__name__}")
        return cls(
            type=data["type"],
            id=data.get("id"),
            name=data.get("name"),
            cross_epoch_id=data.get("crossEpochId"),
            raw=data,
        )


@dataclasses.dataclass
class ChannelSeries:
    """Samples of one channel, aligned to an implicit time index."""

    name: str
    date: str | None = None
    data_points: list[float | None] = dataclasses.field(default_factory=list)
    component_id: Any = None
    raw: dict[str, Any] = dataclasses.field(default_factory=dict, repr=False)

    @property
    def key(self) -> str:
        """Key the series is combined under: channel name and date."""
        return f"{self.name}_{self.date}"

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], require_date: bool = False
    ) -> ChannelSeries:
        """Build a series from the portal record.

        The data points list is kept as is, not copied. Raises TypeError if a
        data point is not a number or None, and KeyError if require_date is
        set and the record has no date.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected series object, got {type(data).__name__}")
        data_points = data.get("dataPoints")
        if data_points is None:
            data_points = []
        elif not isinstance(data_points, list):
            raise TypeError("dataPoints is not a list")
        for i, value in enumerate(data_points):
            if not _is_data_point(value):
                raise TypeError(f"dataPoints[{i}] is not a number: {value!r}")
        if require_date and data.get("date") is None:
            raise KeyError("date")
        return cls(
            name=data["name"],
            date=data.get("date"),
            data_points=data_points,
            component_id=data.get("xComponentId", data.get("componentId")),
            raw=data,
        )
