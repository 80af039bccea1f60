"""API for SolarLog Online (Enerest)."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Sequence
from datetime import date as dt_date
import logging
from typing import Any

import aiohttp

from .aggregator import aggregate_channel_series
from .exceptions import ApiError, AuthError
from .models import ChannelSeries, Component, Session

_LOGGER = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.enerest.world"
DEFAULT_AUTH_URL = "https://auth.enerest.world"
TOKEN_PATH = "/auth/realms/quotaapi/protocol/openid-connect/token"

# Passed through to the portal, which resolves it to its current date.
TODAY = "today"

INVERTER_TYPE = "Inverter"
COMBINED_INVERTER_CHANNELS = ("ProdPdc", "ProdEtotal")

DEFAULT_HEADERS = {
    "Accept": "*/*",
    "Accept-Language": "en-US,en;q=0.7,de-DE;q=0.3",
    "Content-Type": "application/x-www-form-urlencoded; charset=UTF-8",
    "X-Requested-With": "XMLHttpRequest",
    "Priority": "u=0",
}

DateLike = str | dt_date


def _format_date(value: DateLike) -> str:
    """Format a date as YYYY-MM-DD, passing strings through."""
    if isinstance(value, dt_date):
        return value.strftime("%Y-%m-%d")
    return value


def _array_param(name: str, values: Iterable[Any]) -> list[tuple[str, str]]:
    """Serialize a list as repeated name[]=value pairs."""
    return [(f"{name}[]", str(value)) for value in values]


class SolarLogOnline:
    """SolarLog Online client."""

    def __init__(
        self,
        portal: str,
        session: aiohttp.ClientSession,
        base_url: str = DEFAULT_BASE_URL,
        auth_url: str = DEFAULT_AUTH_URL,
        timeout: int = 10,
    ) -> None:
        """Initialize the SolarLog Online client."""
        self.portal = portal
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.auth_url = auth_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._auth: Session | None = None

    @property
    def auth(self) -> Session | None:
        """The session obtained by the last successful login."""
        return self._auth

    @property
    def logged_in(self) -> bool:
        """Whether a bearer token is stored."""
        return self._auth is not None

    def logout(self) -> None:
        """Forget the stored bearer token."""
        self._auth = None

    def _headers(self) -> dict[str, str]:
        """Headers for a portal request, with the bearer token if logged in."""
        headers = dict(DEFAULT_HEADERS)
        if self._auth is not None:
            headers["Authorization"] = self._auth.authorization
        return headers

    async def async_login(self, client_id: str, client_secret: str) -> None:
        """Login to SolarLog Online with OAuth2 client credentials."""
        url = f"{self.auth_url}{TOKEN_PATH}"
        try:
            resp = await self.session.post(
                url,
                headers=dict(DEFAULT_HEADERS),
                data={
                    "grant_type": "client_credentials",
                    "client_id": client_id,
                    "client_secret": client_secret,
                },
                timeout=self.timeout,
            )
            _LOGGER.debug("Got %s from %s", resp.status, url)
            resp.raise_for_status()
            resp_json = await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as err:
            _LOGGER.error("Error during SolarLog Online login: %s", err)
            raise AuthError(f"Login failed: {err}") from err
        access_token = (
            resp_json.get("access_token") if isinstance(resp_json, dict) else None
        )
        if not access_token:
            _LOGGER.error("No access_token in login response from %s", url)
            raise AuthError("Login response did not contain an access_token")
        self._auth = Session(
            access_token=access_token,
            client_id=client_id,
            client_secret=client_secret,
        )
        _LOGGER.debug("Logged in to portal %s as %s", self.portal, client_id)

    def _url(self, path: str) -> str:
        """Full url of a portal path."""
        return f"{self.base_url}/api/v1/{self.portal}{path}"

    async def _async_get(
        self, path: str, params: list[tuple[str, str]] | None = None
    ) -> Any:
        """GET a portal path and return the decoded JSON."""
        url = self._url(path)
        try:
            resp = await self.session.get(
                url, headers=self._headers(), params=params, timeout=self.timeout
            )
            _LOGGER.debug("Got %s from %s", resp.status, url)
            resp.raise_for_status()
            return await resp.json(content_type=None)
        except aiohttp.ClientResponseError as err:
            _LOGGER.error("Error fetching %s: %s", url, err)
            raise ApiError(f"Request failed: {err}", url, err.status) from err
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as err:
            _LOGGER.error("Error fetching %s: %s", url, err)
            raise ApiError(f"Request failed: {err!r}", url) from err

    async def _async_get_series(
        self,
        path: str,
        params: list[tuple[str, str]],
        require_date: bool = False,
    ) -> list[ChannelSeries]:
        """GET a portal path and parse the list of series it returns."""
        resp_json = await self._async_get(path, params)
        if not isinstance(resp_json, list):
            _LOGGER.error("Expected a list of series from %s", path)
            raise ApiError(
                f"Expected a list of series from {path}", self._url(path)
            )
        try:
            series = [
                ChannelSeries.from_dict(item, require_date=require_date)
                for item in resp_json
            ]
        except (KeyError, TypeError) as err:
            _LOGGER.error("Unexpected series record from %s: %s", path, err)
            raise ApiError(
                f"Unexpected series record from {path}: {err}", self._url(path)
            ) from err
        _LOGGER.debug("Found %s series from %s", len(series), path)
        return series

    async def async_get_components(
        self, plant_id: str, date: DateLike
    ) -> list[Component]:
        """Get the components registered for a plant on a date."""
        _LOGGER.debug("Fetching components for plant: %s", plant_id)
        path = f"/datasource/plant/{plant_id}/components/{_format_date(date)}"
        resp_json = await self._async_get(path)
        if not isinstance(resp_json, list):
            _LOGGER.error("Expected a list of components from %s", path)
            raise ApiError(
                f"Expected a list of components from {path}", self._url(path)
            )
        try:
            components = [Component.from_dict(item) for item in resp_json]
        except (KeyError, TypeError) as err:
            _LOGGER.error("Unexpected component record from %s: %s", path, err)
            raise ApiError(
                f"Unexpected component record from {path}: {err}", self._url(path)
            ) from err
        _LOGGER.debug(
            "Found %s components for plant: %s", len(components), plant_id
        )
        return components

    async def async_get_inverters(
        self, plant_id: str, date: DateLike
    ) -> list[Component]:
        """Get the inverters of a plant on a date."""
        components = await self.async_get_components(plant_id, date)
        return [c for c in components if c.type == INVERTER_TYPE]

    async def async_get_cross_epoch_channels(
        self,
        plant_id: str,
        component_ids: Sequence[Any],
        channel_names: Sequence[str],
        date_from: DateLike,
        date_to: DateLike,
    ) -> list[ChannelSeries]:
        """Get channel series of several components over a date range.

        Returns one series per component, channel and date in
        [date_from, date_to].
        """
        params = [
            *_array_param("xComponentIds", component_ids),
            *_array_param("channelNames", channel_names),
            ("dateFrom", _format_date(date_from)),
            ("dateTo", _format_date(date_to)),
        ]
        return await self._async_get_series(
            f"/visualization/plant/{plant_id}/cross-epoch/channels",
            params,
            require_date=True,
        )

    async def async_get_channels(
        self,
        plant_id: str,
        date_from: DateLike,
        date_to: DateLike,
        channel_names: Sequence[str],
        mpp_tracker_ids: Sequence[Any] | None = None,
    ) -> list[ChannelSeries]:
        """Get channel series of a plant, optionally for some MPP trackers."""
        params = [
            ("dateFrom", _format_date(date_from)),
            ("dateTo", _format_date(date_to)),
            *_array_param("channelNames", channel_names),
        ]
        if mpp_tracker_ids is not None:
            params.extend(_array_param("mppTrackerIds", mpp_tracker_ids))
        return await self._async_get_series(
            f"/visualization/plant/{plant_id}/channels", params
        )

    async def async_get_channel_data_month(
        self,
        plant_id: str,
        year: int | str,
        month: int | str,
        channel_names: Sequence[str],
    ) -> list[ChannelSeries]:
        """Get channel data aggregated by the portal for a month."""
        return await self._async_get_series(
            f"/visualization/plant/{plant_id}/year/{year}/month/{month}",
            _array_param("channelNames", channel_names),
        )

    async def async_get_channel_data_year(
        self, plant_id: str, year: int | str, channel_names: Sequence[str]
    ) -> list[ChannelSeries]:
        """Get channel data aggregated by the portal for a year."""
        return await self._async_get_series(
            f"/visualization/plant/{plant_id}/year/{year}",
            _array_param("channelNames", channel_names),
        )

    async def async_get_channel_data_lifetime(
        self, plant_id: str, channel_names: Sequence[str]
    ) -> list[ChannelSeries]:
        """Get channel data aggregated by the portal over the plant lifetime."""
        return await self._async_get_series(
            f"/visualization/plant/{plant_id}/lifetime",
            _array_param("channelNames", channel_names),
        )

    async def async_get_combined_inverter_data(
        self,
        plant_id: str,
        component_ids: Sequence[Any],
        date_from: DateLike,
        date_to: DateLike,
    ) -> dict[str, list[float | None]]:
        """Get DC power and total energy summed over several inverters.

        Returns a dict from "<channel>_<date>" to the summed data points.
        """
        series = await self.async_get_cross_epoch_channels(
            plant_id,
            component_ids,
            COMBINED_INVERTER_CHANNELS,
            date_from,
            date_to,
        )
        return aggregate_channel_series(series)
