"""Weather adapter using Open-Meteo API (keyless, free tier)."""

from datetime import date

import httpx

from backend.trips.adapters.provenance import provenance_for_http
from backend.trips.composition.errors import ProviderError
from backend.trips.data.destinations import find_destination
from backend.trips.models.common import Geo
from backend.trips.models.offers import WeatherDay, WeatherSummary

# WMO weather interpretation codes -> display condition
# Docs: https://open-meteo.com/en/docs (WMO Weather interpretation codes)
_WMO_CONDITIONS: list[tuple[range, str]] = [
    (range(0, 1), "Clear"),
    (range(1, 3), "Partly Cloudy"),
    (range(3, 4), "Cloudy"),
    (range(45, 49), "Fog"),
    (range(51, 58), "Drizzle"),
    (range(61, 68), "Rain"),
    (range(71, 78), "Snow"),
    (range(80, 83), "Showers"),
    (range(85, 87), "Snow Showers"),
    (range(95, 100), "Thunderstorm"),
]


def condition_for_code(code: int | None) -> str:
    """Map a WMO weather code to a display condition."""
    if code is None:
        return "Unknown"
    for codes, condition in _WMO_CONDITIONS:
        if code in codes:
            return condition
    return "Unknown"


class OpenMeteoWeather:
    """Weather collaborator backed by the Open-Meteo forecast and geocoding APIs."""

    def __init__(
        self,
        base_url: str = "https://api.open-meteo.com/v1/forecast",
        geocoding_url: str = "https://geocoding-api.open-meteo.com/v1/search",
        client: httpx.AsyncClient | None = None,
        timeout: float = 4.0,
    ) -> None:
        """Initialize adapter.

        Args:
            base_url: Open-Meteo forecast API URL
            geocoding_url: Open-Meteo geocoding API URL
            client: Optional httpx client (for testing with mocks)
            timeout: Per-request timeout when the adapter owns its client
        """
        self._base_url = base_url
        self._geocoding_url = geocoding_url
        self._client = client
        self._timeout = timeout

    async def _locate(self, client: httpx.AsyncClient, destination: str) -> Geo:
        known = find_destination(destination)
        if known is not None:
            return known.geo

        response = await client.get(
            self._geocoding_url, params={"name": destination, "count": 1, "format": "json"}
        )
        response.raise_for_status()
        results = response.json().get("results") or []
        if not results:
            raise ProviderError("weather.open_meteo", destination, f"cannot geocode {destination}")
        return Geo(lat=results[0]["latitude"], lon=results[0]["longitude"])

    async def forecast(self, destination: str, start_date: date, end_date: date) -> WeatherSummary:
        """Fetch the daily forecast for a destination.

        Args:
            destination: City or airport code
            start_date: First date to fetch
            end_date: Last date to fetch (inclusive)

        Returns:
            WeatherSummary with one WeatherDay per date

        Raises:
            ProviderError: Destination cannot be geocoded
            httpx.HTTPError: On network or HTTP errors
        """
        close_client = False
        client = self._client
        if client is None:
            client = httpx.AsyncClient(timeout=self._timeout)
            close_client = True

        try:
            location = await self._locate(client, destination)

            params: dict[str, str | float] = {
                "latitude": location.lat,
                "longitude": location.lon,
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat(),
                "daily": (
                    "weather_code,temperature_2m_max,temperature_2m_min,"
                    "precipitation_probability_max"
                ),
                "timezone": "UTC",
            }

            # Build full URL for provenance
            url = f"{self._base_url}?{'&'.join(f'{k}={v}' for k, v in params.items())}"

            response = await client.get(self._base_url, params=params)
            response.raise_for_status()
            data = response.json()

            # Response structure: {daily: {time: [...], temperature_2m_max: [...], ...}}
            daily = data["daily"]
            codes = daily.get("weather_code") or [None] * len(daily["time"])
            temp_max = daily["temperature_2m_max"]
            temp_min = daily["temperature_2m_min"]
            precip_prob = daily["precipitation_probability_max"]

            forecast = []
            for i, d in enumerate(daily["time"]):
                # Open-Meteo precipitation_probability is 0-100, we want 0.0-1.0
                precip = precip_prob[i] / 100.0 if precip_prob[i] is not None else 0.0
                forecast.append(
                    WeatherDay(
                        date=date.fromisoformat(d),
                        condition=condition_for_code(codes[i]),
                        temp_high_c=temp_max[i] if temp_max[i] is not None else 20.0,
                        temp_low_c=temp_min[i] if temp_min[i] is not None else 10.0,
                        precip_chance=precip,
                    )
                )

            return WeatherSummary(
                destination=destination,
                forecast=forecast,
                provenance=provenance_for_http(source="weather.open_meteo", url=url),
            )
        finally:
            if close_client:
                await client.aclose()
