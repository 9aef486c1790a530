"""Popular destination catalogue with coordinates for weather lookups."""

from pydantic import BaseModel

from backend.trips.models.common import Geo


class Destination(BaseModel):
    code: str
    name: str
    country: str
    airports: list[str]
    geo: Geo


# (city code, name, country, airports, lat, lon)
_CATALOGUE = [
    ("NYC", "New York City", "United States", ["JFK", "LGA", "EWR"], 40.7128, -74.0060),
    ("LON", "London", "United Kingdom", ["LHR", "LGW", "STN"], 51.5074, -0.1278),
    ("PAR", "Paris", "France", ["CDG", "ORY"], 48.8566, 2.3522),
    ("TYO", "Tokyo", "Japan", ["NRT", "HND"], 35.6762, 139.6503),
    ("SIN", "Singapore", "Singapore", ["SIN"], 1.3521, 103.8198),
    ("DXB", "Dubai", "United Arab Emirates", ["DXB"], 25.2048, 55.2708),
    ("BKK", "Bangkok", "Thailand", ["BKK", "DMK"], 13.7563, 100.5018),
    ("HKG", "Hong Kong", "Hong Kong", ["HKG"], 22.3193, 114.1694),
    ("SYD", "Sydney", "Australia", ["SYD"], -33.8688, 151.2093),
    ("LAX", "Los Angeles", "United States", ["LAX"], 34.0522, -118.2437),
    ("BCN", "Barcelona", "Spain", ["BCN"], 41.3874, 2.1686),
    ("ROM", "Rome", "Italy", ["FCO", "CIA"], 41.9028, 12.4964),
    ("IST", "Istanbul", "Turkey", ["IST", "SAW"], 41.0082, 28.9784),
    ("BER", "Berlin", "Germany", ["BER"], 52.5200, 13.4050),
    ("AMS", "Amsterdam", "Netherlands", ["AMS"], 52.3676, 4.9041),
]

POPULAR_DESTINATIONS: list[Destination] = [
    Destination(code=code, name=name, country=country, airports=airports, geo=Geo(lat=lat, lon=lon))
    for code, name, country, airports, lat, lon in _CATALOGUE
]


def find_destination(code: str) -> Destination | None:
    """Look up a destination by city code or any of its airport codes."""
    code = code.upper()
    for dest in POPULAR_DESTINATIONS:
        if dest.code == code or code in dest.airports:
            return dest
    return None
