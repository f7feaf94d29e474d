"""
Domain Models

Dataclasses for the two lookup results served by the application:
commodity market statistics and star systems with their bodies.

Design Principles:
1. Immutability (frozen=True) - Safe to hold in the lookup caches
2. Factory methods - Clean construction from query rows (dicts or pd.Series)
3. Absent, not zero - A null column stays None in the model
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Mapping, Optional

from domain.converters import (
    optional_float,
    optional_int,
    optional_str,
    parse_flag,
)
from domain.exceptions import FieldParseError
from logging_config import setup_logging

logger = setup_logging(__name__, log_file="models.log")

# Type aliases for clarity
SystemAddress = int
Price = float


def _flag(row: Mapping[str, Any], column: str, owner: Optional[str]) -> Optional[bool]:
    """Parse one discovery flag, degrading a bad value to None."""
    try:
        return parse_flag(row.get(column))
    except FieldParseError as e:
        logger.warning(f"{column} unreadable for '{owner}': {e}")
        return None


# =============================================================================
# Commodity
# =============================================================================

@dataclass(frozen=True)
class PriceOffer:
    """The best price for a commodity and where it is offered.

    Attributes:
        price: Offer price in credits
        station_name: Station holding the offer
        system_name: System containing that station
    """
    price: Price
    station_name: Optional[str] = None
    system_name: Optional[str] = None

    @classmethod
    def from_row(
        cls,
        price,
        station_name,
        system_name,
        integer: bool = False,
    ) -> Optional["PriceOffer"]:
        """Build an offer, or None when the price column was null."""
        value = optional_float(price, integer=integer)
        if value is None:
            return None
        return cls(
            price=value,
            station_name=optional_str(station_name),
            system_name=optional_str(system_name),
        )


@dataclass(frozen=True)
class Commodity:
    """
    Market statistics for one commodity name.

    Averages cover every matching row; best_buy is the lowest positive buy
    price at a stocked, unmasked station and best_sell the highest sell
    price at an unmasked station. Any of them may be None when the
    underlying aggregate is undefined.
    """
    name: str
    avg_buy_price: Optional[Price] = None
    avg_sell_price: Optional[Price] = None
    avg_mean_price: Optional[Price] = None
    best_buy: Optional[PriceOffer] = None
    best_sell: Optional[PriceOffer] = None

    @classmethod
    def from_row(cls, name: str, row: Mapping[str, Any], integer_prices: bool = False) -> "Commodity":
        """
        Assemble a Commodity from the aggregate row of CommodityRepository.

        Args:
            name: The commodity name as requested
            row: Mapping with avg_* and best_buy_*/best_sell_* columns
            integer_prices: Truncate prices to whole credits

        Returns:
            A new Commodity instance
        """
        return cls(
            name=name,
            avg_buy_price=optional_float(row.get("avg_buy_price"), integer=integer_prices),
            avg_sell_price=optional_float(row.get("avg_sell_price"), integer=integer_prices),
            avg_mean_price=optional_float(row.get("avg_mean_price"), integer=integer_prices),
            best_buy=PriceOffer.from_row(
                row.get("best_buy_price"),
                row.get("best_buy_station"),
                row.get("best_buy_system"),
                integer=integer_prices,
            ),
            best_sell=PriceOffer.from_row(
                row.get("best_sell_price"),
                row.get("best_sell_station"),
                row.get("best_sell_system"),
                integer=integer_prices,
            ),
        )

    @property
    def has_headline_data(self) -> bool:
        """True if at least one average price is defined."""
        return any(
            v is not None
            for v in (self.avg_buy_price, self.avg_sell_price, self.avg_mean_price)
        )

    def to_dict(self) -> dict:
        return asdict(self)


# =============================================================================
# System, Star, Planet
# =============================================================================

@dataclass(frozen=True)
class Star:
    """A star orbiting within a System. Has no identity outside it."""
    name: Optional[str]
    sub_type: Optional[str] = None
    distance_to_arrival: Optional[float] = None
    solar_masses: Optional[float] = None
    solar_radius: Optional[float] = None
    surface_temperature: Optional[float] = None
    age: Optional[int] = None
    luminosity: Optional[str] = None
    is_main_star: Optional[bool] = None
    was_discovered: Optional[bool] = None
    was_mapped: Optional[bool] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Star":
        name = optional_str(row.get("name"))
        return cls(
            name=name,
            sub_type=optional_str(row.get("sub_type")),
            distance_to_arrival=optional_float(row.get("distance_to_arrival")),
            solar_masses=optional_float(row.get("solar_masses")),
            solar_radius=optional_float(row.get("solar_radius")),
            surface_temperature=optional_float(row.get("surface_temperature")),
            age=optional_int(row.get("age")),
            luminosity=optional_str(row.get("luminosity")),
            is_main_star=_flag(row, "is_main_star", name),
            was_discovered=_flag(row, "was_discovered", name),
            was_mapped=_flag(row, "was_mapped", name),
        )


@dataclass(frozen=True)
class Planet:
    """A planet orbiting within a System. Has no identity outside it."""
    name: Optional[str]
    sub_type: Optional[str] = None
    distance_to_arrival: Optional[float] = None
    earth_masses: Optional[float] = None
    radius: Optional[float] = None
    gravity: Optional[float] = None
    surface_temperature: Optional[float] = None
    terraform_state: Optional[str] = None
    atmosphere_type: Optional[str] = None
    is_landable: Optional[bool] = None
    was_discovered: Optional[bool] = None
    was_mapped: Optional[bool] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Planet":
        name = optional_str(row.get("name"))
        return cls(
            name=name,
            sub_type=optional_str(row.get("sub_type")),
            distance_to_arrival=optional_float(row.get("distance_to_arrival")),
            earth_masses=optional_float(row.get("earth_masses")),
            radius=optional_float(row.get("radius")),
            gravity=optional_float(row.get("gravity")),
            surface_temperature=optional_float(row.get("surface_temperature")),
            terraform_state=optional_str(row.get("terraform_state")),
            atmosphere_type=optional_str(row.get("atmosphere_type")),
            is_landable=_flag(row, "is_landable", name),
            was_discovered=_flag(row, "was_discovered", name),
            was_mapped=_flag(row, "was_mapped", name),
        )


@dataclass(frozen=True)
class System:
    """
    A star system with its attributes and orbiting bodies.

    stars and planets are always tuples; a system with no known bodies has
    empty tuples, never None.
    """
    address: SystemAddress
    name: Optional[str] = None
    body_count: Optional[int] = None
    non_body_count: Optional[int] = None
    population: Optional[int] = None
    allegiance: Optional[str] = None
    economy: Optional[str] = None
    second_economy: Optional[str] = None
    government: Optional[str] = None
    security: Optional[str] = None
    controlling_faction: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None
    stars: tuple[Star, ...] = field(default_factory=tuple)
    planets: tuple[Planet, ...] = field(default_factory=tuple)

    @classmethod
    def from_row(
        cls,
        address: SystemAddress,
        row: Mapping[str, Any],
        stars: Optional[list[Star]] = None,
        planets: Optional[list[Planet]] = None,
    ) -> "System":
        """
        Assemble a System from its attribute row and child records.

        Args:
            address: The system address as requested
            row: Mapping with the system table's columns
            stars: Star records for this system
            planets: Planet records for this system

        Returns:
            A new System instance
        """
        return cls(
            address=address,
            name=optional_str(row.get("name")),
            body_count=optional_int(row.get("body_count")),
            non_body_count=optional_int(row.get("non_body_count")),
            population=optional_int(row.get("population")),
            allegiance=optional_str(row.get("allegiance")),
            economy=optional_str(row.get("economy")),
            second_economy=optional_str(row.get("second_economy")),
            government=optional_str(row.get("government")),
            security=optional_str(row.get("security")),
            controlling_faction=optional_str(row.get("controlling_faction")),
            x=optional_float(row.get("x")),
            y=optional_float(row.get("y")),
            z=optional_float(row.get("z")),
            stars=tuple(stars) if stars else (),
            planets=tuple(planets) if planets else (),
        )

    @property
    def has_headline_data(self) -> bool:
        """True if the system name is defined."""
        return self.name is not None

    @property
    def star_count(self) -> int:
        return len(self.stars)

    @property
    def planet_count(self) -> int:
        return len(self.planets)

    def to_dict(self) -> dict:
        return asdict(self)
