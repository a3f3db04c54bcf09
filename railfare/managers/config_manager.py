"""
Configuration management for the fare engine.
Author: Oliver Ernster

This module handles loading, saving, and validating engine configuration
(fare tables, popular routes, distance model constants, schedule fallbacks
and booking charges) using Pydantic models for type safety and validation.
"""

import json
import logging
import os
from decimal import Decimal
from pathlib import Path
from typing import Optional, List, Dict
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ..version import __version__, __config_version__, __currency_symbol__
from ..core.exceptions import ConfigurationError
from ..core.models.travel_class import TravelClass
from ..utils.helpers import parse_duration

logger = logging.getLogger(__name__)


class ClassFareConfig(BaseModel):
    """Rate table entry for one travel class."""

    rate_per_km: Decimal = Field(..., gt=0, description="Fare per kilometre")
    minimum_fare: Decimal = Field(..., gt=0, description="Fare floor for short journeys")
    surge_multiplier: Decimal = Field(..., description="Multiplier applied on popular routes")

    @field_validator('surge_multiplier')
    @classmethod
    def validate_surge_multiplier(cls, v):
        """Surge must raise the fare."""
        if v <= 1:
            raise ValueError('Surge multiplier must be greater than 1')
        return v


def _default_class_fares() -> Dict[str, ClassFareConfig]:
    return {
        "SL": ClassFareConfig(rate_per_km=Decimal("0.45"), minimum_fare=Decimal("120"),
                              surge_multiplier=Decimal("1.20")),
        "3A": ClassFareConfig(rate_per_km=Decimal("1.20"), minimum_fare=Decimal("300"),
                              surge_multiplier=Decimal("1.15")),
        "2A": ClassFareConfig(rate_per_km=Decimal("1.75"), minimum_fare=Decimal("450"),
                              surge_multiplier=Decimal("1.10")),
        "1A": ClassFareConfig(rate_per_km=Decimal("2.90"), minimum_fare=Decimal("750"),
                              surge_multiplier=Decimal("1.05")),
    }


class FareConfig(BaseModel):
    """Per-class rate table keyed by class code."""

    classes: Dict[str, ClassFareConfig] = Field(default_factory=_default_class_fares)

    @field_validator('classes')
    @classmethod
    def validate_class_codes(cls, v):
        """Normalize keys to canonical class codes."""
        normalized = {}
        for key, entry in v.items():
            normalized[TravelClass.parse(key).code] = entry
        return normalized

    @model_validator(mode='after')
    def validate_tier_ordering(self):
        """Rates and minimums must strictly increase with class tier."""
        present = [cls for cls in TravelClass.ordered() if cls.code in self.classes]
        for lower, higher in zip(present, present[1:]):
            low = self.classes[lower.code]
            high = self.classes[higher.code]
            if high.rate_per_km <= low.rate_per_km:
                raise ValueError(f'Rate for {higher.code} must exceed rate for {lower.code}')
            if high.minimum_fare <= low.minimum_fare:
                raise ValueError(f'Minimum fare for {higher.code} must exceed minimum for {lower.code}')
            # Ordering has to survive surge as well
            if (high.rate_per_km * high.surge_multiplier <= low.rate_per_km * low.surge_multiplier
                    or high.minimum_fare * high.surge_multiplier <= low.minimum_fare * low.surge_multiplier):
                raise ValueError(f'Surged fares for {higher.code} must exceed surged fares for {lower.code}')
        return self

    def get(self, travel_class: TravelClass) -> Optional[ClassFareConfig]:
        """Get rate table entry for a class."""
        return self.classes.get(travel_class.code)


class PopularRoute(BaseModel):
    """A station-name pair that attracts surge pricing in either direction."""

    origin: str
    destination: str

    @field_validator('origin', 'destination')
    @classmethod
    def validate_name(cls, v):
        """Validate the name fragment is not empty."""
        if not v or not v.strip():
            raise ValueError('Popular route station names cannot be empty')
        return v.strip().lower()


def default_popular_routes() -> List[PopularRoute]:
    # TODO: confirm with product whether this list is final business policy
    return [
        PopularRoute(origin="delhi", destination="mumbai"),
        PopularRoute(origin="bangalore", destination="chennai"),
        PopularRoute(origin="kolkata", destination="delhi"),
    ]


class SpeedProfile(BaseModel):
    """Average speed for trains whose name contains one of the keywords."""

    keywords: List[str] = Field(..., min_length=1)
    average_speed_kmh: float = Field(..., gt=0)

    @field_validator('keywords')
    @classmethod
    def validate_keywords(cls, v):
        """Keywords are matched lowercase and cannot be blank."""
        cleaned = [keyword.strip().lower() for keyword in v]
        if not all(cleaned):
            raise ValueError('Speed profile keywords cannot be empty')
        return cleaned


def train_type_speed_profiles() -> List[SpeedProfile]:
    """Premium and local train speeds by name, as used for Indian Railways services."""
    return [
        SpeedProfile(keywords=["rajdhani", "shatabdi", "vande bharat", "duronto"], average_speed_kmh=65.0),
        SpeedProfile(keywords=["passenger", "local"], average_speed_kmh=45.0),
    ]


class DistanceConfig(BaseModel):
    """Constants for the time-based distance model."""

    average_speed_kmh: float = Field(default=50.0, gt=0, description="Assumed average train speed")
    speed_profiles: List[SpeedProfile] = Field(
        default_factory=list, description="Per train type speeds, first match wins"
    )
    minimum_km: int = Field(default=50, ge=1, description="Distance floor for short hops")
    maximum_km: int = Field(default=2500, ge=1, description="Distance ceiling")
    fallback_km: int = Field(default=1200, ge=1, description="Distance used when schedule data is unusable")

    @model_validator(mode='after')
    def validate_bounds(self):
        """Validate the distance bounds are consistent."""
        if self.minimum_km > self.maximum_km:
            raise ValueError('minimum_km cannot exceed maximum_km')
        return self

    def speed_for(self, train_name: Optional[str]) -> float:
        """
        Get the average speed for a train.

        Args:
            train_name: Train display name (None when unknown)

        Returns:
            Speed of the first profile whose keyword appears in the name,
            otherwise average_speed_kmh
        """
        name = (train_name or "").lower()
        for profile in self.speed_profiles:
            if any(keyword in name for keyword in profile.keywords):
                return profile.average_speed_kmh
        return self.average_speed_kmh


class ScheduleFallbackConfig(BaseModel):
    """Placeholder timings shown when a route cannot be evaluated."""

    departure_time: str = "06:00"
    arrival_time: str = "18:30"
    duration: str = "12h 30m"

    @field_validator('departure_time', 'arrival_time')
    @classmethod
    def validate_time(cls, v):
        """Validate HH:MM format."""
        parts = v.split(":")
        if len(parts) != 2 or not all(part.isdigit() for part in parts):
            raise ValueError('Time must be in HH:MM format')
        hours, minutes = int(parts[0]), int(parts[1])
        if not (0 <= hours < 24 and 0 <= minutes < 60):
            raise ValueError('Time must be in HH:MM format')
        return f"{hours:02d}:{minutes:02d}"

    @field_validator('duration')
    @classmethod
    def validate_duration(cls, v):
        """Validate the duration uses the engine's display format."""
        if parse_duration(v) is None:
            raise ValueError('Duration must look like "12h 30m"')
        return v

    @property
    def duration_minutes(self) -> Optional[int]:
        """Fallback duration in minutes."""
        return parse_duration(self.duration)


class BookingConfig(BaseModel):
    """Charges applied when a booking total is computed."""

    convenience_fee: Decimal = Field(default=Decimal("20.00"), ge=0, description="Fixed fee per booking")
    max_passengers: int = Field(default=6, ge=1, le=6)
    currency_symbol: str = __currency_symbol__


class LoggingConfig(BaseModel):
    """Logging settings for the command-line entry point."""

    level: str = "WARNING"
    log_to_file: bool = True

    @field_validator('level')
    @classmethod
    def validate_level(cls, v):
        """Validate log level name."""
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f'Unknown log level: {v}')
        return level


class EngineConfig(BaseModel):
    """Main configuration data model."""

    fares: FareConfig = Field(default_factory=FareConfig)
    popular_routes: List[PopularRoute] = Field(default_factory=default_popular_routes)
    distance: DistanceConfig = Field(default_factory=DistanceConfig)
    schedule_fallback: ScheduleFallbackConfig = Field(default_factory=ScheduleFallbackConfig)
    booking: BookingConfig = Field(default_factory=BookingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    config_version: str = __config_version__


class ConfigManager:
    """
    Manages engine configuration with file persistence.

    Handles loading configuration from JSON files, creating default
    configurations, and saving changes back to disk.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file. If None, uses the platform default
        """
        if config_path is None:
            self.config_path = self.get_default_config_path()
        else:
            self.config_path = Path(config_path)
        self.config: Optional[EngineConfig] = None

        logger.debug(f"ConfigManager initialized with path: {self.config_path}")

    @staticmethod
    def get_default_config_path() -> Path:
        """
        Get the default configuration file path.

        On Windows, uses AppData/Roaming/Railfare/config.json
        On Linux, uses XDG_CONFIG_HOME/Railfare/config.json or ~/.config/Railfare/config.json

        Returns:
            Path: Default configuration file path
        """
        if os.name == "nt":  # Windows
            appdata = os.environ.get("APPDATA")
            if appdata:
                return Path(appdata) / "Railfare" / "config.json"
        else:
            xdg_config = os.environ.get("XDG_CONFIG_HOME")
            if xdg_config:
                return Path(xdg_config) / "Railfare" / "config.json"
            return Path.home() / ".config" / "Railfare" / "config.json"

        # Fallback to current directory for development
        return Path("config.json")

    def load_config(self) -> EngineConfig:
        """
        Load configuration from file.

        If the configuration file doesn't exist, creates a default one.

        Returns:
            EngineConfig: The loaded configuration

        Raises:
            ConfigurationError: If the configuration file is invalid
        """
        logger.debug(f"Loading config from: {self.config_path}")

        if not self.config_path.exists():
            logger.info(f"Config file doesn't exist, creating default at: {self.config_path}")
            self.create_default_config()

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self.config = EngineConfig(**data)
            logger.debug(f"Successfully loaded config from: {self.config_path}")
            return self.config
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in config file: {e}")
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")
        except OSError as e:
            raise ConfigurationError(f"Failed to load config: {e}")

    def save_config(self, config: EngineConfig) -> bool:
        """
        Save configuration to file.

        Args:
            config: Configuration data to save

        Returns:
            bool: True if saved successfully, False otherwise
        """
        logger.info(f"Saving config to: {self.config_path}")

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                json.dump(config.model_dump(mode="json"), f, indent=2, ensure_ascii=False)
            self.config = config
            return True
        except OSError as e:
            logger.error(f"Failed to save config to {self.config_path}: {e}")
            return False

    def create_default_config(self) -> None:
        """Create a default configuration file."""
        self.save_config(EngineConfig())

    def update_convenience_fee(self, fee: Decimal) -> None:
        """
        Update the convenience fee and save to file.

        Args:
            fee: New fee amount (must not be negative)
        """
        if self.config is None:
            self.load_config()

        if self.config and fee >= 0:
            self.config.booking.convenience_fee = Decimal(str(fee))
            self.save_config(self.config)

    def update_popular_routes(self, routes: List[tuple[str, str]]) -> None:
        """
        Replace the popular-route allow-list and save to file.

        Args:
            routes: (origin, destination) name fragments
        """
        if self.config is None:
            self.load_config()

        if self.config:
            self.config.popular_routes = [
                PopularRoute(origin=origin, destination=destination)
                for origin, destination in routes
            ]
            self.save_config(self.config)

    def get_config_summary(self) -> dict:
        """
        Get a summary of current configuration for display.

        Returns:
            dict: Configuration summary
        """
        if self.config is None:
            self.load_config()

        if not self.config:
            return {"error": "Configuration not loaded"}

        return {
            "engine_version": __version__,
            "config_version": self.config.config_version,
            "classes": sorted(self.config.fares.classes.keys()),
            "popular_routes": [
                f"{route.origin} <-> {route.destination}" for route in self.config.popular_routes
            ],
            "average_speed": f"{self.config.distance.average_speed_kmh:g} km/h",
            "fallback_distance": f"{self.config.distance.fallback_km} km",
            "convenience_fee": f"{self.config.booking.currency_symbol}{self.config.booking.convenience_fee}",
        }
