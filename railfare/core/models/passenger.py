"""
Passenger entry model.

Booking-time passenger details collected by the booking screen. The engine
only consumes the passenger count; validation lives here so every caller
enforces the same rules.
"""

from typing import List
from pydantic import BaseModel, Field, field_validator

MIN_PASSENGER_AGE = 1
MAX_PASSENGER_AGE = 120
MAX_PASSENGERS_PER_BOOKING = 6

VALID_GENDERS = ("Male", "Female", "Other")


class PassengerEntry(BaseModel):
    """Validated passenger details for one traveller."""

    model_config = {"frozen": True}

    name: str = Field(..., description="Passenger full name")
    age: int = Field(..., ge=MIN_PASSENGER_AGE, le=MAX_PASSENGER_AGE, description="Age in years")
    gender: str = Field(..., description="Male, Female or Other")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate passenger name is not empty."""
        if not v or not v.strip():
            raise ValueError('Please enter passenger name')
        return v.strip()

    @field_validator('gender')
    @classmethod
    def validate_gender(cls, v):
        """Normalize gender to one of the accepted values."""
        cleaned = (v or "").strip().lower()
        for gender in VALID_GENDERS:
            if gender.lower() == cleaned:
                return gender
        raise ValueError('Please select gender')


def validate_passenger_count(passengers: List[PassengerEntry]) -> int:
    """
    Check the number of passengers on a booking.

    Args:
        passengers: Passengers on the booking

    Returns:
        Number of passengers

    Raises:
        ValueError: If there are no passengers or more than the booking limit
    """
    count = len(passengers)
    if count < 1:
        raise ValueError("At least one passenger is required")
    if count > MAX_PASSENGERS_PER_BOOKING:
        raise ValueError(
            f"Maximum {MAX_PASSENGERS_PER_BOOKING} passengers allowed per booking"
        )
    return count
