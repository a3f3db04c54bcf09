"""
Engine exceptions.

Schedule and fare components raise these directly; the consistency cache
absorbs the schedule errors into fallback data and lets configuration
errors propagate.
"""


class FareEngineError(Exception):
    """Base class for all engine errors."""

    pass


class NotFoundError(FareEngineError):
    """Raised when a station is not present in a train's route."""

    def __init__(self, station_id, train_id=None):
        self.station_id = station_id
        self.train_id = train_id
        if train_id is None:
            message = f"Station {station_id} not found in route"
        else:
            message = f"Station {station_id} not found in route of train {train_id}"
        super().__init__(message)


class InvalidRouteError(FareEngineError):
    """Raised when a destination is not reachable forward from an origin."""

    pass


class ConfigurationError(FareEngineError):
    """Exception raised for configuration-related errors."""

    pass


class SeatUnavailableError(FareEngineError):
    """Raised when a class does not have enough seats for a reservation."""

    pass


class BookingNotFoundError(FareEngineError):
    """Raised when a booking reference is unknown to the ledger."""

    pass
