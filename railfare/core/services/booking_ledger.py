"""
Booking Ledger

Stores booking quotes by reference so payment confirmation and invoice
rendering echo the amount fixed at booking time.
"""

import itertools
import logging
import threading
from decimal import Decimal
from typing import Dict, List

from ..exceptions import BookingNotFoundError
from ..models.booking import BookingQuote, Invoice


class BookingLedger:
    """In-memory record of priced bookings."""

    def __init__(self, reference_prefix: str = "PNR"):
        """
        Initialize the ledger.

        Args:
            reference_prefix: Prefix for generated booking references
        """
        self.reference_prefix = reference_prefix
        self._quotes: Dict[str, BookingQuote] = {}
        self._sequence = itertools.count(1)
        self._lock = threading.Lock()
        self.logger = logging.getLogger(__name__)

    def record(self, quote: BookingQuote) -> str:
        """
        Store a booking quote.

        Args:
            quote: Priced booking

        Returns:
            New booking reference
        """
        with self._lock:
            reference = f"{self.reference_prefix}{next(self._sequence):08d}"
            self._quotes[reference] = quote
        self.logger.info(f"Recorded booking {reference} for {quote.total_amount}")
        return reference

    def get_quote(self, reference: str) -> BookingQuote:
        """
        Get the stored quote for a booking.

        Raises:
            BookingNotFoundError: If the reference is unknown
        """
        with self._lock:
            quote = self._quotes.get(reference)
        if quote is None:
            raise BookingNotFoundError(f"Unknown booking reference: {reference}")
        return quote

    def payment_amount(self, reference: str) -> Decimal:
        """Amount to charge at payment, exactly as fixed at booking time."""
        return self.get_quote(reference).total_amount

    def payment_amount_in_paise(self, reference: str) -> int:
        """Amount to charge in minor currency units."""
        return self.get_quote(reference).amount_in_paise

    def invoice(self, reference: str) -> Invoice:
        """
        Build the invoice for a booking from its stored quote.

        Args:
            reference: Booking reference

        Returns:
            Invoice carrying the booking-time total verbatim
        """
        quote = self.get_quote(reference)
        record = quote.record
        return Invoice(
            booking_reference=reference,
            travel_class=quote.travel_class,
            passenger_count=quote.passenger_count,
            distance_km=record.distance_km,
            departure_time=record.departure_time,
            arrival_time=record.arrival_time,
            duration=record.duration,
            fare_per_passenger=quote.fare_per_passenger,
            convenience_fee=quote.convenience_fee,
            total_amount=quote.total_amount,
        )

    def references(self) -> List[str]:
        """All booking references in creation order."""
        with self._lock:
            return list(self._quotes.keys())
