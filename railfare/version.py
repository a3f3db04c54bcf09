"""
Version information for the railfare engine.

Centralized version management for the fare and schedule engine.
"""

__version__ = "1.2.0"
__app_name__ = "railfare"
__app_display_name__ = "railfare - Fare & Schedule Consistency Engine"
__description__ = "Schedule-derived distance, duration and dynamic fares for train reservations"

__features__ = [
    "Day-aware elapsed time between schedule stops",
    "Time-based distance estimation with deterministic fallback",
    "Per-class fares with popular-route surge pricing",
    "Single cached record per train and station pair",
    "Booking totals threaded unchanged through payment and invoice",
]

# Configuration file format version
__config_version__ = "1.0.0"
__currency_code__ = "INR"
__currency_symbol__ = "₹"


def get_version_string() -> str:
    """Get formatted version string."""
    return f"{__app_name__} v{__version__}"


def get_full_version_info() -> str:
    """Get comprehensive version information."""
    features_list = "\n".join(f"  - {feature}" for feature in __features__)
    return f"""
{__app_display_name__}
Version: {__version__}
Config format: v{__config_version__}
Currency: {__currency_code__}
Features:
{features_list}
"""
