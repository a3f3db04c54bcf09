"""
Command-line entry point for the railfare engine.
Author: Oliver Ernster

This module sets up logging, loads the configuration, builds one engine
instance and prints the route record and booking total for a train between
two stations.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from .core.exceptions import FareEngineError
from .core.models.travel_class import TravelClass
from .core.services.json_schedule_repository import JsonScheduleRepository
from .core.services.service_factory import ServiceFactory
from .managers.config_manager import ConfigManager, EngineConfig
from .utils.helpers import format_money
from .version import get_version_string, get_full_version_info


def setup_logging(level: str = "WARNING", log_to_file: bool = True):
    """Setup logging with optional file output and console output."""
    handlers = [logging.StreamHandler()]

    if log_to_file:
        if sys.platform == "darwin":  # macOS
            log_dir = Path.home() / "Library" / "Logs" / "Railfare"
        elif sys.platform == "win32":  # Windows
            log_dir = Path(os.environ.get("APPDATA", Path.home())) / "Railfare" / "logs"
        else:  # Linux and others
            log_dir = Path.home() / ".local" / "share" / "railfare" / "logs"

        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(log_dir / "railfare.log")))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Quote a train route and booking total.")
    parser.add_argument("--network", help="JSON network file (defaults to the bundled sample)")
    parser.add_argument("--config", help="Engine configuration file")
    parser.add_argument("--train", type=int, help="Train id")
    parser.add_argument("--from", dest="origin", help="Origin station name")
    parser.add_argument("--to", dest="destination", help="Destination station name")
    parser.add_argument("--class", dest="travel_class", default="3A",
                        help="Travel class, e.g. SL, 3A, 'AC 2 Tier'")
    parser.add_argument("--passengers", type=int, default=1, help="Number of passengers")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    parser.add_argument("--version", action="version", version=get_version_string())
    parser.add_argument("--about", action="store_true", help="Show engine details and exit")

    args = parser.parse_args(argv)
    if not args.about and (args.train is None or not args.origin or not args.destination):
        parser.error("--train, --from and --to are required")
    return args


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    if args.about:
        print(get_full_version_info().strip())
        return 0

    config = ConfigManager(args.config).load_config() if args.config else EngineConfig()
    setup_logging(args.log_level or config.logging.level,
                  config.logging.log_to_file if args.config else False)
    logger = logging.getLogger(__name__)

    factory = ServiceFactory(config, schedule_repository=JsonScheduleRepository(args.network))
    service = factory.get_route_quote_service()
    symbol = config.booking.currency_symbol

    try:
        travel_class = TravelClass.parse(args.travel_class)
        record = service.quote_route_by_name(args.train, args.origin, args.destination)
        quote = service.calculator.quote(record, travel_class, args.passengers)
    except (FareEngineError, ValueError) as e:
        logger.error(f"Quote failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Train {record.train_id}: {args.origin} {record.departure_time} -> "
          f"{args.destination} {record.arrival_time} ({record.duration}, {record.halts} halts)")
    print(f"Distance: {record.get_distance_display()}"
          + ("  [estimated]" if record.is_fallback else ""))
    for fare in record.fare_quotes():
        print(f"  {fare.travel_class.get_label():<22} {format_money(fare.amount, symbol)}")
    print(f"{quote.passenger_count} x {travel_class.code} + fee "
          f"{format_money(quote.convenience_fee, symbol)} = {format_money(quote.total_amount, symbol)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
