"""CLI entry point for the SnowHound forecast engine."""

import argparse
import asyncio
import json
import logging
from contextlib import closing

import uvicorn

from snowhound.analytics.confidence import compute_all_confidences, overall_confidence
from snowhound.analytics.depth import SnowDepthTracker
from snowhound.analytics.quality import compute_all_quality
from snowhound.config.defaults import MAX_SELECTED_MODELS, WEATHER_MODELS
from snowhound.config.loader import api_key_status, load_config
from snowhound.config.schema import AppConfig
from snowhound.errors import RateLimited, ValidationError
from snowhound.ingest.aggregator import ForecastAggregator
from snowhound.ingest.geocoder import LocationService
from snowhound.models.location import Location
from snowhound.reporting.export import export_csv, export_json, forecast_card
from snowhound.reporting.formatters import (
    format_card,
    format_confidence,
    format_depth,
    format_locations,
    format_models,
    format_quality,
    format_series,
)
from snowhound.server import create_app
from snowhound.storage.cache_repo import purge_expired
from snowhound.storage.database import open_database
from snowhound.storage.favorites_repo import FavoritesRepo
from snowhound.storage.kv_store import SqliteStore

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "snowhound.yaml"
DEFAULT_MODELS = "gfs,ecmwf"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="snowhound",
        description="Multi-model snowfall forecast comparison",
    )
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="Config YAML path")
    parser.add_argument("--db", default=None, help="SQLite DB path (overrides config)")

    sub = parser.add_subparsers(dest="command")

    # models
    sub.add_parser("models", help="List forecast models")

    # search
    search_p = sub.add_parser("search", help="Search locations by name")
    search_p.add_argument("query")

    # forecast
    fc_p = sub.add_parser("forecast", help="Compare model forecasts for a location")
    fc_p.add_argument("location", help="Location id, 'lat,lon' or a place name")
    fc_p.add_argument(
        "--models", default=DEFAULT_MODELS, help="Comma-separated model ids"
    )
    fc_p.add_argument("--export", choices=["json", "csv"], help="Print an export instead")
    fc_p.add_argument("--card", action="store_true", help="Print a shareable summary")
    fc_p.add_argument("--mock", action="store_true", help="Force mock data")

    # favorites
    fav_p = sub.add_parser("favorites", help="Manage favorite locations")
    fav_sub = fav_p.add_subparsers(dest="favorites_command")
    fav_sub.add_parser("list", help="List favorites")
    fav_add = fav_sub.add_parser("add", help="Add a location to favorites")
    fav_add.add_argument("location", help="Location id, 'lat,lon' or a place name")
    fav_rm = fav_sub.add_parser("remove", help="Remove a favorite by id")
    fav_rm.add_argument("location_id")

    # serve
    serve_p = sub.add_parser("serve", help="Run the caching backend")
    serve_p.add_argument("--host", default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=3001)

    # config show
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    if args.db:
        config = config.model_copy(
            update={"cache": config.cache.model_copy(update={"db_path": args.db})}
        )

    if args.command == "models":
        print(format_models(WEATHER_MODELS))
        return 0
    elif args.command == "search":
        return _cmd_search(config, args)
    elif args.command == "forecast":
        return _cmd_forecast(config, args)
    elif args.command == "favorites":
        return _cmd_favorites(config, args)
    elif args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _print_rate_limited(e: RateLimited) -> None:
    wait = f" Try again in {e.retry_after:.0f}s." if e.retry_after else ""
    print(f"Rate limited: {e}.{wait}")


def _cmd_search(config: AppConfig, args) -> int:
    service = LocationService(config)
    try:
        locations = asyncio.run(service.search(args.query))
    except RateLimited as e:
        _print_rate_limited(e)
        return 3
    print(format_locations(locations))
    return 0


async def _resolve_location(service: LocationService, text: str) -> Location | None:
    known = service.find(text)
    if known is not None:
        return known
    if "," in text:
        lat_s, lon_s = text.split(",", 1)
        try:
            return service.by_coordinates(float(lat_s), float(lon_s))
        except ValueError:
            pass
    matches = await service.search(text)
    return matches[0] if matches else None


def _cmd_forecast(config: AppConfig, args) -> int:
    if args.mock:
        config = config.model_copy(
            update={"features": config.features.model_copy(update={"enable_mock_data": True})}
        )
    model_ids = [m.strip() for m in args.models.split(",") if m.strip()]
    if len(model_ids) > MAX_SELECTED_MODELS:
        print(f"Error: select at most {MAX_SELECTED_MODELS} models")
        return 2

    async def _run():
        location = await _resolve_location(LocationService(config), args.location)
        if location is None:
            return None, []
        forecasts = await ForecastAggregator(config).get_multiple_forecasts(
            location, model_ids
        )
        return location, forecasts

    try:
        location, forecasts = asyncio.run(_run())
    except ValidationError as e:
        print(f"Error: {e}")
        return 2
    except RateLimited as e:
        _print_rate_limited(e)
        return 3

    if location is None:
        print(f"Location not found: {args.location}")
        return 1

    if args.export == "json":
        print(export_json(location, forecasts))
        return 0
    if args.export == "csv":
        print(export_csv(forecasts), end="")
        return 0
    if args.card:
        print(format_card(forecast_card(location, forecasts, model_ids)))
        return 0

    print(f"{location.name} [{location.lat:.4f}, {location.lon:.4f}]")
    for series in forecasts:
        print(format_series(series))

    confidences = compute_all_confidences(forecasts)
    print(format_confidence(confidences, overall_confidence(confidences)))
    print(format_quality(compute_all_quality(forecasts)))

    with closing(open_database(config.cache.db_path)) as conn:
        tracker = SnowDepthTracker(SqliteStore(conn), max_history=config.depth.max_history)
        entries = tracker.update_depth(location, forecasts)
        print(format_depth(entries, tracker.season_total(location)))
    return 0


def _cmd_favorites(config: AppConfig, args) -> int:
    if args.favorites_command is None:
        print("Use: favorites list|add|remove")
        return 1

    location = None
    if args.favorites_command == "add":
        try:
            location = asyncio.run(_resolve_location(LocationService(config), args.location))
        except RateLimited as e:
            _print_rate_limited(e)
            return 3
        if location is None:
            print(f"Location not found: {args.location}")
            return 1

    with closing(open_database(config.cache.db_path)) as conn:
        repo = FavoritesRepo(SqliteStore(conn))
        if args.favorites_command == "add":
            if repo.add_favorite(location):
                print(f"Added {location.id} ({location.name})")
            else:
                print(f"{location.id} is already a favorite")
        elif args.favorites_command == "remove":
            if not repo.is_favorite(args.location_id):
                print(f"Not a favorite: {args.location_id}")
                return 1
            repo.remove_favorite(args.location_id)
            print(f"Removed {args.location_id}")
        else:
            print(format_locations(repo.get_favorites()))
    return 0


def _cmd_serve(config: AppConfig, args) -> int:
    with closing(open_database(config.cache.db_path)) as conn:
        removed = purge_expired(conn)
        if removed:
            logger.info("Purged %d expired cache entries", removed)
        uvicorn.run(create_app(config, conn), host=args.host, port=args.port)
    return 0


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        data = config.model_dump()
        data["keys"] = {k: "***" if v else "" for k, v in data["keys"].items()}
        print(json.dumps(data, indent=2))
        for provider, ok in api_key_status(config).items():
            print(f"{provider}: {'configured' if ok else 'missing key'}")
        return 0
    print("Use: config show")
    return 1
