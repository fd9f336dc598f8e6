"""Command line entrypoint for the map workout log."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from maplog.core.config import AppConfig
from maplog.core.errors import StorageUnreadable
from maplog.workout.model import Coords, derived_metric
from maplog.workout.serialization import load_workouts
from maplog.workout.storage import FileStorage, default_data_dir


def _parse_origin(raw: str) -> Coords:
    try:
        lat_txt, lon_txt = raw.split(",")
        return (float(lat_txt), float(lon_txt))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"expected LAT,LON (for example 51.5,-0.1), got '{raw}'"
        ) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Map-based running and cycling log")
    parser.add_argument(
        "--web",
        action="store_true",
        help="Launch the web UI (NiceGUI) with the map and workout form",
    )
    parser.add_argument("--web-host", default="127.0.0.1", help="Host bind for --web")
    parser.add_argument("--web-port", type=int, default=8088, help="Port for --web")
    parser.add_argument(
        "--origin",
        type=_parse_origin,
        default=None,
        help="Start the map at LAT,LON instead of asking the browser for a position",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help=f"Directory holding stored workouts (default: {default_data_dir()})",
    )
    parser.add_argument("--zoom", type=int, default=13, help="Map zoom level")
    parser.add_argument(
        "--geo-timeout",
        type=float,
        default=10.0,
        help="Seconds to wait for the browser position before giving up",
    )
    parser.add_argument("--list", action="store_true", help="Print stored workouts")
    parser.add_argument("--reset", action="store_true", help="Delete stored workouts")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def build_config(args: argparse.Namespace) -> AppConfig:
    return AppConfig(
        map_zoom_level=args.zoom,
        data_dir=args.data_dir or default_data_dir(),
        geolocation_timeout_sec=max(1.0, args.geo_timeout),
    )


def run_list(config: AppConfig) -> int:
    blob = FileStorage(config.data_dir).get_item(config.storage_key)
    if not blob:
        print("No workouts stored")
        return 0
    try:
        workouts = load_workouts(blob)
    except StorageUnreadable as exc:
        print(f"Stored workouts unreadable: {exc}")
        return 1

    for workout in workouts:
        unit = "min/km" if workout.kind == "running" else "km/h"
        print(
            f"{workout.id:<14} {workout.description:<24} "
            f"{workout.distance_km:>6g} km {workout.duration_min:>6g} min "
            f"{derived_metric(workout):>6.1f} {unit}"
        )
    return 0


def run_reset(config: AppConfig) -> int:
    FileStorage(config.data_dir).remove_item(config.storage_key)
    print("Stored workouts cleared")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = build_config(args)

    if args.reset:
        return run_reset(config)
    if args.list:
        return run_list(config)
    if args.web:
        from maplog.ui.web_app import run_web_ui

        return run_web_ui(
            config=config,
            origin=args.origin,
            host=args.web_host,
            port=args.web_port,
        )

    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
