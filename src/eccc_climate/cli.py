"""CLI entry point for eccc-climate."""

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="eccc-climate",
        description="Search ECCC climate stations and download observations and normals",
    )
    parser.add_argument("--cache-dir", help="Directory for the station cache file")
    parser.add_argument("--output", "-o", help="Write CSV here instead of stdout")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only log warnings")
    subparsers = parser.add_subparsers(dest="command")

    stations_parser = subparsers.add_parser("stations", help="Print the full station list")
    stations_parser.add_argument("--refresh", action="store_true", help="Re-download even if the cache is fresh")
    stations_parser.add_argument("--max-age", type=float, help="Maximum cache age in days")

    search_parser = subparsers.add_parser("search", help="Search stations")
    search_parser.add_argument("--name")
    search_parser.add_argument("--climate-id", action="append")
    search_parser.add_argument("--station-id", type=int, action="append")
    search_parser.add_argument("--prov")
    search_parser.add_argument("--interval", choices=["hour", "day", "month"])
    search_parser.add_argument("--has-normals", action=argparse.BooleanOptionalAction, default=None)
    search_parser.add_argument("--coords", type=float, nargs=2, metavar=("LAT", "LON"))
    search_parser.add_argument("--dist", type=float, help="Radius in km around --coords")

    obs_parser = subparsers.add_parser("observations", help="Download observations")
    selector = obs_parser.add_mutually_exclusive_group(required=True)
    selector.add_argument("--station-id", type=int, action="append")
    selector.add_argument("--climate-id", action="append")
    selector.add_argument("--name", action="append")
    obs_parser.add_argument("--start", required=True, help="Start date (YYYY-MM-DD)")
    obs_parser.add_argument("--end", required=True, help="End date (YYYY-MM-DD)")
    obs_parser.add_argument("--interval", default="day", choices=["hour", "day", "month"])
    obs_parser.add_argument("--trim", action="store_true", help="Trim to the exact date range")

    normals_parser = subparsers.add_parser("normals", help="Download climate normals")
    normals_parser.add_argument("climate_id")
    normals_parser.add_argument("--period", default="current")

    variables_parser = subparsers.add_parser("variables", help="List expected columns for an interval")
    variables_parser.add_argument("interval", choices=["hour", "day", "month"])

    subparsers.add_parser("serve", help="Start the FastAPI server")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    if args.command == "serve":
        return _serve()
    if args.command == "variables":
        from eccc_climate.variables import list_variables
        print("\n".join(list_variables(args.interval)))
        return 0

    from eccc_climate.client import ClimateClient
    from eccc_climate.config import ClimateConfig
    from eccc_climate.errors import ClimateError

    config = ClimateConfig.from_env()
    if args.cache_dir:
        config.cache_dir = Path(args.cache_dir)
    client = ClimateClient(config)

    try:
        df = _run(client, args)
    except ClimateError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _write(df, args.output)
    return 0


def _run(client, args: argparse.Namespace) -> pd.DataFrame:
    if args.command == "stations":
        return client.get_all_stations(refresh=args.refresh, max_age=args.max_age)

    if args.command == "search":
        return client.search_stations(
            name=args.name,
            climate_id=args.climate_id,
            station_id=args.station_id,
            prov=args.prov,
            interval=args.interval,
            has_normals=args.has_normals,
            coords=tuple(args.coords) if args.coords else None,
            dist=args.dist,
        )

    if args.command == "observations":
        result = client.download_observations(
            station_ids=args.station_id,
            climate_ids=args.climate_id,
            station_names=args.name,
            start=args.start,
            end=args.end,
            interval=args.interval,
            trim=args.trim,
            verbose=not args.quiet,
        )
        for err in result.errors:
            print(f"Warning: {err}", file=sys.stderr)
        return result.to_frame()

    if args.command == "normals":
        return client.download_normals(args.climate_id, args.period).to_frame()

    raise ValueError(f"Unknown command: {args.command}")


def _write(df: pd.DataFrame, output: str | None) -> None:
    if output:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, index=False)
        print(f"Wrote {len(df):,} rows to {path}", file=sys.stderr)
    else:
        df.to_csv(sys.stdout, index=False)


def _serve() -> int:
    import os
    try:
        import uvicorn
    except ImportError as e:
        print(f"Missing dependency: {e}", file=sys.stderr)
        return 1

    port = int(os.environ.get("PORT", "8000"))
    uvicorn.run("eccc_climate.api.app:create_app", factory=True, host="0.0.0.0", port=port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
