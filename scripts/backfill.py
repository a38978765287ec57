"""Bulk observation download for a list of climate IDs.

Writes one parquet file per station under <output-dir>/<interval>/.
"""

import argparse
import logging
import sys
from pathlib import Path

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Backfill station observations")
    parser.add_argument(
        "--climate-ids",
        required=True,
        help='Comma-separated climate IDs, or "prov:XX" for every station in a province',
    )
    parser.add_argument("--start", required=True, help="Start date (YYYY-MM-DD)")
    parser.add_argument("--end", required=True, help="End date (YYYY-MM-DD)")
    parser.add_argument("--interval", default="day", choices=["hour", "day", "month"])
    parser.add_argument("--output-dir", default="data", help="Output directory (default: data/)")
    args = parser.parse_args()

    from eccc_climate.client import ClimateClient
    from eccc_climate.config import ClimateConfig
    from eccc_climate.errors import ClimateError

    output_dir = Path(args.output_dir)
    client = ClimateClient(ClimateConfig(cache_dir=output_dir))

    # Determine which stations to backfill
    if args.climate_ids.lower().startswith("prov:"):
        found = client.search_stations(prov=args.climate_ids[5:], interval=args.interval)
        climate_ids = found["climate_id"].dropna().tolist()
    else:
        climate_ids = [cid.strip() for cid in args.climate_ids.split(",") if cid.strip()]

    logger.info("Backfilling %d station(s)", len(climate_ids))

    target = output_dir / args.interval
    target.mkdir(parents=True, exist_ok=True)
    failures = 0

    for climate_id in climate_ids:
        logger.info("--- %s ---", climate_id)
        try:
            result = client.download_observations(
                climate_ids=climate_id,
                start=args.start,
                end=args.end,
                interval=args.interval,
                trim=True,
                verbose=False,
            )
        except ClimateError as e:
            failures += 1
            logger.error("Skipping %s: %s", climate_id, e)
            continue
        if result.errors:
            failures += 1
            logger.warning("Errors: %s", [str(e) for e in result.errors])
        if not result.rows:
            continue

        path = target / f"{climate_id}_{args.start}_{args.end}.parquet"
        result.to_frame().to_parquet(path, index=False)
        logger.info("Wrote %d rows to %s", len(result.rows), path)

    logger.info("Done.")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
