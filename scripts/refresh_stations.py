"""Force a full re-download of the station cache."""

import argparse
import logging
from pathlib import Path

from eccc_climate.client import ClimateClient
from eccc_climate.config import ClimateConfig

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")


def main():
    parser = argparse.ArgumentParser(description="Refresh the cached station list")
    parser.add_argument("--cache-dir", default="data", help="Cache directory (default: data/)")
    args = parser.parse_args()

    client = ClimateClient(ClimateConfig(cache_dir=Path(args.cache_dir)))
    stations = client.get_all_stations(refresh=True)
    print(f"Cached {len(stations)} stations.")


if __name__ == "__main__":
    main()
