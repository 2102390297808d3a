"""Run the nightly absence sweep once, outside the scheduler.

    python scripts/run_sweep.py                 # today, in the configured timezone
    python scripts/run_sweep.py --date 2025-10-20
"""

from __future__ import annotations

import argparse
import importlib
import json
from datetime import datetime, time

from dotenv import load_dotenv

from hostel_system.common.datetime_utils import parse_iso_date
from hostel_system.common.log import configure_logging
from hostel_system.config import get_settings_module
from hostel_system.container import build_container


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Mark every student with no attendance record as Absent.")
    parser.add_argument("--date", help="Day to sweep (YYYY-MM-DD). Defaults to today.")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(db_config=dict(settings.DB_CONFIG), settings=settings)
    if args.date:
        as_of = datetime.combine(parse_iso_date(args.date), time(23, 59))
    else:
        as_of = container.clock.now()

    report = container.absence_sweeper.run_nightly_sweep(as_of)
    print(json.dumps(report.to_dict()))
    return 1 if report.failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
