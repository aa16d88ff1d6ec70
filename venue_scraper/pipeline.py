from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from . import config
from .models import AggregateResult
from .sources.multi_source import run
from .sources.profiles import DEFAULT_SITE_URLS

logger = logging.getLogger(__name__)


def write_result(result: AggregateResult, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(result.to_public(), ensure_ascii=False, indent=2), encoding="utf-8")


def summary_line(result: AggregateResult, sites_run: int) -> str:
    # grep '[pipeline][summary]' /tmp/pipeline.log
    venues = sorted({e.venue for e in result.events})
    return (
        f"[pipeline][summary]"
        f" sites_run={sites_run}"
        f" events={result.count}"
        f" failures={len(result.failures)}"
        f" venues={','.join(venues) or '-'}"
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Scrape venue listing pages into one event list.")
    parser.add_argument("--url", action="append", default=None, help="Listing URL (repeatable). Default: all known venues.")
    parser.add_argument("--out", type=Path, default=None, help="Write the result as JSON to this path.")
    parser.add_argument("--js", action="store_true", help="Render every page in a headless browser.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s %(message)s")

    urls = args.url or config.SITE_URLS or list(DEFAULT_SITE_URLS)

    logger.info("PIPELINE: start")
    result = run(urls, force_js=args.js)

    for f in result.failures:
        logger.warning("[pipeline] FAILED url=%s | %s", f.url, f.error)

    if args.out:
        write_result(result, args.out)
        logger.info("[pipeline] wrote %d events to %s", result.count, args.out)
    else:
        print(json.dumps(result.to_public(), ensure_ascii=False, indent=2))

    logger.info(summary_line(result, len(urls)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
