"""
Run competitor discovery from CLI.
"""

from __future__ import annotations

import argparse
import json
import logging

from competitor_intel.errors import CompetitorIntelError
from competitor_intel.services.competitor_intel_service import CompetitorIntelService


def main() -> int:
    parser = argparse.ArgumentParser(description="Search running ads and rank likely competitors.")
    parser.add_argument("--keyword", required=True, help="Product keyword to search for.")
    parser.add_argument(
        "--country",
        dest="country",
        default=None,
        help="Optional market code (CO, MX, ...). Defaults to DEFAULT_MARKET.",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    service = CompetitorIntelService()
    try:
        result = service.search(keyword=args.keyword, country=args.country)
    except CompetitorIntelError as exc:
        print(json.dumps({"error": str(exc)}, indent=2))
        return 1

    payload = {
        "keyword": result.keyword,
        "country": result.country,
        "total_found": result.total_found,
        "filtered_count": result.filtered_count,
        "ads": [
            {
                "id": item.candidate.id,
                "advertiser_name": item.candidate.advertiser_name,
                "landing_url": item.candidate.landing_url,
                "domain": item.domain,
                "cta_text": item.candidate.cta_text,
                "dropshipping_score": item.score,
            }
            for item in result.ads
        ],
    }
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
