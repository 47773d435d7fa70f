import argparse
import json
import logging

import pandas as pd

from bizval_engine import format_currency
from bizval_service.connectors.csv_listings import CsvListingConnector
from bizval_service.services.valuation import ValuationService


def _business_args(args) -> dict:
    fields = {
        "industry": args.industry,
        "business_name": args.name,
        "revenue": args.revenue,
        "sde": args.sde,
        "ebitda": args.ebitda,
        "cash_flow": args.cash_flow,
        "asking_price": args.asking_price,
        "owner_hours_per_week": args.owner_hours,
        "customer_concentration": args.concentration,
        "year_established": args.year_established,
    }
    return {k: v for k, v in fields.items() if v is not None}


def run_single(args) -> None:
    service = ValuationService()
    result = service.calculate_valuation(_business_args(args), as_of_year=args.as_of_year)
    if args.json:
        print(json.dumps({k: v for k, v in result.items() if k != "report_text"}, indent=2, default=str))
    else:
        print(result["report_text"])


def run_batch(args) -> None:
    connector = CsvListingConnector(args.csv)
    service = ValuationService(connector)

    rows = []
    for record in connector.list_listings():
        listing_id = record["id"]
        try:
            result = service.calculate_valuation(
                {}, source_type="existing_listing", listing_id=listing_id, as_of_year=args.as_of_year
            )
        except ValueError as e:
            print(f"Skipping listing {listing_id}: {e}")
            continue

        valuation = result["valuation_range"]
        mispricing = result["mispricing"] or {}
        rows.append(
            {
                "id": listing_id,
                "name": result["business_name"] or "",
                "industry": result["industry_data"]["industry_name"],
                "low": format_currency(valuation["low"]),
                "mid": format_currency(valuation["mid"]),
                "high": format_currency(valuation["high"]),
                "score": result["deal_quality_score"],
                "grade": result["deal_quality_grade"],
                "pricing": mispricing.get("label", ""),
            }
        )

    if not rows:
        print("No listings could be valued.")
        return
    print(pd.DataFrame(rows).to_string(index=False))


def main():
    parser = argparse.ArgumentParser(description="Value a small business, or every listing in a CSV export.")
    parser.add_argument("--csv", type=str, default=None, help="Listings CSV to value in batch")
    parser.add_argument("--industry", "-i", type=str, default=None, help="Industry label or key (e.g. 'hvac')")
    parser.add_argument("--name", type=str, default=None, help="Business name for the report heading")
    parser.add_argument("--revenue", type=float, default=None)
    parser.add_argument("--sde", type=float, default=None)
    parser.add_argument("--ebitda", type=float, default=None)
    parser.add_argument("--cash-flow", type=float, default=None)
    parser.add_argument("--asking-price", type=float, default=None)
    parser.add_argument("--owner-hours", type=float, default=None, help="Owner hours per week")
    parser.add_argument("--concentration", type=float, default=None, help="Largest customer share (0-1)")
    parser.add_argument("--year-established", type=int, default=None)
    parser.add_argument("--as-of-year", type=int, default=None, help="Year business age is measured against")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.csv:
            run_batch(args)
        else:
            run_single(args)
    except ValueError as e:
        parser.exit(1, f"Error: {e}\n")


if __name__ == "__main__":
    main()
