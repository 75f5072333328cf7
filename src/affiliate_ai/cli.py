"""Command-line interface for testing the scoring engine."""

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from affiliate_ai.scoring.models import CompetitionLevel, Product, ScoringWeights
from affiliate_ai.scoring.scorer import analyze_product


def create_example_product() -> Product:
    """Create an example product with a hand-checked potential score of 290."""
    return Product(
        id="example-001",
        name="Wireless Earbuds Pro",
        category="Electronics",
        platform="TikTok Shop",
        commission=20.0,
        price=50.0,
        avg_monthly_sales=1000,
        conversion_rate=0.035,
        competition_level=CompetitionLevel.LOW,
        trend_score=80.0,
        refund_rate=0.08,
    )


def score_command(args: argparse.Namespace) -> int:
    """Score a product from JSON or use example."""
    if args.json:
        try:
            product = Product(**json.loads(args.json))
        except (json.JSONDecodeError, TypeError, ValidationError) as e:
            print(f"Invalid product JSON: {e}", file=sys.stderr)
            return 1
    else:
        product = create_example_product()
        print("Using example product (use --json to provide your own)\n")

    # Apply custom weights if provided
    weights = None
    if args.competition_penalty is not None or args.refund_penalty is not None:
        overrides = {}
        if args.competition_penalty is not None:
            overrides["competition_penalty"] = args.competition_penalty
        if args.refund_penalty is not None:
            overrides["refund_penalty_multiplier"] = args.refund_penalty
        weights = ScoringWeights(**overrides)

    result = analyze_product(product, weights)

    # Output
    print(f"Product: {product.name or '(unnamed)'}")
    print(f"{'=' * 50}")
    print("\nInputs:")
    print(f"  Commission:   {product.commission:.2f}")
    print(f"  Price:        {product.price:.2f}")
    print(f"  Sales/month:  {product.avg_monthly_sales:.0f}")
    print(f"  Conversion:   {product.conversion_rate}")
    print(f"  Competition:  {product.competition_level or 'unknown'}")
    print(f"  Trend:        {product.trend_score}")
    print(f"  Refund rate:  {product.refund_rate}")

    print("\nScores:")
    print(f"  Potential score:   {result.potential_score:.2f}")
    print(f"  Estimated income:  {result.estimated_income:.2f}")

    print(f"\n{'=' * 50}")
    print(f"Risk level: {result.risk_level.value}")
    return 0


def main() -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="affiliate-ai",
        description="Affiliate Product Scoring Engine",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Score command
    score_parser = subparsers.add_parser("score", help="Score a product")
    score_parser.add_argument(
        "--json",
        type=str,
        help="Product data as JSON string",
    )
    score_parser.add_argument(
        "--competition-penalty",
        type=float,
        help="Points per competition factor (default: 100)",
    )
    score_parser.add_argument(
        "--refund-penalty",
        type=float,
        help="Refund rate penalty multiplier (default: 500)",
    )

    # Example command
    example_parser = subparsers.add_parser(
        "example",
        help="Show example product JSON",
    )
    example_parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty print JSON",
    )

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if args.command == "score":
        return score_command(args)
    elif args.command == "example":
        data = create_example_product().model_dump(mode="json", exclude_none=True)
        if args.pretty:
            print(json.dumps(data, indent=2))
        else:
            print(json.dumps(data))
    else:
        parser.print_help()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
