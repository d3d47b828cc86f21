#!/usr/bin/env python3
"""CLI for inspecting a user's search analytics from the terminal."""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import structlog

from search_analytics.client import SearchAnalyticsClient
from search_analytics.config import get_settings
from search_analytics.exceptions import SearchAnalyticsError
from search_analytics.infrastructure.redis import RedisKeyValueStorage
from search_analytics.infrastructure.token_source import (
    StaticTokenSource,
    StorageTokenSource,
    TokenSource,
)
from search_analytics.logging_config import configure_logging

logger = structlog.get_logger()


def build_token_source(
    args: argparse.Namespace, storage: RedisKeyValueStorage | None
) -> TokenSource:
    if storage is not None:
        return StorageTokenSource(storage)
    return StaticTokenSource(args.token or get_settings().access_token)


async def show_insights(client: SearchAnalyticsClient, days: int) -> None:
    result = await client.insights.get_behavior_insights(days)
    patterns = result.patterns

    print(f"\n{'=' * 60}")
    print(f"SEARCH BEHAVIOR - last {days} days")
    print(f"{'=' * 60}")
    print(f"Score          : {result.behavior_score} ({result.score_label})")
    print(f"Total searches : {patterns.total_searches}")
    print(f"Categories     : {len(patterns.category_frequency)}")
    if result.insights.most_searched_category:
        category, count = result.insights.most_searched_category
        print(f"Top category   : {category} ({count})")
    if patterns.top_materials:
        print(f"Top materials  : {', '.join(m.material for m in patterns.top_materials[:3] if m.material)}")
    print()
    for tip in result.tips:
        print(f"  {tip.icon} {tip.message}")
    print()


async def show_suggestions(client: SearchAnalyticsClient, query: str, limit: int) -> None:
    result = await client.tracking.get_suggestions(query, limit=limit)
    if not result.suggestions:
        print("No suggestions")
        return
    for suggestion in result.suggestions:
        print(f"  {suggestion.query} [{suggestion.type or 'unknown'}]")


async def show_recommendations(client: SearchAnalyticsClient, limit: int, days: int) -> None:
    result = await client.tracking.get_recommendations(limit=limit, days=days)
    print(f"Source: {result.source or 'unknown'} | confidence: {result.confidence_score}")
    for product in result.recommendations:
        print(f"  {product.get('name', product.get('_id', '?'))}")


async def run(args: argparse.Namespace) -> int:
    storage = await RedisKeyValueStorage.connect() if args.token_from_redis else None
    token_source = build_token_source(args, storage)

    try:
        async with SearchAnalyticsClient(token_source=token_source) as client:
            if args.command == "insights":
                await show_insights(client, args.days)
            elif args.command == "suggest":
                await show_suggestions(client, args.query, args.limit)
            elif args.command == "recommendations":
                await show_recommendations(client, args.limit, args.days)
            elif args.command == "clear-history":
                ack = await client.tracking.clear_history(args.days)
                print(ack.message or "History cleared")
    except SearchAnalyticsError as e:
        logger.error("Command failed", command=args.command, error=e.message, status=e.status_code)
        return 1
    finally:
        if storage is not None:
            await storage.aclose()

    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Inspect Eco-Lens search analytics")
    parser.add_argument("--token", help="Bearer token (defaults to ACCESS_TOKEN)")
    parser.add_argument(
        "--token-from-redis",
        action="store_true",
        help="Read the token from Redis token storage",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    insights = subparsers.add_parser("insights", help="Behavior score, insights and tips")
    insights.add_argument("--days", type=int, default=get_settings().default_analysis_days)

    suggest = subparsers.add_parser("suggest", help="Search suggestions for a query")
    suggest.add_argument("query")
    suggest.add_argument("--limit", type=int, default=get_settings().default_suggestion_limit)

    recommendations = subparsers.add_parser("recommendations", help="Personalized recommendations")
    recommendations.add_argument("--limit", type=int, default=get_settings().default_recommendation_limit)
    recommendations.add_argument("--days", type=int, default=get_settings().default_analysis_days)

    clear = subparsers.add_parser("clear-history", help="Delete search history")
    clear.add_argument("--days", type=int, default=None)

    args = parser.parse_args()
    configure_logging()
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
