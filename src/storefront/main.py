#!/usr/bin/env python3
"""Command-line entry point.

Loads the home screen once and prints a summary; useful for checking a
backend or an offline setup without the app UI.
Run with: python -m storefront.main
"""

import asyncio
import logging
import sys

from storefront.app_context import AppContext
from storefront.config.logging_config import setup_logging
from storefront.domain.views import HomeScreenState


async def load_home_summary(ctx: AppContext) -> HomeScreenState:
    """Initialize ``ctx`` and run a first-launch home load."""
    await ctx.initialize()
    preload = await ctx.home_loader.preload_on_first_launch()
    if preload is not None:
        await preload
    return await ctx.home_loader.load()


def format_summary(state: HomeScreenState) -> str:
    if state.error:
        return f"Error: {state.error}"
    data = state.data
    lines = [
        f"Categories:  {len(data.categories)}",
        f"Restaurants: {len(data.nearby_restaurants)}",
        f"Shops:       {len(data.nearby_shops)}",
        f"Ads:         {len(data.advertisements)}",
    ]
    for name, items in data.sections.items():
        if items:
            lines.append(f"  {name}: {len(items)} items")
    return "\n".join(lines)


async def _run() -> int:
    ctx = AppContext()
    try:
        state = await load_home_summary(ctx)
    finally:
        await ctx.close()
    print(format_summary(state))
    return 1 if state.error else 0


def main() -> None:
    setup_logging()
    logger = logging.getLogger(__name__)

    logger.info("Starting storefront client check")

    try:
        sys.exit(asyncio.run(_run()))
    except Exception as e:
        logger.exception(f"Client error: {e}")
        print(f"\nClient error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
