"""CLI entry point for powstr.

Examples:
    ```bash
    python -m powstr mine --content "gm" --difficulty 16 --publish
    python -m powstr comments https://example.com/article
    python -m powstr comments <64-char event id> --log-level DEBUG
    python -m powstr feed --min-strength 8 --page 2 --order asc
    python -m powstr --config config/powstr.yaml feed
    ```
"""

from __future__ import annotations

import argparse
import asyncio
import re
import signal
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from powstr.core.logger import Logger, setup_logging
from powstr.core.metrics import start_metrics_server
from powstr.models.reference import ExternalResource
from powstr.nips.nip13 import MinerState, format_strength
from powstr.services.comments import CommentsService
from powstr.services.common.configs import PowstrConfig
from powstr.services.common.gateway import RelayGateway
from powstr.services.feed import PowFeed, SortOrder
from powstr.services.miner import PowMiner
from powstr.utils.protocol import create_client


if TYPE_CHECKING:
    from powstr.models.reference import Root
    from powstr.nips.nip13 import MiningProgress


_EVENT_ID = re.compile(r"[0-9a-fA-F]{64}")

logger = Logger("powstr.cli")


# =============================================================================
# Commands
# =============================================================================


async def run_mine(config: PowstrConfig, args: argparse.Namespace) -> int:
    """Mine a note and optionally publish it."""
    keys = config.client.load_keys()
    if args.publish:
        gateway = await RelayGateway.connect(config.client, keys)
    else:
        gateway = RelayGateway(create_client(), keys, timeout=config.client.timeout)

    miner = PowMiner(publisher=gateway, config=config.miner)

    def on_progress(progress: MiningProgress) -> None:
        logger.info(
            "mining_progress",
            attempts=progress.attempts,
            percent=f"{progress.fraction * 100:.1f}",
            elapsed=f"{progress.elapsed:.1f}",
        )

    loop = asyncio.get_running_loop()
    loop.add_signal_handler(signal.SIGINT, miner.request_abort)

    try:
        async with gateway, miner:
            if args.publish:
                mined = await miner.mine_and_publish(
                    args.content, args.difficulty, on_progress=on_progress
                )
                result, event = mined.result, mined.event
            else:
                result = await miner.mine(args.content, args.difficulty, on_progress=on_progress)
                event = None
    finally:
        loop.remove_signal_handler(signal.SIGINT)

    if result.state != MinerState.FOUND:
        logger.warning("mining_unsuccessful", state=result.state, attempts=result.attempts)
        return 2

    logger.info(
        "note_mined",
        id=result.event_id,
        nonce=result.nonce,
        strength=format_strength(result.strength or 0),
        published=event is not None,
    )
    return 0


async def _resolve_root(gateway: RelayGateway, value: str) -> Root | None:
    if _EVENT_ID.fullmatch(value):
        events = await gateway.query({"ids": [value.lower()], "limit": 1})
        return events[0] if events else None
    return ExternalResource(value)


async def run_comments(config: PowstrConfig, args: argparse.Namespace) -> int:
    """Log the comment thread of a URL or an event."""
    async with await RelayGateway.connect(config.client) as gateway:
        root = await _resolve_root(gateway, args.root)
        if root is None:
            logger.error("root_not_found", id=args.root)
            return 1

        async with CommentsService(relay=gateway, config=config.comments) as service:
            thread = await service.fetch_thread(root)

    for depth, comment in thread.walk():
        logger.info(
            "comment",
            depth=depth,
            id=comment.id,
            author=comment.pubkey,
            created_at=comment.created_at,
            content=comment.content,
        )
    return 0


async def run_feed(config: PowstrConfig, args: argparse.Namespace) -> int:
    """Log one page of the PoW feed."""
    async with await RelayGateway.connect(config.client) as gateway:
        async with PowFeed(relay=gateway, config=config.feed) as feed:
            page = await feed.page(min_strength=args.min_strength, page=args.page, order=args.order)

    logger.info("feed_page", page=page.page, total_pages=page.total_pages, notes=page.total_items)
    for item in page.items:
        logger.info(
            "note",
            id=item.event.id,
            strength=item.label,
            tier=item.tier,
            target=item.target,
            content=item.event.content,
        )
    return 0


COMMANDS = {
    "mine": run_mine,
    "comments": run_comments,
    "feed": run_feed,
}


# =============================================================================
# Entry Point
# =============================================================================


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(prog="powstr", description="Nostr comments and PoW notes")
    parser.add_argument("--config", type=Path, help="YAML config path (default: built-in defaults)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Log level (default: INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    mine = commands.add_parser("mine", help="Mine a proof-of-work note")
    mine.add_argument("--content", required=True, help="Note content")
    mine.add_argument("--difficulty", type=int, required=True, help="Target strength in bits")
    mine.add_argument("--publish", action="store_true", help="Publish the note when found")

    comments = commands.add_parser("comments", help="Show the comment thread of a URL or event")
    comments.add_argument("root", help="URL or 64-char hex event id")

    feed = commands.add_parser("feed", help="List notes ranked by proof-of-work")
    feed.add_argument("--min-strength", type=int, default=None, help="Minimum strength in bits")
    feed.add_argument("--page", type=int, default=1, help="Page number (default: 1)")
    feed.add_argument(
        "--order",
        choices=[order.value for order in SortOrder],
        default=SortOrder.DESC.value,
        help="Strength order (default: desc)",
    )

    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    """Parse args, load config, start metrics and run the command."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = PowstrConfig.from_yaml(str(args.config)) if args.config else PowstrConfig()
    except Exception as e:  # Intentionally broad: CLI error boundary for config loading
        logger.error("config_invalid", path=str(args.config), error=str(e))
        return 1

    metrics_server = await start_metrics_server(config.metrics)
    if config.metrics.enabled:
        logger.info(
            "metrics_server_started",
            host=config.metrics.host,
            port=config.metrics.port,
            path=config.metrics.path,
        )

    try:
        return await COMMANDS[args.command](config, args)
    except Exception as e:  # Intentionally broad: CLI error boundary for commands
        logger.error(f"{args.command}_failed", error=str(e))
        return 1
    finally:
        await metrics_server.stop()


def cli() -> None:
    """Synchronous entry point for console_scripts."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
