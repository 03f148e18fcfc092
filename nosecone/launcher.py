"""Launcher — wires config, dispatcher, router, Discord bot and HTTP server."""

import argparse
import asyncio
import sys
from typing import List, Optional

from nosecone.config import AppConfig, ConfigValidationError
from nosecone.domain.router import DeliveryRouter
from nosecone.adapters.webhook.dispatcher import WebhookDispatcher
from nosecone.infrastructure import log


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="nosecone", description="Discord to n8n webhook relay")
    parser.add_argument("--test", action="store_true", help="send a connectivity test and exit")
    parser.add_argument("--no-discord", action="store_true", help="run the HTTP server only")
    return parser.parse_args(argv)


async def run_connectivity_test(router: DeliveryRouter) -> bool:
    result = await router.test_connectivity()
    if result.success:
        log.info("Webhook connectivity test passed")
    else:
        log.error(f"Webhook connectivity test failed: {result.error.message}")
    return result.success


async def serve(config: AppConfig, router: DeliveryRouter, with_discord: bool = True):
    """Run the Discord bot and the optional HTTP server until one stops."""
    tasks = []
    bot = None

    if with_discord:
        from nosecone.adapters.discord.adapter import RelayBot

        bot = RelayBot(router, config)
        tasks.append(bot.start(config.discord.bot_token))

    if config.http_port:
        import uvicorn

        from nosecone.adapters.web.server import create_app

        server = uvicorn.Server(uvicorn.Config(
            create_app(router, config),
            host="0.0.0.0",
            port=config.http_port,
            log_level="warning",
        ))
        log.info(f"HTTP server listening on port {config.http_port}")
        tasks.append(server.serve())

    if not tasks:
        log.error("Nothing to run. Enable Discord or set HTTP_PORT.")
        return

    try:
        await asyncio.gather(*tasks)
    finally:
        if bot is not None and not bot.is_closed():
            await bot.close()


async def _main(args: argparse.Namespace, config: AppConfig) -> int:
    dispatcher = WebhookDispatcher(config.webhook)
    router = DeliveryRouter(dispatcher)
    try:
        if args.test:
            return 0 if await run_connectivity_test(router) else 1
        await serve(config, router, with_discord=not args.no_discord)
        return 0
    finally:
        await dispatcher.close()


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    config = AppConfig.from_env()
    require_discord = not (args.test or args.no_discord)

    try:
        config.ensure_valid(require_discord=require_discord)
    except ConfigValidationError as e:
        log.error(str(e))
        return 1

    log.configure(debug_mode=config.bot.debug_mode, log_file=config.log_file)
    log.info("Configuration validation passed")
    log.info("Starting NoseCone relay...")

    try:
        return asyncio.run(_main(args, config))
    except KeyboardInterrupt:
        log.info("Received interrupt, shutting down")
        return 0


if __name__ == "__main__":
    sys.exit(main())
