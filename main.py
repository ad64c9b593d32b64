# =============================================================================
# main.py  —  Entry Point for the Home Assistant Agent
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py                 # chat in the terminal
#   uv run python main.py --name Alice    # skip the "who's there" prompt
#   uv run python -m tools.mcp_server     # serve the same tools over MCP
#
# WHAT HAPPENS:
#   1. Loads .env (BRAVE_SEARCH_API_KEY, OPENROUTER_API_KEY, ROOMS_FILE, ...)
#   2. Builds the room store, the weather/search adapters and the registry
#   3. Runs one SessionOrchestrator over the console transport:
#      connect -> wait for participant -> initialize -> greet -> serve
# =============================================================================

import argparse
import asyncio
import logging

from dotenv import load_dotenv

# Load environment variables BEFORE reading settings: LiteLlm also reads the
# provider key from the environment when the agent is created.
load_dotenv()

from agent.console import ConsoleTransport
from agent.session import SessionOrchestrator
from core.config import Settings, configure_logging, resolve_rooms_file
from core.room_store import RoomTemperatureStore
from tools.catalog import build_dispatcher

logger = logging.getLogger("main")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Home assistant voice agent (console mode)")
    parser.add_argument("--name", help="participant name; skips the prompt")
    parser.add_argument("--rooms-file", help="override ROOMS_FILE (relative to the project root)")
    return parser.parse_args(argv)


def open_store(args: argparse.Namespace, settings: Settings) -> RoomTemperatureStore:
    # --rooms-file and ROOMS_FILE resolve relative paths the same way
    if args.rooms_file:
        return RoomTemperatureStore(resolve_rooms_file(args.rooms_file))
    return RoomTemperatureStore(settings.rooms_file)


async def run_agent(args: argparse.Namespace) -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    store = open_store(args, settings)
    dispatcher = build_dispatcher(settings, store=store)

    logger.info("Rooms file: %s", store.path)
    logger.info("Tools: %s", ", ".join(dispatcher.registry.names()))

    transport = ConsoleTransport(model=settings.model, participant=args.name)
    await SessionOrchestrator(transport, dispatcher).run()


if __name__ == "__main__":
    asyncio.run(run_agent(parse_args()))
