"""Command-line interface for gamepick."""

from __future__ import annotations

import argparse
import asyncio
import logging
import random
import sys

from gamepick.config import Settings, load_env
from gamepick.errors import ConfigError, FetchError
from gamepick.models import PickerState, Session
from gamepick.presenter import ConsolePresenter
from gamepick.randomizer import GameRandomizer, error_message
from gamepick.relay import RelayClient
from gamepick.steam import SteamClient


def _get_settings(args: argparse.Namespace) -> Settings:
    settings = Settings.from_env()
    if getattr(args, "api_key", None):
        settings.api_key = args.api_key
    if getattr(args, "relay_url", None):
        settings.relay_url = args.relay_url
    if getattr(args, "encode_relay", False):
        settings.relay_encode = True
    if not settings.api_key:
        print(
            "Error: Steam API key required. Set STEAM_API_KEY or use --api-key.",
            file=sys.stderr,
        )
        sys.exit(1)
    return settings


def _get_client(settings: Settings) -> SteamClient:
    relay = RelayClient(
        settings.relay_url, encode=settings.relay_encode, timeout=settings.timeout
    )
    return SteamClient(relay)


# ------------------------------------------------------------------
# Sub-command handlers
# ------------------------------------------------------------------


async def _pick(
    randomizer: GameRandomizer, steam_id: str, rerolls: int
) -> PickerState:
    state = await randomizer.load(PickerState(), steam_id)
    for _ in range(rerolls if state.loaded else 0):
        await randomizer.pick_another(state)
    await randomizer.drain()
    return state


def cmd_pick(args: argparse.Namespace) -> int:
    settings = _get_settings(args)
    client = _get_client(settings)
    rng = random.Random(args.seed) if args.seed is not None else None
    randomizer = GameRandomizer(
        client,
        ConsolePresenter(),
        settings.api_key,
        rng=rng,
        check_profile=args.check_profile,
    )
    state = asyncio.run(_pick(randomizer, args.steam_id, args.rerolls))
    return 0 if state.loaded else 1


def cmd_profile(args: argparse.Namespace) -> int:
    settings = _get_settings(args)
    client = _get_client(settings)
    try:
        session = Session(account_id=args.steam_id.strip(), api_key=settings.api_key)
        player = client.fetch_player_summary(session)
    except (ConfigError, FetchError) as exc:
        print(f"Error: {error_message(exc)}", file=sys.stderr)
        return 1
    print(f"  {player.get('steamid', args.steam_id)}  {player.get('personaname', '')}")
    print(f"  {player.get('profileurl', '')}")
    return 0


# ------------------------------------------------------------------
# Argument parser
# ------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gamepick",
        description="Pick a random game from a Steam library.",
    )
    parser.add_argument(
        "--api-key",
        dest="api_key",
        metavar="KEY",
        default=None,
        help="Steam Web API key (overrides STEAM_API_KEY env var)",
    )
    parser.add_argument(
        "--relay-url",
        dest="relay_url",
        metavar="URL",
        default=None,
        help="Relay base URL (overrides GAMEPICK_RELAY_URL env var)",
    )
    parser.add_argument(
        "--encode-relay",
        dest="encode_relay",
        action="store_true",
        help="Percent-encode the target URL before handing it to the relay",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    pick_p = subparsers.add_parser("pick", help="Pick a random game")
    pick_p.add_argument("steam_id", help="Steam 64-bit user ID")
    pick_p.add_argument(
        "--rerolls",
        type=int,
        default=0,
        metavar="N",
        help="Pick N more games from the same library (default: 0)",
    )
    pick_p.add_argument(
        "--seed", type=int, default=None, help="Seed for reproducible picks"
    )
    pick_p.add_argument(
        "--check-profile",
        dest="check_profile",
        action="store_true",
        help="Verify the profile exists before loading games",
    )
    pick_p.set_defaults(func=cmd_pick)

    profile_p = subparsers.add_parser("profile", help="Show a Steam profile")
    profile_p.add_argument("steam_id", help="Steam 64-bit user ID")
    profile_p.set_defaults(func=cmd_profile)

    return parser


def main(argv: list[str] | None = None) -> int:
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 1
    return func(args)


if __name__ == "__main__":
    sys.exit(main())
