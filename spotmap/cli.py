"""
Command line entry point with environment configuration support.
"""

import argparse
import asyncio
import sys
from typing import Optional, Sequence

from spotmap.config.loader import ConfigLoader, load_config_for_environment
from spotmap.config.settings import Settings
from spotmap.core.exceptions import SpotMapException
from spotmap.core.logging import configure_logging
from spotmap.models.internal_models import Coordinate
from spotmap.services.dataset_client import DatasetClient
from spotmap.services.navigation_service import describe_nearest, map_search_url


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Slushi spot map engine")
    parser.add_argument(
        "--env",
        choices=["development", "staging", "production", "testing"],
        default=None,
        help="Environment to run (default: from ENVIRONMENT env var or development)"
    )
    parser.add_argument(
        "--dataset-url",
        default=None,
        help="Dataset URL (overrides config)"
    )
    parser.add_argument(
        "--list-envs",
        action="store_true",
        help="List available environment configurations"
    )
    parser.add_argument(
        "--validate-env",
        help="Validate a specific environment configuration"
    )
    parser.add_argument(
        "--create-sample",
        help="Create a sample .env file for the specified environment"
    )

    commands = parser.add_subparsers(dest="command")

    nearest_cmd = commands.add_parser("nearest", help="Find the spot closest to a coordinate")
    nearest_cmd.add_argument("--lat", type=float, required=True)
    nearest_cmd.add_argument("--lng", type=float, required=True)

    commands.add_parser("list", help="List every valid spot in the dataset")
    return parser


async def _run_nearest(settings: Settings, lat: float, lng: float) -> int:
    result = await DatasetClient(settings.dataset).load()
    nearest = describe_nearest(Coordinate(lat, lng), result.accepted)
    print(f"{nearest.record.name} ({nearest.distance_text})")
    if nearest.record.address:
        print(f"   {nearest.record.address}")
    print(f"   {nearest.maps_url}")
    return 0


async def _run_list(settings: Settings) -> int:
    result = await DatasetClient(settings.dataset).load()
    for record in result.accepted:
        print(f"{record.id}\t{record.name}\t{map_search_url(record.coordinate)}")
    print(f"{len(result.accepted)} spots, {result.rejected_count} rows rejected")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    # Handle utility commands
    if args.list_envs:
        envs = ConfigLoader.get_available_environments()
        print("Available environment configurations:")
        for env in envs:
            print(f"  - {env}")
        return 0

    if args.validate_env:
        if ConfigLoader.validate_environment_config(args.validate_env):
            print(f"✓ Environment '{args.validate_env}' configuration is valid")
            return 0
        print(f"✗ Environment '{args.validate_env}' configuration is invalid or missing")
        return 1

    if args.create_sample:
        try:
            sample_file = ConfigLoader.create_sample_env_file(args.create_sample)
        except (ValueError, OSError) as e:
            print(f"✗ Failed to create sample configuration: {e}")
            return 1
        print(f"✓ Sample configuration created: {sample_file}")
        return 0

    try:
        settings = load_config_for_environment(args.env)
    except ValueError as e:
        print(f"✗ Failed to load configuration: {e}")
        return 1

    configure_logging(settings.log_level.value, settings.log_format)

    if args.dataset_url:
        settings.dataset.url = args.dataset_url

    try:
        if args.command == "nearest":
            return asyncio.run(_run_nearest(settings, args.lat, args.lng))
        if args.command == "list":
            return asyncio.run(_run_list(settings))
    except SpotMapException as e:
        print(f"✗ {e.message}")
        return 1

    build_parser().print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
