#!/usr/bin/env python3
"""CLI entry point for parcel-extractor"""

import sys
import json
import argparse

from .config import Settings
from .data_extractor import run
from .errors import ExtractionError
from .inputs import resolve_profile
from .owner_processor import process_owners
from .utils import setup_logging


def build_parser():
    parser = argparse.ArgumentParser(description="County property page extractor")
    parser.add_argument("--owners", action="store_true", help="Only parse owners from input.html into owners/owner_data.json")
    parser.add_argument("--transform", action="store_true", help="Only build the data/ files from input.html and the owners/ sidecars")
    parser.add_argument("--county", type=str, help="County profile to use (default: resolved from unnormalized_address.json)")
    parser.add_argument("--workdir", type=str, default=".", help="Directory holding input.html and the sidecar files")
    return parser


def main(argv=None):
    """Main CLI entry point"""
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()
    setup_logging(settings.log_dir, settings.log_level)

    run_owners = args.owners or not args.transform
    run_transform = args.transform or not args.owners

    try:
        profile = resolve_profile(args.workdir, county=args.county, settings=settings)
        if run_owners:
            process_owners(args.workdir, profile, settings)
        if run_transform:
            run(args.workdir, profile, settings)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        sys.exit(1)
    except ExtractionError as e:
        if e.path:
            print(json.dumps(e.to_dict()))
        else:
            print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
