"""
Checks that the Supabase credentials are present in the env file before the
app is started.

Usage:
  preppal-check-env
  preppal-check-env --env-file path/to/.env.local

Exit codes
  0 = all required variables set
  1 = env file missing, or a required variable missing or empty
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import dotenv_values

from preppal.infrastructure.config import REQUIRED_ENV_VARS


def missing_vars(values: dict) -> List[str]:
    return [name for name in REQUIRED_ENV_VARS if not (values.get(name) or "").strip()]


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Check that the Supabase environment variables are set.")
    ap.add_argument("--env-file", default=".env.local", help="Env file to check (default: .env.local)")
    args = ap.parse_args(argv)

    print("Checking environment variables...")

    env_file = Path(args.env_file)
    if not env_file.is_file():
        print(
            f"{env_file.name} file not found! Please create it with your Supabase credentials.",
            file=sys.stderr,
        )
        return 1

    missing = missing_vars(dotenv_values(env_file))
    if missing:
        print(f"Missing required environment variables: {', '.join(missing)}", file=sys.stderr)
        print(f"Please add them to your {env_file.name} file.", file=sys.stderr)
        return 1

    print("Environment variables look good!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
