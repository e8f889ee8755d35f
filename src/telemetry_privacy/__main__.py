"""Entry point for python -m telemetry_privacy and the telemetry-privacy script."""

from __future__ import annotations

import sys


def main() -> None:
    """Run the CLI, or explain how to install it when typer is missing."""
    try:
        from telemetry_privacy.cli.main import PROG_NAME, app
    except ImportError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Install the CLI with: pip install telemetry-privacy[cli]", file=sys.stderr)
        sys.exit(1)

    app(prog_name=PROG_NAME)


if __name__ == "__main__":
    main()
