#!/usr/bin/env python3

"""Command line entry point of the gesture carousel."""


from .check_camera import check_camera_cmd  # noqa: F401
from .common import app
from .describe import describe_cmd, items_cmd  # noqa: F401
from .run import run_cmd  # noqa: F401
from .simulate import simulate_cmd  # noqa: F401


def main() -> None:
    """Entry point for the application."""
    app()


if __name__ == "__main__":
    main()
