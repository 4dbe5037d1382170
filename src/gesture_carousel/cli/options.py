"""Shared CLI option definitions."""

from __future__ import annotations

import typer

from .common import DEFAULT_USER_CONFIG_PATH

camera = typer.Option(None, "--camera", "--cam", help="Camera name filter (case insensitive)")

mirror = typer.Option(
    None, "--mirror/--no-mirror", help="Force mirror mode (overrides environment variable and config)"
)

size = typer.Option(None, "--size", "-s", help="Maximum dimension of the camera capture")

config = typer.Option(None, "--config", "-c", help=f"Path to config file. Default: {DEFAULT_USER_CONFIG_PATH}")

gpu = typer.Option(None, "--gpu/--no-gpu", help="Force GPU acceleration (overrides environment variable and config)")
