from __future__ import annotations

import sys
from pathlib import Path

import typer
from pydantic import ValidationError

from ..config import ClassifierConfig, Config
from ..trace import load_trace, replay
from . import options
from .common import app, build_session


@app.command(name="simulate")
def simulate_cmd(
    trace_path: Path = typer.Argument(  # noqa: B008
        ..., help="JSON file with the recorded samples", exists=True, dir_okay=False
    ),
    cooldown: int | None = typer.Option(None, "--cooldown", help="Minimum delay (ms) between two swipes"),
    threshold: float | None = typer.Option(None, "--threshold", help="Minimum move between two frames"),
    reset_on_hand_lost: bool | None = typer.Option(
        None, "--reset-on-hand-lost/--keep-on-hand-lost", help="Forget the last position when the hand is lost"
    ),
    config_path: Path | None = options.config,
) -> None:
    """Replay recorded hand positions through the swipe detection and the carousel.

    Each sample is an object with a timestamp `t` (ms) and either the `x` of the hand, or `"hand": false`.
    """
    config = Config.load(config_path)

    overrides = {
        "cooldown_ms": cooldown,
        "swipe_threshold": threshold,
        "reset_on_hand_lost": reset_on_hand_lost,
    }
    try:
        config.classifier = ClassifierConfig.model_validate(
            {**config.classifier.model_dump(), **{key: value for key, value in overrides.items() if value is not None}}
        )
    except ValidationError as exc:
        print(f"Invalid classifier options:\n{exc}", file=sys.stderr)
        raise typer.Exit(1) from exc

    try:
        samples = load_trace(trace_path)
    except ValidationError as exc:
        print(f"Invalid trace file {trace_path}:\n{exc}", file=sys.stderr)
        raise typer.Exit(1) from exc

    session = build_session(config)
    state = session.controller.state
    print(f"Start: item {state.selected_index} ({state.selected_item.title}), angle {state.rotation_angle:g}")

    events_count = 0
    for sample, event, state in replay(session, samples):
        if event is None:
            continue
        events_count += 1
        print(
            f"{sample.t:>8}ms  {event.name:<11} -> item {state.selected_index} ({state.selected_item.title}), "
            f"angle {state.rotation_angle:g}"
        )

    print(f"{events_count} swipe(s) in {len(samples)} sample(s)")
