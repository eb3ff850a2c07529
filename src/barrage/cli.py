from __future__ import annotations

import math
import random
from pathlib import Path

import msgspec
import typer

from .config import GameConfig, default_config, dump_config, load_config
from .debug import set_debug_enabled
from .debug_log import close_trace_log, init_trace_log
from .projectiles import TurnMode, circle_angles, fan_angles, player_spread_barrels
from .sim import FixedStepClock, World
from .sim.demo import DemoDirector

app = typer.Typer(add_completion=False)

DEFAULT_ASSETS_DIR = Path("artifacts") / "assets"


class SimulationSummary(msgspec.Struct):
    seed: int | None
    ticks: int
    elapsed_ms: float
    monsters_spawned: int
    monsters_live: int
    spreads_fired: int
    projectiles: dict[str, int]
    culled: int


def _load_config_or_exit(path: Path | None) -> GameConfig:
    if path is None:
        return default_config()
    try:
        return load_config(path)
    except (OSError, ValueError) as exc:
        typer.echo(f"config error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _deg(angle: float) -> float:
    return round(math.degrees(angle), 6)


@app.command("patterns")
def cmd_patterns(
    circle: int = typer.Option(8, help="circle barrel count"),
    fan_spread: float = typer.Option(160.0, help="fan spread in degrees"),
    fan_count: int = typer.Option(8, help="fan barrel count"),
    as_json: bool = typer.Option(False, "--json", help="print JSON"),
) -> None:
    """Print the firing angles (degrees) of the canonical patterns."""
    payload: dict[str, object] = {
        "spread": [
            {
                "angle": _deg(barrel.angle),
                "turn_after_units": barrel.turn_after_units,
                "turn_angle": _deg(barrel.turn_angle),
            }
            for barrel in player_spread_barrels()
        ],
        "circle": [_deg(angle) for angle in circle_angles(circle)],
        "fan": [_deg(angle) for angle in fan_angles(fan_spread, fan_count)],
    }
    if as_json:
        typer.echo(msgspec.json.encode(payload).decode("utf-8"))
        return
    typer.echo("spread:")
    for entry in payload["spread"]:  # type: ignore[union-attr]
        typer.echo(
            f"  fire {entry['angle']:+7.2f}  turn after {entry['turn_after_units']:.0f}u -> {entry['turn_angle']:+6.2f}"
        )
    typer.echo("circle: " + " ".join(f"{angle:.2f}" for angle in payload["circle"]))  # type: ignore[union-attr]
    typer.echo("fan:    " + " ".join(f"{angle:.2f}" for angle in payload["fan"]))  # type: ignore[union-attr]


@app.command("config")
def cmd_config(
    config_path: Path | None = typer.Option(None, "--config", help="game config JSON (default: built-in tables)"),
) -> None:
    """Print the effective game config as JSON."""
    config = _load_config_or_exit(config_path)
    typer.echo(dump_config(config).decode("utf-8"))


@app.command("simulate")
def cmd_simulate(
    seconds: float = typer.Option(10.0, min=0.0, help="simulated seconds"),
    fps: int = typer.Option(60, min=1, help="fixed tick rate"),
    seed: int | None = typer.Option(None, help="RNG seed for dash targets and spawn rows"),
    spawn_every_ms: float = typer.Option(1500.0, help="monster spawn interval (0 disables)"),
    spread_every_ms: float = typer.Option(0.0, help="player spread interval (0 disables)"),
    requested_turn: bool = typer.Option(False, "--requested-turn", help="turn toward the requested angle"),
    config_path: Path | None = typer.Option(None, "--config", help="game config JSON"),
    trace_dir: Path | None = typer.Option(None, help="write a key=value trace log under this dir"),
    debug: bool = typer.Option(False, "--debug", help="enable debug switches"),
    as_json: bool = typer.Option(False, "--json", help="print JSON"),
) -> None:
    """Run a headless simulation and print a summary."""
    if debug:
        set_debug_enabled(True)
    config = _load_config_or_exit(config_path)
    if trace_dir is not None:
        path = init_trace_log(base_dir=trace_dir, seed=seed, fps=fps, seconds=seconds)
        typer.echo(f"trace: {path}", err=True)

    turn_mode = TurnMode.REQUESTED if requested_turn else TurnMode.HORIZONTAL
    world = World(config, rng=random.Random(seed), turn_mode=turn_mode)
    director = DemoDirector(world, spawn_every_ms=spawn_every_ms, spread_every_ms=spread_every_ms)
    clock = FixedStepClock(tick_rate=fps)
    total_ticks = int(round(seconds * 1000.0 / clock.dt_tick_ms))
    try:
        for _ in range(total_ticks):
            director.tick(clock.dt_tick_ms)
        summary = SimulationSummary(
            seed=seed,
            ticks=world.tick_index,
            elapsed_ms=round(world.elapsed_ms, 3),
            monsters_spawned=director.spawned,
            monsters_live=len(world.live_monsters()),
            spreads_fired=director.spreads,
            projectiles=world.count_by_owner(),
            culled=world.culled,
        )
    finally:
        world.shutdown()
        close_trace_log()

    if as_json:
        typer.echo(msgspec.json.encode(summary).decode("utf-8"))
        return
    typer.echo(f"ticks:     {summary.ticks} ({summary.elapsed_ms:.0f} ms)")
    typer.echo(f"monsters:  {summary.monsters_spawned} spawned, {summary.monsters_live} live")
    typer.echo(f"spreads:   {summary.spreads_fired}")
    typer.echo(
        "bullets:   " + ", ".join(f"{owner} {count}" for owner, count in sorted(summary.projectiles.items()))
    )
    typer.echo(f"culled:    {summary.culled}")


@app.command("view")
def cmd_view(
    width: int | None = typer.Option(None, help="window width (default: playfield width)"),
    height: int | None = typer.Option(None, help="window height (default: playfield height)"),
    fps: int = typer.Option(60, help="target fps"),
    seed: int | None = typer.Option(None, help="RNG seed"),
    config_path: Path | None = typer.Option(None, "--config", help="game config JSON"),
    assets_dir: Path = typer.Option(DEFAULT_ASSETS_DIR, help="assets root (default: ./artifacts/assets)"),
    debug: bool = typer.Option(False, "--debug", help="draw hit radii"),
) -> None:
    """Launch the Raylib battle view."""
    from kiln.app import run_view

    from .render.raylib_view import BattleView

    if debug:
        set_debug_enabled(True)
    config = _load_config_or_exit(config_path)
    view = BattleView(config, assets_dir=assets_dir, seed=seed)
    run_view(
        view,
        width=width or config.width,
        height=height or config.height,
        title="barrage",
        fps=fps,
    )


def main(argv: list[str] | None = None) -> None:
    app(prog_name="barrage", args=argv)


if __name__ == "__main__":
    main()
