"""Command-line launcher for Snake Arcade."""

from __future__ import annotations

import argparse
import json
import logging
import sys

logger = logging.getLogger(__name__)


def _add_config_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override its values).",
    )
    p.add_argument("--arena-width", type=int, default=None)
    p.add_argument("--arena-height", type=int, default=None)
    p.add_argument(
        "--bounds", type=str, default=None,
        choices=["exclusive", "inclusive"],
    )
    p.add_argument("--tick-interval", type=float, default=None)
    p.add_argument("--food-interval", type=float, default=None)
    p.add_argument("--max-food", type=int, default=None)
    p.add_argument("--growth-per-food", type=int, default=None)
    p.add_argument("--seed", type=int, default=None)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-arcade",
        description="Snake Arcade headless simulation and session host.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser("simulate", help="Run a headless game.")
    _add_config_flags(sim_p)
    sim_p.add_argument("--frames", type=int, default=600)
    sim_p.add_argument(
        "--dt", type=float, default=1 / 60,
        help="Seconds of frame time fed per frame.",
    )
    sim_p.add_argument(
        "--keys", type=str, default="",
        help="Comma-separated keys, one held per movement tick.",
    )
    sim_p.add_argument(
        "--json", action="store_true", help="Print the full final state.",
    )

    # --- benchmark ---
    bench_p = sub.add_parser(
        "benchmark", help="Measure simulation throughput.",
    )
    bench_p.add_argument("--ticks", type=int, default=10_000)
    bench_p.add_argument("--arena-width", type=int, default=20)
    bench_p.add_argument("--arena-height", type=int, default=20)
    bench_p.add_argument("--seed", type=int, default=42)

    # --- config ---
    cfg_p = sub.add_parser("config", help="Write a config file.")
    _add_config_flags(cfg_p)
    cfg_p.add_argument("output", help="Path for the JSON config.")

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Run the session host.")
    serve_p.add_argument("--host", type=str, default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)

    return parser


def _load_config(args: argparse.Namespace):
    from snake_arcade.config import GameConfig

    config = (
        GameConfig.load(args.config) if args.config else GameConfig()
    )
    return config.with_overrides(
        arena_width=args.arena_width,
        arena_height=args.arena_height,
        bounds=args.bounds,
        tick_interval=args.tick_interval,
        food_interval=args.food_interval,
        max_food=args.max_food,
        growth_per_food=args.growth_per_food,
        seed=args.seed,
    )


def _run_simulate(args: argparse.Namespace) -> int:
    from snake_arcade.engine import Game

    game = Game(_load_config(args))
    script = [k for k in args.keys.split(",") if k.strip()]

    for _ in range(args.frames):
        tick = game.movement.ticks
        held = [script[tick]] if tick < len(script) else []
        game.update(args.dt, held)

    state = game.get_state()
    if args.json:
        print(json.dumps(state, indent=2))  # noqa: T201
    else:
        print(  # noqa: T201
            f"Simulated {state['frame']} frames, {state['tick']} ticks | "
            f"score {state['score']}, length {state['snake']['length']}, "
            f"resets {state['resets']}"
        )
    return 0


def _run_benchmark(args: argparse.Namespace) -> int:
    from snake_arcade.benchmark import benchmark_throughput

    result = benchmark_throughput(
        ticks=args.ticks,
        arena_width=args.arena_width,
        arena_height=args.arena_height,
        seed=args.seed,
    )
    print(result.summary())  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    _load_config(args).save(args.output)
    print(f"Wrote config to {args.output}")  # noqa: T201
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from snake_arcade.server.app import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-arcade`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "benchmark": _run_benchmark,
        "config": _run_config,
        "serve": _run_serve,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
