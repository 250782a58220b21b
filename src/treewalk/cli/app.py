"""
treewalk CLI: inspect listings and step sequences, and replay traversals.

Everything happens in memory; the CLI is a presentation layer over
ExecutionEngine and reads its state only through snapshots.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional

import typer
from rich.console import Console

from treewalk.cli.formatters import (
    build_call_stack_table,
    build_listing_table,
    build_node_states_table,
    build_positions_table,
    build_steps_table,
    build_tree_view,
    format_node_value,
    format_output,
)
from treewalk.cli.load_helpers import load_settings_or_exit
from treewalk.config import Settings
from treewalk.core.engine import ExecutionEngine
from treewalk.core.listings import TRAVERSAL_TYPES, is_valid_traversal_type, normalize_traversal_type
from treewalk.core.state import AppState
from treewalk.core.steps import StackAction
from treewalk.core.traversal import get_traversal_generator
from treewalk.core.tree import compute_node_positions, count_nodes, create_default_tree, get_tree_depth
from treewalk.utils.logging import configure_logging

app = typer.Typer(help="treewalk CLI: step through recursive binary-tree traversals.")
console = Console()

ORDER_HELP = f"Traversal order ({', '.join(TRAVERSAL_TYPES)}); anything else means inorder"


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(None, "--config", help="Path to a treewalk.yaml settings file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Load settings shared by every command."""
    configure_logging(verbose)
    ctx.obj = load_settings_or_exit(config, console=console, verbose_errors=verbose)


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj if isinstance(ctx.obj, Settings) else Settings()


def _resolve_order(order: Optional[str], settings: Settings) -> str:
    if order is None:
        return settings.traversal_type
    if not is_valid_traversal_type(order):
        console.print(f"[yellow]Unknown traversal type[/yellow] {order!r}, using inorder")
    return normalize_traversal_type(order)


def _render_state(engine: ExecutionEngine, state: AppState) -> None:
    step = engine.get_current_step()
    total = engine.get_total_steps()
    if step is None:
        console.print(f"[bold]Step:[/bold] start (0/{total})")
    else:
        console.print(f"[bold]Step:[/bold] {state.current_step_index + 1}/{total} {step.type.value} - {step.description}")
    console.print(build_listing_table(state.traversal_type, state.highlighted_line))
    console.print(build_call_stack_table(state.call_stack))
    console.print(build_node_states_table(state))
    console.print(f"[bold]Output:[/bold] {format_output(state.traversal_output)}")


@app.command()
def code(
    ctx: typer.Context,
    order: Optional[str] = typer.Argument(None, help=ORDER_HELP),
    line: int = typer.Option(0, "--line", "-l", help="Listing line to highlight"),
) -> None:
    """Show the pseudocode listing of a traversal order."""
    traversal_type = _resolve_order(order, _settings(ctx))
    console.print(build_listing_table(traversal_type, line))


@app.command()
def steps(
    ctx: typer.Context,
    order: Optional[str] = typer.Argument(None, help=ORDER_HELP),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Show only the first N steps"),
) -> None:
    """List every execution step generated for the default tree."""
    traversal_type = _resolve_order(order, _settings(ctx))
    generated = get_traversal_generator(traversal_type).generate_steps(create_default_tree())
    console.print(build_steps_table(generated, limit))
    calls = sum(1 for step in generated if step.stack_action is StackAction.PUSH)
    console.print(f"[bold]{len(generated)}[/bold] step(s), [bold]{calls}[/bold] call(s)")


@app.command()
def tree(ctx: typer.Context) -> None:
    """Show the default tree and its computed layout."""
    settings = _settings(ctx)
    root = create_default_tree()
    compute_node_positions(
        root,
        settings.canvas_width,
        settings.canvas_height,
        top_padding=settings.top_padding,
    )
    console.print(build_tree_view(root))
    console.print(f"Nodes: {count_nodes(root)}, Depth: {get_tree_depth(root)}")
    console.print(build_positions_table(root))


@app.command()
def run(
    ctx: typer.Context,
    order: Optional[str] = typer.Argument(None, help=ORDER_HELP),
    step_count: Optional[int] = typer.Option(
        None, "--steps", "-s", min=0, help="Steps to take forward (default: run to the end)"
    ),
    back: int = typer.Option(0, "--back", "-b", min=0, help="Steps to take back afterwards"),
) -> None:
    """Replay a traversal forward (and optionally back) and show the resulting state."""
    settings = _settings(ctx)
    engine = ExecutionEngine(settings=settings)
    engine.initialize(_resolve_order(order, settings))

    if step_count is None:
        engine.run_to_end()
    else:
        for _ in range(step_count):
            if not engine.next_step():
                console.print("[dim]Reached the last step[/dim]")
                break
    for _ in range(back):
        if not engine.previous_step():
            console.print("[dim]Reached the start[/dim]")
            break

    _render_state(engine, engine.get_state())


@app.command()
def play(
    ctx: typer.Context,
    order: Optional[str] = typer.Argument(None, help=ORDER_HELP),
    speed: Optional[int] = typer.Option(None, "--speed", min=1, help="Milliseconds per step"),
) -> None:
    """Auto-play a traversal, printing each step as it is applied."""
    settings = _settings(ctx)
    engine = ExecutionEngine(settings=settings)
    engine.initialize(_resolve_order(order, settings))
    if speed is not None:
        engine.set_speed(speed)

    printed: List[int] = []
    asyncio.run(_autoplay(engine, printed))
    state = engine.get_state()
    console.print(f"[green]Finished[/green] after {len(printed)} step(s)")
    console.print(f"[bold]Output:[/bold] {format_output(state.traversal_output)}")


async def _autoplay(engine: ExecutionEngine, printed: List[int]) -> None:
    finished = asyncio.Event()
    started = False

    def _on_change(state: AppState) -> None:
        index = state.current_step_index
        if index >= 0 and (not printed or printed[-1] != index):
            printed.append(index)
            step = engine.get_steps()[index]
            frames = " > ".join(str(frame) for frame in state.call_stack) or "-"
            console.print(
                f"{index:>3} line {step.code_line} {step.type.value:<13} "
                f"node={format_node_value(step.node_value):<4} stack: {frames}"
            )
        if started and not state.is_playing:
            finished.set()

    unsubscribe = engine.subscribe(_on_change)
    try:
        engine.play()
        started = True
        await finished.wait()
    finally:
        engine.pause()
        unsubscribe()


if __name__ == "__main__":
    app()
