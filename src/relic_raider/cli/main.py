"""Typer CLI application."""
from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="relic-raider",
    help="Turn-based beast battles from the Relic Raider exploration RPG",
    no_args_is_help=True,
)

DEFEND_HP_THRESHOLD = 0.3
MAX_ROUNDS = 200


def _setup_logging(verbose: bool) -> None:
    if not verbose:
        return
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


def choose_auto_action(state, actions) -> str:
    """Pick an action for the simulator from the available action ids."""
    from relic_raider.mechanics import resources

    if state.ultimate_ready:
        ultimate_skill = next((a.id for a in actions if a.skill_type == "ULTIMATE"), None)
        return ultimate_skill or "ultimate"
    if resources.special_ready(state) and resources.has_energy(state):
        return "special"
    if state.player_hp < state.player_max_hp * DEFEND_HP_THRESHOLD and resources.defend_ready(state):
        return "defend"
    return "attack"


@app.command()
def zones() -> None:
    """List zones, their level ranges and bosses."""
    from relic_raider.cli.combat_display import CombatDisplay
    from relic_raider.content.catalog import ContentCatalog

    catalog = ContentCatalog()
    CombatDisplay().show_zones(catalog.zones.values())


@app.command()
def opponents(
    zone: str = typer.Option(..., "--zone", "-z", help="Zone name"),
) -> None:
    """List the opponents of a zone."""
    from relic_raider.cli.combat_display import CombatDisplay
    from relic_raider.content.catalog import ContentCatalog

    catalog = ContentCatalog()
    try:
        pool = catalog.pool(zone)
    except KeyError:
        typer.echo(f"Unknown zone: {zone}", err=True)
        raise typer.Exit(code=1)
    listed = pool.opponents + ([pool.boss] if pool.boss else [])
    CombatDisplay().show_opponents(pool.zone, listed)


@app.command()
def simulate(
    zone: str = typer.Option("Jungle Ruins", "--zone", "-z", help="Zone to fight in"),
    level: int = typer.Option(1, "--level", "-l", min=1, max=100, help="Player level"),
    player_class: str = typer.Option("Paladin", "--class", "-c", help="Player class"),
    boss: bool = typer.Option(False, "--boss", help="Fight the zone boss"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed the random generator"),
    base_coins: int = typer.Option(10, "--coins", help="Base coin reward"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="Battle config TOML"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Auto-play one battle and print each round."""
    from relic_raider.cli.combat_display import CombatDisplay
    from relic_raider.config import load_config
    from relic_raider.content.catalog import ContentCatalog
    from relic_raider.systems.combat.system import CombatSystem

    _setup_logging(verbose)
    if seed is not None:
        random.seed(seed)

    catalog = ContentCatalog()
    if player_class not in catalog.classes:
        typer.echo(f"Unknown class: {player_class}", err=True)
        raise typer.Exit(code=1)
    try:
        pool = catalog.pool(zone)
    except KeyError:
        typer.echo(f"Unknown zone: {zone}", err=True)
        raise typer.Exit(code=1)
    if boss and pool.boss is None:
        typer.echo(f"{zone} has no boss", err=True)
        raise typer.Exit(code=1)

    opponent = pool.boss if boss else pool.pick()
    system = CombatSystem(load_config(config_path), catalog=catalog, stats=catalog, skills=catalog, weapons=catalog)
    profile = catalog.build_profile(player_class, level)
    actions = system.list_available_actions(profile.equipped_skills)

    display = CombatDisplay()
    state = system.start_battle(profile, opponent)
    display.show_battle_start(state)

    while not state.is_complete and state.current_round <= MAX_ROUNDS:
        action_id = choose_auto_action(state, actions)
        seen = len(state.battle_log)
        display.console.print(f"[bold]Round {state.current_round}[/bold] > {action_id}")
        system.submit_action(state, action_id)
        display.show_entries(state.battle_log[seen:])

    if not state.is_complete:
        typer.echo(f"Battle did not finish within {MAX_ROUNDS} rounds")
        raise typer.Exit(code=2)

    display.show_status(state)
    rewards = system.resolve_rewards(state, opponent, base_coins, player_id=profile.id)
    display.show_result(state, rewards)


if __name__ == "__main__":
    app()
