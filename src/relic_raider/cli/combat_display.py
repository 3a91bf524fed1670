"""Combat display helpers — battle narration and reward panels."""
from __future__ import annotations

from typing import Iterable

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from relic_raider.models.combat import BattleLogEntry, BattleState
from relic_raider.models.opponent import OpponentDefinition, Zone
from relic_raider.models.reward import RewardResult

console = Console()

RARITY_COLORS = {
    "COMMON": "white",
    "UNCOMMON": "green",
    "RARE": "blue",
    "LEGENDARY": "magenta",
    "MYTHIC": "bold yellow",
}

STATUS_COLORS = {
    "burn": "red", "poison": "green", "bleed": "dark_red",
    "freeze": "cyan", "stun": "yellow", "slow": "blue",
    "defense_boost": "bright_white",
}


def _hp_bar(current: int, maximum: int, width: int = 12) -> str:
    pct = max(0.0, current / maximum) if maximum > 0 else 0.0
    filled = int(pct * width)
    color = "green" if pct > 0.5 else ("yellow" if pct > 0.25 else "red")
    return f"[{color}]{'█' * filled}[/{color}][dim]{'░' * (width - filled)}[/dim] [{color}]{current}/{maximum}[/{color}]"


class CombatDisplay:
    def __init__(self, out: Console | None = None) -> None:
        self.console = out or console

    def show_zones(self, zones: Iterable[Zone]) -> None:
        table = Table(title="Zones", box=box.SIMPLE_HEAVY)
        table.add_column("Zone", style="bold")
        table.add_column("Theme")
        table.add_column("Levels", justify="center")
        table.add_column("XP x", justify="right")
        table.add_column("Boss", style="magenta")
        for zone in zones:
            table.add_row(zone.name, zone.theme, f"{zone.min_level}-{zone.max_level}", f"{zone.xp_multiplier:g}", zone.boss or "-")
        self.console.print(table)

    def show_opponents(self, zone: Zone, opponents: Iterable[OpponentDefinition]) -> None:
        table = Table(title=f"{zone.name} ({zone.theme})", box=box.SIMPLE_HEAVY)
        table.add_column("Opponent", style="bold")
        table.add_column("Rarity")
        table.add_column("HP", justify="right")
        table.add_column("ATK", justify="right")
        table.add_column("DEF", justify="right")
        for opp in opponents:
            color = RARITY_COLORS.get(opp.rarity.value, "white")
            name = f"{opp.name} [magenta](boss)[/magenta]" if opp.is_boss else opp.name
            table.add_row(name, f"[{color}]{opp.rarity.value}[/{color}]", str(opp.base_hp), str(opp.base_attack), str(opp.base_defense))
        self.console.print(table)

    def show_battle_start(self, state: BattleState) -> None:
        label = "[bold magenta]BOSS FIGHT[/bold magenta]" if state.is_boss else "[bold red]BATTLE![/bold red]"
        sparkle = "  [yellow]✦ sparkling ✦[/yellow]" if state.beast_stats.is_sparkling else ""
        stats = state.beast_stats
        self.console.print(Panel(
            f"{label}\n\n{state.beast_name}{sparkle}\n"
            f"HP {stats.hp}  ATK {stats.attack}  DEF {stats.defense}",
            border_style="magenta" if state.is_boss else "red", box=box.HEAVY,
        ))

    def show_entries(self, entries: Iterable[BattleLogEntry]) -> None:
        for entry in entries:
            self.console.print(f"  {self.describe(entry)}")

    @staticmethod
    def describe(entry: BattleLogEntry) -> str:
        """One line of narration for a log entry."""
        extra = f" [dim]({'; '.join(entry.messages)})[/dim]" if entry.messages else ""
        event = entry.event
        if event == "blocked":
            what = entry.skill_name or "Action"
            return f"[yellow]{what} blocked: {entry.reason}[/yellow]"
        if event == "beast_stunned":
            return "[cyan]The beast is stunned and cannot act[/cyan]"
        if event == "beast_attack":
            if entry.reason == "dodged":
                return "[green]You dodged the beast's attack[/green]"
            if entry.reason:
                return f"[green]The beast missed[/green]{extra}"
            crit = " [bold red]CRIT[/bold red]" if entry.critical else ""
            return f"[red]The beast hits you for {entry.damage}[/red]{crit}{extra}"
        if event in ("attack", "special", "ultimate"):
            if entry.reason == "dodged":
                return "[dim]The beast dodged your attack[/dim]"
            if entry.reason:
                return f"[dim]Your {event} {entry.reason}[/dim]"
            crit = " [bold yellow]CRIT[/bold yellow]" if entry.critical else ""
            return f"[bold]{event.capitalize()}[/bold] for {entry.damage}{crit}{extra}"
        if event == "defend":
            return f"[blue]You brace yourself[/blue] (x{entry.damage_reduction}){extra}"
        if event == "skill":
            if entry.healing:
                return f"[green]{entry.skill_name} restores {entry.healing} HP[/green]"
            if entry.damage:
                return f"[bold]{entry.skill_name}[/bold] for {entry.damage}{extra}"
            return f"[bold]{entry.skill_name}[/bold]{extra}"
        if event == "status_tick":
            return f"[red]Effects deal {entry.damage} damage[/red]{extra}"
        return f"[dim]{event}[/dim]{extra}"

    def show_status(self, state: BattleState) -> None:
        content = Text.from_markup(
            f"  Round {state.current_round}\n"
            f"  {state.beast_name[:24]:<24} {_hp_bar(state.beast_hp, state.beast_max_hp)}\n"
            f"  {'You':<24} {_hp_bar(state.player_hp, state.player_max_hp)}\n"
            f"  Energy {state.energy}  Ultimate {state.ultimate_progress}%"
        )
        effects = [
            f"[{STATUS_COLORS.get(s.value, 'white')}]{s.value}({e.duration})[/]"
            for s, e in state.beast_status_effects.items()
        ]
        if effects:
            content.append_text(Text.from_markup(f"\n  Beast: {' '.join(effects)}"))
        self.console.print(Panel(content, box=box.ROUNDED, width=60))

    def show_result(self, state: BattleState, rewards: RewardResult) -> None:
        if rewards.victory:
            lines = [f"[bold green]{rewards.message}[/bold green]", f"Coins: {rewards.coins}   XP: {rewards.xp}"]
            for entry in rewards.loot:
                color = RARITY_COLORS.get(entry.item.rarity.value, "white")
                lines.append(f"  [{color}]{entry.item.name}[/{color}] x{entry.quantity}")
            border = "green"
        else:
            lines = [f"[bold red]{rewards.message}[/bold red]"]
            border = "red"
        if rewards.notification:
            n = rewards.notification
            verdict = "held its ground" if n.boss_won else "has fallen"
            lines.append(f"\n[magenta]{n.boss_name} {verdict}[/magenta] (returns in {n.cooldown_hours}h)")
        lines.append(f"[dim]{state.current_round} rounds[/dim]")
        self.console.print(Panel("\n".join(lines), border_style=border, box=box.ROUNDED))
