"""
Turn manager module for the skirmish engine.

Drives the turn loop: each round renders the world, then lets every living
creature act once, player first, and removes the creatures that died.
"""

from catchery import log_debug
from core.audit import AuditSink
from core.constants import AuditAction, is_opponent
from core.utils import cprint, crule
from creatures.creature import Creature, TurnOutcome
from ui.grid_renderer import GridRenderer
from world.world import World


class TurnManager:
    """Manages the flow of a run: turn order, actions and deaths.

    The manager holds no combat logic of its own: it schedules creatures and
    checks the consequences of their turns. Creatures whose HP dropped to
    zero or below are removed from the world and never scheduled again.
    """

    def __init__(
        self,
        world: World,
        player: Creature,
        renderer: GridRenderer | None = None,
        audit: AuditSink | None = None,
    ) -> None:
        """Initialize the TurnManager.

        Args:
            world (World): The populated world.
            player (Creature): The creature controlled by the user.
            renderer (GridRenderer | None): Draws the world at the start of
                every turn; nothing is drawn when None.
            audit (AuditSink | None): Receives death notifications; defaults
                to the world's sink.

        """
        self.world = world
        self.player = player
        self.renderer = renderer
        self.audit: AuditSink = audit or world.audit
        # Round counter, starting at zero before the first turn.
        self.turn_number: int = 0
        # Every outcome produced so far, in order.
        self.history: list[TurnOutcome] = []

    @property
    def is_over(self) -> bool:
        """The run ends when the player is dead or no opponent is left."""
        return not self.player.is_alive() or not self.get_alive_opponents(self.player)

    @property
    def player_won(self) -> bool:
        return self.player.is_alive() and not self.get_alive_opponents(self.player)

    def get_alive_opponents(self, actor: Creature) -> list[Creature]:
        """Returns the living creatures in the world hostile to the actor."""
        return [
            creature
            for creature in self.world.creatures()
            if creature.is_alive()
            and is_opponent(actor.creature_type, creature.creature_type)
        ]

    def turn_order(self) -> list[Creature]:
        """Player first, then the other creatures in placement order."""
        others = [c for c in self.world.creatures() if c is not self.player]
        if self.world.has_creature(self.player):
            return [self.player] + others
        return others

    def run_turn(self) -> bool:
        """Plays one round.

        Returns:
            bool: True if the run should continue, False once it is over.

        """
        if self.is_over:
            return False

        self.turn_number += 1
        crule(f"Turn {self.turn_number}", style="cyan")
        if self.renderer is not None:
            self.renderer.render(self.world.snapshot(self.player))
        for creature in self.world.creatures():
            cprint(f"    {creature.get_status_line()}")

        for creature in self.turn_order():
            # A creature killed earlier in the round does not act.
            if not creature.is_alive() or not self.world.has_creature(creature):
                continue
            outcome = creature.perform_action()
            self.history.append(outcome)
            self._report(outcome)
            self._remove_dead()
            if self.is_over:
                return False
        return True

    def run(self, max_turns: int | None = None) -> bool:
        """Plays rounds until the run is over or `max_turns` is reached.

        Returns:
            bool: True if the player won.

        """
        while max_turns is None or self.turn_number < max_turns:
            if not self.run_turn():
                break
        self.final_report()
        return self.player_won

    def final_report(self) -> None:
        crule("Final Report", style="bold blue")
        if self.player_won:
            cprint("[bold green]All enemies have been defeated. You win![/]")
        elif not self.player.is_alive():
            cprint("[bold red]You have been defeated.[/]")
        else:
            cprint(f"[yellow]The run stopped after {self.turn_number} turns.[/]")
        cprint(f"    {self.player.get_status_line()}")

    def _report(self, outcome: TurnOutcome) -> None:
        color = outcome.resolved.color if outcome.success else "yellow"
        cprint(f"    [{color}]{outcome.actor}[/]: {outcome.detail}")

    def _remove_dead(self) -> None:
        for creature in self.world.creatures():
            if creature.is_alive():
                continue
            self.world.remove_creature(creature)
            self.audit.record(
                creature.name, AuditAction.DEATH, f"{creature.name} has been defeated."
            )
            cprint(f"    [bold red]{creature.name} has been defeated![/]")
            log_debug(f"Removed {creature.name} from the turn order")
