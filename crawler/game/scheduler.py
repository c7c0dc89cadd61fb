"""
Turn scheduler module for the crawler.

An action-point (AP) driven state machine deciding who acts next. Time
advances until some actor has enough AP to act; enemies act on their own,
while the player's turn suspends the machine until an action is committed.
"""

from collections.abc import Callable
from typing import cast

from crawler.combat.damage import get_effective_move_speed
from crawler.combat.npc_ai import process_stun, update_effects
from crawler.core.constants import LogType, SchedulerPhase
from crawler.core.logging import log_debug
from crawler.entities.base import Entity
from crawler.entities.enemy import Enemy

from .state import GameState


class TurnScheduler:
    """
    Resumable readiness-queue simulation.

    Phases:
        ADVANCING_TIME: pick the readiest actor, or tick time if nobody can act.
        ACTOR_ACTING: the chosen actor resolves effects, stun and its turn.
        AWAITING_PLAYER_INPUT: suspended until ``commit_player_action``.
        GAME_OVER: terminal.

    The scheduler owns no game rules: the player's start-of-turn upkeep and
    the enemies' turns are callbacks supplied by the game.
    """

    def __init__(
        self,
        state: GameState,
        start_player_turn: Callable[[], bool],
        run_enemy_turn: Callable[[Enemy], None],
        log: Callable[[str, LogType], None],
        action_cost: int = 100,
    ) -> None:
        """
        Initialize the TurnScheduler.

        Args:
            state (GameState): The state of the run.
            start_player_turn (Callable[[], bool]): Player upkeep, returns False
                when it ended the game.
            run_enemy_turn (Callable[[Enemy], None]): Runs one enemy's turn.
            log (Callable[[str, LogType], None]): Player-facing log.
            action_cost (int): AP spent by every action.

        """
        self.state = state
        self.start_player_turn = start_player_turn
        self.run_enemy_turn = run_enemy_turn
        self.log = log
        self.action_cost = action_cost
        self.phase = SchedulerPhase.ADVANCING_TIME
        self.current_actor: Entity | None = None

    @property
    def is_player_turn(self) -> bool:
        return self.phase is SchedulerPhase.AWAITING_PLAYER_INPUT

    def actors(self) -> list[Entity]:
        """Living actors sorted by AP, highest first. Ties keep list order."""
        player = self.state.player
        candidates: list[Entity] = [player] if player is not None else []
        candidates.extend(self.state.enemies)
        alive = [actor for actor in candidates if actor.is_alive()]
        return sorted(alive, key=lambda actor: actor.ap, reverse=True)

    def await_player(self) -> None:
        """Hands control to the player without advancing time."""
        if self.phase is not SchedulerPhase.GAME_OVER:
            self.current_actor = self.state.player
            self.phase = SchedulerPhase.AWAITING_PLAYER_INPUT

    def end_game(self) -> None:
        self.phase = SchedulerPhase.GAME_OVER
        self.current_actor = None

    def reset(self) -> None:
        self.phase = SchedulerPhase.ADVANCING_TIME
        self.current_actor = None

    def step(self) -> SchedulerPhase:
        """
        Performs a single transition of the state machine.

        Returns:
            SchedulerPhase: The phase after the transition.

        """
        if not self.state.game_active or self.state.player is None:
            self.end_game()
        if self.phase in (SchedulerPhase.GAME_OVER, SchedulerPhase.AWAITING_PLAYER_INPUT):
            return self.phase
        if self.phase is SchedulerPhase.ADVANCING_TIME:
            self._advance_time()
        else:
            self._act()
        return self.phase

    def run(self) -> SchedulerPhase:
        """Steps until the player must act or the game is over."""
        while self.phase not in (
            SchedulerPhase.AWAITING_PLAYER_INPUT,
            SchedulerPhase.GAME_OVER,
        ):
            self.step()
        return self.phase

    def commit_player_action(self) -> SchedulerPhase:
        """
        Pays the AP of the player's action and resumes the simulation.

        Returns:
            SchedulerPhase: The phase once the machine suspends again.

        """
        if self.phase is not SchedulerPhase.AWAITING_PLAYER_INPUT:
            return self.phase
        player = self.state.player
        if player is None:
            raise RuntimeError("There is no player to commit an action for.")
        player.ap -= self.action_cost
        self.current_actor = None
        self.phase = SchedulerPhase.ADVANCING_TIME
        return self.run()

    def _advance_time(self) -> None:
        actors = self.actors()
        if not actors:
            self.end_game()
            return
        readiest = actors[0]
        if readiest.ap >= self.action_cost:
            self.current_actor = readiest
            self.phase = SchedulerPhase.ACTOR_ACTING
            return
        # Nobody can act: one tick passes for every living actor.
        self.state.turn_count += 1
        for actor in actors:
            actor.ap += get_effective_move_speed(actor)

    def _act(self) -> None:
        actor = self.current_actor
        if actor is None:
            raise RuntimeError("No actor was selected to act.")
        for name in update_effects(actor):
            if actor.is_player:
                self.log(f"{name} wears off.", LogType.INFO)

        if process_stun(actor):
            if actor.is_player:
                self.log("You are stunned and lose your turn.", LogType.WARNING)
            else:
                self.log(f"{actor.name} is stunned.", LogType.INFO)
            actor.ap -= self.action_cost
            self._next_phase()
            return

        if actor.is_player:
            if self.start_player_turn() and self.state.game_active:
                self.phase = SchedulerPhase.AWAITING_PLAYER_INPUT
            else:
                self.end_game()
            return

        enemy = cast(Enemy, actor)
        self.run_enemy_turn(enemy)
        enemy.ap -= self.action_cost
        log_debug("Enemy acted", {"enemy": enemy.name, "ap": enemy.ap})
        self._next_phase()

    def _next_phase(self) -> None:
        self.current_actor = None
        if self.state.game_active:
            self.phase = SchedulerPhase.ADVANCING_TIME
        else:
            self.end_game()
