"""
Tests for the action-point turn scheduler.
"""

import pytest

from crawler.core.constants import LogType, SchedulerPhase
from crawler.effects.stat_effect import StatEffect
from crawler.game.scheduler import TurnScheduler
from crawler.game.state import GameState


class Recorder:
    """Callbacks handed to the scheduler, recording what it asks for."""

    def __init__(self, state: GameState):
        self.state = state
        self.upkeeps = 0
        self.enemy_turns = []
        self.logs: list[tuple[str, LogType]] = []
        self.upkeep_result = True

    def start_player_turn(self) -> bool:
        self.upkeeps += 1
        if not self.upkeep_result:
            self.state.game_active = False
        return self.upkeep_result

    def run_enemy_turn(self, enemy) -> None:
        self.enemy_turns.append((enemy.name, self.state.turn_count))

    def log(self, message: str, log_type: LogType) -> None:
        self.logs.append((message, log_type))


@pytest.fixture
def state(player):
    return GameState(player=player, game_active=True)


@pytest.fixture
def recorder(state):
    return Recorder(state)


@pytest.fixture
def scheduler(state, recorder):
    return TurnScheduler(
        state,
        start_player_turn=recorder.start_player_turn,
        run_enemy_turn=recorder.run_enemy_turn,
        log=recorder.log,
        action_cost=100,
    )


def test_nobody_ready_means_a_tick(scheduler, state, player, make_enemy):
    enemy = make_enemy(9, 9)
    enemy.move_speed = 7
    state.enemies = [enemy]
    assert scheduler.step() is SchedulerPhase.ADVANCING_TIME
    assert state.turn_count == 1
    assert player.ap == player.move_speed
    assert enemy.ap == 7


def test_effective_speed_drives_ap_gain(scheduler, state, player):
    player.add_effect(StatEffect(name="haste", duration=5, move_speed=5))
    scheduler.step()
    assert player.ap == player.move_speed + 5


def test_run_suspends_on_the_player_turn(scheduler, state, player, recorder):
    assert scheduler.run() is SchedulerPhase.AWAITING_PLAYER_INPUT
    assert scheduler.is_player_turn
    assert scheduler.current_actor is player
    assert state.turn_count == 10
    assert recorder.upkeeps == 1
    # Suspended: stepping again changes nothing.
    assert scheduler.step() is SchedulerPhase.AWAITING_PLAYER_INPUT
    assert state.turn_count == 10


def test_commit_pays_the_action_cost(scheduler, state, player):
    scheduler.await_player()
    assert scheduler.commit_player_action() is SchedulerPhase.AWAITING_PLAYER_INPUT
    # -100 AP needs twenty ticks at speed 10.
    assert state.turn_count == 20
    assert player.ap == 100


def test_commit_outside_the_player_turn_is_ignored(scheduler, player):
    assert scheduler.commit_player_action() is SchedulerPhase.ADVANCING_TIME
    assert player.ap == 0


def test_ties_keep_collection_order(scheduler, state, player, make_enemy):
    first = make_enemy(9, 9, name="First")
    second = make_enemy(9, 8, name="Second")
    state.enemies = [first, second]
    player.ap = first.ap = second.ap = 100
    assert scheduler.actors() == [player, first, second]
    first.ap = 150
    assert scheduler.actors() == [first, player, second]


def test_dead_actors_never_act(scheduler, state, make_enemy, recorder):
    corpse = make_enemy(9, 9)
    corpse.hp = 0
    state.enemies = [corpse]
    assert corpse not in scheduler.actors()
    scheduler.run()
    assert recorder.enemy_turns == []
    assert corpse.ap == 0


def test_faster_enemies_act_more_often(scheduler, state, make_enemy, recorder):
    wolf = make_enemy(9, 9, name="Wolf")
    wolf.move_speed = 20
    state.enemies = [wolf]
    scheduler.run()
    assert recorder.enemy_turns == [("Wolf", 5)]
    scheduler.commit_player_action()
    assert recorder.enemy_turns == [("Wolf", 5), ("Wolf", 10), ("Wolf", 15)]
    assert state.turn_count == 20


def test_stunned_player_loses_a_turn(scheduler, state, player, recorder):
    player.stunned = 1
    scheduler.run()
    assert recorder.upkeeps == 1
    assert state.turn_count == 20
    assert player.stunned == 0
    assert any("stunned" in message for message, _ in recorder.logs)


def test_stunned_enemy_skips_its_turn(scheduler, state, make_enemy, recorder):
    enemy = make_enemy(9, 9)
    enemy.stunned = 1
    state.enemies = [enemy]
    scheduler.run()
    # The player wins the tie at turn 10, the enemy's first turn is lost.
    scheduler.commit_player_action()
    assert recorder.enemy_turns == []
    assert enemy.stunned == 0
    scheduler.commit_player_action()
    assert recorder.enemy_turns == [(enemy.name, 20)]


def test_effects_tick_on_their_owners_turn(scheduler, player, recorder):
    player.add_effect(StatEffect(name="battle_shout", duration=1, attack=5))
    scheduler.run()
    assert player.effects == []
    assert ("battle_shout wears off.", LogType.INFO) in recorder.logs


def test_failed_upkeep_ends_the_game(scheduler, recorder):
    recorder.upkeep_result = False
    assert scheduler.run() is SchedulerPhase.GAME_OVER
    assert scheduler.step() is SchedulerPhase.GAME_OVER


def test_inactive_game_is_over(scheduler, state):
    state.game_active = False
    assert scheduler.step() is SchedulerPhase.GAME_OVER


def test_enemy_ending_the_game_stops_the_loop(scheduler, state, make_enemy, recorder):
    enemy = make_enemy(9, 9)
    enemy.move_speed = 20
    state.enemies = [enemy]

    def deadly_turn(actor):
        recorder.enemy_turns.append((actor.name, state.turn_count))
        state.game_active = False

    scheduler.run_enemy_turn = deadly_turn
    assert scheduler.run() is SchedulerPhase.GAME_OVER
    assert len(recorder.enemy_turns) == 1
    assert recorder.upkeeps == 0


def test_reset(scheduler):
    scheduler.end_game()
    scheduler.reset()
    assert scheduler.phase is SchedulerPhase.ADVANCING_TIME
    assert scheduler.current_actor is None


def test_commit_without_a_player_raises(scheduler, state):
    scheduler.phase = SchedulerPhase.AWAITING_PLAYER_INPUT
    state.player = None
    with pytest.raises(RuntimeError):
        scheduler.commit_player_action()


def test_acting_without_an_actor_raises(scheduler):
    scheduler.phase = SchedulerPhase.ACTOR_ACTING
    with pytest.raises(RuntimeError):
        scheduler.step()
