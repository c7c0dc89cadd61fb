"""
Game engine module for the crawler.

The ``Game`` facade is the only entry point of the rendering layer: it
receives discrete player actions, resolves them through the combat, skill,
relic and shop systems, drives the turn scheduler, and hands back immutable
snapshots of the state.
"""

import math

from pydantic import BaseModel

from crawler.combat.damage import AttackResult, perform_attack
from crawler.combat.npc_ai import process_enemy_turn
from crawler.core.constants import GameScreen, ItemType, LogType, SchedulerPhase
from crawler.core.content import ContentRepository
from crawler.core.logging import log_debug, log_info
from crawler.effects.ground_effect import GroundEffect, VisualEffect
from crawler.entities.enemy import Enemy
from crawler.entities.factory import (
    build_stat_overrides,
    create_player,
    handle_item_pickup,
    handle_monster_split,
    place_entities,
)
from crawler.entities.item import Item
from crawler.entities.player import Player
from crawler.entities.progression import (
    can_level_up,
    get_level_up_options,
    perform_level_up,
)
from crawler.relics.manager import (
    process_attack_relics,
    process_damage_relics,
    process_gold_relics,
    process_kill_relics,
    process_level_up_relics,
    process_skill_relics,
    recharge_relics,
)
from crawler.shop.catalog import buy_item, get_shop_inventory, is_shop_floor
from crawler.skills.base import Skill, SkillContext, SkillOutcome
from crawler.skills.library import perform_dash
from crawler.skills.registry import SkillRegistry
from crawler.world.map_generator import generate_map
from crawler.world.queries import is_position_empty, is_walkable
from crawler.world.visibility import compute_visibility, create_fov_map, is_visible

from .clock import Clock
from .log import GameLog
from .scheduler import TurnScheduler
from .state import ArrowProjectile, GameSnapshot, GameState


# Screens a level up must not interrupt.
_NO_LEVEL_UP_SCREENS = (GameScreen.LEVEL_UP, GameScreen.SKILL_SELECTION, GameScreen.GAME_OVER)


class ActionResult(BaseModel):
    """The answer to a player action."""

    ok: bool
    message: str = ""


class Game:
    """
    A run of the dungeon crawler.

    Every action returns an ``ActionResult``. A failed action leaves the
    state untouched apart from the log.
    """

    def __init__(
        self,
        repository: ContentRepository | None = None,
        clock: Clock | None = None,
    ) -> None:
        """
        Initialize the Game.

        Args:
            repository (ContentRepository | None): Static tables and balance.
            clock (Clock | None): Time source of the arrow marker.

        """
        self.repository = repository or ContentRepository()
        self.balance = self.repository.balance
        self.clock = clock or Clock()
        self.skills = SkillRegistry(self.repository)
        self.log = GameLog()
        self.state = GameState()
        self.scheduler = self._make_scheduler()
        self._dash_skill: Skill | None = None

    # ---- Helpers ----

    def _make_scheduler(self) -> TurnScheduler:
        return TurnScheduler(
            self.state,
            start_player_turn=self._start_player_turn,
            run_enemy_turn=self._run_enemy_turn,
            log=self.add_log,
            action_cost=self.balance.combat.action_cost,
        )

    @property
    def player(self) -> Player:
        if self.state.player is None:
            raise RuntimeError("No game has been started.")
        return self.state.player

    def add_log(self, message: str, log_type: LogType = LogType.INFO) -> None:
        self.log.add(message, log_type, self.state.turn_count)

    def _fail(self, message: str, log_type: LogType = LogType.WARNING) -> ActionResult:
        self.add_log(message, log_type)
        return ActionResult(ok=False, message=message)

    def _check_can_act(self) -> ActionResult | None:
        if not self.state.game_active or self.state.player is None:
            return ActionResult(ok=False, message="The game is not running.")
        if self.state.screen is not GameScreen.PLAYING:
            return ActionResult(ok=False, message="You cannot act right now.")
        if not self.scheduler.is_player_turn:
            return ActionResult(ok=False, message="It is not your turn.")
        return None

    def _walkable(self, x: int, y: int) -> bool:
        return is_walkable(self.state.grid, x, y)

    def _empty(self, x: int, y: int) -> bool:
        return is_position_empty(x, y, self.state.player, self.state.enemies, self.state.items)

    def _enemy_at(self, x: int, y: int) -> Enemy | None:
        for enemy in self.state.enemies:
            if enemy.is_alive() and enemy.is_at(x, y):
                return enemy
        return None

    def _update_fov(self) -> None:
        player = self.player
        compute_visibility(
            self.state.grid,
            self.state.fov,
            player.x,
            player.y,
            self.balance.combat.fov_radius,
        )

    def _skill_context(self) -> SkillContext:
        return SkillContext(
            enemies=self.state.enemies,
            is_walkable=self._walkable,
            is_position_empty=self._empty,
            kill=self._kill_enemy,
            log=self.add_log,
            add_ground_effect=self.state.ground_effects.append,
            add_visual_effect=self.state.visual_effects.append,
        )

    def _commit(self) -> None:
        """Ends the player's action and runs the world until the next input."""
        self._reap_dead_enemies()
        if self.state.game_active:
            self.scheduler.commit_player_action()

    # ---- Lifecycle ----

    def start_game(
        self,
        name: str,
        stats: dict[str, int] | None = None,
        skill_ids: list[str] | None = None,
        difficulty: str = "normal",
        allocation: dict[str, int] | None = None,
    ) -> ActionResult:
        """
        Starts a new run on floor 1.

        Args:
            name (str): The player's name.
            stats (dict[str, int] | None): Overrides of the default stats.
            skill_ids (list[str] | None): Starting skills; when empty the
                player picks them on the skill selection screen.
            difficulty (str): Name of the difficulty preset.
            allocation (dict[str, int] | None): Character-creation points
                spent per stat, applied on top of ``stats``.

        Returns:
            ActionResult: Fails without starting when the allocation is
                invalid.

        """
        overrides = dict(stats or {})
        if allocation:
            try:
                overrides.update(build_stat_overrides(allocation, self.repository))
            except ValueError as e:
                return ActionResult(ok=False, message=str(e))

        self.log.reset()
        self.state = GameState(difficulty=difficulty)
        self.scheduler = self._make_scheduler()
        self._dash_skill = None

        known = [skill_id for skill_id in skill_ids or [] if skill_id in self.skills]
        player = create_player(name, overrides, known, repository=self.repository)
        self.state.player = player
        self._build_floor(1)

        self.state.game_active = True
        if player.skill_ids:
            self.state.screen = GameScreen.PLAYING
        else:
            self.state.screen = GameScreen.SKILL_SELECTION
            self.state.pending_skill_picks = player.skill_slots
        self.scheduler.await_player()

        self.add_log("You wake up on the damp stone floor...", LogType.INFO)
        self.add_log(f"Welcome to the dungeon, {name}. Stay alive.", LogType.INFO)
        if is_shop_floor(1, self.repository):
            self.add_log("A mysterious merchant waits in the shadows...", LogType.GOLD)
        log_info("Game started", {"name": name, "difficulty": difficulty})
        return ActionResult(ok=True, message=f"Welcome, {name}.")

    def _build_floor(self, floor: int) -> None:
        player = self.player
        grid, rooms = generate_map(self.balance.map)
        placement = place_entities(
            rooms,
            grid,
            floor,
            player.luck,
            self.balance.get_difficulty(self.state.difficulty),
            self.repository,
        )
        self.state.floor = floor
        self.state.grid = grid
        self.state.rooms = rooms
        self.state.fov = create_fov_map(len(grid[0]), len(grid))
        self.state.enemies = placement.enemies
        self.state.items = placement.items
        self.state.ground_effects = []
        self.state.visual_effects = []
        self.state.arrow_projectile = None
        self.state.shop_offers = []
        player.x, player.y = placement.player_start
        self._update_fov()
        log_debug(
            "Floor built",
            {"floor": floor, "enemies": len(placement.enemies), "items": len(placement.items)},
        )

    def next_floor(self) -> ActionResult:
        """Descends to the next floor; the player keeps stats, relics and items."""
        if not self.state.game_active or self.state.player is None:
            return ActionResult(ok=False, message="The game is not running.")
        self._dash_skill = None
        self.player.is_dashing = False
        self._build_floor(self.state.floor + 1)
        recharge_relics(self.player)
        self.scheduler.await_player()
        floor = self.state.floor
        self.add_log(f"You step through the portal... Floor {floor}.", LogType.INFO)
        if is_shop_floor(floor, self.repository):
            self.add_log("A merchant has set up shop on this floor.", LogType.GOLD)
        return ActionResult(ok=True, message=f"Welcome to floor {floor}.")

    def _game_over(self, message: str) -> None:
        self.state.screen = GameScreen.GAME_OVER
        self.state.game_active = False
        self.scheduler.end_game()
        self.add_log(message, LogType.DEATH)
        log_info("Game over", {"floor": self.state.floor, "turn": self.state.turn_count})

    # ---- Deaths and progression ----

    def _kill_enemy(self, enemy: Enemy) -> None:
        """Removes a dead enemy and rewards the player."""
        if not any(other is enemy for other in self.state.enemies):
            return
        player = self.player
        index = next(i for i, other in enumerate(self.state.enemies) if other is enemy)
        del self.state.enemies[index]
        self.add_log(f"{enemy.name} is defeated.", LogType.DEATH)
        player.exp += enemy.exp
        self.add_log(f"You gain {enemy.exp} experience.", LogType.LEVEL)

        spawned = handle_monster_split(
            enemy,
            self.state.grid,
            player,
            self.state.enemies,
            self.state.items,
            self.state.floor,
            self.balance.get_difficulty(self.state.difficulty),
            self.repository,
        )
        if spawned:
            self.state.enemies.extend(spawned)
            self.add_log(f"{enemy.name} splits apart!", LogType.COMBAT)

        outcome = process_kill_relics(player, self.state.enemies, enemy, self.repository)
        for message in outcome.messages:
            self.add_log(message, LogType.RELIC)
        if outcome.bonus_gold > 0:
            gained = outcome.bonus_gold + self._gold_relic_bonus(outcome.bonus_gold)
            player.gold += gained
            self.add_log(f"You gain {gained} gold.", LogType.GOLD)

        self._check_level_up()

    def _reap_dead_enemies(self) -> None:
        for enemy in [e for e in self.state.enemies if not e.is_alive()]:
            self._kill_enemy(enemy)

    def _gold_relic_bonus(self, amount: int) -> int:
        """Returns the extra gold the relics add to a gain of ``amount``."""
        outcome = process_gold_relics(self.player, self.state.enemies, amount, self.repository)
        for message in outcome.messages:
            self.add_log(message, LogType.RELIC)
        return outcome.final_gold - amount

    def _check_level_up(self) -> None:
        player = self.player
        if self.state.screen in _NO_LEVEL_UP_SCREENS or not can_level_up(player):
            return
        perform_level_up(player, self.balance.progression)
        self.state.level_up_options = get_level_up_options(
            self.balance.progression.level_up_option_count
        )
        self.state.screen = GameScreen.LEVEL_UP
        self.add_log(f"Level up! You are now level {player.level}.", LogType.LEVEL)

    def select_level_up_option(self, option_id: str) -> ActionResult:
        """Applies one of the offered level-up bonuses."""
        if self.state.screen is not GameScreen.LEVEL_UP:
            return ActionResult(ok=False, message="There is no level up to choose.")
        option = next((o for o in self.state.level_up_options if o.id == option_id), None)
        if option is None:
            return self._fail(f"'{option_id}' is not one of the offered bonuses.")
        player = self.player
        relics = process_level_up_relics(player, self.state.enemies, self.repository)
        for message in relics.messages:
            self.add_log(message, LogType.RELIC)
        gain = option.apply(player, relics.stat_multiplier)
        self.state.level_up_options = []
        self.add_log(f"You improve: {option.text} (+{gain}).", LogType.LEVEL)

        if option.id == "skill_slots":
            self.state.screen = GameScreen.SKILL_SELECTION
            self.state.pending_skill_picks = 1
        else:
            self.state.screen = GameScreen.PLAYING
            self._check_level_up()
        return ActionResult(ok=True, message=option.text)

    def select_skills(self, skill_ids: list[str]) -> ActionResult:
        """Learns the skills picked on the skill selection screen."""
        if self.state.screen is not GameScreen.SKILL_SELECTION:
            return ActionResult(ok=False, message="There are no skills to choose.")
        player = self.player
        if not skill_ids or len(skill_ids) > self.state.pending_skill_picks:
            return self._fail(f"Choose between 1 and {self.state.pending_skill_picks} skills.")
        if len(set(skill_ids)) != len(skill_ids):
            return self._fail("You cannot pick the same skill twice.")
        for skill_id in skill_ids:
            if skill_id not in self.skills:
                return self._fail(f"Unknown skill '{skill_id}'.")
            if skill_id in player.skill_ids:
                return self._fail(f"You already know {skill_id}.")
        if len(player.skill_ids) + len(skill_ids) > player.skill_slots:
            return self._fail("You do not have enough skill slots.")

        player.skill_ids.extend(skill_ids)
        self.state.pending_skill_picks = 0
        self.state.screen = GameScreen.PLAYING
        names = ", ".join(self.repository.skills[skill_id].name for skill_id in skill_ids)
        self.add_log(f"You learn: {names}.", LogType.SKILL)
        self._check_level_up()
        return ActionResult(ok=True, message=names)

    # ---- Turns ----

    def _start_player_turn(self) -> bool:
        """
        Start-of-turn upkeep of the player.

        Returns:
            bool: False if the torch burnt out and the game is over.

        """
        player = self.player
        progression = self.balance.progression
        if self.state.turn_count % progression.regen_interval == 0:
            if player.hp_regen > 0 and player.hp < player.max_hp:
                healed = player.heal(player.hp_regen)
                self.add_log(f"You regenerate {healed} HP.", LogType.HEAL)
            if player.mp_regen > 0 and player.mp < player.max_mp:
                restored = player.restore_mp(player.mp_regen)
                self.add_log(f"You regenerate {restored} MP.", LogType.HEAL)

        player.torch -= 1
        if player.torch <= 0:
            player.torch = 0
            self._game_over("Your torch goes out and the darkness swallows you...")
            return False

        active: list[GroundEffect] = []
        for effect in self.state.ground_effects:
            for enemy in self.state.enemies:
                if not enemy.is_alive():
                    continue
                damage = effect.tick(enemy)
                if damage > 0:
                    self.add_log(
                        f"{enemy.name} takes {damage} damage from {effect.name}!",
                        LogType.SKILL,
                    )
            if effect.expire_tick():
                active.append(effect)
        self.state.ground_effects = active

        # Highlights stay on screen for their duration in player turns.
        visible: list[VisualEffect] = [v for v in self.state.visual_effects if v.duration > 0]
        for effect in visible:
            effect.duration -= 1
        self.state.visual_effects = visible

        self._reap_dead_enemies()
        return True

    def _run_enemy_turn(self, enemy: Enemy) -> None:
        player = self.player

        def enemy_can_enter(x: int, y: int) -> bool:
            if player.is_at(x, y):
                return False
            return not any(
                other is not enemy and other.is_alive() and other.is_at(x, y)
                for other in self.state.enemies
            )

        result = process_enemy_turn(
            enemy,
            player,
            self.state.enemies,
            self._walkable,
            enemy_can_enter,
            self._enemy_attack,
            config=self.balance.combat,
        )
        if result.healed:
            self.add_log(f"{enemy.name} heals {result.healed_target}.", LogType.HEAL)

    def _enemy_attack(self, enemy: Enemy, player: Player) -> None:
        def adjust(damage: int) -> int:
            outcome = process_damage_relics(player, self.state.enemies, damage, self.repository)
            for message in outcome.messages:
                self.add_log(message, LogType.RELIC)
            return outcome.final_damage

        result = perform_attack(enemy, player, adjust)
        if not result.hit:
            self.add_log(f"You dodge the attack of {enemy.name}!", LogType.COMBAT)
            return
        self.add_log(f"{enemy.name} hits you for {result.damage} damage.", LogType.DAMAGE)
        if result.thorns_damage > 0:
            self.add_log(f"{enemy.name} takes {result.thorns_damage} thorns damage.", LogType.COMBAT)
        if result.attacker_died:
            self._kill_enemy(enemy)
        if result.defender_died:
            self._game_over("Darkness claims your mind...")

    # ---- Player actions ----

    def move(self, dx: int, dy: int) -> ActionResult:
        """
        Moves the player by one tile, attacking any enemy standing there.

        While a dash is pending the move resolves the dash instead. Stepping on
        the portal descends to the next floor.
        """
        blocked = self._check_can_act()
        if blocked is not None:
            return blocked
        player = self.player
        if player.is_dashing:
            return self._resolve_dash(dx, dy)

        nx, ny = player.x + dx, player.y + dy
        target = self._enemy_at(nx, ny)
        if target is not None:
            self._player_attack(target)
            self._commit()
            return ActionResult(ok=True, message=f"You attack {target.name}.")

        if not self._walkable(nx, ny):
            return self._fail("Something blocks your way.", LogType.INFO)

        player.x, player.y = nx, ny
        self._update_fov()
        item = next((i for i in self.state.items if i.is_at(nx, ny)), None)
        if item is not None:
            if item.type is ItemType.PORTAL:
                return self.next_floor()
            self._pick_up(item)
        self._commit()
        return ActionResult(ok=True, message="You move.")

    def _pick_up(self, item: Item) -> None:
        player = self.player
        result = handle_item_pickup(player, item, self.state.floor, self.repository)
        self.add_log(result.message, LogType.GOLD if result.consumed else LogType.INFO)
        if item.type is ItemType.GOLD:
            bonus = self._gold_relic_bonus(result.amount)
            if bonus > 0:
                player.gold += bonus
                self.add_log(f"Your relics add {bonus} gold.", LogType.GOLD)
        if result.consumed:
            index = next(i for i, other in enumerate(self.state.items) if other is item)
            del self.state.items[index]

    def _player_attack(self, target: Enemy) -> AttackResult:
        player = self.player

        def adjust(damage: int) -> int:
            outcome = process_attack_relics(
                player, self.state.enemies, target, damage, self.repository
            )
            for message in outcome.messages:
                self.add_log(message, LogType.RELIC)
            return outcome.final_damage

        result = perform_attack(player, target, adjust)
        if not result.hit:
            self.add_log(f"{target.name} dodges your attack!", LogType.COMBAT)
            return result
        crit = " critical" if result.is_crit else ""
        self.add_log(f"You deal {result.damage}{crit} damage to {target.name}.", LogType.COMBAT)
        if result.lifesteal_heal > 0:
            self.add_log(f"You drain {result.lifesteal_heal} HP.", LogType.HEAL)
        if result.defender_died:
            self._kill_enemy(target)
        return result

    def wait(self) -> ActionResult:
        """Spends a turn doing nothing."""
        blocked = self._check_can_act()
        if blocked is not None:
            return blocked
        if self.player.is_dashing:
            return self.cancel_dash()
        self.add_log("You wait.", LogType.INFO)
        self._commit()
        return ActionResult(ok=True, message="You wait.")

    def use_skill(self, slot: int, target: Enemy | tuple[int, int] | None = None) -> ActionResult:
        """
        Casts the skill in a slot.

        Args:
            slot (int): Index of the skill in the player's skill list.
            target (Enemy | tuple[int, int] | None): Explicit target; the
                nearest enemy in range is used when omitted.

        Returns:
            ActionResult: Failed casts cost neither mana nor a turn.

        """
        blocked = self._check_can_act()
        if blocked is not None:
            return blocked
        player = self.player
        if player.is_dashing:
            return self.cancel_dash()
        if slot < 0 or slot >= min(player.skill_slots, len(player.skill_ids)):
            return self._fail("There is no skill in that slot.")
        skill = self.skills.get(player.skill_ids[slot])
        if skill is None:
            return self._fail("Invalid skill.")
        if player.mp < skill.cost:
            return self._fail("Not enough mana!")

        outcome = skill.apply(player, target, self._skill_context())
        if outcome is SkillOutcome.AWAIT_DIRECTION:
            player.mp -= skill.cost
            player.is_dashing = True
            self._dash_skill = skill
            return ActionResult(ok=True, message=f"{skill.name}: choose a direction.")
        if outcome is SkillOutcome.FAILED:
            return ActionResult(ok=False, message=f"{skill.name} has no valid target.")

        player.mp -= skill.cost
        relics = process_skill_relics(player, self.state.enemies, skill.id, self.repository)
        for message in relics.messages:
            self.add_log(message, LogType.RELIC)
        if relics.refund_cost:
            player.restore_mp(skill.cost)
        self.add_log(f"You cast {skill.name}!", LogType.SKILL)
        self._commit()
        return ActionResult(ok=True, message=f"You cast {skill.name}.")

    def _resolve_dash(self, dx: int, dy: int) -> ActionResult:
        player = self.player
        skill = self._dash_skill
        distance = skill.definition.distance if skill is not None else 2
        travelled = perform_dash(player, dx, dy, distance, self._skill_context())
        player.is_dashing = False
        self._dash_skill = None
        self._update_fov()
        self.add_log(f"You dash {travelled} tiles!", LogType.SKILL)
        self._commit()
        return ActionResult(ok=True, message="You dash.")

    def cancel_dash(self) -> ActionResult:
        """Abandons a pending dash and refunds its mana."""
        player = self.state.player
        if player is None or not player.is_dashing:
            return ActionResult(ok=False, message="You are not dashing.")
        refund = self._dash_skill.cost if self._dash_skill is not None else 0
        player.restore_mp(refund)
        player.is_dashing = False
        self._dash_skill = None
        message = "Dash cancelled, mana refunded."
        self.add_log(message, LogType.INFO)
        return ActionResult(ok=True, message=message)

    def shoot_arrow(self, target_x: int, target_y: int) -> ActionResult:
        """Shoots an arrow at the enemy standing on a visible tile in range."""
        blocked = self._check_can_act()
        if blocked is not None:
            return blocked
        player = self.player
        if player.is_dashing:
            return self.cancel_dash()
        combat = self.balance.combat
        if player.arrows <= 0:
            return self._fail("You have no arrows left!")
        target = self._enemy_at(target_x, target_y)
        if target is None:
            return self._fail("There is no target there!")
        if math.hypot(target_x - player.x, target_y - player.y) > combat.arrow_range:
            return self._fail("The target is too far away!")
        if not is_visible(self.state.fov, target_x, target_y):
            return self._fail("You cannot see there!")

        self.state.arrow_projectile = ArrowProjectile(
            start_x=player.x,
            start_y=player.y,
            end_x=target_x,
            end_y=target_y,
            fired_at=self.clock.now(),
        )
        player.arrows -= 1
        target.hp -= combat.arrow_damage
        self.add_log(
            f"Your arrow hits {target.name} for {combat.arrow_damage} damage!",
            LogType.COMBAT,
        )
        if not target.is_alive():
            self._kill_enemy(target)
        self._commit()
        return ActionResult(ok=True, message=f"You shoot {target.name}.")

    # ---- Shop ----

    def open_shop(self) -> ActionResult:
        """Opens the shop of the current floor, if there is one."""
        blocked = self._check_can_act()
        if blocked is not None:
            return blocked
        if self.player.is_dashing:
            return self.cancel_dash()
        if not is_shop_floor(self.state.floor, self.repository):
            return self._fail("There is no shop on this floor.", LogType.INFO)
        if not self.state.shop_offers:
            self.state.shop_offers = get_shop_inventory(
                self.state.floor, repository=self.repository
            )
        self.state.screen = GameScreen.SHOP
        return ActionResult(ok=True, message="Welcome, traveller!")

    def close_shop(self) -> ActionResult:
        if self.state.screen is not GameScreen.SHOP:
            return ActionResult(ok=False, message="The shop is not open.")
        self.state.screen = GameScreen.PLAYING
        return ActionResult(ok=True, message="Come back soon!")

    def purchase_item(self, item_id: str) -> ActionResult:
        """Buys an offer of the open shop."""
        if self.state.screen is not GameScreen.SHOP:
            return ActionResult(ok=False, message="The shop is not open.")
        offer = next((o for o in self.state.shop_offers if o.id == item_id), None)
        if offer is None:
            return self._fail(f"The merchant does not sell '{item_id}'.")
        player = self.player
        result = buy_item(player, offer, self.repository)
        if not result.ok:
            return self._fail(result.message)
        self.add_log(result.message, LogType.GOLD)
        if offer.relic_id is not None:
            self.state.shop_offers = [o for o in self.state.shop_offers if o is not offer]
        if result.opens_skill_selection:
            self.state.screen = GameScreen.SKILL_SELECTION
            self.state.pending_skill_picks = player.skill_slots
        self._check_level_up()
        return ActionResult(ok=True, message=result.message)

    # ---- Snapshots ----

    @property
    def phase(self) -> SchedulerPhase:
        return self.scheduler.phase

    def snapshot(self) -> GameSnapshot:
        """Returns a deep, read-only copy of the current state."""
        state = self.state
        projectile = state.arrow_projectile
        if projectile is not None:
            elapsed = self.clock.now() - projectile.fired_at
            if elapsed >= self.balance.combat.arrow_marker_seconds:
                state.arrow_projectile = None
        return GameSnapshot(
            screen=state.screen,
            phase=self.scheduler.phase,
            player=state.player.model_copy(deep=True) if state.player else None,
            enemies=tuple(e.model_copy(deep=True) for e in state.enemies),
            items=tuple(i.model_copy(deep=True) for i in state.items),
            grid=[row[:] for row in state.grid],
            fov=[[tile.model_copy() for tile in row] for row in state.fov],
            floor=state.floor,
            turn_count=state.turn_count,
            game_active=state.game_active,
            logs=tuple(e.model_copy() for e in self.log.entries),
            ground_effects=tuple(g.model_copy(deep=True) for g in state.ground_effects),
            visual_effects=tuple(v.model_copy(deep=True) for v in state.visual_effects),
            arrow_projectile=state.arrow_projectile.model_copy()
            if state.arrow_projectile
            else None,
            level_up_options=tuple(o.model_copy() for o in state.level_up_options),
            shop_offers=tuple(o.model_copy() for o in state.shop_offers),
            pending_skill_picks=state.pending_skill_picks,
        )
