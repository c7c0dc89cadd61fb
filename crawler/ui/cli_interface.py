"""
User interface module for the crawler.

A thin terminal front-end: renders game snapshots with rich and reads the
player's commands through prompt_toolkit. It only talks to the ``Game``
action API.
"""

from prompt_toolkit import ANSI, PromptSession
from rich.table import Table
from rich.text import Text

from crawler.core.constants import GameScreen
from crawler.core.utils import ccapture, cprint, crule, make_bar
from crawler.game.engine import ActionResult, Game
from crawler.game.state import GameSnapshot

# one session keeps history
session: PromptSession = PromptSession()

# Movement keys: wasd plus the vi keys for diagonals.
DIRECTION_KEYS: dict[str, tuple[int, int]] = {
    "w": (0, -1),
    "s": (0, 1),
    "a": (-1, 0),
    "d": (1, 0),
    "k": (0, -1),
    "j": (0, 1),
    "h": (-1, 0),
    "l": (1, 0),
    "y": (-1, -1),
    "u": (1, -1),
    "b": (-1, 1),
    "n": (1, 1),
}

HELP_TEXT = (
    "[bold]wasd/hjkl/yubn[/] move or attack, [bold].[/] wait, [bold]1-9[/] skill, "
    "[bold]f X Y[/] shoot an arrow, [bold]x[/] cancel dash, [bold]$[/] shop, [bold]quit[/] exit"
)


def render_map(snapshot: GameSnapshot) -> Text:
    """Draws the explored part of the map, with entities on visible tiles."""
    glyphs: dict[tuple[int, int], tuple[str, str]] = {}
    for effect in snapshot.ground_effects:
        for tile in effect.tiles:
            glyphs[tile] = ("~", effect.color)
    for item in snapshot.items:
        glyphs[item.position] = (item.type.glyph, item.type.color)
    for enemy in snapshot.enemies:
        glyphs[enemy.position] = (enemy.glyph, "bold red")
    if snapshot.arrow_projectile is not None:
        arrow = snapshot.arrow_projectile
        glyphs[(arrow.end_x, arrow.end_y)] = ("*", "bold white")
    if snapshot.player is not None:
        glyphs[snapshot.player.position] = ("@", "bold blue")

    text = Text()
    for y, row in enumerate(snapshot.grid):
        for x, tile in enumerate(row):
            fov = snapshot.fov[y][x]
            if fov.visible and (x, y) in glyphs:
                glyph, style = glyphs[(x, y)]
                text.append(glyph, style=style)
            elif fov.visible:
                text.append(tile.glyph, style="white")
            elif fov.explored:
                text.append(tile.glyph, style="grey30")
            else:
                text.append(" ")
        text.append("\n")
    return text


def render_status(snapshot: GameSnapshot) -> str:
    """Returns the one-line summary of the player's resources."""
    player = snapshot.player
    if player is None:
        return ""
    return (
        f"[bold]{player.name}[/] Lv{player.level}  "
        f"HP {make_bar(player.hp, player.max_hp, color='red')} {player.hp}/{player.max_hp}  "
        f"MP {make_bar(player.mp, player.max_mp, color='blue')} {player.mp}/{player.max_mp}  "
        f"Torch {player.torch}  Arrows {player.arrows}  Gold {player.gold}  "
        f"EXP {player.exp}/{player.next_level_exp}  Floor {snapshot.floor}  Turn {snapshot.turn_count}"
    )


class TerminalInterface:
    """
    Console loop driving a ``Game``.

    Each iteration renders the current snapshot and the screen-specific menu,
    then forwards one command to the game.
    """

    def __init__(self, game: Game) -> None:
        self.game = game
        self.running = True

    def show(self, snapshot: GameSnapshot) -> None:
        crule(f"Floor {snapshot.floor}", style="bold green")
        cprint(render_map(snapshot))
        cprint(render_status(snapshot))
        for entry in reversed(snapshot.logs[:6]):
            cprint(entry.colored_message)

    def ask(self, question: str, table: Table | None = None) -> str:
        prompt = ("\n" + ccapture(table) if table is not None else "") + f"\n{question} > "
        return session.prompt(ANSI(prompt)).strip()

    def choose_skills(self, snapshot: GameSnapshot) -> ActionResult:
        known = set(snapshot.player.skill_ids) if snapshot.player else set()
        skills = [skill for skill in self.game.skills.all() if skill.id not in known]
        table = Table(title=f"Choose up to {snapshot.pending_skill_picks} skills", pad_edge=False)
        table.add_column("#", style="cyan")
        table.add_column("Name", style="bold")
        table.add_column("MP", justify="right")
        table.add_column("Description")
        for i, skill in enumerate(skills, 1):
            table.add_row(str(i), skill.definition.colored_name, str(skill.cost), skill.definition.description)
        answer = self.ask("Skills (space separated)", table)
        chosen = []
        for token in answer.split():
            index = self.get_digit_choice(token) - 1
            if 0 <= index < len(skills):
                chosen.append(skills[index].id)
        return self.game.select_skills(chosen)

    def choose_level_up(self, snapshot: GameSnapshot) -> ActionResult:
        table = Table(title="Level up!", pad_edge=False)
        table.add_column("#", style="cyan")
        table.add_column("Bonus", style="bold")
        for i, option in enumerate(snapshot.level_up_options, 1):
            table.add_row(str(i), option.text)
        index = self.get_digit_choice(self.ask("Bonus", table)) - 1
        if 0 <= index < len(snapshot.level_up_options):
            return self.game.select_level_up_option(snapshot.level_up_options[index].id)
        return ActionResult(ok=False, message="Pick one of the bonuses.")

    def shop(self, snapshot: GameSnapshot) -> ActionResult:
        table = Table(title="Shop", pad_edge=False)
        table.add_column("#", style="cyan")
        table.add_column("Item", style="bold")
        table.add_column("Price", justify="right", style="yellow")
        table.add_column("Description")
        for i, offer in enumerate(snapshot.shop_offers, 1):
            table.add_row(str(i), offer.name, str(offer.price), offer.description)
        table.add_row("q", "Leave", "", "")
        answer = self.ask("Buy", table)
        if answer.lower() == "q":
            return self.game.close_shop()
        index = self.get_digit_choice(answer) - 1
        if 0 <= index < len(snapshot.shop_offers):
            return self.game.purchase_item(snapshot.shop_offers[index].id)
        return ActionResult(ok=False, message="Pick an item or q.")

    def play_turn(self) -> ActionResult:
        answer = self.ask("Command").lower()
        if answer == "quit":
            self.running = False
            return ActionResult(ok=True, message="Goodbye.")
        if answer in DIRECTION_KEYS:
            return self.game.move(*DIRECTION_KEYS[answer])
        if answer == ".":
            return self.game.wait()
        if answer == "x":
            return self.game.cancel_dash()
        if answer == "$":
            return self.game.open_shop()
        if answer.isdigit():
            return self.game.use_skill(int(answer) - 1)
        parts = answer.split()
        if len(parts) == 3 and parts[0] == "f":
            if parts[1].lstrip("-").isdigit() and parts[2].lstrip("-").isdigit():
                return self.game.shoot_arrow(int(parts[1]), int(parts[2]))
        cprint(HELP_TEXT)
        return ActionResult(ok=False, message="Unknown command.")

    def run(self) -> None:
        """Runs the game until it ends or the player quits."""
        while self.running:
            snapshot = self.game.snapshot()
            if snapshot.screen is GameScreen.GAME_OVER:
                self.show(snapshot)
                crule("Game over", style="bold red")
                return
            if snapshot.screen is GameScreen.SKILL_SELECTION:
                self.choose_skills(snapshot)
            elif snapshot.screen is GameScreen.LEVEL_UP:
                self.choose_level_up(snapshot)
            elif snapshot.screen is GameScreen.SHOP:
                self.shop(snapshot)
            else:
                self.show(snapshot)
                self.play_turn()

    @staticmethod
    def get_digit_choice(answer: str) -> int:
        """Returns the number typed by the user, or -1."""
        return int(answer) if answer.isdigit() else -1
