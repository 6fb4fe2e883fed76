"""Command-line interface for codenames-live."""

import asyncio
import logging
import random
from typing import Optional

import click

from .client import GameClient, Identity
from .codes import generate_room_code
from .config import GameConfig, load_config
from .game import Board, BoardGenerator, ClueEntry, GuessEntry, Phase, Role, Team
from .sync import MemoryStore, RoomSynchronizer

CLUE_WORDS = ["ANIMAL", "TRAVEL", "MUSIC", "NATURE", "SPORT", "HISTORY", "FOOD", "SPACE"]


def _make_generator(config: GameConfig, seed: Optional[int]) -> BoardGenerator:
    if config.wordlist_path is not None:
        return BoardGenerator.from_file(config.wordlist_path, seed=seed)
    return BoardGenerator(seed=seed)


@click.group()
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), help="Config JSON file")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_path: Optional[str], verbose: bool):
    """Shared Codenames rooms."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = load_config(config_path)


@main.command()
@click.option("--seed", "-s", type=int, help="Random seed for reproducibility")
@click.option("--starting-team", type=click.Choice(["red", "blue"]), help="Team that opens the round")
@click.pass_obj
def generate_board(config: GameConfig, seed: Optional[int], starting_team: Optional[str]):
    """Print a fresh board in spymaster and operative views."""
    generator = _make_generator(config, seed)
    team = Team(starting_team) if starting_team else generator.choose_starting_team()
    board = Board(generator.generate_board(team))

    click.echo(f"Starting team: {team.value.upper()}\n")
    click.echo("Spymaster view:")
    click.echo(board.render_for_spymaster())
    click.echo("Operative view:")
    click.echo(board.render_for_operative())


@main.command()
@click.option("--count", "-n", default=1, help="Number of codes")
@click.pass_obj
def room_code(config: GameConfig, count: int):
    """Print fresh room codes."""
    for _ in range(count):
        click.echo(generate_room_code(config.room_code_length, config.room_code_alphabet))


async def _simulate(config: GameConfig, seed: Optional[int], max_turns: int) -> GameClient:
    rng = random.Random(seed)
    synchronizer = RoomSynchronizer(
        MemoryStore(), versioned=config.versioned_writes, max_retries=config.max_write_retries
    )
    generator = _make_generator(config, seed)

    def client(uid: str, name: str) -> GameClient:
        return GameClient(Identity(uid=uid, display_name=name), synchronizer, config, generator, rng=rng)

    host = client("red-spy", "Red Spymaster")
    players = {
        (Team.RED, Role.SPYMASTER): host,
        (Team.RED, Role.OPERATIVE): client("red-op", "Red Operative"),
        (Team.BLUE, Role.SPYMASTER): client("blue-spy", "Blue Spymaster"),
        (Team.BLUE, Role.OPERATIVE): client("blue-op", "Blue Operative"),
    }

    room = await host.create_room()
    code = room.room_code
    for (team, role), player in players.items():
        if player is not host:
            await player.join_room(code)
        await player.join_team(code, team)
        await player.select_role(code, role)
    room = await host.start_game(code)

    for _ in range(max_turns):
        game = room.game
        if game is None or game.game_over:
            break
        team = game.current_turn
        spymaster = players[(team, Role.SPYMASTER)]
        operative = players[(team, Role.OPERATIVE)]

        room = await spymaster.submit_clue(code, rng.choice(CLUE_WORDS), rng.randint(1, 3))
        while room.game and not room.game.game_over and room.game.phase == Phase.GUESS:
            if room.game.current_turn != team:
                break
            if rng.random() < 0.1:
                room = await operative.end_turn(code)
                break
            hidden = [c.id for c in room.game.board if not c.revealed]
            room = await operative.guess_card(code, rng.choice(hidden))
    return host


@main.command()
@click.option("--seed", "-s", type=int, help="Random seed for reproducibility")
@click.option("--max-turns", default=100, help="Safety limit on turns")
@click.pass_obj
def simulate(config: GameConfig, seed: Optional[int], max_turns: int):
    """Play a random game between four local clients and print its log."""
    host = asyncio.run(_simulate(config, seed, max_turns))
    room = next(iter(host.rooms.values()))
    game = room.game

    click.echo(f"Room {room.room_code}, {game.starting_team.value.upper()} starts")
    click.echo("=" * 60)
    for entry in game.log:
        who = f"{entry.team.value.upper():4} {entry.player_name}"
        if isinstance(entry, ClueEntry):
            click.echo(f"{who}: clue {entry.clue_word} {entry.clue_number}")
        elif isinstance(entry, GuessEntry):
            click.echo(f"{who}: guessed {entry.guessed_word} ({entry.card_type.value})")
        else:
            click.echo(f"{who}: passed")
    click.echo("=" * 60)
    for team in Team:
        score = game.scores[team]
        click.echo(f"{team.value.upper():4} {score.found}/{score.total}")
    if game.winner:
        click.echo(f"Winner: {game.winner.value.upper()} ({game.win_reason.value})")
    else:
        click.echo("No winner within the turn limit")


if __name__ == "__main__":
    main()
