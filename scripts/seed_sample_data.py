#!/usr/bin/env python3
import argparse
import asyncio
import random

from bladeleague.config import config
from bladeleague.database import database
from bladeleague.logic.configuration import add_balance_format
from bladeleague.logic.matches import resolve_match
from bladeleague.logic.ranking.standings import get_tournament_standings
from bladeleague.logic.rosters import create_tournament, get_or_create_participant
from bladeleague.logic.scheduling.playoffs import generate_playoffs
from bladeleague.logic.scheduling.round_robin import regenerate_group_schedule
from bladeleague.models.db.app_config import ScoringSystem
from bladeleague.models.db.blade import BladeBody, BladeTier
from bladeleague.models.db.match import PlayoffRound
from bladeleague.models.db.tournament import TournamentBody, TournamentStructure
from bladeleague.store.base import EntityStore
from bladeleague.store.database import DatabaseEntityStore
from bladeleague.utils.types import assert_some

SAMPLE_PARTICIPANT_NAMES = [
    "Valt",
    "Shu",
    "Rantaro",
    "Daigo",
    "Wakiya",
    "Free",
    "Lui",
    "Xander",
    "Aiger",
    "Hyuga",
]

SAMPLE_BLADES = [
    ("Valkyrie", BladeTier.S),
    ("Spriggan", BladeTier.S),
    ("Achilles", BladeTier.A),
    ("Longinus", BladeTier.A),
    ("Fafnir", BladeTier.B),
    ("Ragnaruk", BladeTier.C),
]


async def seed(
    store: EntityStore, tournament_name: str, participant_count: int, seed_value: int
) -> None:
    rng = random.Random(seed_value)

    app_config = await store.get_config()
    balance_format = next(iter(app_config.balance_formats), None) or assert_some(
        await add_balance_format(store, "Standard")
    )

    for name, tier in SAMPLE_BLADES:
        await store.create_blade(BladeBody(name=name, tier=tier))

    league = await store.create_league(f"{tournament_name} League")
    participants = [
        await get_or_create_participant(store, name)
        for name in SAMPLE_PARTICIPANT_NAMES[:participant_count]
    ]
    tournament = await create_tournament(
        store,
        TournamentBody(
            name=tournament_name,
            league_id=league.id if league is not None else None,
            structure=TournamentStructure.ROUND_ROBIN_PLUS_PLAYOFFS,
            balance_format_id=balance_format.id,
            participant_ids=[participant.id for participant in participants],
        ),
    )
    if tournament is None:
        print(f"Tournament {tournament_name} already exists, nothing to seed")
        return

    await regenerate_group_schedule(store, tournament.id)
    for match in await store.list_matches(tournament_id=tournament.id):
        winning_score = rng.randint(2, 5)
        losing_score = rng.randint(0, winning_score - 1)
        scores = (
            (winning_score, losing_score) if rng.random() < 0.5 else (losing_score, winning_score)
        )
        await resolve_match(store, match.id, *scores)

    if len(participants) >= PlayoffRound.SEMI_FINAL.bracket_size:
        await generate_playoffs(store, tournament.id, PlayoffRound.SEMI_FINAL)

    standings = assert_some(await get_tournament_standings(store, tournament.id))
    for position, row in enumerate(standings):
        print(f"{position + 1}. {row.name}: {row.points} points, {row.wins}/{row.played} wins")


async def async_main() -> None:
    parser = argparse.ArgumentParser(
        description="Seed a league with a round robin + playoffs tournament and random results."
    )
    parser.add_argument("--tournament-name", type=str, default="Sample Cup")
    parser.add_argument("--participants", type=int, default=6)
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    if not 2 <= args.participants <= len(SAMPLE_PARTICIPANT_NAMES):
        raise ValueError(
            f"--participants must be between 2 and {len(SAMPLE_PARTICIPANT_NAMES)}"
        )

    await database.connect()
    try:
        store = DatabaseEntityStore(
            database,
            ScoringSystem(win=config.default_scoring_win, loss=config.default_scoring_loss),
        )
        await seed(store, args.tournament_name, int(args.participants), int(args.seed))
    finally:
        await database.disconnect()


if __name__ == "__main__":
    asyncio.run(async_main())
