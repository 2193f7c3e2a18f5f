import random
from collections.abc import Sequence

from fastapi import HTTPException
from heliclockter import datetime_utc
from starlette import status

from bladeleague.logic.ranking.standings import (
    calculate_tournament_standings,
    get_participants_by_id,
)
from bladeleague.models.db.match import Match, MatchCreateBody, MatchPhase, PlayoffRound
from bladeleague.models.db.tournament import Tournament
from bladeleague.models.standings import StandingsRow
from bladeleague.store.base import EntityStore
from bladeleague.utils.id_types import ParticipantId, TournamentId
from bladeleague.utils.logging import logger


def get_playoff_qualifiers(
    tournament: Tournament,
    standings: Sequence[StandingsRow],
    seed: int | None = None,
) -> list[ParticipantId]:
    """
    Qualifiers come from the group standings, best first. Without a group phase there is no
    ranking to go by, so the whole roster is shuffled instead, even if some matches were played.
    """
    if tournament.structure.has_groups:
        return [row.participant_id for row in standings]

    qualifiers = list(dict.fromkeys(tournament.participant_ids))
    random.Random(seed).shuffle(qualifiers)
    return qualifiers


def determine_playoff_matches(
    qualifiers: Sequence[ParticipantId],
    playoff_round: PlayoffRound,
    tournament: Tournament,
    now: datetime_utc,
) -> list[MatchCreateBody]:
    bracket_size = playoff_round.bracket_size
    if len(qualifiers) < bracket_size:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"{playoff_round.value} needs at least {bracket_size} qualifiers, "
                f"only {len(qualifiers)} available"
            ),
        )

    seeds = list(qualifiers[:bracket_size])
    return [
        MatchCreateBody(
            league_id=tournament.league_id,
            tournament_id=tournament.id,
            participant1_id=seeds[i],
            participant2_id=seeds[bracket_size - 1 - i],
            date=now,
            phase=MatchPhase.PLAYOFF,
            round_label=playoff_round.value,
        )
        for i in range(bracket_size // 2)
    ]


async def generate_playoffs(
    store: EntityStore,
    tournament_id: TournamentId,
    playoff_round: PlayoffRound,
    seed: int | None = None,
) -> list[Match] | None:
    tournament = await store.get_tournament(tournament_id)
    if tournament is None:
        logger.info(f"Not generating playoffs, tournament {tournament_id} does not exist")
        return None

    if not tournament.structure.has_playoffs:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Playoffs are disabled for this tournament",
        )

    matches = await store.list_matches(tournament_id=tournament_id)
    if any(match.is_playoff_match() for match in matches):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Playoffs have already been generated, remove them before generating again",
        )

    standings: list[StandingsRow] = []
    if tournament.structure.has_groups:
        app_config = await store.get_config()
        standings = calculate_tournament_standings(
            tournament, matches, app_config.scoring_system, await get_participants_by_id(store)
        )

    qualifiers = get_playoff_qualifiers(tournament, standings, seed)
    created = await store.bulk_create_matches(
        determine_playoff_matches(qualifiers, playoff_round, tournament, datetime_utc.now())
    )
    logger.info(
        f"Generated {playoff_round.value} for tournament {tournament_id} "
        f"with {len(created)} matches"
    )
    return created
