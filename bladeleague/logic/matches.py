from fastapi import HTTPException
from heliclockter import datetime_utc
from starlette import status

from bladeleague.logic.ranking.records import recalculate_participant_records
from bladeleague.logic.rosters import get_or_create_participant
from bladeleague.models.db.match import (
    DuelByNameCreateBody,
    DuelCreateBody,
    Match,
    MatchCreateBody,
)
from bladeleague.models.db.shared import get_name_key
from bladeleague.store.base import EntityStore
from bladeleague.utils.id_types import MatchId, ParticipantId
from bladeleague.utils.logging import logger


def validate_scores(participant1_score: int, participant2_score: int) -> None:
    if participant1_score < 0 or participant2_score < 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Scores cannot be negative",
        )

    if participant1_score == participant2_score:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Draws are not allowed, one participant has to score higher",
        )


def determine_winner(
    participant1_id: ParticipantId,
    participant2_id: ParticipantId,
    participant1_score: int,
    participant2_score: int,
) -> ParticipantId:
    validate_scores(participant1_score, participant2_score)
    return participant1_id if participant1_score > participant2_score else participant2_id


async def resolve_match(
    store: EntityStore,
    match_id: MatchId,
    participant1_score: int,
    participant2_score: int,
) -> Match | None:
    match = await store.get_match(match_id)
    if match is None:
        logger.info(f"Not resolving match {match_id}, it does not exist")
        return None

    if match.is_played:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Match has already been played",
        )

    winner_id = determine_winner(
        match.participant1_id, match.participant2_id, participant1_score, participant2_score
    )
    resolved = await store.resolve_match(
        match_id, participant1_score, participant2_score, winner_id
    )
    if resolved is None:
        return None

    await recalculate_participant_records(
        store, [resolved.participant1_id, resolved.participant2_id]
    )
    logger.info(
        f"Resolved match {match_id} {participant1_score}-{participant2_score}, "
        f"winner {winner_id}"
    )
    return resolved


async def register_duel(store: EntityStore, body: DuelCreateBody) -> Match | None:
    """
    Register an already played duel outside of any tournament. League-tagged duels merge both
    participants into the league roster.
    """
    if body.participant1_id == body.participant2_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A duel needs two different participants",
        )

    winner_id = determine_winner(
        body.participant1_id,
        body.participant2_id,
        body.participant1_score,
        body.participant2_score,
    )

    for participant_id in (body.participant1_id, body.participant2_id):
        if await store.get_participant(participant_id) is None:
            logger.info(f"Not registering duel, participant {participant_id} does not exist")
            return None

    if body.league_id is not None and await store.get_league(body.league_id) is None:
        logger.info(f"Not registering duel, league {body.league_id} does not exist")
        return None

    match = await store.create_match(
        MatchCreateBody(
            league_id=body.league_id,
            participant1_id=body.participant1_id,
            participant2_id=body.participant2_id,
            participant1_score=body.participant1_score,
            participant2_score=body.participant2_score,
            winner_id=winner_id,
            is_played=True,
            date=datetime_utc.now(),
        )
    )
    if body.league_id is not None:
        await store.add_league_participants(
            body.league_id, [body.participant1_id, body.participant2_id]
        )

    await recalculate_participant_records(store, [body.participant1_id, body.participant2_id])
    return match


async def register_duel_by_name(store: EntityStore, body: DuelByNameCreateBody) -> Match | None:
    if get_name_key(body.participant1_name) == get_name_key(body.participant2_name):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A duel needs two different participants",
        )

    validate_scores(body.participant1_score, body.participant2_score)
    if body.league_id is not None and await store.get_league(body.league_id) is None:
        logger.info(f"Not registering duel, league {body.league_id} does not exist")
        return None

    participant1 = await get_or_create_participant(store, body.participant1_name)
    participant2 = await get_or_create_participant(store, body.participant2_name)
    return await register_duel(
        store,
        DuelCreateBody(
            league_id=body.league_id,
            participant1_id=participant1.id,
            participant2_id=participant2.id,
            participant1_score=body.participant1_score,
            participant2_score=body.participant2_score,
        ),
    )
