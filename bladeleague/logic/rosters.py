from fastapi import HTTPException
from heliclockter import datetime_utc
from starlette import status

from bladeleague.models.db.league import League
from bladeleague.models.db.participant import Participant
from bladeleague.models.db.shared import get_name_key
from bladeleague.models.db.tournament import (
    Tournament,
    TournamentBody,
    TournamentInsertable,
    TournamentStatus,
)
from bladeleague.store.base import EntityStore
from bladeleague.utils.id_types import ParticipantId, TournamentId
from bladeleague.utils.logging import logger
from bladeleague.utils.types import assert_some


async def list_participants_by_winrate(
    store: EntityStore, search: str | None = None
) -> list[Participant]:
    participants = await store.list_participants()
    if search:
        needle = get_name_key(search)
        participants = [p for p in participants if needle in get_name_key(p.name)]

    return sorted(participants, key=lambda participant: -participant.winrate)


async def get_or_create_participant(store: EntityStore, name: str) -> Participant:
    existing = await store.get_participant_by_name(name)
    if existing is not None:
        return existing

    created = await store.create_participant(name)
    if created is not None:
        return created

    # Someone else created it between the lookup and the insert.
    return assert_some(await store.get_participant_by_name(name))


async def list_leagues_newest_first(
    store: EntityStore,
    *,
    created_after: datetime_utc | None = None,
    created_before: datetime_utc | None = None,
) -> list[League]:
    leagues = [
        league
        for league in await store.list_leagues()
        if (created_after is None or league.created >= created_after)
        and (created_before is None or league.created <= created_before)
    ]
    return sorted(leagues, key=lambda league: league.created, reverse=True)


async def create_tournament(store: EntityStore, body: TournamentBody) -> Tournament | None:
    app_config = await store.get_config()
    if len(app_config.balance_formats) < 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Configure a balance format before creating a tournament",
        )

    if app_config.get_balance_format(body.balance_format_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unknown balance format",
        )

    if body.league_id is not None and await store.get_league(body.league_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="League does not exist",
        )

    participant_ids = list(dict.fromkeys(body.participant_ids))
    tournament = await store.create_tournament(
        TournamentInsertable(
            name=body.name,
            league_id=body.league_id,
            structure=body.structure,
            balance_format_id=body.balance_format_id,
            participant_ids=participant_ids,
            status=TournamentStatus.DRAFT,
            created=datetime_utc.now(),
        )
    )
    if tournament is None:
        return None

    if tournament.league_id is not None and len(participant_ids) > 0:
        await store.add_league_participants(tournament.league_id, participant_ids)

    return tournament


async def add_participant_to_tournament(
    store: EntityStore, tournament_id: TournamentId, participant_id: ParticipantId
) -> Tournament | None:
    """
    Append a participant to the tournament roster. The tournament's league, if any, gains the
    participant at the same time.
    """
    tournament = await store.get_tournament(tournament_id)
    if tournament is None:
        logger.info(f"Not adding participant, tournament {tournament_id} does not exist")
        return None

    if await store.get_participant(participant_id) is None:
        logger.info(f"Not adding participant {participant_id}, it does not exist")
        return None

    if participant_id in tournament.participant_ids:
        return tournament

    participant_ids = [*tournament.participant_ids, participant_id]
    await store.set_tournament_participants(tournament_id, participant_ids)
    if tournament.league_id is not None:
        await store.add_league_participants(tournament.league_id, participant_ids)

    return await store.get_tournament(tournament_id)


async def create_participant_in_tournament(
    store: EntityStore, tournament_id: TournamentId, name: str
) -> Tournament | None:
    if await store.get_tournament(tournament_id) is None:
        logger.info(f"Not creating participant, tournament {tournament_id} does not exist")
        return None

    participant = await store.create_participant(name)
    if participant is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A participant with this name already exists",
        )

    return await add_participant_to_tournament(store, tournament_id, participant.id)


async def set_tournament_status(
    store: EntityStore, tournament_id: TournamentId, tournament_status: TournamentStatus
) -> Tournament | None:
    if await store.get_tournament(tournament_id) is None:
        logger.info(f"Not changing status, tournament {tournament_id} does not exist")
        return None

    await store.set_tournament_status(tournament_id, tournament_status)
    return await store.get_tournament(tournament_id)
