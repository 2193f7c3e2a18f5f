from collections.abc import Sequence
from typing import NamedTuple

from fastapi import HTTPException
from heliclockter import datetime_utc
from starlette import status

from bladeleague.models.db.match import Match, MatchCreateBody, MatchPhase
from bladeleague.models.db.tournament import Tournament
from bladeleague.store.base import EntityStore
from bladeleague.utils.id_types import MatchId, ParticipantId, TournamentId
from bladeleague.utils.logging import logger

GROUP_ROUND_LABEL_PREFIX = "Jornada"

Pairing = tuple[ParticipantId, ParticipantId]


class GroupScheduleUpdate(NamedTuple):
    matches_to_delete: list[MatchId]
    matches_to_create: list[MatchCreateBody]


def get_number_of_rounds_to_create_round_robin(team_count: int) -> int:
    if team_count < 2:
        return 0

    return team_count - 1 if team_count % 2 == 0 else team_count


def get_group_round_label(round_index: int) -> str:
    return f"{GROUP_ROUND_LABEL_PREFIX} {round_index + 1}"


def get_round_robin_pairings(participant_ids: Sequence[ParticipantId]) -> list[list[Pairing]]:
    """
    Circle method: slot 0 stays put while the other slots rotate one step per round, the last
    slot moving to position 1. Within a round, slot i plays slot n-1-i.

    An odd roster gets an empty bye slot appended, so it takes n rounds instead of n-1 and the
    participant facing the bye sits that round out.
    """
    slots: list[ParticipantId | None] = list(dict.fromkeys(participant_ids))
    round_count = get_number_of_rounds_to_create_round_robin(len(slots))
    if round_count < 1:
        return []

    if len(slots) % 2 != 0:
        slots.append(None)

    slot_count = len(slots)
    rounds: list[list[Pairing]] = []
    for _ in range(round_count):
        pairings: list[Pairing] = []
        for i in range(slot_count // 2):
            home, away = slots[i], slots[slot_count - 1 - i]
            if home is not None and away is not None:
                pairings.append((home, away))

        rounds.append(pairings)
        slots.insert(1, slots.pop())

    return rounds


def build_round_robin_matches(
    participant_ids: Sequence[ParticipantId],
    tournament: Tournament,
    now: datetime_utc,
) -> list[MatchCreateBody]:
    return [
        MatchCreateBody(
            league_id=tournament.league_id,
            tournament_id=tournament.id,
            participant1_id=participant1_id,
            participant2_id=participant2_id,
            date=now,
            phase=MatchPhase.GROUP,
            round_label=get_group_round_label(round_index),
        )
        for round_index, pairings in enumerate(get_round_robin_pairings(participant_ids))
        for participant1_id, participant2_id in pairings
    ]


def determine_group_schedule_update(
    participant_ids: Sequence[ParticipantId],
    existing_matches: Sequence[Match],
    tournament: Tournament,
    now: datetime_utc,
) -> GroupScheduleUpdate:
    """
    Replace every unplayed group match by the ideal schedule of the current roster, leaving out
    the pairings that already have a played result.
    """
    group_matches = [match for match in existing_matches if match.is_group_match()]
    played_pairings = {match.get_pairing_key() for match in group_matches if match.is_played}

    return GroupScheduleUpdate(
        matches_to_delete=[match.id for match in group_matches if not match.is_played],
        matches_to_create=[
            match
            for match in build_round_robin_matches(participant_ids, tournament, now)
            if match.get_pairing_key() not in played_pairings
        ],
    )


async def regenerate_group_schedule(
    store: EntityStore, tournament_id: TournamentId
) -> GroupScheduleUpdate | None:
    tournament = await store.get_tournament(tournament_id)
    if tournament is None:
        logger.info(f"Not regenerating schedule, tournament {tournament_id} does not exist")
        return None

    if not tournament.structure.has_groups:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Tournament has no group phase",
        )

    participant_ids = list(dict.fromkeys(tournament.participant_ids))
    if len(participant_ids) < 2:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least 2 participants are required to generate a schedule",
        )

    existing_matches = await store.list_matches(tournament_id=tournament_id)
    if any(match.is_playoff_match() for match in existing_matches):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot regenerate the group schedule after playoffs have been generated",
        )

    update = determine_group_schedule_update(
        participant_ids, existing_matches, tournament, datetime_utc.now()
    )
    if len(update.matches_to_delete) > 0:
        await store.delete_matches(update.matches_to_delete)
    if len(update.matches_to_create) > 0:
        await store.bulk_create_matches(update.matches_to_create)

    logger.info(
        f"Regenerated group schedule of tournament {tournament_id}: "
        f"removed {len(update.matches_to_delete)} unplayed, "
        f"created {len(update.matches_to_create)} matches"
    )
    return update
