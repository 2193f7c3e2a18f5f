from collections.abc import Sequence
from typing import NamedTuple

from fastapi import HTTPException
from starlette import status

from bladeleague.models.db.match import Match
from bladeleague.models.db.tournament import Tournament, TournamentStructure
from bladeleague.store.base import EntityStore
from bladeleague.utils.id_types import MatchId, TournamentId
from bladeleague.utils.logging import logger


class StructureChange(NamedTuple):
    structure: TournamentStructure
    match_ids_to_delete: list[MatchId]


def determine_structure_change(
    tournament: Tournament,
    matches: Sequence[Match],
    *,
    has_groups: bool,
    has_playoffs: bool,
) -> StructureChange:
    """
    Work out the new structure and which matches it invalidates.

    Dropping a phase removes that phase's matches. Adding the group phase back removes every
    match of the tournament, played ones included, because the playoffs were seeded without
    it. Adding playoffs removes nothing.
    """
    if not has_groups and not has_playoffs:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A tournament needs at least one active phase",
        )

    current = tournament.structure
    to_delete: list[Match] = []
    if current.has_groups and not has_groups:
        to_delete += [match for match in matches if match.is_group_match()]
    if not current.has_groups and has_groups:
        to_delete += matches
    if current.has_playoffs and not has_playoffs:
        to_delete += [match for match in matches if match.is_playoff_match()]

    return StructureChange(
        structure=TournamentStructure.from_phases(has_groups=has_groups, has_playoffs=has_playoffs),
        match_ids_to_delete=list(dict.fromkeys(match.id for match in to_delete)),
    )


async def change_tournament_phases(
    store: EntityStore,
    tournament_id: TournamentId,
    *,
    has_groups: bool,
    has_playoffs: bool,
) -> StructureChange | None:
    tournament = await store.get_tournament(tournament_id)
    if tournament is None:
        logger.info(f"Not changing structure, tournament {tournament_id} does not exist")
        return None

    matches = await store.list_matches(tournament_id=tournament_id)
    change = determine_structure_change(
        tournament, matches, has_groups=has_groups, has_playoffs=has_playoffs
    )
    if change.structure is tournament.structure:
        return change

    if len(change.match_ids_to_delete) > 0:
        logger.warning(
            f"Changing tournament {tournament_id} from {tournament.structure.value} to "
            f"{change.structure.value} deletes {len(change.match_ids_to_delete)} matches"
        )

    await store.set_tournament_structure(
        tournament_id, change.structure, change.match_ids_to_delete
    )
    return change


async def toggle_group_stage(
    store: EntityStore, tournament_id: TournamentId
) -> StructureChange | None:
    tournament = await store.get_tournament(tournament_id)
    if tournament is None:
        logger.info(f"Not toggling groups, tournament {tournament_id} does not exist")
        return None

    return await change_tournament_phases(
        store,
        tournament_id,
        has_groups=not tournament.structure.has_groups,
        has_playoffs=tournament.structure.has_playoffs,
    )


async def toggle_playoffs(
    store: EntityStore, tournament_id: TournamentId
) -> StructureChange | None:
    tournament = await store.get_tournament(tournament_id)
    if tournament is None:
        logger.info(f"Not toggling playoffs, tournament {tournament_id} does not exist")
        return None

    return await change_tournament_phases(
        store,
        tournament_id,
        has_groups=tournament.structure.has_groups,
        has_playoffs=not tournament.structure.has_playoffs,
    )
