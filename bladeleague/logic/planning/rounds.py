import re
from collections.abc import Sequence

from pydantic import BaseModel

from bladeleague.logic.scheduling.round_robin import GROUP_ROUND_LABEL_PREFIX
from bladeleague.models.db.match import Match
from bladeleague.store.base import EntityStore
from bladeleague.utils.id_types import TournamentId
from bladeleague.utils.logging import logger

PLAYOFF_FALLBACK_LABEL = "Fase Final"
OTHER_FALLBACK_LABEL = "Otros"

_GROUP_ROUND_LABEL_PATTERN = re.compile(rf"^{GROUP_ROUND_LABEL_PREFIX} (\d+)$")


class MatchRound(BaseModel):
    label: str
    matches: list[Match]


def get_round_label(match: Match) -> str:
    if match.round_label:
        return match.round_label

    return PLAYOFF_FALLBACK_LABEL if match.is_playoff_match() else OTHER_FALLBACK_LABEL


def group_matches_by_round(matches: Sequence[Match]) -> list[MatchRound]:
    """
    Bucket matches by round label. Group rounds come first in numeric order, so "Jornada 10"
    follows "Jornada 9"; every other label keeps the order in which it was first seen.
    """
    rounds: dict[str, list[Match]] = {}
    for match in matches:
        rounds.setdefault(get_round_label(match), []).append(match)

    group_rounds: list[tuple[int, str]] = []
    other_rounds: list[str] = []
    for label in rounds:
        if (numbered := _GROUP_ROUND_LABEL_PATTERN.match(label)) is not None:
            group_rounds.append((int(numbered.group(1)), label))
        else:
            other_rounds.append(label)

    ordered_labels = [label for _, label in sorted(group_rounds)] + other_rounds
    return [MatchRound(label=label, matches=rounds[label]) for label in ordered_labels]


async def get_tournament_rounds(
    store: EntityStore, tournament_id: TournamentId
) -> list[MatchRound] | None:
    if await store.get_tournament(tournament_id) is None:
        logger.info(f"No rounds, tournament {tournament_id} does not exist")
        return None

    matches = await store.list_matches(tournament_id=tournament_id)
    return group_matches_by_round(sorted(matches, key=lambda match: match.id))
