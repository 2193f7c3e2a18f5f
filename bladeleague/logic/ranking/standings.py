from collections.abc import Callable, Collection, Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal

from fastapi import HTTPException
from starlette import status

from bladeleague.models.db.app_config import ScoringSystem
from bladeleague.models.db.match import Match
from bladeleague.models.db.participant import Participant
from bladeleague.models.db.tournament import Tournament, TournamentStructure
from bladeleague.models.standings import UNKNOWN_PARTICIPANT_NAME, StandingsRow, StandingsScope
from bladeleague.store.base import EntityStore
from bladeleague.utils.id_types import BalanceFormatId, LeagueId, ParticipantId, TournamentId
from bladeleague.utils.logging import logger

MatchFilter = Callable[[Match], bool]


def calculate_winrate(wins: int, played: int) -> int:
    if played < 1:
        return 0

    winrate = Decimal(100 * wins) / Decimal(played)
    return int(winrate.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _standings_sort_key(row: StandingsRow) -> tuple[float, int, int, int]:
    return (-row.points, -row.wins, -row.points_for, -row.point_differential)


def calculate_standings(
    roster: Sequence[ParticipantId],
    matches: Sequence[Match],
    scoring: ScoringSystem,
    participants_by_id: Mapping[ParticipantId, Participant],
) -> list[StandingsRow]:
    """
    Rank participants by points, then wins, then points scored, then point differential.

    Rows start out in roster order; participants that only show up in a match are appended in
    the order they are encountered. Rows that tie on every key keep that order.
    """
    rows: dict[ParticipantId, StandingsRow] = {}

    def get_row(participant_id: ParticipantId) -> StandingsRow:
        if participant_id not in rows:
            participant = participants_by_id.get(participant_id)
            rows[participant_id] = StandingsRow(
                participant_id=participant_id,
                name=participant.name if participant is not None else UNKNOWN_PARTICIPANT_NAME,
            )
        return rows[participant_id]

    for participant_id in roster:
        get_row(participant_id)

    for match in matches:
        if not match.is_played:
            continue

        sides = (
            (match.participant1_id, match.participant1_score, match.participant2_score),
            (match.participant2_id, match.participant2_score, match.participant1_score),
        )
        for participant_id, own_score, opponent_score in sides:
            row = get_row(participant_id)
            row.played += 1
            row.points_for += own_score
            row.points_against += opponent_score
            if match.winner_id == participant_id:
                row.wins += 1
                row.points += scoring.win
            else:
                row.losses += 1
                row.points += scoring.loss

    for row in rows.values():
        row.winrate = calculate_winrate(row.wins, row.played)

    return sorted(rows.values(), key=_standings_sort_key)


def build_match_filter(
    scope: StandingsScope,
    *,
    league_id: LeagueId | None = None,
    balance_format_ids: Collection[BalanceFormatId] = (),
    tournaments_by_id: Mapping[TournamentId, Tournament] | None = None,
) -> MatchFilter:
    match scope:
        case StandingsScope.ALL:
            return lambda _: True
        case StandingsScope.LEAGUES:
            return lambda match: match.league_id is not None
        case StandingsScope.LEAGUE:
            if league_id is None:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="A league id is required for league standings",
                )
            return lambda match: match.league_id == league_id
        case StandingsScope.STANDALONE_TOURNAMENTS:
            return lambda match: match.tournament_id is not None and match.league_id is None
        case StandingsScope.BALANCE_FORMATS:
            selected_formats = set(balance_format_ids)
            tournaments = tournaments_by_id or {}

            def uses_selected_format(match: Match) -> bool:
                if match.tournament_id is None:
                    return False
                tournament = tournaments.get(match.tournament_id)
                return tournament is not None and tournament.balance_format_id in selected_formats

            return uses_selected_format
        case other:
            raise NotImplementedError(f"No match filter for standings scope {other}")


def get_tournament_standings_matches(
    tournament: Tournament, matches: Sequence[Match]
) -> list[Match]:
    if tournament.structure is TournamentStructure.PLAYOFF_ONLY:
        return list(matches)

    return [match for match in matches if match.is_group_match()]


def calculate_tournament_standings(
    tournament: Tournament,
    matches: Sequence[Match],
    scoring: ScoringSystem,
    participants_by_id: Mapping[ParticipantId, Participant],
) -> list[StandingsRow]:
    return calculate_standings(
        tournament.participant_ids,
        get_tournament_standings_matches(tournament, matches),
        scoring,
        participants_by_id,
    )


async def get_participants_by_id(store: EntityStore) -> dict[ParticipantId, Participant]:
    return {participant.id: participant for participant in await store.list_participants()}


async def get_tournament_standings(
    store: EntityStore, tournament_id: TournamentId
) -> list[StandingsRow] | None:
    tournament = await store.get_tournament(tournament_id)
    if tournament is None:
        logger.info(f"No standings, tournament {tournament_id} does not exist")
        return None

    app_config = await store.get_config()
    return calculate_tournament_standings(
        tournament,
        await store.list_matches(tournament_id=tournament_id),
        app_config.scoring_system,
        await get_participants_by_id(store),
    )


async def get_standings(
    store: EntityStore,
    scope: StandingsScope,
    *,
    league_id: LeagueId | None = None,
    balance_format_ids: Collection[BalanceFormatId] = (),
) -> list[StandingsRow] | None:
    participants_by_id = await get_participants_by_id(store)
    roster: list[ParticipantId] = []
    tournaments_by_id: dict[TournamentId, Tournament] = {}

    match scope:
        case StandingsScope.ALL:
            roster = list(participants_by_id)
        case StandingsScope.LEAGUE if league_id is not None:
            league = await store.get_league(league_id)
            if league is None:
                logger.info(f"No standings, league {league_id} does not exist")
                return None
            roster = league.participant_ids
        case StandingsScope.BALANCE_FORMATS:
            tournaments_by_id = {
                tournament.id: tournament for tournament in await store.list_tournaments()
            }

    match_filter = build_match_filter(
        scope,
        league_id=league_id,
        balance_format_ids=balance_format_ids,
        tournaments_by_id=tournaments_by_id,
    )
    app_config = await store.get_config()
    return calculate_standings(
        roster,
        [match for match in await store.list_matches() if match_filter(match)],
        app_config.scoring_system,
        participants_by_id,
    )
