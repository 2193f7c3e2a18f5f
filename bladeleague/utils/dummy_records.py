from zoneinfo import ZoneInfo

from heliclockter import datetime_utc

from bladeleague.models.db.app_config import AppConfig, BalanceFormat, ScoringSystem
from bladeleague.models.db.match import Match, MatchPhase
from bladeleague.models.db.participant import Participant
from bladeleague.models.db.tournament import (
    Tournament,
    TournamentInsertable,
    TournamentStatus,
    TournamentStructure,
)
from bladeleague.utils.id_types import (
    BalanceFormatId,
    MatchId,
    ParticipantId,
    TournamentId,
)

DUMMY_MOCK_TIME = datetime_utc(2022, 1, 11, 4, 32, 11, tzinfo=ZoneInfo("UTC"))

DUMMY_BALANCE_FORMAT = BalanceFormat(id=BalanceFormatId(1), name="Standard")

DUMMY_APP_CONFIG = AppConfig(
    balance_formats=[DUMMY_BALANCE_FORMAT],
    scoring_system=ScoringSystem(win=2, loss=1),
)

DUMMY_TOURNAMENT = TournamentInsertable(
    name="Some Cup",
    league_id=None,
    structure=TournamentStructure.ROUND_ROBIN,
    balance_format_id=DUMMY_BALANCE_FORMAT.id,
    participant_ids=[],
    status=TournamentStatus.DRAFT,
    created=DUMMY_MOCK_TIME,
)


def make_dummy_tournament(
    participant_ids: list[ParticipantId],
    structure: TournamentStructure = TournamentStructure.ROUND_ROBIN,
    tournament_id: TournamentId = TournamentId(-1),
) -> Tournament:
    return Tournament(
        **DUMMY_TOURNAMENT.model_dump(exclude={"participant_ids", "structure"}),
        id=tournament_id,
        participant_ids=participant_ids,
        structure=structure,
    )


def make_dummy_participant(participant_id: int, name: str | None = None) -> Participant:
    return Participant(
        id=ParticipantId(participant_id),
        name=name if name is not None else f"Participant {participant_id}",
        created=DUMMY_MOCK_TIME,
    )


def make_dummy_played_match(
    match_id: int,
    winner: int,
    loser: int,
    winner_score: int = 2,
    loser_score: int = 1,
    phase: MatchPhase | None = MatchPhase.GROUP,
) -> Match:
    return Match(
        id=MatchId(match_id),
        participant1_id=ParticipantId(winner),
        participant2_id=ParticipantId(loser),
        participant1_score=winner_score,
        participant2_score=loser_score,
        winner_id=ParticipantId(winner),
        is_played=True,
        date=DUMMY_MOCK_TIME,
        phase=phase,
    )
