from heliclockter import datetime_utc
from pydantic import BaseModel, model_validator

from bladeleague.models.db.shared import BaseModelORM, NonEmptyName
from bladeleague.utils.id_types import LeagueId, MatchId, ParticipantId, TournamentId
from bladeleague.utils.types import EnumAutoStr


class MatchPhase(EnumAutoStr):
    GROUP = "group"
    PLAYOFF = "playoff"


class PlayoffRound(EnumAutoStr):
    FINAL = "Final"
    SEMI_FINAL = "Semi Final"
    QUARTER_FINAL = "Quarter Final"
    ROUND_OF_16 = "Round of 16"

    @property
    def bracket_size(self) -> int:
        return _BRACKET_SIZES[self]


_BRACKET_SIZES = {
    PlayoffRound.FINAL: 2,
    PlayoffRound.SEMI_FINAL: 4,
    PlayoffRound.QUARTER_FINAL: 8,
    PlayoffRound.ROUND_OF_16: 16,
}


def get_pairing_key(
    participant1_id: ParticipantId, participant2_id: ParticipantId
) -> frozenset[ParticipantId]:
    return frozenset((participant1_id, participant2_id))


class MatchCreateBody(BaseModelORM):
    league_id: LeagueId | None = None
    tournament_id: TournamentId | None = None
    participant1_id: ParticipantId
    participant2_id: ParticipantId
    participant1_score: int = 0
    participant2_score: int = 0
    winner_id: ParticipantId | None = None
    is_played: bool = False
    date: datetime_utc
    phase: MatchPhase | None = None
    round_label: str | None = None

    @model_validator(mode="after")
    def check_distinct_participants(self) -> "MatchCreateBody":
        if self.participant1_id == self.participant2_id:
            raise ValueError("A match needs two different participants")
        return self

    def get_pairing_key(self) -> frozenset[ParticipantId]:
        return get_pairing_key(self.participant1_id, self.participant2_id)


class Match(MatchCreateBody):
    id: MatchId

    def get_phase(self) -> MatchPhase:
        return self.phase if self.phase is not None else MatchPhase.GROUP

    def is_group_match(self) -> bool:
        return self.get_phase() is MatchPhase.GROUP

    def is_playoff_match(self) -> bool:
        return self.get_phase() is MatchPhase.PLAYOFF

    def involves(self, participant_id: ParticipantId) -> bool:
        return participant_id in (self.participant1_id, self.participant2_id)


class MatchScoreBody(BaseModel):
    participant1_score: int
    participant2_score: int


class DuelCreateBody(BaseModel):
    league_id: LeagueId | None = None
    participant1_id: ParticipantId
    participant2_id: ParticipantId
    participant1_score: int
    participant2_score: int


class DuelByNameCreateBody(BaseModel):
    league_id: LeagueId | None = None
    participant1_name: NonEmptyName
    participant2_name: NonEmptyName
    participant1_score: int
    participant2_score: int


class PlayoffsCreateBody(BaseModel):
    playoff_round: PlayoffRound
    seed: int | None = None
