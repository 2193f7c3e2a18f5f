from heliclockter import datetime_utc
from pydantic import BaseModel, Field

from bladeleague.models.db.shared import BaseModelORM, NonEmptyName
from bladeleague.utils.id_types import BalanceFormatId, LeagueId, ParticipantId, TournamentId
from bladeleague.utils.types import EnumAutoStr


class TournamentStructure(EnumAutoStr):
    ROUND_ROBIN = "Round Robin"
    PLAYOFF_ONLY = "Playoff Only"
    ROUND_ROBIN_PLUS_PLAYOFFS = "Round Robin + Playoffs"

    @property
    def has_groups(self) -> bool:
        return self is not TournamentStructure.PLAYOFF_ONLY

    @property
    def has_playoffs(self) -> bool:
        return self is not TournamentStructure.ROUND_ROBIN

    @classmethod
    def from_phases(cls, *, has_groups: bool, has_playoffs: bool) -> "TournamentStructure":
        match has_groups, has_playoffs:
            case True, True:
                return cls.ROUND_ROBIN_PLUS_PLAYOFFS
            case True, False:
                return cls.ROUND_ROBIN
            case False, True:
                return cls.PLAYOFF_ONLY
            case _:
                raise ValueError("A tournament needs at least one active phase")


class TournamentStatus(EnumAutoStr):
    DRAFT = "Draft"
    ACTIVE = "Active"
    COMPLETED = "Completed"


class TournamentBody(BaseModel):
    name: NonEmptyName
    league_id: LeagueId | None = None
    structure: TournamentStructure = TournamentStructure.ROUND_ROBIN
    balance_format_id: BalanceFormatId
    participant_ids: list[ParticipantId] = Field(default_factory=list)


class TournamentInsertable(BaseModelORM):
    name: str
    league_id: LeagueId | None = None
    structure: TournamentStructure
    balance_format_id: BalanceFormatId
    participant_ids: list[ParticipantId] = Field(default_factory=list)
    status: TournamentStatus = TournamentStatus.DRAFT
    created: datetime_utc


class Tournament(TournamentInsertable):
    id: TournamentId


class TournamentPhasesBody(BaseModel):
    has_groups: bool
    has_playoffs: bool


class TournamentStatusBody(BaseModel):
    status: TournamentStatus


class TournamentParticipantBody(BaseModel):
    participant_id: ParticipantId
