from heliclockter import datetime_utc
from pydantic import BaseModel, Field

from bladeleague.models.db.shared import BaseModelORM, NonEmptyName
from bladeleague.utils.id_types import LeagueId, ParticipantId, TournamentId


class LeagueBody(BaseModel):
    name: NonEmptyName


class LeagueInsertable(BaseModelORM):
    name: str
    created: datetime_utc


class League(LeagueInsertable):
    id: LeagueId
    participant_ids: list[ParticipantId] = Field(default_factory=list)
    tournament_ids: list[TournamentId] = Field(default_factory=list)
