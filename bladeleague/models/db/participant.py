from heliclockter import datetime_utc
from pydantic import BaseModel

from bladeleague.models.db.shared import BaseModelORM, NonEmptyName
from bladeleague.utils.id_types import ParticipantId


class ParticipantBody(BaseModel):
    name: NonEmptyName


class ParticipantRecord(BaseModel):
    total_matches: int = 0
    wins: int = 0
    winrate: int = 0


class ParticipantInsertable(BaseModelORM):
    name: str
    created: datetime_utc
    total_matches: int = 0
    wins: int = 0
    winrate: int = 0


class Participant(ParticipantInsertable):
    id: ParticipantId
