from enum import auto

from pydantic import BaseModel, computed_field

from bladeleague.utils.id_types import ParticipantId
from bladeleague.utils.types import EnumAutoStr

UNKNOWN_PARTICIPANT_NAME = "Unknown"


class StandingsScope(EnumAutoStr):
    ALL = auto()
    LEAGUES = auto()
    LEAGUE = auto()
    STANDALONE_TOURNAMENTS = auto()
    BALANCE_FORMATS = auto()


class StandingsRow(BaseModel):
    participant_id: ParticipantId
    name: str
    played: int = 0
    wins: int = 0
    losses: int = 0
    points: float = 0
    points_for: int = 0
    points_against: int = 0
    winrate: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def point_differential(self) -> int:
        return self.points_for - self.points_against
