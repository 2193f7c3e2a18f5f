from typing import Generic, TypeVar

from pydantic import BaseModel

from bladeleague.logic.planning.rounds import MatchRound
from bladeleague.logic.scheduling.structure import StructureChange
from bladeleague.models.db.app_config import AppConfig, BalanceFormat
from bladeleague.models.db.blade import Blade
from bladeleague.models.db.league import League
from bladeleague.models.db.match import Match
from bladeleague.models.db.participant import Participant
from bladeleague.models.db.tournament import Tournament, TournamentStructure
from bladeleague.models.standings import StandingsRow
from bladeleague.utils.id_types import MatchId


DataT = TypeVar("DataT")


class DataResponse(BaseModel, Generic[DataT]):
    data: DataT


class ParticipantsResponse(DataResponse[list[Participant]]):
    pass


class SingleParticipantResponse(DataResponse[Participant]):
    pass


class LeaguesResponse(DataResponse[list[League]]):
    pass


class SingleLeagueResponse(DataResponse[League]):
    pass


class TournamentsResponse(DataResponse[list[Tournament]]):
    pass


class TournamentResponse(DataResponse[Tournament]):
    pass


class MatchesResponse(DataResponse[list[Match]]):
    pass


class SingleMatchResponse(DataResponse[Match]):
    pass


class MatchRoundsResponse(DataResponse[list[MatchRound]]):
    pass


class StandingsResponse(DataResponse[list[StandingsRow]]):
    pass


class ScheduleUpdate(BaseModel):
    matches_deleted: int
    matches_created: int


class ScheduleUpdateResponse(DataResponse[ScheduleUpdate]):
    pass


class StructureUpdate(BaseModel):
    structure: TournamentStructure
    matches_deleted: list[MatchId]

    @classmethod
    def from_change(cls, change: StructureChange) -> "StructureUpdate":
        return cls(structure=change.structure, matches_deleted=change.match_ids_to_delete)


class StructureUpdateResponse(DataResponse[StructureUpdate]):
    pass


class AppConfigResponse(DataResponse[AppConfig]):
    pass


class SingleBalanceFormatResponse(DataResponse[BalanceFormat]):
    pass


class BladesResponse(DataResponse[list[Blade]]):
    pass


class SingleBladeResponse(DataResponse[Blade]):
    pass


class RecordsRecalculation(BaseModel):
    participants: int
    duration_ms: int


class RecordsRecalculationResponse(DataResponse[RecordsRecalculation]):
    pass
