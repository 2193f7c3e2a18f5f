from abc import ABC, abstractmethod
from collections.abc import Sequence

from bladeleague.models.db.app_config import AppConfig, BalanceFormat
from bladeleague.models.db.blade import Blade, BladeBody
from bladeleague.models.db.league import League
from bladeleague.models.db.match import Match, MatchCreateBody
from bladeleague.models.db.participant import Participant, ParticipantRecord
from bladeleague.models.db.tournament import (
    Tournament,
    TournamentInsertable,
    TournamentStatus,
    TournamentStructure,
)
from bladeleague.utils.id_types import (
    LeagueId,
    MatchId,
    ParticipantId,
    TournamentId,
)


class EntityStore(ABC):
    """
    Durable keyed storage used by the tournament engine.

    Every method is a suspension point. Name uniqueness for participants, leagues, tournaments,
    balance formats and blades is case-insensitive; a duplicate makes the corresponding
    `create_*` method return None and write nothing. Operations on ids that do not exist
    return None (or do nothing) instead of raising.
    """

    @abstractmethod
    async def list_participants(self) -> list[Participant]: ...

    @abstractmethod
    async def get_participant(self, participant_id: ParticipantId) -> Participant | None: ...

    @abstractmethod
    async def get_participant_by_name(self, name: str) -> Participant | None: ...

    @abstractmethod
    async def create_participant(self, name: str) -> Participant | None: ...

    @abstractmethod
    async def update_participant_record(
        self, participant_id: ParticipantId, record: ParticipantRecord
    ) -> None: ...

    @abstractmethod
    async def list_leagues(self) -> list[League]: ...

    @abstractmethod
    async def get_league(self, league_id: LeagueId) -> League | None: ...

    @abstractmethod
    async def create_league(self, name: str) -> League | None: ...

    @abstractmethod
    async def add_league_participants(
        self, league_id: LeagueId, participant_ids: Sequence[ParticipantId]
    ) -> None:
        """Union the given ids into the league roster, never removing anyone."""

    @abstractmethod
    async def list_tournaments(self, league_id: LeagueId | None = None) -> list[Tournament]: ...

    @abstractmethod
    async def get_tournament(self, tournament_id: TournamentId) -> Tournament | None: ...

    @abstractmethod
    async def create_tournament(self, tournament: TournamentInsertable) -> Tournament | None:
        """Also links the new tournament id into its league, if any."""

    @abstractmethod
    async def set_tournament_participants(
        self, tournament_id: TournamentId, participant_ids: Sequence[ParticipantId]
    ) -> None: ...

    @abstractmethod
    async def set_tournament_structure(
        self,
        tournament_id: TournamentId,
        structure: TournamentStructure,
        match_ids_to_delete: Sequence[MatchId],
    ) -> None:
        """Delete the given matches first, then switch the structure."""

    @abstractmethod
    async def set_tournament_status(
        self, tournament_id: TournamentId, status: TournamentStatus
    ) -> None: ...

    @abstractmethod
    async def list_matches(
        self,
        *,
        tournament_id: TournamentId | None = None,
        league_id: LeagueId | None = None,
    ) -> list[Match]: ...

    @abstractmethod
    async def get_match(self, match_id: MatchId) -> Match | None: ...

    @abstractmethod
    async def create_match(self, match: MatchCreateBody) -> Match: ...

    @abstractmethod
    async def bulk_create_matches(self, matches: Sequence[MatchCreateBody]) -> list[Match]: ...

    @abstractmethod
    async def delete_matches(self, match_ids: Sequence[MatchId]) -> None: ...

    @abstractmethod
    async def resolve_match(
        self,
        match_id: MatchId,
        participant1_score: int,
        participant2_score: int,
        winner_id: ParticipantId,
    ) -> Match | None:
        """Persist scores and winner, mark the match as played and stamp its date."""

    @abstractmethod
    async def get_config(self) -> AppConfig: ...

    @abstractmethod
    async def update_config(self, app_config: AppConfig) -> None: ...

    @abstractmethod
    async def create_balance_format(self, name: str) -> BalanceFormat | None: ...

    @abstractmethod
    async def list_blades(self) -> list[Blade]: ...

    @abstractmethod
    async def create_blade(self, blade: BladeBody) -> Blade | None: ...
