from collections.abc import Sequence

from databases import Database

from bladeleague.models.db.app_config import AppConfig, BalanceFormat, ScoringSystem
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
from bladeleague.sql.app_config import (
    sql_create_balance_format,
    sql_get_balance_formats,
    sql_get_scoring_system,
    sql_update_app_config,
)
from bladeleague.sql.blades import sql_create_blade, sql_get_blades
from bladeleague.sql.leagues import (
    sql_add_league_participants,
    sql_create_league,
    sql_get_league,
    sql_get_leagues,
)
from bladeleague.sql.matches import (
    sql_create_match,
    sql_create_matches,
    sql_delete_matches,
    sql_get_match,
    sql_get_matches,
    sql_resolve_match,
)
from bladeleague.sql.participants import (
    sql_create_participant,
    sql_get_participant,
    sql_get_participant_by_name,
    sql_get_participants,
    sql_update_participant_record,
)
from bladeleague.sql.tournaments import (
    sql_create_tournament,
    sql_get_tournament,
    sql_get_tournaments,
    sql_set_tournament_participants,
    sql_update_tournament_status,
    sql_update_tournament_structure,
)
from bladeleague.store.base import EntityStore
from bladeleague.utils.id_types import LeagueId, MatchId, ParticipantId, TournamentId
from bladeleague.utils.types import assert_some


class DatabaseEntityStore(EntityStore):
    def __init__(self, database: Database, default_scoring_system: ScoringSystem) -> None:
        self.database = database
        self.default_scoring_system = default_scoring_system

    async def list_participants(self) -> list[Participant]:
        return await sql_get_participants(self.database)

    async def get_participant(self, participant_id: ParticipantId) -> Participant | None:
        return await sql_get_participant(self.database, participant_id)

    async def get_participant_by_name(self, name: str) -> Participant | None:
        return await sql_get_participant_by_name(self.database, name)

    async def create_participant(self, name: str) -> Participant | None:
        return await sql_create_participant(self.database, name)

    async def update_participant_record(
        self, participant_id: ParticipantId, record: ParticipantRecord
    ) -> None:
        await sql_update_participant_record(self.database, participant_id, record)

    async def list_leagues(self) -> list[League]:
        return await sql_get_leagues(self.database)

    async def get_league(self, league_id: LeagueId) -> League | None:
        return await sql_get_league(self.database, league_id)

    async def create_league(self, name: str) -> League | None:
        return await sql_create_league(self.database, name)

    async def add_league_participants(
        self, league_id: LeagueId, participant_ids: Sequence[ParticipantId]
    ) -> None:
        await sql_add_league_participants(self.database, league_id, participant_ids)

    async def list_tournaments(self, league_id: LeagueId | None = None) -> list[Tournament]:
        return await sql_get_tournaments(self.database, league_id)

    async def get_tournament(self, tournament_id: TournamentId) -> Tournament | None:
        return await sql_get_tournament(self.database, tournament_id)

    async def create_tournament(self, tournament: TournamentInsertable) -> Tournament | None:
        tournament_id = await sql_create_tournament(self.database, tournament)
        if tournament_id is None:
            return None

        return assert_some(await sql_get_tournament(self.database, tournament_id))

    async def set_tournament_participants(
        self, tournament_id: TournamentId, participant_ids: Sequence[ParticipantId]
    ) -> None:
        await sql_set_tournament_participants(self.database, tournament_id, participant_ids)

    async def set_tournament_structure(
        self,
        tournament_id: TournamentId,
        structure: TournamentStructure,
        match_ids_to_delete: Sequence[MatchId],
    ) -> None:
        await sql_delete_matches(self.database, match_ids_to_delete)
        await sql_update_tournament_structure(self.database, tournament_id, structure)

    async def set_tournament_status(
        self, tournament_id: TournamentId, status: TournamentStatus
    ) -> None:
        await sql_update_tournament_status(self.database, tournament_id, status)

    async def list_matches(
        self,
        *,
        tournament_id: TournamentId | None = None,
        league_id: LeagueId | None = None,
    ) -> list[Match]:
        return await sql_get_matches(
            self.database, tournament_id=tournament_id, league_id=league_id
        )

    async def get_match(self, match_id: MatchId) -> Match | None:
        return await sql_get_match(self.database, match_id)

    async def create_match(self, match: MatchCreateBody) -> Match:
        return await sql_create_match(self.database, match)

    async def bulk_create_matches(self, matches: Sequence[MatchCreateBody]) -> list[Match]:
        if len(matches) < 1:
            return []

        return await sql_create_matches(self.database, matches)

    async def delete_matches(self, match_ids: Sequence[MatchId]) -> None:
        await sql_delete_matches(self.database, match_ids)

    async def resolve_match(
        self,
        match_id: MatchId,
        participant1_score: int,
        participant2_score: int,
        winner_id: ParticipantId,
    ) -> Match | None:
        if await sql_get_match(self.database, match_id) is None:
            return None

        await sql_resolve_match(
            self.database, match_id, participant1_score, participant2_score, winner_id
        )
        return await sql_get_match(self.database, match_id)

    async def get_config(self) -> AppConfig:
        scoring_system = await sql_get_scoring_system(self.database)
        return AppConfig(
            balance_formats=await sql_get_balance_formats(self.database),
            scoring_system=scoring_system or self.default_scoring_system,
        )

    async def update_config(self, app_config: AppConfig) -> None:
        await sql_update_app_config(self.database, app_config)

    async def create_balance_format(self, name: str) -> BalanceFormat | None:
        return await sql_create_balance_format(self.database, name)

    async def list_blades(self) -> list[Blade]:
        return await sql_get_blades(self.database)

    async def create_blade(self, blade: BladeBody) -> Blade | None:
        return await sql_create_blade(self.database, blade)
