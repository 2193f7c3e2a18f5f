from collections.abc import Iterable, Sequence
from itertools import count

from heliclockter import datetime_utc

from bladeleague.config import config
from bladeleague.models.db.app_config import AppConfig, BalanceFormat, ScoringSystem
from bladeleague.models.db.blade import Blade, BladeBody
from bladeleague.models.db.league import League
from bladeleague.models.db.match import Match, MatchCreateBody
from bladeleague.models.db.participant import Participant, ParticipantRecord
from bladeleague.models.db.shared import get_name_key
from bladeleague.models.db.tournament import (
    Tournament,
    TournamentInsertable,
    TournamentStatus,
    TournamentStructure,
)
from bladeleague.store.base import EntityStore
from bladeleague.utils.id_types import (
    BalanceFormatId,
    BladeId,
    LeagueId,
    MatchId,
    ParticipantId,
    TournamentId,
)


def _name_taken(name: str, existing: Iterable[str]) -> bool:
    name_key = get_name_key(name)
    return any(get_name_key(other) == name_key for other in existing)


def default_app_config() -> AppConfig:
    return AppConfig(
        balance_formats=[],
        scoring_system=ScoringSystem(
            win=config.default_scoring_win, loss=config.default_scoring_loss
        ),
    )


class InMemoryEntityStore(EntityStore):
    """Dict-backed store; hands out copies so callers never mutate stored state."""

    def __init__(self, app_config: AppConfig | None = None) -> None:
        self._config = app_config.model_copy(deep=True) if app_config else default_app_config()
        self._ids = count(max((fmt.id for fmt in self._config.balance_formats), default=0) + 1)
        self._participants: dict[ParticipantId, Participant] = {}
        self._leagues: dict[LeagueId, League] = {}
        self._tournaments: dict[TournamentId, Tournament] = {}
        self._matches: dict[MatchId, Match] = {}
        self._blades: dict[BladeId, Blade] = {}

    def _next_id(self) -> int:
        return next(self._ids)

    async def list_participants(self) -> list[Participant]:
        return [participant.model_copy() for participant in self._participants.values()]

    async def get_participant(self, participant_id: ParticipantId) -> Participant | None:
        participant = self._participants.get(participant_id)
        return participant.model_copy() if participant is not None else None

    async def get_participant_by_name(self, name: str) -> Participant | None:
        name_key = get_name_key(name)
        return next(
            (
                participant.model_copy()
                for participant in self._participants.values()
                if get_name_key(participant.name) == name_key
            ),
            None,
        )

    async def create_participant(self, name: str) -> Participant | None:
        if _name_taken(name, (p.name for p in self._participants.values())):
            return None

        participant = Participant(
            id=ParticipantId(self._next_id()), name=name.strip(), created=datetime_utc.now()
        )
        self._participants[participant.id] = participant
        return participant.model_copy()

    async def update_participant_record(
        self, participant_id: ParticipantId, record: ParticipantRecord
    ) -> None:
        participant = self._participants.get(participant_id)
        if participant is not None:
            self._participants[participant_id] = participant.model_copy(
                update=record.model_dump()
            )

    async def list_leagues(self) -> list[League]:
        return [league.model_copy(deep=True) for league in self._leagues.values()]

    async def get_league(self, league_id: LeagueId) -> League | None:
        league = self._leagues.get(league_id)
        return league.model_copy(deep=True) if league is not None else None

    async def create_league(self, name: str) -> League | None:
        if _name_taken(name, (league.name for league in self._leagues.values())):
            return None

        league = League(id=LeagueId(self._next_id()), name=name.strip(), created=datetime_utc.now())
        self._leagues[league.id] = league
        return league.model_copy(deep=True)

    async def add_league_participants(
        self, league_id: LeagueId, participant_ids: Sequence[ParticipantId]
    ) -> None:
        league = self._leagues.get(league_id)
        if league is None:
            return

        merged = list(dict.fromkeys([*league.participant_ids, *participant_ids]))
        self._leagues[league_id] = league.model_copy(update={"participant_ids": merged})

    async def list_tournaments(self, league_id: LeagueId | None = None) -> list[Tournament]:
        return [
            tournament.model_copy(deep=True)
            for tournament in self._tournaments.values()
            if league_id is None or tournament.league_id == league_id
        ]

    async def get_tournament(self, tournament_id: TournamentId) -> Tournament | None:
        tournament = self._tournaments.get(tournament_id)
        return tournament.model_copy(deep=True) if tournament is not None else None

    async def create_tournament(self, tournament: TournamentInsertable) -> Tournament | None:
        if _name_taken(tournament.name, (t.name for t in self._tournaments.values())):
            return None

        created = Tournament(
            **tournament.model_dump(exclude={"name"}),
            name=tournament.name.strip(),
            id=TournamentId(self._next_id()),
        )
        self._tournaments[created.id] = created

        if created.league_id is not None and (league := self._leagues.get(created.league_id)):
            self._leagues[league.id] = league.model_copy(
                update={"tournament_ids": [*league.tournament_ids, created.id]}
            )

        return created.model_copy(deep=True)

    async def set_tournament_participants(
        self, tournament_id: TournamentId, participant_ids: Sequence[ParticipantId]
    ) -> None:
        tournament = self._tournaments.get(tournament_id)
        if tournament is not None:
            self._tournaments[tournament_id] = tournament.model_copy(
                update={"participant_ids": list(participant_ids)}
            )

    async def set_tournament_structure(
        self,
        tournament_id: TournamentId,
        structure: TournamentStructure,
        match_ids_to_delete: Sequence[MatchId],
    ) -> None:
        await self.delete_matches(match_ids_to_delete)
        tournament = self._tournaments.get(tournament_id)
        if tournament is not None:
            self._tournaments[tournament_id] = tournament.model_copy(
                update={"structure": structure}
            )

    async def set_tournament_status(
        self, tournament_id: TournamentId, status: TournamentStatus
    ) -> None:
        tournament = self._tournaments.get(tournament_id)
        if tournament is not None:
            self._tournaments[tournament_id] = tournament.model_copy(update={"status": status})

    async def list_matches(
        self,
        *,
        tournament_id: TournamentId | None = None,
        league_id: LeagueId | None = None,
    ) -> list[Match]:
        return [
            match.model_copy()
            for match in self._matches.values()
            if (tournament_id is None or match.tournament_id == tournament_id)
            and (league_id is None or match.league_id == league_id)
        ]

    async def get_match(self, match_id: MatchId) -> Match | None:
        match = self._matches.get(match_id)
        return match.model_copy() if match is not None else None

    async def create_match(self, match: MatchCreateBody) -> Match:
        created = Match(**match.model_dump(), id=MatchId(self._next_id()))
        self._matches[created.id] = created
        return created.model_copy()

    async def bulk_create_matches(self, matches: Sequence[MatchCreateBody]) -> list[Match]:
        return [await self.create_match(match) for match in matches]

    async def delete_matches(self, match_ids: Sequence[MatchId]) -> None:
        for match_id in match_ids:
            self._matches.pop(match_id, None)

    async def resolve_match(
        self,
        match_id: MatchId,
        participant1_score: int,
        participant2_score: int,
        winner_id: ParticipantId,
    ) -> Match | None:
        match = self._matches.get(match_id)
        if match is None:
            return None

        resolved = match.model_copy(
            update={
                "participant1_score": participant1_score,
                "participant2_score": participant2_score,
                "winner_id": winner_id,
                "is_played": True,
                "date": datetime_utc.now(),
            }
        )
        self._matches[match_id] = resolved
        return resolved.model_copy()

    async def get_config(self) -> AppConfig:
        return self._config.model_copy(deep=True)

    async def update_config(self, app_config: AppConfig) -> None:
        self._config = app_config.model_copy(deep=True)

    async def create_balance_format(self, name: str) -> BalanceFormat | None:
        if _name_taken(name, (fmt.name for fmt in self._config.balance_formats)):
            return None

        balance_format = BalanceFormat(id=BalanceFormatId(self._next_id()), name=name.strip())
        self._config.balance_formats.append(balance_format)
        return balance_format.model_copy()

    async def list_blades(self) -> list[Blade]:
        return [blade.model_copy() for blade in self._blades.values()]

    async def create_blade(self, blade: BladeBody) -> Blade | None:
        if _name_taken(blade.name, (b.name for b in self._blades.values())):
            return None

        created = Blade(id=BladeId(self._next_id()), name=blade.name.strip(), tier=blade.tier)
        self._blades[created.id] = created
        return created.model_copy()
