from typing import NewType

BalanceFormatId = NewType("BalanceFormatId", int)
BladeId = NewType("BladeId", int)
LeagueId = NewType("LeagueId", int)
MatchId = NewType("MatchId", int)
ParticipantId = NewType("ParticipantId", int)
TournamentId = NewType("TournamentId", int)
