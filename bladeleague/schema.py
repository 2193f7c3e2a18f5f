from sqlalchemy import Column, ForeignKey, Integer, String, Table, UniqueConstraint
from sqlalchemy.orm import declarative_base  # type: ignore[attr-defined]
from sqlalchemy.sql.sqltypes import Boolean, Enum, Float

Base = declarative_base()
metadata = Base.metadata

# Timestamps are stored as ISO-8601 text so the UTC offset survives every backend.
Timestamp = String

participants = Table(
    "participants",
    metadata,
    Column("id", Integer, primary_key=True, index=True, autoincrement=True),
    Column("name", String, nullable=False, unique=True, index=True),
    Column("name_key", String, nullable=False, unique=True, index=True),
    Column("created", Timestamp, nullable=False),
    Column("total_matches", Integer, nullable=False, server_default="0"),
    Column("wins", Integer, nullable=False, server_default="0"),
    Column("winrate", Integer, nullable=False, server_default="0"),
)

leagues = Table(
    "leagues",
    metadata,
    Column("id", Integer, primary_key=True, index=True, autoincrement=True),
    Column("name", String, nullable=False, unique=True, index=True),
    Column("name_key", String, nullable=False, unique=True, index=True),
    Column("created", Timestamp, nullable=False),
)

league_participants = Table(
    "league_participants",
    metadata,
    Column("id", Integer, primary_key=True, index=True, autoincrement=True),
    Column("league_id", Integer, ForeignKey("leagues.id", ondelete="CASCADE"), index=True, nullable=False),
    Column(
        "participant_id",
        Integer,
        ForeignKey("participants.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    ),
    UniqueConstraint("league_id", "participant_id"),
)

balance_formats = Table(
    "balance_formats",
    metadata,
    Column("id", Integer, primary_key=True, index=True, autoincrement=True),
    Column("name", String, nullable=False, unique=True),
    Column("name_key", String, nullable=False, unique=True, index=True),
)

tournaments = Table(
    "tournaments",
    metadata,
    Column("id", Integer, primary_key=True, index=True, autoincrement=True),
    Column("name", String, nullable=False, unique=True, index=True),
    Column("name_key", String, nullable=False, unique=True, index=True),
    Column("league_id", Integer, ForeignKey("leagues.id"), index=True, nullable=True),
    Column(
        "structure",
        Enum(
            "Round Robin",
            "Playoff Only",
            "Round Robin + Playoffs",
            name="tournament_structure",
        ),
        nullable=False,
        server_default="Round Robin",
    ),
    Column("balance_format_id", Integer, nullable=False),
    Column(
        "status",
        Enum(
            "Draft",
            "Active",
            "Completed",
            name="tournament_status",
        ),
        nullable=False,
        server_default="Draft",
        index=True,
    ),
    Column("created", Timestamp, nullable=False),
)

tournament_participants = Table(
    "tournament_participants",
    metadata,
    Column("id", Integer, primary_key=True, index=True, autoincrement=True),
    Column(
        "tournament_id",
        Integer,
        ForeignKey("tournaments.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    ),
    Column(
        "participant_id",
        Integer,
        ForeignKey("participants.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    ),
    UniqueConstraint("tournament_id", "participant_id"),
)

matches = Table(
    "matches",
    metadata,
    Column("id", Integer, primary_key=True, index=True, autoincrement=True),
    Column("league_id", Integer, ForeignKey("leagues.id"), index=True, nullable=True),
    Column("tournament_id", Integer, ForeignKey("tournaments.id"), index=True, nullable=True),
    Column("participant1_id", Integer, ForeignKey("participants.id"), nullable=False),
    Column("participant2_id", Integer, ForeignKey("participants.id"), nullable=False),
    Column("participant1_score", Integer, nullable=False, server_default="0"),
    Column("participant2_score", Integer, nullable=False, server_default="0"),
    Column("winner_id", Integer, ForeignKey("participants.id"), nullable=True),
    Column("is_played", Boolean, nullable=False, server_default="0"),
    Column("date", Timestamp, nullable=False),
    Column("phase", Enum("group", "playoff", name="match_phase"), nullable=True),
    Column("round_label", String, nullable=True),
)

app_config = Table(
    "app_config",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("scoring_win", Float, nullable=False),
    Column("scoring_loss", Float, nullable=False),
)

blades = Table(
    "blades",
    metadata,
    Column("id", Integer, primary_key=True, index=True, autoincrement=True),
    Column("name", String, nullable=False, unique=True, index=True),
    Column("name_key", String, nullable=False, unique=True, index=True),
    Column("tier", Enum("S", "A", "B", "C", "D", name="blade_tier"), nullable=False, server_default="B"),
)
