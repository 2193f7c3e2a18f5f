"""create initial tables

Revision ID: 4a7e1c9d2b58
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str | None = "4a7e1c9d2b58"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None

tournament_structure_enum = sa.Enum(
    "Round Robin",
    "Playoff Only",
    "Round Robin + Playoffs",
    name="tournament_structure",
)
tournament_status_enum = sa.Enum("Draft", "Active", "Completed", name="tournament_status")
match_phase_enum = sa.Enum("group", "playoff", name="match_phase")
blade_tier_enum = sa.Enum("S", "A", "B", "C", "D", name="blade_tier")


def upgrade() -> None:
    op.create_table(
        "participants",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("created", sa.String(), nullable=False),
        sa.Column("total_matches", sa.Integer(), server_default="0", nullable=False),
        sa.Column("wins", sa.Integer(), server_default="0", nullable=False),
        sa.Column("winrate", sa.Integer(), server_default="0", nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_participants_id"), "participants", ["id"], unique=False)
    op.create_index(op.f("ix_participants_name"), "participants", ["name"], unique=True)

    op.create_table(
        "leagues",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("created", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_leagues_id"), "leagues", ["id"], unique=False)
    op.create_index(op.f("ix_leagues_name"), "leagues", ["name"], unique=True)

    op.create_table(
        "league_participants",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("league_id", sa.Integer(), nullable=False),
        sa.Column("participant_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["league_id"], ["leagues.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["participant_id"], ["participants.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("league_id", "participant_id"),
    )
    op.create_index(op.f("ix_league_participants_id"), "league_participants", ["id"], unique=False)
    op.create_index(
        op.f("ix_league_participants_league_id"), "league_participants", ["league_id"], unique=False
    )
    op.create_index(
        op.f("ix_league_participants_participant_id"),
        "league_participants",
        ["participant_id"],
        unique=False,
    )

    op.create_table(
        "balance_formats",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_index(op.f("ix_balance_formats_id"), "balance_formats", ["id"], unique=False)

    op.create_table(
        "tournaments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("league_id", sa.Integer(), nullable=True),
        sa.Column(
            "structure", tournament_structure_enum, server_default="Round Robin", nullable=False
        ),
        sa.Column("balance_format_id", sa.Integer(), nullable=False),
        sa.Column("status", tournament_status_enum, server_default="Draft", nullable=False),
        sa.Column("created", sa.String(), nullable=False),
        sa.ForeignKeyConstraint(["league_id"], ["leagues.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_tournaments_id"), "tournaments", ["id"], unique=False)
    op.create_index(op.f("ix_tournaments_name"), "tournaments", ["name"], unique=True)
    op.create_index(op.f("ix_tournaments_league_id"), "tournaments", ["league_id"], unique=False)
    op.create_index(op.f("ix_tournaments_status"), "tournaments", ["status"], unique=False)

    op.create_table(
        "tournament_participants",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("tournament_id", sa.Integer(), nullable=False),
        sa.Column("participant_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["tournament_id"], ["tournaments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["participant_id"], ["participants.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tournament_id", "participant_id"),
    )
    op.create_index(
        op.f("ix_tournament_participants_id"), "tournament_participants", ["id"], unique=False
    )
    op.create_index(
        op.f("ix_tournament_participants_tournament_id"),
        "tournament_participants",
        ["tournament_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_tournament_participants_participant_id"),
        "tournament_participants",
        ["participant_id"],
        unique=False,
    )

    op.create_table(
        "matches",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("league_id", sa.Integer(), nullable=True),
        sa.Column("tournament_id", sa.Integer(), nullable=True),
        sa.Column("participant1_id", sa.Integer(), nullable=False),
        sa.Column("participant2_id", sa.Integer(), nullable=False),
        sa.Column("participant1_score", sa.Integer(), server_default="0", nullable=False),
        sa.Column("participant2_score", sa.Integer(), server_default="0", nullable=False),
        sa.Column("winner_id", sa.Integer(), nullable=True),
        sa.Column("is_played", sa.Boolean(), server_default="0", nullable=False),
        sa.Column("date", sa.String(), nullable=False),
        sa.Column("phase", match_phase_enum, nullable=True),
        sa.Column("round_label", sa.String(), nullable=True),
        sa.ForeignKeyConstraint(["league_id"], ["leagues.id"]),
        sa.ForeignKeyConstraint(["tournament_id"], ["tournaments.id"]),
        sa.ForeignKeyConstraint(["participant1_id"], ["participants.id"]),
        sa.ForeignKeyConstraint(["participant2_id"], ["participants.id"]),
        sa.ForeignKeyConstraint(["winner_id"], ["participants.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_matches_id"), "matches", ["id"], unique=False)
    op.create_index(op.f("ix_matches_league_id"), "matches", ["league_id"], unique=False)
    op.create_index(op.f("ix_matches_tournament_id"), "matches", ["tournament_id"], unique=False)

    op.create_table(
        "app_config",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("scoring_win", sa.Float(), nullable=False),
        sa.Column("scoring_loss", sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "blades",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("tier", blade_tier_enum, server_default="B", nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_blades_id"), "blades", ["id"], unique=False)
    op.create_index(op.f("ix_blades_name"), "blades", ["name"], unique=True)


def downgrade() -> None:
    op.drop_table("blades")
    op.drop_table("app_config")
    op.drop_table("matches")
    op.drop_table("tournament_participants")
    op.drop_table("tournaments")
    op.drop_table("balance_formats")
    op.drop_table("league_participants")
    op.drop_table("leagues")
    op.drop_table("participants")

    bind = op.get_bind()
    for enum in (
        blade_tier_enum,
        match_phase_enum,
        tournament_status_enum,
        tournament_structure_enum,
    ):
        enum.drop(bind, checkfirst=True)
