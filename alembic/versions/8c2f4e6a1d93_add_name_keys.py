"""add name keys

Revision ID: 8c2f4e6a1d93
Revises: 4a7e1c9d2b58
Create Date: 2026-10-19 12:00:00.000000

"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str | None = "8c2f4e6a1d93"
down_revision: str | None = "4a7e1c9d2b58"
branch_labels: str | None = None
depends_on: str | None = None

NAMED_TABLES = ("participants", "leagues", "balance_formats", "tournaments", "blades")


def upgrade() -> None:
    bind = op.get_bind()
    for table_name in NAMED_TABLES:
        with op.batch_alter_table(table_name) as batch_op:
            batch_op.add_column(sa.Column("name_key", sa.String(), nullable=True))

        # casefold() has no SQL counterpart, so the keys are computed here.
        table = sa.table(
            table_name,
            sa.column("id", sa.Integer),
            sa.column("name", sa.String),
            sa.column("name_key", sa.String),
        )
        for row in bind.execute(sa.select(table.c.id, table.c.name)).all():
            bind.execute(
                table.update()
                .where(table.c.id == row.id)
                .values(name_key=row.name.strip().casefold())
            )

        with op.batch_alter_table(table_name) as batch_op:
            batch_op.alter_column("name_key", existing_type=sa.String(), nullable=False)
            batch_op.create_index(f"ix_{table_name}_name_key", ["name_key"], unique=True)


def downgrade() -> None:
    for table_name in reversed(NAMED_TABLES):
        with op.batch_alter_table(table_name) as batch_op:
            batch_op.drop_index(f"ix_{table_name}_name_key")
            batch_op.drop_column("name_key")
