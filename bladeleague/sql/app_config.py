from databases import Database

from bladeleague.models.db.app_config import AppConfig, BalanceFormat, ScoringSystem
from bladeleague.models.db.shared import get_name_key
from bladeleague.schema import balance_formats
from bladeleague.utils.id_types import BalanceFormatId

_APP_CONFIG_ROW_ID = 1


async def sql_get_balance_formats(database: Database) -> list[BalanceFormat]:
    query = """
        SELECT *
        FROM balance_formats
        ORDER BY id
    """
    result = await database.fetch_all(query=query)
    return [BalanceFormat.model_validate(dict(row._mapping)) for row in result]


async def sql_get_scoring_system(database: Database) -> ScoringSystem | None:
    query = """
        SELECT scoring_win, scoring_loss
        FROM app_config
        WHERE id = :row_id
    """
    result = await database.fetch_one(query=query, values={"row_id": _APP_CONFIG_ROW_ID})
    if result is None:
        return None

    return ScoringSystem(win=result._mapping["scoring_win"], loss=result._mapping["scoring_loss"])


async def sql_create_balance_format(database: Database, name: str) -> BalanceFormat | None:
    query = """
        INSERT INTO balance_formats (name, name_key)
        VALUES (:name, :name_key)
        ON CONFLICT DO NOTHING
        RETURNING *
    """
    result = await database.fetch_one(
        query=query, values={"name": name.strip(), "name_key": get_name_key(name)}
    )
    return BalanceFormat.model_validate(dict(result._mapping)) if result is not None else None


async def sql_delete_balance_formats_except(
    database: Database, balance_format_ids: list[BalanceFormatId]
) -> None:
    await database.execute(
        query=balance_formats.delete().where(balance_formats.c.id.not_in(balance_format_ids))
    )


async def sql_upsert_scoring_system(database: Database, scoring_system: ScoringSystem) -> None:
    query = """
        INSERT INTO app_config (id, scoring_win, scoring_loss)
        VALUES (:row_id, :scoring_win, :scoring_loss)
        ON CONFLICT (id) DO UPDATE
        SET scoring_win = excluded.scoring_win,
            scoring_loss = excluded.scoring_loss
    """
    await database.execute(
        query=query,
        values={
            "row_id": _APP_CONFIG_ROW_ID,
            "scoring_win": scoring_system.win,
            "scoring_loss": scoring_system.loss,
        },
    )


async def sql_update_app_config(database: Database, app_config: AppConfig) -> None:
    """
    Persist scoring and drop the balance formats that are no longer listed. Formats are only
    ever added through `sql_create_balance_format`, so ids not yet stored are ignored.
    """
    async with database.transaction():
        await sql_upsert_scoring_system(database, app_config.scoring_system)
        await sql_delete_balance_formats_except(
            database, [fmt.id for fmt in app_config.balance_formats]
        )
