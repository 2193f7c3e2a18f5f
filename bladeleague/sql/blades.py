from databases import Database

from bladeleague.models.db.blade import Blade, BladeBody
from bladeleague.models.db.shared import get_name_key


async def sql_get_blades(database: Database) -> list[Blade]:
    query = """
        SELECT *
        FROM blades
        ORDER BY id
    """
    result = await database.fetch_all(query=query)
    return [Blade.model_validate(dict(row._mapping)) for row in result]


async def sql_create_blade(database: Database, blade: BladeBody) -> Blade | None:
    query = """
        INSERT INTO blades (name, name_key, tier)
        VALUES (:name, :name_key, :tier)
        ON CONFLICT DO NOTHING
        RETURNING *
    """
    result = await database.fetch_one(
        query=query,
        values={
            "name": blade.name.strip(),
            "name_key": get_name_key(blade.name),
            "tier": blade.tier.value,
        },
    )
    return Blade.model_validate(dict(result._mapping)) if result is not None else None
