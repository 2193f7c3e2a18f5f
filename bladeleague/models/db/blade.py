from enum import auto

from pydantic import BaseModel

from bladeleague.models.db.shared import BaseModelORM, NonEmptyName
from bladeleague.utils.id_types import BladeId
from bladeleague.utils.types import EnumAutoStr


class BladeTier(EnumAutoStr):
    S = auto()
    A = auto()
    B = auto()
    C = auto()
    D = auto()


class BladeBody(BaseModel):
    name: NonEmptyName
    tier: BladeTier = BladeTier.B


class Blade(BaseModelORM):
    id: BladeId
    name: str
    tier: BladeTier
