from pydantic import BaseModel, Field

from bladeleague.models.db.shared import BaseModelORM, NonEmptyName
from bladeleague.utils.id_types import BalanceFormatId


class BalanceFormatBody(BaseModel):
    name: NonEmptyName


class BalanceFormat(BaseModelORM):
    id: BalanceFormatId
    name: str


class ScoringSystem(BaseModelORM):
    win: float
    loss: float


class AppConfig(BaseModelORM):
    balance_formats: list[BalanceFormat] = Field(default_factory=list)
    scoring_system: ScoringSystem

    def get_balance_format(self, balance_format_id: BalanceFormatId) -> BalanceFormat | None:
        return next(
            (fmt for fmt in self.balance_formats if fmt.id == balance_format_id),
            None,
        )
