from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints

NonEmptyName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def get_name_key(name: str) -> str:
    """Key that two names share when they only differ in case or surrounding whitespace."""
    return name.strip().casefold()


class BaseModelORM(BaseModel):
    model_config = ConfigDict(from_attributes=True)
