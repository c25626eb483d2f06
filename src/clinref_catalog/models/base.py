"""Shared pydantic base for serialized catalog records."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CatalogModel(BaseModel):
    """Frozen base accepting camelCase or snake_case input.

    Field names are snake_case in Python; serialized catalogs may use either
    spelling (``categoryCode`` / ``category_code``).
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
