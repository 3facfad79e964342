"""Base model class for site data models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SiteModel(BaseModel):
    """Base model serialized with the camelCase keys the site's JSON uses."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json_dict(self) -> dict:
        """Dump with camelCase keys in field order."""
        return self.model_dump(by_alias=True)
