"""Base model for use case DTOs

DTOs use snake_case attributes in Python and camelCase keys on the wire,
matching the payloads the web client already sends and expects.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
