# streamsphere/schemas/base.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Response/request shape spoken on the wire: camelCase keys outside,
    snake_case attributes inside. Can be built straight from ORM rows.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
