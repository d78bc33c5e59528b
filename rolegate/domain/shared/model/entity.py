from pydantic import BaseModel, ConfigDict


class Entity(BaseModel):
    """Base for domain objects with identity. Mutable, validated on assignment."""

    model_config = ConfigDict(validate_assignment=True)
