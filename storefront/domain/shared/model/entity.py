from pydantic import BaseModel, ConfigDict


class Entity(BaseModel):
    """Identity-bearing domain object. Field assignments are re-validated."""

    model_config = ConfigDict(validate_assignment=True)
