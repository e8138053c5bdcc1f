from pydantic import BaseModel, ConfigDict


class OperatorRecord(BaseModel):
    """The one column of an `operators` row this service reads."""

    model_config = ConfigDict(extra="ignore")

    verified: bool = False
