# app/models/common.py

from typing import Annotated, Union

from pydantic import BaseModel, PlainSerializer


def _amount_to_json(value: float) -> Union[int, float]:
    # 100.0 goes out as 100, 10.5 stays 10.5
    return int(value) if float(value).is_integer() else value


Amount = Annotated[float, PlainSerializer(_amount_to_json, when_used="json")]


class DeletedResponse(BaseModel):
    status: str = "deleted"


class HealthResponse(BaseModel):
    status: str = "ok"
