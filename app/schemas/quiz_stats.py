from pydantic import BaseModel
from typing import Union


class ScoreSummaryResponse(BaseModel):
    quiz_id: str
    count: int
    min: Union[int, float]
    max: Union[int, float]
    mean: float
    median: Union[int, float]
    lower_quartile: Union[int, float]
    upper_quartile: Union[int, float]

    class Config:
        from_attributes = True
