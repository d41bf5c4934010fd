from pydantic import BaseModel, Field
from typing import Optional, Union


class GradeUpdate(BaseModel):
    grade: Optional[Union[int, float, str]] = Field(None, description="null или отсутствие снимает оценку")
