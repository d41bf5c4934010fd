from pydantic import BaseModel
from typing import List, Optional


class DeleteMultipleRequest(BaseModel):
    ids: Optional[List[str]] = None


class DeleteMultipleResponse(BaseModel):
    message: str
    deletedCount: int
