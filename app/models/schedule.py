from datetime import date as date_type
from pydantic import BaseModel, Field
from typing import Optional, Dict


class ScheduleCreate(BaseModel):
    student_id: Optional[str] = None
    group_id: Optional[str] = None
    day: Optional[str] = None
    date: date_type
    time: str = Field(..., description="Время начала, например 15:30")
    duration: int = Field(..., description="Продолжительность в минутах, не менее 30")
    subject: str
    description: Optional[str] = ""


class ScheduleUpdate(BaseModel):
    date: date_type
    time: str
    duration: int
    subject: str
    description: Optional[str] = None


class AttendanceUpdate(BaseModel):
    attendance: Optional[bool] = None
    studentId: Optional[str] = Field(None, description="Обязателен для групповых занятий")


class GroupAttendanceUpdate(BaseModel):
    attendance: Dict[str, bool] = Field(..., description="{studentId: присутствовал}")
