"""
Pydantic schemas shared by the Task List Service and its client.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _reject_blank(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("title must not be blank")
    return value


class TaskCreate(BaseModel):
    """Schema for creating a task"""
    title: str = Field(..., min_length=1, max_length=200, description="Task title")
    description: Optional[str] = Field(None, max_length=1000, description="Task description")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value):
        return _reject_blank(value)


class TaskUpdate(BaseModel):
    """Schema for updating a task; only the fields that are sent are applied"""
    title: Optional[str] = Field(None, min_length=1, max_length=200, description="Task title")
    description: Optional[str] = Field(None, max_length=1000, description="Task description")
    completed: Optional[bool] = Field(None, description="Completion flag")

    @field_validator("title")
    @classmethod
    def title_not_null(cls, value):
        if value is None:
            raise ValueError("title may be omitted but not null")
        return _reject_blank(value)

    @field_validator("completed")
    @classmethod
    def completed_not_null(cls, value):
        if value is None:
            raise ValueError("completed may be omitted but not null")
        return value


class TaskResponse(BaseModel):
    """Schema for task response"""
    id: str = Field(..., description="Task ID")
    title: str = Field(..., description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    completed: bool = Field(False, description="Completion flag")
    created_at: Optional[datetime] = Field(None, description="Task creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Task update timestamp")

    model_config = ConfigDict(from_attributes=True)


class TaskSummary(BaseModel):
    """Schema for task summary statistics"""
    total: int = Field(..., description="Total number of tasks")
    completed: int = Field(..., description="Number of completed tasks")
    pending: int = Field(..., description="Number of pending tasks")
    completion_rate: int = Field(..., description="Completed share of all tasks, in whole percent")
