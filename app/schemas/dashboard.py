"""
Dashboard related schemas
"""
from typing import List, Literal
from pydantic import BaseModel, Field


class DashboardStats(BaseModel):
    tasks_automated: int = Field(..., description="Tasks automated so far")
    time_saved: float = Field(..., description="Hours saved")
    integrations_active: int = Field(..., description="Active integrations")
    ai_accuracy: float = Field(..., description="Assistant accuracy in percent")


class DashboardActivity(BaseModel):
    type: str
    title: str
    description: str
    time: str
    icon: str
    status: Literal["success", "processing", "error"] = "success"


class DashboardResponse(BaseModel):
    success: bool = True
    stats: DashboardStats
    recent_activities: List[DashboardActivity]
