"""
Mock dashboard statistics that drift upward between polls
"""
import random
from typing import List, Optional

from app.schemas.dashboard import DashboardActivity, DashboardStats


RECENT_ACTIVITIES: List[DashboardActivity] = [
    DashboardActivity(
        type="automation",
        title="Email responses automated",
        description="Handled 12 customer inquiries automatically",
        time="2 minutes ago",
        icon="📧",
    ),
    DashboardActivity(
        type="integration",
        title="Salesforce sync completed",
        description="Updated 45 customer records",
        time="15 minutes ago",
        icon="🔄",
    ),
    DashboardActivity(
        type="learning",
        title="Knowledge base updated",
        description="Processed 3 new documents",
        time="1 hour ago",
        icon="📚",
        status="processing",
    ),
    DashboardActivity(
        type="task",
        title="Meeting preparation completed",
        description="Generated agenda and talking points for 3pm meeting",
        time="2 hours ago",
        icon="📋",
    ),
]


class DashboardTicker:
    """Process-local counters; each poll adds a small random increment"""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._stats = DashboardStats(
            tasks_automated=1247,
            time_saved=156.0,
            integrations_active=8,
            ai_accuracy=94.2,
        )

    def poll(self) -> DashboardStats:
        self._stats = self._stats.model_copy(update={
            "tasks_automated": self._stats.tasks_automated + self._rng.randint(0, 4),
            "time_saved": round(self._stats.time_saved + self._rng.random() * 0.1, 2),
        })
        return self._stats


dashboard_ticker = DashboardTicker()
