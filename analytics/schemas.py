# src/analytics/schemas.py
from auth.schemas import CamelModel


class StatsResponse(CamelModel):
    total_sessions: int = 0
    active_sessions: int = 0
    safe_sessions: int = 0
    dangerous_sessions: int = 0
    threats_detected: int = 0
