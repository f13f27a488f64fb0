from pydantic import BaseModel


class StudentStats(BaseModel):
    total: int


class RoomStats(BaseModel):
    total: int
    active: int
    total_capacity: int
    occupied: int
    available: int
    occupancy_rate: float


class QueryStats(BaseModel):
    total: int
    pending: int
    in_progress: int
    resolved: int


class RecentActivity(BaseModel):
    new_queries: int
    resolved_queries: int


class AdminStats(BaseModel):
    students: StudentStats
    rooms: RoomStats
    queries: QueryStats
    recent_activity: RecentActivity
