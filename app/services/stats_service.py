from datetime import datetime, timedelta

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from app.models.query_models import Query, QueryStatus
from app.models.room_models import Room
from app.models.user_models import User, UserRole
from app.schemas.stats_schemas import AdminStats, QueryStats, RecentActivity, RoomStats, StudentStats

RECENT_ACTIVITY_DAYS = 7


def _count_when(condition):
    return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)


def get_admin_stats(db: Session, now: datetime | None = None) -> AdminStats:
    now = now or datetime.utcnow()
    since = now - timedelta(days=RECENT_ACTIVITY_DAYS)

    students = db.query(func.count(User.id)).filter(User.role == UserRole.student).scalar() or 0

    total_rooms, active_rooms, total_capacity, occupied = db.query(
        func.count(Room.id),
        _count_when(Room.is_active.is_(True)),
        func.coalesce(func.sum(Room.capacity), 0),
        func.coalesce(func.sum(Room.occupied_seats), 0),
    ).one()

    total_queries, pending, in_progress, resolved, new_recent, resolved_recent = db.query(
        func.count(Query.id),
        _count_when(Query.status == QueryStatus.pending),
        _count_when(Query.status == QueryStatus.in_progress),
        _count_when(Query.status == QueryStatus.resolved),
        _count_when(Query.created_at >= since),
        _count_when((Query.status == QueryStatus.resolved) & (Query.updated_at >= since)),
    ).one()

    occupancy_rate = (occupied / total_capacity) * 100 if total_capacity else 0.0

    return AdminStats(
        students=StudentStats(total=students),
        rooms=RoomStats(
            total=total_rooms,
            active=active_rooms,
            total_capacity=total_capacity,
            occupied=occupied,
            available=total_capacity - occupied,
            occupancy_rate=round(occupancy_rate, 2),
        ),
        queries=QueryStats(
            total=total_queries,
            pending=pending,
            in_progress=in_progress,
            resolved=resolved,
        ),
        recent_activity=RecentActivity(
            new_queries=new_recent,
            resolved_queries=resolved_recent,
        ),
    )
