# Router aggregator
from fastapi import APIRouter
from app.api.v1.endpoints.auth import auth_router
from app.api.v1.endpoints import course_router
from app.api.v1.endpoints.admin import admin_room_router
from app.api.v1.endpoints.admin import admin_student_router
from app.api.v1.endpoints.admin import admin_fee_router
from app.api.v1.endpoints.admin import admin_query_router
from app.api.v1.endpoints.admin import admin_stats_router
from app.api.v1.endpoints.student import student_router
from app.api.v1.endpoints.student import student_query_router


api_router = APIRouter()

api_router.include_router(auth_router.router)
api_router.include_router(course_router.router)
api_router.include_router(admin_room_router.router)
api_router.include_router(admin_student_router.router)
api_router.include_router(admin_fee_router.router)
api_router.include_router(admin_query_router.router)
api_router.include_router(admin_stats_router.router)
api_router.include_router(student_router.router)
api_router.include_router(student_query_router.router)
