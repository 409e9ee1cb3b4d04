from fastapi import APIRouter

from src.keylight.api.v1 import projects, submissions, users

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(submissions.router)
api_router.include_router(users.router)
api_router.include_router(projects.router)
