"""
Route composition; paths are served at the application root
"""

from fastapi import APIRouter

from clipshare.api.endpoints import auth, health, videos

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])

# /api/videos and /upload-video
api_router.include_router(videos.router, tags=["videos"])

# /signup and /login
api_router.include_router(auth.router, tags=["auth"])
