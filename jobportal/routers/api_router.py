from fastapi import APIRouter
from jobportal.routers import auth, jobs, applications, resumes

# Centralized API router hub
# Routers are aggregated here, and main.py only imports this single hub.
api_router = APIRouter()

api_router.include_router(auth.router, tags=["Authentication"])
api_router.include_router(jobs.router, tags=["Jobs"])
api_router.include_router(applications.router, tags=["Applications"])
api_router.include_router(resumes.router, tags=["Resumes"])
