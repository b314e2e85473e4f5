from fastapi import APIRouter

from climate_stations.api.routes import stations

api_router = APIRouter(prefix="/api")
api_router.include_router(stations.router, tags=["stations"])
