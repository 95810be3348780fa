"""
FastAPI dependencies resolving the per-application resources opened in the lifespan
"""

from fastapi import Request

from trip_planner.db.database import Database
from trip_planner.db.stores import TripStore, UserStore
from trip_planner.services.microservices import MicroserviceClient


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_trip_store(request: Request) -> TripStore:
    return TripStore(get_database(request).trips)


def get_user_store(request: Request) -> UserStore:
    return UserStore(get_database(request).users)


def get_microservices(request: Request) -> MicroserviceClient:
    return request.app.state.microservices
