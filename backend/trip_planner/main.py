from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from trip_planner.core.config import (
    APP_NAME,
    APP_VERSION,
    CORS_ORIGINS,
    DATABASE_NAME,
    MONGODB_URI,
    SERVER_HOST,
    SERVER_PORT,
)
from trip_planner.core.errors import register_exception_handlers
from trip_planner.db.database import Database
from trip_planner.router.advice import router as advice_router
from trip_planner.router.auth import router as auth_router
from trip_planner.router.export import router as export_router
from trip_planner.router.phrases import router as phrases_router
from trip_planner.router.system import router as system_router
from trip_planner.router.trip import router as trip_router
from trip_planner.services.microservices import MicroserviceClient


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: open the database handle and the microservice client
    print("🚀 Starting up Trip Planner API...")
    database = Database(MONGODB_URI, DATABASE_NAME)
    await database.test_connection()
    await database.init_indexes()
    app.state.database = database
    app.state.microservices = MicroserviceClient.from_config()
    yield
    # Shutdown: release both
    print("🛑 Shutting down Trip Planner API...")
    await app.state.microservices.aclose()
    database.close()


app = FastAPI(title=APP_NAME, version=APP_VERSION, lifespan=lifespan)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Mount routers
app.include_router(system_router)
app.include_router(auth_router)
app.include_router(trip_router)
app.include_router(advice_router)
app.include_router(phrases_router)
app.include_router(export_router)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT)
