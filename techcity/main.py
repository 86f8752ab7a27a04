import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from techcity.config import SIMULATION_INTERVAL_SECONDS, SIMULATOR_AUTOSTART
from techcity.database import create_tables
from techcity.logging_config import setup_logging
from techcity.routes.alerts import router as alerts_router
from techcity.routes.deps import build_simulator
from techcity.routes.sensor_data import router as sensor_data_router
from techcity.routes.sensors import router as sensors_router
from techcity.routes.simulator import router as simulator_router

# Initialize logging before anything else
setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="TechCity IoT Platform", version="0.1.0")
logger.info("FastAPI app created")

# Include routers
app.include_router(sensors_router)
app.include_router(sensor_data_router)
app.include_router(alerts_router)
app.include_router(simulator_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173"],
    allow_methods=["GET", "POST", "PUT"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    logger.info("TechCity backend starting up")
    await create_tables()
    app.state.simulator = build_simulator()
    if SIMULATOR_AUTOSTART:
        await app.state.simulator.start(SIMULATION_INTERVAL_SECONDS)
    logger.info("API docs available at http://localhost:8000/docs")


@app.on_event("shutdown")
async def shutdown_event():
    simulator = getattr(app.state, "simulator", None)
    if simulator is not None and simulator.is_running:
        await simulator.stop()
    logger.info("TechCity backend shut down")


@app.get("/api/health")
async def health_check():
    return {"status": "ok"}
