"""Simulator control routes."""

from fastapi import APIRouter, Depends, HTTPException

from techcity.routes.deps import get_simulator
from techcity.schemas import (
    BackfillRequest,
    BackfillResponse,
    SeedResponse,
    SimulatorStatus,
    StartRequest,
)
from techcity.simulator import DataSimulator

router = APIRouter(prefix="/api/simulator", tags=["simulator"])


@router.get("/status", response_model=SimulatorStatus)
async def get_status(simulator: DataSimulator = Depends(get_simulator)) -> SimulatorStatus:
    return simulator.get_status()


@router.post("/start", response_model=SimulatorStatus)
async def start_simulator(
    body: StartRequest | None = None,
    simulator: DataSimulator = Depends(get_simulator),
) -> SimulatorStatus:
    """Start realtime simulation for every active sensor."""
    body = body or StartRequest()
    if simulator.is_running:
        raise HTTPException(status_code=409, detail="Simulator already running")

    started = await simulator.start(body.interval_seconds)
    if not started and not simulator.is_running:
        raise HTTPException(status_code=409, detail="No active sensors to simulate")
    return simulator.get_status()


@router.post("/stop", response_model=SimulatorStatus)
async def stop_simulator(simulator: DataSimulator = Depends(get_simulator)) -> SimulatorStatus:
    if not await simulator.stop():
        raise HTTPException(status_code=409, detail="Simulator not running")
    return simulator.get_status()


@router.post("/backfill", response_model=BackfillResponse)
async def backfill(
    body: BackfillRequest | None = None,
    simulator: DataSimulator = Depends(get_simulator),
) -> BackfillResponse:
    """Generate a half-hourly history for all active sensors. Blocks until done."""
    body = body or BackfillRequest()
    result = await simulator.backfill(body.days)
    return BackfillResponse(
        days=result.days,
        sensors_processed=result.sensors_processed,
        sensors_skipped=result.sensors_skipped,
        readings_written=result.readings_written,
    )


@router.post("/seed", response_model=SeedResponse, status_code=201)
async def seed_sensors(simulator: DataSimulator = Depends(get_simulator)) -> SeedResponse:
    """Register the six demo sensors."""
    created = await simulator.seed_test_sensors()
    return SeedResponse(created_count=len(created), sensor_ids=[s.id for s in created])
