"""Shared FastAPI dependencies."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from techcity.database import async_session
from techcity.services.sql_stores import SqlAlertStore, SqlReadingStore, SqlSensorRegistry
from techcity.simulator import AlertEvaluator, DataSimulator


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory used by the simulator and its stores."""
    return async_session


def build_simulator(session_factory: async_sessionmaker[AsyncSession] = async_session) -> DataSimulator:
    return DataSimulator(
        SqlSensorRegistry(session_factory),
        SqlReadingStore(session_factory),
        SqlAlertStore(session_factory),
    )


def get_simulator(
    request: Request,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> DataSimulator:
    """The process-wide simulator, created on first use if startup did not build one."""
    simulator = getattr(request.app.state, "simulator", None)
    if simulator is None:
        simulator = build_simulator(session_factory)
        request.app.state.simulator = simulator
    return simulator


def get_alert_evaluator(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> AlertEvaluator:
    return AlertEvaluator(SqlAlertStore(session_factory))
