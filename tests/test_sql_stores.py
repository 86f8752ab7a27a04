"""Tests for the SQLAlchemy-backed store adapters."""

from datetime import datetime, timedelta

import pytest

from techcity.models import SENSOR_STATUS_INACTIVE
from techcity.services import alert_service, sensor_service
from techcity.services.sql_stores import SqlAlertStore, SqlReadingStore, SqlSensorRegistry
from techcity.simulator import AlertEvaluator, DataSimulator


@pytest.fixture
async def sensors(session_factory):
    """One active temperature sensor and one inactive noise sensor."""
    async with session_factory() as session:
        active = await sensor_service.create_sensor(
            session, name="Downtown Temp", sensor_type="temperature", location="Centre"
        )
        inactive = await sensor_service.create_sensor(
            session,
            name="Old Noise Meter",
            sensor_type="noise",
            location="Rue de la Paix",
            status=SENSOR_STATUS_INACTIVE,
        )
    return active, inactive


@pytest.mark.asyncio
async def test_registry_lists_only_active_sensors(session_factory, sensors):
    active, _ = sensors
    listed = await SqlSensorRegistry(session_factory).list_active_sensors()

    assert [s.id for s in listed] == [active.id]
    assert listed[0].type == "temperature"
    assert listed[0].name == "Downtown Temp"


@pytest.mark.asyncio
async def test_registry_add_sensor(session_factory):
    registry = SqlSensorRegistry(session_factory)
    sensor = await registry.add_sensor("Park Humidity", "humidity", "Parc Central", 48.86, 2.33)

    assert sensor.id is not None
    assert [s.id for s in await registry.list_active_sensors()] == [sensor.id]


@pytest.mark.asyncio
async def test_last_reading_is_most_recent_timestamp(session_factory, sensors):
    active, _ = sensors
    store = SqlReadingStore(session_factory)
    assert await store.get_last_reading(active.id) is None

    base = datetime(2026, 5, 1, 12, 0)
    await store.insert_reading(active.id, 21.0, "°C", base)
    await store.insert_reading(active.id, 19.0, "°C", base - timedelta(hours=1))

    last = await store.get_last_reading(active.id)
    assert last.value == 21.0
    assert last.timestamp == base


@pytest.mark.asyncio
async def test_recent_unresolved_alert_lookup(session_factory, sensors):
    active, _ = sensors
    store = SqlAlertStore(session_factory)
    now = datetime.now()

    assert await store.has_recent_unresolved_alert(active.id, "critical", now - timedelta(hours=1)) is False

    await store.insert_alert(active.id, "critical", 30, 31.2, "CRITICAL: test")

    assert await store.has_recent_unresolved_alert(active.id, "critical", now - timedelta(hours=1))
    assert not await store.has_recent_unresolved_alert(active.id, "warning", now - timedelta(hours=1))
    assert not await store.has_recent_unresolved_alert(active.id, "critical", now + timedelta(minutes=1))


@pytest.mark.asyncio
async def test_old_or_resolved_alerts_do_not_count(session_factory, sensors):
    active, _ = sensors
    since = datetime.now() - timedelta(hours=1)

    async with session_factory() as session:
        await alert_service.insert_alert(
            session, active.id, "warning", 25, 26, "old", created_at=since - timedelta(minutes=5)
        )
        recent = await alert_service.insert_alert(session, active.id, "warning", 25, 27, "recent")
        await alert_service.resolve_alert(session, recent)

    assert await SqlAlertStore(session_factory).has_recent_unresolved_alert(
        active.id, "warning", since
    ) is False


@pytest.mark.asyncio
async def test_evaluator_deduplicates_against_database(session_factory, sensors):
    active, _ = sensors
    registry = SqlSensorRegistry(session_factory)
    [sensor] = await registry.list_active_sensors()
    evaluator = AlertEvaluator(SqlAlertStore(session_factory))

    await evaluator.evaluate(sensor, 32.0)
    await evaluator.evaluate(sensor, 33.0)

    async with session_factory() as session:
        rows, total = await alert_service.list_alerts(session, sensor_id=active.id)
    assert total == 1
    assert rows[0][0].alert_type == "critical"
    assert rows[0][0].threshold_value == 30


@pytest.mark.asyncio
async def test_simulator_cycle_persists_reading(session_factory, sensors):
    simulator = DataSimulator(
        SqlSensorRegistry(session_factory),
        SqlReadingStore(session_factory),
        SqlAlertStore(session_factory),
    )
    [sensor] = await SqlSensorRegistry(session_factory).list_active_sensors()

    reading = await simulator.simulate_sensor(sensor)

    last = await SqlReadingStore(session_factory).get_last_reading(sensor.id)
    assert last.value == reading.value
    assert 15 <= last.value <= 35
