"""Tests for the realtime simulation scheduler."""

import asyncio
import logging
import random
from datetime import datetime

import pytest

from techcity.simulator import DataSimulator, SensorInfo, SensorType
from techcity.simulator.stores import Reading


def fixed_clock(hour: int = 12):
    return lambda: datetime(2026, 5, 1, hour, 0)


@pytest.fixture
def simulator(sensor_registry, reading_store, alert_store):
    return DataSimulator(
        sensor_registry,
        reading_store,
        alert_store,
        stagger_seconds=0,
        rng=random.Random(3),
    )


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_initial_status_is_stopped(self, simulator):
        status = simulator.get_status()
        assert status.is_running is False
        assert status.active_timer_count == 0
        assert set(status.thresholds) == {t.value for t in SensorType}

    @pytest.mark.asyncio
    async def test_start_creates_one_timer_per_sensor_plus_heartbeat(self, simulator):
        assert await simulator.start(60) is True
        try:
            status = simulator.get_status()
            assert status.is_running is True
            assert status.sensor_count == 2
            assert status.active_timer_count == 3
            assert status.interval_seconds == 60
        finally:
            await simulator.stop()

    @pytest.mark.asyncio
    async def test_double_start_does_not_duplicate_timers(self, simulator, caplog):
        await simulator.start(60)
        try:
            assert await simulator.start(60) is False
            assert simulator.get_status().active_timer_count == 3
            assert "already running" in caplog.text
        finally:
            await simulator.stop()

    @pytest.mark.asyncio
    async def test_concurrent_starts_wire_one_set_of_timers(self, simulator):
        results = await asyncio.gather(simulator.start(60), simulator.start(60))
        try:
            assert sorted(results) == [False, True]
            assert simulator.get_status().active_timer_count == 3
        finally:
            await simulator.stop()

    @pytest.mark.asyncio
    async def test_double_stop_is_a_noop(self, simulator, caplog):
        await simulator.start(60)
        assert await simulator.stop() is True
        assert await simulator.stop() is False

        status = simulator.get_status()
        assert status.is_running is False
        assert status.active_timer_count == 0
        assert "already stopped" in caplog.text

    @pytest.mark.asyncio
    async def test_stop_before_start_is_a_noop(self, simulator):
        assert await simulator.stop() is False
        assert simulator.get_status().is_running is False

    @pytest.mark.asyncio
    async def test_start_without_active_sensors_stays_stopped(
        self, simulator, sensor_registry, caplog
    ):
        sensor_registry.sensors = []

        assert await simulator.start(60) is False
        assert simulator.get_status().is_running is False
        assert simulator.get_status().active_timer_count == 0
        assert "No active sensors" in caplog.text

    @pytest.mark.asyncio
    async def test_registry_failure_leaves_simulator_stopped(
        self, simulator, sensor_registry, caplog
    ):
        sensor_registry.fail = True

        assert await simulator.start(60) is False
        assert simulator.get_status().is_running is False
        assert simulator.get_status().active_timer_count == 0
        assert "Could not load active sensors" in caplog.text

        sensor_registry.fail = False
        assert await simulator.start(60) is True
        await simulator.stop()

    @pytest.mark.asyncio
    async def test_unknown_types_are_not_scheduled(self, simulator, sensor_registry):
        sensor_registry.sensors.append(SensorInfo(id=3, type="radiation", name="Geiger", location="Lab"))

        await simulator.start(60)
        try:
            assert simulator.get_status().sensor_count == 2
        finally:
            await simulator.stop()

    @pytest.mark.asyncio
    async def test_invalid_interval_rejected(self, simulator):
        with pytest.raises(ValueError):
            await simulator.start(0)

    @pytest.mark.asyncio
    async def test_restart_after_stop(self, simulator):
        await simulator.start(60)
        await simulator.stop()
        assert await simulator.start(30) is True
        try:
            assert simulator.get_status().interval_seconds == 30
        finally:
            await simulator.stop()


class TestCycles:
    @pytest.mark.asyncio
    async def test_running_simulator_records_readings(self, simulator, reading_store):
        await simulator.start(0.01)
        await asyncio.sleep(0.1)
        await simulator.stop()

        assert len(reading_store.readings[1]) >= 2
        assert len(reading_store.readings[2]) >= 2
        assert all(r.unit == "°C" for r in reading_store.readings[1])
        assert all(r.unit == "veh/h" for r in reading_store.readings[2])

    @pytest.mark.asyncio
    async def test_first_tick_runs_immediately(self, simulator, reading_store):
        await simulator.start(60)
        await asyncio.sleep(0.05)
        try:
            assert len(reading_store.readings[1]) == 1
            assert len(reading_store.readings[2]) == 1
        finally:
            await simulator.stop()

    @pytest.mark.asyncio
    async def test_stop_cancels_future_ticks(self, simulator, reading_store):
        await simulator.start(0.01)
        await asyncio.sleep(0.05)
        await simulator.stop()
        recorded = len(reading_store.readings[1])

        await asyncio.sleep(0.05)
        assert len(reading_store.readings[1]) == recorded

    @pytest.mark.asyncio
    async def test_failing_sensor_does_not_stop_others(self, simulator, reading_store, caplog):
        reading_store.failing_sensors.add(1)

        await simulator.start(0.01)
        await asyncio.sleep(0.1)
        try:
            assert simulator.get_status().is_running is True
            assert len(reading_store.readings[2]) >= 2
            assert reading_store.readings[1] == []
            assert "Simulation failed for sensor 1" in caplog.text
        finally:
            await simulator.stop()

    @pytest.mark.asyncio
    async def test_heartbeat_logs_status(self, sensor_registry, reading_store, alert_store, caplog):
        caplog.set_level(logging.INFO, logger="techcity.simulator.engine")
        simulator = DataSimulator(
            sensor_registry, reading_store, alert_store, heartbeat_seconds=0.01, stagger_seconds=0
        )
        await simulator.start(60)
        await asyncio.sleep(0.05)
        await simulator.stop()

        assert "Simulator active - 2 sensors being simulated" in caplog.text


class TestSimulateSensor:
    @pytest.mark.asyncio
    async def test_continues_walk_from_last_stored_value(
        self, sensor_registry, reading_store, alert_store, temperature_sensor
    ):
        reading_store.readings[1].append(Reading(1, 20.0, "°C", datetime(2026, 5, 1, 8, 0)))
        simulator = DataSimulator(
            sensor_registry, reading_store, alert_store, clock=fixed_clock(12), rng=random.Random(1)
        )

        reading = await simulator.simulate_sensor(temperature_sensor)

        # Noon pattern is 1.3: base within 20 +/- 1 lands in [24.7, 27.3]
        assert 24.7 <= reading.value <= 27.3
        assert reading.timestamp == datetime(2026, 5, 1, 12, 0)
        assert reading_store.readings[1][-1] is reading

    @pytest.mark.asyncio
    async def test_hot_reading_raises_one_critical_alert(
        self, sensor_registry, reading_store, alert_store, temperature_sensor
    ):
        reading_store.readings[1].append(Reading(1, 34.0, "°C", datetime(2026, 5, 1, 13, 0)))
        simulator = DataSimulator(
            sensor_registry, reading_store, alert_store, clock=fixed_clock(14), rng=random.Random(0)
        )

        first = await simulator.simulate_sensor(temperature_sensor)
        second = await simulator.simulate_sensor(temperature_sensor)

        assert first.value == 35.0
        assert second.value == 35.0
        assert len(alert_store.alerts) == 1
        assert alert_store.alerts[0]["alert_type"] == "critical"

    @pytest.mark.asyncio
    async def test_unknown_type_is_skipped(self, simulator, reading_store, alert_store, caplog):
        sensor = SensorInfo(id=5, type="radiation", name="Geiger", location="Lab")

        assert await simulator.simulate_sensor(sensor) is None
        assert reading_store.readings[5] == []
        assert "Unknown sensor type" in caplog.text

    @pytest.mark.asyncio
    async def test_alert_store_failure_keeps_reading(
        self, simulator, reading_store, alert_store, temperature_sensor
    ):
        alert_store.fail = True
        reading_store.readings[1].append(Reading(1, 35.0, "°C", datetime(2026, 5, 1, 13, 0)))

        reading = await simulator.simulate_sensor(temperature_sensor)

        assert reading is not None
        assert alert_store.alerts == []


class TestSeedAndBackfill:
    @pytest.mark.asyncio
    async def test_seed_creates_one_sensor_per_type(self, simulator, sensor_registry):
        sensor_registry.sensors = []

        created = await simulator.seed_test_sensors()

        assert len(created) == 6
        assert {s.type for s in created} == {t.value for t in SensorType}

    @pytest.mark.asyncio
    async def test_backfill_uses_simulator_stores(self, simulator, reading_store, alert_store):
        result = await simulator.backfill(1)

        assert result.sensors_processed == 2
        assert result.readings_written == 2 * 49
        assert alert_store.alerts == []
