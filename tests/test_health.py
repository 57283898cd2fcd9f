"""Unit tests for the health checker."""

import asyncio
import pytest
from core.health import (
    CheckResult,
    HealthChecker,
    Status,
    check_event_loop,
    create_engine_check,
    create_logger_check,
)
from internal.logging import AsyncFileLogger


class TestHealthChecker:
    """Tests for HealthChecker aggregation."""

    @pytest.mark.asyncio
    async def test_all_ok(self):
        checker = HealthChecker()
        checker.register("event_loop", check_event_loop)
        report = await checker.check()
        assert report.status == Status.OK
        assert report.to_dict()["checks"] == [{"name": "loop", "status": "OK", "msg": ""}]

    @pytest.mark.asyncio
    async def test_critical_failure(self):
        async def broken():
            raise RuntimeError("down")

        checker = HealthChecker()
        checker.register("broken", broken, critical=True)
        report = await checker.check()
        assert report.status == Status.FAIL
        assert report.checks[0].msg == "down"

    @pytest.mark.asyncio
    async def test_non_critical_failure_degrades(self):
        async def broken():
            return CheckResult("extra", Status.FAIL, "down")

        checker = HealthChecker()
        checker.register("event_loop", check_event_loop)
        checker.register("extra", broken, critical=False)
        report = await checker.check()
        assert report.status == Status.DEGRADED

    @pytest.mark.asyncio
    async def test_timeout(self):
        async def slow():
            await asyncio.sleep(1)

        checker = HealthChecker(timeout=0.01)
        checker.register("slow", slow)
        report = await checker.check()
        assert report.checks[0].msg == "timeout"

    @pytest.mark.asyncio
    async def test_report_is_cached(self):
        calls = []

        async def counted():
            calls.append(1)
            return CheckResult("counted", Status.OK)

        checker = HealthChecker(ttl=60)
        checker.register("counted", counted)
        await checker.check()
        await checker.check()
        assert len(calls) == 1


class TestChecks:
    """Tests for individual checks."""

    @pytest.mark.asyncio
    async def test_engine_check(self, engine):
        result = await create_engine_check(engine)()
        assert result.status == Status.OK
        assert result.msg == "2 rovers"

    @pytest.mark.asyncio
    async def test_engine_check_mismatch_fails(self, engine, monkeypatch):
        monkeypatch.setattr(engine, "run", lambda text: [])
        checker = HealthChecker()
        checker.register("simulation_engine", create_engine_check(engine))
        report = await checker.check()
        assert report.status == Status.FAIL

    @pytest.mark.asyncio
    async def test_logger_check_stopped(self, tmp_path):
        result = await create_logger_check(AsyncFileLogger(str(tmp_path / "a.log")))()
        assert result.status == Status.DEGRADED
        assert result.msg == "stopped"
