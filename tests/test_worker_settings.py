"""Tests for the ARQ worker registration."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

import workers.device_list.orchestrator as orchestrator
from workers import worker_settings
from workers.worker_settings import WorkerSettings


class TestWorkerSettings:
    def test_registers_refresh_job(self):
        assert WorkerSettings.functions == [worker_settings.run_device_refresh]
        assert len(WorkerSettings.cron_jobs) == 1

    @pytest.mark.asyncio
    async def test_job_delegates_to_orchestrator(self, monkeypatch):
        job = AsyncMock(return_value={"status": "SUCCESS"})
        monkeypatch.setattr(orchestrator, "run_device_refresh", job)

        result = await worker_settings.run_device_refresh({"job_id": "abc"})

        assert result == {"status": "SUCCESS"}
        job.assert_awaited_once_with({"job_id": "abc"})
