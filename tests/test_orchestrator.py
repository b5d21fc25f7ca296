"""Tests for the fetch → extract → persist refresh pipeline."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, Mock

import pytest

import workers.device_list.orchestrator as orchestrator
from core.config import settings
from workers.device_list.extractors import DeviceTableExtractor
from workers.device_list.fetcher import FetchError
from workers.device_list.models import RefreshStatus
from workers.device_list.schemas import known_categories


@pytest.fixture
def slack(monkeypatch) -> AsyncMock:
    alert = AsyncMock(return_value=True)
    monkeypatch.setattr(orchestrator, "send_slack_alert", alert)
    return alert


def _serve(monkeypatch, html: str) -> AsyncMock:
    fetch = AsyncMock(return_value=html)
    monkeypatch.setattr(orchestrator, "fetch_device_list_html", fetch)
    return fetch


class TestRefreshDevices:
    @pytest.mark.asyncio
    async def test_success_writes_snapshot(self, monkeypatch, tmp_path, sample_page, slack):
        fetch = _serve(monkeypatch, sample_page)
        path = tmp_path / "devices.json"

        summary = await orchestrator.refresh_devices(url="https://x.test/list", snapshot_path=path)

        fetch.assert_awaited_once_with("https://x.test/list")
        assert summary.status == RefreshStatus.SUCCESS
        assert summary.total == 5
        assert summary.category_counts == {
            "Guitar amps": 2,
            "Neural Captures V2": 1,
            "Plugin devices": 1,
            "IR loader": 1,
        }
        assert summary.unsupported_categories == ["Drum machines"]
        assert summary.snapshot_path == str(path)

        data = json.loads(path.read_text(encoding="utf-8"))
        assert [entry["name"] for entry in data] == [
            "Twin Reverb",
            "Brit 800",
            "Brit 2203 87",
            "Archetype Plini Clean",
            "IR Loader 1x1",
        ]

    @pytest.mark.asyncio
    async def test_missing_categories_are_reported(self, monkeypatch, tmp_path, sample_page, slack):
        _serve(monkeypatch, sample_page)

        summary = await orchestrator.refresh_devices(snapshot_path=tmp_path / "devices.json")

        assert "Delay" in summary.missing_categories
        assert "Guitar amps" not in summary.missing_categories
        assert len(summary.missing_categories) == len(known_categories()) - 4
        slack.assert_awaited_once()
        assert "missing" in slack.await_args.args[0]

    @pytest.mark.asyncio
    async def test_empty_result_keeps_previous_snapshot(self, monkeypatch, tmp_path, slack):
        _serve(monkeypatch, "<html><body><h2>Guitar amps</h2><div>redesigned</div></body></html>")
        path = tmp_path / "devices.json"
        path.write_text('[{"category": "Delay", "name": "Tape Echo"}]', encoding="utf-8")

        summary = await orchestrator.refresh_devices(snapshot_path=path)

        assert summary.status == RefreshStatus.EMPTY
        assert summary.total == 0
        assert summary.snapshot_path is None
        assert json.loads(path.read_text(encoding="utf-8")) == [{"category": "Delay", "name": "Tape Echo"}]
        slack.assert_awaited_once()
        assert "no devices" in slack.await_args.args[0]

    @pytest.mark.asyncio
    async def test_notify_false_sends_no_alerts(self, monkeypatch, tmp_path, slack):
        _serve(monkeypatch, "<html></html>")

        summary = await orchestrator.refresh_devices(snapshot_path=tmp_path / "devices.json", notify=False)

        assert summary.status == RefreshStatus.EMPTY
        slack.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_fetch_error_propagates_without_writing(self, monkeypatch, tmp_path, slack):
        monkeypatch.setattr(
            orchestrator,
            "fetch_device_list_html",
            AsyncMock(side_effect=FetchError("Failed to fetch page: HTTP 503", status_code=503)),
        )
        path = tmp_path / "devices.json"

        with pytest.raises(FetchError):
            await orchestrator.refresh_devices(snapshot_path=path)

        assert not path.exists()
        slack.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_uses_configured_selectors(self, monkeypatch, tmp_path, slack):
        html = "<h2>Looper</h2><div><li class='r'><span class='c'>Looper X</span><span class='c'>2.1.0</span></li></div>"
        _serve(monkeypatch, html)
        monkeypatch.setattr(settings, "device_row_selector", "li.r")
        monkeypatch.setattr(settings, "device_cell_selector", "span.c")

        summary = await orchestrator.refresh_devices(snapshot_path=tmp_path / "devices.json", notify=False)

        assert summary.category_counts == {"Looper": 1}

    @pytest.mark.asyncio
    async def test_success_invalidates_shared_cache(self, monkeypatch, tmp_path, sample_page, slack):
        _serve(monkeypatch, sample_page)
        invalidate = Mock()
        monkeypatch.setattr(orchestrator.snapshot_cache, "invalidate", invalidate)

        await orchestrator.refresh_devices(snapshot_path=tmp_path / "devices.json")

        invalidate.assert_called_once()


def test_find_missing_categories(sample_page):
    result = DeviceTableExtractor(sample_page).extract_all()

    missing = orchestrator.find_missing_categories(result)

    assert missing == [c for c in known_categories() if c not in result.category_counts()]


class TestRunDeviceRefresh:
    @pytest.mark.asyncio
    async def test_job_returns_summary_dict(self, monkeypatch, tmp_path, sample_page, slack):
        _serve(monkeypatch, sample_page)
        monkeypatch.setattr(settings, "snapshot_path", str(tmp_path / "devices.json"))

        result = await orchestrator.run_device_refresh({})

        assert result["status"] == "SUCCESS"
        assert result["total"] == 5
        assert (tmp_path / "devices.json").exists()
