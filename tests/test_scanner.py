"""Tests for the audit pipeline."""

import json

import httpx
import pytest

from agentaudit.collectors.agentaudit import AgentAuditCollector
from agentaudit.config import AuditConfig
from agentaudit.errors import HttpError
from agentaudit.scoring.factors import FailOn, Rating
from agentaudit.services.scanner import run_scan


def _collector(payload, calls):
    def handler(request):
        calls.append(request.url)
        return httpx.Response(200, json=payload)

    return AgentAuditCollector(transport=httpx.MockTransport(handler))


class TestRunScan:
    """Tests for run_scan."""

    @pytest.mark.asyncio
    async def test_left_pad_and_evil_pkg(self):
        calls = []
        collector = _collector(
            [{"slug": "left-pad", "trust_score": 95}, {"slug": "evil-pkg", "latest_result": "unsafe"}],
            calls,
        )
        config = AuditConfig(packages=["left-pad", "evil-pkg"], fail_on=FailOn.UNSAFE)
        try:
            outcome = await run_scan(config, collector=collector)
        finally:
            await collector.close()

        assert len(calls) == 1
        assert [r.rating for r in outcome.results] == [Rating.SAFE, Rating.UNSAFE]
        assert [r.exceeds for r in outcome.results] == [False, True]
        assert outcome.has_issues is True
        assert outcome.skipped is False
        assert "evil-pkg" in outcome.summary

    @pytest.mark.asyncio
    async def test_no_identifiers_skips_fetch(self):
        calls = []
        collector = _collector([], calls)
        try:
            outcome = await run_scan(AuditConfig(), collector=collector)
        finally:
            await collector.close()

        assert calls == []
        assert outcome.results == []
        assert outcome.has_issues is False
        assert outcome.skipped is True
        assert outcome.to_dicts() == []

    @pytest.mark.asyncio
    async def test_scan_config_with_empty_workspace_skips_fetch(self, tmp_path):
        calls = []
        collector = _collector([], calls)
        try:
            outcome = await run_scan(AuditConfig(scan_config=True, workspace=tmp_path), collector=collector)
        finally:
            await collector.close()
        assert calls == []
        assert outcome.skipped is True

    @pytest.mark.asyncio
    async def test_discovered_packages_follow_explicit(self, tmp_path):
        (tmp_path / "package.json").write_text(
            json.dumps({"dependencies": {"express": "^4"}, "devDependencies": {"left-pad": "1"}}),
            encoding="utf-8",
        )
        calls = []
        collector = _collector({"packages": [{"slug": "express", "trust_score": 85}]}, calls)
        config = AuditConfig(packages=["left-pad", "zod"], scan_config=True, workspace=tmp_path)
        try:
            outcome = await run_scan(config, collector=collector)
        finally:
            await collector.close()

        assert [r.slug for r in outcome.results] == ["left-pad", "zod", "express"]
        assert [r.found for r in outcome.results] == [False, False, True]

    @pytest.mark.asyncio
    async def test_forwards_verify_and_timeout(self):
        calls = []
        collector = _collector([], calls)
        config = AuditConfig(api_url="https://audit.test", packages=["a"], verify="strict", timeout="90")
        try:
            await run_scan(config, collector=collector)
        finally:
            await collector.close()

        [url] = calls
        assert str(url) == "https://audit.test/api/packages?verify=strict&timeout=90"

    @pytest.mark.asyncio
    async def test_unknown_exceeds_only_under_any(self):
        for fail_on, expected in ((FailOn.ANY, True), (FailOn.CAUTION, False), (FailOn.UNSAFE, False)):
            calls = []
            collector = _collector([], calls)
            try:
                outcome = await run_scan(AuditConfig(packages=["ghost"], fail_on=fail_on), collector=collector)
            finally:
                await collector.close()
            assert outcome.has_issues is expected

    @pytest.mark.asyncio
    async def test_fetch_errors_propagate(self):
        collector = AgentAuditCollector(
            transport=httpx.MockTransport(lambda r: httpx.Response(502, text="Bad Gateway"))
        )
        try:
            with pytest.raises(HttpError, match="HTTP 502: Bad Gateway"):
                await run_scan(AuditConfig(packages=["a"]), collector=collector)
        finally:
            await collector.close()

    @pytest.mark.asyncio
    async def test_creates_and_closes_own_collector(self, monkeypatch):
        created = []

        class FakeCollector:
            def __init__(self):
                self.closed = False
                created.append(self)

            async def collect(self, api_url, verify="", timeout=""):
                return [{"slug": "a", "trust_score": 10}]

            async def close(self):
                self.closed = True

        monkeypatch.setattr("agentaudit.services.scanner.AgentAuditCollector", FakeCollector)
        outcome = await run_scan(AuditConfig(packages=["a"]))

        assert outcome.results[0].rating == Rating.UNSAFE
        assert len(created) == 1
        assert created[0].closed is True
