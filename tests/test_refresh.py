# tests/test_refresh.py
import asyncio
import time

import pytest

from conftest import make_profile
from finquest_insights.analyzers.base import Analyzer
from finquest_insights.engine import InsightEngine
from finquest_insights.refresh import AutoRefresher


class SlowAnalyzer(Analyzer):
    name = "slow"

    def analyze(self, data):
        time.sleep(0.2)
        return []


def provider():
    return make_profile(), [], None


class TestRefreshNow:

    def test_delivers_result(self, settings, id_generator, clock):
        delivered = []
        refresher = AutoRefresher(InsightEngine(settings, id_generator=id_generator, clock=clock), provider,
                                  on_result=delivered.append)

        result = asyncio.run(refresher.refresh_now())

        assert result is not None
        assert refresher.latest is result
        assert delivered == [result]
        assert len(result.insights) == 5

    def test_newer_pass_supersedes_older(self, settings, clock):
        engine = InsightEngine(settings, analyzers=[SlowAnalyzer(settings)], clock=clock)
        delivered = []
        refresher = AutoRefresher(engine, provider, on_result=delivered.append)

        async def scenario():
            first = asyncio.create_task(refresher.refresh_now())
            await asyncio.sleep(0)
            second = await refresher.refresh_now()
            return await first, second

        first, second = asyncio.run(scenario())

        assert first is None
        assert second is not None
        assert second.generation_id == 2
        assert [r.generation_id for r in delivered] == [2]
        assert refresher.latest is second

    def test_interval_defaults_to_settings(self, settings):
        refresher = AutoRefresher(InsightEngine(settings), provider)
        assert refresher.interval == pytest.approx(settings.REFRESH_INTERVAL_SECONDS)


class TestSchedule:

    def test_start_and_stop(self, settings, clock):
        delivered = []
        engine = InsightEngine(settings, clock=clock)
        refresher = AutoRefresher(engine, provider, on_result=delivered.append, interval=0.01)

        async def scenario():
            refresher.start()
            assert refresher.running
            await asyncio.sleep(0.2)
            await refresher.stop()

        asyncio.run(scenario())

        assert not refresher.running
        assert len(delivered) >= 2
        generation_ids = [r.generation_id for r in delivered]
        assert generation_ids == sorted(generation_ids)
        assert len(set(generation_ids)) == len(generation_ids)

    def test_provider_errors_do_not_stop_schedule(self, settings, clock):
        calls = []

        def flaky_provider():
            calls.append(1)
            if len(calls) == 1:
                raise OSError("data layer unavailable")
            return provider()

        delivered = []
        refresher = AutoRefresher(InsightEngine(settings, clock=clock), flaky_provider,
                                  on_result=delivered.append, interval=0.01)

        async def scenario():
            refresher.start()
            await asyncio.sleep(0.2)
            await refresher.stop()

        asyncio.run(scenario())

        assert len(calls) >= 2
        assert delivered

    def test_start_requires_running_loop(self, settings):
        refresher = AutoRefresher(InsightEngine(settings), provider)
        with pytest.raises(RuntimeError):
            refresher.start()
