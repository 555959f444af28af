"""Tests for SurfaceReadinessGuard."""

import logging

from parcel_map.sync import SurfaceReadinessGuard


class TestSurfaceReadinessGuard:
    """One relayout per attach, never after detach."""

    def test_relayout_once_after_delay(self, scheduler, surface) -> None:
        guard = SurfaceReadinessGuard(scheduler, delay_ms=200)
        guard.on_attach(surface)

        scheduler.advance(199)
        assert surface.relayouts == 0
        assert guard.is_pending

        scheduler.advance(1)
        assert surface.relayouts == 1

        scheduler.advance(10_000)
        assert surface.relayouts == 1
        assert not guard.is_pending

    def test_detach_before_fire_prevents_relayout(self, scheduler, surface) -> None:
        guard = SurfaceReadinessGuard(scheduler, delay_ms=200)
        guard.on_attach(surface)

        scheduler.advance(50)
        guard.on_detach()
        scheduler.advance(1000)

        assert surface.relayouts == 0
        assert scheduler.active_count == 0

    def test_teardown_alias(self, scheduler, surface) -> None:
        guard = SurfaceReadinessGuard(scheduler)
        guard.on_attach(surface)
        guard.teardown()
        scheduler.advance(1000)
        assert surface.relayouts == 0

    def test_each_attach_gets_one_relayout(self, scheduler, surface) -> None:
        guard = SurfaceReadinessGuard(scheduler, delay_ms=200)
        guard.on_attach(surface)
        scheduler.advance(200)
        guard.on_detach()

        guard.on_attach(surface)
        scheduler.advance(200)
        assert surface.relayouts == 2

    def test_reattach_replaces_pending_timer(self, scheduler, surface) -> None:
        guard = SurfaceReadinessGuard(scheduler, delay_ms=200)
        guard.on_attach(surface)
        scheduler.advance(150)
        guard.on_attach(surface)
        scheduler.advance(150)
        assert surface.relayouts == 0

        scheduler.advance(50)
        assert surface.relayouts == 1

    def test_relayout_failure_is_logged(self, scheduler, surface, caplog) -> None:
        surface.fail_with = RuntimeError("disposed")
        guard = SurfaceReadinessGuard(scheduler)
        with caplog.at_level(logging.WARNING, logger="parcel_map"):
            guard.on_attach(surface)
            scheduler.advance(200)

        assert any("disposed" in r.getMessage() for r in caplog.records)
