"""Tests for the event coordinator."""

import threading

import pytest

from mouse_stay_up.config import ALLOWED_INTERVALS, ALWAYS, WORKING_HOURS, Config
from mouse_stay_up.coordinator import EventCoordinator
from mouse_stay_up.events import About, Disable, Enable, HoursChanged, IntervalChanged, Quit
from mouse_stay_up.menu import DISABLE, ENABLE, INTERVAL, WORKING_HOURS as HOURS_ITEM, ExclusiveChoice, MenuState
from mouse_stay_up.scheduler import MovementScheduler


class StubScheduler:
    def __init__(self):
        self.starts = 0
        self.shutdowns = 0

    def start(self):
        self.starts += 1
        return self.starts

    def shutdown(self):
        self.shutdowns += 1


@pytest.fixture
def scheduler():
    return StubScheduler()


@pytest.fixture
def urls():
    return []


@pytest.fixture
def coordinator(config, scheduler, menu, urls):
    return EventCoordinator(config, scheduler, menu, open_url=urls.append)


class TestStart:
    def test_starts_scheduler_when_enabled(self, coordinator, scheduler, menu):
        coordinator.start()
        assert scheduler.starts == 1
        assert not menu.is_visible(ENABLE)
        assert menu.is_visible(DISABLE)

    def test_stays_idle_when_disabled(self, scheduler, menu, urls):
        config = Config({"enabled": False})
        coordinator = EventCoordinator(config, scheduler, menu, open_url=urls.append)
        coordinator.start()
        assert scheduler.starts == 0
        assert menu.is_visible(ENABLE)
        assert not menu.is_enabled(INTERVAL)


class TestEnableDisable:
    def test_disable(self, coordinator, config, menu):
        coordinator.start()
        assert coordinator.handle(Disable())
        assert config.enabled is False
        assert menu.is_visible(ENABLE) and not menu.is_visible(DISABLE)
        assert not menu.is_enabled(INTERVAL)
        assert not menu.is_enabled(HOURS_ITEM)

    def test_enable(self, coordinator, config, scheduler, menu):
        coordinator.start()
        coordinator.handle(Disable())
        coordinator.handle(Enable())
        assert config.enabled is True
        assert scheduler.starts == 2
        assert menu.is_visible(DISABLE) and not menu.is_visible(ENABLE)
        assert menu.is_enabled(INTERVAL)
        assert menu.is_enabled(HOURS_ITEM)

    def test_enable_when_enabled_is_ignored(self, coordinator, scheduler):
        coordinator.start()
        coordinator.handle(Enable())
        assert scheduler.starts == 1

    def test_disable_when_disabled_is_ignored(self, coordinator, config):
        coordinator.handle(Disable())
        coordinator.handle(Disable())
        assert config.enabled is False


class TestSelections:
    @pytest.mark.parametrize("value", ALLOWED_INTERVALS)
    def test_interval_is_stored_and_exclusively_checked(self, coordinator, config, menu, value):
        coordinator.handle(IntervalChanged(value))
        assert config.sleep_interval == value
        assert menu.intervals.checked() == [value]

    @pytest.mark.parametrize("label", WORKING_HOURS)
    def test_hours_are_stored_and_exclusively_checked(self, coordinator, config, menu, label):
        coordinator.handle(HoursChanged(label))
        assert config.working_hours_interval == label
        assert menu.hours.checked() == [label]

    def test_same_hours_twice_is_idempotent(self, coordinator, config, menu):
        coordinator.handle(HoursChanged("09:00-17:00"))
        state, checked = config.snapshot(), menu.hours.checked()
        coordinator.handle(HoursChanged("09:00-17:00"))
        assert config.snapshot() == state
        assert menu.hours.checked() == checked

    def test_invalid_interval_keeps_last_valid_state(self, coordinator, config, menu):
        coordinator.handle(IntervalChanged(60))
        assert coordinator.handle(IntervalChanged(5))
        assert config.sleep_interval == 60
        assert menu.intervals.checked() == [60]

    def test_invalid_hours_keep_last_valid_state(self, coordinator, config, menu):
        assert coordinator.handle(HoursChanged("01:00-02:00"))
        assert config.working_hours_interval == ALWAYS
        assert menu.hours.checked() == [ALWAYS]


class TestAboutAndQuit:
    def test_about_opens_repository(self, coordinator, config, urls):
        coordinator.handle(About())
        assert urls == [config.git_repo]

    def test_quit_stops_everything(self, config, scheduler, menu, urls):
        quits = []
        coordinator = EventCoordinator(config, scheduler, menu, open_url=urls.append,
                                       on_quit=lambda: quits.append(True))
        assert coordinator.handle(Quit()) is False
        assert scheduler.shutdowns == 1
        assert quits == [True]

    def test_failing_handler_does_not_break_next_event(self, config, scheduler, menu):
        def broken(url):
            raise OSError("no browser")

        coordinator = EventCoordinator(config, scheduler, menu, open_url=broken)
        assert coordinator.handle(About())
        assert coordinator.handle(IntervalChanged(60))
        assert config.sleep_interval == 60


class TestRunLoop:
    def test_processes_events_in_order_until_quit(self, coordinator, config, menu):
        for event in (IntervalChanged(60), IntervalChanged(30), HoursChanged("22:00-06:00"),
                      Disable(), Quit(), IntervalChanged(60)):
            coordinator.post(event)

        coordinator.run()

        assert config.sleep_interval == 30
        assert config.working_hours_interval == "22:00-06:00"
        assert config.enabled is False
        assert coordinator.events.qsize() == 1

    def test_events_from_other_threads(self, coordinator, config):
        worker = threading.Thread(target=coordinator.run)
        worker.start()
        posters = [threading.Thread(target=coordinator.post, args=(IntervalChanged(60),))
                   for _ in range(5)]
        for poster in posters:
            poster.start()
        for poster in posters:
            poster.join()
        coordinator.events.join()
        coordinator.post(Quit())
        worker.join(timeout=5)
        assert not worker.is_alive()
        assert config.sleep_interval == 60


class TestToggleWithScheduler:
    def test_moves_only_while_enabled(self, config, menu, clock, mover, fake_threads):
        scheduler = MovementScheduler(config, mover, sleep=clock.sleep, now=clock.now)
        coordinator = EventCoordinator(config, scheduler, menu, open_url=lambda url: None)
        coordinator.start()
        coordinator.handle(Disable())
        coordinator.handle(Enable())
        assert len(fake_threads) == 2

        disabled_at = []

        def disable_later(clock):
            if clock.elapsed() > 95 and config.enabled:
                coordinator.handle(Disable())
                disabled_at.append(clock.elapsed())
        clock.hooks.append(disable_later)

        for thread in fake_threads:
            thread.run()

        # the first run was superseded by the second enable and never moved
        assert mover.calls == [60, 90]
        assert all(call < disabled_at[0] for call in mover.calls)


class TestFailureIsolation:
    def test_quit_ends_loop_even_if_tray_fails_to_stop(self, config, scheduler, menu, urls):
        def broken_stop():
            raise RuntimeError("icon already gone")

        coordinator = EventCoordinator(config, scheduler, menu, open_url=urls.append,
                                       on_quit=broken_stop)
        assert coordinator.handle(Quit()) is False
        assert scheduler.shutdowns == 1

    def test_run_returns_after_failed_quit(self, config, scheduler, menu, urls):
        def broken_stop():
            raise RuntimeError("icon already gone")

        coordinator = EventCoordinator(config, scheduler, menu, open_url=urls.append,
                                       on_quit=broken_stop)
        coordinator.post(Quit())
        coordinator.post(Enable())
        coordinator.run()
        assert coordinator.events.qsize() == 1

    def test_menu_resync_failure_does_not_kill_loop(self, config, scheduler, urls):
        # the menu only knows "Always", so every resync after a new label fails
        menu = MenuState(
            intervals=ExclusiveChoice(ALLOWED_INTERVALS, config.sleep_interval),
            hours=ExclusiveChoice([ALWAYS], ALWAYS),
        )
        coordinator = EventCoordinator(config, scheduler, menu, open_url=urls.append)
        for event in (HoursChanged("09:00-17:00"), IntervalChanged(60), About(), Quit()):
            coordinator.post(event)

        coordinator.run()

        assert config.working_hours_interval == "09:00-17:00"
        assert config.sleep_interval == 60
        assert urls == [config.git_repo]
        assert coordinator.events.qsize() == 0
