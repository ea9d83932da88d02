import pytest
from netforce import ConfigurationError, FixedRateScheduler, supply_chain


class FakeClock:
    def __init__(self, t=0.0):
        self.t = t

    def __call__(self):
        return self.t

    def sleep(self, seconds):
        # Never stall on a zero-length sleep
        self.t += max(seconds, 0.001)


def make(interval=None):
    clock = FakeClock()
    sim = supply_chain()
    return sim, FixedRateScheduler(sim, interval=interval, clock=clock), clock


def test_early_frames_are_skipped():
    sim, sched, _ = make()
    assert sched.on_frame(0.005) is None
    assert sched.on_frame(0.010) is None
    assert sim.tick == 0
    assert sched.frames_skipped == 2

    snap = sched.on_frame(0.020)
    assert snap is not None and snap.tick == 1
    assert sched.on_frame(0.030) is None
    assert sim.tick == 1


def test_late_frame_runs_a_single_step():
    sim, sched, _ = make()
    snap = sched.on_frame(2.5)
    assert snap.tick == 1
    # Logical time advances by dt, not by the wall-clock gap
    assert snap.time == pytest.approx(sim.config.dt)
    assert sched.on_frame(2.5) is None
    assert sched.steps_taken == 1


def test_pause_and_resume_rebase_clock():
    sim, sched, clock = make()
    sched.on_frame(0.02)
    sched.pause()
    assert not sched.running
    assert sched.on_frame(5.02) is None
    assert sim.tick == 1

    clock.t = 10.0
    sched.resume()
    assert sched.running
    # The paused interval does not count as elapsed time
    assert sched.on_frame(10.005) is None
    assert sched.on_frame(10.02) is not None
    assert sim.tick == 2


def test_run_max_steps():
    sim, sched, clock = make()
    assert sched.run(max_steps=5, sleep=clock.sleep) == 5
    assert sim.tick == 5
    assert sched.steps_taken == 5
    assert sim.time == pytest.approx(5 * sim.config.dt)


def test_run_duration():
    sim, sched, clock = make(interval=0.01)
    taken = sched.run(duration=0.1, sleep=clock.sleep)
    assert 1 <= taken <= 11
    assert taken == sim.tick


def test_run_stops_when_paused():
    sim, sched, clock = make()

    def pause_at_three(snap):
        if snap.tick == 3:
            sched.pause()

    sim.subscribe(pause_at_three)
    assert sched.run(max_steps=100, sleep=clock.sleep) == 3
    assert not sim.running


def test_run_requires_a_limit():
    _, sched, clock = make()
    with pytest.raises(ValueError):
        sched.run(sleep=clock.sleep)


def test_negative_interval_rejected():
    with pytest.raises(ConfigurationError):
        FixedRateScheduler(supply_chain(), interval=-0.5)
