from datetime import datetime

from app_lib.scheduling.clock import FixedClock
from app_lib.scheduling.debounce import Debouncer


def make_debouncer():
    clock = FixedClock(datetime(2025, 6, 9, 8, 0))
    return Debouncer(delay_seconds=0.5, clock=clock), clock


def test_fires_once_after_input_settles():
    debouncer, clock = make_debouncer()
    assert not debouncer.due()

    debouncer.touch(("2025-06-10", "09:00", "10:00"))
    assert not debouncer.due()
    clock.advance(seconds=0.6)
    assert debouncer.due()

    debouncer.fire(["conflict"])
    assert not debouncer.due()
    assert debouncer.result == ["conflict"]


def test_new_input_restarts_the_delay():
    debouncer, clock = make_debouncer()
    debouncer.touch("a")
    clock.advance(seconds=0.4)
    debouncer.touch("b")
    clock.advance(seconds=0.2)
    assert not debouncer.due()
    assert abs(debouncer.remaining() - 0.3) < 1e-6

    # Re-touching the same input keeps the original start
    debouncer.touch("b")
    clock.advance(seconds=0.35)
    assert debouncer.due()


def test_reset_forgets_everything():
    debouncer, clock = make_debouncer()
    debouncer.touch("a")
    clock.advance(seconds=1)
    debouncer.fire("done")
    debouncer.reset()
    assert debouncer.key is None
    assert debouncer.result is None
    assert debouncer.remaining() == 0.0
