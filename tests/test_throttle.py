from concurrent.futures import ThreadPoolExecutor

from accounts.core import LoginThrottle

EMAIL = "bob@example.com"


def fail(throttle, times, identifier=EMAIL):
    for _ in range(times):
        throttle.record_failure(identifier)


def test_unknown_identifier_is_allowed(throttle):
    assert throttle.check_allowed(EMAIL)
    assert EMAIL not in throttle


def test_blocks_after_five_failures(throttle):
    fail(throttle, 4)
    assert throttle.check_allowed(EMAIL)

    fail(throttle, 1)
    assert not throttle.check_allowed(EMAIL)
    assert throttle.failures(EMAIL) == 5


def test_record_failure_returns_running_total(throttle):
    assert [throttle.record_failure(EMAIL) for _ in range(3)] == [1, 2, 3]


def test_identifiers_are_counted_separately(throttle):
    fail(throttle, 5)
    assert not throttle.check_allowed(EMAIL)
    assert throttle.check_allowed("alice@example.com")


def test_success_resets_immediately(throttle):
    fail(throttle, 5)
    throttle.record_success(EMAIL)

    assert throttle.check_allowed(EMAIL)
    assert throttle.failures(EMAIL) == 0
    # the zeroed entry lingers until its window passes
    assert EMAIL in throttle


def test_success_entry_removed_after_reset_window(throttle, clock):
    throttle.record_success(EMAIL)

    clock.advance(30 * 60 - 1)
    assert EMAIL in throttle

    clock.advance(1)
    assert EMAIL not in throttle
    assert len(throttle) == 0


def test_lockout_expires_after_reset_window(throttle, clock):
    fail(throttle, 5)
    clock.advance(30 * 60)

    assert throttle.check_allowed(EMAIL)
    assert throttle.failures(EMAIL) == 0


def test_new_failure_extends_the_window(throttle, clock):
    fail(throttle, 4)
    clock.advance(20 * 60)
    fail(throttle, 1)
    clock.advance(20 * 60)

    assert not throttle.check_allowed(EMAIL)


def test_sweep_drops_only_expired_entries(throttle, clock):
    throttle.record_success("old@example.com")
    clock.advance(20 * 60)
    fail(throttle, 1, "new@example.com")
    clock.advance(10 * 60)

    assert throttle.sweep() == 1
    assert len(throttle) == 1
    assert "new@example.com" in throttle


def test_sweep_on_empty_throttle_is_noop(throttle):
    assert throttle.sweep() == 0
    assert throttle.sweep() == 0
    assert len(throttle) == 0


def test_writes_sweep_periodically(throttle, clock):
    throttle.record_success("old@example.com")
    clock.advance(30 * 60)

    # the stale entry is not touched directly, the periodic pass removes it
    fail(throttle, 1)
    assert len(throttle) == 1


def test_concurrent_failures_are_not_lost():
    throttle = LoginThrottle(max_attempts=10_000)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda _: throttle.record_failure(EMAIL), range(2000)))

    assert throttle.failures(EMAIL) == 2000
