#!/usr/bin/env python3
"""
Test suite for the rate-limited transport.
"""

import threading
import time
import unittest
from unittest.mock import Mock

import requests

from godaddy_dns.providers.transport import RateLimitedTransport


class FakeClock:
    """Deterministic clock whose sleep advances time."""

    def __init__(self, start=100.0):
        self.now = start
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds):
        self.now += seconds


class TestRateLimitedTransport(unittest.TestCase):
    """Test call spacing of the rate-limited transport."""

    def setUp(self):
        self.clock = FakeClock()
        self.session = Mock()
        self.session.request.return_value = "response"
        self.transport = RateLimitedTransport(
            session=self.session, interval=1.0, clock=self.clock, sleep=self.clock.sleep
        )

    def test_first_call_is_not_delayed(self):
        self.assertEqual(self.transport.request("GET", "https://example.com"), "response")
        self.assertEqual(self.clock.sleeps, [])

    def test_back_to_back_calls_are_spaced(self):
        """N immediate calls take at least (N - 1) intervals."""
        start = self.clock()
        for _ in range(5):
            self.transport.request("GET", "https://example.com")

        self.assertEqual(self.session.request.call_count, 5)
        self.assertEqual(len(self.clock.sleeps), 4)
        self.assertGreaterEqual(self.clock() - start, 4.0)

    def test_no_wait_after_interval_elapsed(self):
        self.transport.request("GET", "https://example.com")
        self.clock.advance(1.5)
        self.transport.request("GET", "https://example.com")
        self.assertEqual(self.clock.sleeps, [])

    def test_partial_wait(self):
        self.transport.request("GET", "https://example.com")
        self.clock.advance(0.25)
        self.transport.request("GET", "https://example.com")
        self.assertEqual(len(self.clock.sleeps), 1)
        self.assertAlmostEqual(self.clock.sleeps[0], 0.75)

    def test_slow_call_does_not_extend_spacing(self):
        """The watermark is set before the delegated call runs."""

        def slow_request(*args, **kwargs):
            self.clock.advance(3.0)
            return "slow"

        self.session.request.side_effect = slow_request
        self.transport.request("GET", "https://example.com")
        self.transport.request("GET", "https://example.com")
        self.assertEqual(self.clock.sleeps, [])

    def test_arguments_are_passed_through(self):
        self.transport.request("PUT", "https://example.com/x", json=[1], timeout=(10, 30))
        self.session.request.assert_called_once_with(
            "PUT", "https://example.com/x", json=[1], timeout=(10, 30)
        )

    def test_errors_propagate_unchanged(self):
        error = requests.ConnectionError("boom")
        self.session.request.side_effect = error

        with self.assertRaises(requests.ConnectionError) as ctx:
            self.transport.request("GET", "https://example.com")
        self.assertIs(ctx.exception, error)

        # A failed call still consumes its slot
        self.session.request.side_effect = None
        self.transport.request("GET", "https://example.com")
        self.assertEqual(self.clock.sleeps, [1.0])

    def test_close_closes_session(self):
        self.transport.close()
        self.session.close.assert_called_once_with()


class TestRateLimitedTransportConcurrency(unittest.TestCase):
    """Test that concurrent callers share one throttle."""

    def test_threads_are_serialized(self):
        interval = 0.05
        dispatched = []
        lock = threading.Lock()

        def record_dispatch(*args, **kwargs):
            with lock:
                dispatched.append(time.monotonic())

        session = Mock()
        session.request.side_effect = record_dispatch
        transport = RateLimitedTransport(session=session, interval=interval)

        threads = [
            threading.Thread(target=transport.request, args=("GET", "https://example.com"))
            for _ in range(4)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(dispatched), 4)
        dispatched.sort()
        self.assertGreaterEqual(dispatched[-1] - dispatched[0], 3 * interval - 0.01)
        for earlier, later in zip(dispatched, dispatched[1:]):
            self.assertGreaterEqual(later - earlier, interval - 0.01)


if __name__ == "__main__":
    unittest.main(verbosity=2)
