"""Unit tests for fan_out() and wait_for_response()."""

import threading
import time
import unittest

from fintech_contract.api_client import RequestTimeoutError, fan_out, wait_for_response


class TestFanOut(unittest.TestCase):

    def test_outcomes_follow_submission_order(self):
        def make(i, delay):
            def call():
                time.sleep(delay)
                return i
            return call

        outcomes = fan_out([make(0, 0.1), make(1, 0.0), make(2, 0.05)])
        self.assertEqual([o.index for o in outcomes], [0, 1, 2])
        self.assertEqual([o.unwrap() for o in outcomes], [0, 1, 2])

    def test_calls_run_concurrently(self):
        barrier = threading.Barrier(3, timeout=2)
        outcomes = fan_out([barrier.wait, barrier.wait, barrier.wait])
        self.assertTrue(all(o.ok for o in outcomes))

    def test_one_failure_does_not_hide_the_others(self):
        def boom():
            raise RuntimeError("connection reset")

        outcomes = fan_out([lambda: 'a', boom, lambda: 'c'])

        self.assertTrue(outcomes[0].ok)
        self.assertFalse(outcomes[1].ok)
        self.assertIsInstance(outcomes[1].error, RuntimeError)
        self.assertEqual(outcomes[2].response, 'c')
        with self.assertRaises(RuntimeError):
            outcomes[1].unwrap()

    def test_no_calls(self):
        self.assertEqual(fan_out([]), [])


class TestWaitForResponse(unittest.TestCase):

    def test_returns_result(self):
        self.assertEqual(wait_for_response(lambda: 42, timeout=1.0), 42)

    def test_propagates_call_errors(self):
        def boom():
            raise ValueError("bad")

        with self.assertRaises(ValueError):
            wait_for_response(boom, timeout=1.0)

    def test_times_out(self):
        with self.assertRaises(RequestTimeoutError) as ctx:
            wait_for_response(lambda: time.sleep(0.5), timeout=0.05)
        self.assertEqual(ctx.exception.timeout, 0.05)


if __name__ == '__main__':
    unittest.main()
