"""Tests for typed_notification.domain.observation."""

import gc
import sys
import threading

import pytest
from structlog.testing import capture_logs

from typed_notification.domain.observation import (
    NotificationObservation,
    NotificationObservationBag,
)


class TestNotificationObservation:
    def test_release_runs_action(self):
        calls = []
        observation = NotificationObservation(lambda: calls.append("released"))

        observation.release()

        assert calls == ["released"]
        assert observation.is_released

    def test_release_is_idempotent(self):
        calls = []
        observation = NotificationObservation(lambda: calls.append(1))

        observation.release()
        observation.release()

        assert calls == [1]

    def test_release_on_deletion(self):
        released = []
        observation = NotificationObservation(lambda: released.append(True))

        del observation
        gc.collect()

        assert released == [True]

    def test_deletion_after_release_does_not_rerun(self):
        calls = []
        observation = NotificationObservation(lambda: calls.append(1))
        observation.release()

        del observation
        gc.collect()

        assert calls == [1]

    def test_context_manager_releases(self):
        calls = []

        with NotificationObservation(lambda: calls.append(1)) as observation:
            assert not observation.is_released

        assert observation.is_released
        assert calls == [1]

    def test_no_op_action(self):
        observation = NotificationObservation(lambda: None)

        observation.release()

        assert observation.is_released

    def test_concurrent_release_runs_once(self):
        calls = []
        observation = NotificationObservation(lambda: calls.append(1))
        barrier = threading.Barrier(8)

        def release():
            barrier.wait()
            observation.release()

        threads = [threading.Thread(target=release) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert calls == [1]

    def test_deletion_during_shutdown_skips_release(self, monkeypatch):
        calls = []
        observation = NotificationObservation(lambda: calls.append(1))
        monkeypatch.setattr(sys, "is_finalizing", lambda: True)

        observation.__del__()

        assert calls == []
        assert not observation.is_released

    def test_store_in_adds_to_bag(self):
        bag = NotificationObservationBag()

        observation = NotificationObservation(lambda: None).store_in(bag)

        assert len(bag) == 1
        assert not observation.is_released


class TestNotificationObservationBag:
    def test_raising_release_does_not_stop_drain(self):
        def explode():
            raise RuntimeError("boom")

        bag = NotificationObservationBag()
        first = NotificationObservation(explode).store_in(bag)
        second = NotificationObservation(lambda: None).store_in(bag)

        with capture_logs() as logs:
            with pytest.raises(RuntimeError, match="boom"):
                bag.empty()

        assert first.is_released
        assert second.is_released
        assert len(bag) == 0
        assert [entry["event"] for entry in logs] == ["notification_observation_release_failed"]

    def test_first_release_error_is_reraised(self):
        def fail(message):
            def action():
                raise ValueError(message)

            return action

        bag = NotificationObservationBag()
        observations = [NotificationObservation(fail(m)).store_in(bag) for m in ("one", "two")]

        with pytest.raises(ValueError, match="one"):
            bag.empty()

        assert all(observation.is_released for observation in observations)

    def test_empty_releases_all(self):
        flags = [False, False, False]
        bag = NotificationObservationBag()

        def flip(index):
            def action():
                flags[index] = True

            return action

        for index in range(3):
            bag.add(NotificationObservation(flip(index)))

        bag.empty()

        assert flags == [True, True, True]
        assert len(bag) == 0

    def test_empty_releases_each_once(self):
        calls = []
        bag = NotificationObservationBag()
        observations = [
            NotificationObservation(lambda i=index: calls.append(i)).store_in(bag) for index in range(5)
        ]

        bag.empty()
        bag.empty()
        for observation in observations:
            observation.release()

        assert sorted(calls) == [0, 1, 2, 3, 4]

    def test_handle_still_held_elsewhere_is_released(self):
        calls = []
        bag = NotificationObservationBag()
        observation = NotificationObservation(lambda: calls.append(1)).store_in(bag)

        bag.empty()

        assert observation.is_released
        assert calls == [1]

    def test_bag_deletion_during_shutdown_skips_release(self, monkeypatch):
        calls = []
        bag = NotificationObservationBag()
        observation = NotificationObservation(lambda: calls.append(1)).store_in(bag)
        monkeypatch.setattr(sys, "is_finalizing", lambda: True)

        bag.__del__()

        assert calls == []
        assert len(bag) == 1
        assert not observation.is_released

    def test_bag_deletion_releases(self):
        calls = []
        bag = NotificationObservationBag()
        NotificationObservation(lambda: calls.append("a")).store_in(bag)
        NotificationObservation(lambda: calls.append("b")).store_in(bag)

        del bag
        gc.collect()

        assert sorted(calls) == ["a", "b"]

    def test_context_manager_empties(self):
        calls = []

        with NotificationObservationBag() as bag:
            NotificationObservation(lambda: calls.append(1)).store_in(bag)
            assert calls == []

        assert calls == [1]
        assert len(bag) == 0

    def test_release_action_can_reenter_bag(self):
        bag = NotificationObservationBag()
        late = []

        def add_another():
            late.append(NotificationObservation(lambda: None).store_in(bag))
            bag.empty()

        NotificationObservation(add_another).store_in(bag)

        bag.empty()

        assert len(bag) == 0
        assert late[0].is_released

    def test_concurrent_add_and_empty(self):
        released = []
        lock = threading.Lock()
        bag = NotificationObservationBag()
        observations = []

        def make(index):
            def action():
                with lock:
                    released.append(index)

            return NotificationObservation(action)

        def producer(start):
            for index in range(start, start + 200):
                observation = make(index)
                observations.append(observation)
                bag.add(observation)

        def drainer():
            for _ in range(50):
                bag.empty()

        threads = [threading.Thread(target=producer, args=(n * 200,)) for n in range(4)]
        threads.append(threading.Thread(target=drainer))
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        bag.empty()

        assert sorted(released) == list(range(800))
        assert all(observation.is_released for observation in observations)
