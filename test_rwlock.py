"""Tests for the reader/writer lock."""

import threading
import unittest

from rwlock import ReadWriteLock


class TestReadWriteLock(unittest.TestCase):
    def test_readers_share(self):
        lock = ReadWriteLock()
        inside = threading.Barrier(2, timeout=5)
        errors = []

        def reader():
            with lock.read_locked():
                try:
                    inside.wait()
                except threading.BrokenBarrierError as e:
                    errors.append(e)

        threads = [threading.Thread(target=reader) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(5)
        self.assertFalse(any(t.is_alive() for t in threads))
        self.assertEqual(errors, [])

    def test_writer_excludes_readers(self):
        lock = ReadWriteLock()
        events = []
        lock.acquire_write()

        def reader():
            with lock.read_locked():
                events.append("read")

        t = threading.Thread(target=reader)
        t.start()
        t.join(0.1)
        self.assertEqual(events, [])
        events.append("write")
        lock.release_write()
        t.join(5)
        self.assertEqual(events, ["write", "read"])

    def test_release_without_acquire(self):
        lock = ReadWriteLock()
        with self.assertRaises(RuntimeError):
            lock.release_read()
        with self.assertRaises(RuntimeError):
            lock.release_write()

    def test_lock_released_on_error(self):
        lock = ReadWriteLock()
        with self.assertRaises(ValueError):
            with lock.write_locked():
                raise ValueError("boom")
        with lock.read_locked():
            pass


if __name__ == "__main__":
    unittest.main()
