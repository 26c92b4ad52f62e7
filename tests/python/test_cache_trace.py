import unittest

import numpy as np

from cachematrix import CachedMatrix, CacheTrace


class TestCacheTrace(unittest.TestCase):
    def test_records_latest_and_per_event(self):
        trace = CacheTrace()
        cm = CachedMatrix(np.eye(2))
        trace.emit("miss", cm)
        trace.emit("store", cm, detail="written")

        latest = trace.last()
        self.assertEqual(latest["event"], "store")
        self.assertEqual(latest["detail"], "written")
        self.assertEqual(trace.last("miss")["event"], "miss")
        self.assertIsNone(trace.last("hit"))
        self.assertEqual(trace.counts(), {"hit": 0, "miss": 1, "store": 1, "error": 0})

    def test_trace_tags_are_unique(self):
        trace = CacheTrace()
        cm = CachedMatrix()
        a = trace.emit("hit", cm)
        b = trace.emit("hit", cm)
        self.assertNotEqual(a["trace_tag"], b["trace_tag"])

    def test_last_returns_copy(self):
        trace = CacheTrace()
        trace.emit("hit", CachedMatrix())
        rec = trace.last()
        rec["event"] = "tampered"
        self.assertEqual(trace.last()["event"], "hit")

    def test_clear(self):
        trace = CacheTrace()
        trace.emit("hit", CachedMatrix())
        trace.clear()
        self.assertIsNone(trace.last())
        self.assertEqual(trace.counts()["hit"], 0)

    def test_unknown_event(self):
        with self.assertRaises(ValueError):
            CacheTrace().emit("bogus", CachedMatrix())

    def test_disabled(self):
        trace = CacheTrace(enabled=False)
        self.assertIsNone(trace.emit("hit", CachedMatrix()))
        self.assertIsNone(trace.last())

    def test_plain_array_operand(self):
        trace = CacheTrace()
        rec = trace.emit("miss", np.eye(4))
        self.assertEqual(rec["shape"], (4, 4))
        self.assertIsNone(rec["version"])
        self.assertIsNone(rec["state"])


if __name__ == "__main__":
    unittest.main()
