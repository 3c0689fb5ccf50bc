import json
import os
import tempfile
import threading
import unittest

from ringvote.errors import KeyImageReused, RingSignatureError
from ringvote.keys import generate_key_pair
from ringvote.store import KeyImageStore


class TestKeyImageStore(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self._tmp.name, "key_images.json")
        self.store = KeyImageStore(self.path)
        self.image = generate_key_pair().public_key

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_creates_empty_file(self) -> None:
        with open(self.path, "r", encoding="utf-8") as handle:
            self.assertEqual(json.load(handle), {"key_images": []})

    def test_record_then_contains(self) -> None:
        self.assertFalse(self.store.contains("case-a", self.image))
        record = self.store.record("case-a", self.image)
        self.assertEqual(record.key_image, self.image)
        self.assertTrue(self.store.contains("case-a", self.image))
        self.assertTrue(KeyImageStore(self.path).contains("case-a", self.image))

    def test_reuse_rejected_within_case(self) -> None:
        self.store.record("case-a", self.image)
        with self.assertRaises(KeyImageReused) as ctx:
            self.store.record("case-a", self.image)
        self.assertEqual(ctx.exception.code, "KEY_IMAGE_REUSED")

    def test_cases_are_independent(self) -> None:
        self.store.record("case-a", self.image)
        self.store.record("case-b", self.image)
        self.assertEqual([r.key_image for r in self.store.list_case("case-b")], [self.image])
        self.assertEqual(self.store.list_case("case-c"), [])

    def test_corrupt_file_reported(self) -> None:
        with open(self.path, "w", encoding="utf-8") as handle:
            handle.write("{not json")
        with self.assertRaises(RingSignatureError) as ctx:
            self.store.record("case-a", self.image)
        self.assertIn("corrupt", str(ctx.exception))

    def test_concurrent_record_accepts_once(self) -> None:
        outcomes = []

        def attempt() -> None:
            try:
                self.store.record("case-a", self.image)
                outcomes.append("ok")
            except KeyImageReused:
                outcomes.append("reused")

        threads = [threading.Thread(target=attempt) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(outcomes.count("ok"), 1)
        self.assertEqual(len(self.store.list_case("case-a")), 1)


if __name__ == "__main__":
    unittest.main()
