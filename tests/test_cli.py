import contextlib
import io
import json
import os
import tempfile
import unittest

import ringvote_cli


def run_cli(*argv: str) -> tuple:
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        code = ringvote_cli.main(list(argv))
    return code, out.getvalue(), err.getvalue()


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.store = os.path.join(self._tmp.name, "key_images.json")
        self.voters = []
        for _ in range(2):
            code, out, _ = run_cli("--store", self.store, "keygen")
            self.assertEqual(code, 0)
            self.voters.append(json.loads(out))
        self.ring_path = os.path.join(self._tmp.name, "ring.json")
        with open(self.ring_path, "w", encoding="utf-8") as handle:
            json.dump([voter["publicKey"] for voter in self.voters], handle)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_sign_verify_cast(self) -> None:
        common = ("--ring", self.ring_path, "--case", "election-2025")
        code, out, _ = run_cli("--store", self.store, "sign", *common, "--key", self.voters[1]["privateKey"], "VOTE")
        self.assertEqual(code, 0)
        signed = json.loads(out)

        code, out, _ = run_cli("--store", self.store, "key-image", *common, "--key", self.voters[1]["privateKey"])
        self.assertEqual(json.loads(out)["keyImage"], signed["keyImage"])

        vote = ("--signature", signed["signature"], "--key-image", signed["keyImage"], "VOTE")
        code, out, _ = run_cli("--store", self.store, "verify", *common, *vote)
        self.assertEqual(json.loads(out), {"isValid": True})

        code, out, _ = run_cli("--store", self.store, "cast", *common, *vote)
        self.assertEqual(code, 0)
        self.assertTrue(json.loads(out)["accepted"])

        code, _, err = run_cli("--store", self.store, "cast", *common, *vote)
        self.assertEqual(code, 1)
        self.assertIn("already used", err)

    def test_bad_key_reports_error(self) -> None:
        code, _, err = run_cli("--store", self.store, "sign", "--ring", self.ring_path, "--key", "@@", "VOTE")
        self.assertEqual(code, 1)
        self.assertTrue(err.startswith("error:"))


if __name__ == "__main__":
    unittest.main()
