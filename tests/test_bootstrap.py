from __future__ import annotations

import contextlib
import io
import tempfile
import unittest

import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from satsplit.bootstrap.main import run_app


class TestRunApp(unittest.TestCase):
    def test_demo_config(self) -> None:
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            plan = run_app(str(ROOT / "configs" / "demo.yaml"))

        self.assertEqual([49, 49, 10, 892], [p.num_sats for p in plan.payments])
        self.assertIn("total: 1000/1000 sats", out.getvalue())
        self.assertIn("Guest", out.getvalue())

    def test_split_errors_exit(self) -> None:
        text = (
            "payout:\n"
            "  total_sats: 10\n"
            "  recipients:\n"
            "    - {address: a, split: 100, fee: true}\n"
            "    - {address: b, split: 1}\n"
        )
        with tempfile.TemporaryDirectory() as tmp:
            path = pathlib.Path(tmp) / "bad.yaml"
            path.write_text(text, encoding="utf-8")
            with contextlib.redirect_stderr(io.StringIO()):
                with self.assertRaises(SystemExit) as ctx:
                    run_app(str(path))
        self.assertIn("Cannot split payment", str(ctx.exception.code))

    def test_missing_config_exits(self) -> None:
        with self.assertRaises(SystemExit):
            run_app(str(ROOT / "configs" / "does-not-exist.yaml"))


if __name__ == "__main__":
    unittest.main()
