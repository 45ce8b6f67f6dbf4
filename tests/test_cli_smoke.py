from __future__ import annotations

import json
import os
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path

_LOOKUP = {
    "data": [
        {
            "id": "100",
            "text": "hello #Go",
            "created_at": "2023-01-01T00:00:00Z",
            "author_id": "1",
            "entities": {"hashtags": [{"start": 6, "end": 9, "tag": "Go"}, {"start": 7, "end": 20, "tag": "bad"}]},
        }
    ],
    "includes": {"users": [{"id": "1", "name": "Alice", "username": "alice"}]},
}

_CONFIG = """\
template:
  tweet: "${user.username}: ${tweet.text}"
  entity:
    hashtag: "<${tag}>"
"""


def _run(repo_root: Path, *args: str) -> subprocess.CompletedProcess[str]:
    env = dict(os.environ)
    existing_pp = env.get("PYTHONPATH", "")
    env["PYTHONPATH"] = (
        f"{repo_root}{os.pathsep}{existing_pp}" if existing_pp else str(repo_root)
    )
    return subprocess.run(
        [sys.executable, "-m", "tweetfmt", *args],
        cwd=repo_root,
        env=env,
        capture_output=True,
        text=True,
    )


class TestCLISmoke(unittest.TestCase):
    def setUp(self) -> None:
        self.repo_root = Path(__file__).resolve().parents[1]

    def test_render_writes_output_and_log(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            cfg_path = Path(td) / "config.yaml"
            cfg_path.write_text(_CONFIG, encoding="utf-8")
            input_path = Path(td) / "posts.json"
            input_path.write_text(json.dumps(_LOOKUP), encoding="utf-8")
            out_path = Path(td) / "out.txt"
            log_path = Path(td) / "run.log"

            proc = _run(
                self.repo_root,
                "render",
                "--config",
                str(cfg_path),
                "--input",
                str(input_path),
                "--out",
                str(out_path),
                "--log",
                str(log_path),
            )

            self.assertEqual(proc.returncode, 0, msg=proc.stderr)
            self.assertEqual(
                out_path.read_text(encoding="utf-8"),
                "alice: hello <Go>\n2023/01/01 00:00:00\n",
            )

            events = [
                json.loads(ln)["event"]
                for ln in log_path.read_text(encoding="utf-8").splitlines()
                if ln.strip()
            ]

        self.assertEqual(events[0], "render_command_started")
        self.assertIn("span_dropped", events)
        self.assertIn("post_rendered", events)
        self.assertEqual(events[-1], "render_command_completed")

    def test_check_template_reports_bad_slot(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            cfg_path = Path(td) / "config.yaml"
            cfg_path.write_text('template:\n  entity:\n    url: "${titel}"\n', encoding="utf-8")

            proc = _run(self.repo_root, "check-template", "--config", str(cfg_path))

        self.assertEqual(proc.returncode, 2)
        self.assertIn("template.entity.url", proc.stderr)
        self.assertIn('Did you mean "title"', proc.stderr)

    def test_check_template_ok(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            cfg_path = Path(td) / "config.yaml"
            cfg_path.write_text("{}", encoding="utf-8")

            proc = _run(self.repo_root, "check-template", "--config", str(cfg_path))

        self.assertEqual(proc.returncode, 0, msg=proc.stderr)
        self.assertTrue(proc.stdout.startswith("ok\n"))
        self.assertIn("entity.mention: 5 nodes", proc.stdout)

    def test_render_missing_config_logs_failure(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            log_path = Path(td) / "run.log"
            proc = _run(
                self.repo_root,
                "render",
                "--config",
                str(Path(td) / "missing.yaml"),
                "--input",
                str(Path(td) / "posts.json"),
                "--log",
                str(log_path),
            )

            self.assertEqual(proc.returncode, 2, msg=proc.stderr)
            events = [
                json.loads(ln)["event"]
                for ln in log_path.read_text(encoding="utf-8").splitlines()
                if ln.strip()
            ]

        self.assertIn("render_command_failed", events)


if __name__ == "__main__":
    unittest.main()
