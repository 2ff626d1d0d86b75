import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from crswrd.cli import build_parser, main
from crswrd.engine.model_builder import build_model


class CliTests(unittest.TestCase):
    def test_defaults(self) -> None:
        args = build_parser().parse_args([])
        self.assertEqual(args.pack, "general")
        self.assertEqual(args.tone, "random")
        self.assertEqual(args.size, "medium")
        self.assertEqual(args.attempts, 30)

    def test_writes_json_payload(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            output = Path(tmpdir) / "puzzle.json"
            code = main(
                [
                    "--pack", "sports",
                    "--size", "small",
                    "--tone", "serious",
                    "--seed", "7",
                    "--attempts", "100",
                    "--log-level", "WARNING",
                    "--output", str(output),
                ]
            )
            self.assertEqual(code, 0)
            payload = json.loads(output.read_text(encoding="utf-8"))

        self.assertEqual(set(payload), {"source", "grid", "clues", "meta", "entries"})
        self.assertIn(payload["source"], ("generated", "static"))
        self.assertEqual(payload["meta"]["tone"], "serious")
        self.assertEqual(set(payload["clues"]), {"across", "down"})
        self.assertTrue(payload["entries"]["across"])
        entries = payload["entries"]["across"] + payload["entries"]["down"]
        self.assertEqual(min(entry["number"] for entry in entries), 1)
        for entry in entries:
            self.assertEqual(len(entry["answer"]), entry["length"])

        remodeled = build_model(payload["grid"], payload["clues"])
        self.assertEqual(remodeled.to_jsonable(), payload["entries"])

    def test_pack_counts(self) -> None:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = main(["--pack-counts", "--log-level", "ERROR"])
        self.assertEqual(code, 0)
        self.assertIn("general", buffer.getvalue())
        self.assertIn("puzzles", buffer.getvalue())

    def test_check_pack(self) -> None:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = main(["--check-pack", "general", "music", "--log-level", "ERROR"])
        self.assertEqual(code, 0)
        self.assertIn("Pack: general (General)", buffer.getvalue())
        self.assertIn("Pack: music (Music)", buffer.getvalue())

    def test_pretty_output(self) -> None:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = main(["--pack", "animals", "--size", "small", "--seed", "2", "--attempts", "100", "--pretty", "--log-level", "ERROR"])
        self.assertEqual(code, 0)
        self.assertIn("--- Grid ---", buffer.getvalue())
        self.assertIn("--- Across ---", buffer.getvalue())

    def test_no_fallback_reports_failure(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            doc = {"id": "general", "name": "General", "word_bank": [{"word": "ERA", "serious": "Age"}]}
            (Path(tmpdir) / "general.json").write_text(json.dumps(doc), encoding="utf-8")
            code = main(["--packs-dir", tmpdir, "--no-fallback", "--log-level", "CRITICAL"])
        self.assertEqual(code, 1)

    def test_missing_packs_dir(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            code = main(["--packs-dir", str(Path(tmpdir) / "missing"), "--log-level", "CRITICAL"])
        self.assertEqual(code, 1)

    def test_rejects_zero_attempts(self) -> None:
        with self.assertRaises(SystemExit):
            main(["--attempts", "0", "--log-level", "CRITICAL"])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
