import io
import sys
from pathlib import Path
import unittest
from unittest import mock

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

import fflogs_viewer.__main__ as runtime_main
from fflogs_viewer.bootstrap import create_application
from fflogs_viewer.domain.repositories import LogFetcher


class _StaticFetcher(LogFetcher):
    def __init__(self, payload) -> None:
        self.payload = payload
        self.closed = False

    async def fetch(self, character, metric):
        return self.payload

    def invalidate(self, character, metric) -> None:
        return None

    async def close(self) -> None:
        self.closed = True


_LOADED = {
    "data": {
        "characterData": {
            "character": {
                "hidden": False,
                "zone49diff101": {
                    "zone": 49,
                    "difficulty": 101,
                    "metric": "rdps",
                    "rankings": [
                        {
                            "encounter": {"id": 93},
                            "rankPercent": 97.4,
                            "medianPercent": 80.2,
                            "totalKills": 6,
                            "spec": "WhiteMage",
                            "bestSpec": "WhiteMage",
                            "allStars": {"points": 120.5},
                        }
                    ]
                },
            }
        }
    }
}


def _app_factory(fetcher: LogFetcher):
    def _factory(**kwargs):
        return create_application(log_fetcher=fetcher, **kwargs)

    return _factory


class MainEntryErrorHandlingTests(unittest.TestCase):
    def _run_main(self, argv, **patches) -> tuple[int, str]:
        output = io.StringIO()
        with mock.patch.object(runtime_main, "load_dotenv"), mock.patch.multiple(runtime_main, **patches), mock.patch(
            "sys.stdout", output
        ):
            code = runtime_main.main(argv)
        return code, output.getvalue()

    def test_main_handles_runtime_exceptions_without_traceback(self) -> None:
        code, text = self._run_main(
            ["Jane Doe Gilgamesh"],
            create_application=mock.Mock(side_effect=RuntimeError("cache dir not writable")),
        )

        self.assertEqual(2, code)
        self.assertIn("An unexpected error occurred", text)
        self.assertIn("cache dir not writable", text)
        self.assertIn("Help:", text)
        self.assertNotIn("Traceback", text)

    def test_main_handles_keyboard_interrupt(self) -> None:
        code, text = self._run_main(
            ["Jane Doe Gilgamesh"],
            create_application=mock.Mock(side_effect=KeyboardInterrupt),
        )

        self.assertEqual(130, code)
        self.assertIn("Lookup cancelled", text)

    def test_main_renders_loaded_rankings(self) -> None:
        fetcher = _StaticFetcher(_LOADED)
        code, text = self._run_main(["Jane Doe Gilgamesh"], create_application=_app_factory(fetcher))

        self.assertEqual(0, code)
        self.assertTrue(fetcher.closed)
        self.assertIn("Jane Doe@Gilgamesh", text)
        self.assertIn("rDPS", text)
        self.assertIn("https://www.fflogs.com/character/NA/Gilgamesh/Jane%20Doe", text)
        self.assertIn("WHM", text)
        self.assertIn("120.50", text)

    def test_main_reports_lookup_errors_with_exit_code(self) -> None:
        fetcher = _StaticFetcher({"error": "Unauthenticated."})
        code, text = self._run_main(["Jane Doe Gilgamesh"], create_application=_app_factory(fetcher))

        self.assertEqual(1, code)
        self.assertIn("Error: API Client not valid, check config", text)

    def test_main_uses_local_world_when_text_has_none(self) -> None:
        fetcher = _StaticFetcher({"data": {"characterData": {"character": None}}})
        code, text = self._run_main(
            ["Jane Doe", "--local-world", "Omega", "--metric", "ndps"],
            create_application=_app_factory(fetcher),
        )

        self.assertEqual(1, code)
        self.assertIn("Character not found on FF Logs", text)

    def test_unparseable_text_is_reported(self) -> None:
        fetcher = _StaticFetcher(_LOADED)
        code, text = self._run_main(["hello"], create_application=_app_factory(fetcher))

        self.assertEqual(1, code)
        self.assertIn("Error: Character not found", text)


if __name__ == "__main__":
    unittest.main()
