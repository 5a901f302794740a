import sys
import unittest
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_pipeline import __main__ as entrypoint  # noqa: E402
from resume_pipeline.core.config import settings  # noqa: E402


class ServerEntrypointTests(unittest.TestCase):
    def test_main_serves_app_with_configured_address(self):
        with patch.object(entrypoint.uvicorn, "run") as run:
            entrypoint.main()

        run.assert_called_once()
        args, kwargs = run.call_args
        self.assertEqual(args, ("resume_pipeline.main:app",))
        self.assertEqual(kwargs["host"], settings.host)
        self.assertEqual(kwargs["port"], settings.port)


if __name__ == "__main__":
    unittest.main()
