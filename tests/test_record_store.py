import sys
import tempfile
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_pipeline.core.errors import StoreUnavailable  # noqa: E402
from resume_pipeline.schemas import NormalizedResume  # noqa: E402
from resume_pipeline.store import ResumeRecordStore, SQLiteConnection  # noqa: E402


class ResumeRecordStoreTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.connection = SQLiteConnection(str(Path(self._tmp.name) / "nested" / "resumes.db"))
        self.store = ResumeRecordStore(self.connection)

    def tearDown(self):
        self.connection.close()
        self._tmp.cleanup()

    def test_save_then_load_returns_equal_record(self):
        record = NormalizedResume.model_validate(
            {
                "contact_info": {"name": "Jane Doe", "email": "jane@x.com"},
                "experience": [{"job_title": "Engineer", "responsibilities": ["Built X"]}],
                "skills": "Python, SQL",
                "languages": ["English"],
            }
        )

        record_id = self.store.save(record)
        loaded = self.store.load(record_id)

        self.assertTrue(record_id)
        self.assertEqual(loaded, record)
        self.assertEqual(loaded.model_dump()["languages"], ["English"])

    def test_each_save_gets_a_new_identifier(self):
        record = NormalizedResume()
        self.assertNotEqual(self.store.save(record), self.store.save(record))

    def test_unknown_identifier_loads_none(self):
        self.assertIsNone(self.store.load("does-not-exist"))

    def test_connection_is_lazy_and_reopens_after_close(self):
        db_file = Path(self.connection.db_path)
        self.assertFalse(db_file.exists())

        record_id = self.store.save(NormalizedResume())
        self.assertTrue(db_file.exists())

        self.connection.close()
        self.assertIsNotNone(self.store.load(record_id))

    def test_unopenable_database_raises_store_unavailable(self):
        # A directory cannot be opened as a database file.
        broken = ResumeRecordStore(SQLiteConnection(self._tmp.name))
        with self.assertRaises(StoreUnavailable):
            broken.save(NormalizedResume())


if __name__ == "__main__":
    unittest.main()
