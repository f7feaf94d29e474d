"""
Tests for DatabaseConfig

- Alias resolution against settings.toml
- One shared engine per alias, also under concurrent first access
"""
import threading
import unittest
from concurrent.futures import ThreadPoolExecutor

from config import DatabaseConfig, PROJECT_ROOT, _ENGINE_LOCK
from settings_service import SettingsService


class TestDatabaseConfig(unittest.TestCase):
    def tearDown(self):
        DatabaseConfig.dispose_all()

    def test_engine_lock_exists(self):
        self.assertIsInstance(_ENGINE_LOCK, type(threading.Lock()))

    def test_default_alias_from_settings(self):
        db = DatabaseConfig()
        self.assertEqual(db.alias, SettingsService().db_alias)
        self.assertTrue(db.url.startswith("sqlite:///"))

    def test_relative_paths_resolve_under_project_root(self):
        db = DatabaseConfig(SettingsService().db_alias)
        self.assertTrue(db.path.startswith(str(PROJECT_ROOT)))

    def test_unknown_alias_raises(self):
        with self.assertRaises(ValueError):
            DatabaseConfig("no_such_alias")

    def test_from_url(self):
        db = DatabaseConfig.from_url("sqlite://", alias="memory")
        self.assertEqual(db.alias, "memory")
        self.assertIsNone(db.path)

    def test_engine_shared_per_alias(self):
        a = DatabaseConfig.from_url("sqlite://", alias="shared")
        b = DatabaseConfig.from_url("sqlite://", alias="shared")
        self.assertIs(a.engine, b.engine)

    def test_concurrent_first_access_creates_one_engine(self):
        configs = [DatabaseConfig.from_url("sqlite://", alias="race") for _ in range(16)]
        with ThreadPoolExecutor(max_workers=8) as ex:
            engines = list(ex.map(lambda c: c.engine, configs))
        self.assertEqual(len({id(e) for e in engines}), 1)

    def test_dispose_all_forgets_engines(self):
        db = DatabaseConfig.from_url("sqlite://", alias="gone")
        first = db.engine
        DatabaseConfig.dispose_all()
        self.assertIsNot(db.engine, first)


if __name__ == "__main__":
    unittest.main()
