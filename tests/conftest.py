"""
Point the application at throwaway storage before it is imported.
"""
import os
import tempfile

_workdir = tempfile.mkdtemp(prefix="fleetdesk-tests-")

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_workdir, 'fleetdesk.db')}"
os.environ["BLOB_ROOT"] = os.path.join(_workdir, "storage")
os.environ["LEGACY_CACHE_PATH"] = os.path.join(_workdir, "legacy-cache.json")
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["TIMEZONE"] = "America/Sao_Paulo"
