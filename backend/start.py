import os
import sys
import uvicorn
import socket

# SET DATABASE_URL BEFORE importing app modules!
# Local runs use a SQLite file next to this script instead of PostgreSQL
if not os.getenv("DATABASE_URL"):
    if getattr(sys, 'frozen', False):
        # Running as compiled executable
        base_dir = os.path.dirname(sys.executable)
    else:
        base_dir = os.path.dirname(os.path.abspath(__file__))

    db_path = os.path.join(base_dir, "questlms.db")
    # SQLite URL format: sqlite:///absolute/path/to/file.db (3 slashes for absolute)
    os.environ["DATABASE_URL"] = f"sqlite:///{db_path}"
    print(f"[INFO] Using SQLite database at: {db_path}")

# Now import the FastAPI app (db.py will read the DATABASE_URL we just set)
from questlms.db import Base, engine  # noqa: E402
import questlms.models  # noqa: E402,F401  registers every table
from questlms.main import app as fastapi_app  # noqa: E402


def find_free_port(start_port=8000, max_attempts=10):
    """Find a free port starting from start_port"""
    for port in range(start_port, start_port + max_attempts):
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind(('127.0.0.1', port))
                return port
        except OSError:
            continue
    raise RuntimeError(f"Could not find a free port in range {start_port}-{start_port + max_attempts}")


if __name__ == "__main__":
    # SQLite has no migration run in front of it
    if engine.url.get_backend_name() == "sqlite":
        Base.metadata.create_all(bind=engine)

    host = os.getenv("HOST", "127.0.0.1")
    wanted = int(os.getenv("PORT", "8000"))
    try:
        port = find_free_port(wanted)
        if port != wanted:
            print(f"[WARN] Port {wanted} in use, using port {port} instead")
    except RuntimeError:
        print("[ERROR] No free ports available")
        sys.exit(1)

    uvicorn.run(fastapi_app, host=host, port=port, reload=False)
