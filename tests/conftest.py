import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("PERSISTENCE_BACKEND", "simulated")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("AUTH_DEV_USER_ID", "")
os.environ.setdefault("GEMINI_API_KEY", "")
