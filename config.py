import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./subshare.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 3001)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", ["http://localhost:5173"])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    DEBUG = bool(data.get("DEBUG", False))
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")

    # Access URLs handed to delegates
    ACCESS_TOKEN_SECRET = data.get("ACCESS_TOKEN_SECRET", "dev-access-secret-change-in-production")
    ACCESS_BASE_URL = data.get("ACCESS_BASE_URL", "https://subshare.app/access")

    # Hex-encoded 32 byte ed25519 seed used to sign attestation commitments
    ISSUER_SIGNING_KEY = data.get("ISSUER_SIGNING_KEY", "5a" * 32)

    DELEGATION_MIN_SECONDS = int(data.get("DELEGATION_MIN_SECONDS", 3600))
    DELEGATION_MAX_SECONDS = int(data.get("DELEGATION_MAX_SECONDS", 30 * 24 * 3600))
    SESSION_MIN_SECONDS = int(data.get("SESSION_MIN_SECONDS", 5 * 60))
    SESSION_MAX_SECONDS = int(data.get("SESSION_MAX_SECONDS", 30 * 24 * 3600))
    SESSION_SWEEP_INTERVAL_SECONDS = float(data.get("SESSION_SWEEP_INTERVAL_SECONDS", 60))
    PROFILE_SLOTS_PER_PASS = int(data.get("PROFILE_SLOTS_PER_PASS", 1))
    ATTESTATION_TTL_SECONDS = int(data.get("ATTESTATION_TTL_SECONDS", 365 * 24 * 3600))

    COLLABORATOR_TIMEOUT_SECONDS = float(data.get("COLLABORATOR_TIMEOUT_SECONDS", 5))
    ANCHOR_MAX_ATTEMPTS = int(data.get("ANCHOR_MAX_ATTEMPTS", 3))
    ANCHOR_BACKOFF_SECONDS = float(data.get("ANCHOR_BACKOFF_SECONDS", 0.5))
    LEDGER_LATENCY_SECONDS = float(data.get("LEDGER_LATENCY_SECONDS", 0))
