import os
import re

from dotenv import find_dotenv, load_dotenv


# Load environment variables with .env, .env.dev/.env.prod support
def _load_env_files() -> None:
    """
    Load .env files with this precedence:
    1) Base .env (if present)
    2) Explicit file via ENV_FILE (e.g., .env.dev or ./config/.env.prod)
    3) Environment-specific file inferred from ENVIRONMENT/ENV/PYTHON_ENV
    Note: Existing OS environment variables are never overridden.
    """
    base_path = find_dotenv(".env", usecwd=True)
    if base_path:
        load_dotenv(base_path, override=False)

    explicit = os.environ.get("ENV_FILE")
    if explicit:
        explicit_path = explicit if os.path.isabs(explicit) else find_dotenv(explicit, usecwd=True)
        if explicit_path:
            load_dotenv(explicit_path, override=False)
            return

    env_name = (
        os.environ.get("ENVIRONMENT") or os.environ.get("ENV") or os.environ.get("PYTHON_ENV")
    )
    if env_name:
        slug = str(env_name).strip().lower()
        alias = {
            "dev": "development",
            "prod": "production",
            "stg": "staging",
            "test": "test",
        }
        resolved = alias.get(slug, slug)
        for candidate in (f".env.{resolved}", f".env.{slug}"):
            path = find_dotenv(candidate, usecwd=True)
            if path:
                load_dotenv(path, override=False)
                break


_load_env_files()

# === Environment Configuration ===
ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")  # development, staging, production

# === Server Configuration ===
SERVER_HOST = os.environ.get("SERVER_HOST", "0.0.0.0")


def _get_int_env(var_name: str, default_value: int) -> int:
    """
    Parse an integer environment variable robustly.
    - Trims whitespace and trailing semicolons.
    - Falls back to the first integer found in the string.
    - Returns the provided default if parsing fails.
    """
    raw = os.environ.get(var_name, str(default_value))
    text = str(raw).strip().rstrip(";")
    try:
        return int(text)
    except ValueError:
        match = re.search(r"[-+]?\d+", text or "")
        if match:
            return int(match.group(0))
    return int(default_value)


SERVER_PORT = _get_int_env("SERVER_PORT", 8060)
DEBUG = os.environ.get("DEBUG", "true").lower() == "true"


# === CORS Configuration ===
def _get_cors_origins() -> list[str]:
    """
    Return CORS origins from env or a permissive default.
    Example env format:
      CORS_ORIGINS="http://localhost:3000,http://127.0.0.1:3000,https://yourdomain.com"
    """
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


CORS_ORIGINS = _get_cors_origins()

# === Database Configuration ===
MONGODB_URI = os.environ.get("MONGODB_URI") or os.environ.get("MONGODB_CONNECTION_STRING")
DATABASE_NAME = os.environ.get("DATABASE_NAME", "trip_planner")

# === Microservices ===
SAFETY_MICROSERVICE_URL = os.environ.get("SAFETY_MICROSERVICE_URL", "http://localhost:3001")
PHRASE_MICROSERVICE_URL = os.environ.get("PHRASE_MICROSERVICE_URL", "http://localhost:3002")
ITINERARY_MICROSERVICE_URL = os.environ.get("ITINERARY_MICROSERVICE_URL", "http://localhost:3003")
EXPORT_MICROSERVICE_URL = os.environ.get("EXPORT_MICROSERVICE_URL", "http://localhost:3004")
UPSTREAM_TIMEOUT_SECONDS = _get_int_env("UPSTREAM_TIMEOUT_SECONDS", 15)

# === Password Hashing ===
BCRYPT_ROUNDS = _get_int_env("BCRYPT_ROUNDS", 12)

# === Application Settings ===
APP_NAME = "Trip Planner API"
APP_VERSION = "1.0.0"
