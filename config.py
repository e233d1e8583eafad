import os
from dotenv import load_dotenv

from errors import ConfigurationError

load_dotenv()

DEFAULT_MODELS = {
    "gemini": "gemini-2.0-flash",
    "openai": "gpt-4o-mini",
    "mock": "mock",
}

# provider -> env vars holding its key, first non-empty wins
API_KEY_ENV = {
    "gemini": ("GEMINI_API_KEY", "REACT_APP_GEMINI_API_KEY"),
    "openai": ("OPENAI_API_KEY",),
}


def _number(env, name, cast, default):
    """Numeric setting; blank means default, garbage is a ConfigurationError."""
    value = (env.get(name) or "").strip()
    if not value:
        return default
    try:
        return cast(value)
    except ValueError:
        raise ConfigurationError(f"Konfigurasi tidak valid: {name}") from None


class Settings:
    def __init__(self, env=None):
        env = os.environ if env is None else env
        self.LLM_PROVIDER = (env.get("LLM_PROVIDER") or "gemini").strip().lower()
        self.LLM_MODEL = (env.get("LLM_MODEL") or DEFAULT_MODELS.get(self.LLM_PROVIDER, "")).strip()
        self.LLM_TIMEOUT = _number(env, "LLM_TIMEOUT", float, 15.0)
        self.LLM_MAX_TOKENS = _number(env, "LLM_MAX_TOKENS", int, 1500)
        self.LLM_TEMPERATURE = _number(env, "LLM_TEMPERATURE", float, 0.0)
        self.LOG_LEVEL = env.get("LOG_LEVEL", "INFO").upper()
        self.LOG_DIR = env.get("LOG_DIR", "logs")
        self.BACKEND_URL = env.get("BACKEND_URL", "http://127.0.0.1:5000/api/diagnosis")
        self._keys = {
            provider: next((env.get(name).strip() for name in names if (env.get(name) or "").strip()), "")
            for provider, names in API_KEY_ENV.items()
        }

    def api_key_for(self, provider: str) -> str:
        return self._keys.get(provider, "")

    def api_key_env_name(self, provider: str) -> str:
        names = API_KEY_ENV.get(provider)
        return names[0] if names else ""

    @property
    def log_file(self) -> str:
        return os.path.join(self.LOG_DIR, "healthguard.log")

    @property
    def raw_log_file(self) -> str:
        return os.path.join(self.LOG_DIR, "llm_raw_logs.log")


def get_settings() -> Settings:
    """Fresh settings from the current environment."""
    return Settings()
