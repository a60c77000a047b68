import typing as t
import os
from dotenv import load_dotenv
from qaskills.base.exception import ConfigurationError
from qaskills.utils.str import parse_env_var_to_list, parse_bool

dotenv_path = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), ".env")
load_dotenv(dotenv_path=dotenv_path)

class EnvHandler:
    def __init__(self):
        """Add new variables below"""
        self.state = {
            "base_url": self.get("BASE_URL", "https://qaskills.sh").rstrip("/"),
            "sender": self.get("SENDER_EMAIL", "noreply@qaskills.sh"),
            "sender_name": self.get("SENDER_NAME", "QASkills"),
            "client_local": self.get("CLIENT_URL_LOCAL", "http://localhost:3000"),
            "client_prod": self.get("CLIENT_URL_PROD", "https://qaskills.sh"),
            "log_level": self.get("LOG_LEVEL", "INFO").upper(),
            "rate_limit_enabled": self.get("RATE_LIMIT_ENABLED", "true", cast=parse_bool),
        }
        self.mongo = {
            "uri": self.get("MONGO_URI", "mongodb://localhost:27017"),
            "db": self.get("DATABASE_NAME", "qaskills"),
        }
        self.mailjet = {
            "api_key": self.get("MAILJET_API_KEY", ""),
            "secret_key": self.get("MAILJET_SECRET_KEY", ""),
        }
        self.redis = {
            "url": self.get("REDIS_URL", ""),
        }
        self.clerk = {
            "jwt_key": self.get("CLERK_JWT_KEY", "").replace("\\n", "\n"),
            "algorithm": self.get("CLERK_JWT_ALGORITHM", "RS256"),
        }
        self.auth = {
            "allow_headers": parse_env_var_to_list(self.get("ALLOW_HEADERS", "Content-Type|Authorization")),
        }

    def get(self, key: str, default: t.Union[t.Any, None] = None, cast: t.Union[t.Callable, None] = None) -> t.Any:
        """
        Fetch an environment variable with optional casting and default fallback.
        - (key) Name of the environment variable.
        - (default) Default value if the variable is not found.
        - `cast`: Callable to cast the value with (e.g., int, float, parse_bool).
        - `returns`: The value of the environment variable.
        - `raises`: `KeyError` if the variable is not found and no default is provided.
        """
        value = os.getenv(key, default)
        if value is None:
            raise KeyError(f"Missing required environment variable: {key}")
        if cast:
            try:
                value = cast(value)
            except ValueError as e:
                raise ValueError(f"Error casting environment variable {key} to {cast}: {e}")

        return value

    def mailjet_configured(self) -> bool:
        return bool(self.mailjet["api_key"] and self.mailjet["secret_key"])

    @staticmethod
    def get_unsubscribe_secret() -> str:
        """Signing secret for unsubscribe tokens, read fresh on every call."""
        secret = os.environ.get("UNSUBSCRIBE_SECRET") or os.environ.get("CRON_SECRET")
        if not secret:
            raise ConfigurationError("UNSUBSCRIBE_SECRET or CRON_SECRET")
        return secret

    @staticmethod
    def get_cron_secret() -> t.Optional[str]:
        return os.environ.get("CRON_SECRET") or None

env = EnvHandler()
