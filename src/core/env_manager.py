import os
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


class EnvManager:
    """Read configuration values from the environment (and a local .env file)."""

    @staticmethod
    def get_env_variable(name: str, default: Optional[Any] = None) -> Any:
        """Return the variable value, or ``default`` when it is unset or blank."""
        value = os.getenv(name)
        if value is None or value.strip() == "":
            return default
        return value
