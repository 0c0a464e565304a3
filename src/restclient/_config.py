from os import environ as env

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from ._utils.constants import DEFAULT_TIMEOUT, ENV_DEBUG, ENV_TIMEOUT


class Config(BaseModel):
    timeout: float = DEFAULT_TIMEOUT
    debug: bool = False

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        assert value > 0, "Timeout must be positive"
        return value

    @classmethod
    def from_env(cls) -> "Config":
        """Build a Config from RESTCLIENT_* variables, reading .env first."""
        load_dotenv()
        values = {}
        if env.get(ENV_TIMEOUT):
            values["timeout"] = env[ENV_TIMEOUT]
        if env.get(ENV_DEBUG):
            values["debug"] = env[ENV_DEBUG]
        return cls.model_validate(values)
