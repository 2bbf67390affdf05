"""
Pydantic model for the reachability check settings.
Provides validation for values coming from the config file and the command line.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

from trackpage import __version__

DEFAULT_USER_AGENT = f"trackpage/{__version__}"


class CheckConfig(BaseModel):
    """A validated configuration model for the reachability checker."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    # Total time allowed for a single probe, in seconds
    timeout: float = 10.0
    # None means one task per URL with no bound on in-flight requests
    max_concurrent: int | None = None
    method: Literal["HEAD", "GET"] = "HEAD"
    user_agent: str = DEFAULT_USER_AGENT

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Ensures every probe has a finite, positive deadline."""
        if v <= 0 or v > 300:
            raise ValueError("Timeout must be greater than 0 and at most 300 seconds.")
        return v

    @field_validator("max_concurrent")
    @classmethod
    def validate_max_concurrent(cls, v: int | None) -> int | None:
        """Treats 0 as unbounded and keeps explicit bounds in a sane range."""
        if v is None or v == 0:
            return None
        if v < 1 or v > 256:
            raise ValueError("Max concurrent checks must be between 1 and 256.")
        return v

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method(cls, v: str) -> str:
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator("user_agent")
    @classmethod
    def validate_user_agent(cls, v: str) -> str:
        return v or DEFAULT_USER_AGENT

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns the set of keys accepted in the INI file."""
        return set(cls.model_fields)
