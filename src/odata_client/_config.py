import os
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from ._utils.constants import (
    ENV_ACCESS_TOKEN,
    ENV_BASE_URL,
    ENV_MAX_RETRIES,
    ENV_TIMEOUT,
)
from .models.errors import BaseUrlMissingError


class Config(BaseModel):
    base_url: Optional[str] = None
    secret: Optional[str] = None
    timeout: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=3, ge=0)

    @classmethod
    def from_env(cls, dotenv_path: Optional[Union[str, Path]] = None) -> "Config":
        """Build a configuration from ``ODATA_*`` environment variables.

        Args:
            dotenv_path: Optional ``.env`` file loaded into the environment first.
                Values in the file override variables that are already set.

        Returns:
            Config: The resolved configuration.

        Raises:
            BaseUrlMissingError: If ``ODATA_URL`` is not set.
            pydantic.ValidationError: If a numeric setting is not valid.
        """
        if dotenv_path is not None:
            load_dotenv(dotenv_path=dotenv_path, override=True)

        base_url = os.getenv(ENV_BASE_URL)
        if not base_url:
            raise BaseUrlMissingError()

        values: dict = {"base_url": base_url, "secret": os.getenv(ENV_ACCESS_TOKEN)}
        if os.getenv(ENV_TIMEOUT):
            values["timeout"] = os.getenv(ENV_TIMEOUT)
        if os.getenv(ENV_MAX_RETRIES):
            values["max_retries"] = os.getenv(ENV_MAX_RETRIES)

        return cls.model_validate(values)
