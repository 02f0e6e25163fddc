import os
from typing import Annotated, Literal, Optional

import annotated_types as at
from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseModel):
    MAX_WORKERS: Annotated[int, at.Ge(1)] = Field(
        default=1,
        description="Default number of threads used to evaluate windows. 1 means sequential.",
    )
    LOG_LEVEL: LogLevel = Field(default="INFO", description="Level of the rollkit logger.")

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @classmethod
    def load(cls, environ: Optional[dict] = None) -> "Settings":
        environ = os.environ if environ is None else environ

        values = {}
        if environ.get("ROLLKIT_MAX_WORKERS"):
            values["MAX_WORKERS"] = environ["ROLLKIT_MAX_WORKERS"]
        if environ.get("ROLLKIT_LOG_LEVEL"):
            values["LOG_LEVEL"] = environ["ROLLKIT_LOG_LEVEL"]

        return cls(**values)


settings = Settings.load()
