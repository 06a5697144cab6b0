from typing import Literal

from pydantic import BaseModel, ConfigDict

IdStrategy = Literal["simple_hash", "sha256"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class StoreRules(BaseModel):
    schema_validation: bool = False
    id_strategy: IdStrategy = "simple_hash"


class LoggingRules(BaseModel):
    level: LogLevel = "INFO"
    debug_mode: bool = False  # forces DEBUG


class Rules(BaseModel):
    model_config = ConfigDict(extra="forbid")

    store: StoreRules = StoreRules()
    logging: LoggingRules = LoggingRules()
