import logging
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field, model_validator

load_dotenv()

DEFAULT_OPPONENTS_PATH = Path(__file__).resolve().parent.parent / "config" / "opponents.yaml"


class Settings(BaseModel):
    default_depth: int = Field(default=4, ge=1)
    default_mistake_rate: float = Field(default=0.1, ge=0.0, le=1.0)
    default_ai_name: str = "AI"
    max_depth: int = Field(default=10, ge=1)
    time_limit: float = Field(default=0.0, ge=0.0)  # seconds, 0 = no deadline
    ranked_moves: int = Field(default=3, ge=0)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    opponents_path: Path = DEFAULT_OPPONENTS_PATH

    @model_validator(mode="after")
    def check_depth(self) -> "Settings":
        if self.default_depth > self.max_depth:
            raise ValueError(f"default_depth {self.default_depth} exceeds max_depth {self.max_depth}")
        return self


def load_settings() -> Settings:
    """Builds Settings from FOURFRONT_* environment variables (and .env)."""
    env = {
        "default_depth": os.getenv("FOURFRONT_DEFAULT_DEPTH"),
        "default_mistake_rate": os.getenv("FOURFRONT_DEFAULT_MISTAKE_RATE"),
        "default_ai_name": os.getenv("FOURFRONT_DEFAULT_AI_NAME"),
        "max_depth": os.getenv("FOURFRONT_MAX_DEPTH"),
        "time_limit": os.getenv("FOURFRONT_TIME_LIMIT"),
        "ranked_moves": os.getenv("FOURFRONT_RANKED_MOVES"),
        "log_level": os.getenv("FOURFRONT_LOG_LEVEL"),
        "opponents_path": os.getenv("FOURFRONT_OPPONENTS_PATH"),
    }
    origins = os.getenv("FOURFRONT_CORS_ORIGINS")
    if origins:
        env["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]
    return Settings(**{k: v for k, v in env.items() if v is not None})


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


settings = load_settings()
