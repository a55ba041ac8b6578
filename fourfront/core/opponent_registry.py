import yaml
from pathlib import Path
from pydantic import BaseModel, Field
from typing import Dict, Optional

from fourfront.core.config import settings

class OpponentConfig(BaseModel):
    label: str
    depth: int = Field(ge=1)
    mistake_rate: float = Field(ge=0.0, le=1.0)
    description: Optional[str] = None

class OpponentRegistry:
    def __init__(self, config_path: Path = settings.opponents_path):
        self.opponents: Dict[str, OpponentConfig] = {}
        self._load(config_path)

    def _load(self, path: Path):
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
            for key, val in data.get("opponents", {}).items():
                self.opponents[key] = OpponentConfig(**val)

    def get(self, key: str) -> Optional[OpponentConfig]:
        return self.opponents.get(key)

    def list_all(self) -> Dict[str, OpponentConfig]:
        return self.opponents

# Singleton instance
registry = OpponentRegistry()
