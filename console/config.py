# console/config.py

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_API_URL = "http://localhost:8000/api"


@dataclass(frozen=True)
class ConsoleSettings:
    api_url: str = DEFAULT_API_URL
    token: str = ""

    @classmethod
    def from_env(cls) -> ConsoleSettings:
        return cls(
            api_url=os.getenv("TASKBOARD_API_URL", DEFAULT_API_URL).rstrip("/"),
            token=os.getenv("TASKBOARD_TOKEN", ""),
        )
