# config.py
from dataclasses import dataclass
from typing import Optional

@dataclass
class Config:
    """Holds all application configuration."""
    BASE_URL: str = "https://api.jikan.moe/v3/search/"
    DEFAULT_QUERY: str = "naruto"
    REQUEST_TIMEOUT: Optional[float] = None
    LOG_LEVEL: str = "WARNING"
