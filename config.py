"""
WarStats - Centralized Configuration

All environment variables, constants, and settings in one place.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class LayerType(str, Enum):
    """Known area-measurement layers in the exported daily_areas dataset."""

    UKRAINE_CONTROL_MAP = 'ukraine_control_map'
    KURSK_RUSSIAN_ADVANCES = 'kursk_russian_advances'


PRIMARY_LAYER = LayerType.UKRAINE_CONTROL_MAP.value
KURSK_LAYER = LayerType.KURSK_RUSSIAN_ADVANCES.value

# Events at or above this importance are drawn on every territory chart
CRITICAL_EVENT_IMPORTANCE = 8


@dataclass
class Config:
    """Application configuration loaded from environment."""

    # Exported JSON datasets (daily_areas.json, events.json, metadata.json)
    data_dir: str = 'data'

    # Cache settings
    data_cache_ttl: int = 1800         # 30 minutes
    max_cache_size: int = 64

    # Processing defaults
    interpolation_threshold: float = 0.5
    smoothing_window: int = 7
    rate_window_days: int = 30

    # Dashboard date range
    default_start: str = '2023-11-01'
    default_end: str = '2026-01-26'

    log_level: str = 'INFO'
    cors_origins: List[str] = field(
        default_factory=lambda: ['http://localhost:5173', 'http://127.0.0.1:5173']
    )

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        cfg = cls(
            data_dir=os.environ.get('WARSTATS_DATA_DIR', 'data'),
            data_cache_ttl=int(os.environ.get('DATA_CACHE_TTL', 1800)),
            default_start=os.environ.get('DEFAULT_START', '2023-11-01'),
            default_end=os.environ.get('DEFAULT_END', '2026-01-26'),
            log_level=os.environ.get('LOG_LEVEL', 'INFO').upper(),
        )

        # Comma-separated list, e.g. "http://localhost:5173,https://example.org"
        origins = os.environ.get('CORS_ORIGINS')
        if origins:
            cfg.cors_origins = [o.strip() for o in origins.split(',') if o.strip()]
        return cfg


# Global config instance
config = Config.from_env()
