"""Physics constants and application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# ==============================================================================
# Node appearance
# ==============================================================================

MIN_NODE_RADIUS = 45.0
MAX_NODE_RADIUS = 90.0
EXPANDED_Z_VALUE = 100

# ==============================================================================
# Hexagonal layout
# ==============================================================================

HEX_SPACING_FACTOR = 2.2    # ring spacing in multiples of the average radius
MAX_HEX_RINGS = 9           # 1 + 6 * (1 + ... + 9) = 271 slots

# ==============================================================================
# Integrator
# ==============================================================================

SPRING_CONSTANT = 0.08
EXPANDED_SPRING_MULTIPLIER = 4.0
DAMPING_FACTOR = 0.92
SNAP_THRESHOLD = 1.0
SNAP_VELOCITY_DECAY = 0.8
FRAME_MS = 16.67            # one frame at 60 Hz
MAX_DELTA_TIME = 2.0

# ==============================================================================
# Collisions and walls
# ==============================================================================

COLLISION_BUFFER = 5.0
COLLISION_PRECHECK_BUFFER = 3.0
SEPARATION_STRENGTH = 0.6
BOUNDARY_BOUNCE = -0.3

# ==============================================================================
# Interaction
# ==============================================================================

CLICK_TOLERANCE = 4.0       # pointer travel below this is a click, not a drag
MAX_SELECTED_CARDS = 5

PLACEHOLDER_KEYS = {"", "PLACEHOLDER_API_KEY", "YOUR_API_KEY_HERE"}


@dataclass
class PhysicsConfig:
    """Tunable parameters of the layout engine."""

    min_radius: float = MIN_NODE_RADIUS
    max_radius: float = MAX_NODE_RADIUS
    hex_spacing_factor: float = HEX_SPACING_FACTOR
    max_rings: int = MAX_HEX_RINGS
    spring_constant: float = SPRING_CONSTANT
    expanded_spring_multiplier: float = EXPANDED_SPRING_MULTIPLIER
    damping: float = DAMPING_FACTOR
    snap_threshold: float = SNAP_THRESHOLD
    snap_velocity_decay: float = SNAP_VELOCITY_DECAY
    frame_ms: float = FRAME_MS
    max_delta_time: float = MAX_DELTA_TIME
    collision_buffer: float = COLLISION_BUFFER
    precheck_buffer: float = COLLISION_PRECHECK_BUFFER
    separation_strength: float = SEPARATION_STRENGTH
    boundary_bounce: float = BOUNDARY_BOUNCE


@dataclass
class AppConfig:
    api_key: str | None = None
    model: str = "gemini-2.0-flash"
    language: str = "en"
    log_level: str = "INFO"

    @property
    def has_api_key(self) -> bool:
        return self.api_key is not None

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> "AppConfig":
        """Read settings from the environment, after loading ``.env``."""
        load_dotenv(dotenv_path)
        key = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or ""
        key = key.strip()
        return cls(
            api_key=None if key in PLACEHOLDER_KEYS else key,
            model=os.getenv("HEXFLASH_MODEL", cls.model),
            language=os.getenv("HEXFLASH_LANGUAGE", cls.language),
            log_level=os.getenv("HEXFLASH_LOG_LEVEL", cls.log_level).upper(),
        )
