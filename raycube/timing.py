"""Frame timing and frame-rate statistics."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Optional

MAX_DELTA = 0.1
FPS_SAMPLES = 60


def get_time() -> float:
    """Wall-clock time in seconds."""
    return time.time()


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation from ``a`` to ``b`` by ``t``."""
    return a + (b - a) * t


class FrameClock:
    """Measures the time between frames, capped at :data:`MAX_DELTA`."""

    def __init__(self, now: Optional[float] = None) -> None:
        self.last_frame_time = get_time() if now is None else now
        self.frame_start = 0.016
        self.fps = 60.0
        self.delta_time = 0.0

    def update(self, now: Optional[float] = None) -> float:
        """Start a new frame and return the capped time since the last one."""
        if now is None:
            now = get_time()
        delta = now - self.last_frame_time
        self.last_frame_time = now
        if delta > MAX_DELTA:
            delta = MAX_DELTA
        self.delta_time = delta
        self.fps = 1.0 / delta if delta != 0 else math.inf
        return delta


@dataclass
class PerformanceStats:
    """Per-frame counters and a running average over the last 60 frames."""

    frame_time: float = 0.0
    render_time: float = 0.0
    logic_time: float = 0.0
    ray_cast: int = 0
    pixels_drawn: int = 0
    avg_fps: float = 0.0
    sample_index: int = 0
    frame_start: float = 0.0
    fps_samples: list[float] = field(
        default_factory=lambda: [0.0] * FPS_SAMPLES
    )

    def begin_frame(self, now: Optional[float] = None) -> None:
        """Mark the start of a frame and reset the ray counter."""
        self.frame_start = get_time() if now is None else now
        self.ray_cast = 0

    def end_frame(self, now: Optional[float] = None) -> float:
        """Record the frame's rate and return the average rate."""
        if now is None:
            now = get_time()
        self.frame_time = now - self.frame_start
        if self.frame_time > 0:
            self.fps_samples[self.sample_index] = 1.0 / self.frame_time
            self.sample_index = (self.sample_index + 1) % FPS_SAMPLES
        self.avg_fps = sum(self.fps_samples) / FPS_SAMPLES
        return self.avg_fps