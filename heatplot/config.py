"""
Run parameters with their defaults.

There are no config files: the command line fills a ``RenderConfig`` and the
library functions take plain arguments.
"""

from dataclasses import dataclass

from .colours import MAX_BUCKET_COUNT
from .sampler import GridRect

DEFAULT_HEAT_COLOUR_COUNT = 126
DEFAULT_SPEED_MS = 100
DEFAULT_POINT_SIZE = 0.1
DEFAULT_SCALE = 2
DEFAULT_TIME_LOWER = 0
DEFAULT_TIME_UPPER = 100
DEFAULT_RANDOM_TIME_UPPER = 25
DEFAULT_SIZE = 100
DEFAULT_OUTPUT_FILE = "./out.gif"
DEFAULT_RANDOM_FOOTER = "RND"


@dataclass
class RenderConfig:
    """
    Everything needed to turn an equation into an animation.

    Attributes:
        heat_colour_count: colour buckets on each side of zero
        speed_ms: delay between frames in milliseconds
        point_size: real distance covered by one grid cell
        scale: pixel magnification of the rendered frames
        time_lower: first T value
        time_upper: T stops before this value
        size: grid spans ``[-size, size)`` on both axes
        output_file: GIF destination
        footer_text: text drawn under each frame
    """
    heat_colour_count: int = DEFAULT_HEAT_COLOUR_COUNT
    speed_ms: int = DEFAULT_SPEED_MS
    point_size: float = DEFAULT_POINT_SIZE
    scale: int = DEFAULT_SCALE
    time_lower: int = DEFAULT_TIME_LOWER
    time_upper: int = DEFAULT_TIME_UPPER
    size: int = DEFAULT_SIZE
    output_file: str = DEFAULT_OUTPUT_FILE
    footer_text: str = ""

    @classmethod
    def for_random(cls, **overrides) -> "RenderConfig":
        """Defaults used when rendering generated equations"""
        values = {"time_upper": DEFAULT_RANDOM_TIME_UPPER, "footer_text": DEFAULT_RANDOM_FOOTER}
        values.update(overrides)
        return cls(**values)

    @property
    def grid_rect(self) -> GridRect:
        return GridRect.around_origin(self.size)

    def validate(self):
        """Raise ValueError describing the first invalid field"""
        if not 1 <= self.heat_colour_count <= MAX_BUCKET_COUNT:
            raise ValueError(f"heat_colour_count must be between 1 and {MAX_BUCKET_COUNT}, "
                             f"got {self.heat_colour_count}")
        if self.speed_ms <= 0:
            raise ValueError(f"speed_ms must be positive, got {self.speed_ms}")
        if self.point_size <= 0:
            raise ValueError(f"point_size must be positive, got {self.point_size}")
        if self.scale < 1:
            raise ValueError(f"scale must be at least 1, got {self.scale}")
        if self.size < 1:
            raise ValueError(f"size must be at least 1, got {self.size}")
        if not self.output_file:
            raise ValueError("output_file must not be empty")
