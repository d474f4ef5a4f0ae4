"""
Quality bar for randomly generated equations.

A frame sequence is worth keeping when it actually animates, when most
frames draw something, and when the drawn area is neither a speck nor a
flood. These thresholds only gate the random mode; user equations are
always rendered.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from .sampler import Plot

MIN_FRAME_CHANGES = 2
MIN_COVERAGE = 0.01
MAX_COVERAGE = 0.90


@dataclass(frozen=True)
class FrameAssessment:
    frames: int
    set_count: int
    used_frames: int
    frame_changes: int
    total_samples: int
    reason: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.reason is None

    @property
    def coverage(self) -> float:
        if self.total_samples == 0:
            return 0.0
        return self.set_count / self.total_samples


def assess_frames(plots: Sequence[Plot]) -> FrameAssessment:
    """
    Collect coverage statistics over ``plots`` and decide whether to keep them.

    Rejection reasons, checked in order:

    * more than 3 frames but fewer than 2 differ from their predecessor
    * fewer than half of the frames have any near-zero sample
    * total near-zero samples under 1% of all samples
    * total near-zero samples over 90% of all samples
    """
    set_count = 0
    used_frames = 0
    frame_changes = 0
    for i, plot in enumerate(plots):
        set_count += plot.sets
        if plot.sets > 0:
            used_frames += 1
        if i > 0 and plot != plots[i - 1]:
            frame_changes += 1

    total_samples = sum(plot.rect.area for plot in plots)

    reason = None
    if frame_changes < MIN_FRAME_CHANGES and len(plots) > 3:
        reason = "Too few frames are different"
    elif used_frames < len(plots) // 2:
        reason = "Too few frames used, less than 50%"
    elif set_count < total_samples * MIN_COVERAGE:
        reason = "Less than 1% of all frames used"
    elif set_count > total_samples * MAX_COVERAGE:
        reason = "More than 90% of all frames used"

    return FrameAssessment(
        frames=len(plots),
        set_count=set_count,
        used_frames=used_frames,
        frame_changes=frame_changes,
        total_samples=total_samples,
        reason=reason,
    )
