"""
Engine configuration schemas for Kademe.

Values are in screen points unless noted. Defaults reproduce the layout of
the mobile client.
"""

from pydantic import BaseModel, Field

from .progress import DEFAULT_PASSING_SCORE


class LayoutConfig(BaseModel):
    step_size: float = Field(default=120, gt=0)
    step_vertical_gap: float = Field(default=180, gt=0)
    unit_section_gap: float = Field(default=220, ge=0)
    screen_width: float = Field(default=390, gt=0)
    grid_padding: float = Field(default=24, ge=0)
    mascot_size: float = Field(default=96, gt=0)
    include_mascots: bool = True

    @property
    def lanes(self) -> tuple[float, float]:
        """Horizontal centres of the left and right zig-zag lanes."""
        half = self.step_size / 2
        return (
            self.grid_padding + half,
            self.screen_width - self.grid_padding - half,
        )


class GradingConfig(BaseModel):
    default_passing_score: float = Field(default=DEFAULT_PASSING_SCORE, ge=0.0, le=100.0)


class EngineConfig(BaseModel):
    layout: LayoutConfig = LayoutConfig()
    grading: GradingConfig = GradingConfig()
