"""
Learning path layout - Builder and gating in one pass.
"""

from typing import Optional

from kademe.schemas import EngineConfig, Level, PathItem

from .builder import CompletionLookup, build
from .gating import apply_gating


def layout_path(
    levels: list[Level],
    completions: Optional[CompletionLookup] = None,
    config: Optional[EngineConfig] = None,
) -> list[PathItem]:
    """
    Build and gate the learning path for a content snapshot.

    Args:
        levels: content snapshot levels
        completions: lesson/exam ID -> completion record (default: records
            embedded in the snapshot)
        config: engine configuration (default: EngineConfig())

    Returns:
        Final path items, ready for rendering
    """
    config = config or EngineConfig()
    return apply_gating(build(levels, completions, config.layout))
