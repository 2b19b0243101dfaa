from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class MatchContext:
    """
    Shared pipeline context.
    This object is passed between orchestration layers.
    """

    config: Any
    logger: Any

    old_path: Optional[str] = None
    new_path: Optional[str] = None
    output_path: Optional[str] = None

    wrap_width: int = 120
    output_encoding: str = "utf-8"

    stats: Dict[str, Any] = field(default_factory=dict)
    duplicates: Dict[str, Any] = field(default_factory=dict)

    debug: bool = False
