from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Identity:
    """Verified identity claim; the per-request session context."""

    user_id: int
    role: Role
    name: Optional[str] = None
    email: Optional[str] = None
