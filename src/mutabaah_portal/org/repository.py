from __future__ import annotations

from typing import Optional, Protocol

from .model import OrgProfile


class OrgDirectory(Protocol):
    def get_profile(self, employee_id: str) -> Optional[OrgProfile]:
        raise NotImplementedError
