from __future__ import annotations

from typing import Dict

# day_key ("01".."31") -> activity_id -> credited
DayMap = Dict[str, Dict[str, bool]]

# month_key ("YYYY-MM") -> DayMap
ProgressFragment = Dict[str, DayMap]
