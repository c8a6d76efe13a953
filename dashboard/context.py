from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class DashboardContext:
    user_email: Optional[str]
    user_name: str
    backend_ok: bool = True
    payload: Dict[str, Any] = field(default_factory=dict)

    def get(self, key, default=None):
        return self.payload.get(key, default)

    def __getitem__(self, key):
        return self.payload[key]
