from dataclasses import dataclass
from typing import Optional, Dict, Any, Literal

CompletionStatus = Literal["success", "empty_result", "upstream_unavailable"]


@dataclass
class CompletionResponse:
    status: CompletionStatus
    output: Optional[str] = None
    error_type: Optional[str] = None   # timeout | transport | http_status | invalid_body
    metadata: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        """True unless the upstream could not be reached or understood."""
        return self.status != "upstream_unavailable"
