"""
Request Logger Module

JSONL call log for the Shopify tool server:
A. GraphQL calls issued by the request pipeline
B. Tool invocations handled by the registry

Logs are append-only, one file per category, so they can be tailed or
loaded into pandas without further parsing.
"""

import json
import logging
import threading
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


# ==============================================================================
# Log Types
# ==============================================================================

class LogCategory(str, Enum):
    GRAPHQL_CALL = "graphql_call"
    TOOL_CALL = "tool_call"


@dataclass
class GraphQLCallLog:
    """One outbound GraphQL request."""
    log_id: str
    timestamp: str
    category: str
    operation: str
    shop: str
    status_code: Optional[int]
    latency_ms: float
    waited_ms: float
    error_type: Optional[str] = None
    session_id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolCallLog:
    """One tool invocation, successful or not."""
    log_id: str
    timestamp: str
    category: str
    tool_name: str
    success: bool
    latency_ms: float
    error_type: Optional[str] = None
    session_id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


# ==============================================================================
# Main Logger Class
# ==============================================================================

class RequestLogger:
    """
    Structured call logger.

    Each instance has its own session id and log directory; the pipeline and
    the registry receive the instance explicitly.
    """

    def __init__(self, log_dir: str = "logs/requests"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.session_id = f"session_{datetime.now().strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:8]}"

        self.log_files = {
            LogCategory.GRAPHQL_CALL: self.log_dir / "graphql_calls.jsonl",
            LogCategory.TOOL_CALL: self.log_dir / "tool_calls.jsonl",
        }

        self._write_lock = threading.Lock()

    def _generate_id(self, prefix: str = "log") -> str:
        return f"{prefix}_{datetime.now().strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:8]}"

    def _get_timestamp(self) -> str:
        return datetime.now().isoformat()

    def _write_log(self, category: LogCategory, log_data: Dict[str, Any]) -> None:
        """Write log entry to the category's JSONL file."""
        log_file = self.log_files.get(category)
        if not log_file:
            return

        with self._write_lock:
            try:
                with open(log_file, "a", encoding="utf-8") as f:
                    json.dump(log_data, f, ensure_ascii=False, default=str)
                    f.write("\n")
            except OSError as e:
                # Losing a log line must never fail the call it describes
                logger.warning(f"Failed to write request log: {e}")

    # ==========================================================================
    # Public Logging Methods
    # ==========================================================================

    def log_graphql_call(
        self,
        operation: str,
        shop: str,
        status_code: Optional[int],
        latency_ms: float,
        waited_ms: float = 0.0,
        error_type: Optional[str] = None,
        metadata: Optional[Dict] = None,
    ) -> str:
        """
        Log an outbound GraphQL request.

        Returns:
            log_id for reference
        """
        log = GraphQLCallLog(
            log_id=self._generate_id("gql"),
            timestamp=self._get_timestamp(),
            category=LogCategory.GRAPHQL_CALL.value,
            operation=operation,
            shop=shop,
            status_code=status_code,
            latency_ms=round(latency_ms, 2),
            waited_ms=round(waited_ms, 2),
            error_type=error_type,
            session_id=self.session_id,
            metadata=metadata or {},
        )
        self._write_log(LogCategory.GRAPHQL_CALL, asdict(log))
        return log.log_id

    def log_tool_call(
        self,
        tool_name: str,
        success: bool,
        latency_ms: float,
        error_type: Optional[str] = None,
        metadata: Optional[Dict] = None,
    ) -> str:
        log = ToolCallLog(
            log_id=self._generate_id("tool"),
            timestamp=self._get_timestamp(),
            category=LogCategory.TOOL_CALL.value,
            tool_name=tool_name,
            success=success,
            latency_ms=round(latency_ms, 2),
            error_type=error_type,
            session_id=self.session_id,
            metadata=metadata or {},
        )
        self._write_log(LogCategory.TOOL_CALL, asdict(log))
        return log.log_id

    def read_logs(
        self,
        category: LogCategory,
        limit: int = 100,
        session_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Read the most recent entries of one category."""
        log_file = self.log_files.get(category)
        if not log_file or not log_file.exists():
            return []

        logs = []
        with open(log_file, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                entry = json.loads(line)
                if session_id and entry.get("session_id") != session_id:
                    continue
                logs.append(entry)

        return logs[-limit:]
