import json
import logging
import time
import uuid
from typing import Any, Optional

logger = logging.getLogger("daily.ops")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


class LogContext:
    """Operation log for one HTTP action: what was asked, for which entry, how it ended."""

    def __init__(self, action: str):
        self.action = action
        self.request_id = str(uuid.uuid4())
        self.start = time.perf_counter()
        self.payload = None
        self.entity_id = None

    def set_entity(self, eid: str):
        self.entity_id = eid

    def set_payload(self, obj): self.payload = obj

    def record(self, result: str = "OK", err: Optional[str] = None) -> dict[str, Any]:
        elapsed_ms = int((time.perf_counter() - self.start) * 1000)
        return {
            "action": self.action,
            "entity_id": self.entity_id,
            "request_id": self.request_id,
            "payload_json": json.dumps(self.payload, ensure_ascii=False, default=str) if self.payload is not None else None,
            "result": result,
            "err_msg": err,
            "latency_ms": elapsed_ms,
        }

    def write(self, result: str = "OK", err: Optional[str] = None):
        rec = self.record(result, err)
        level = logging.INFO if result == "OK" else logging.ERROR
        logger.log(
            level,
            "%s %s entity=%s latency_ms=%d request_id=%s%s",
            rec["action"], rec["result"], rec["entity_id"], rec["latency_ms"], rec["request_id"],
            f" err={err}" if err else "",
        )
        return rec
