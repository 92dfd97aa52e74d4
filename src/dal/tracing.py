import hashlib
from typing import Awaitable, Optional

from common.config.env import get_env_bool


def trace_enabled() -> bool:
    """Return True when driver operations should be traced with OTEL."""
    return bool(get_env_bool("LMR_TRACE_QUERIES", default=False))


def _hash_sql(sql: str) -> str:
    return hashlib.sha256(sql.encode("utf-8")).hexdigest()


async def trace_query_operation(
    name: str,
    backend: str,
    sql: Optional[str],
    operation: Awaitable,
):
    """Await ``operation`` inside an OTEL span when tracing is enabled."""
    if not trace_enabled():
        return await operation

    from opentelemetry import trace

    tracer = trace.get_tracer("lmr.dal")
    with tracer.start_as_current_span(name) as span:
        span.set_attribute("db.system", backend)
        if sql:
            span.set_attribute("db.statement_hash", _hash_sql(sql))
        try:
            result = await operation
            span.set_attribute("db.status", "ok")
            return result
        except Exception:
            span.set_attribute("db.status", "error")
            raise
