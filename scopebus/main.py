"""Process-wide default bus — entry point for callers that share one registry."""

from __future__ import annotations

from scopebus.domain.bus import Publisher

# ── Singleton (created at import time, lives as long as the process) ──
publisher = Publisher()

once = publisher.once
publish = publisher.publish
subscribe = publisher.subscribe
unsubscribe = publisher.unsubscribe
