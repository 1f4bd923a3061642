"""Example hashing server using HashFort.

Exposes the full HTTP surface:
  - POST /hash, /verify, /batch-hash
  - GET /, /config, /health

Run:  uvicorn main:app --port 8000
"""

import logging
import os
import sys

from hashfort import HashFort, RateLimitConfig

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)

hf = HashFort(
    # --- Resource bounds ---
    # Each Argon2 call may use up to 1 GiB with the default limits, so keep the
    # worker pool small enough for the host's memory.
    max_workers=int(os.environ.get("HASHFORT_MAX_WORKERS", "2")),
    hash_timeout=float(os.environ.get("HASHFORT_HASH_TIMEOUT", "30")),
    # --- Per-IP rate limits (batch requests cost one unit per password) ---
    rate_limit=RateLimitConfig(hash="30/min", verify="60/min", batch_hash="200/min"),
    # trust_proxy=True,  # read client IPs from X-Forwarded-For behind a reverse proxy
)


# ---------------------------------------------------------------------------
# Event hooks — audit logs, metrics, alerting.
# Errors raised here are logged and never affect the response.
# ---------------------------------------------------------------------------


@hf.on("batch_processed")
async def on_batch(event):
    print(f"[hook] Batch: {event.succeeded}/{event.total} hashed, {event.failed} failed")


@hf.on("engine_failed")
async def on_engine_failed(event):
    print(f"[hook] Engine {event.operation} failed: {event.reason}")


@hf.on("rate_limit_exceeded")
async def on_rate_limited(event):
    print(f"[hook] Rate limited: {event.ip_address} on {event.endpoint} ({event.limit})")


app = hf.create_app(title="HashFort Example Server")
