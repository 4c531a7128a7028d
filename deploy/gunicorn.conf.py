"""Gunicorn configuration for the Indy block service.

Usage:
    gunicorn main:app -c deploy/gunicorn.conf.py

Block-store sessions are held in process memory, so the default is a single
async worker; raise ``WORKERS`` only behind sticky session routing.
"""

import os

# ─── Server socket ──────────────────────────────────────────────

bind = os.getenv("BIND", "0.0.0.0:3001")
backlog = 2048

# ─── Worker processes ───────────────────────────────────────────

workers = int(os.getenv("WORKERS", 1))
worker_class = "uvicorn.workers.UvicornWorker"

# ─── Timeouts ───────────────────────────────────────────────────
#
# One model call per request, capped by LLM_REQUEST_TIMEOUT (30s default).

timeout = 90
graceful_timeout = 30
keepalive = 5

# ─── Logging ────────────────────────────────────────────────────

accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info")
access_log_format = '%(h)s %(t)s "%(r)s" %(s)s %(b)s %(D)sμs'

proc_name = "indy-block-service"


def on_starting(server):
    server.log.info(
        "Starting Indy block service (workers=%d, timeout=%ds, bind=%s)",
        workers, timeout, bind,
    )


def worker_exit(server, worker):
    server.log.info("Worker exit (pid: %s)", worker.pid)
