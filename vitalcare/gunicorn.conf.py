"""Gunicorn settings for VitalCare, driven by environment variables.

    gunicorn -c vitalcare/gunicorn.conf.py vitalcare.wsgi:app
"""

from __future__ import annotations

import logging
import multiprocessing
import os

bind = os.environ.get("GUNICORN_BIND", "0.0.0.0:8000")
worker_class = os.environ.get("GUNICORN_WORKER_CLASS", "gthread")
workers = int(os.environ.get("GUNICORN_WORKERS", str(multiprocessing.cpu_count() * 2 + 1)))
threads = int(os.environ.get("GUNICORN_THREADS", "4"))
max_requests = int(os.environ.get("GUNICORN_MAX_REQUESTS", "10000"))
max_requests_jitter = int(os.environ.get("GUNICORN_MAX_REQUESTS_JITTER", "1000"))

# Places lookups are the slowest upstream call; keep above PLACES_TIMEOUT_SECONDS.
timeout = int(os.environ.get("GUNICORN_TIMEOUT", "30"))
graceful_timeout = int(os.environ.get("GUNICORN_GRACEFUL_TIMEOUT", "30"))
keepalive = int(os.environ.get("GUNICORN_KEEPALIVE", "5"))

accesslog = os.environ.get("GUNICORN_ACCESSLOG", "-")
errorlog = os.environ.get("GUNICORN_ERRORLOG", "-")
loglevel = os.environ.get("GUNICORN_LOGLEVEL", "info")
capture_output = True
access_log_format = os.environ.get(
    "GUNICORN_ACCESS_LOG_FORMAT",
    '{"timestamp": "%(t)s", "remote": "%(h)s", "request": "%(r)s", '
    '"status": %(s)s, "bytes": %(b)s, "response_time": %(D)s, "pid": %(p)s}',
)

limit_request_line = int(os.environ.get("GUNICORN_LIMIT_REQUEST_LINE", "8190"))
limit_request_fields = int(os.environ.get("GUNICORN_LIMIT_REQUEST_FIELDS", "100"))
forwarded_allow_ips = os.environ.get("GUNICORN_FORWARDED_ALLOW_IPS", "127.0.0.1")
preload_app = os.environ.get("GUNICORN_PRELOAD", "false").lower() in ("1", "true", "yes")
proc_name = os.environ.get("GUNICORN_PROC_NAME", "vitalcare")


def when_ready(server):
    logging.getLogger(__name__).info(
        "Gunicorn ready on %s (workers=%s, threads=%s, timeout=%ss)", bind, workers, threads, timeout
    )


def worker_abort(worker):
    logging.getLogger(__name__).warning("Worker %s timed out (>%ss), aborting", worker.pid, timeout)
