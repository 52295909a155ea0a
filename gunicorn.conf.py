"""
Gunicorn configuration for the Streakboard production server.

Tuned for single-instance containers.
Env vars that override defaults:
  PORT     — TCP port to bind
  WORKERS  — number of worker processes (default: 2)

Run with:  gunicorn -c gunicorn.conf.py streakboard.main:app
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '3000')}"

# Workers share nothing; the users table is the only shared state.
workers = int(os.environ.get("WORKERS", "2"))

# Each worker runs Uvicorn's ASGI event loop inside Gunicorn's process manager.
worker_class = "uvicorn.workers.UvicornWorker"

keepalive = 5

# Store calls are bounded by DB_STATEMENT_TIMEOUT_MS; anything slower is stuck.
timeout = 30

# stdout only; the platform collects it.
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

graceful_timeout = 30
