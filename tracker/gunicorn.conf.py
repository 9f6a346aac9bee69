"""
Gunicorn configuration for production deployment.

Usage:
    gunicorn -c tracker/gunicorn.conf.py tracker.api_server:app
"""

import multiprocessing
import os

# Server socket
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8080")
backlog = 2048

# Threaded sync workers; password hashing is CPU bound
workers = int(os.getenv("GUNICORN_WORKERS", multiprocessing.cpu_count() + 1))
worker_class = "gthread"
threads = int(os.getenv("GUNICORN_THREADS", 4))
timeout = 60
keepalive = 5

# Graceful restart
graceful_timeout = 30
max_requests = 1000
max_requests_jitter = 50

# Logging (application logs are JSON via tracker.logging_config)
accesslog = None
errorlog = "-"
loglevel = os.getenv("GUNICORN_LOG_LEVEL", "info")

# Process naming
proc_name = "bugtrack-api"

# Security
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190

# Fail in the master, not in every worker, when secrets are missing
preload_app = True
