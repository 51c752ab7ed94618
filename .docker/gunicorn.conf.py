import multiprocessing
import os

# App factory; each worker builds its own app and Redis pool
wsgi_app = os.getenv("APP_MODULE", "tinyfeed.main:create_app()")

# Bind host/port (overridden by env BIND in Dockerfile if set)
bind = os.getenv("BIND", "0.0.0.0:8000")

# Worker class: uvicorn workers for FastAPI async support
worker_class = "uvicorn.workers.UvicornWorker"

# Feed writes are serialized in Redis, so any number of workers is safe
workers = int(os.getenv("WORKERS", str(multiprocessing.cpu_count() * 2)))

threads = 1

# Graceful timeouts
graceful_timeout = 30
timeout = 30
keepalive = 5

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Preload the app for faster worker startup
preload_app = True

# Max requests per worker (avoid memory leaks, rotate periodically)
max_requests = int(os.getenv("MAX_REQUESTS", "10000"))
max_requests_jitter = int(os.getenv("MAX_REQUESTS_JITTER", "1000"))

# Enable reuse of socket address
reuse_port = True
