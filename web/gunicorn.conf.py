import os

# Bind and process model
bind = os.getenv("GUNI_BIND", "0.0.0.0:3000")
wsgi_app = "config.wsgi:application"
workers = int(os.getenv("GUNI_WORKERS", str(min(max(2, (os.cpu_count() or 1) * 2), 8))))

# Threads per worker (blocking DB IO)
worker_class = "gthread"
threads = int(os.getenv("GTHREADS", "4"))

# Timeouts
timeout = int(os.getenv("GUNI_TIMEOUT", "30"))
graceful_timeout = int(os.getenv("GUNI_GRACEFUL_TIMEOUT", "30"))
keepalive = int(os.getenv("GUNI_KEEPALIVE", "5"))

# Recycle workers now and then
preload_app = True
max_requests = int(os.getenv("GUNI_MAX_REQUESTS", "2000"))
max_requests_jitter = int(os.getenv("GUNI_MAX_REQUESTS_JITTER", "200"))

# Access/error logs to stdout; app logs are JSON via settings.LOGGING
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info")
