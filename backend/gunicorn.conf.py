import os

# Bind & workers
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
# The data store lives in process memory: a second worker would see other data
workers = 1
threads = int(os.getenv("GUNICORN_THREADS", "4"))
timeout = 60
graceful_timeout = 30
keepalive = 5

wsgi_app = "blogapi:create_app()"

# Logs to stdout/stderr
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Honour proxy headers
forwarded_allow_ips = "*"
proxy_protocol = False
