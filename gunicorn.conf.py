import multiprocessing
import os
from pathlib import Path

_BASE_DIR = Path(__file__).resolve().parent
_LOG_DIR = Path(os.getenv('GUNICORN_LOG_DIR', _BASE_DIR / 'logs'))
_LOG_DIR.mkdir(exist_ok=True)

# Server socket
bind = os.getenv('GUNICORN_BIND', '0.0.0.0:8000')
backlog = 1024

# Worker processes. Checkout confirmation sleeps for the simulated gateway
# delay, so threads keep a slow confirm from blocking a whole worker.
workers = int(os.getenv('GUNICORN_WORKERS', multiprocessing.cpu_count() * 2 + 1))
worker_class = 'gthread'
threads = int(os.getenv('GUNICORN_THREADS', 4))
timeout = 30
keepalive = 2

max_requests = 1000
max_requests_jitter = 50

# Logging
errorlog = str(_LOG_DIR / 'gunicorn_error.log')
loglevel = os.getenv('GUNICORN_LOG_LEVEL', 'info')
accesslog = str(_LOG_DIR / 'gunicorn_access.log')
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s %(L)s "%(a)s"'

proc_name = 'shutterdesk'

daemon = False
pidfile = str(_BASE_DIR / 'gunicorn.pid')
