# gunicorn.conf.py
import os
import logging
import sys
import multiprocessing

# Configure logging to stdout
accesslog = '-'
errorlog = '-'
loglevel = os.getenv('LOG_LEVEL', 'info').lower()

# Get PORT from environment or use default
port = os.getenv('PORT', '8080')
bind = f"0.0.0.0:{port}"

# Requests are short database reads, keep the pool small
cores = multiprocessing.cpu_count()
workers = min(cores * 2 + 1, 4)
threads = 2

def on_starting(server):
    logger = logging.getLogger('gunicorn.error')
    logger.setLevel(logging.INFO)
    logger.addHandler(logging.StreamHandler(sys.stdout))
    logger.info(f"Starting gunicorn with {workers} workers on port {port}")

timeout = 30
keepalive = 5
worker_class = "sync"

# Process naming
proc_name = "scripture_api"
default_proc_name = "scripture_api"

# Graceful server restart
graceful_timeout = 30
