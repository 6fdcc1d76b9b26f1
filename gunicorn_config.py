# gunicorn_config.py
# Gunicorn + Uvicorn configuration

# Workers based on CPU cores (adjust to the server)
import multiprocessing
workers = multiprocessing.cpu_count() * 2 + 1

# Uvicorn worker
worker_class = 'uvicorn.workers.UvicornWorker'

# Uploads run OCR inside the request
timeout = 120

# Keep connections alive
keepalive = 5

# Listen address
bind = '0.0.0.0:8000'

# Log level
loglevel = 'info'

# Log files
accesslog = 'logs/gunicorn_access.log'
errorlog = 'logs/gunicorn_error.log'

# Request handling
worker_connections = 1000
max_requests = 1000
max_requests_jitter = 50
