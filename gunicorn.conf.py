# Gunicorn configuration file
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8080')}"

# The app is built by its factory
wsgi_app = "app:create_app()"

timeout = 30
graceful_timeout = 30

# Shift id allocation is serialized per process
workers = int(os.environ.get('WEB_CONCURRENCY', '1'))

worker_class = "sync"

# Logging
accesslog = "-"
errorlog = "-"
loglevel = "info"
