bind = "127.0.0.1:8000"
# Each worker owns its own Firebase app.
workers = 1
worker_class = "uvicorn.workers.UvicornWorker"
wsgi_app = "fcm_tester.main:app"
timeout = 60
graceful_timeout = 30
keepalive = 5
loglevel = "info"
accesslog = "-"
errorlog = "-"
