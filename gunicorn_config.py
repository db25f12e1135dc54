"""
Конфигурация Gunicorn для production API шлюза.
Бот запускается отдельным процессом: python -m backend.bot.main

gunicorn -c gunicorn_config.py backend.app.main:app
"""

import multiprocessing
import os
from pathlib import Path

from backend.app.config import settings

# Корзины в SQLite: воркеров немного, каждый держит своё соединение
workers = int(os.getenv("WEB_CONCURRENCY", min(multiprocessing.cpu_count() + 1, 4)))
worker_class = "uvicorn.workers.UvicornWorker"

bind = f"{settings.HOST}:{settings.PORT}"

log_dir = Path(__file__).parent / "logs"
log_dir.mkdir(exist_ok=True)

accesslog = str(log_dir / "access.log")
errorlog = str(log_dir / "error.log")
loglevel = settings.LOG_LEVEL.lower()

# Запрос к бэкенду ограничен API_TIMEOUT
timeout = int(settings.API_TIMEOUT * 3) + 30
graceful_timeout = 30
keepalive = 5

max_requests = 1000
max_requests_jitter = 50

capture_output = True
