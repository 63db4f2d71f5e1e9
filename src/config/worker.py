from celery import Celery
from kombu import Queue

from config.app_vars import RABBIT_URL

cel_app = Celery("cargo-tasks", broker=RABBIT_URL, include=["tasks"])

cel_app.conf.task_queues = [
    Queue("shipment-queue", exchange="shipment_queue_exchange", routing_key="shipment_queue"),
]

cel_app.conf.task_default_queue = "shipment-queue"
cel_app.autodiscover_tasks()
