"""Fan-out dispatch pipeline: batching, worker pool, batch processing."""

from fanfare.core.batch_processor import BatchProcessor
from fanfare.core.batching import split_into_batches
from fanfare.core.orchestrator import NotificationOrchestrator
from fanfare.core.production_guard import ProductionConfigError, enforce_production_constraints
from fanfare.core.status import determine_final_status
from fanfare.core.worker_pool import BoundedWorkerPool, PoolSaturatedError, PoolShutdownError

__all__ = [
    "NotificationOrchestrator",
    "BatchProcessor",
    "BoundedWorkerPool",
    "PoolSaturatedError",
    "PoolShutdownError",
    "split_into_batches",
    "determine_final_status",
    "enforce_production_constraints",
    "ProductionConfigError",
]
