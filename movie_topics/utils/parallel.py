"""Parallel processing utilities for independent batch tasks."""

import logging
import os
from concurrent.futures import ProcessPoolExecutor
from typing import Any, Callable, Dict, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ParallelProcessor:
    """
    Manages parallel processing with ProcessPoolExecutor.

    Follows project pattern:
    - ProcessPoolExecutor with optional initializer function
    - max_tasks_per_child=50 for memory management
    - Results returned in input order
    - A task that raises becomes an error record instead of aborting the batch

    Usage:
        def worker_func(item):
            # Must be a module-level function (pickled into the worker)
            return {'status': 'success', 'value': item * 2}

        processor = ParallelProcessor(max_workers=4)
        results = processor.process_batch(items=[1, 2, 3], worker_func=worker_func)
    """

    def __init__(
        self,
        max_workers: Optional[int] = None,
        initializer: Optional[Callable] = None,
        max_tasks_per_child: int = 50,
    ):
        """
        Initialize parallel processor.

        Args:
            max_workers: Number of parallel workers (default: auto-determine,
                1 means sequential)
            initializer: Optional initialization function for workers
            max_tasks_per_child: Restart workers after N tasks (default: 50)
        """
        self.max_workers = max_workers
        self.initializer = initializer
        self.max_tasks_per_child = max_tasks_per_child

    def should_use_parallel(self, num_items: int, max_workers: Optional[int] = None) -> bool:
        """
        Determine if parallel processing is beneficial.

        Args:
            num_items: Number of items to process
            max_workers: Max workers requested (None or 1 means sequential)

        Returns:
            True if should use parallel processing
        """
        return max_workers is not None and max_workers > 1 and num_items > 1

    def process_batch(
        self,
        items: List[T],
        worker_func: Callable[[T], Dict[str, Any]],
        progress_callback: Optional[Callable[[int, Dict[str, Any]], None]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Apply worker_func to every item.

        Args:
            items: List of items to process
            worker_func: Function to apply to each item; returns a dict with
                at least a 'status' key
            progress_callback: Optional callback for progress updates
                (receives completed count, result)

        Returns:
            List of results from worker_func, in the same order as items
        """
        # Auto-determine max_workers
        if self.max_workers is None:
            max_workers = min(os.cpu_count() or 4, len(items))
        else:
            max_workers = self.max_workers

        # Sequential processing if requested or single item
        if not self.should_use_parallel(len(items), max_workers):
            return self._process_sequential(items, worker_func, progress_callback)

        # Parallel processing
        return self._process_parallel(items, worker_func, progress_callback, max_workers)

    def _process_sequential(
        self,
        items: List[T],
        worker_func: Callable,
        progress_callback: Optional[Callable],
    ) -> List[Dict[str, Any]]:
        """Process items sequentially; a failed task becomes an error record."""
        if self.initializer is not None:
            self.initializer()

        results = []
        failed_count = 0

        for idx, item in enumerate(items, 1):
            try:
                result = worker_func(item)
            except Exception as e:
                logger.error(f"Task {idx - 1} failed with exception: {e}")
                result = {
                    'status': 'error',
                    'index': idx - 1,
                    'error': str(e),
                    'error_type': 'exception'
                }
                failed_count += 1

            results.append(result)
            self._log_progress(idx, len(items), result)

            if progress_callback:
                progress_callback(idx, result)

        if failed_count:
            logger.warning(f"{failed_count}/{len(items)} tasks failed")

        return results

    def _process_parallel(
        self,
        items: List[T],
        worker_func: Callable,
        progress_callback: Optional[Callable],
        max_workers: int,
    ) -> List[Dict[str, Any]]:
        """Process items in parallel; a failed task becomes an error record."""
        results: List[Optional[Dict[str, Any]]] = [None] * len(items)
        failed_count = 0

        logger.info(f"Processing {len(items)} items with {max_workers} workers")

        with ProcessPoolExecutor(
            max_workers=max_workers,
            initializer=self.initializer,
            max_tasks_per_child=self.max_tasks_per_child
        ) as executor:
            futures = [executor.submit(worker_func, item) for item in items]

            for completed_count, (index, future) in enumerate(enumerate(futures), 1):
                try:
                    result = future.result()
                except Exception as e:
                    logger.error(f"Task {index} failed with exception: {e}")
                    result = {
                        'status': 'error',
                        'index': index,
                        'error': str(e),
                        'error_type': 'exception'
                    }
                    failed_count += 1

                results[index] = result
                self._log_progress(completed_count, len(items), result)

                if progress_callback:
                    progress_callback(completed_count, result)

        if failed_count:
            logger.warning(f"{failed_count}/{len(items)} tasks failed")

        return results

    @staticmethod
    def _log_progress(done: int, total: int, result: Dict[str, Any]) -> None:
        status = result.get('status', 'unknown')
        label = result.get('label', '')
        logger.info(f"[{done}/{total}] {status.upper()}: {label}")
