"""Unit tests for movie_topics/utils/parallel.py - ParallelProcessor ordering and error handling."""

import pytest

from movie_topics.utils import ParallelProcessor


def _double(item):
    """Module-level worker so it can be pickled into a process pool."""
    return {'status': 'success', 'label': str(item), 'value': item * 2}


def _fail_on_three(item):
    if item == 3:
        raise RuntimeError("boom")
    return {'status': 'success', 'label': str(item), 'value': item}


class TestShouldUseParallel:
    @pytest.mark.parametrize("num_items,max_workers,expected", [
        (10, 4, True),
        (10, 1, False),
        (10, None, False),
        (1, 4, False),
    ])
    def test_decision(self, num_items, max_workers, expected):
        assert ParallelProcessor().should_use_parallel(num_items, max_workers) is expected


class TestSequential:
    def test_results_in_input_order(self):
        results = ParallelProcessor(max_workers=1).process_batch([3, 1, 2], _double)
        assert [r['value'] for r in results] == [6, 2, 4]

    def test_failed_task_becomes_error_record(self):
        results = ParallelProcessor(max_workers=1).process_batch([1, 3, 5], _fail_on_three)

        assert [r['status'] for r in results] == ['success', 'error', 'success']
        assert results[1]['index'] == 1
        assert results[1]['error'] == "boom"

    def test_initializer_called(self):
        calls = []
        ParallelProcessor(max_workers=1, initializer=lambda: calls.append(1)).process_batch([1], _double)
        assert calls == [1]

    def test_progress_callback(self):
        seen = []
        ParallelProcessor(max_workers=1).process_batch(
            [1, 2], _double, progress_callback=lambda done, result: seen.append((done, result['value']))
        )
        assert seen == [(1, 2), (2, 4)]

    def test_empty_batch(self):
        assert ParallelProcessor(max_workers=1).process_batch([], _double) == []


class TestParallel:
    def test_results_in_input_order(self):
        items = [5, 4, 3, 2, 1]
        results = ParallelProcessor(max_workers=2).process_batch(items, _double)
        assert [r['value'] for r in results] == [10, 8, 6, 4, 2]

    def test_failed_task_becomes_error_record(self):
        results = ParallelProcessor(max_workers=2).process_batch([1, 3, 5], _fail_on_three)

        assert [r['status'] for r in results] == ['success', 'error', 'success']
        assert results[1]['index'] == 1
        assert "boom" in results[1]['error']
