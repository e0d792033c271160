import pytest

from schedsim.algorithms import fcfs, round_robin
from schedsim.errors import UnknownAlgorithmError
from schedsim.metrics import compare_algorithms, compute_metrics
from schedsim.models import Process, SimulationResult


def test_averages_and_throughput():
    res = fcfs([Process(1, 0, 4), Process(2, 1, 3)])
    m = compute_metrics(res)
    assert m.avg_waiting_time == pytest.approx(1.5)
    assert m.avg_turnaround_time == pytest.approx(5.0)
    assert m.throughput == 2 / 7
    assert m.cpu_busy_time == 7
    assert m.cpu_utilization == pytest.approx(1.0)


def test_utilization_accounts_for_idle_time():
    res = fcfs([Process(1, 0, 2), Process(2, 5, 3)])
    m = compute_metrics(res)
    assert m.cpu_busy_time == 5
    assert m.cpu_utilization == pytest.approx(5 / 8)


def test_empty_result_has_zero_metrics():
    m = compute_metrics(SimulationResult(algorithm="FCFS"))
    assert (m.avg_waiting_time, m.avg_turnaround_time, m.throughput) == (0.0, 0.0, 0.0)


def test_rr_metrics():
    res = round_robin([Process(1, 0, 5), Process(2, 0, 5)], quantum=2)
    m = compute_metrics(res)
    # P1 finishes at 9 and P2 at 10.
    assert m.avg_turnaround_time == pytest.approx(9.5)
    assert m.avg_waiting_time == pytest.approx(4.5)
    assert m.throughput == pytest.approx(0.2)


def test_compare_runs_every_default_algorithm():
    procs = [
        Process(1, 0, 5, priority=2),
        Process(2, 1, 3, priority=1),
        Process(3, 2, 8, priority=3),
    ]
    rows = compare_algorithms(procs)
    assert [r.algorithm for r in rows] == [
        "FCFS",
        "SJF",
        "SRTF",
        "Round Robin",
        "Priority",
        "Priority (preemptive)",
    ]
    for row in rows:
        assert row.metrics.throughput == 3 / row.result.total_time
    assert rows[3].result.quantum == 2
    # Input records are left untouched for the caller.
    assert all(p.completion_time is None for p in procs)


def test_compare_subset_with_custom_quantum():
    rows = compare_algorithms([Process(1, 0, 4), Process(2, 0, 4)], ["rr", "fcfs"], quantum=4)
    assert [r.algorithm for r in rows] == ["Round Robin", "FCFS"]
    assert rows[0].metrics.avg_waiting_time == rows[1].metrics.avg_waiting_time


def test_compare_rejects_unknown_algorithm_before_running():
    with pytest.raises(UnknownAlgorithmError):
        compare_algorithms([Process(1, 0, 1)], ["fcfs", "nope"])
