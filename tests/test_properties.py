from dataclasses import asdict

import pytest

from schedsim.algorithms import ALGORITHMS, run_algorithm
from schedsim.metrics import compute_metrics
from schedsim.models import Process


def _workload():
    # Ties on arrival, burst and priority plus an idle gap before the last pair.
    return [
        Process(1, arrival_time=0, burst_time=7, priority=3),
        Process(2, arrival_time=2, burst_time=4, priority=1),
        Process(3, arrival_time=4, burst_time=1, priority=4),
        Process(4, arrival_time=5, burst_time=4, priority=2),
        Process(5, arrival_time=30, burst_time=3, priority=0),
        Process(6, arrival_time=30, burst_time=2, priority=0),
    ]


@pytest.fixture(params=sorted(ALGORITHMS))
def algorithm(request):
    return request.param


def _run(name, processes):
    return run_algorithm(name, processes, quantum=3)


def test_cpu_time_is_conserved(algorithm):
    res = _run(algorithm, _workload())
    assert sum(i.duration for i in res.gantt_chart) == sum(p.burst_time for p in _workload())


def test_every_process_completes_once(algorithm):
    res = _run(algorithm, _workload())
    assert sorted(p.pid for p in res.processes) == [1, 2, 3, 4, 5, 6]
    for p in res.processes:
        assert p.is_complete
        assert p.remaining_time == 0
        assert p.turnaround_time == p.completion_time - p.arrival_time
        assert p.waiting_time == p.turnaround_time - p.burst_time


def test_times_are_non_negative(algorithm):
    res = _run(algorithm, _workload())
    for p in res.processes:
        assert p.waiting_time >= 0
        assert p.turnaround_time >= p.burst_time
        assert p.completion_time >= p.arrival_time + p.burst_time


def test_timeline_is_ordered_and_coalesced(algorithm):
    res = _run(algorithm, _workload())
    chart = res.gantt_chart
    for prev, nxt in zip(chart, chart[1:]):
        assert nxt.start_time >= prev.end_time
        if nxt.start_time == prev.end_time:
            assert nxt.pid != prev.pid
    # The idle span between t=16 and t=30 is simply absent.
    assert all(not (16 < i.start_time < 30) for i in chart)
    assert res.total_time == chart[-1].end_time == max(p.completion_time for p in res.processes)


def test_processes_returned_in_arrival_order(algorithm):
    res = _run(algorithm, _workload())
    assert [p.pid for p in res.processes] == [1, 2, 3, 4, 5, 6]


def test_input_is_not_mutated(algorithm):
    procs = _workload()
    _run(algorithm, procs)
    assert procs == _workload()
    assert all(p.completion_time is None and p.remaining_time == p.burst_time for p in procs)


def test_resimulation_is_identical(algorithm):
    first = _run(algorithm, _workload())
    second = _run(algorithm, _workload())
    assert asdict(first) == asdict(second)


def test_same_input_can_be_reused_across_algorithms():
    procs = _workload()
    expected = {name: asdict(_run(name, _workload())) for name in ALGORITHMS}
    for name in reversed(list(ALGORITHMS)):
        assert asdict(_run(name, procs)) == expected[name]


def test_throughput_matches_total_time(algorithm):
    res = _run(algorithm, _workload())
    assert compute_metrics(res).throughput == len(res.processes) / res.total_time


def test_empty_input_gives_empty_result(algorithm):
    res = _run(algorithm, [])
    assert res.processes == []
    assert res.gantt_chart == []
    assert res.total_time == 0
