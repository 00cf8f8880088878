import random
from collections import Counter

import pytest

from config import SimulationConfig
from process import Process
from replacement import WSClockPolicy
from simulator import CPU, Kernel, MMU, VirtualMemorySimulator, format_event, main
from memory_manager import Event


def make_cpu(ttls, num_pages=4, num_frames=8):
    config = SimulationConfig()
    rng = random.Random(21)
    procs = [Process(pid, config, rng, num_pages=num_pages, ttl=ttl) for pid, ttl in enumerate(ttls)]
    kernel = Kernel(num_frames, WSClockPolicy())
    return CPU(MMU(kernel), procs), procs, kernel


class TestCPU:

    def test_idle_when_no_processes(self):
        cpu, _, kernel = make_cpu([])
        assert cpu.tick() is None
        assert kernel.stats.accesses == 0

    @pytest.mark.parametrize("ticks", [1, 7, 10, 30])
    def test_round_robin_fairness(self, ticks):
        cpu, procs, kernel = make_cpu([1000, 1000, 1000])
        turns = Counter(cpu.tick().pid for _ in range(ticks))
        for proc in procs:
            assert turns[proc.pid] in (ticks // 3, -(-ticks // 3))
        assert kernel.stats.accesses == ticks

    def test_ttl_expiry_terminates_without_access(self):
        cpu, procs, kernel = make_cpu([1])
        assert cpu.tick() is None
        assert cpu.processes == []
        assert kernel.stats.accesses == 0

    def test_pointer_stays_on_removal_in_middle(self):
        cpu, procs, _ = make_cpu([5, 1, 5])
        assert cpu.tick() is procs[0]
        assert cpu.tick() is None  # process 1 expires
        assert cpu.current == 1
        assert cpu.tick() is procs[2]
        assert cpu.tick() is procs[0]

    def test_pointer_wraps_on_removal_at_end(self):
        cpu, procs, _ = make_cpu([5, 2])
        assert cpu.tick() is procs[0]
        assert cpu.tick() is procs[1]
        assert cpu.tick() is procs[0]
        assert cpu.tick() is None  # process 1 expires
        assert cpu.current == 0
        assert cpu.tick() is procs[0]

    def test_termination_reclaims_frames(self):
        cpu, procs, kernel = make_cpu([3, 1000])
        for _ in range(4):
            cpu.tick()
        assert kernel.physical_memory.frames_owned_by(0)
        assert cpu.tick() is None  # process 0 expires
        assert kernel.physical_memory.frames_owned_by(0) == []
        assert 0 not in kernel.page_tables
        kernel.check_consistency()


class TestProcess:

    def test_small_space_is_whole_working_set(self):
        proc = Process(0, SimulationConfig(working_set_size=12), random.Random(1), num_pages=5)
        assert sorted(proc.working_set) == [0, 1, 2, 3, 4]

    def test_large_space_samples_distinct_pages(self):
        proc = Process(0, SimulationConfig(working_set_size=12), random.Random(1), num_pages=40)
        assert len(proc.working_set) == 12
        assert len(set(proc.working_set)) == 12
        assert all(0 <= vpn < 40 for vpn in proc.working_set)

    def test_work_stays_in_range(self):
        proc = Process(0, SimulationConfig(), random.Random(2), num_pages=20)
        for _ in range(500):
            vpn, is_write = proc.work()
            assert 0 <= vpn < 20
            assert isinstance(is_write, bool)

    def test_random_sizes_respect_bounds(self):
        config = SimulationConfig(max_virtual_pages=8, total_ticks=50)
        rng = random.Random(4)
        for pid in range(50):
            proc = Process(pid, config, rng)
            assert 1 <= proc.num_pages <= 8
            assert 1 <= proc.ttl <= 50


class TestConfig:

    def test_defaults(self):
        config = SimulationConfig()
        assert config.num_frames == 32
        assert config.max_virtual_pages == 48
        assert config.policy == 'wsclock'

    @pytest.mark.parametrize("kwargs", [
        {'num_frames': 0},
        {'max_virtual_pages': 0},
        {'policy': 'fifo'},
        {'total_ticks': 0},
        {'num_processes': -1},
        {'working_set_size': 0},
        {'locality': 1.5},
        {'write_probability': -0.1},
    ])
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ValueError):
            SimulationConfig(**kwargs)

    def test_cli_rejects_zero_frames(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(['-n', '0'])
        assert excinfo.value.code == 2
        assert 'error' in capsys.readouterr().err

    def test_cli_rejects_unknown_algorithm(self):
        with pytest.raises(SystemExit) as excinfo:
            main(['-a', 'lru'])
        assert excinfo.value.code == 2


class TestSimulation:

    @pytest.mark.parametrize("policy", ['random', 'wsclock'])
    def test_consistent_after_every_tick(self, policy):
        config = SimulationConfig(num_frames=6, policy=policy, num_processes=4,
                                  total_ticks=400, max_virtual_pages=16, seed=123)
        sim = VirtualMemorySimulator(config)
        for tick in range(config.total_ticks + 1):
            sim.step(tick)
            sim.kernel.check_consistency()
        assert sim.stats.page_faults <= sim.stats.accesses
        assert sim.kernel.physical_memory.used_frames() <= config.num_frames

    @pytest.mark.parametrize("policy", ['random', 'wsclock'])
    def test_seeded_runs_are_reproducible(self, policy, capsys):
        config = SimulationConfig(num_frames=8, policy=policy, seed=99, total_ticks=300)
        first = VirtualMemorySimulator(config).run()
        second = VirtualMemorySimulator(config).run()
        assert (first.page_faults, first.accesses, first.write_backs) == \
            (second.page_faults, second.accesses, second.write_backs)
        assert 'Page Faults' in capsys.readouterr().out

    def test_system_ticks_skip_user_work(self):
        config = SimulationConfig(num_processes=1, total_ticks=9, system_tick_interval=10, seed=5)
        sim = VirtualMemorySimulator(config)
        sim.processes[0].ttl = 1000
        for tick in range(10):
            sim.step(tick)
        # tick 0 is a system tick
        assert sim.stats.accesses == 9

    def test_verbose_prints_events(self, capsys):
        config = SimulationConfig(num_frames=1, num_processes=2, total_ticks=40, seed=8)
        sim = VirtualMemorySimulator(config, verbose=True)
        for proc in sim.processes:
            proc.ttl = 1000
        sim.run()
        out = capsys.readouterr().out
        assert 'PAGE FAULT' in out
        assert 'Mapped' in out
        assert 'No free physical pages, selecting a page to evict.' in out
        assert 'WSClock: check PPN' in out
        assert 'Selected victim PPN' in out

    def test_format_event(self):
        assert format_event(Event('inspect', 0, 3, 2, (True, False))) == "WSClock: check PPN 2 (R=True, M=False)"
        assert format_event(Event('victim', 0, 3, 2)) == "Selected victim PPN 2"
        assert format_event(Event('evict', 1, 4, 0)) == "Evicting: Process 1, VPN 4 from PPN 0"
        assert format_event(Event('terminate', 2, None, None)) == "Process 2 frames reclaimed"
