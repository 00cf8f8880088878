import random

from config import SimulationConfig
from process import Process
from replacement import RandomPolicy
from simulator import Kernel, MMU


class FirstFrameRng:
    """Stands in for random.Random: always chooses frame 0."""

    def randrange(self, stop):
        return 0


def test_small():
    config = SimulationConfig(num_frames=2, policy='random')
    proc = Process(0, config, random.Random(0), num_pages=3, ttl=100)
    kernel = Kernel(config.num_frames, RandomPolicy(FirstFrameRng()))
    mmu = MMU(kernel)

    frames = [mmu.access(proc, vpn, False) for vpn in [0, 1, 2, 0]]
    kernel.check_consistency()

    # first touch of 0 and 1, 2 evicts 0, 0 comes back evicting 2
    assert kernel.stats.page_faults == 4
    assert kernel.stats.accesses == 4
    assert kernel.stats.evictions == 2
    assert frames == [0, 1, 0, 0]
    assert proc.page_table.present_pages() == [0, 1]
    assert not proc.page_table.get_entry(2).present


def test_small_hits_do_not_fault():
    config = SimulationConfig(num_frames=2, policy='random')
    proc = Process(0, config, random.Random(0), num_pages=3, ttl=100)
    kernel = Kernel(config.num_frames, RandomPolicy(FirstFrameRng()))
    mmu = MMU(kernel)

    for vpn in [0, 1, 0, 1, 1, 0]:
        mmu.access(proc, vpn, False)

    assert kernel.stats.page_faults == 2
    assert kernel.stats.accesses == 6
    assert kernel.stats.fault_rate == 2 / 6
