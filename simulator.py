from config import SimulationConfig
from memory_manager import Event, PhysicalMemory, Statistics
from process import Process
from replacement import POLICIES, make_policy
import argparse
import random
import sys


class Kernel:
    """Page fault handler: owns the frame table and the replacement policy."""

    def __init__(self, num_frames, policy, stats=None, listener=None):
        self.physical_memory = PhysicalMemory(num_frames=num_frames)
        self.policy = policy
        self.stats = stats if stats is not None else Statistics()
        self.listener = listener
        self.page_tables = {}  # process_id -> PageTable

    def emit(self, kind, process_id, vpn=None, frame=None, detail=None):
        if self.listener is not None:
            self.listener(Event(kind, process_id, vpn, frame, detail))

    def register(self, process):
        self.page_tables[process.pid] = process.page_table

    def handle_page_fault(self, process, page_num):
        entry = process.page_table.get_entry(page_num)
        if entry.present:
            raise RuntimeError(
                f"Page fault on resident page: process {process.pid}, VPN {page_num} in PPN {entry.frame}")
        self.stats.record_page_fault()
        if process.pid not in self.page_tables:
            self.register(process)

        frame_num = self.physical_memory.find_free_frame()
        if frame_num is None:
            self.emit('no_free', process.pid, page_num)
            frame_num = self.policy.pick(self.physical_memory, self.page_tables,
                                         on_write_back=self.write_back, on_inspect=self.inspect)
            self.emit('victim', process.pid, page_num, frame_num)
            self.evict(frame_num)

        self.physical_memory.allocate_frame(frame_num, process.pid, page_num)
        entry.map(frame_num)
        self.emit('map', process.pid, page_num, frame_num)
        return frame_num

    def write_back(self, proc_id, vpage_num, frame_num):
        # no real disk: the write only shows up in the counters
        self.stats.record_write_back()
        self.emit('write_back', proc_id, vpage_num, frame_num)

    def inspect(self, proc_id, vpage_num, frame_num, referenced, modified):
        self.emit('inspect', proc_id, vpage_num, frame_num, detail=(referenced, modified))

    def evict(self, frame_num):
        if self.physical_memory.is_free(frame_num):
            raise RuntimeError(f"Cannot evict free frame {frame_num}")
        proc_id, vpage_num = self.physical_memory.get_frame_info(frame_num)
        self.page_tables[proc_id].get_entry(vpage_num).clear()
        self.physical_memory.free_frame(frame_num)
        self.stats.record_eviction()
        self.emit('evict', proc_id, vpage_num, frame_num)
        return proc_id, vpage_num

    def reclaim(self, process):
        freed = self.physical_memory.frames_owned_by(process.pid)
        for frame_num in freed:
            _, vpage_num = self.physical_memory.get_frame_info(frame_num)
            process.page_table.get_entry(vpage_num).clear()
            self.physical_memory.free_frame(frame_num)
        self.page_tables.pop(process.pid, None)
        self.emit('terminate', process.pid)
        return freed

    def check_consistency(self):
        """
        Verify that resident pages and occupied frames map one to one.
        :return: None
        :raises AssertionError: naming the first mismatch
        """
        for frame_num, frame_info in enumerate(self.physical_memory.frames):
            if frame_info is None:
                continue
            proc_id, vpage_num = frame_info
            if proc_id not in self.page_tables:
                raise AssertionError(f"frame {frame_num} owned by unknown process {proc_id}")
            entry = self.page_tables[proc_id].get_entry(vpage_num)
            if not entry.present or entry.frame != frame_num:
                raise AssertionError(f"frame {frame_num} -> ({proc_id}, {vpage_num}) but entry is {entry!r}")

        for proc_id, page_table in self.page_tables.items():
            for entry in page_table.entries:
                if entry.present:
                    if entry.frame is None:
                        raise AssertionError(f"process {proc_id}: {entry!r} present without frame")
                    if self.physical_memory.get_frame_info(entry.frame) != (proc_id, entry.virtual_page_num):
                        raise AssertionError(f"process {proc_id}: {entry!r} not backed by its frame")
                elif entry.frame is not None or entry.referenced or entry.modified:
                    raise AssertionError(f"process {proc_id}: stale bits on {entry!r}")


class MMU:
    def __init__(self, kernel):
        self.kernel = kernel

    def access(self, process, page_num, write):
        self.kernel.stats.record_access()
        entry = process.page_table.get_entry(page_num)

        if not entry.present:
            self.kernel.emit('fault', process.pid, page_num)
            self.kernel.handle_page_fault(process, page_num)

        entry.referenced = True
        if write:
            entry.modified = True
        return entry.frame


class CPU:
    def __init__(self, mmu, processes=None, verbose=False):
        self.mmu = mmu
        self.processes = []
        self.current = 0
        self.verbose = verbose
        if processes:
            self.add_processes(processes)

    def add_processes(self, processes):
        for proc in processes:
            self.mmu.kernel.register(proc)
            self.processes.append(proc)

    def tick(self):
        """Run one time slice; returns the process that accessed memory, if any."""
        if not self.processes:
            if self.verbose:
                print("No processes left. CPU idle.")
            return None

        proc = self.processes[self.current]
        proc.ttl -= 1

        if proc.ttl < 1:
            if self.verbose:
                print(f"Process {proc.pid} terminated.")
            self.processes.pop(self.current)
            self.mmu.kernel.reclaim(proc)
            if self.current >= len(self.processes):
                self.current = 0
            return None

        page_num, write = proc.work()
        if self.verbose:
            print(f"Process {proc.pid} accessing page {page_num} {'(write)' if write else '(read)'}. "
                  f"TTL left: {proc.ttl}")
        self.mmu.access(proc, page_num, write)

        self.current = (self.current + 1) % len(self.processes)
        return proc

    def run_system_processes(self):
        if self.verbose:
            print("Running system processes...")


def format_event(event):
    if event.kind == 'fault':
        return f"PAGE FAULT: Process {event.process_id}, VPN {event.vpn}"
    if event.kind == 'no_free':
        return "No free physical pages, selecting a page to evict."
    if event.kind == 'inspect':
        referenced, modified = event.detail
        return f"WSClock: check PPN {event.frame} (R={referenced}, M={modified})"
    if event.kind == 'victim':
        return f"Selected victim PPN {event.frame}"
    if event.kind == 'evict':
        return f"Evicting: Process {event.process_id}, VPN {event.vpn} from PPN {event.frame}"
    if event.kind == 'write_back':
        return f"WSClock: write-back simulated for Process {event.process_id}, VPN {event.vpn}"
    if event.kind == 'map':
        return f"Mapped: Process {event.process_id}, VPN {event.vpn} -> PPN {event.frame}"
    return f"Process {event.process_id} frames reclaimed"


class VirtualMemorySimulator:

    def __init__(self, config, verbose=False):
        self.config = config
        self.verbose = verbose
        self.rng = random.Random(config.seed)
        self.stats = Statistics()
        listener = (lambda event: print(format_event(event))) if verbose else None
        policy = make_policy(config.policy, rng=self.rng)
        self.kernel = Kernel(config.num_frames, policy, stats=self.stats, listener=listener)
        self.mmu = MMU(self.kernel)
        self.processes = [Process(pid, config, self.rng) for pid in range(config.num_processes)]
        self.cpu = CPU(self.mmu, self.processes, verbose=verbose)

    def step(self, tick):
        if tick % self.config.working_set_interval == 0:
            for proc in self.cpu.processes:
                proc.update_working_set()
                if self.verbose:
                    print(f"Process {proc.pid} updated working set: {sorted(proc.working_set)}")

        interval = self.config.system_tick_interval
        if interval and tick % interval == 0:
            self.cpu.run_system_processes()
        else:
            self.cpu.tick()

    def run(self):
        print(f"\n{'='*60}")
        print(f"Running {self.config.policy} algorithm with {self.config.num_frames} frames")
        print(f"{'='*60}")

        for proc in self.processes:
            print(f"Process {proc.pid} created with TTL {proc.ttl} and {proc.num_pages} pages.")

        for tick in range(self.config.total_ticks + 1):
            if self.verbose:
                print(f"Tick {tick}: Simulating process execution...")
            self.step(tick)

        print(f"\nResults:")
        print(self.stats)
        print(f"{'='*60}\n")

        return self.stats


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Demand-paged virtual memory simulator"
    )
    parser.add_argument("-n", "--frames", type=int, default=32,
                        help="Number of physical frames (default: %(default)s)")
    parser.add_argument("-a", "--algorithm", choices=sorted(POLICIES), default="wsclock",
                        help="Page replacement algorithm (default: %(default)s)")
    parser.add_argument("-p", "--processes", type=int, default=3,
                        help="Number of processes (default: %(default)s)")
    parser.add_argument("-t", "--ticks", type=int, default=1000,
                        help="Number of simulated ticks (default: %(default)s)")
    parser.add_argument("-m", "--max-pages", type=int, default=48,
                        help="Maximum virtual pages per process (default: %(default)s)")
    parser.add_argument("-s", "--seed", type=int, default=None,
                        help="Random seed for reproducible runs")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Print every tick and paging event")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    try:
        config = SimulationConfig(
            num_frames=args.frames,
            max_virtual_pages=args.max_pages,
            policy=args.algorithm,
            num_processes=args.processes,
            total_ticks=args.ticks,
            seed=args.seed,
        )
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)

    if args.verbose:
        print(config)
    simulator = VirtualMemorySimulator(config, verbose=args.verbose)
    simulator.run()


if __name__ == '__main__':
    main()
