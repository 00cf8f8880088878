import random


def require_full(physical_memory):
    free = physical_memory.find_free_frame()
    if free is not None:
        raise RuntimeError(f"Eviction requested while frame {free} is free")


class RandomPolicy:
    name = 'random'

    def __init__(self, rng=None):
        self.rng = rng if rng is not None else random.Random()

    def pick(self, physical_memory, page_tables, on_write_back=None, on_inspect=None):
        require_full(physical_memory)
        return self.rng.randrange(physical_memory.num_frames)


class WSClockPolicy:
    """
    Working-set clock: sweep a hand around the frame ring.

    A referenced page loses its R bit and is skipped, a dirty page is
    written back and skipped, the first page with both bits clear is the
    victim. The hand keeps its position between calls.
    """
    name = 'wsclock'

    def __init__(self):
        self.hand = 0
        self.last_scan_length = 0

    def pick(self, physical_memory, page_tables, on_write_back=None, on_inspect=None):
        require_full(physical_memory)
        num_frames = physical_memory.num_frames
        self.hand %= num_frames
        self.last_scan_length = 0

        while True:
            frame_num = self.hand
            proc_id, vpage_num = physical_memory.get_frame_info(frame_num)
            entry = page_tables[proc_id].get_entry(vpage_num)
            if on_inspect is not None:
                on_inspect(proc_id, vpage_num, frame_num, entry.referenced, entry.modified)

            self.hand = (self.hand + 1) % num_frames
            self.last_scan_length += 1

            if entry.referenced:
                entry.referenced = False
                continue

            if entry.modified:
                if on_write_back is not None:
                    on_write_back(proc_id, vpage_num, frame_num)
                entry.modified = False
                continue

            return frame_num


POLICIES = {
    RandomPolicy.name: RandomPolicy,
    WSClockPolicy.name: WSClockPolicy,
}


def make_policy(name, rng=None):
    if name == RandomPolicy.name:
        return RandomPolicy(rng)
    elif name == WSClockPolicy.name:
        return WSClockPolicy()
    else:
        raise ValueError(f"Unknown replacement policy: {name} (expected one of {sorted(POLICIES)})")
