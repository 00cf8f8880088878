from collections import namedtuple


# kind is one of: fault, no_free, inspect, write_back, victim, evict, map, terminate
# detail carries (R, M) for inspect events
Event = namedtuple('Event', ['kind', 'process_id', 'vpn', 'frame', 'detail'], defaults=(None,))


class PhysicalMemory:
    def __init__(self, num_frames=32):
        if num_frames < 1:
            raise ValueError(f"Physical memory needs at least one frame, got {num_frames}")
        self.num_frames = num_frames
        # Each frame stores (process_id, virtual_page_num) or None if free
        self.frames = [None] * num_frames

    def find_free_frame(self):
        for i, frame in enumerate(self.frames):
            if frame is None:
                return i
        return None

    def allocate_frame(self, frame_num, process_id, virtual_page_num):
        self.frames[frame_num] = (process_id, virtual_page_num)

    def free_frame(self, frame_num):
        self.frames[frame_num] = None

    def get_frame_info(self, frame_num):
        return self.frames[frame_num]

    def is_free(self, frame_num):
        return self.frames[frame_num] is None

    def frames_owned_by(self, process_id):
        return [i for i, frame in enumerate(self.frames)
                if frame is not None and frame[0] == process_id]

    def used_frames(self):
        return sum(1 for frame in self.frames if frame is not None)


class Statistics:
    def __init__(self):
        self.page_faults = 0
        self.accesses = 0
        self.evictions = 0
        self.write_backs = 0

    def record_access(self):
        self.accesses += 1

    def record_page_fault(self):
        self.page_faults += 1

    def record_eviction(self):
        self.evictions += 1

    def record_write_back(self):
        self.write_backs += 1

    @property
    def fault_rate(self):
        return self.page_faults / self.accesses if self.accesses > 0 else 0

    def __str__(self):
        return (f"Page Faults: {self.page_faults}\n"
                f"Accesses: {self.accesses}\n"
                f"Fault Rate: {self.fault_rate:.3f}\n"
                f"Evictions: {self.evictions}\n"
                f"Write-backs: {self.write_backs}")
