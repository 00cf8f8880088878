from replacement import POLICIES


class SimulationConfig:
    def __init__(self,
                 num_frames=32,
                 max_virtual_pages=48,
                 policy='wsclock',
                 num_processes=3,
                 total_ticks=1000,
                 working_set_size=12,
                 working_set_interval=50,
                 system_tick_interval=10,
                 locality=0.9,
                 write_probability=0.3,
                 seed=None):
        self.num_frames = num_frames
        self.max_virtual_pages = max_virtual_pages
        self.policy = policy
        self.num_processes = num_processes
        self.total_ticks = total_ticks
        self.working_set_size = working_set_size
        self.working_set_interval = working_set_interval
        # 0 disables system ticks
        self.system_tick_interval = system_tick_interval
        self.locality = locality
        self.write_probability = write_probability
        self.seed = seed
        self.validate()

    def _validate_memory(self):
        if self.num_frames < 1:
            raise ValueError("Number of physical frames must be at least 1.")
        if self.max_virtual_pages < 1:
            raise ValueError("Maximum number of virtual pages must be at least 1.")
        if self.policy not in POLICIES:
            raise ValueError(f"Replacement policy must be one of {sorted(POLICIES)}, got {self.policy!r}.")

    def _validate_workload(self):
        if self.num_processes < 0:
            raise ValueError("Number of processes cannot be negative.")
        if self.total_ticks < 1:
            raise ValueError("Total ticks must be at least 1.")
        if self.working_set_size < 1:
            raise ValueError("Working set size must be at least 1.")
        if self.working_set_interval < 1:
            raise ValueError("Working set change interval must be at least 1.")
        if self.system_tick_interval < 0:
            raise ValueError("System tick interval cannot be negative.")
        if not 0 <= self.locality <= 1:
            raise ValueError("Locality must be between 0 and 1.")
        if not 0 <= self.write_probability <= 1:
            raise ValueError("Write probability must be between 0 and 1.")

    def validate(self):
        self._validate_memory()
        self._validate_workload()

    def __str__(self):
        print_str = ""
        print_str += f"Physical memory contains {self.num_frames} frames.\n"
        print_str += f"Each process has at most {self.max_virtual_pages} virtual pages.\n"
        print_str += f"Replacement policy is {self.policy}.\n"
        print_str += f"Running {self.num_processes} processes for {self.total_ticks} ticks.\n"
        print_str += f"Working set of {self.working_set_size} pages, regenerated every {self.working_set_interval} ticks.\n"
        if self.seed is not None:
            print_str += f"Random seed is {self.seed}.\n"
        return print_str
