from page_table import PageTable


class Process:
    def __init__(self, pid, config, rng, num_pages=None, ttl=None):
        self.pid = pid
        self.rng = rng
        self.working_set_size = config.working_set_size
        self.locality = config.locality
        self.write_probability = config.write_probability
        if ttl is None:
            ttl = rng.randint(1, config.total_ticks)
        if num_pages is None:
            num_pages = rng.randint(1, config.max_virtual_pages)
        self.ttl = ttl
        self.page_table = PageTable(pid, num_pages)
        self.working_set = self.generate_working_set()

    @property
    def num_pages(self):
        return self.page_table.num_pages

    def generate_working_set(self):
        # small spaces are entirely working set
        if self.num_pages <= self.working_set_size:
            return list(range(self.num_pages))
        return self.rng.sample(range(self.num_pages), self.working_set_size)

    def update_working_set(self):
        self.working_set = self.generate_working_set()

    def work(self):
        if self.rng.random() < self.locality:
            vpn = self.rng.choice(self.working_set)
        else:
            vpn = self.rng.randrange(self.num_pages)
        is_write = self.rng.random() < self.write_probability
        return vpn, is_write

    def __repr__(self):
        return f"Process(pid={self.pid}, ttl={self.ttl}, pages={self.num_pages})"
