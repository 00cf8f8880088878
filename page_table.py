class PageTableEntry:
    def __init__(self, virtual_page_num):
        self.virtual_page_num = virtual_page_num
        self.frame = None  # None means not in memory
        self.present = False
        self.referenced = False
        self.modified = False

    def map(self, frame):
        self.frame = frame
        self.present = True
        self.referenced = False
        self.modified = False

    def clear(self):
        # R/M carry no meaning once the page is gone
        self.frame = None
        self.present = False
        self.referenced = False
        self.modified = False

    def __repr__(self):
        return (f"PageTableEntry(vpn={self.virtual_page_num}, P={int(self.present)}, "
                f"R={int(self.referenced)}, M={int(self.modified)}, frame={self.frame})")


class PageTable:
    """Virtual address space of one process: entries 0..num_pages-1."""

    def __init__(self, process_id, num_pages):
        if num_pages < 1:
            raise ValueError(f"Process {process_id} needs at least one virtual page, got {num_pages}")
        self.process_id = process_id
        self.num_pages = num_pages
        self.entries = [PageTableEntry(i) for i in range(num_pages)]

    def get_entry(self, virtual_page_num):
        if not 0 <= virtual_page_num < self.num_pages:
            raise IndexError(
                f"VPN {virtual_page_num} out of range for process {self.process_id} "
                f"({self.num_pages} pages)")
        return self.entries[virtual_page_num]

    def present_pages(self):
        return [entry.virtual_page_num for entry in self.entries if entry.present]
