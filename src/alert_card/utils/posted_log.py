import os
import time
from collections import OrderedDict
from colorama import Fore, Back


class PostedAlerts:
    """Set of alert IDs that have already been drawn, so they don't get posted twice.

    Bounded two ways: ids older than max_age seconds are forgotten (NWS alerts don't live
    that long anyway) and only the newest max_size are kept. Optionally backed by a log
    file so restarts don't repost everything that's still active.
    """

    def __init__(self, log_file_path=None, max_age=48 * 3600, max_size=5000, clock=time.time):
        self.log_file_path = log_file_path
        self.max_age = max_age
        self.max_size = max_size
        self._clock = clock
        self._seen = OrderedDict() #alert id -> time first posted, oldest first
        if log_file_path:
            self._load()

    def __contains__(self, alert_id):
        self._evict()
        return alert_id in self._seen

    def __len__(self):
        self._evict()
        return len(self._seen)

    def add(self, alert_id):
        """Marks an alert as posted and appends it to the log file. Returns True if it was saved."""
        now = self._clock()
        self._seen.pop(alert_id, None)
        self._seen[alert_id] = now
        self._evict()
        if not self.log_file_path:
            return True
        try:
            with open(self.log_file_path, 'a') as f:
                f.write(f'{alert_id}\t{now:.0f}\n')
            return True
        except OSError as e:
            print(Fore.RED + f"Error saving alert ID to log: {e}" + Fore.RESET)
            return False

    def _evict(self):
        cutoff = self._clock() - self.max_age
        while self._seen:
            _, first_seen = next(iter(self._seen.items()))
            if first_seen >= cutoff and len(self._seen) <= self.max_size:
                break
            self._seen.popitem(last=False)

    def _load(self):
        log_dir = os.path.dirname(self.log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        if not os.path.exists(self.log_file_path):
            open(self.log_file_path, 'w').close()
            print(Fore.YELLOW + f"Log file not found. Created a new one at: {self.log_file_path}" + Fore.RESET)
            return

        now = self._clock()
        with open(self.log_file_path, 'r') as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                alert_id, _, stamp = line.partition('\t')
                try:
                    first_seen = float(stamp) if stamp else now
                except ValueError:
                    first_seen = now #bare ids from old logs
                self._seen.pop(alert_id, None)
                self._seen[alert_id] = first_seen
        #log is append only, so entries can be out of order after a re-add
        self._seen = OrderedDict(sorted(self._seen.items(), key=lambda item: item[1]))
        self._evict()
        print(Back.GREEN + Fore.BLACK + f"Successfully loaded {len(self._seen)} posted alerts from {self.log_file_path}" + Back.RESET)
