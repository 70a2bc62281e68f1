"""Fresh variable names for capture-avoiding substitution.

A renamed binder keeps its base name and gets a decimal suffix: `y` becomes `y0`, then `y1`, and so on. Suffixes are
drawn from a counter per base name that only ever increases, so most requests succeed on the first candidate; the
avoid collections passed to FreshNames.fresh are only ever probed, never rebuilt.
"""

from collections import defaultdict
from string import digits


class FreshNames:
    """Source of fresh variable names. One instance is owned by each reduction run."""

    def __init__(self):
        self.counters = defaultdict(int)  # base name: next suffix to try

    @staticmethod
    def split(name):
        """Splits name into its base and numeric suffix (-1 if there is no suffix)."""
        base = name.rstrip(digits)
        if not base:  # all-digit names keep their digits as the base
            return name, -1
        suffix = name[len(base):]
        return base, int(suffix) if suffix else -1

    def fresh(self, name, *avoid):
        """Returns a variable name like name that is in none of the avoid collections."""
        base, __ = FreshNames.split(name)

        suffix = self.counters[base]
        candidate = f"{base}{suffix}"
        while any(candidate in names for names in avoid):
            suffix += 1
            candidate = f"{base}{suffix}"

        self.counters[base] = suffix + 1
        return candidate
