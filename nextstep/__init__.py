"""NextStep advisor - tone-adapted budget coaching messages"""

__version__ = "0.1.0"
