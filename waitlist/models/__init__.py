# Import all models here so Base.metadata knows every table
from waitlist.models.waitlist_entry import WaitlistEntry
from waitlist.models.honeypot_entry import HoneypotEntry

__all__ = [
    "WaitlistEntry",
    "HoneypotEntry",
]
