"""
Parcel Status Enumeration.
"""

import enum
from typing import Optional


class ParcelStatus(str, enum.Enum):
    """
    Parcel status enumeration.

    Status flow:
        registered → sent → delivered
    """
    REGISTERED = "registered"
    SENT = "sent"
    DELIVERED = "delivered"

    def next(self) -> Optional["ParcelStatus"]:
        """Return the following status, or None once delivered."""
        order = list(ParcelStatus)
        index = order.index(self)
        if index + 1 < len(order):
            return order[index + 1]
        return None
