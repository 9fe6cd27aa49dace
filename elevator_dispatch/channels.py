"""
Redis Pub/Sub channel definitions for the dispatch simulator.
This module contains the centralized definitions of all channel names used
in the system to ensure consistency between publishers and subscribers.
"""

# Channel for hall and panel calls sent to a headless simulator
# Messages are HallCall/PanelCall dictionaries, see models/request.py
ELEVATOR_REQUESTS = "elevator:requests"

# Channel for events of a specific elevator (format with elevator ID)
# Example usage: ELEVATOR_EVENTS.format(1) -> "elevator:events:1"
ELEVATOR_EVENTS = "elevator:events:{}"

# Channel for fleet-wide snapshots
ELEVATOR_SYSTEM = "elevator:system"
