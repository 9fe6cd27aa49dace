import os
from typing import List

from dotenv import load_dotenv

from elevator_dispatch.channels import ELEVATOR_EVENTS, ELEVATOR_SYSTEM

from .logging import configure_logging

load_dotenv()


def _int_list(raw: str) -> List[int]:
    return [int(part) for part in raw.split(",") if part.strip()]


# Building configuration
NUM_FLOORS = int(os.getenv("NUM_FLOORS", "10"))
NUM_ELEVATORS = int(os.getenv("NUM_ELEVATORS", "3"))
START_POSITIONS = _int_list(os.getenv("START_POSITIONS", ""))

# Seconds between two simulation ticks
TICK_INTERVAL = float(os.getenv("TICK_INTERVAL", "1.5"))

# Where events go: any of "websocket", "redis"
EVENT_SINKS = [
    name.strip().lower()
    for name in os.getenv("EVENT_SINKS", "websocket").split(",")
    if name.strip()
]

REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_PASSWORD = os.getenv("REDIS_PASSWORD")
REDIS_DB = int(os.getenv("REDIS_DB", "0"))

__all__ = [
    "ELEVATOR_EVENTS",
    "ELEVATOR_SYSTEM",
    "configure_logging",
    "NUM_FLOORS",
    "NUM_ELEVATORS",
    "START_POSITIONS",
    "TICK_INTERVAL",
    "EVENT_SINKS",
    "REDIS_HOST",
    "REDIS_PORT",
    "REDIS_PASSWORD",
    "REDIS_DB",
]
