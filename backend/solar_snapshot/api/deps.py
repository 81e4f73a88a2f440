"""
FastAPI dependencies for settings and the upstream client.

Tests swap these out through ``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Iterator

from fastapi import Depends

from solar_snapshot.config import NSRDBSettings
from solar_snapshot.engine.nsrdb_client import NSRDBClient


@lru_cache(maxsize=1)
def get_settings() -> NSRDBSettings:
    return NSRDBSettings.from_env()


def get_client(settings: NSRDBSettings = Depends(get_settings)) -> Iterator[NSRDBClient]:
    client = NSRDBClient(settings)
    try:
        yield client
    finally:
        client.close()
