"""Shared path parameter types."""

from typing import Annotated

from fastapi import Path

# Ids are 64-bit signed integers in storage; anything outside that range is
# rejected as a bad id instead of reaching the driver.
MAX_ID = 2**63 - 1

EntityId = Annotated[int, Path(ge=-MAX_ID - 1, le=MAX_ID)]
