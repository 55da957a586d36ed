from pydantic import BaseModel, Field
from typing import Any, List

class PacketConfig(BaseModel):
    # Any: items pass through as-is so table identity survives validation
    values: List[Any] = Field(default_factory=list)
    skip_transport_overhead: bool = False

class PacketMeasurement(BaseModel):
    total_bytes: int
    transport_bytes: int
    # one entry per top-level value, type overhead included
    value_bytes: List[int] = Field(default_factory=list)
    largest_bytes: int = 0
