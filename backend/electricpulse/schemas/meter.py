"""Meter and reading Pydantic schemas"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel


class MeterReadingResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    meter_id: str
    v1: Optional[float] = None
    v2: Optional[float] = None
    v3: Optional[float] = None
    i1: Optional[float] = None
    i2: Optional[float] = None
    i3: Optional[float] = None
    pf1: Optional[float] = None
    pf2: Optional[float] = None
    pf3: Optional[float] = None
    kva1: Optional[float] = None
    kva2: Optional[float] = None
    kva3: Optional[float] = None
    kvat: Optional[float] = None
    kw1: Optional[float] = None
    kw2: Optional[float] = None
    kw3: Optional[float] = None
    kwt: Optional[float] = None
    kvar1: Optional[float] = None
    kvar2: Optional[float] = None
    kvar3: Optional[float] = None
    kvart: Optional[float] = None
    kvah: Optional[float] = None
    kwh: Optional[float] = None
    kvarh: Optional[float] = None
    timestamp: datetime


class MeterResponse(BaseModel):
    meter_id: str
    name: str
    location: Optional[str] = None
    description: Optional[str] = None
    status: Literal["active", "inactive"]
    last_reading: Optional[datetime] = None
