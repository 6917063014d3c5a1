# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Analytics and usage tool parameters."""

from enum import Enum

from pydantic import BaseModel, Field


class Granularity(str, Enum):
    DAILY = "DAILY"
    AGGREGATE = "AGGREGATE"


class MetricType(str, Enum):
    SENT = "SENT"
    DELIVERED = "DELIVERED"
    READ = "READ"
    CLICKED = "CLICKED"


class EnableAnalyticsParams(BaseModel):
    app_id: str | None = None
    enable: bool = True


class GetAnalyticsParams(BaseModel):
    app_id: str | None = None
    start: int = Field(..., description="Start of the range, epoch seconds")
    end: int = Field(..., description="End of the range, epoch seconds")
    template_ids: list[str] = Field(..., min_length=1)
    granularity: Granularity | None = None
    metric_types: list[MetricType] | None = None


class CompareTemplatesParams(BaseModel):
    app_id: str | None = None
    template_id: str
    template_list: list[str] = Field(..., min_length=1)
    start: int
    end: int


class UsageSummaryParams(BaseModel):
    app_id: str | None = None
    from_date: str = Field(..., description="YYYY-MM-DD")
    to_date: str = Field(..., description="YYYY-MM-DD")
