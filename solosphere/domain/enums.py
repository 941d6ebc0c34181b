"""Enums shared across the domain layer."""

from enum import Enum


class Collection(str, Enum):
    JOBS = "jobs"
    BIDS = "bids"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"
