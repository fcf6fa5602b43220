from __future__ import annotations

from enum import Enum


class Policy(str, Enum):
    """
    How an authorization failure on one attribute affects the result.

    - REJECTION: any failure aborts the whole call.
    - PRESERVATION: the failing attribute is removed from the payload.
    - NILIFICATION: the failing attribute is kept with a ``None`` value.
    """

    REJECTION = "rejection"
    NILIFICATION = "nilification"
    PRESERVATION = "preservation"
