"""Search and filter predicates over an already-processed ledger"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, Optional

from bank_dashboard.domain.models import Movement


class TypeFilter(str, Enum):
    ALL = "ALL"
    CREDIT = "CREDIT"
    DEBIT = "DEBIT"


@dataclass
class MovementFilter:
    """Dashboard filter controls; unset fields match everything"""

    search: Optional[str] = None
    type: TypeFilter = TypeFilter.ALL
    date_start: Optional[datetime] = None
    date_end: Optional[datetime] = None
    min_amount: Optional[float] = None  # compared against abs(amount)
    max_amount: Optional[float] = None


def apply_filters(ledger: List[Movement], flt: MovementFilter) -> List[Movement]:
    """Apply every active filter in turn, keeping ledger order"""
    result = ledger

    if flt.search:
        needle = flt.search.lower()
        result = [m for m in result if needle in m.description.lower()]

    if flt.type is not TypeFilter.ALL:
        result = [m for m in result if m.type.value == flt.type.value]

    if flt.date_start is not None:
        result = [m for m in result if m.date >= flt.date_start]
    if flt.date_end is not None:
        result = [m for m in result if m.date <= flt.date_end]

    # Magnitude filters use absolute value so debits are searchable by size
    if flt.min_amount is not None:
        result = [m for m in result if abs(m.amount) >= flt.min_amount]
    if flt.max_amount is not None:
        result = [m for m in result if abs(m.amount) <= flt.max_amount]

    return list(result)
