"""Financial analytics engine - movement normalization, running balance, risks and ranking"""

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, List, Optional, Tuple

from bank_dashboard.domain.exceptions import MovementParseError
from bank_dashboard.domain.models import AnalyticsResult, FinancialStats, Movement, MovementType
from bank_dashboard.utils.date_utils import parse_timestamp

# Upstream envelope keys, checked in order after the bare-list case
ENVELOPE_KEYS = ("data", "results", "movements")

HIGH_VALUE_MULTIPLIER = 3
DUPLICATE_SUFFIX = " (Possible Duplicate)"
TOP_N = 5


class InvalidRecordPolicy(str, Enum):
    """What to do with a record whose amount cannot be parsed"""

    DROP = "drop"
    ZERO = "zero"


@dataclass
class LedgerSummary:
    """Sorted, balance-annotated ledger plus the totals gathered while walking it"""

    ledger: List[Movement]
    total_in: float
    total_out: float
    sum_abs_amount: float


def extract_raw_movements(payload: Any) -> Optional[List[Any]]:
    """
    Locate the movement list inside a loosely-structured upstream response.

    The envelope is not contractually fixed, so the first match wins:
    bare list, then payload["data"], payload["results"], payload["movements"].
    Returns None when no list can be found.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in ENVELOPE_KEYS:
            if isinstance(payload.get(key), list):
                return payload[key]
    return None


def parse_amount(value: Any) -> float:
    """Parse an upstream amount to a finite float, raising ValueError otherwise"""
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Not an amount: {value!r}")
    if isinstance(value, (int, float)):
        amount = float(value)
    elif isinstance(value, str):
        amount = float(value.strip())
    else:
        raise ValueError(f"Not an amount: {value!r}")
    if not math.isfinite(amount):
        raise ValueError(f"Non-finite amount: {value!r}")
    return amount


def classify_amount(amount: float) -> MovementType:
    """Zero counts as a credit"""
    return MovementType.CREDIT if amount >= 0 else MovementType.DEBIT


def normalize_movement(
    raw: Any,
    index: int,
    policy: InvalidRecordPolicy = InvalidRecordPolicy.DROP,
) -> Movement:
    """
    Turn one raw upstream record into a Movement.

    Raises:
        MovementParseError: If the record is not an object, its date is
            unparsable, or its amount is unparsable under the DROP policy
    """
    if not isinstance(raw, dict):
        raise MovementParseError(index, "record", raw)

    try:
        amount = parse_amount(raw.get("amount"))
    except ValueError as e:
        if policy is not InvalidRecordPolicy.ZERO:
            raise MovementParseError(index, "amount", raw.get("amount")) from e
        amount = 0.0

    try:
        when = parse_timestamp(raw.get("date"))
    except (ValueError, OverflowError, OSError) as e:
        raise MovementParseError(index, "date", raw.get("date")) from e

    movement_id = raw.get("id")
    extra = {k: v for k, v in raw.items() if k not in ("id", "date", "amount", "description", "type")}

    return Movement(
        id=str(movement_id) if movement_id is not None else str(index),
        date=when,
        amount=amount,
        description=str(raw.get("description") or ""),
        type=classify_amount(amount),
        extra=extra,
    )


def normalize_movements(
    raw_movements: List[Any],
    policy: InvalidRecordPolicy = InvalidRecordPolicy.DROP,
) -> Tuple[List[Movement], List[MovementParseError]]:
    """Normalize every record, collecting the ones that fail instead of raising"""
    movements: List[Movement] = []
    rejected: List[MovementParseError] = []

    for index, raw in enumerate(raw_movements):
        try:
            movements.append(normalize_movement(raw, index, policy))
        except MovementParseError as e:
            logging.warning("Dropping movement: %s", e)
            rejected.append(e)

    return movements, rejected


def build_ledger(movements: List[Movement]) -> LedgerSummary:
    """
    Sort movements chronologically and attach the running balance.

    Requirements:
    - Stable sort by date (equal timestamps keep input order)
    - dynamic_balance is the cumulative sum after the current movement,
      starting from zero
    - total_in sums positive amounts, total_out everything else (stays <= 0)
    """
    ordered = sorted(movements, key=lambda m: m.date)

    running_balance = 0.0
    total_in = 0.0
    total_out = 0.0
    sum_abs_amount = 0.0
    ledger = []

    for movement in ordered:
        running_balance += movement.amount
        if movement.amount > 0:
            total_in += movement.amount
        else:
            total_out += movement.amount
        sum_abs_amount += abs(movement.amount)
        ledger.append(replace(movement, dynamic_balance=running_balance))

    return LedgerSummary(
        ledger=ledger,
        total_in=total_in,
        total_out=total_out,
        sum_abs_amount=sum_abs_amount,
    )


def detect_high_value(ledger: List[Movement], sum_abs_amount: float) -> List[Movement]:
    """Flag movements above 3x the global average absolute amount (strict)"""
    average = sum_abs_amount / len(ledger) if ledger else 0.0
    threshold = average * HIGH_VALUE_MULTIPLIER
    return [m for m in ledger if abs(m.amount) > threshold]


def detect_duplicates(ledger: List[Movement]) -> List[Movement]:
    """
    Flag a movement when the one right before it has the same amount and
    description. Only adjacent pairs are compared; the later entry is flagged.
    """
    duplicates = []
    for previous, current in zip(ledger, ledger[1:]):
        if previous.amount == current.amount and previous.description == current.description:
            duplicates.append(replace(current, description=current.description + DUPLICATE_SUFFIX))
    return duplicates


def detect_risks(ledger: List[Movement], sum_abs_amount: float) -> List[Movement]:
    """High-value risks followed by duplicate risks; a movement may appear in both"""
    return detect_high_value(ledger, sum_abs_amount) + detect_duplicates(ledger)


def rank_top_movements(ledger: List[Movement], limit: int = TOP_N) -> List[Movement]:
    """Largest movements by absolute amount; ties keep chronological order"""
    return sorted(ledger, key=lambda m: abs(m.amount), reverse=True)[:limit]


def process_financials(
    response: Any,
    policy: InvalidRecordPolicy = InvalidRecordPolicy.DROP,
) -> AnalyticsResult:
    """
    Main entry point: raw upstream response in, ordered ledger and stats out.

    Pure function; an unrecognized envelope yields an empty ledger and zeroed stats.
    """
    raw_movements = extract_raw_movements(response)
    if raw_movements is None:
        logging.info("No movement list found in upstream response")
        return AnalyticsResult(ledger=[], stats=FinancialStats())

    movements, rejected = normalize_movements(raw_movements, policy)
    summary = build_ledger(movements)
    high_value = detect_high_value(summary.ledger, summary.sum_abs_amount)
    duplicates = detect_duplicates(summary.ledger)

    stats = FinancialStats(
        total_in=summary.total_in,
        total_out=summary.total_out,
        risks=high_value + duplicates,
        top5=rank_top_movements(summary.ledger),
        rejected=rejected,
        high_value_count=len(high_value),
        duplicate_count=len(duplicates),
    )
    return AnalyticsResult(ledger=summary.ledger, stats=stats)
