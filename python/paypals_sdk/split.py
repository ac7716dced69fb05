"""
Location: python/paypals_sdk/split.py

Summary:
    Bill-split calculator. Partitions a base amount plus tax and
    surcharge among participants in fixed-point cents, and reports a
    breakdown alongside the per-participant amounts.

Usage:
    Called by transaction logic outside this package when a bill is
    created. Three modes share one result shape:

    - equal_split: even shares, rounding remainder on the first participant
    - weighted_split: percentage shares, each rounded independently
    - exact_split: caller-supplied amounts checked against the total

Example:
    from paypals_sdk.split import equal_split

    result = equal_split("10.00", ["alice", "bob", "carol"])
    [p.amount_owed for p in result.participants]
    # [Decimal("3.34"), Decimal("3.33"), Decimal("3.33")]
"""

import logging
from decimal import ROUND_DOWN, Decimal
from typing import Any, Mapping, Optional, Sequence, Union

from .money import (
    MoneyInput,
    allocate_by_weights,
    allocate_evenly,
    quantize,
    to_decimal,
    to_money,
)
from .types import (
    ExactParticipant,
    Identity,
    Participant,
    ParticipantShare,
    ShareParticipant,
    SplitBreakdown,
    SplitResult,
)

logger = logging.getLogger(__name__)

# Allowed deviation of percentage shares from 1.0
SHARE_TOLERANCE = Decimal("0.001")

ZERO = Decimal("0.00")


class SplitError(Exception):
    """Base exception for split calculation failures."""
    pass


class InvalidShareTotal(SplitError):
    """Exception raised when shares or amounts do not add up to the total."""
    pass


class NoParticipants(SplitError):
    """Exception raised when a split has nobody to split between."""
    pass


def _breakdown(base_amount: MoneyInput, tax_rate: MoneyInput, surcharge_rate: MoneyInput) -> SplitBreakdown:
    """
    Compute split totals.

    The surcharge is derived as total - base - tax so the three parts
    always add up to the rounded total.
    """
    base = to_money(base_amount, "base_amount")
    tax_rate = to_decimal(tax_rate, "tax_rate")
    surcharge_rate = to_decimal(surcharge_rate, "surcharge_rate")

    tax = quantize(base * tax_rate)
    total = quantize(base * (1 + tax_rate + surcharge_rate))
    return SplitBreakdown(
        base_amount=base,
        tax_amount=tax,
        surcharge_amount=total - base - tax,
        total_amount=total,
    )


def _apportion(
    amount: Decimal,
    column_totals: list[Decimal],
    left: list[Decimal],
    grand_total: Decimal,
) -> list[Decimal]:
    """
    Divide one amount owed into base, tax and surcharge parts.

    Each part is the column's proportional share rounded down and capped
    by what is left of that column. Leftover cents go to the column with
    the most left, so a column never goes below zero while the rows
    still to come can be covered.
    """
    row = []
    for column_total, room in zip(column_totals, left):
        part = quantize(amount * column_total / grand_total, ROUND_DOWN) if grand_total else ZERO
        row.append(min(part, max(room, ZERO)))

    extra = amount - sum(row, ZERO)
    while extra > 0:
        rooms = [room - part for room, part in zip(left, row)]
        column = rooms.index(max(rooms))
        if rooms[column] > 0:
            step = min(extra, rooms[column])
        else:
            # Uncorrected weighted amounts can overshoot every column
            column, step = 0, extra
        row[column] += step
        extra -= step
    return row


def _rows(
    identities: list[Identity],
    owed: list[Decimal],
    breakdown: SplitBreakdown,
    settle_first: bool,
) -> list[ParticipantShare]:
    """
    Build per-participant rows whose components sum to amount_owed.

    The first participant is settled last. With settle_first it takes
    exactly what is left of each column, so the columns sum to the
    breakdown. Every share is non-negative and a zero tax or surcharge
    stays zero for everyone.
    """
    column_totals = [breakdown.base_amount, breakdown.tax_amount, breakdown.surcharge_amount]
    left = list(column_totals)
    parts = [None] * len(owed)

    for index in list(range(1, len(owed))) + [0]:
        if settle_first and index == 0:
            row = list(left)
        else:
            row = _apportion(owed[index], column_totals, left, breakdown.total_amount)
        left = [room - part for room, part in zip(left, row)]
        parts[index] = row

    return [
        ParticipantShare(
            identity=identity,
            amount_owed=amount,
            base_share=base_share,
            tax_share=tax_share,
            surcharge_share=surcharge_share,
        )
        for identity, amount, (base_share, tax_share, surcharge_share) in zip(identities, owed, parts)
    ]


def _identity(participant: Union[Participant, Identity]) -> Identity:
    if isinstance(participant, Participant):
        return participant.identity
    return participant


def equal_split(
    base_amount: MoneyInput,
    participants: Sequence[Union[Participant, Identity]],
    tax_rate: MoneyInput = 0,
    surcharge_rate: MoneyInput = 0,
) -> SplitResult:
    """
    Split a bill evenly.

    Every participant owes total / n rounded down to cents, except the
    first, who also carries the remainder of at most n - 1 cents. The
    amounts owed always sum exactly to the total and none is negative.

    Args:
        base_amount: Bill amount before tax and surcharge
        participants: Participant models or bare identities
        tax_rate: Tax as a fraction, e.g. 0.09 for 9%
        surcharge_rate: Surcharge as a fraction, e.g. 0.10 for 10%

    Returns:
        SplitResult with mode "equal"

    Raises:
        NoParticipants: If participants is empty
        InvalidAmount: If the amount or a rate is negative or non-finite
    """
    if not participants:
        raise NoParticipants("Equal split requires at least one participant")

    identities = [_identity(p) for p in participants]
    count = len(identities)
    breakdown = _breakdown(base_amount, tax_rate, surcharge_rate)

    rows = _rows(identities, allocate_evenly(breakdown.total_amount, count), breakdown, True)
    logger.debug(
        "Equal split of %s between %d participants", breakdown.total_amount, count
    )
    return SplitResult(mode="equal", participants=rows, breakdown=breakdown)


def weighted_split(
    base_amount: MoneyInput,
    participant_shares: Sequence[Union[ShareParticipant, Mapping[str, Any]]],
    tax_rate: MoneyInput = 0,
    surcharge_rate: MoneyInput = 0,
    remainder_correction: bool = False,
) -> SplitResult:
    """
    Split a bill by percentage shares.

    Each participant owes total * share_percentage rounded to cents on
    its own. Without remainder_correction the amounts owed can miss the
    total by a few cents; with it the shares are rounded down and the
    first participant absorbs the difference, as in equal_split().

    Args:
        base_amount: Bill amount before tax and surcharge
        participant_shares: ShareParticipant models, or mappings that
            validate as one (snake_case or camelCase keys)
        tax_rate: Tax as a fraction
        surcharge_rate: Surcharge as a fraction
        remainder_correction: Force amounts owed to sum to the total

    Returns:
        SplitResult with mode "weighted"

    Raises:
        NoParticipants: If participant_shares is empty
        InvalidShareTotal: If the shares do not sum to 1.0 within 0.001,
            or a share is negative
        InvalidAmount: If the amount or a rate is negative or non-finite
        ValidationError: If a mapping is not a valid ShareParticipant
    """
    if not participant_shares:
        raise NoParticipants("Weighted split requires at least one participant")

    shares = [ShareParticipant.model_validate(share) for share in participant_shares]
    weights = []
    for share in shares:
        if not share.share_percentage.is_finite() or share.share_percentage < 0:
            raise InvalidShareTotal(
                f"Share for {share.identity!r} must be a non-negative fraction, "
                f"got {share.share_percentage}"
            )
        weights.append(share.share_percentage)

    share_total = sum(weights, Decimal("0"))
    if abs(share_total - 1) > SHARE_TOLERANCE:
        raise InvalidShareTotal(f"Shares must sum to 1.0, got {share_total}")

    breakdown = _breakdown(base_amount, tax_rate, surcharge_rate)
    owed = allocate_by_weights(breakdown.total_amount, weights, remainder_correction)

    drift = breakdown.total_amount - sum(owed, Decimal("0"))
    if drift:
        logger.warning(
            "Weighted split amounts miss total %s by %s", breakdown.total_amount, drift
        )

    rows = _rows([s.identity for s in shares], owed, breakdown, remainder_correction)
    return SplitResult(mode="weighted", participants=rows, breakdown=breakdown)


def exact_split(
    total_amount: MoneyInput,
    participants: Sequence[Union[ExactParticipant, Mapping[str, Any]]],
    remainder_holder: Optional[Identity] = None,
) -> SplitResult:
    """
    Check caller-supplied amounts against a bill total.

    If remainder_holder names someone not already listed, they are
    appended owing whatever the listed participants do not cover,
    which is how a bill creator is added to their own bill. Otherwise
    the listed amounts must sum exactly to the total.

    Args:
        total_amount: Bill total
        participants: ExactParticipant models or mappings that validate as one
        remainder_holder: Identity that absorbs the uncovered amount

    Returns:
        SplitResult with mode "exact" and zero tax and surcharge

    Raises:
        NoParticipants: If nobody would owe anything
        InvalidShareTotal: If the amounts exceed or miss the total
        InvalidAmount: If the total or an amount is negative or non-finite
    """
    total = to_money(total_amount, "total_amount")
    participants = [ExactParticipant.model_validate(p) for p in participants]
    identities = [p.identity for p in participants]
    owed = [to_money(p.amount_owed, f"amount_owed for {p.identity!r}") for p in participants]
    listed = sum(owed, Decimal("0"))

    if remainder_holder is not None and remainder_holder not in identities:
        remainder = total - listed
        if remainder < 0:
            raise InvalidShareTotal(
                f"Total amount ({total}) is less than sum of participant amounts ({listed})"
            )
        identities.append(remainder_holder)
        owed.append(remainder)
    elif not participants:
        raise NoParticipants("Exact split requires at least one participant")
    elif listed != total:
        raise InvalidShareTotal(
            f"Total amount ({total}) does not match sum of participant amounts ({listed})"
        )

    breakdown = SplitBreakdown(
        base_amount=total,
        tax_amount=ZERO,
        surcharge_amount=ZERO,
        total_amount=total,
    )
    rows = [
        ParticipantShare(
            identity=identity,
            amount_owed=amount,
            base_share=amount,
            tax_share=ZERO,
            surcharge_share=ZERO,
        )
        for identity, amount in zip(identities, owed)
    ]
    return SplitResult(mode="exact", participants=rows, breakdown=breakdown)
