"""Point-in-time feasibility checks for signed orders.

All chain reads run concurrently. If any read fails the whole check fails:
a skipped check would be indistinguishable from a passing one.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Dict, List, Optional, Sequence, Tuple

from ..chain import ChainReader, get_permit2_allowance, get_token_balance
from .nonce import is_nonce_used
from .types import SignedArtifact, TokenPermissions
from .utils import now_seconds

logger = logging.getLogger(__name__)


class FeasibilityIssueType(str, Enum):
    INSUFFICIENT_BALANCE = "insufficient_balance"
    INSUFFICIENT_ALLOWANCE = "insufficient_allowance"
    NONCE_USED = "nonce_used"
    DEADLINE_EXPIRED = "deadline_expired"


@dataclass(frozen=True)
class FeasibilityIssue:
    """A single issue preventing execution."""

    type: FeasibilityIssueType
    message: str
    token: Optional[str] = None
    """Token address (balance/allowance issues)."""

    required: Optional[int] = None
    available: Optional[int] = None


@dataclass(frozen=True)
class FeasibilityResult:
    feasible: bool
    issues: Tuple[FeasibilityIssue, ...] = field(default_factory=tuple)


async def _read_all(reads: Sequence[Awaitable[Any]]) -> List[Any]:
    """Run reads concurrently. On the first failure the rest are cancelled
    and awaited before the error is re-raised."""
    tasks = [asyncio.ensure_future(read) for read in reads]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


def required_amounts(tokens: Sequence[TokenPermissions]) -> Dict[str, int]:
    """Total amount required per distinct token, in first-seen order."""
    totals: Dict[str, int] = {}
    for permission in tokens:
        totals[permission.token] = totals.get(permission.token, 0) + permission.amount
    return totals


async def check_order_feasibility(
    reader: ChainReader,
    order: SignedArtifact,
    now: Optional[int] = None,
) -> FeasibilityResult:
    """Check if an order can currently be executed.

    Verifies:
    - The permit deadline has not passed
    - The Permit2 nonce has not been consumed
    - The owner holds enough of every input token
    - The owner has approved enough of every input token to Permit2

    Args:
        reader: Chain reader for the chain the permit lives on
        order: The signed order (or fill) to check
        now: Reference time, defaults to the current time

    Returns:
        Result with every issue found, not just the first
    """
    now = now_seconds() if now is None else now
    owner = order.permit.owner
    permit = order.permit.permit
    totals = required_amounts(permit.permitted)
    tokens = list(totals)

    results = await _read_all(
        [
            is_nonce_used(reader, owner, permit.nonce),
            *(get_token_balance(reader, t, owner) for t in tokens),
            *(get_permit2_allowance(reader, t, owner) for t in tokens),
        ]
    )
    nonce_used = results[0]
    balances = results[1 : 1 + len(tokens)]
    allowances = results[1 + len(tokens) :]

    issues: List[FeasibilityIssue] = []

    if permit.deadline < now:
        issues.append(
            FeasibilityIssue(
                type=FeasibilityIssueType.DEADLINE_EXPIRED,
                message="Order permit deadline has expired",
            )
        )

    if nonce_used:
        issues.append(
            FeasibilityIssue(
                type=FeasibilityIssueType.NONCE_USED,
                message="Order permit nonce has already been used",
            )
        )

    for token, balance, allowance in zip(tokens, balances, allowances):
        required = totals[token]
        if balance < required:
            issues.append(
                FeasibilityIssue(
                    type=FeasibilityIssueType.INSUFFICIENT_BALANCE,
                    message=f"Insufficient balance for token {token}",
                    token=token,
                    required=required,
                    available=balance,
                )
            )
        if allowance < required:
            issues.append(
                FeasibilityIssue(
                    type=FeasibilityIssueType.INSUFFICIENT_ALLOWANCE,
                    message=f"Insufficient Permit2 allowance for token {token}",
                    token=token,
                    required=required,
                    available=allowance,
                )
            )

    if issues:
        logger.info(
            "Order from %s is not feasible: %s",
            owner,
            ", ".join(issue.type.value for issue in issues),
        )

    return FeasibilityResult(feasible=not issues, issues=tuple(issues))


async def has_permit2_approval(
    reader: ChainReader, owner: str, tokens: Sequence[TokenPermissions]
) -> bool:
    """True if every token has enough allowance granted to Permit2."""
    totals = required_amounts(tokens)
    allowances = await _read_all([get_permit2_allowance(reader, t, owner) for t in totals])
    return all(a >= r for a, r in zip(allowances, totals.values()))
