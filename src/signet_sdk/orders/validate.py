"""Pre-submission validation of signed orders and fills."""

from typing import Optional

from ..errors import ErrorCode, ValidationError
from .types import SignedArtifact, SignedFill, SignedOrder
from .utils import addresses_equal, now_seconds


def _check_deadline(kind: str, artifact: SignedArtifact, now: Optional[int]) -> None:
    now = now_seconds() if now is None else now
    deadline = artifact.permit.permit.deadline
    if deadline < now:
        raise ValidationError(
            f"{kind} expired: deadline {deadline} < now {now}",
            ErrorCode.DEADLINE_EXPIRED,
            field="deadline",
            expected=now,
            actual=deadline,
        )


def validate_order(order: SignedOrder, now: Optional[int] = None) -> None:
    """Check that an order has not expired.

    A deadline equal to ``now`` is still valid.

    Raises:
        ValidationError: ``DEADLINE_EXPIRED`` if ``deadline < now``
    """
    _check_deadline("Order", order, now)


def validate_fill(fill: SignedFill, now: Optional[int] = None) -> None:
    """Check a fill's deadline and that its permit covers exactly its outputs.

    Raises:
        ValidationError: On expiry, or on a length, token or amount mismatch
            between ``outputs`` and ``permit.permit.permitted``
    """
    _check_deadline("Fill", fill, now)

    permitted = fill.permit.permit.permitted
    outputs = fill.outputs

    if len(outputs) != len(permitted):
        raise ValidationError(
            f"Length mismatch: {len(outputs)} outputs but {len(permitted)} permitted tokens",
            ErrorCode.LENGTH_MISMATCH,
            field="outputs",
            expected=len(permitted),
            actual=len(outputs),
        )

    for i, (output, permission) in enumerate(zip(outputs, permitted)):
        if not addresses_equal(output.token, permission.token):
            raise ValidationError(
                f"Token mismatch at index {i}: output {output.token} != permitted {permission.token}",
                ErrorCode.TOKEN_MISMATCH,
                field="token",
                index=i,
                expected=permission.token,
                actual=output.token,
            )
        if output.amount != permission.amount:
            raise ValidationError(
                f"Amount mismatch at index {i}: output {output.amount} != permitted {permission.amount}",
                ErrorCode.AMOUNT_MISMATCH,
                field="amount",
                index=i,
                expected=permission.amount,
                actual=output.amount,
            )
