"""Tests for order and fill validation."""

import pytest

from signet_sdk.errors import ErrorCode, ValidationError
from signet_sdk.orders import (
    Output,
    Permit2Batch,
    PermitBatchTransferFrom,
    SignedFill,
    SignedOrder,
    TokenPermissions,
    validate_fill,
    validate_order,
)

from conftest import RECIPIENT, TEST_ADDRESS, USDC, WETH

NOW = 1_700_000_000
SIGNATURE = "0x" + "00" * 65


def _permit(permitted, deadline=NOW + 60) -> Permit2Batch:
    return Permit2Batch(
        permit=PermitBatchTransferFrom(permitted=permitted, nonce=1, deadline=deadline),
        owner=TEST_ADDRESS,
        signature=SIGNATURE,
    )


def _output(token=USDC, amount=100) -> Output:
    return Output(token=token, amount=amount, recipient=RECIPIENT, chain_id=1)


class TestValidateOrder:
    """Tests for order deadline validation."""

    def test_valid(self):
        order = SignedOrder(permit=_permit((TokenPermissions(token=WETH, amount=1),)), outputs=())
        validate_order(order, now=NOW)

    def test_deadline_equal_to_now_passes(self):
        order = SignedOrder(
            permit=_permit((TokenPermissions(token=WETH, amount=1),), deadline=NOW),
            outputs=(),
        )
        validate_order(order, now=NOW)

    def test_expired(self):
        order = SignedOrder(
            permit=_permit((TokenPermissions(token=WETH, amount=1),), deadline=NOW - 1),
            outputs=(),
        )

        with pytest.raises(ValidationError, match="Order expired") as exc_info:
            validate_order(order, now=NOW)
        assert exc_info.value.code == ErrorCode.DEADLINE_EXPIRED
        assert exc_info.value.code.value == "expired"
        assert exc_info.value.actual == NOW - 1


class TestValidateFill:
    """Tests for fill validation."""

    def test_valid(self):
        fill = SignedFill(
            permit=_permit((TokenPermissions(token=USDC, amount=100),)),
            outputs=(_output(),),
        )
        validate_fill(fill, now=NOW)

    def test_token_compare_ignores_case(self):
        fill = SignedFill(
            permit=_permit((TokenPermissions(token=USDC.lower(), amount=100),)),
            outputs=(_output(token=USDC),),
        )
        validate_fill(fill, now=NOW)

    def test_expired(self):
        fill = SignedFill(
            permit=_permit((TokenPermissions(token=USDC, amount=100),), deadline=NOW - 1),
            outputs=(_output(),),
        )
        with pytest.raises(ValidationError, match="Fill expired") as exc_info:
            validate_fill(fill, now=NOW)
        assert exc_info.value.code == ErrorCode.DEADLINE_EXPIRED

    def test_length_mismatch(self):
        fill = SignedFill(
            permit=_permit((TokenPermissions(token=USDC, amount=100),)),
            outputs=(_output(), _output()),
        )
        with pytest.raises(ValidationError, match="Length mismatch") as exc_info:
            validate_fill(fill, now=NOW)
        assert exc_info.value.code == ErrorCode.LENGTH_MISMATCH
        assert exc_info.value.expected == 1
        assert exc_info.value.actual == 2

    def test_token_mismatch(self):
        fill = SignedFill(
            permit=_permit(
                (
                    TokenPermissions(token=USDC, amount=100),
                    TokenPermissions(token=USDC, amount=100),
                )
            ),
            outputs=(_output(), _output(token=WETH)),
        )
        with pytest.raises(ValidationError, match="Token mismatch at index 1") as exc_info:
            validate_fill(fill, now=NOW)
        assert exc_info.value.code == ErrorCode.TOKEN_MISMATCH
        assert exc_info.value.index == 1
        assert exc_info.value.expected == USDC
        assert exc_info.value.actual == WETH

    def test_amount_mismatch(self):
        fill = SignedFill(
            permit=_permit((TokenPermissions(token=USDC, amount=100),)),
            outputs=(_output(amount=99),),
        )
        with pytest.raises(ValidationError, match="Amount mismatch at index 0") as exc_info:
            validate_fill(fill, now=NOW)
        assert exc_info.value.code == ErrorCode.AMOUNT_MISMATCH
        assert exc_info.value.index == 0
        assert exc_info.value.expected == 100
        assert exc_info.value.actual == 99

    def test_expiry_checked_first(self):
        fill = SignedFill(
            permit=_permit((TokenPermissions(token=USDC, amount=100),), deadline=NOW - 1),
            outputs=(),
        )
        with pytest.raises(ValidationError) as exc_info:
            validate_fill(fill, now=NOW)
        assert exc_info.value.code == ErrorCode.DEADLINE_EXPIRED


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
