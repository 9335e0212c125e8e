"""Tests for order feasibility checks."""

import asyncio

import pytest

from signet_sdk.orders import (
    FeasibilityIssueType,
    Output,
    Permit2Batch,
    PermitBatchTransferFrom,
    SignedOrder,
    TokenPermissions,
    check_order_feasibility,
    has_permit2_approval,
)
from signet_sdk.orders.feasibility import required_amounts

from conftest import RECIPIENT, TEST_ADDRESS, USDC, WETH, FakeChainReader

NOW = 1_700_000_000
NONCE = (3 << 8) | 9


def _order(permitted, deadline=NOW + 60) -> SignedOrder:
    return SignedOrder(
        permit=Permit2Batch(
            permit=PermitBatchTransferFrom(permitted=permitted, nonce=NONCE, deadline=deadline),
            owner=TEST_ADDRESS,
            signature="0x" + "00" * 65,
        ),
        outputs=(Output(token=USDC, amount=1, recipient=RECIPIENT, chain_id=1),),
    )


def _fund(reader, token, balance, allowance):
    reader.set_balance(token, TEST_ADDRESS, balance)
    reader.set_allowance(token, TEST_ADDRESS, allowance)


class StallingReader(FakeChainReader):
    """Reads of stall_token never return; reads of fail_token raise."""

    def __init__(self, stall_token: str, fail_token: str, error: Exception):
        super().__init__()
        self.stall_token = stall_token.lower()
        self.fail_token = fail_token.lower()
        self.error = error
        self.cancelled = []

    async def read_contract(self, address, abi, function_name, args):
        if address.lower() == self.fail_token:
            raise self.error
        if address.lower() == self.stall_token:
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                self.cancelled.append(function_name)
                raise
        return await super().read_contract(address, abi, function_name, args)


def _pending_tasks():
    return [task for task in asyncio.all_tasks() if task is not asyncio.current_task()]


class TestCheckOrderFeasibility:
    """Tests for check_order_feasibility."""

    @pytest.mark.asyncio
    async def test_feasible(self, reader):
        _fund(reader, WETH, 100, 100)

        result = await check_order_feasibility(
            reader, _order((TokenPermissions(token=WETH, amount=100),)), now=NOW
        )

        assert result.feasible
        assert result.issues == ()

    @pytest.mark.asyncio
    async def test_insufficient_balance(self, reader):
        _fund(reader, WETH, 50, 1000)

        result = await check_order_feasibility(
            reader, _order((TokenPermissions(token=WETH, amount=100),)), now=NOW
        )

        assert not result.feasible
        assert len(result.issues) == 1
        issue = result.issues[0]
        assert issue.type == FeasibilityIssueType.INSUFFICIENT_BALANCE
        assert issue.token == WETH
        assert issue.required == 100
        assert issue.available == 50

    @pytest.mark.asyncio
    async def test_balance_and_allowance_both_short(self, reader):
        _fund(reader, WETH, 50, 10)

        result = await check_order_feasibility(
            reader, _order((TokenPermissions(token=WETH, amount=100),)), now=NOW
        )

        assert [i.type for i in result.issues] == [
            FeasibilityIssueType.INSUFFICIENT_BALANCE,
            FeasibilityIssueType.INSUFFICIENT_ALLOWANCE,
        ]
        assert result.issues[1].available == 10

    @pytest.mark.asyncio
    async def test_repeated_token_amounts_summed(self, reader):
        _fund(reader, WETH, 150, 1000)

        result = await check_order_feasibility(
            reader,
            _order(
                (
                    TokenPermissions(token=WETH, amount=100),
                    TokenPermissions(token=WETH, amount=100),
                )
            ),
            now=NOW,
        )

        assert len(result.issues) == 1
        assert result.issues[0].required == 200
        assert result.issues[0].available == 150

    @pytest.mark.asyncio
    async def test_every_issue_reported_in_order(self, reader):
        _fund(reader, WETH, 0, 0)
        _fund(reader, USDC, 100, 0)
        reader.set_bitmap(TEST_ADDRESS, 3, 1 << 9)

        result = await check_order_feasibility(
            reader,
            _order(
                (
                    TokenPermissions(token=WETH, amount=1),
                    TokenPermissions(token=USDC, amount=100),
                ),
                deadline=NOW - 1,
            ),
            now=NOW,
        )

        assert [(i.type, i.token) for i in result.issues] == [
            (FeasibilityIssueType.DEADLINE_EXPIRED, None),
            (FeasibilityIssueType.NONCE_USED, None),
            (FeasibilityIssueType.INSUFFICIENT_BALANCE, WETH),
            (FeasibilityIssueType.INSUFFICIENT_ALLOWANCE, WETH),
            (FeasibilityIssueType.INSUFFICIENT_ALLOWANCE, USDC),
        ]

    @pytest.mark.asyncio
    async def test_deadline_equal_to_now_not_expired(self, reader):
        _fund(reader, WETH, 1, 1)
        result = await check_order_feasibility(
            reader, _order((TokenPermissions(token=WETH, amount=1),), deadline=NOW), now=NOW
        )
        assert result.feasible

    @pytest.mark.asyncio
    async def test_read_failure_propagates(self, reader):
        _fund(reader, WETH, 100, 100)
        reader.fail_on["allowance"] = TimeoutError("read timed out")

        with pytest.raises(TimeoutError):
            await check_order_feasibility(
                reader, _order((TokenPermissions(token=WETH, amount=100),)), now=NOW
            )

    @pytest.mark.asyncio
    async def test_read_failure_cancels_other_reads(self):
        reader = StallingReader(WETH, USDC, TimeoutError("read timed out"))
        order = _order(
            (TokenPermissions(token=WETH, amount=1), TokenPermissions(token=USDC, amount=1))
        )

        with pytest.raises(TimeoutError):
            await asyncio.wait_for(check_order_feasibility(reader, order, now=NOW), timeout=5)

        assert "balanceOf" in reader.cancelled
        assert _pending_tasks() == []


class TestPermit2Approval:
    """Tests for has_permit2_approval."""

    @pytest.mark.asyncio
    async def test_approved(self, reader):
        _fund(reader, WETH, 0, 500)
        tokens = [TokenPermissions(token=WETH, amount=200), TokenPermissions(token=WETH, amount=300)]
        assert await has_permit2_approval(reader, TEST_ADDRESS, tokens)

    @pytest.mark.asyncio
    async def test_not_approved(self, reader):
        _fund(reader, WETH, 0, 500)
        _fund(reader, USDC, 0, 0)
        tokens = [TokenPermissions(token=WETH, amount=1), TokenPermissions(token=USDC, amount=1)]
        assert not await has_permit2_approval(reader, TEST_ADDRESS, tokens)

    @pytest.mark.asyncio
    async def test_read_failure_cancels_other_reads(self):
        reader = StallingReader(WETH, USDC, ConnectionError("rpc down"))
        tokens = [TokenPermissions(token=WETH, amount=1), TokenPermissions(token=USDC, amount=1)]

        with pytest.raises(ConnectionError):
            await asyncio.wait_for(has_permit2_approval(reader, TEST_ADDRESS, tokens), timeout=5)

        assert reader.cancelled == ["allowance"]
        assert _pending_tasks() == []

    def test_required_amounts_first_seen_order(self):
        tokens = [
            TokenPermissions(token=USDC, amount=1),
            TokenPermissions(token=WETH, amount=2),
            TokenPermissions(token=USDC, amount=3),
        ]
        assert list(required_amounts(tokens).items()) == [(USDC, 4), (WETH, 2)]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
