"""Tests for order hash computation."""

import pytest
from eth_abi import encode
from eth_utils import keccak

from signet_sdk.orders import (
    SECP256K1_N,
    Output,
    Permit2Batch,
    PermitBatchTransferFrom,
    SignedFill,
    SignedOrder,
    TokenPermissions,
    compute_order_hash,
    order_hash,
    order_hash_pre_image,
    verify_order_hash,
)
from signet_sdk.orders.signature import serialize_signature

from conftest import WETH

OWNER = "0x0000000000000000000000000000000000000001"
RECIPIENT = "0x0000000000000000000000000000000000000002"
ZERO_SIGNATURE = "0x" + "00" * 65


def _order(
    amount=1000,
    nonce=42,
    deadline=1700000000,
    owner=OWNER,
    signature=ZERO_SIGNATURE,
    chain_id=1,
) -> SignedOrder:
    return SignedOrder(
        permit=Permit2Batch(
            permit=PermitBatchTransferFrom(
                permitted=(TokenPermissions(token=WETH, amount=amount),),
                nonce=nonce,
                deadline=deadline,
            ),
            owner=owner,
            signature=signature,
        ),
        outputs=(Output(token=WETH, amount=amount, recipient=RECIPIENT, chain_id=chain_id),),
    )


class TestOrderHash:
    """Tests for the post-signing order hash."""

    def test_pre_image_layout(self):
        """Pre-image is four 32-byte hashes of independent ABI encodings."""
        pre_image = order_hash_pre_image(_order())

        permit_hash = keccak(
            encode(
                ["((address,uint256)[],uint256,uint256)"],
                [([(WETH, 1000)], 42, 1700000000)],
            )
        )
        owner_hash = keccak(encode(["address"], [OWNER]))
        outputs_hash = keccak(
            encode(["(address,uint256,address,uint32)[]"], [[(WETH, 1000, RECIPIENT, 1)]])
        )

        assert len(pre_image) == 128
        assert pre_image[0:32] == permit_hash
        assert pre_image[32:64] == owner_hash
        assert pre_image[64:96] == outputs_hash
        assert pre_image[96:128] == keccak(b"\x00" * 65)

    def test_order_hash_format(self):
        result = order_hash(_order())
        assert result.startswith("0x")
        assert len(result) == 66
        assert result == "0x" + keccak(order_hash_pre_image(_order())).hex()

    def test_basic_order_hash_vector(self):
        """Fixed vector: 1000 WETH-wei in and out, nonce 42, zero signature."""
        pre_image = order_hash_pre_image(_order())

        assert pre_image.hex() == (
            "8b97ff7d5a2ef43c2da7620386915f9678913af9604d386d33ad6c320dba89d8"
            "b10e2d527612073b26eecdfd717e6a320cf44b4afac2b0732d9fcbe2b7fa0cf6"
            "2fbd537ff9159cb51d32ddde1a1783b565347ea0df476d51366248d040c6edd6"
            "ae61b77b3e4cbac1353bfa4c59274e3ae531285c24e3cf57c11771ecbf72d9bf"
        )
        assert order_hash(_order()) == (
            "0x5365a4793660e3426976ce4674fdae7ea018d42c8271870584c571758880860c"
        )

    def test_deterministic(self):
        assert order_hash(_order()) == order_hash(_order())

    def test_sensitive_to_each_field(self):
        base = order_hash(_order())
        variants = [
            _order(amount=1001),
            _order(nonce=43),
            _order(deadline=1700000001),
            _order(owner=RECIPIENT),
            _order(signature="0x" + "00" * 64 + "1b"),
            _order(chain_id=519),
        ]
        for variant in variants:
            assert order_hash(variant) != base

    def test_signature_normalized_before_hashing(self):
        """High-S and low-S forms of the same signature give the same hash."""
        high = serialize_signature(1, SECP256K1_N - 1, 27)
        low = serialize_signature(1, 1, 28)
        assert order_hash(_order(signature=high)) == order_hash(_order(signature=low))

    def test_fill_and_order_hash_alike(self):
        order = _order()
        fill = SignedFill(permit=order.permit, outputs=order.outputs)
        assert order_hash(fill) == order_hash(order)

    def test_compute_order_hash(self):
        order = _order()
        assert compute_order_hash(order.permit, list(order.outputs)) == order_hash(order)

    def test_verify_order_hash(self):
        order = _order()
        expected = order_hash(order)
        assert verify_order_hash(expected, order)
        assert verify_order_hash(expected.upper().replace("0X", "0x"), order)
        assert not verify_order_hash("0x" + "00" * 32, order)

    def test_bad_signature_length(self):
        with pytest.raises(ValueError):
            order_hash(_order(signature="0x" + "00" * 64))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
