"""Tests for dapp_rpc.schemas.transaction."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from dapp_rpc.schemas import AccessListEntry, TransactionRequest


def test_transaction_normalises_numeric_fields() -> None:
    tx = TransactionRequest.model_validate(
        {
            "to": "0xabc",
            "from": "0xdef",
            "nonce": "7",
            "gasLimit": "0x5208",
            "gasPrice": [0x3B, 0x9A, 0xCA, 0x00],
            "maxFeePerGas": 2_000_000_000,
            "maxPriorityFeePerGas": b"\x01",
            "value": "0x1",
            "chainId": "0x01",
            "data": "0x",
        }
    )

    assert tx.to == "0xabc"
    assert tx.from_ == "0xdef"
    assert tx.nonce == 7
    assert tx.gas_limit == 21000
    assert tx.gas_price == 1_000_000_000
    assert tx.max_fee_per_gas == 2_000_000_000
    assert tx.max_priority_fee_per_gas == 1
    assert tx.value == 1
    assert tx.chain_id == "0x1"
    assert tx.data == "0x"


def test_transaction_all_fields_optional() -> None:
    tx = TransactionRequest.model_validate({})
    assert tx.to is None
    assert tx.value is None
    assert tx.to_rpc_dict() == {}


def test_transaction_ignores_unknown_keys() -> None:
    tx = TransactionRequest.model_validate({"value": 1, "somethingElse": True})
    assert tx.value == 1
    assert "somethingElse" not in tx.to_rpc_dict()


def test_transaction_data_is_passed_through_raw() -> None:
    raw = bytes.fromhex("a9059cbb")
    tx = TransactionRequest.model_validate({"data": raw})
    assert tx.data == raw
    assert tx.to_rpc_dict()["data"] == "0xa9059cbb"


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("data", "0x123"),
        ("data", "hello"),
        ("value", 1.5),
        ("value", "ten"),
        ("chainId", "mainnet"),
        ("type", "2"),
        ("ccipReadEnabled", "yes"),
        ("customData", "not-a-dict"),
    ],
)
def test_transaction_rejects_invalid_fields(field: str, value: object) -> None:
    with pytest.raises(PydanticValidationError) as excinfo:
        TransactionRequest.model_validate({field: value})

    assert excinfo.value.errors()[0]["loc"][0] == field


def test_access_list_forms_are_normalised() -> None:
    expected = (
        AccessListEntry(address="0xa", storage_keys=("0x01",)),
        AccessListEntry(address="0xb", storage_keys=()),
    )

    as_entries = TransactionRequest.model_validate(
        {
            "accessList": [
                {"address": "0xa", "storageKeys": ["0x01"]},
                {"address": "0xb", "storageKeys": []},
            ]
        }
    )
    as_pairs = TransactionRequest.model_validate({"accessList": [["0xa", ["0x01"]], ["0xb", []]]})
    as_mapping = TransactionRequest.model_validate({"accessList": {"0xb": [], "0xa": ["0x01"]}})

    assert as_entries.access_list == expected
    assert as_pairs.access_list == expected
    assert as_mapping.access_list == expected


def test_access_list_rejects_malformed_pairs() -> None:
    with pytest.raises(PydanticValidationError):
        TransactionRequest.model_validate({"accessList": [["0xa", ["0x01"], "extra"]]})


def test_transaction_wire_shape_validates_back_to_equal_model() -> None:
    tx = TransactionRequest.model_validate(
        {
            "to": "0x0000000000000000000000000000000000000001",
            "from": "0x0000000000000000000000000000000000000002",
            "nonce": 3,
            "gasLimit": "21000",
            "value": [0x0D, 0xE0, 0xB6, 0xB3, 0xA7, 0x64, 0x00, 0x00],
            "chainId": 10,
            "data": "0xdeadbeef",
            "type": 2,
            "accessList": {"0x0000000000000000000000000000000000000003": ["0x" + "00" * 32]},
            "customData": {"paymaster": "0x04"},
            "ccipReadEnabled": False,
        }
    )

    wire = tx.to_rpc_dict()

    assert wire["value"] == "0xde0b6b3a7640000"
    assert wire["gasLimit"] == "0x5208"
    assert wire["chainId"] == "0xa"
    assert wire["from"] == "0x0000000000000000000000000000000000000002"
    assert TransactionRequest.model_validate(wire) == tx
