"""
Klay JSON-RPC client.

Forwards calls to the ``klay_*`` namespace of a Klaytn node over HTTP and
returns the decoded ``result`` member. No retries are attempted.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, List, Union
import json
import logging
import random

import requests

from ..runtime.codec import int_to_hex
from ..runtime.errors import ErrorCode, RpcError

logger = logging.getLogger(__name__)

BlockNumber = Union[int, str]

BLOCK_TAGS = ("latest", "earliest", "pending")


def _block_param(block_number: BlockNumber) -> str:
    """Encode a block number (int) or tag for the wire."""
    if isinstance(block_number, bool):
        raise ValueError(f"Invalid block number: {block_number!r}")
    if isinstance(block_number, int):
        if block_number < 0:
            raise ValueError(f"Block number must be non-negative, got {block_number}")
        return int_to_hex(block_number)
    if isinstance(block_number, str):
        if block_number in BLOCK_TAGS or block_number.startswith("0x"):
            return block_number
        if block_number.isdigit():
            return int_to_hex(int(block_number))
    raise ValueError(f"Invalid block number or tag: {block_number!r}")


class KlayClient:
    """
    Client for the Klay JSON-RPC API.

    Example:
        ```python
        with KlayClient("https://public-en-kairos.node.kaia.io") as client:
            height = client.get_block_number()
            block = client.get_block_by_number(height, full_transactions=False)
            balance = client.get_balance("0x3e1e7b...", "latest")
        ```
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None
    ):
        """
        Args:
            endpoint: Node HTTP endpoint URL
            timeout: Request timeout in seconds (default: 30)
            session: Optional requests.Session for connection pooling
        """
        self._endpoint = endpoint.rstrip('/')
        self._timeout = timeout
        self._session = session or requests.Session()
        self._owns_session = session is None

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def close(self) -> None:
        """Close the HTTP session if owned by this client."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> KlayClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # =========================================================================
    # Low-level RPC
    # =========================================================================

    def _call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """
        Make a JSON-RPC 2.0 call.

        Raises:
            RpcError: On HTTP failure, transport failure, a non-JSON body or an
                ``error`` member in the response
        """
        request_data: Dict[str, Any] = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params if params is not None else [],
            "id": random.randint(1, 1_000_000),
        }
        logger.debug(f"RPC call {method}")

        try:
            response = self._session.post(
                self._endpoint,
                json=request_data,
                headers={"Content-Type": "application/json"},
                timeout=self._timeout,
            )
        except requests.exceptions.RequestException as e:
            raise RpcError(f"HTTP request failed: {e}", code=ErrorCode.CONNECTION_FAILED, cause=e) from e

        if response.status_code != 200:
            raise RpcError(
                f"HTTP {response.status_code}: {response.reason}",
                rpc_code=response.status_code,
            )

        try:
            response_data = response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise RpcError(f"Invalid JSON response: {e}", code=ErrorCode.INVALID_RESPONSE, cause=e) from e

        if not isinstance(response_data, dict):
            raise RpcError("Invalid JSON-RPC response: expected an object", code=ErrorCode.INVALID_RESPONSE)

        if response_data.get("error") is not None:
            error = response_data["error"]
            if not isinstance(error, dict):
                raise RpcError(str(error), data=error)
            raise RpcError(
                error.get("message", "Unknown error"),
                rpc_code=error.get("code"),
                data=error.get("data"),
            )

        return response_data.get("result")

    def call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """Make a raw JSON-RPC call for methods without a typed wrapper."""
        return self._call(method, params)

    # =========================================================================
    # Account
    # =========================================================================

    def account_created(self, address: str, block_number: BlockNumber = "latest") -> bool:
        return self._call("klay_accountCreated", [address, _block_param(block_number)])

    def get_accounts(self) -> List[str]:
        return self._call("klay_accounts")

    def encode_account_key(self, account_key: Dict[str, Any]) -> str:
        return self._call("klay_encodeAccountKey", [account_key])

    def decode_account_key(self, encoded_account_key: str) -> Dict[str, Any]:
        return self._call("klay_decodeAccountKey", [encoded_account_key])

    def get_account(self, address: str, block_number: BlockNumber = "latest") -> Dict[str, Any]:
        return self._call("klay_getAccount", [address, _block_param(block_number)])

    def get_account_key(self, address: str, block_number: BlockNumber = "latest") -> Dict[str, Any]:
        """Account key of an address, e.g. ``{"keyType": 2, "key": {...}}``."""
        return self._call("klay_getAccountKey", [address, _block_param(block_number)])

    def get_balance(self, address: str, block_number: BlockNumber = "latest") -> str:
        """Balance in peb, hex encoded."""
        return self._call("klay_getBalance", [address, _block_param(block_number)])

    def get_code(self, address: str, block_number: BlockNumber = "latest") -> str:
        return self._call("klay_getCode", [address, _block_param(block_number)])

    def get_transaction_count(self, address: str, block_number: BlockNumber = "latest") -> str:
        """Nonce of an address, hex encoded."""
        return self._call("klay_getTransactionCount", [address, _block_param(block_number)])

    def is_contract_account(self, address: str, block_number: BlockNumber = "latest") -> bool:
        return self._call("klay_isContractAccount", [address, _block_param(block_number)])

    # =========================================================================
    # Block
    # =========================================================================

    def get_block_number(self) -> str:
        return self._call("klay_blockNumber")

    def get_block_by_number(self, block_number: BlockNumber = "latest",
                            full_transactions: bool = False) -> Optional[Dict[str, Any]]:
        return self._call("klay_getBlockByNumber", [_block_param(block_number), full_transactions])

    def get_block_by_hash(self, block_hash: str, full_transactions: bool = False) -> Optional[Dict[str, Any]]:
        return self._call("klay_getBlockByHash", [block_hash, full_transactions])

    def get_block_receipts(self, block_hash: str) -> List[Dict[str, Any]]:
        return self._call("klay_getBlockReceipts", [block_hash])

    def get_block_transaction_count_by_number(self, block_number: BlockNumber = "latest") -> str:
        return self._call("klay_getBlockTransactionCountByNumber", [_block_param(block_number)])

    def get_block_transaction_count_by_hash(self, block_hash: str) -> str:
        return self._call("klay_getBlockTransactionCountByHash", [block_hash])

    def get_block_with_consensus_info_by_number(self, block_number: BlockNumber = "latest") -> Dict[str, Any]:
        return self._call("klay_getBlockWithConsensusInfoByNumber", [_block_param(block_number)])

    def get_block_with_consensus_info_by_hash(self, block_hash: str) -> Dict[str, Any]:
        return self._call("klay_getBlockWithConsensusInfoByHash", [block_hash])

    def get_committee(self, block_number: BlockNumber = "latest") -> List[str]:
        return self._call("klay_getCommittee", [_block_param(block_number)])

    def get_committee_size(self, block_number: BlockNumber = "latest") -> int:
        return self._call("klay_getCommitteeSize", [_block_param(block_number)])

    def get_council(self, block_number: BlockNumber = "latest") -> List[str]:
        return self._call("klay_getCouncil", [_block_param(block_number)])

    def get_council_size(self, block_number: BlockNumber = "latest") -> int:
        return self._call("klay_getCouncilSize", [_block_param(block_number)])

    def get_storage_at(self, address: str, position: Union[int, str],
                       block_number: BlockNumber = "latest") -> str:
        if isinstance(position, int):
            position = int_to_hex(position)
        return self._call("klay_getStorageAt", [address, position, _block_param(block_number)])

    def is_syncing(self) -> Union[bool, Dict[str, Any]]:
        return self._call("klay_syncing")

    def is_mining(self) -> bool:
        return self._call("klay_mining")

    # =========================================================================
    # Transaction
    # =========================================================================

    def call_contract(self, call_object: Dict[str, Any], block_number: BlockNumber = "latest") -> str:
        """Execute a message call without creating a transaction (``klay_call``)."""
        return self._call("klay_call", [call_object, _block_param(block_number)])

    def estimate_gas(self, call_object: Dict[str, Any]) -> str:
        return self._call("klay_estimateGas", [call_object])

    def estimate_computation_cost(self, call_object: Dict[str, Any],
                                  block_number: BlockNumber = "latest") -> str:
        return self._call("klay_estimateComputationCost", [call_object, _block_param(block_number)])

    def get_transaction_by_block_number_and_index(self, block_number: BlockNumber,
                                                  index: int) -> Optional[Dict[str, Any]]:
        return self._call("klay_getTransactionByBlockNumberAndIndex",
                          [_block_param(block_number), int_to_hex(index)])

    def get_transaction_by_block_hash_and_index(self, block_hash: str, index: int) -> Optional[Dict[str, Any]]:
        return self._call("klay_getTransactionByBlockHashAndIndex", [block_hash, int_to_hex(index)])

    def get_transaction_by_hash(self, transaction_hash: str) -> Optional[Dict[str, Any]]:
        return self._call("klay_getTransactionByHash", [transaction_hash])

    def get_transaction_by_sender_tx_hash(self, sender_tx_hash: str) -> Optional[Dict[str, Any]]:
        return self._call("klay_getTransactionBySenderTxHash", [sender_tx_hash])

    def get_transaction_receipt(self, transaction_hash: str) -> Optional[Dict[str, Any]]:
        return self._call("klay_getTransactionReceipt", [transaction_hash])

    def get_transaction_receipt_by_sender_tx_hash(self, sender_tx_hash: str) -> Optional[Dict[str, Any]]:
        return self._call("klay_getTransactionReceiptBySenderTxHash", [sender_tx_hash])

    def send_raw_transaction(self, signed_transaction: str) -> str:
        """
        Submit an RLP-encoded signed transaction.

        Returns:
            Transaction hash
        """
        return self._call("klay_sendRawTransaction", [signed_transaction])

    def get_decoded_anchoring_transaction_by_hash(self, transaction_hash: str) -> Dict[str, Any]:
        return self._call("klay_getDecodedAnchoringTransactionByHash", [transaction_hash])

    # =========================================================================
    # Configuration
    # =========================================================================

    def get_chain_id(self) -> str:
        return self._call("klay_chainID")

    def get_client_version(self) -> str:
        return self._call("klay_clientVersion")

    def get_gas_price(self) -> str:
        return self._call("klay_gasPrice")

    def get_gas_price_at(self, block_number: BlockNumber = "latest") -> str:
        return self._call("klay_gasPriceAt", [_block_param(block_number)])

    def is_parallel_db_write(self) -> bool:
        return self._call("klay_isParallelDBWrite")

    def is_sender_tx_hash_indexing_enabled(self) -> bool:
        return self._call("klay_isSenderTxHashIndexingEnabled")

    def get_protocol_version(self) -> str:
        return self._call("klay_protocolVersion")

    def get_rewardbase(self) -> str:
        return self._call("klay_rewardbase")

    # =========================================================================
    # Filter
    # =========================================================================

    def get_filter_changes(self, filter_id: str) -> List[Any]:
        return self._call("klay_getFilterChanges", [filter_id])

    def get_filter_logs(self, filter_id: str) -> List[Dict[str, Any]]:
        return self._call("klay_getFilterLogs", [filter_id])

    def get_logs(self, filter_options: Dict[str, Any]) -> List[Dict[str, Any]]:
        return self._call("klay_getLogs", [filter_options])

    def new_block_filter(self) -> str:
        return self._call("klay_newBlockFilter")

    def new_filter(self, filter_options: Dict[str, Any]) -> str:
        return self._call("klay_newFilter", [filter_options])

    def new_pending_transaction_filter(self) -> str:
        return self._call("klay_newPendingTransactionFilter")

    def uninstall_filter(self, filter_id: str) -> bool:
        return self._call("klay_uninstallFilter", [filter_id])


__all__ = ["KlayClient", "BlockNumber"]
