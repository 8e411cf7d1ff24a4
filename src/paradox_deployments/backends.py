"""web3.py chain backend for paradox-deployments library."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from eth_account import Account
from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted, Web3Exception

from .exceptions import ConfirmationTimeoutError, ConstructorRevertedError, TransactionRejectedError
from .types import Confirmation, ContractArtifact

logger = logging.getLogger(__name__)

# Receipt polling window used when no timeout is configured
WAIT_WINDOW_SECONDS = 120.0


class Web3Backend:
    """Deploys contracts through a web3.py connection."""

    def __init__(
        self,
        w3: Web3,
        private_key: Optional[str] = None,
        receipt_timeout: Optional[float] = None,
        poll_latency: float = 0.5,
    ):
        """
        Initialize the backend.

        Args:
            w3: Connected Web3 instance
            private_key: Deployer key for local signing
                         If None, the node's first unlocked account sends
            receipt_timeout: Seconds to wait for each receipt
                             If None, waits indefinitely
            poll_latency: Seconds between receipt polls
        """
        self.w3 = w3
        self.account = Account.from_key(private_key) if private_key else None
        self.receipt_timeout = receipt_timeout
        self.poll_latency = poll_latency
        self._sender: Optional[str] = None

    @classmethod
    def from_rpc_url(cls, rpc_url: str, **kwargs: Any) -> "Web3Backend":
        return cls(Web3(Web3.HTTPProvider(rpc_url)), **kwargs)

    @property
    def sender(self) -> str:
        """Address that signs and pays for deployments."""
        if self._sender is None:
            if self.account is not None:
                self._sender = self.account.address
            else:
                accounts = self.accounts()
                if not accounts:
                    raise TransactionRejectedError(
                        "Node exposes no unlocked accounts; set DEPLOYER_PRIVATE_KEY"
                    )
                self._sender = accounts[0]
        return self._sender

    def accounts(self) -> List[str]:
        return list(self.w3.eth.accounts)

    def submit(self, artifact: ContractArtifact, args: Sequence[Any], value: int = 0) -> str:
        """
        Submit a contract-creation transaction.

        Args:
            artifact: Compiled contract to deploy
            args: Constructor arguments
            value: Wei attached to the transaction

        Returns:
            0x-prefixed transaction hash

        Raises:
            ConstructorRevertedError: If the constructor reverts during gas estimation
            TransactionRejectedError: If the node rejects the transaction
        """
        factory = self.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
        tx_params: Dict[str, Any] = {"from": self.sender, "value": value}

        try:
            constructor = factory.constructor(*args)
            if self.account is not None:
                tx_params["nonce"] = self.w3.eth.get_transaction_count(self.sender, "pending")
                tx = constructor.build_transaction(tx_params)
                signed = self.account.sign_transaction(tx)
                tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
            else:
                tx_hash = constructor.transact(tx_params)
        # ContractLogicError is a Web3Exception, so it must be caught first
        except ContractLogicError as e:
            raise ConstructorRevertedError(f"{artifact.name} constructor reverted: {e}") from e
        except (Web3Exception, ValueError) as e:
            raise TransactionRejectedError(
                f"Deployment of {artifact.name} was rejected: {e}"
            ) from e

        return Web3.to_hex(tx_hash)

    def wait_for_confirmation(self, transaction_hash: str) -> Confirmation:
        """
        Block until a transaction is mined.

        Args:
            transaction_hash: Hash returned by submit()

        Returns:
            Confirmation built from the receipt

        Raises:
            ConfirmationTimeoutError: If a receipt timeout is configured and elapses
        """
        window = self.receipt_timeout if self.receipt_timeout is not None else WAIT_WINDOW_SECONDS
        while True:
            try:
                receipt = self.w3.eth.wait_for_transaction_receipt(
                    transaction_hash, timeout=window, poll_latency=self.poll_latency
                )
                break
            except TimeExhausted as e:
                if self.receipt_timeout is not None:
                    raise ConfirmationTimeoutError(
                        f"Transaction {transaction_hash} not mined after {self.receipt_timeout}s"
                    ) from e
                logger.info("Still waiting for transaction %s", transaction_hash)

        return Confirmation(
            transaction_hash=Web3.to_hex(receipt["transactionHash"]),
            contract_address=receipt.get("contractAddress"),
            block_number=receipt["blockNumber"],
            status=receipt["status"],
            gas_used=receipt.get("gasUsed"),
        )
