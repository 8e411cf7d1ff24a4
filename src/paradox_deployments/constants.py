"""Configuration constants for paradox-deployments library."""

# Network configuration based on ethereum-lists/chains
# rpc_env is checked first, then RPC_URL, then default_rpc_url
NETWORK_CONFIG = {
    "localhost": {
        "chain_id": 31337,
        "chain_name": "Hardhat Localhost",
        "block_explorer_url": None,
        "rpc_env": "LOCALHOST_RPC_URL",
        "default_rpc_url": "http://127.0.0.1:8545",
    },
    "hardhat": {
        "chain_id": 31337,
        "chain_name": "Hardhat Network",
        "block_explorer_url": None,
        "rpc_env": "HARDHAT_RPC_URL",
        "default_rpc_url": "http://127.0.0.1:8545",
    },
    "sepolia": {
        "chain_id": 11155111,
        "chain_name": "Sepolia",
        "block_explorer_url": "https://sepolia.etherscan.io",
        "rpc_env": "SEP_RPC_URL",
        "default_rpc_url": None,
    },
    "mainnet": {
        "chain_id": 1,
        "chain_name": "Ethereum Mainnet",
        "block_explorer_url": "https://etherscan.io",
        "rpc_env": "ETH_RPC_URL",
        "default_rpc_url": None,
    },
}

DEFAULT_NETWORK = "localhost"

# Hardhat writes one directory per compilation run here, never a contract
BUILD_INFO_DIR = "build-info"

# Paradox suite parameters
STAKE_POOL_REWARDS_PER_DAY = 5000
SECONDS_PER_DAY = 24 * 60 * 60
LOCK_DURATION_SECONDS = 60
LOCK_AMOUNT_ETHER = "0.001"

# getSigners() order on a Hardhat node: deployer, alice, bob, charlie, rewardsPool
REWARDS_POOL_SIGNER_INDEX = 4

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
