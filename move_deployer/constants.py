"""Global constants for move-deployer"""

import re

APP_NAME = "move-deployer"
LOG_FORMAT = "%(message)s"

# External chain tool
APTOS_BIN = "aptos"
APTOS_INSTALL_URL = "https://aptos.dev/en/build/cli"

# Credential store written by the aptos CLI, relative to the working directory
CREDENTIAL_STORE_FILE = ".aptos/config.yaml"
PROFILE_NAME_PREFIX = "move-deployer"

# Package manifest
PACKAGE_MANIFEST_FILE = "Move.toml"
UNBOUND_ADDRESS_PLACEHOLDER = "_"

# Default configuration values
DEFAULT_OUTPUT_JSON = "deploy-report.json"
DEFAULT_NETWORK = "devnet"
DEFAULT_DEPLOY_MODE = "object"
DEFAULT_FUND_AMOUNT = 100_000_000  # octas

# Included artifacts passed to the publish call
ARTIFACTS_ALL = "all"
ARTIFACTS_NONE = "none"

# Network endpoints
NETWORK_REST_URLS = {
    "mainnet": "https://api.mainnet.aptoslabs.com/v1",
    "testnet": "https://api.testnet.aptoslabs.com/v1",
    "devnet": "https://api.devnet.aptoslabs.com/v1",
    "local": None,
}

NETWORK_FAUCET_URLS = {
    "mainnet": None,
    "testnet": "https://faucet.testnet.aptoslabs.com",
    "devnet": "https://faucet.devnet.aptoslabs.com",
    "local": None,
}

# Chunked publishing is only available where the large-packages module lives
CHUNKED_PUBLISH_POLICY = {
    "mainnet": True,
    "testnet": True,
    "devnet": False,
    "local": False,
}

# Output parsing for the publish tool
PACKAGE_TOO_LARGE_PATTERN = re.compile(r"package is larger than \d+ bytes", re.IGNORECASE)
OBJECT_ADDRESS_PATTERN = re.compile(
    r"deployed to object address (0x[0-9a-fA-F]+)", re.IGNORECASE
)


# Error codes
class ErrorCode:
    CONFIG_INVARIANT = "MD001"
    MANIFEST_INVALID = "MD002"
    DEPENDENCY_ORDER = "MD003"
    PACKAGE_TOO_LARGE = "MD004"
    PUBLISH_FAILED = "MD005"
    PROVISIONING_FAILED = "MD006"
    CREDENTIAL_STORE = "MD007"
    REPORT_WRITE_FAILED = "MD008"
    TOOL_NOT_FOUND = "MD009"
    DEPLOY_FAILED = "MD010"
    PUBLISH_DECLINED = "MD011"


# Environment variables
ENV_PRIVATE_KEY = "MOVE_DEPLOYER_PRIVATE_KEY"
ENV_APTOS_BIN = "MOVE_DEPLOYER_APTOS_BIN"

# Display constants
EMOJI_SUCCESS = "✓"
EMOJI_ERROR = "✗"
EMOJI_WARNING = "⚠"
EMOJI_KEY = "🔑"

# Interactive prompts
PROMPT_GENERATE_ACCOUNT = (
    "No private key supplied. Generate a new account and fund it from the "
    "{network} faucet?"
)
PROMPT_PUBLISH = "Publish {address_name} from {package_path} to {network}?"
PROMPT_CHUNKED_PUBLISH = (
    "Package {address_name} is too large for a single transaction. "
    "Retry with chunked publishing?"
)
