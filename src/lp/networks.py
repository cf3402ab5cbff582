"""Network classification by Stellar network passphrase."""

from enum import Enum

MAINNET_PASSPHRASE = "Public Global Stellar Network ; September 2015"
TESTNET_PASSPHRASE = "Test SDF Network ; September 2015"


class NetworkKind(str, Enum):
    MAINNET = "mainnet"
    TESTNET = "testnet"
    OTHER = "other"  # futurenet, standalone, custom RPC


_BY_PASSPHRASE: dict[str, NetworkKind] = {
    MAINNET_PASSPHRASE: NetworkKind.MAINNET,
    TESTNET_PASSPHRASE: NetworkKind.TESTNET,
}


def classify_network(passphrase: str | None) -> NetworkKind:
    """Classify a network passphrase. Unknown or empty passphrases are OTHER."""
    if not passphrase:
        return NetworkKind.OTHER
    return _BY_PASSPHRASE.get(passphrase, NetworkKind.OTHER)


def backend_network_name(kind: NetworkKind) -> str | None:
    """Network name understood by the indexing backend, None if it has no index."""
    if kind is NetworkKind.OTHER:
        return None
    return kind.value
