"""Shared test fixtures: a token map and wallet contexts."""

import pytest

from src.lp.models import ChainInfo, NetworkContext, Token
from src.lp.networks import MAINNET_PASSPHRASE, TESTNET_PASSPHRASE
from tests.fakes import AQUA, USDC, USER, XLM


@pytest.fixture
def token_map() -> dict[str, Token]:
    return {
        XLM: Token(contract=XLM, name="Stellar Lumens", code="XLM"),
        USDC: Token(contract=USDC, name="USD Coin", code="USDC"),
        AQUA: Token(contract=AQUA, name="Aqua", code="AQUA"),
    }


@pytest.fixture
def mainnet_ctx() -> NetworkContext:
    return NetworkContext(
        active_chain=ChainInfo(network_passphrase=MAINNET_PASSPHRASE, name="mainnet"),
        address=USER,
    )


@pytest.fixture
def testnet_ctx() -> NetworkContext:
    return NetworkContext(
        active_chain=ChainInfo(network_passphrase=TESTNET_PASSPHRASE, name="testnet"),
        address=USER,
    )


@pytest.fixture
def standalone_ctx() -> NetworkContext:
    return NetworkContext(
        active_chain=ChainInfo(
            network_passphrase="Standalone Network ; February 2017", name="standalone"
        ),
        address=USER,
    )
