"""Wallet connector descriptions for the browser wallet integration.

The injected (browser extension) and WalletLink connectors are long-lived
module singletons. The WalletConnect connector is not: see
:func:`get_wallet_connect_connector`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple

from . import config

__all__ = [
    "InjectedConnector",
    "WalletConnectConnector",
    "WalletLinkConnector",
    "supported_chain_ids",
    "rpc_urls",
    "build_injected_connector",
    "build_walletlink_connector",
    "get_wallet_connect_connector",
    "INJECTED_CONNECTOR",
    "WALLETLINK_CONNECTOR",
]


@dataclass(frozen=True)
class InjectedConnector:
    supported_chain_ids: Tuple[int, ...]


@dataclass(frozen=True)
class WalletConnectConnector:
    rpc: Dict[int, str] = field(default_factory=dict)


@dataclass(frozen=True)
class WalletLinkConnector:
    url: str
    app_name: str
    supported_chain_ids: Tuple[int, ...]


def supported_chain_ids() -> Tuple[int, ...]:
    if config.IS_DEVELOPMENT:
        return (config.TESTNET_CHAIN_ID,)
    return (config.MAINNET_CHAIN_ID,)


def rpc_urls() -> Dict[int, str]:
    if config.IS_DEVELOPMENT:
        return {config.TESTNET_CHAIN_ID: config.TESTNET_URI}
    return {config.MAINNET_CHAIN_ID: config.MAINNET_URI}


def build_injected_connector() -> InjectedConnector:
    return InjectedConnector(supported_chain_ids=supported_chain_ids())


def build_walletlink_connector() -> WalletLinkConnector:
    (url,) = rpc_urls().values()
    return WalletLinkConnector(
        url=url,
        app_name=config.WALLETLINK_APP_NAME,
        supported_chain_ids=supported_chain_ids(),
    )


def get_wallet_connect_connector() -> WalletConnectConnector:
    """Return a brand-new WalletConnect connector.

    Compatibility shim: the upstream WalletConnect connector hangs forever when
    it is activated a second time, so callers must ask for a fresh handle
    before every connection attempt instead of reusing one. Nothing is cached
    here; once the upstream defect is fixed this can become a singleton like
    the other connectors without touching callers.
    See https://github.com/NoahZinsmeister/web3-react/pull/130.
    """

    return WalletConnectConnector(rpc=rpc_urls())


INJECTED_CONNECTOR = build_injected_connector()
WALLETLINK_CONNECTOR = build_walletlink_connector()
