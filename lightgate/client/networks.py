"""
Network registry for the light client.

Supported Ethereum networks and their default consensus endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class Network:
    """Ethereum network the light client follows"""
    name: str
    chain_id: int
    consensus_rpc: str
    is_testnet: bool = False
    block_explorer: str = ""


class SupportedNetworks:
    """Registry of supported networks"""

    MAINNET = Network(
        name="mainnet",
        chain_id=1,
        consensus_rpc="https://www.lightclientdata.org",
        block_explorer="https://etherscan.io",
    )

    SEPOLIA = Network(
        name="sepolia",
        chain_id=11155111,
        consensus_rpc="https://ethereum-sepolia-beacon-api.publicnode.com",
        is_testnet=True,
        block_explorer="https://sepolia.etherscan.io",
    )

    HOLESKY = Network(
        name="holesky",
        chain_id=17000,
        consensus_rpc="https://ethereum-holesky-beacon-api.publicnode.com",
        is_testnet=True,
        block_explorer="https://holesky.etherscan.io",
    )

    NETWORKS: Dict[str, Network] = {
        "mainnet": MAINNET,
        "sepolia": SEPOLIA,
        "holesky": HOLESKY,
    }

    @classmethod
    def get(cls, name: str) -> Network | None:
        """Look up a network by name (case-insensitive)"""
        return cls.NETWORKS.get((name or "").strip().lower())

    @classmethod
    def by_chain_id(cls, chain_id: int) -> Network | None:
        for network in cls.NETWORKS.values():
            if network.chain_id == chain_id:
                return network
        return None

    @classmethod
    def names(cls) -> List[str]:
        return list(cls.NETWORKS)
