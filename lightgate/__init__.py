"""lightgate - JSON-RPC gateway for a single Ethereum light client."""

__version__ = "0.1.0"
__logo__ = "⛓"
