from chains.dto import ChainConfig


base = ChainConfig(
    chain_id=8453,
    name="base",
    display_name="Base",
    symbol="ETH",
    explorer="https://basescan.org/",
    rpc_url="https://base.drpc.org",
)
