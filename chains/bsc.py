from chains.dto import ChainConfig


bsc = ChainConfig(
    chain_id=56,
    name="bsc",
    display_name="BSC",
    symbol="BNB",
    explorer="https://bscscan.com/",
    rpc_url="https://bsc.rpc.blxrbdn.com",
)
