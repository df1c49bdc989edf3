from swapstake.erc20.token import Erc20TokenDescriptor

SEPOLIA_CHAIN_ID = 11155111

# Sepolia --------------- START
SepoliaUsdc = Erc20TokenDescriptor(
    chain_id=SEPOLIA_CHAIN_ID,
    address="0x1c7D4B196Cb0C7B01d743Fbc6116a902379C7238",  # type: ignore[arg-type]
    decimals=6,
    symbol="USDC",
    name="USD//C",
)
SepoliaLink = Erc20TokenDescriptor(
    chain_id=SEPOLIA_CHAIN_ID,
    address="0x779877A7B0D9E8603169DdbD7836e478b4624789",  # type: ignore[arg-type]
    decimals=18,
    symbol="LINK",
    name="Chainlink",
)
# Sepolia --------------- END
