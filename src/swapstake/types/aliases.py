type ChainId = int
type StakingPoolId = int
