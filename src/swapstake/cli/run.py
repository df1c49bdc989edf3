import sys

import click
from eth_account import Account

from swapstake.config import Settings
from swapstake.connection import set_web3
from swapstake.exceptions import SwapStakeError
from swapstake.transaction.client import Web3ChainClient
from swapstake.workflow import SwapStakeWorkflow, WorkflowConfig, WorkflowFailure

from . import cli
from .utils import get_web3_from_settings


@cli.command("run")
@click.option(
    "--swap-amount",
    required=True,
    type=str,
    help="Amount of the input token to swap, in human units (e.g. 1.5)",
)
@click.option(
    "--stake-amount",
    required=True,
    type=str,
    help="Amount of the stake token to deposit, in human units",
)
@click.option(
    "--pool-id",
    required=True,
    type=click.IntRange(min=0),
    help="Staking pool ID on the staking contract",
)
@click.pass_obj
def run(
    settings: Settings,
    swap_amount: str,
    stake_amount: str,
    pool_id: int,
) -> None:
    """
    Approve and swap the input token, then approve and stake the result.
    """

    if settings.private_key is None:
        raise click.UsageError("No private key configured. Set PRIVATE_KEY in the environment.")

    try:
        signer = Account.from_key(settings.private_key.get_secret_value())
    except ValueError:
        raise click.UsageError("The configured private key is not valid.") from None

    try:
        workflow_config = WorkflowConfig.from_settings(settings)
        w3 = get_web3_from_settings(settings)
        set_web3(w3)
        if w3.eth.chain_id != settings.network.chain_id:
            raise click.ClickException(
                f"The chain ID ({w3.eth.chain_id}) at the RPC endpoint does not match "
                f"the chain ID ({settings.network.chain_id}) defined in the config file."
            )
        client = Web3ChainClient(
            w3,
            gas_limit_multiplier=settings.workflow.gas_limit_multiplier,
            poll_latency=settings.workflow.poll_latency,
        )
    except SwapStakeError as exc:
        raise click.ClickException(exc.message or str(exc)) from exc

    result = SwapStakeWorkflow(
        client=client,
        signer=signer,
        config=workflow_config,
    ).run(
        swap_amount=swap_amount,
        stake_amount=stake_amount,
        pool_id=pool_id,
    )

    match result:
        case WorkflowFailure():
            click.echo(f"Failed at step '{result.failed_step}' ({result.error_kind})", err=True)
            click.echo(f"  {result.detail}", err=True)
            for step, tx_hash in zip(
                result.confirmed_steps, result.confirmed_tx_hashes, strict=True
            ):
                click.echo(f"  confirmed {step}: {tx_hash}", err=True)
            sys.exit(1)
        case _:
            click.echo(f"Approve (swap):  {result.approve_swap_tx_hash}")
            click.echo(f"Swap:            {result.swap_tx_hash}")
            click.echo(f"Approve (stake): {result.approve_stake_tx_hash}")
            click.echo(f"Stake:           {result.stake_tx_hash}")
