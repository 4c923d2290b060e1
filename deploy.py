"""
Contract Deployment
Deploys one compiled contract to the selected network
"""

import argparse
import os
import signal
import sys
import threading
from dataclasses import asdict
from typing import Dict, List, Optional

from dotenv import load_dotenv
from loguru import logger

from blockchain.artifacts import load_artifact
from blockchain.contract_deployer import ContractDeployer, DeploymentResult
from blockchain.exceptions import DeploymentError
from blockchain.network_config import DeploySettings, get_supported_networks, resolve_network
from utils.rpc_manager import RPCManager


def configure_logging(level: str = "INFO", log_file: Optional[str] = None):
    """Install stderr (and optional file) sinks"""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=level
    )
    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
            level="DEBUG"
        )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="deploy",
        description="Deploy a compiled contract and print its address"
    )
    parser.add_argument("--network", help="Target network (env: DEPLOY_NETWORK, default: hardhat)",
                        choices=get_supported_networks())
    parser.add_argument("--contract", help="Contract name (env: DEPLOY_CONTRACT)")
    parser.add_argument("--artifacts", help="Hardhat artifacts directory (env: ARTIFACTS_DIR)")
    parser.add_argument("--timeout", type=float, help="Confirmation timeout in seconds (env: DEPLOY_TIMEOUT)")
    parser.add_argument("--log-level", help="Log level (env: LOG_LEVEL, default: INFO)")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace, env: Dict[str, str]) -> DeploySettings:
    """Command-line flags override environment values"""
    settings = DeploySettings.from_env(env)
    overrides = {
        "network": args.network,
        "contract_name": args.contract,
        "artifacts_dir": args.artifacts,
        "confirmation_timeout": args.timeout,
    }
    return DeploySettings(**{
        **asdict(settings),
        **{k: v for k, v in overrides.items() if v is not None}
    })


def deploy_contract(
    settings: DeploySettings,
    env: Dict[str, str],
    cancel_event: Optional[threading.Event] = None
) -> DeploymentResult:
    """
    Resolve, load, connect, deploy

    Args:
        settings: Invocation settings
        env: Environment values for the network profile
        cancel_event: Set to abandon the confirmation wait

    Returns:
        DeploymentResult
    """
    # Fails before anything touches the network
    profile = resolve_network(settings.network, env)

    artifact = load_artifact(
        settings.contract_name,
        settings.artifacts_dir,
        expected_compiler_version=profile.compiler_version
    )

    w3 = RPCManager(profile).get_web3()

    deployer = ContractDeployer(
        w3,
        profile,
        confirmation_timeout=settings.confirmation_timeout,
        poll_interval=settings.poll_interval,
        cancel_event=cancel_event
    )
    return deployer.deploy(artifact)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point

    Returns:
        Process exit code: 0 when confirmed, 1 on any failure
    """
    load_dotenv(os.path.join(os.getcwd(), ".env"))
    args = parse_args(argv)
    env = dict(os.environ)

    configure_logging(
        level=(args.log_level or env.get("LOG_LEVEL") or "INFO").upper(),
        log_file=env.get("LOG_FILE")
    )

    cancel_event = threading.Event()

    def _signal_handler(signum, frame):
        logger.warning(f"Received signal {signum}, cancelling")
        cancel_event.set()

    previous_handlers = {}
    if threading.current_thread() is threading.main_thread():
        for signum in (signal.SIGINT, signal.SIGTERM):
            previous_handlers[signum] = signal.signal(signum, _signal_handler)

    try:
        settings = build_settings(args, env)
        logger.debug(f"Settings: {asdict(settings)}")
        deploy_contract(settings, env, cancel_event=cancel_event)
        return 0

    except DeploymentError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except Exception as e:
        logger.error(f"Fatal error: {type(e).__name__}: {e}")
        return 1
    finally:
        for signum, handler in previous_handlers.items():
            signal.signal(signum, handler)


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
