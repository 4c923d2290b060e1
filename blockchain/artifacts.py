"""
Contract Artifacts
Loads compiled contracts from the Hardhat artifacts tree
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from loguru import logger

from .exceptions import ArtifactNotFoundError, InvalidArtifactError


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled contract: interface plus creation bytecode"""

    name: str
    abi: List[Dict[str, Any]] = field(repr=False)
    bytecode: str = field(repr=False)
    compiler_version: Optional[str] = None


def get_artifact_path(name: str, artifacts_dir: Union[Path, str]) -> Path:
    """
    Path of a contract artifact in Hardhat's layout

    Args:
        name: Contract name, e.g. "GridToken"
        artifacts_dir: Hardhat artifacts directory

    Returns:
        <artifacts_dir>/contracts/<name>.sol/<name>.json
    """
    return Path(artifacts_dir) / "contracts" / f"{name}.sol" / f"{name}.json"


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidArtifactError(f"Artifact {path} is not valid JSON: {e}")


def _read_solc_version(artifact_path: Path) -> Optional[str]:
    """Solc version from the artifact's .dbg.json build-info link, if any"""
    dbg_path = artifact_path.with_name(artifact_path.stem + ".dbg.json")
    if not dbg_path.exists():
        return None

    try:
        with open(dbg_path, "r") as f:
            build_info_ref = json.load(f).get("buildInfo")
        if not build_info_ref:
            return None

        build_info_path = (dbg_path.parent / build_info_ref).resolve()
        with open(build_info_path, "r") as f:
            return json.load(f).get("solcVersion")

    except (OSError, json.JSONDecodeError) as e:
        logger.debug(f"Could not read build info for {artifact_path.name}: {e}")
        return None


def load_artifact(
    name: str,
    artifacts_dir: Union[Path, str],
    expected_compiler_version: Optional[str] = None
) -> ContractArtifact:
    """
    Load a compiled contract

    Args:
        name: Contract name
        artifacts_dir: Hardhat artifacts directory
        expected_compiler_version: Warn when the artifact was built with another solc

    Returns:
        ContractArtifact

    Raises:
        ArtifactNotFoundError: artifact file is missing
        InvalidArtifactError: artifact has no ABI or no creation bytecode
    """
    path = get_artifact_path(name, artifacts_dir)

    if not path.exists():
        raise ArtifactNotFoundError(
            f"Contract artifact not found: {path} (run 'npx hardhat compile' first)"
        )

    contract_json = _read_json(path)

    abi = contract_json.get("abi")
    bytecode = contract_json.get("bytecode")

    if not isinstance(abi, list):
        raise InvalidArtifactError(f"Artifact {path} has no ABI")

    # Interfaces and abstract contracts compile to empty bytecode
    if not isinstance(bytecode, str) or bytecode in ("", "0x"):
        raise InvalidArtifactError(f"Artifact {path} has no deployable bytecode")

    compiler_version = _read_solc_version(path)

    if (
        expected_compiler_version
        and compiler_version
        and compiler_version != expected_compiler_version
    ):
        logger.warning(
            f"{name} was compiled with solc {compiler_version}, "
            f"expected {expected_compiler_version}"
        )

    logger.debug(f"Loaded artifact {path} ({len(abi)} ABI entries)")

    return ContractArtifact(
        name=contract_json.get("contractName", name),
        abi=abi,
        bytecode=bytecode,
        compiler_version=compiler_version,
    )
