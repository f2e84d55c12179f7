"""Move package manifest reading"""

from pathlib import Path
from typing import Dict, Union

import tomli

from ..api.exceptions import ManifestError
from ..constants import PACKAGE_MANIFEST_FILE


def load_named_addresses(package_path: Union[str, Path]) -> Dict[str, str]:
    """
    Load the named addresses a package declares

    Args:
        package_path: Package directory containing Move.toml

    Returns:
        Address name to placeholder mapping, in declaration order

    Raises:
        ManifestError: If the manifest is missing or malformed
    """
    manifest_path = Path(package_path) / PACKAGE_MANIFEST_FILE

    if not manifest_path.is_file():
        raise ManifestError(f"Package manifest not found: {manifest_path}")

    try:
        with open(manifest_path, 'rb') as f:
            data = tomli.load(f)
    except tomli.TOMLDecodeError as e:
        raise ManifestError(f"Invalid package manifest {manifest_path}: {e}")

    addresses = data.get("addresses", {})
    if not isinstance(addresses, dict):
        raise ManifestError(f"'addresses' in {manifest_path} must be a table")

    return {str(name): str(value) for name, value in addresses.items()}
