"""Exception definitions for move-deployer"""

from ..constants import ErrorCode


class DeployerError(Exception):
    """Base exception for move-deployer"""

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigInvariantError(DeployerError):
    """Configuration is inconsistent or incomplete"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CONFIG_INVARIANT)


class ManifestError(ConfigInvariantError):
    """Package manifest is missing or malformed"""

    def __init__(self, message: str):
        super().__init__(message)
        self.error_code = ErrorCode.MANIFEST_INVALID


class DependencyOrderError(DeployerError):
    """A package references an address that has not been deployed yet"""

    def __init__(self, name: str, dependent: str):
        message = f"{name} must be deployed before {dependent}"
        super().__init__(message, ErrorCode.DEPENDENCY_ORDER)
        self.name = name
        self.dependent = dependent


class PublishError(DeployerError):
    """Publishing a package failed"""

    def __init__(self, message: str, error_code: str = ErrorCode.PUBLISH_FAILED):
        super().__init__(message, error_code)


class PackageSizeExceededError(PublishError):
    """Package payload does not fit in a single transaction"""

    def __init__(self, package_path: str, detail: str = ""):
        message = f"Package at {package_path} is too large to publish in one transaction"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, ErrorCode.PACKAGE_TOO_LARGE)
        self.package_path = package_path


class PublishDeclinedError(PublishError):
    """User declined to publish a package"""

    def __init__(self, address_name: str):
        super().__init__(f"Publishing {address_name} was declined", ErrorCode.PUBLISH_DECLINED)
        self.address_name = address_name


class ProvisioningError(DeployerError):
    """Sender account or network endpoints could not be established"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.PROVISIONING_FAILED)


class CredentialStoreError(DeployerError):
    """Credential store could not be read or written"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.CREDENTIAL_STORE)


class ReportWriteError(DeployerError):
    """Deployment report could not be persisted"""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to write report to {path}: {reason}", ErrorCode.REPORT_WRITE_FAILED)
        self.path = path


class ToolNotFoundError(DeployerError):
    """External chain tool is not installed"""

    def __init__(self, tool: str, install_url: str):
        message = f"{tool} CLI not found. Please install it from {install_url}"
        super().__init__(message, ErrorCode.TOOL_NOT_FOUND)
        self.tool = tool


class DeployError(DeployerError):
    """Unexpected failure inside a deployment run"""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.DEPLOY_FAILED)
