"""Deploy service: ordered package deployment with partial-failure bookkeeping"""

import asyncio
import dataclasses
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from .account_provisioner import AccountProvisioner, Confirm, Funder, resolve_endpoints
from .credential_scope import CredentialScope
from .publish_invoker import AptosCliPublisher, PublishInvoker, PublishOutcome, PublishRequest
from ..api.exceptions import (
    DeployError,
    DeployerError,
    PackageSizeExceededError,
    PublishDeclinedError,
    PublishError,
    ReportWriteError,
)
from ..constants import CREDENTIAL_STORE_FILE, PROMPT_CHUNKED_PUBLISH, PROMPT_PUBLISH
from ..core.address_book import AddressBook
from ..core.address_resolver import AddressResolver
from ..core.manifest_loader import load_named_addresses
from ..core.report_writer import write_report
from ..models.account import ProvisionedAccount
from ..models.config import DeployConfig, DeployMode, normalize_address
from ..models.report import DeploymentReport, TransactionRecord
from ..models.result import DeployResult, PackageState, RunStatus
from ..utils.process_utils import check_aptos_installed

logger = logging.getLogger(__name__)

ManifestLoader = Callable[[Path], Dict[str, str]]
PublisherFactory = Callable[[str], PublishInvoker]


class RecordLog:
    """Transaction records accumulated by a run

    Written by the deployment task, read once by the caller after the
    task has finished.
    """

    def __init__(self):
        self._records: List[TransactionRecord] = []
        self._lock = asyncio.Lock()

    async def append(self, record: TransactionRecord) -> None:
        async with self._lock:
            self._records.append(record)

    async def extend(self, records: List[TransactionRecord]) -> None:
        async with self._lock:
            self._records.extend(records)

    async def snapshot(self) -> List[TransactionRecord]:
        async with self._lock:
            return list(self._records)


def carried_records(config: DeployConfig) -> List[TransactionRecord]:
    """Records of a resumed report whose address is still in effect

    A record is dropped when the run binds its name to a different address,
    so the new report never lists two locations for one name.
    """
    carried = []
    for record in config.resumed_records:
        bound = config.deployed_addresses.get(record.address_name)
        try:
            still_bound = bound is not None and \
                normalize_address(bound) == normalize_address(record.deployed_at)
        except ValueError:
            still_bound = False

        if still_bound:
            carried.append(record)
        else:
            logger.warning("Dropping resumed record for %s, its address was overridden",
                           record.address_name)
    return carried


class DeploymentSequencer:
    """Deploys packages strictly in configuration order

    Each package is skipped when its address is already known, otherwise
    resolved, published and recorded. The first fatal error stops the
    sequence; records of earlier packages stay in the log.
    """

    def __init__(self,
                 config: DeployConfig,
                 sender_address: str,
                 publisher: PublishInvoker,
                 records: RecordLog,
                 confirm: Optional[Confirm] = None,
                 manifest_loader: ManifestLoader = load_named_addresses):
        self.config = config
        self.sender_address = sender_address
        self.publisher = publisher
        self.records = records
        self.confirm = confirm
        self.manifest_loader = manifest_loader

        self.address_book = AddressBook(config.deployed_addresses)
        self.resolver = AddressResolver(config.mode, sender_address)
        self.states: Dict[str, PackageState] = {
            name: PackageState.PENDING for name in config.address_names
        }

    async def run(self) -> None:
        """Process every package in order"""
        for package_path, address_name in self.config.packages:
            await self.deploy_package(package_path, address_name)

    async def deploy_package(self,
                             package_path: Path,
                             address_name: str) -> Optional[TransactionRecord]:
        """
        Deploy a single package

        Returns:
            The new record, or None when the package was skipped
        """
        if address_name in self.address_book:
            self.states[address_name] = PackageState.SKIPPED
            logger.info(
                "Skipping %s, already deployed at %s",
                address_name,
                self.address_book.get(address_name)
            )
            return None

        try:
            self.states[address_name] = PackageState.RESOLVING
            address_table = dict(self.manifest_loader(package_path))
            if self.config.mode == DeployMode.OBJECT:
                address_table.pop(address_name, None)
            substitutions = self.resolver.resolve(address_table, self.address_book, address_name)

            if not self.config.assume_yes:
                question = PROMPT_PUBLISH.format(
                    address_name=address_name,
                    package_path=package_path,
                    network=self.config.network.value,
                )
                if self.confirm is None or not self.confirm(question):
                    raise PublishDeclinedError(address_name)

            self.states[address_name] = PackageState.PUBLISHING
            logger.info("Deploying package %s with address name %s", package_path, address_name)
            # confirmed above or by --yes, the tool itself never prompts
            request = PublishRequest(
                package_path=package_path,
                mode=self.config.mode,
                address_name=address_name,
                substitutions=substitutions,
                included_artifacts=self.config.included_artifacts,
                assume_yes=True,
            )
            outcome = await self._publish(request)

            deployed_at = self._deployed_address(outcome, address_name)
            self.address_book.bind(address_name, deployed_at)
        except BaseException:
            self.states[address_name] = PackageState.FAILED
            raise

        record = TransactionRecord(
            package_path=package_path,
            address_name=address_name,
            deployed_at=self.address_book.get(address_name),
            tx_info=outcome.transactions,
        )
        await self.records.append(record)
        self.states[address_name] = PackageState.RECORDED

        logger.info("Package %s deployed at %s", address_name, record.deployed_at)
        return record

    async def _publish(self, request: PublishRequest) -> PublishOutcome:
        try:
            return await self.publisher.invoke(request)
        except PackageSizeExceededError:
            network = self.config.network
            if not network.supports_chunked_publish:
                logger.error("Chunked publishing is not available on %s", network.value)
                raise

            if not self.config.assume_yes:
                question = PROMPT_CHUNKED_PUBLISH.format(address_name=request.address_name)
                if self.confirm is None or not self.confirm(question):
                    raise

            self.states[request.address_name] = PackageState.RETRYING_CHUNKED
            logger.info("Retrying %s with chunked publishing", request.address_name)

        return await self.publisher.invoke(dataclasses.replace(request, chunked=True))

    def _deployed_address(self, outcome: PublishOutcome, address_name: str) -> str:
        if self.config.mode == DeployMode.ACCOUNT:
            return self.sender_address
        if not outcome.object_address:
            raise PublishError(f"No object address returned for {address_name}")
        return outcome.object_address


class DeployService:
    """Runs a whole deployment: account, credentials, packages and report"""

    def __init__(self,
                 confirm: Optional[Confirm] = None,
                 funder: Optional[Funder] = None,
                 publisher_factory: Optional[PublisherFactory] = None,
                 manifest_loader: ManifestLoader = load_named_addresses,
                 credential_store: Union[str, Path] = CREDENTIAL_STORE_FILE,
                 on_account: Optional[Callable[[ProvisionedAccount], None]] = None):
        """
        Initialize deploy service

        Args:
            confirm: Asks the user a yes/no question
            funder: Faucet funding call for generated accounts
            publisher_factory: Builds the publish backend for a profile name,
                defaults to the aptos CLI
            manifest_loader: Reads a package's named addresses
            credential_store: Credential store the transient profile goes into
            on_account: Called with the sender account before deploying
        """
        self.confirm = confirm
        self.provisioner = AccountProvisioner(confirm=confirm, funder=funder)
        self.publisher_factory = publisher_factory
        self.manifest_loader = manifest_loader
        self.credential_store = Path(credential_store)
        self.on_account = on_account

    async def deploy(self, config: DeployConfig) -> DeployResult:
        """
        Run a deployment, raising its first error

        The report is written before the error is raised.

        Raises:
            DeployerError: The first fatal error of the run
        """
        result = await self.run(config)
        if result.error is not None:
            raise result.error
        return result

    async def run(self, config: DeployConfig) -> DeployResult:
        """
        Run a deployment and capture its outcome

        The report is written once on every exit path, including a declined
        account generation and failures before the first publish.

        Returns:
            DeployResult; ``error`` holds the fatal error if the run aborted
        """
        result = DeployResult(
            status=RunStatus.ABORTED,
            report=DeploymentReport(account=None, network=config.network.value),
        )
        records = RecordLog()

        try:
            await self._run(config, records, result)
        finally:
            result.report.info = await records.snapshot()
            await self._write_report(config, result)

        if result.status == RunStatus.CANCELLED:
            result.complete()
        else:
            result.complete(RunStatus.ABORTED if result.error else RunStatus.COMPLETED)
        return result

    async def _run(self, config: DeployConfig, records: RecordLog, result: DeployResult) -> None:
        try:
            config.validate()
            await records.extend(carried_records(config))
            endpoints = resolve_endpoints(config)
            if self.publisher_factory is None:
                check_aptos_installed()

            account = await self.provisioner.provision(config, endpoints)
        except DeployerError as e:
            logger.error("%s", e)
            result.error = e
            return

        if account is None:
            result.status = RunStatus.CANCELLED
            return

        result.account = account
        result.report.account = account.address
        if self.on_account is not None:
            self.on_account(account)

        config = dataclasses.replace(config, private_key=account.private_key)
        scope = CredentialScope(
            account=account,
            network=config.network,
            endpoints=endpoints,
            store_path=self.credential_store,
            custom_endpoint=config.rest_url is not None,
        )

        try:
            async with scope as profile:
                await self._run_packages(config, account, profile, records, result)
        except DeployerError as e:
            # credential store could not be prepared or cleaned up
            if result.error is None:
                result.error = e
            else:
                logger.error("%s", e)

    async def _run_packages(self,
                            config: DeployConfig,
                            account: ProvisionedAccount,
                            profile: str,
                            records: RecordLog,
                            result: DeployResult) -> None:
        publisher = (self.publisher_factory or AptosCliPublisher)(profile)
        sequencer = DeploymentSequencer(
            config=config,
            sender_address=account.address,
            publisher=publisher,
            records=records,
            confirm=self.confirm,
            manifest_loader=self.manifest_loader,
        )
        result.package_states = sequencer.states

        task = asyncio.create_task(sequencer.run())
        try:
            await task
        except DeployerError as e:
            logger.error("Deployment aborted: %s", e)
            result.error = e
        except Exception as e:
            logger.exception("Unexpected failure during deployment")
            error = DeployError(f"Unexpected failure during deployment: {e}")
            error.__cause__ = e
            result.error = error

    async def _write_report(self, config: DeployConfig, result: DeployResult) -> None:
        """Persist the report; a deployment error takes precedence over a write error"""
        try:
            result.report_path = str(await write_report(config.output_json, result.report))
        except ReportWriteError as e:
            if result.error is None:
                result.error = e
            else:
                logger.error("%s", e)
