"""Install, upgrade and delete releases, then follow the backend until it catches up."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    before_sleep_log,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.retry import retry_base

from chartdeck.config.settings import settings
from chartdeck.core.api_client import BackendClient
from chartdeck.core.errors import NotFound, UpstreamError, ValidationError
from chartdeck.core.lifecycle import LifecycleContext, Navigation, release_navigation, releases_list_navigation
from chartdeck.core.repo_catalog import RepositoryCatalog
from chartdeck.models import LifecycleMode
from chartdeck.models.release import HelmChartDescriptor, HelmChartSpec
from chartdeck.utils.validation import validate_kubernetes_name

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]
RefreshCallback = Callable[["RefreshResult"], None]

_PAST_TENSE = {
    LifecycleMode.INSTALL: "installed",
    LifecycleMode.UPGRADE: "upgraded",
    LifecycleMode.REINSTALL: "reinstalled",
}


@dataclass(frozen=True)
class RefreshPolicy:
    """Bounded exponential backoff used to poll for reconciliation."""

    max_attempts: int = 6
    initial_delay: float = 1.0
    backoff_factor: float = 2.0
    max_delay: float = 5.0

    @classmethod
    def from_settings(cls) -> RefreshPolicy:
        return cls(
            max_attempts=settings.refresh_attempts,
            initial_delay=settings.refresh_delay,
            backoff_factor=settings.refresh_backoff,
            max_delay=settings.refresh_max_delay,
        )

    @property
    def first_delay(self) -> float:
        """Settle time before the first check."""
        return min(self.initial_delay, self.max_delay)

    def wait(self) -> wait_exponential:
        """Delays between checks, continuing the series started by ``first_delay``."""
        return wait_exponential(
            multiplier=self.initial_delay * self.backoff_factor,
            exp_base=self.backoff_factor,
            max=self.max_delay,
        )

    def stop(self) -> stop_after_attempt:
        return stop_after_attempt(max(self.max_attempts, 1))


@dataclass
class RefreshResult:
    reconciled: bool
    attempts: int
    descriptor: HelmChartDescriptor | None = None


@dataclass
class ReleaseForm:
    """Values the user entered for an install/upgrade."""

    version: str
    values_content: str = ""
    release_name: str | None = None
    namespace: str | None = None


@dataclass
class MutationOutcome:
    message: str
    redirect: Navigation
    descriptor: HelmChartDescriptor | None = None
    refresh: asyncio.Task[RefreshResult] | None = field(default=None, repr=False)

    async def wait(self) -> RefreshResult | None:
        """Wait for the scheduled refresh, if any."""
        if self.refresh is None:
            return None
        return await self.refresh

    def cancel(self) -> None:
        if self.refresh is not None and not self.refresh.done():
            self.refresh.cancel()


def build_request(ctx: LifecycleContext, form: ReleaseForm) -> HelmChartDescriptor:
    """Build the HelmChart body for a submission.

    Install and reinstall take the release identity from the form; upgrade
    keeps the identity of the release being edited.  ``spec.repo`` still
    holds the repository *name* here; the coordinator swaps in the URL.
    """
    if ctx.mode is LifecycleMode.VIEW:
        raise ValidationError("a release cannot be submitted from view mode", field="mode")
    if ctx.mode is LifecycleMode.UPGRADE:
        name, namespace = ctx.release_name, ctx.namespace
    else:
        name = form.release_name or ctx.release_name
        namespace = form.namespace or ctx.namespace or settings.default_namespace
    return HelmChartDescriptor(
        name=name or "",
        namespace=namespace or "",
        spec=HelmChartSpec(
            chart=ctx.chart_name or "",
            repo=ctx.repo_name or "",
            target_namespace=namespace or "",
            version=form.version,
            values_content=form.values_content,
        ),
    )


class ReleaseMutationCoordinator:
    """Submits release mutations and schedules a reconciliation refresh."""

    def __init__(
        self,
        backend: BackendClient,
        catalog: RepositoryCatalog,
        *,
        policy: RefreshPolicy | None = None,
        sleep: Sleep = asyncio.sleep,
        on_refresh: RefreshCallback | None = None,
    ):
        self.backend = backend
        self.catalog = catalog
        self.policy = policy or RefreshPolicy.from_settings()
        self._sleep = sleep
        self._on_refresh = on_refresh

    async def install_or_upgrade(
        self,
        request: HelmChartDescriptor,
        mode: LifecycleMode = LifecycleMode.INSTALL,
    ) -> MutationOutcome:
        """Resolve the repository URL, submit, and schedule a refresh.

        Submission errors propagate unchanged; the mutation is not retried.
        """
        validate_kubernetes_name(request.name, "release name")
        validate_kubernetes_name(request.namespace, "namespace")
        if not request.spec.chart:
            raise ValidationError.missing("chart")

        repo_name = request.spec.repo
        repo_url = await self.catalog.url_for_name(repo_name)
        body = dataclasses.replace(request, spec=dataclasses.replace(request.spec, repo=repo_url))

        logger.debug("Submitting %s of %s/%s (chart %s from %s)",
                     mode.value, body.namespace, body.name, body.spec.chart, repo_url)
        created = await self.backend.create_or_update_helmchart(body.namespace, body.to_dict())

        verb = _PAST_TENSE.get(mode, "installed")
        query = {"chart": body.spec.chart, "repo": repo_name, "version": body.spec.version}
        return MutationOutcome(
            message=f"{body.spec.chart} {verb} successfully",
            redirect=release_navigation(body.namespace, body.name, None, {k: v for k, v in query.items() if v}),
            descriptor=created,
            refresh=self._schedule(self.wait_until_installed(body.namespace, body.name)),
        )

    async def delete(self, namespace: str, name: str) -> MutationOutcome:
        await self.backend.delete_helmchart(namespace, name)
        return MutationOutcome(
            message=f"{name} deleted",
            redirect=releases_list_navigation(),
            refresh=self._schedule(self.wait_until_deleted(namespace, name)),
        )

    def _schedule(self, coro: Awaitable[RefreshResult]) -> asyncio.Task[RefreshResult]:
        task = asyncio.ensure_future(coro)
        if self._on_refresh is not None:
            callback = self._on_refresh

            def _done(t: asyncio.Task[RefreshResult]) -> None:
                if not t.cancelled() and t.exception() is None:
                    callback(t.result())

            task.add_done_callback(_done)
        return task

    async def wait_until_installed(self, namespace: str, name: str) -> RefreshResult:
        """Poll the descriptor until its installer job reports completion."""
        attempts = 0

        async def _check() -> HelmChartDescriptor:
            nonlocal attempts
            attempts += 1
            return await self.backend.get_helmchart(namespace, name)

        retrying = self._retrying(
            retry_if_exception_type(UpstreamError)
            | retry_if_result(lambda descriptor: not descriptor.installer_job_completed),
        )
        await self._sleep(self.policy.first_delay)
        outcome = await retrying(_check)
        if isinstance(outcome, RefreshResult):
            logger.info("%s/%s not reconciled after %d attempts", namespace, name, attempts)
            return outcome
        return RefreshResult(reconciled=True, attempts=attempts, descriptor=outcome)

    async def wait_until_deleted(self, namespace: str, name: str) -> RefreshResult:
        """Poll until the descriptor is gone."""
        attempts = 0

        async def _check() -> HelmChartDescriptor | None:
            nonlocal attempts
            attempts += 1
            try:
                return await self.backend.get_helmchart(namespace, name)
            except NotFound:
                return None

        retrying = self._retrying(
            retry_if_exception_type(UpstreamError) | retry_if_result(lambda descriptor: descriptor is not None),
        )
        await self._sleep(self.policy.first_delay)
        outcome = await retrying(_check)
        if isinstance(outcome, RefreshResult):
            logger.info("%s/%s still present after %d attempts", namespace, name, attempts)
            return outcome
        return RefreshResult(reconciled=True, attempts=attempts)

    def _retrying(self, retry: retry_base) -> AsyncRetrying:
        return AsyncRetrying(
            stop=self.policy.stop(),
            wait=self.policy.wait(),
            retry=retry,
            sleep=self._sleep,
            before_sleep=before_sleep_log(logger, logging.DEBUG),
            retry_error_callback=_not_reconciled,
        )


def _not_reconciled(retry_state: RetryCallState) -> RefreshResult:
    outcome = retry_state.outcome
    descriptor = None
    if outcome is not None and not outcome.failed:
        descriptor = outcome.result()
    return RefreshResult(reconciled=False, attempts=retry_state.attempt_number, descriptor=descriptor)
