# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Registration Client.

Announces this service to the selected registry and drives the retry loop.

Wire Call:
    POST http://{registry_host}:{registry_port}/v1/catalog/register
    Body: guid, name, version, prefix, port, hostname
    Deadline: 1000 ms per attempt
    Success band: HTTP 200-304 inclusive

Outcome Classification:
    - Status in the success band: SUCCESS, retries stop for good
    - Any other status: REJECTED, logged with the response body, no retry
    - Connection actively refused (ECONNREFUSED) or attempt deadline
      exceeded: CONNECTION_FAILED, one retry scheduled after 10 000 ms,
      indefinitely
    - Anything else, including unresolvable or unreachable hosts:
      UNKNOWN_ERROR, no retry

State Machine:
    IDLE -> ATTEMPTING -> (SCHEDULED_RETRY -> ATTEMPTING)* -> RESOLVED

    At most one attempt is in flight. The next attempt is scheduled only
    after the previous one has been classified. Every attempt re-reads the
    configuration through ``config_provider`` and targets the candidate
    selected at construction; no re-selection happens between retries.

Failure Semantics:
    No registration failure escapes this client. Every branch logs and either
    stops or reschedules, so callers may run ``start()`` as a background task.

Thread Safety:
    Single event loop only. The retry timer callback runs on the loop that
    scheduled it.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable
from uuid import UUID

import httpx
from pydantic import ValidationError

from service_foundation.enums import (
    EnumInfraTransportType,
    EnumRegistrationOutcome,
    EnumRegistrationState,
)
from service_foundation.errors import (
    InfraConnectionError,
    InfraTimeoutError,
    InfraUnavailableError,
    ModelServiceErrorContext,
    RegistrationRejectedError,
    ServiceFoundationError,
)
from service_foundation.models import (
    ModelRegistrationOutcome,
    ModelRegistrationRequest,
    ModelRegistryCandidate,
    ModelServiceConfig,
    ModelServiceEndpoint,
    ModelServiceIdentity,
)
from service_foundation.services.retry_scheduler import (
    AsyncioRetryScheduler,
    ProtocolRetryScheduler,
    ProtocolTimerHandle,
)
from service_foundation.utils import generate_correlation_id, is_connection_refused

logger = logging.getLogger(__name__)

REGISTER_PATH = "/v1/catalog/register"
DEFAULT_REGISTER_TIMEOUT_SECONDS: float = 1.0
DEFAULT_RETRY_DELAY_SECONDS: float = 10.0
SUCCESS_STATUS_MIN = 200
SUCCESS_STATUS_MAX = 304


def is_success_status(status_code: int) -> bool:
    """Return True if the registry status falls in the success band."""
    return SUCCESS_STATUS_MIN <= status_code <= SUCCESS_STATUS_MAX


def _decode_body(response: httpx.Response) -> object:
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return response.text


class RegistrationClient:
    """Registers this service with a registry and retries while it is unreachable.

    Attributes:
        target: Registry selected at construction (None disables registration).
        state: Current state of the retry state machine.
        last_outcome: Outcome of the most recent attempt.
        attempt_count: Number of attempts made so far.

    Example:
        >>> client = RegistrationClient(lambda: service.config, target=candidate)
        >>> task = asyncio.create_task(client.start())  # fire-and-forget
        >>> ...
        >>> await client.close()
    """

    def __init__(
        self,
        config_provider: Callable[[], ModelServiceConfig],
        target: ModelRegistryCandidate | None,
        *,
        http_client: httpx.AsyncClient | None = None,
        scheduler: ProtocolRetryScheduler | None = None,
        timeout_seconds: float = DEFAULT_REGISTER_TIMEOUT_SECONDS,
        retry_delay_seconds: float = DEFAULT_RETRY_DELAY_SECONDS,
    ) -> None:
        """Initialize the client in the IDLE state.

        Args:
            config_provider: Returns the current service configuration. Called
                once per attempt; the client keeps no reference to the result.
            target: Registry to register with, or None when no registry is
                configured.
            http_client: Optional httpx client. When omitted the client creates
                and owns one, closed by ``close()``.
            scheduler: Retry scheduler (default: event loop timer).
            timeout_seconds: Deadline of a single attempt.
            retry_delay_seconds: Fixed delay before retrying an unreachable registry.
        """
        self._config_provider = config_provider
        self._target = target
        self._http_client = http_client
        self._owns_http_client = http_client is None
        self._scheduler: ProtocolRetryScheduler = scheduler or AsyncioRetryScheduler()
        self._timeout_seconds = timeout_seconds
        self._retry_delay_seconds = retry_delay_seconds

        self._state = EnumRegistrationState.IDLE
        self._last_outcome: ModelRegistrationOutcome | None = None
        self._attempt_count = 0
        self._timer_handle: ProtocolTimerHandle | None = None
        self._attempt_task: asyncio.Task[None] | None = None
        self._closed = False

    @property
    def target(self) -> ModelRegistryCandidate | None:
        return self._target

    @property
    def state(self) -> EnumRegistrationState:
        return self._state

    @property
    def last_outcome(self) -> ModelRegistrationOutcome | None:
        return self._last_outcome

    @property
    def attempt_count(self) -> int:
        return self._attempt_count

    @property
    def attempt_in_progress(self) -> bool:
        return self._state is EnumRegistrationState.ATTEMPTING

    @property
    def next_attempt_scheduled(self) -> bool:
        return self._state is EnumRegistrationState.SCHEDULED_RETRY

    @property
    def resolved_kind(self) -> EnumRegistrationOutcome | None:
        """Return the terminal outcome kind, or None if unresolved or disabled."""
        if self._state is not EnumRegistrationState.RESOLVED or self._last_outcome is None:
            return None
        return self._last_outcome.kind

    @property
    def current_attempt(self) -> asyncio.Task[None] | None:
        """Return the task of the attempt started by the retry timer, if any."""
        return self._attempt_task

    async def start(self) -> None:
        """Run the first attempt and hand over to the retry timer if needed.

        Safe to call as a background task: never raises for registration
        failures. Calling it outside the IDLE state is a no-op.
        """
        if self._state is not EnumRegistrationState.IDLE or self._closed:
            logger.debug(
                "Registration already started, skipping",
                extra={"state": self._state.value},
            )
            return

        if self._target is None:
            logger.warning(
                "Service tried to register, but no registry service is specified in configuration"
            )
            self._state = EnumRegistrationState.RESOLVED
            return

        await self._run_attempt(self._target)

    def rearm(self) -> bool:
        """Return a resolved, unsuccessful client to IDLE so ``start()`` runs again.

        Never called by the service itself; rejected registrations stay
        terminal for the process lifetime unless a caller re-arms explicitly.

        Returns:
            True if the client was re-armed.
        """
        if self._state is not EnumRegistrationState.RESOLVED or self._closed:
            return False
        if self._last_outcome is not None and (
            self._last_outcome.kind is EnumRegistrationOutcome.SUCCESS
        ):
            return False
        self._state = EnumRegistrationState.IDLE
        return True

    async def register(
        self,
        identity: ModelServiceIdentity,
        self_endpoint: ModelServiceEndpoint,
        target: ModelRegistryCandidate,
        prefix: str = "",
        *,
        attempt: int | None = None,
    ) -> ModelRegistrationOutcome:
        """Perform a single registration call and classify its outcome.

        Args:
            identity: Identity of this service.
            self_endpoint: Where this service is reachable.
            target: Registry to register with.
            prefix: Route prefix the service is mounted under.
            attempt: Attempt number recorded in error context.

        Returns:
            The classified outcome. Never raises for registration failures.
        """
        correlation_id = generate_correlation_id()
        try:
            request = ModelRegistrationRequest(
                identity=identity, prefix=prefix, endpoint=self_endpoint
            )
            status_code = await self._post_registration(
                request, target, correlation_id, attempt
            )
        except RegistrationRejectedError as e:
            return ModelRegistrationOutcome.rejected(e.status_code, e.body)
        except (InfraConnectionError, InfraTimeoutError) as e:
            return ModelRegistrationOutcome.connection_failed(str(e))
        except ServiceFoundationError as e:
            return ModelRegistrationOutcome.unknown_error(str(e))
        except Exception as e:
            logger.debug(
                "Unexpected error during registration (correlation_id=%s)",
                correlation_id,
                exc_info=True,
                extra={"error_type": type(e).__name__},
            )
            return ModelRegistrationOutcome.unknown_error(type(e).__name__)
        return ModelRegistrationOutcome.success(status_code)

    async def close(self) -> None:
        """Cancel a pending retry and release the owned HTTP client."""
        self._closed = True
        if self._timer_handle is not None:
            self._timer_handle.cancel()
            self._timer_handle = None
        task = self._attempt_task
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        if self._owns_http_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def _run_attempt(self, target: ModelRegistryCandidate) -> None:
        self._state = EnumRegistrationState.ATTEMPTING
        self._timer_handle = None
        self._attempt_count += 1

        outcome = await self._attempt_once(target)
        self._last_outcome = outcome
        self._log_outcome(outcome, target)

        if outcome.is_retryable and not self._closed:
            self._state = EnumRegistrationState.SCHEDULED_RETRY
            self._timer_handle = self._scheduler.schedule(
                self._retry_delay_seconds, self._on_retry_timer
            )
        else:
            self._state = EnumRegistrationState.RESOLVED

    async def _attempt_once(
        self, target: ModelRegistryCandidate
    ) -> ModelRegistrationOutcome:
        try:
            config = self._config_provider()
            identity = config.identity
            self_endpoint = config.self_endpoint
            prefix = config.prefix
        except ValidationError as e:
            return ModelRegistrationOutcome.unknown_error(
                f"Invalid registration request: {e.error_count()} validation error(s)"
            )
        except Exception as e:
            logger.debug(
                "Failed to read configuration for registration",
                exc_info=True,
                extra={"error_type": type(e).__name__},
            )
            return ModelRegistrationOutcome.unknown_error(type(e).__name__)
        return await self.register(
            identity, self_endpoint, target, prefix, attempt=self._attempt_count
        )

    def _on_retry_timer(self) -> None:
        self._timer_handle = None
        if self._closed or self._target is None:
            return
        # Retries keep the target selected at construction.
        self._attempt_task = asyncio.get_running_loop().create_task(
            self._run_attempt(self._target)
        )

    async def _post_registration(
        self,
        request: ModelRegistrationRequest,
        target: ModelRegistryCandidate,
        correlation_id: UUID,
        attempt: int | None = None,
    ) -> int:
        url = f"{target.endpoint.base_url}{REGISTER_PATH}"
        ctx = ModelServiceErrorContext.for_endpoint(
            EnumInfraTransportType.REGISTRY,
            "register",
            target.endpoint,
            attempt=attempt,
            correlation_id=correlation_id,
        )
        client = self._get_http_client()

        try:
            async with asyncio.timeout(self._timeout_seconds):
                response = await client.post(url, json=request.to_wire_body())
        except (TimeoutError, httpx.TimeoutException) as e:
            raise InfraTimeoutError(
                f"Registration request timed out after {self._timeout_seconds}s",
                context=ctx,
                timeout_seconds=self._timeout_seconds,
            ) from e
        except httpx.ConnectError as e:
            if is_connection_refused(e):
                raise InfraConnectionError(
                    f"Registry at {target.endpoint} refused the connection", context=ctx
                ) from e
            raise InfraUnavailableError(
                f"Registry at {target.endpoint} is unreachable: {e}", context=ctx
            ) from e
        except httpx.HTTPError as e:
            raise InfraUnavailableError(
                f"HTTP error during registration: {type(e).__name__}", context=ctx
            ) from e

        if not is_success_status(response.status_code):
            raise RegistrationRejectedError(
                f"Registry rejected registration ({response.status_code})",
                status_code=response.status_code,
                body=_decode_body(response),
                context=ctx,
            )
        return response.status_code

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout_seconds)
            )
        return self._http_client

    def _log_outcome(
        self, outcome: ModelRegistrationOutcome, target: ModelRegistryCandidate
    ) -> None:
        extra: dict[str, object] = {
            "target": str(target.endpoint),
            "attempt": self._attempt_count,
            "outcome": outcome.kind.value,
        }
        if outcome.kind is EnumRegistrationOutcome.SUCCESS:
            logger.info("Service is registered", extra=extra)
        elif outcome.kind is EnumRegistrationOutcome.REJECTED:
            logger.warning(
                "Failed to register service (%s).",
                outcome.status_code,
                extra={**extra, "data": outcome.body},
            )
        elif outcome.kind is EnumRegistrationOutcome.CONNECTION_FAILED:
            logger.warning(
                "Failed to register service (is registry service up?). "
                "Retrying after %g seconds...",
                self._retry_delay_seconds,
                extra={**extra, "detail": outcome.detail},
            )
        else:
            logger.warning(
                "Failed to register service (unknown error).",
                extra={**extra, "detail": outcome.detail},
            )


__all__: list[str] = [
    "DEFAULT_REGISTER_TIMEOUT_SECONDS",
    "DEFAULT_RETRY_DELAY_SECONDS",
    "REGISTER_PATH",
    "RegistrationClient",
    "is_success_status",
]
