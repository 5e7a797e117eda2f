# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Service Kernel - process entry point for running a service.

The kernel is responsible for:
    1. Configuring logging from the environment
    2. Building the Service from a configuration file
    3. Starting the service (transport, background registration)
    4. Waiting for SIGINT/SIGTERM and shutting the service down

Environment Variables:
    SERVICE_LOG_LEVEL: Logging level (default: INFO)

Exit Codes:
    0: Clean shutdown
    1: Configuration error, startup error, or unexpected failure
"""

from __future__ import annotations

import asyncio
import logging
import os
import signal
import sys
from pathlib import Path

from service_foundation.errors import InvalidConfigError, ServiceFoundationError
from service_foundation.runtime.service import Service
from service_foundation.utils import generate_correlation_id

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def configure_logging(level: str | None = None) -> None:
    """Configure root logging.

    Args:
        level: Log level name. Defaults to SERVICE_LOG_LEVEL, then INFO.
            Invalid names fall back to INFO with a note on stderr.
    """
    log_level = (level or os.getenv("SERVICE_LOG_LEVEL", "INFO")).upper()
    if log_level not in VALID_LOG_LEVELS:
        print(
            f"Warning: Invalid log level '{log_level}', using INFO. "
            f"Valid levels: {', '.join(sorted(VALID_LOG_LEVELS))}",
            file=sys.stderr,
        )
        log_level = "INFO"

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


async def bootstrap(
    config_path: Path,
    config_format: str = "json",
    shutdown_event: asyncio.Event | None = None,
) -> int:
    """Run a service until a shutdown signal arrives.

    Args:
        config_path: Service configuration file.
        config_format: ``json`` or ``yaml``.
        shutdown_event: Event ending the run. Created (and wired to
            SIGINT/SIGTERM) when omitted.

    Returns:
        Process exit code.
    """
    correlation_id = generate_correlation_id()
    service: Service | None = None

    try:
        service = Service(config_path, config_format)

        if shutdown_event is None:
            shutdown_event = asyncio.Event()
            _install_signal_handlers(shutdown_event, correlation_id)

        await service.start()
        await shutdown_event.wait()
        logger.info(
            "Shutdown requested, stopping service (correlation_id=%s)", correlation_id
        )
        return 0

    except InvalidConfigError:
        logger.exception(
            "Service configuration invalid (correlation_id=%s)",
            correlation_id,
            extra={"config_path": str(config_path)},
        )
        return 1

    except ServiceFoundationError as e:
        logger.exception(
            "Service failed to start (correlation_id=%s)",
            correlation_id,
            extra={"error_type": type(e).__name__, "error_code": e.error_code.value},
        )
        return 1

    except Exception as e:
        logger.exception(
            "Service failed with unexpected error: %s (correlation_id=%s)",
            e,
            correlation_id,
            extra={"error_type": type(e).__name__},
        )
        return 1

    finally:
        if service is not None:
            try:
                await service.stop()
            except Exception as cleanup_error:
                logger.warning(
                    "Failed to stop service during cleanup: %s (correlation_id=%s)",
                    cleanup_error,
                    correlation_id,
                )


def _install_signal_handlers(shutdown_event: asyncio.Event, correlation_id: object) -> None:
    loop = asyncio.get_running_loop()

    def handle_shutdown(sig: signal.Signals) -> None:
        logger.info(
            "Received %s, initiating graceful shutdown... (correlation_id=%s)",
            sig.name,
            correlation_id,
        )
        shutdown_event.set()

    if sys.platform != "win32":
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, handle_shutdown, sig)
    else:
        # signal.signal handlers run outside the loop thread on Windows
        def windows_handler(signum: int, frame: object) -> None:
            sig = signal.Signals(signum)
            logger.info(
                "Received %s, initiating graceful shutdown... (correlation_id=%s)",
                sig.name,
                correlation_id,
            )
            loop.call_soon_threadsafe(shutdown_event.set)

        signal.signal(signal.SIGINT, windows_handler)


def run(config_path: Path, config_format: str = "json") -> int:
    """Synchronous entry point: run ``bootstrap`` in a fresh event loop."""
    return asyncio.run(bootstrap(config_path, config_format))


__all__: list[str] = ["bootstrap", "configure_logging", "run"]
