"""World registry - factory function

Builds a fully wired WorldRegistry from validated configuration.
"""

from __future__ import annotations

import logging

from ..config_schema import AppConfig
from .environment import ClockProtocol, EntropySource
from .image_pool import ImageSourcePool
from .logger import EventLogger
from .registry import WorldRegistry

logger = logging.getLogger(__name__)


def create_event_logger(config: AppConfig, run_id: str | None = None) -> EventLogger | None:
    """Create the JSONL event logger described by config.

    Returns None when logging.enabled is false. With a run_id the logger
    writes to logs_dir/run_id/events.jsonl, otherwise to output_file.
    """
    logging_config = config.logging
    if not logging_config.enabled:
        return None
    if run_id:
        return EventLogger(
            logs_dir=logging_config.logs_dir,
            run_id=run_id,
            default_recent=logging_config.default_recent,
        )
    return EventLogger(
        output_file=logging_config.output_file,
        default_recent=logging_config.default_recent,
    )


def build_registry(
    config: AppConfig,
    *,
    clock: ClockProtocol | None = None,
    entropy: EntropySource | None = None,
    event_logger: EventLogger | None = None,
) -> WorldRegistry:
    """Create a registry with the configured admin, pool, whitelist and policy.

    Startup whitelist entries and special sources are applied through the
    admin's own operations so they appear in the event log.

    Args:
        config: Validated application config
        clock: Optional clock override (tests)
        entropy: Optional entropy override (tests)
        event_logger: Optional audit log
    """
    registry_config = config.registry
    selection_config = config.special_selection

    pool = ImageSourcePool(
        general_source=registry_config.general_image_source,
        provider_base=registry_config.provider_base,
    )
    registry = WorldRegistry(
        admin=registry_config.admin,
        pool=pool,
        clock=clock,
        entropy=entropy,
        cooldown_seconds=selection_config.cooldown_seconds,
        odds=selection_config.odds,
        versioning=registry_config.versioning,
        event_logger=event_logger,
    )

    admin = registry_config.admin
    for principal in registry_config.whitelist:
        registry.add_to_whitelist(admin, principal)
    for ref in registry_config.special_sources:
        registry.add_special_source(admin, ref)

    logger.debug(
        "Registry built: admin=%s whitelist=%d special_sources=%d",
        admin,
        len(registry_config.whitelist),
        len(registry_config.special_sources),
    )
    return registry
