"""
Logging setup — structlog configuration for applications embedding pemkit.

The codec modules only call structlog.get_logger() and emit dotted events
(parser.complete, parser.failed, encoder.complete, ...). Nothing is
configured on import; the embedding application calls configure_structlog()
once at startup, or configure_from_settings() with its CodecSettings.
"""

from __future__ import annotations

import logging

import structlog

from pemkit.config import CodecSettings


def configure_structlog(log_level: str = "INFO", json: bool = False) -> None:
    """
    Route pemkit's parser/encoder events through structlog.

    Debug level shows one parser.block_decoded event per block; the default
    INFO level only lets parser.failed warnings through. With json=True
    events are rendered as one JSON object per line, for services that ship
    logs to a collector. Unknown level names fall back to INFO.
    """
    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping().get(log_level.strip().upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_from_settings(settings: CodecSettings) -> None:
    configure_structlog(settings.log_level, json=settings.log_json)
