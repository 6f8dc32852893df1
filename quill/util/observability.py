"""Observability configuration using Logfire.

Application code logs and traces through logfire directly:

    with logfire.span("post_service.create_post", title=title):
        ...
        logfire.info("Post created", post_id=str(post.id), slug=post.slug)
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from quill.config import ObservabilitySettings, Settings

# Credentials that pass through auth spans and must never be exported
SCRUBBED_FIELDS = ["password_hash", "refresh_token", "access_token"]


def _should_send(observability: ObservabilitySettings) -> bool:
    # An explicit flag wins; otherwise send whenever a token is configured
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the API process and scripts.

    Set OBSERVABILITY__LOGFIRE_TOKEN to ship telemetry to Logfire cloud, or
    force it on or off with OBSERVABILITY__SEND_TO_LOGFIRE. Without either,
    output stays on the console.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings.observability)

    logfire.configure(
        service_name="quill-api",
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUBBED_FIELDS),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request, tagging list queries with their filters.

    Headers are not captured since they carry bearer tokens.
    """

    def _request_attributes(request, attributes):
        result = {**attributes, "method": request.method, "path": request.url.path}
        for name in ("page", "category", "tag", "search"):
            if name in request.query_params:
                result[f"query.{name}"] = request.query_params[name]
        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL statements issued through the engine."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
