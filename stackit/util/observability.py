"""Logfire setup and instrumentation.

Application code logs and traces through logfire directly:

    import logfire

    logfire.info("Vote recorded", target_id=str(target_id), score=score)

    with logfire.span("vote_service.submit_vote", target_id=str(target_id)):
        ...
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from stackit.config import Settings


def _should_send(settings: Settings) -> bool:
    explicit = settings.observability.send_to_logfire
    if explicit is not None:
        return explicit
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure logfire for the process.

    Spans go to the console; they are also exported to Logfire cloud when
    OBSERVABILITY__LOGFIRE_TOKEN is set, unless OBSERVABILITY__SEND_TO_LOGFIRE
    says otherwise.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings)

    logfire.configure(
        service_name="stackit-api",
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
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
    """Trace every HTTP request handled by the app."""

    def _request_attributes(request, attributes):
        result = {**attributes, "method": request.method, "path": request.url.path}
        if request.client:
            result["client_host"] = request.client.host
        return result

    # Headers are left out: Authorization and cookies carry bearer tokens
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace every query, including the row locks and savepoints taken for votes."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)
