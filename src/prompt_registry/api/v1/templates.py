"""Template listing, lookup and dispatch endpoints."""

from fastapi import APIRouter, Depends

from prompt_registry.api.dependencies import get_dispatcher
from prompt_registry.models.api import (
    DispatchRequest,
    RunRequest,
    TemplateDetail,
    TemplateList,
    TemplateSummary,
)
from prompt_registry.models.templates import ResolvedPrompt
from prompt_registry.registry.dispatcher import Dispatcher
from prompt_registry.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["templates"])


@router.get("/templates", response_model=TemplateList)
async def list_templates(dispatcher: Dispatcher = Depends(get_dispatcher)) -> TemplateList:
    """
    List loaded templates.

    Returns:
        Summaries of every template, sorted by identifier
    """
    data = [TemplateSummary.from_definition(definition) for definition in dispatcher.store.definitions()]
    logger.debug(f"Returning {len(data)} template(s)", extra={"template_count": len(data)})
    return TemplateList(data=data)


@router.get("/templates/{identifier}", response_model=TemplateDetail)
async def get_template(
    identifier: str,
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> TemplateDetail:
    """
    Return one template including its raw body.

    NotFoundError propagates to the application's error handler (404).
    """
    return TemplateDetail.from_definition(dispatcher.store.get(identifier))


@router.post("/templates/{identifier}/run", response_model=ResolvedPrompt)
async def run_template(
    identifier: str,
    request_data: RunRequest,
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> ResolvedPrompt:
    """
    Resolve a template by identifier.

    Args:
        identifier: Template identifier from the path
        request_data: Placeholder values

    Returns:
        Resolved text and declared tools
    """
    logger.info(
        "Template run requested",
        extra={"template": identifier, "value_keys": sorted(request_data.values)},
    )
    return dispatcher.run(identifier, request_data.values)


@router.post("/dispatch", response_model=ResolvedPrompt)
async def dispatch_intent(
    request_data: DispatchRequest,
    dispatcher: Dispatcher = Depends(get_dispatcher),
) -> ResolvedPrompt:
    """
    Select a template from a free-text intent and resolve it.

    Args:
        request_data: Intent and placeholder values

    Returns:
        Resolved text and declared tools of the matched template
    """
    logger.info("Dispatch requested", extra={"intent": request_data.intent})
    return dispatcher.dispatch(request_data.intent, request_data.values)
