"""Node CRUD endpoints.

All four handlers answer with status 200. Bad input comes back as
``{"errors": [...]}`` so clients have to look at the body, not the status.
The body is read raw rather than through a request model so that malformed
JSON is reported the same way as every other validation problem.
"""

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from adyax_ws.api.dependencies import get_codec, get_repository, get_validator
from adyax_ws.api.models import CreatedResponse, ErrorsResponse, MessageResponse
from adyax_ws.domain import ContentStore
from adyax_ws.metrics import nodes_written, request_duration, validation_failures
from adyax_ws.services import Err, RequestValidator, StructuredDataCodec

logger = structlog.get_logger()

router = APIRouter(
    tags=["nodes"],
)

PATH = "/adyax_ws"

NODE_SAVED = "Node successfully saved."
NODE_UPDATED = "Node successfully updated."
NODE_DELETED = "Node successfully deleted."


def errors_response(operation: str, result: Err) -> JSONResponse:
    """Answer a failed validation step."""
    validation_failures.labels(operation=operation).inc()
    logger.info(
        "node_validation_failed",
        operation=operation,
        errors=result.messages,
    )
    return JSONResponse(ErrorsResponse(errors=result.messages).model_dump())


@router.get(PATH)
async def get_node(
    request: Request,
    validator: RequestValidator = Depends(get_validator),  # noqa: B008
    codec: StructuredDataCodec = Depends(get_codec),  # noqa: B008
) -> JSONResponse:
    """Return the normalized fields of the node named by ``id``."""
    with request_duration.labels(operation="read").time():
        resolved = await validator.resolve_item(request.query_params)
        if isinstance(resolved, Err):
            return errors_response("read", resolved)

        return JSONResponse(codec.normalize(resolved.value))


@router.post(PATH)
async def post_node(
    request: Request,
    validator: RequestValidator = Depends(get_validator),  # noqa: B008
    store: ContentStore = Depends(get_repository),  # noqa: B008
) -> JSONResponse:
    """Create a node from a JSON body with title, type and body."""
    with request_duration.labels(operation="create").time():
        extracted = validator.extract_payload(await request.body())
        if isinstance(extracted, Err):
            return errors_response("create", extracted)

        node = store.create(extracted.value.to_dict())
        checked = await validator.validate_against_schema(node)
        if isinstance(checked, Err):
            return errors_response("create", checked)

        nid = await store.save(node)

    nodes_written.labels(operation="create").inc()
    logger.info("node_created", nid=nid, type=node.type)

    return JSONResponse(CreatedResponse(message=NODE_SAVED, id=nid).model_dump())


@router.put(PATH)
async def put_node(
    request: Request,
    validator: RequestValidator = Depends(get_validator),  # noqa: B008
    store: ContentStore = Depends(get_repository),  # noqa: B008
) -> JSONResponse:
    """Replace the title, type and body of an existing node."""
    with request_duration.labels(operation="update").time():
        resolved = await validator.resolve_item(request.query_params)
        if isinstance(resolved, Err):
            return errors_response("update", resolved)

        extracted = validator.extract_payload(await request.body())
        if isinstance(extracted, Err):
            return errors_response("update", extracted)

        node = resolved.value
        for name, value in extracted.value.items():
            node.set(name, value)

        checked = await validator.validate_against_schema(node)
        if isinstance(checked, Err):
            return errors_response("update", checked)

        await store.save(node)

    nodes_written.labels(operation="update").inc()
    logger.info("node_updated", nid=node.nid)

    return JSONResponse(MessageResponse(message=NODE_UPDATED).model_dump())


@router.delete(PATH)
async def delete_node(
    request: Request,
    validator: RequestValidator = Depends(get_validator),  # noqa: B008
    store: ContentStore = Depends(get_repository),  # noqa: B008
) -> JSONResponse:
    """Delete the node named by ``id``."""
    with request_duration.labels(operation="delete").time():
        resolved = await validator.resolve_item(request.query_params)
        if isinstance(resolved, Err):
            return errors_response("delete", resolved)

        await store.delete(resolved.value)

    nodes_written.labels(operation="delete").inc()
    logger.info("node_deleted", nid=resolved.value.nid)

    return JSONResponse(MessageResponse(message=NODE_DELETED).model_dump())
