"""HTTP routes for the DoH responder."""

import logging
import time
import typing

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse, Response

from src.services.logger import log_dns_query
from src.services.response_assembler import ResponseAssembler
from src.services.wire_codec import DecodeError, decode_query, encode_message


logger = logging.getLogger(__name__)

DNS_MESSAGE_TYPE = "application/dns-message"

router = APIRouter()


async def get_assembler(request: Request) -> ResponseAssembler:
    """Return the assembler created by the application lifespan."""
    return typing.cast(ResponseAssembler, request.app.state.assembler)


AssemblerDep = typing.Annotated[ResponseAssembler, Depends(get_assembler)]


@router.get("/dns-query")
async def dns_query(
    assembler: AssemblerDep,
    dns: typing.Optional[str] = Query(default=None),
) -> Response:
    """Answer a DoH GET request (RFC 8484 ?dns= parameter).

    Returns 400 for a missing or undecodable parameter; every other outcome
    is a 200 DNS response, possibly without answers.
    """
    start = time.time()

    if not dns:
        return PlainTextResponse("Missing query in ?dns=", status_code=400)

    try:
        query = decode_query(dns)
    except DecodeError as e:
        logger.info(f"Rejected DoH request: {e}")
        return PlainTextResponse("Invalid query", status_code=400)

    response = await assembler.assemble(query)

    log_dns_query(
        query_id=query.id,
        questions=[question.name for question in query.questions],
        answers=len(response.answers),
        duration_ms=int((time.time() - start) * 1000),
    )
    return Response(content=encode_message(response), media_type=DNS_MESSAGE_TYPE)


@router.get("/version")
async def version(request: Request) -> PlainTextResponse:
    """Report the installed package version as plain text."""
    return PlainTextResponse(request.app.version)


@router.get("/")
async def welcome(request: Request) -> PlainTextResponse:
    """Greet the caller with the host name the request was sent to."""
    return PlainTextResponse(f"Welcome to {request.url.hostname}")
