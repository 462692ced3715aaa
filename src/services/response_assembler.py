"""Response assembly for DoH abuse-contact queries."""

import asyncio
import logging

from src.models.dns_message import DnsMessage, Question, QuestionType, ResourceRecord
from src.services.abuse_client import AbuseContactClient
from src.services.reverse_resolver import ReverseNameResolver


logger = logging.getLogger(__name__)


class ResponseAssembler:
    """Builds the DNS response for a decoded query.

    Only TXT questions under a reverse zone produce answers. Everything
    else (other types, unrelated names, upstream misses or failures,
    non-query messages) contributes nothing, and the response is still
    authoritative and well formed.
    """

    def __init__(self, resolver: ReverseNameResolver, client: AbuseContactClient):
        """Initialize assembler.

        Args:
            resolver: Reverse-lookup name resolver.
            client: Abuse-contact directory client.
        """
        self.resolver = resolver
        self.client = client

    async def answer_question(self, question: Question) -> list[ResourceRecord]:
        """Produce the TXT answers for a single question.

        Args:
            question: Decoded question.

        Returns:
            list[ResourceRecord]: One record per abuse contact, in upstream
            order; empty when there is nothing to answer.
        """
        if question.type != QuestionType.TXT:
            return []

        lookup = self.resolver.resolve(question.name)
        if lookup is None:
            return []

        logger.debug(
            f"Question {question.name} is IPv{int(lookup.family)} address "
            f"{lookup.address}"
        )
        result = await self.client.lookup(lookup.address)
        if result.is_error():
            logger.debug(f"No answers for {question.name}: upstream lookup failed")
            return []
        if not result.is_found():
            return []

        return [
            ResourceRecord(name=question.name, data=addr) for addr in result.contacts
        ]

    async def assemble(self, query: DnsMessage) -> DnsMessage:
        """Assemble the response to a decoded query.

        Questions are resolved concurrently; answers are merged in question
        order.

        Args:
            query: Decoded client message.

        Returns:
            DnsMessage: Response with the query's id and the AA flag set.
        """
        response = DnsMessage.response_to(query)

        if not query.is_query:
            logger.debug(f"Message {query.id} is not a query, answering empty")
            return response

        per_question = await asyncio.gather(
            *(self.answer_question(question) for question in query.questions)
        )
        for answers in per_question:
            for record in answers:
                response.add_txt_answer(record.name, record.data)

        return response
