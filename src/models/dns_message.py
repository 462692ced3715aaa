"""DNS message models exchanged between the wire codec and the assembler."""

from dataclasses import dataclass, field
from enum import Enum

import dns.flags
import dns.rdataclass
import dns.rdatatype


# Fixed TTL for every emitted answer, independent of upstream freshness
ANSWER_TTL = 300


class QuestionType(Enum):
    """Question types the responder distinguishes."""

    TXT = "TXT"
    OTHER = "OTHER"


@dataclass(frozen=True)
class Question:
    """A single entry of the question section.

    Attributes:
        name: Dot-separated labels without the trailing dot.
        rdtype: Raw query type code, echoed unchanged in the response.
        rdclass: Raw query class code (IN for every decoded question).
    """

    name: str
    rdtype: int
    rdclass: int = dns.rdataclass.IN

    @property
    def type(self) -> QuestionType:
        """Classify the question as TXT or anything else.

        Returns:
            QuestionType: TXT for TXT questions, OTHER otherwise.
        """
        if self.rdtype == dns.rdatatype.TXT:
            return QuestionType.TXT
        return QuestionType.OTHER


@dataclass(frozen=True)
class ResourceRecord:
    """A TXT answer record.

    Attributes:
        name: Owner name, the question name echoed back.
        data: Text payload (one abuse-contact address).
        ttl: Time to live in seconds.
    """

    name: str
    data: str
    ttl: int = ANSWER_TTL
    rdtype: int = dns.rdatatype.TXT
    rdclass: int = dns.rdataclass.IN


@dataclass
class DnsMessage:
    """Structured DNS message.

    Attributes:
        id: 16-bit transaction id.
        is_query: True for decoded client input, False for built responses.
        flags: Header flag bits excluding QR (see dns.flags).
        questions: Question section.
        answers: Answer section, in append order.

    Invariants:
        - A response built by response_to() carries the query's id.
    """

    id: int
    is_query: bool
    flags: int = 0
    questions: list[Question] = field(default_factory=list)
    answers: list[ResourceRecord] = field(default_factory=list)

    @classmethod
    def response_to(cls, query: "DnsMessage") -> "DnsMessage":
        """Build the authoritative response shell for a decoded query.

        Args:
            query: The decoded client message.

        Returns:
            DnsMessage: Same id, AA flag set, questions echoed, no answers.
        """
        return cls(
            id=query.id,
            is_query=False,
            flags=int(dns.flags.AA),
            questions=list(query.questions),
        )

    def add_txt_answer(self, name: str, data: str) -> ResourceRecord:
        """Append one TXT answer with the fixed class and TTL."""
        record = ResourceRecord(name=name, data=data)
        self.answers.append(record)
        return record
