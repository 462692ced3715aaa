"""Unit tests for DNS message models."""

import dns.flags
import dns.rdataclass
import dns.rdatatype

from src.models.dns_message import (
    ANSWER_TTL,
    DnsMessage,
    Question,
    QuestionType,
    ResourceRecord,
)


def test_question_type_classification():
    """Test TXT questions are distinguished from everything else."""
    assert Question("a.example", dns.rdatatype.TXT).type == QuestionType.TXT
    assert Question("a.example", dns.rdatatype.A).type == QuestionType.OTHER
    assert Question("a.example", dns.rdatatype.PTR).type == QuestionType.OTHER
    assert Question("a.example", 65280).type == QuestionType.OTHER


def test_resource_record_defaults():
    """Test answers default to class IN, type TXT and the fixed TTL."""
    record = ResourceRecord(name="4.3.2.1.in-addr.arpa", data="a@x.com")

    assert record.ttl == ANSWER_TTL == 300
    assert record.rdtype == dns.rdatatype.TXT
    assert record.rdclass == dns.rdataclass.IN


def test_response_to_copies_id_and_questions():
    """Test the response shell mirrors the query."""
    questions = [Question("4.3.2.1.in-addr.arpa", dns.rdatatype.TXT)]
    query = DnsMessage(
        id=31337, is_query=True, flags=int(dns.flags.RD), questions=questions
    )

    response = DnsMessage.response_to(query)

    assert response.id == 31337
    assert response.is_query is False
    assert response.flags == dns.flags.AA
    assert response.questions == questions
    assert response.questions is not query.questions
    assert response.answers == []


def test_add_txt_answer_appends_in_order():
    """Test answers accumulate in append order."""
    response = DnsMessage(id=1, is_query=False)

    response.add_txt_answer("n.example", "a@x.com")
    response.add_txt_answer("n.example", "b@y.com")

    assert [record.data for record in response.answers] == ["a@x.com", "b@y.com"]
    assert all(record.ttl == 300 for record in response.answers)
