"""DNS wire-format codec for DoH GET requests and responses."""

import base64
import binascii
import logging

import dns.exception
import dns.flags
import dns.message
import dns.name
import dns.opcode
import dns.rdataclass
import dns.rdatatype
import dns.rdtypes.ANY.TXT
import dns.rrset

from src.models.dns_message import DnsMessage, Question, ResourceRecord


logger = logging.getLogger(__name__)


# Longest character-string a single TXT segment can carry
MAX_TXT_SEGMENT = 255

# Largest DNS message a DoH response may carry
MAX_MESSAGE_SIZE = 65535


class DecodeError(Exception):
    """Raised when a client-supplied DNS message cannot be decoded."""


class InvalidBase64Error(DecodeError):
    """The ?dns= parameter is not valid base64 / base64url."""


class MalformedPacketError(DecodeError):
    """The decoded bytes are not a well-formed DNS message."""


def decode_base64url(encoded: str) -> bytes:
    """Decode base64url text, with or without '=' padding.

    The standard alphabet ('+', '/') is accepted as well.

    Args:
        encoded: Value of the ?dns= query parameter.

    Returns:
        bytes: Raw DNS message.

    Raises:
        InvalidBase64Error: If the text is not valid base64.

    Examples:
        >>> decode_base64url("AAE")
        b'\\x00\\x01'
    """
    padded = encoded + "=" * (-len(encoded) % 4)
    try:
        return base64.b64decode(padded, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidBase64Error(f"Invalid base64 payload: {e}") from e


def _name_to_text(name: dns.name.Name) -> str:
    if name == dns.name.root:
        return ""
    return name.to_text(omit_final_dot=True)


def _text_to_name(text: str) -> dns.name.Name:
    return dns.name.from_text(text) if text else dns.name.root


def decode_message(wire: bytes) -> DnsMessage:
    """Parse a raw DNS message into a DnsMessage.

    Only the header and question section are kept; answer, authority and
    additional sections are parsed for consistency and then ignored.

    Args:
        wire: Raw DNS message bytes.

    Returns:
        DnsMessage: Decoded message.

    Raises:
        MalformedPacketError: On truncated or inconsistent input, or a
            question with a class other than IN.
    """
    try:
        parsed = dns.message.from_wire(wire)
    except (dns.exception.DNSException, ValueError) as e:
        raise MalformedPacketError(f"Malformed DNS message: {e}") from e

    questions: list[Question] = []
    for rrset in parsed.question:
        if rrset.rdclass != dns.rdataclass.IN:
            raise MalformedPacketError(
                f"Unsupported question class {dns.rdataclass.to_text(rrset.rdclass)}"
            )
        questions.append(
            Question(
                name=_name_to_text(rrset.name),
                rdtype=int(rrset.rdtype),
                rdclass=int(rrset.rdclass),
            )
        )

    flags = int(parsed.flags)
    return DnsMessage(
        id=parsed.id,
        is_query=not flags & dns.flags.QR,
        flags=flags & ~int(dns.flags.QR),
        questions=questions,
    )


def decode_query(encoded: str) -> DnsMessage:
    """Decode the ?dns= parameter of a DoH GET request.

    Args:
        encoded: base64url-encoded DNS message.

    Returns:
        DnsMessage: Decoded message.

    Raises:
        InvalidBase64Error: If the base64 layer is malformed.
        MalformedPacketError: If the DNS layer is malformed.
    """
    return decode_message(decode_base64url(encoded))


def _txt_segments(data: str) -> list[bytes]:
    raw = data.encode("utf-8")
    if not raw:
        return [b""]
    return [
        raw[i : i + MAX_TXT_SEGMENT] for i in range(0, len(raw), MAX_TXT_SEGMENT)
    ]


def _record_to_rrset(record: ResourceRecord) -> dns.rrset.RRset:
    rdata = dns.rdtypes.ANY.TXT.TXT(
        dns.rdataclass.RdataClass.make(record.rdclass),
        dns.rdatatype.RdataType.make(record.rdtype),
        _txt_segments(record.data),
    )
    return dns.rrset.from_rdata(_text_to_name(record.name), record.ttl, rdata)


def _render(
    message: DnsMessage, answers: list[ResourceRecord], truncated: bool
) -> bytes:
    wire = dns.message.Message(id=message.id)
    flags = message.flags & ~int(dns.flags.QR)
    if not message.is_query:
        flags |= int(dns.flags.QR)
    if truncated:
        flags |= int(dns.flags.TC)
    wire.flags = flags
    wire.set_opcode(dns.opcode.QUERY)

    for question in message.questions:
        wire.question.append(
            dns.rrset.RRset(
                _text_to_name(question.name),
                dns.rdataclass.RdataClass.make(question.rdclass),
                dns.rdatatype.RdataType.make(question.rdtype),
            )
        )

    for record in answers:
        wire.answer.append(_record_to_rrset(record))

    return wire.to_wire(max_size=MAX_MESSAGE_SIZE)


def encode_message(message: DnsMessage) -> bytes:
    """Serialize a DnsMessage to wire format.

    Sets QR for responses and opcode QUERY, echoes the questions with their
    original type codes and writes one answer RR per ResourceRecord in the
    order they were appended.

    When the answers do not fit in a single DNS message, the longest prefix
    of whole records that fits is kept and the TC bit is set.

    Args:
        message: Message built from a previously decoded query.

    Returns:
        bytes: Wire-format DNS message.
    """
    try:
        return _render(message, message.answers, truncated=False)
    except dns.exception.TooBig:
        pass

    # Largest answer prefix that fits; zero answers always fit
    low, high = 0, len(message.answers) - 1
    while low < high:
        middle = (low + high + 1) // 2
        try:
            _render(message, message.answers[:middle], truncated=True)
        except dns.exception.TooBig:
            high = middle - 1
        else:
            low = middle

    logger.warning(
        f"Response {message.id} truncated to {low} of "
        f"{len(message.answers)} answers"
    )
    return _render(message, message.answers[:low], truncated=True)
