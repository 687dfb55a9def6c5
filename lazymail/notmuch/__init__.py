"""notmuch store access: command runner and JSON parsing."""

from .client import NotmuchClient, message_id_to_search_term
from .errors import NotmuchError
from .parsing import parse_message, parse_messages_list

__all__ = [
    "NotmuchClient",
    "NotmuchError",
    "message_id_to_search_term",
    "parse_message",
    "parse_messages_list",
]
