"""Token-based pagination for AWS list APIs."""
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from aws_resource_adapters.infrastructure.context import OperationContext

logger = logging.getLogger(__name__)

Page = Tuple[List[Dict[str, Any]], Optional[str]]


def iter_pages(fetch_page: Callable[[Optional[str]], Page],
               context: Optional[OperationContext] = None,
               operation: str = "list") -> Iterator[List[Dict[str, Any]]]:
    """Yield pages until the API returns no next token.

    Args:
        fetch_page: Called with the previous page's token (None first) and
            returning ``(items, next_token)``
        context: Checked before every page request
        operation: Operation name used in cancellation errors

    Errors from ``fetch_page`` propagate immediately.
    """
    context = context or OperationContext.background()
    token: Optional[str] = None
    page_number = 0
    while True:
        context.check(operation)
        items, token = fetch_page(token)
        page_number += 1
        logger.debug("%s: page %s returned %s item(s)", operation, page_number, len(items))
        yield items
        if not token:
            return


def collect_pages(fetch_page: Callable[[Optional[str]], Page],
                  context: Optional[OperationContext] = None,
                  operation: str = "list") -> List[Dict[str, Any]]:
    """Return every item across all pages, or raise without partial results."""
    results: List[Dict[str, Any]] = []
    for items in iter_pages(fetch_page, context, operation):
        results.extend(items)
    return results

