"""
Fan-out of one message to every item of a paginated collection.

The broadcast walks the collection one page at a time: every send for a page
settles (success or failure) before the next page is requested, so memory is
bounded by a single page and sending starts before later pages are fetched.

Individual send failures never abort the broadcast. They are collected in the
BroadcastResult and reported through the event side channel. Only a failure
to fetch a page stops the broadcast, and that error propagates to the caller.
"""

from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from ._logging import error_context, logger, redact
from .events import EventEmitter, EventType
from .pagination import Page

T = TypeVar("T")

SendOne = Callable[[T], str]


@dataclass(frozen=True)
class SendOutcome(Generic[T]):
    """The result of sending to a single target."""

    target: str
    item: T
    message_id: str | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BroadcastResult(Generic[T]):
    sent: list[SendOutcome[T]] = field(default_factory=list)
    failed: list[SendOutcome[T]] = field(default_factory=list)
    pages: int = 0

    @property
    def sent_count(self) -> int:
        return len(self.sent)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def total(self) -> int:
        return self.sent_count + self.failed_count


def default_target(item: Any) -> str:
    """Identifies an item by its ``arn`` when it has one."""
    arn = getattr(item, "arn", None)
    return arn if isinstance(arn, str) else str(item)


def _attempt(send_one: SendOne[T], item: T) -> tuple[str | None, Exception | None]:
    try:
        return send_one(item), None
    except Exception as e:
        return None, e


def _dispatch_page(
    items: Sequence[T], send_one: SendOne[T], max_workers: int | None
) -> list[tuple[str | None, Exception | None]]:
    """
    Sends to every item of a page and waits for all of them.

    Outcomes are returned in item order, one slot per item.
    """
    if not items:
        return []

    workers = len(items) if max_workers is None else min(max_workers, len(items))
    if workers <= 1:
        return [_attempt(send_one, item) for item in items]

    # Leaving the executor block joins every submitted send
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="snspush-broadcast") as pool:
        futures = [pool.submit(_attempt, send_one, item) for item in items]
    return [future.result() for future in futures]


def broadcast(
    pages: Iterable[Page[T]],
    send_one: SendOne[T],
    emitter: EventEmitter | None = None,
    *,
    target_of: Callable[[T], str] = default_target,
    max_workers: int | None = None,
) -> BroadcastResult[T]:
    """
    Sends to every item of every page.

    Args:
        pages: Lazy page iterator, typically ``iter_pages(fetch_page)``. It is
            advanced only after all sends of the current page have settled.
        send_one: Sends to one item and returns the message id. Any exception
            it raises is recorded as a failed send.
        emitter: Receives broadcastStart, messageSent, sendFailed and
            broadcastEnd. Events are emitted from the calling thread, in
            item order within each page.
        target_of: Maps an item to the identifier reported in events.
        max_workers: Caps parallel sends within a page. None sends to the
            whole page at once; 1 sends strictly sequentially.

    Returns:
        BroadcastResult with every successful and failed send.

    Raises:
        Whatever the page iterator raises (ListingError for SNS listings).
        No further page is fetched or sent to after such an error.
    """
    emitter = emitter or EventEmitter()
    result: BroadcastResult[T] = BroadcastResult()

    emitter.emit(EventType.BROADCAST_STARTED)
    logger.info("Starting broadcast", extra={"operation": "broadcast", "max_workers": max_workers})

    page_iter = iter(pages)
    try:
        while True:
            try:
                page = next(page_iter)
            except StopIteration:
                break
            except Exception as e:
                logger.error(
                    "Broadcast aborted: page fetch failed",
                    extra={"operation": "broadcast", "page": result.pages + 1, **error_context(e)},
                )
                raise

            result.pages += 1
            outcomes = _dispatch_page(page.items, send_one, max_workers)

            for item, (message_id, error) in zip(page.items, outcomes):
                target = target_of(item)
                if error is None:
                    result.sent.append(SendOutcome(target=target, item=item, message_id=message_id))
                    emitter.emit(EventType.MESSAGE_SENT, target, message_id)
                else:
                    result.failed.append(SendOutcome(target=target, item=item, error=error))
                    logger.warning(
                        "Broadcast send failed",
                        extra={
                            "operation": "broadcast",
                            "target_hash": redact(target),
                            **error_context(error),
                        },
                    )
                    emitter.emit(EventType.SEND_FAILED, target, error)

            logger.debug(
                "Broadcast page settled",
                extra={"operation": "broadcast", "page": result.pages, "count": page.count},
            )
    finally:
        emitter.emit(EventType.BROADCAST_ENDED)

    logger.info(
        "Broadcast finished",
        extra={
            "operation": "broadcast",
            "pages": result.pages,
            "sent": result.sent_count,
            "failed": result.failed_count,
        },
    )
    return result
