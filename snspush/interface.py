"""
PushInterface: the public entry point for SNS mobile push.

Wires options, the SNS backend, the pagination walkers and the broadcast
engine together for one platform application.
"""

import json
from collections.abc import Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
from typing import Any

from ._logging import error_context, logger, redact
from .backend import SnsBackend, create_client
from .broadcast import BroadcastResult, broadcast
from .config import InterfaceOptions, Platform
from .envelopes import Message, to_attribute_values, to_envelope, to_topic_envelope
from .events import EventEmitter, EventType, Listener
from .exceptions import SendError, SnsPushError
from .models import Application, Endpoint, Subscription, Topic
from .pagination import Page, fetch_all, iter_pages


class PushInterface:
    """
    Simplified interface to SNS mobile push for one platform application.

    Endpoints of the application are treated as "users". Per-target outcomes
    are reported through ``events`` (see EventType); operations themselves
    return values or raise SnsPushError subclasses.

    Usage:
        push = PushInterface(InterfaceOptions(platform="android",
                                              platform_application_arn=arn))
        push.on(EventType.SEND_FAILED, lambda arn, err: stale.append(arn))
        arn = push.add_user(device_token)
        push.broadcast_message("Hello to ALL the devices!")
    """

    def __init__(
        self,
        options: InterfaceOptions,
        client: Any | None = None,
        backend: SnsBackend | None = None,
    ) -> None:
        """
        Args:
            options: Platform, application ARN and connection settings
            client: Pre-built boto3 SNS client. Built from options when omitted.
            backend: Pre-built backend, mainly for tests. Takes precedence over client.
        """
        self.options = options
        self.platform = Platform.parse(options.platform)
        self.backend = backend or SnsBackend(client or create_client(options))
        self.events = EventEmitter()

    # --- ACCESSORS ---

    @property
    def platform_application_arn(self) -> str:
        return self.options.platform_application_arn

    @property
    def region(self) -> str | None:
        return self.backend.region

    @property
    def api_version(self) -> str | None:
        return self.backend.api_version

    def on(self, event: EventType | str, listener: Listener) -> Listener:
        """Shortcut for ``self.events.on``."""
        return self.events.on(event, listener)

    # --- USERS (PLATFORM ENDPOINTS) ---

    def add_user(self, device_id: str, custom_user_data: Any | None = None) -> str:
        """
        Registers a device token with the platform application.

        Args:
            device_id: Device token issued by GCM/APNS/ADM
            custom_user_data: Arbitrary data stored on the endpoint. Non-string
                values are JSON-encoded.

        Returns:
            The EndpointArn of the new (or already existing) endpoint
        """
        if custom_user_data is not None and not isinstance(custom_user_data, str):
            custom_user_data = json.dumps(custom_user_data)

        try:
            endpoint_arn = self.backend.create_endpoint(
                self.platform_application_arn, device_id, custom_user_data
            )
        except SnsPushError as e:
            logger.warning(
                "Add user failed",
                extra={
                    "operation": "add_user",
                    "token_hash": redact(device_id),
                    **error_context(e),
                },
            )
            self.events.emit(EventType.ADD_USER_FAILED, device_id, e)
            raise

        logger.info(
            "User added",
            extra={"operation": "add_user", "target_hash": redact(endpoint_arn)},
        )
        self.events.emit(EventType.USER_ADDED, endpoint_arn, device_id)
        return endpoint_arn

    def get_user(self, endpoint_arn: str) -> Endpoint:
        attributes = self.backend.get_endpoint_attributes(endpoint_arn)
        return Endpoint(endpoint_arn=endpoint_arn, attributes=attributes)

    def get_users(self) -> list[Endpoint]:
        """Returns every endpoint of the platform application, across all pages."""
        return fetch_all(self._endpoints_page)

    def set_attributes(self, endpoint_arn: str, attributes: Mapping[str, Any]) -> dict[str, str]:
        """
        Updates endpoint attributes (CustomUserData, Enabled, Token).

        Returns:
            The attributes as sent to SNS (string values)

        Raises:
            ValidationError: If attributes is empty, before any call is made
        """
        values = to_attribute_values(attributes)
        self.backend.set_endpoint_attributes(endpoint_arn, values)
        return values

    def delete_user(self, endpoint_arn: str) -> None:
        self.backend.delete_endpoint(endpoint_arn)
        logger.info(
            "User deleted",
            extra={"operation": "delete_user", "target_hash": redact(endpoint_arn)},
        )
        self.events.emit(EventType.USER_DELETED, endpoint_arn)

    # --- APPLICATIONS ---

    def get_applications(self) -> list[Application]:
        return fetch_all(self.backend.list_applications_page)

    # --- MESSAGING ---

    def send_message(self, endpoint_arn: str, message: Message) -> str:
        """
        Sends a message to one endpoint in this interface's platform format.

        Returns:
            The MessageId

        Raises:
            ValidationError: If the message cannot be converted
            SendError: If SNS rejects the publish (also emitted as sendFailed)
        """
        envelope = to_envelope(self.platform, message, sandbox=self.options.sandbox)
        try:
            message_id = self.backend.publish(endpoint_arn, envelope)
        except SendError as e:
            self.events.emit(EventType.SEND_FAILED, endpoint_arn, e)
            raise

        self.events.emit(EventType.MESSAGE_SENT, endpoint_arn, message_id)
        return message_id

    def broadcast_message(self, message: Message) -> BroadcastResult[Endpoint]:
        """
        Sends a message to every endpoint of the platform application.

        Failed sends do not raise; they are listed in the result and emitted as
        sendFailed. Only a failure to list endpoints raises (ListingError).
        """
        # Convert once so a malformed message fails before any listing call
        envelope = to_envelope(self.platform, message, sandbox=self.options.sandbox)

        def send_one(endpoint: Endpoint) -> str:
            return self.backend.publish(endpoint.endpoint_arn, envelope)

        return broadcast(
            iter_pages(self._endpoints_page),
            send_one,
            self.events,
            max_workers=self.options.broadcast_max_workers,
        )

    def submit_broadcast(
        self, message: Message, executor: ThreadPoolExecutor | None = None
    ) -> "Future[BroadcastResult[Endpoint]]":
        """
        Runs broadcast_message in the background.

        The returned future completes with the BroadcastResult, or with the
        listing error. Use ``future.add_done_callback`` for completion.
        """
        if executor is not None:
            return executor.submit(self.broadcast_message, message)

        own_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="snspush-submit")
        future = own_executor.submit(self.broadcast_message, message)
        # Let the worker thread exit once the broadcast is done
        own_executor.shutdown(wait=False)
        return future

    # --- TOPICS ---

    def create_topic(self, name: str) -> str:
        return self.backend.create_topic(name)

    def delete_topic(self, topic_arn: str) -> None:
        self.backend.delete_topic(topic_arn)

    def get_topics(self) -> list[Topic]:
        return fetch_all(self.backend.list_topics_page)

    def subscribe(self, endpoint_arn: str, topic_arn: str) -> str:
        return self.backend.subscribe(endpoint_arn, topic_arn)

    def unsubscribe(self, subscription_arn: str) -> None:
        self.backend.unsubscribe(subscription_arn)

    def get_subscriptions(self, topic_arn: str | None = None) -> list[Subscription]:
        """Lists every subscription, or those of one topic when topic_arn is given."""
        return fetch_all(partial(self.backend.list_subscriptions_page, topic_arn))

    def publish_to_topic(self, topic_arn: str, message: Mapping[str, Any]) -> str:
        """
        Publishes a multi-platform payload to a topic.

        The payload needs a string "default" entry, plus optional per-platform
        entries ("GCM", "APNS", ...).

        Raises:
            ValidationError: If the payload is not in multi-platform format
        """
        envelope = to_topic_envelope(message)
        return self.backend.publish(topic_arn, envelope, topic=True)

    # --- INTERNAL ---

    def _endpoints_page(self, next_token: str | None) -> Page[Endpoint]:
        return self.backend.list_endpoints_page(self.platform_application_arn, next_token)
