"""
Messaging backend over the boto3 SNS client.

Each method maps to exactly one SNS API call. List methods return a single
Page with the ``NextToken`` cursor; walking all pages is the job of
:mod:`snspush.pagination`.
"""

import json
from collections.abc import Mapping
from typing import Any

import boto3

from ._logging import logger, redact
from .config import InterfaceOptions
from .exceptions import handle_sns_errors
from .models import Application, Endpoint, Subscription, Topic
from .pagination import Page


def create_client(options: InterfaceOptions) -> Any:
    """
    Creates a boto3 SNS client from interface options.

    Credentials that are not set fall back to boto3's default chain
    (environment, shared config, instance profile).
    """
    kwargs: dict[str, Any] = {
        "region_name": options.region,
        "api_version": options.api_version,
    }
    if options.access_key_id and options.secret_access_key:
        kwargs["aws_access_key_id"] = options.access_key_id
        kwargs["aws_secret_access_key"] = options.secret_access_key
    if options.endpoint_url:
        kwargs["endpoint_url"] = options.endpoint_url

    return boto3.client("sns", **kwargs)


class SnsBackend:
    """
    Thin wrapper that turns SNS responses into snspush models and
    botocore errors into SnsPushError subclasses.

    The client is injected; this class never creates a global one.
    """

    def __init__(self, client: Any) -> None:
        self.client = client

    @property
    def region(self) -> str | None:
        return self.client.meta.region_name

    @property
    def api_version(self) -> str | None:
        return self.client.meta.service_model.api_version

    # --- ENDPOINTS ---

    def create_endpoint(
        self, application_arn: str, token: str, custom_user_data: str | None = None
    ) -> str:
        """Registers a device token with a platform application. Returns the EndpointArn."""
        kwargs: dict[str, Any] = {"PlatformApplicationArn": application_arn, "Token": token}
        if custom_user_data:
            kwargs["CustomUserData"] = custom_user_data

        logger.debug(
            "Creating endpoint",
            extra={"operation": "create_endpoint", "token_hash": redact(token)},
        )

        with handle_sns_errors("CreatePlatformEndpoint"):
            response = self.client.create_platform_endpoint(**kwargs)
        return response["EndpointArn"]

    def get_endpoint_attributes(self, endpoint_arn: str) -> dict[str, str]:
        with handle_sns_errors("GetEndpointAttributes"):
            response = self.client.get_endpoint_attributes(EndpointArn=endpoint_arn)
        return dict(response.get("Attributes", {}))

    def set_endpoint_attributes(self, endpoint_arn: str, attributes: Mapping[str, str]) -> None:
        logger.debug(
            "Setting endpoint attributes",
            extra={
                "operation": "set_endpoint_attributes",
                "target_hash": redact(endpoint_arn),
                "attributes": sorted(attributes),
            },
        )
        with handle_sns_errors("SetEndpointAttributes"):
            self.client.set_endpoint_attributes(
                EndpointArn=endpoint_arn, Attributes=dict(attributes)
            )

    def delete_endpoint(self, endpoint_arn: str) -> None:
        with handle_sns_errors("DeleteEndpoint"):
            self.client.delete_endpoint(EndpointArn=endpoint_arn)

    # --- LIST PAGES ---

    def list_endpoints_page(
        self, application_arn: str, next_token: str | None = None
    ) -> Page[Endpoint]:
        kwargs: dict[str, Any] = {"PlatformApplicationArn": application_arn}
        if next_token:
            kwargs["NextToken"] = next_token

        with handle_sns_errors("ListEndpointsByPlatformApplication", listing=True):
            response = self.client.list_endpoints_by_platform_application(**kwargs)

        return Page(
            items=[Endpoint.model_validate(raw) for raw in response.get("Endpoints", [])],
            next_token=response.get("NextToken"),
        )

    def list_applications_page(self, next_token: str | None = None) -> Page[Application]:
        kwargs: dict[str, Any] = {}
        if next_token:
            kwargs["NextToken"] = next_token

        with handle_sns_errors("ListPlatformApplications", listing=True):
            response = self.client.list_platform_applications(**kwargs)

        return Page(
            items=[
                Application.model_validate(raw)
                for raw in response.get("PlatformApplications", [])
            ],
            next_token=response.get("NextToken"),
        )

    def list_topics_page(self, next_token: str | None = None) -> Page[Topic]:
        kwargs: dict[str, Any] = {}
        if next_token:
            kwargs["NextToken"] = next_token

        with handle_sns_errors("ListTopics", listing=True):
            response = self.client.list_topics(**kwargs)

        return Page(
            items=[Topic.model_validate(raw) for raw in response.get("Topics", [])],
            next_token=response.get("NextToken"),
        )

    def list_subscriptions_page(
        self, topic_arn: str | None = None, next_token: str | None = None
    ) -> Page[Subscription]:
        """Lists one page of subscriptions, restricted to one topic when topic_arn is given."""
        kwargs: dict[str, Any] = {}
        if next_token:
            kwargs["NextToken"] = next_token

        if topic_arn:
            with handle_sns_errors("ListSubscriptionsByTopic", listing=True):
                response = self.client.list_subscriptions_by_topic(TopicArn=topic_arn, **kwargs)
        else:
            with handle_sns_errors("ListSubscriptions", listing=True):
                response = self.client.list_subscriptions(**kwargs)

        return Page(
            items=[Subscription.model_validate(raw) for raw in response.get("Subscriptions", [])],
            next_token=response.get("NextToken"),
        )

    # --- TOPICS ---

    def create_topic(self, name: str) -> str:
        with handle_sns_errors("CreateTopic"):
            response = self.client.create_topic(Name=name)
        return response["TopicArn"]

    def delete_topic(self, topic_arn: str) -> None:
        with handle_sns_errors("DeleteTopic"):
            self.client.delete_topic(TopicArn=topic_arn)

    def subscribe(self, endpoint_arn: str, topic_arn: str) -> str:
        with handle_sns_errors("Subscribe"):
            response = self.client.subscribe(
                TopicArn=topic_arn,
                Protocol="application",
                Endpoint=endpoint_arn,
                ReturnSubscriptionArn=True,
            )
        return response["SubscriptionArn"]

    def unsubscribe(self, subscription_arn: str) -> None:
        with handle_sns_errors("Unsubscribe"):
            self.client.unsubscribe(SubscriptionArn=subscription_arn)

    # --- PUBLISH ---

    def publish(self, target_arn: str, envelope: Mapping[str, str], topic: bool = False) -> str:
        """
        Publishes a JSON envelope to an endpoint (TargetArn) or a topic (TopicArn).

        Returns:
            The MessageId assigned by SNS

        Raises:
            SendError: If SNS rejects the publish
        """
        kwargs: dict[str, Any] = {
            "Message": json.dumps(dict(envelope)),
            "MessageStructure": "json",
        }
        if topic:
            kwargs["TopicArn"] = target_arn
        else:
            kwargs["TargetArn"] = target_arn

        with handle_sns_errors("Publish", target=target_arn):
            response = self.client.publish(**kwargs)
        return response["MessageId"]
