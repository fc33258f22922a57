"""
Pydantic models for the SNS resources returned by list and get operations.

Field aliases match the keys in the boto3 responses, so a response entry can
be passed straight to ``model_validate``.
"""

from pydantic import BaseModel, ConfigDict, Field


class SnsResource(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class Endpoint(SnsResource):
    """A platform endpoint (one device installation)."""

    endpoint_arn: str = Field(alias="EndpointArn")
    attributes: dict[str, str] = Field(default_factory=dict, alias="Attributes")

    @property
    def arn(self) -> str:
        return self.endpoint_arn

    @property
    def token(self) -> str | None:
        return self.attributes.get("Token")

    @property
    def enabled(self) -> bool:
        return self.attributes.get("Enabled", "true").lower() == "true"


class Application(SnsResource):
    """A platform application (GCM/APNS/ADM credentials registered with SNS)."""

    platform_application_arn: str = Field(alias="PlatformApplicationArn")
    attributes: dict[str, str] = Field(default_factory=dict, alias="Attributes")

    @property
    def arn(self) -> str:
        return self.platform_application_arn


class Topic(SnsResource):
    topic_arn: str = Field(alias="TopicArn")

    @property
    def arn(self) -> str:
        return self.topic_arn


class Subscription(SnsResource):
    subscription_arn: str = Field(alias="SubscriptionArn")
    topic_arn: str | None = Field(default=None, alias="TopicArn")
    protocol: str | None = Field(default=None, alias="Protocol")
    endpoint: str | None = Field(default=None, alias="Endpoint")
    owner: str | None = Field(default=None, alias="Owner")

    @property
    def arn(self) -> str:
        return self.subscription_arn
