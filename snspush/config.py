import os
from dataclasses import dataclass
from enum import Enum

from .exceptions import UnsupportedPlatformError

DEFAULT_REGION = "us-east-1"
DEFAULT_API_VERSION = "2010-03-31"


class Platform(str, Enum):
    """Mobile platforms a PushInterface can format messages for."""

    ANDROID = "android"
    IOS = "ios"
    KINDLE = "kindle"

    @classmethod
    def parse(cls, value: "Platform | str") -> "Platform":
        """
        Converts a platform name to a Platform.

        Raises:
            UnsupportedPlatformError: If the name is not a supported platform
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnsupportedPlatformError(value) from None


SUPPORTED_PLATFORMS = tuple(p.value for p in Platform)


@dataclass
class InterfaceOptions:
    """
    Configuration for a PushInterface.

    Credentials left as None fall back to boto3's default credential chain.
    """

    platform: Platform | str
    platform_application_arn: str
    region: str = DEFAULT_REGION
    api_version: str = DEFAULT_API_VERSION
    access_key_id: str | None = None
    secret_access_key: str | None = None
    endpoint_url: str | None = None

    # Use the APNS_SANDBOX envelope key for iOS development certificates
    sandbox: bool = False

    # Upper bound on parallel sends within one broadcast page (None = page size)
    broadcast_max_workers: int | None = None

    def __post_init__(self) -> None:
        self.platform = Platform.parse(self.platform)
        if self.broadcast_max_workers is not None and self.broadcast_max_workers < 1:
            raise ValueError("broadcast_max_workers must be a positive integer")

    @classmethod
    def from_env(cls, platform: Platform | str | None = None) -> "InterfaceOptions":
        """
        Builds options from SNS_* environment variables.

        SNS_PLATFORM_APPLICATION_ARN wins over the per-platform
        SNS_ANDROID_ARN / SNS_iOS_ARN / SNS_KINDLE_ARN variables.

        Raises:
            ValueError: If no platform application ARN is configured
        """
        resolved = Platform.parse(platform or os.getenv("SNS_PLATFORM", Platform.ANDROID.value))

        per_platform = {
            Platform.ANDROID: "SNS_ANDROID_ARN",
            Platform.IOS: "SNS_iOS_ARN",
            Platform.KINDLE: "SNS_KINDLE_ARN",
        }
        arn = os.getenv("SNS_PLATFORM_APPLICATION_ARN") or os.getenv(per_platform[resolved])
        if not arn:
            raise ValueError(
                "SNS_PLATFORM_APPLICATION_ARN (or "
                f"{per_platform[resolved]}) must be set to build options from the environment"
            )

        max_workers = os.getenv("SNS_BROADCAST_MAX_WORKERS")

        return cls(
            platform=resolved,
            platform_application_arn=arn,
            region=os.getenv("SNS_REGION", DEFAULT_REGION),
            api_version=os.getenv("SNS_API_VERSION", DEFAULT_API_VERSION),
            access_key_id=os.getenv("SNS_KEY_ID"),
            secret_access_key=os.getenv("SNS_ACCESS_KEY"),
            endpoint_url=os.getenv("SNS_ENDPOINT_URL"),
            sandbox=os.getenv("SNS_SANDBOX", "").lower() in ("1", "true", "yes"),
            broadcast_max_workers=int(max_workers) if max_workers else None,
        )
