"""
Broadcast example.

Registers a device, then sends a message to every endpoint of the platform
application, printing stale endpoints as they fail.

Requires SNS_PLATFORM_APPLICATION_ARN (or SNS_ANDROID_ARN) and AWS credentials
(SNS_KEY_ID / SNS_ACCESS_KEY or the default boto3 chain).
"""

import logging

from snspush import EventType, InterfaceOptions, PushInterface

logging.basicConfig(level=logging.INFO)

push = PushInterface(InterfaceOptions.from_env(platform="android"))

stale: list[str] = []
push.on(EventType.SEND_FAILED, lambda arn, error: stale.append(arn))
push.on(EventType.USER_ADDED, lambda arn, device_id: print(f"Registered {arn}"))

push.add_user("somefakedeviceidthatimadeup", {"username": "fakeuser"})

# Listing errors raise; individual send failures only show up as events
result = push.broadcast_message("Hello to ALL the devices!")
print(f"Sent {result.sent_count} messages over {result.pages} page(s), {result.failed_count} failed")

# Disabled endpoints usually mean the device uninstalled the app
for arn in stale:
    push.delete_user(arn)

# Topics take the multi-platform format with a mandatory "default" entry
topic_arn = push.create_topic("snspush_example")
push.publish_to_topic(topic_arn, {"default": "Hello topic", "GCM": {"data": {"message": "Hi"}}})
push.delete_topic(topic_arn)
