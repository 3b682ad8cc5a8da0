"""Channel router.

Maps due subscriptions to channel targets. A subscription with a non-empty
override for a channel goes only to its override targets; otherwise it is
broadcast to every global target of that channel. Overrides on one channel
never affect another.

Usage:
    from infrastructure.notifications.router import distribute

    distribution = distribute(ChannelType.WECHATBOT, subscriptions, config)
    for webhook_url, batch in distribution.items():
        ...
"""

from typing import List, Sequence, Union

from infrastructure.notifications.config import ChannelConfiguration
from infrastructure.notifications.models import (
    ChannelType,
    DefaultTargets,
    DistributionMap,
    ExplicitTargets,
    Subscription,
    Targets,
)
from integrations.webhook_bot import extract_webhook_key


def _unique(targets: List[str]) -> tuple:
    return tuple(dict.fromkeys(targets))


def select_targets(
    channel_type: ChannelType,
    subscription: Subscription,
    config: ChannelConfiguration,
) -> Targets:
    """Decide whether a subscription uses the default or explicit targets.

    Webhook bot keys select every configured URL whose ``key`` parameter
    equals the key; keys matching nothing are ignored. Email overrides are
    used as literal addresses.
    """
    if channel_type is ChannelType.WECHATBOT:
        if not subscription.wechat_bot_keys:
            return DefaultTargets()
        matched = [
            url
            for key in subscription.wechat_bot_keys
            for url in config.wechat_bot.webhooks
            if extract_webhook_key(url) == key
        ]
        return ExplicitTargets(_unique(matched)) if matched else DefaultTargets()

    if channel_type is ChannelType.EMAIL:
        if not subscription.email_addresses:
            return DefaultTargets()
        return ExplicitTargets(_unique(subscription.email_addresses))

    raise ValueError(f"Unsupported channel type: {channel_type}")


def distribute(
    channel_type: Union[ChannelType, str],
    subscriptions: Sequence[Subscription],
    config: ChannelConfiguration,
) -> DistributionMap:
    """Build the distribution map of one channel type.

    Pure: identical inputs always produce identical maps.

    Args:
        channel_type: Channel type (or its value)
        subscriptions: Due subscriptions, in the order they should be listed
        config: Parsed channel configuration

    Returns:
        Ordered mapping of target to the subscriptions routed there. Empty
        when the channel has no global targets.
    """
    channel_type = ChannelType(channel_type)
    global_targets = _unique(config.global_targets(channel_type))
    if not global_targets:
        return {}

    distribution: DistributionMap = {}
    for subscription in subscriptions:
        selection = select_targets(channel_type, subscription, config)
        if isinstance(selection, ExplicitTargets):
            targets = selection.targets
        else:
            targets = global_targets
        for target in targets:
            distribution.setdefault(target, []).append(subscription)

    return distribution


def distribute_webhook_bot(
    subscriptions: Sequence[Subscription], config: ChannelConfiguration
) -> DistributionMap:
    return distribute(ChannelType.WECHATBOT, subscriptions, config)


def distribute_email(
    subscriptions: Sequence[Subscription], config: ChannelConfiguration
) -> DistributionMap:
    return distribute(ChannelType.EMAIL, subscriptions, config)
