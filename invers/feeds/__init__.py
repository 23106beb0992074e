"""Price feeds."""

from invers.feeds.simulated import PriceFeedSimulator

__all__ = ["PriceFeedSimulator"]
