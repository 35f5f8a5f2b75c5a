"""External service integrations."""

from radar.integrations.suggest_client import SuggestClient

__all__ = ["SuggestClient"]
