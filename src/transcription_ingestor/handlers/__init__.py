from .side_effect_dispatcher import SideEffectDispatcher
from .webhook_ingestor import WebhookIngestor

__all__ = ["SideEffectDispatcher", "WebhookIngestor"]
