# nowplaying/models/webhook_model.py
from pydantic import BaseModel


# Discord webhook body
class WebhookMessage(BaseModel):
    content: str
