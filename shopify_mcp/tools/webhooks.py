"""
Webhook subscription MCP Tool

Subscription management only; delivery is Shopify's concern.
"""

from typing import Any, Dict, List

from ..base import MCPTool, ToolParameter, ValidationError


class ManageWebhookTool(MCPTool):

    @property
    def name(self) -> str:
        return "manage-webhook"

    @property
    def description(self) -> str:
        return "Subscribe, find, or unsubscribe webhooks"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="action",
                type="string",
                description="Action to perform",
                enum=["subscribe", "find", "unsubscribe"],
            ),
            ToolParameter(
                name="callbackUrl",
                type="string",
                description="Webhook callback URL (subscribe, find)",
                required=False,
            ),
            ToolParameter(
                name="topic",
                type="string",
                description="Webhook topic, e.g. ORDERS_CREATE (subscribe, find)",
                required=False,
            ),
            ToolParameter(
                name="webhookId",
                type="string",
                description="Webhook subscription ID (unsubscribe)",
                required=False,
            ),
        ]

    @property
    def category(self) -> str:
        return "webhooks"

    @property
    def failure_message(self) -> str:
        return "Failed to manage webhook"

    async def execute(self, action: str, callbackUrl: str = None, topic: str = None,
                      webhookId: str = None) -> Dict[str, Any]:
        if action == "unsubscribe":
            if not webhookId:
                raise ValidationError("webhookId is required for unsubscribe", tool_name=self.name)
            return await self.client.unsubscribe_webhook(webhookId)

        if not callbackUrl or not topic:
            raise ValidationError(f"callbackUrl and topic are required for {action}", tool_name=self.name)

        if action == "subscribe":
            return await self.client.subscribe_webhook(callbackUrl, topic)

        webhook = await self.client.find_webhook(callbackUrl, topic)
        return {"found": webhook is not None, "webhook": webhook}
