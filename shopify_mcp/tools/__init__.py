"""
Shopify MCP Tools Package

All tools in this directory are auto-discovered by registry.py.
Each tool inherits from MCPTool and receives the shared ShopifyClient.
"""

# Tools are auto-discovered, no explicit imports needed
