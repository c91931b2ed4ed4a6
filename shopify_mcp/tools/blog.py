"""
Blog Article MCP Tools

CRUD over online-store blog articles. Statuses are exposed lower-case
(``draft`` / ``published``).
"""

from typing import Any, Dict, List

from ..base import MCPTool, ToolParameter, ValidationError

ARTICLE_STATUSES = ["draft", "published"]


def _article_fields(partial: bool) -> List[ToolParameter]:
    required = not partial
    return [
        ToolParameter("title", "string", "Article title", required=required),
        ToolParameter("author", "string", "Author name", required=required),
        ToolParameter("body_html", "string", "Article body as HTML", required=required),
        ToolParameter("blog_id", "string", "Blog the article belongs to", required=False),
        ToolParameter("published_at", "string", "Publication date in ISO format", required=False),
        ToolParameter("tags", "array", "Article tags", required=False, items_type="string"),
        ToolParameter(
            "image", "object", "Featured image", required=False,
            properties=[
                ToolParameter("src", "string", "Image URL"),
                ToolParameter("alt", "string", "Alt text", required=False),
            ],
        ),
        ToolParameter("status", "string", "Article status", required=False, enum=ARTICLE_STATUSES),
    ]


class GetBlogArticlesTool(MCPTool):

    @property
    def name(self) -> str:
        return "get_blog_articles"

    @property
    def description(self) -> str:
        return "Get a list of blog articles with optional filtering"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter("limit", "integer", "Maximum number of articles to return",
                          required=False, default=10, minimum=1),
            ToolParameter("status", "string", "Filter by status", required=False, enum=ARTICLE_STATUSES),
            ToolParameter("tag", "string", "Filter by tag", required=False),
            ToolParameter("cursor", "string", "Pagination cursor returned as `next` by a previous call",
                          required=False),
        ]

    @property
    def category(self) -> str:
        return "blog"

    @property
    def failure_message(self) -> str:
        return "Failed to get blog articles"

    async def execute(self, limit: int = 10, status: str = None, tag: str = None,
                      cursor: str = None) -> Dict[str, Any]:
        return await self.client.load_blog_articles(limit=limit, status=status, tag=tag, after=cursor)


class GetBlogArticleTool(MCPTool):

    @property
    def name(self) -> str:
        return "get_blog_article"

    @property
    def description(self) -> str:
        return "Get details of a specific blog article"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [ToolParameter("articleId", "string", "ID of the article")]

    @property
    def category(self) -> str:
        return "blog"

    @property
    def failure_message(self) -> str:
        return "Failed to get blog article"

    async def execute(self, articleId: str) -> Dict[str, Any]:
        return await self.client.load_blog_article(articleId)


class CreateBlogArticleTool(MCPTool):

    @property
    def name(self) -> str:
        return "create_blog_article"

    @property
    def description(self) -> str:
        return "Create a new blog article"

    @property
    def parameters(self) -> List[ToolParameter]:
        return _article_fields(partial=False)

    @property
    def category(self) -> str:
        return "blog"

    @property
    def failure_message(self) -> str:
        return "Failed to create blog article"

    async def execute(self, **article) -> Dict[str, Any]:
        article = {k: v for k, v in article.items() if v is not None}
        return await self.client.create_blog_article(article)


class UpdateBlogArticleTool(MCPTool):

    @property
    def name(self) -> str:
        return "update_blog_article"

    @property
    def description(self) -> str:
        return "Update an existing blog article"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter("articleId", "string", "ID of the article to update"),
            ToolParameter(
                "updates", "object", "Fields to change",
                properties=_article_fields(partial=True),
            ),
        ]

    @property
    def category(self) -> str:
        return "blog"

    @property
    def failure_message(self) -> str:
        return "Failed to update blog article"

    async def execute(self, articleId: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        if not updates:
            raise ValidationError("No fields to update", tool_name=self.name)
        return await self.client.update_blog_article(articleId, updates)


class DeleteBlogArticleTool(MCPTool):

    @property
    def name(self) -> str:
        return "delete_blog_article"

    @property
    def description(self) -> str:
        return "Delete a blog article"

    @property
    def parameters(self) -> List[ToolParameter]:
        return [ToolParameter("articleId", "string", "ID of the article to delete")]

    @property
    def category(self) -> str:
        return "blog"

    @property
    def failure_message(self) -> str:
        return "Failed to delete blog article"

    async def execute(self, articleId: str) -> Dict[str, Any]:
        return await self.client.delete_blog_article(articleId)
