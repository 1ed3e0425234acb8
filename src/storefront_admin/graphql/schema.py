"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from fastapi import Request
from graphql import validate_schema as gql_validate_schema
from strawberry.extensions import SchemaExtension
from strawberry.fastapi import GraphQLRouter

from ..errors import AdminError, ErrorKind
from ..logging import get_logger
from .context import build_context
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)


class AdminErrorExtension(SchemaExtension):
    """Tag errors raised by resolvers with their category.

    ``AdminError`` carries its own kind; anything else reaching the client is
    reported as internal.
    """

    def on_operation(self):
        yield
        result = self.execution_context.result
        if result is None or not getattr(result, "errors", None):
            return

        for error in result.errors:
            original = error.original_error
            if original is None:
                continue
            kind = original.kind if isinstance(original, AdminError) else ErrorKind.INTERNAL
            error.extensions = {**(error.extensions or {}), "category": kind.value}
            if kind is ErrorKind.INTERNAL:
                logger.error("Unhandled resolver error", path=error.path, error=str(original))


schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    extensions=[AdminErrorExtension],
)


def validate_schema() -> None:
    """Validate the GraphQL schema at startup.

    Raises:
        Exception: If the schema is invalid or has unresolved types
    """
    try:
        graphql_schema = schema._schema

        errors = gql_validate_schema(graphql_schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        from graphql import get_introspection_query, graphql_sync

        result = graphql_sync(graphql_schema, get_introspection_query())
        if result.errors:
            error_messages = [str(e) for e in result.errors]
            raise Exception(f"GraphQL introspection failed: {'; '.join(error_messages)}")

        logger.info("GraphQL schema validation successful")

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise


def create_graphql_router() -> GraphQLRouter[dict[str, Any], None]:
    """Create a GraphQL router for FastAPI."""

    async def get_context(request: Request) -> dict[str, Any]:
        return build_context(request)

    return GraphQLRouter(
        schema,
        path="/graphql",
        graphiql=True,
        context_getter=get_context,
    )
