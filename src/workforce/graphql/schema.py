"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from graphql import get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema
from starlette.requests import HTTPConnection
from strawberry.fastapi import GraphQLRouter
from strawberry.subscriptions import GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL

from ..events import Topics
from ..logging import get_logger
from .loaders import Loaders
from .mutations.root import Mutation
from .queries.root import Query
from .subscriptions.root import Subscription

logger = get_logger(__name__)


class SchemaValidationError(Exception):
    """The GraphQL schema cannot be served."""


# Create the GraphQL schema
schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    subscription=Subscription,
)


def validate_schema() -> None:
    """Fail fast on a schema that cannot be served.

    Runs graphql-core schema validation followed by an introspection pass,
    which is where unresolved lazy type references show up.

    Raises:
        SchemaValidationError: If either step reports errors
    """
    graphql_schema = schema._schema

    problems = [str(e) for e in gql_validate_schema(graphql_schema)]
    if not problems:
        result = graphql_sync(graphql_schema, get_introspection_query())
        problems = [str(e) for e in result.errors or ()]

    if problems:
        logger.error("GraphQL schema validation failed", errors=problems)
        raise SchemaValidationError("; ".join(problems))

    logger.info(
        "GraphQL schema validation successful",
        types=len(graphql_schema.type_map),
    )


def build_context(topics: Topics) -> dict[str, Any]:
    """Build the resolver context around the application's topics."""
    return {
        "topics": topics,
        "loaders": Loaders(),
    }


def create_graphql_router(graphiql: bool = True) -> GraphQLRouter[dict[str, Any], None]:
    """Create a GraphQL router for FastAPI, serving HTTP and WebSocket subscriptions."""

    async def get_context(connection: HTTPConnection) -> dict[str, Any]:
        """Get the context for GraphQL resolvers."""
        return build_context(connection.app.state.topics)

    return GraphQLRouter(
        schema,
        path="/graphql",
        graphiql=graphiql,
        context_getter=get_context,
        subscription_protocols=[GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL],
    )
