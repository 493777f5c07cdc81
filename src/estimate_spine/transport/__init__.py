"""GraphQL transport."""

from estimate_spine.transport.graphql import GraphQLTransport, HttpxGraphQLTransport

__all__ = ["GraphQLTransport", "HttpxGraphQLTransport"]
