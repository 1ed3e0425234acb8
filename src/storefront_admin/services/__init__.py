"""Business operations behind the GraphQL resolvers."""
