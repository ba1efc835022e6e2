"""Resolver package for the GraphQL schema.

Root types and field resolvers import these functions lazily to keep the
type modules free of database imports.
"""
