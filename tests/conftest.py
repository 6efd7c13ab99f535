"""
Shared test fixtures for the graphql_http test suite.
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest
from graphql import (
    GraphQLArgument,
    GraphQLField,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLString,
)

from graphql_http import GraphQLHTTPHandler, create_handler

BASE_URL = "https://test.test/graphql"

SCHEMA_SDL = """
type Query {
  hello(name: String): String
}
"""


def resolve_test(_root, _info, who=None):
    return "Hello " + (who if who is not None else "World")


def resolve_thrower(_root, _info):
    raise RuntimeError("Throws!")


QueryRootType = GraphQLObjectType(
    "QueryRoot",
    lambda: {
        "test": GraphQLField(
            GraphQLString,
            args={"who": GraphQLArgument(GraphQLString)},
            resolve=resolve_test,
        ),
        "thrower": GraphQLField(GraphQLString, resolve=resolve_thrower),
        "strictThrower": GraphQLField(GraphQLNonNull(GraphQLString), resolve=resolve_thrower),
    },
)


@pytest.fixture
def schema() -> GraphQLSchema:
    """
    Schema with a query and a mutation root.

    type QueryRoot { test(who: String): String, thrower: String, strictThrower: String! }
    type MutationRoot { writeTest: QueryRoot }
    """
    return GraphQLSchema(
        query=QueryRootType,
        mutation=GraphQLObjectType(
            "MutationRoot",
            {"writeTest": GraphQLField(QueryRootType, resolve=lambda _root, _info: {})},
        ),
    )


@pytest.fixture
def handler(schema: GraphQLSchema) -> GraphQLHTTPHandler:
    """Handler with default options."""
    return create_handler(schema)


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def schema_file(temp_dir: Path) -> Path:
    """SDL schema file for the CLI."""
    path = temp_dir / "schema.graphql"
    path.write_text(SCHEMA_SDL, encoding="utf-8")
    return path
