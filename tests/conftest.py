"""Shared schemas and helpers for the test suite."""

import pytest

from gql_select.core.parser import parse_schema

TEST_SCHEMA = """
  type Query {
    user: User
    users: [User!]!
    node(id: ID!): Node
    search(term: String!): SearchResult
    product(id: ID!): Product
  }

  type Mutation {
    createUser(input: UserInput!): User
    updateUser(id: ID!, input: UserInput!): User
  }

  input UserInput {
    name: String!
    email: String!
  }

  interface Node {
    id: ID!
  }

  type User implements Node {
    id: ID!
    name: String!
    email: String
    posts: [Post!]
  }

  type Post implements Node {
    id: ID!
    title: String!
    content: String
    author: User!
  }

  union SearchResult = User | Post

  interface Product {
    id: ID!
    name: String!
    price: Float!
  }

  type PhysicalProduct implements Product {
    id: ID!
    name: String!
    price: Float!
    weight: Float
    dimensions: String
  }

  type DigitalProduct implements Product {
    id: ID!
    name: String!
    price: Float!
    downloadUrl: String
    fileSize: String
  }
"""

CIRCULAR_SCHEMA = """
  type Query {
    person: Person
  }

  type Person {
    id: ID!
    name: String!
    bestFriend: Person
    friends: [Person!]
  }
"""

SIMPLE_SCHEMA = """
  type Query {
    user: User
  }

  type User {
    id: ID!
    name: String!
  }
"""


def normalize(query: str) -> str:
    """Collapse all whitespace so queries compare independent of layout."""
    return " ".join(query.split())


@pytest.fixture
def test_sdl():
    return TEST_SCHEMA


@pytest.fixture
def graph():
    """TypeGraph of the main test schema."""
    return parse_schema(TEST_SCHEMA)


@pytest.fixture
def circular_graph():
    return parse_schema(CIRCULAR_SCHEMA)
