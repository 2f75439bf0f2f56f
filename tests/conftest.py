"""
Shared fixtures: a real introspection payload built by graphql-core from SDL,
and a template/partial layout on disk.
"""

import json
from pathlib import Path

import pytest
from graphql import build_schema, introspection_from_schema

from gqldocs.lib.introspection import schema_parse


SDL = r'''
"Root query. @internal"
type Query {
  "Look up a user. @auth(requires: ADMIN)"
  user("User id @example(42)" id: ID!): User
  "All users @paginated"
  users: [User!]!
}

"A person @entity(key: \"id\")"
type User {
  id: ID!
  "Display name @deprecated(reason: \"use fullName (with title)\") Kept for clients."
  name: String
  role: Role
}

"Roles @flags"
enum Role {
  "Administrator @level(1)"
  ADMIN
  USER
}

input UserFilter {
  "Match role @optional"
  role: Role
}

type Mutation {
  "Touch users matching filter"
  touch(filter: UserFilter): Boolean
}
'''

MALFORMED_SDL = r'''
type Query {
  "Broken @oops(never closed"
  ping: String
}
'''

TYPE_TEMPLATE = (
    "<h1>{{ name }}</h1>\n"
    "{% include 'Description' %}\n"
    "{% for f in fields or [] %}<p class=\"field\">{{ f.name }}: {{ f.type | type_ref }}</p>\n"
    "{% with description=f.description, annotations=f.annotations %}{% include 'Description' %}{% endwith %}\n"
    "{% endfor %}"
)

INDEX_TEMPLATE = (
    "<p>Query: {{ queryType }}</p>\n"
    "<p>Mutation: {{ mutationType }}</p>\n"
    "<ul>{% for t in parsedTypes %}{% if t is object %}<li class=\"object\">{{ t.name }}</li>{% endif %}"
    "{% if t is enum %}<li class=\"enum\">{{ t.name }}</li>{% endif %}"
    "{% if t is input_object %}<li class=\"input\">{{ t.name }}</li>{% endif %}{% endfor %}</ul>\n"
)

DESCRIPTION_PARTIAL = (
    "<div class=\"description\">{{ description }}</div>"
    "{% for a in annotations %}<span class=\"annotation\">@{{ a.name }}"
    "{% if a.argument_text is not none %}({{ a.argument_text }}){% endif %}</span>{% endfor %}"
)


def payload_build(sdl: str) -> dict:
    """Introspection result (the "data" object) for an SDL schema"""
    return introspection_from_schema(build_schema(sdl))


@pytest.fixture
def introspection_payload() -> dict:
    return payload_build(SDL)


@pytest.fixture
def malformed_payload() -> dict:
    return payload_build(MALFORMED_SDL)


@pytest.fixture
def schema_data(introspection_payload):
    return schema_parse(introspection_payload)


@pytest.fixture
def site_dir(tmp_path: Path, introspection_payload) -> Path:
    """
    Input directory with templates/, partials/ and schema.json
    """
    templates = tmp_path / "templates"
    partials = tmp_path / "partials"
    templates.mkdir()
    partials.mkdir()

    (templates / "index.html").write_text(INDEX_TEMPLATE, encoding="utf-8")
    (templates / "Type.html").write_text(TYPE_TEMPLATE, encoding="utf-8")
    (partials / "Description.html").write_text(DESCRIPTION_PARTIAL, encoding="utf-8")
    (partials / "TypeRef.html").write_text("{{ type | type_ref }}", encoding="utf-8")
    (partials / "README.txt").write_text("not a partial", encoding="utf-8")

    (tmp_path / "schema.json").write_text(
        json.dumps({"data": introspection_payload}), encoding="utf-8"
    )
    return tmp_path
