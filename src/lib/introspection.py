"""
Introspection client for GraphQL endpoints

Runs the standard introspection query against an endpoint (or loads a saved
introspection result) and turns it into a SchemaData record for rendering.

This module is the only place that talks HTTP. graphql-core supplies the
query text and validates the result by building a client schema from it.
"""

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import requests
from graphql import GraphQLError, build_client_schema, get_introspection_query

from ..config import appsettings
from ..models.schema import SchemaData
from .log import LOG


class IntrospectionError(RuntimeError):
    """Raised when a schema cannot be fetched, decoded or validated"""
    pass


class IntrospectionClient:
    """
    Fetches a schema from a GraphQL endpoint via introspection

    Example:
        >>> client = IntrospectionClient("https://example.com/graphql")
        >>> schema = client.schema_fetch()
        >>> schema.queryType
        'Query'
    """

    def __init__(self, endpoint: str, timeout: Optional[float] = None) -> None:
        if not endpoint or not endpoint.strip():
            raise IntrospectionError("GraphQL endpoint is required.")
        self.endpoint = endpoint.strip()
        self.timeout = timeout if timeout is not None else appsettings.request_timeout

    def _headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": "gqldocs",
        }

    def payload_fetch(self) -> Dict[str, Any]:
        """
        POST the introspection query and return the decoded JSON body

        Raises:
            IntrospectionError: On transport failure, HTTP status >= 400,
                                or a body that is not a JSON object
        """
        query = get_introspection_query(descriptions=True)
        LOG(f"POST introspection query to {self.endpoint}", level=2)

        try:
            response = requests.post(
                self.endpoint,
                json={"query": query},
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise IntrospectionError(f"Request to {self.endpoint} failed: {e}") from e

        if response.status_code >= 400:
            raise IntrospectionError(
                f"Endpoint returned HTTP {response.status_code}: {response.text[:200]}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise IntrospectionError(f"Endpoint did not return JSON: {e}") from e

        if not isinstance(payload, dict):
            raise IntrospectionError("Introspection response must be a JSON object")

        LOG(f"Received {len(response.content)} bytes", level=3)
        return payload

    def schema_fetch(self) -> SchemaData:
        """Fetch and parse the endpoint's schema"""
        return schema_parse(self.payload_fetch())


def schemaRoot_find(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Locate the ``__schema`` mapping inside an introspection payload

    Accepts a full GraphQL response ({"data": {"__schema": ...}}), the
    data object itself ({"__schema": ...}) or the bare __schema mapping.

    Raises:
        IntrospectionError: If the payload carries GraphQL errors or has no
                            recognizable schema
    """
    errors = payload.get("errors")
    if errors:
        messages = "; ".join(
            str(error.get("message", error)) if isinstance(error, dict) else str(error)
            for error in errors
        )
        raise IntrospectionError(f"Introspection failed: {messages}")

    data = payload.get("data", payload)
    if not isinstance(data, dict):
        raise IntrospectionError("Introspection response has no data")

    root = data.get("__schema", data)
    if not isinstance(root, dict) or "types" not in root:
        raise IntrospectionError("Introspection response has no __schema.types")
    return root


def schema_parse(payload: Mapping[str, Any]) -> SchemaData:
    """
    Validate an introspection payload and build SchemaData from it

    Args:
        payload: Decoded introspection JSON in any of the shapes accepted
                 by schemaRoot_find()

    Returns:
        SchemaData with root type names and the raw type records

    Raises:
        IntrospectionError: If the payload is not a valid client schema
    """
    root = schemaRoot_find(payload)

    try:
        build_client_schema({"__schema": root})
    except (TypeError, ValueError, KeyError, GraphQLError) as e:
        raise IntrospectionError(f"Invalid introspection result: {e}") from e

    def rootName_get(key: str) -> Optional[str]:
        ref = root.get(key)
        return ref.get("name") if isinstance(ref, dict) else None

    query_type = rootName_get("queryType")
    if not query_type:
        raise IntrospectionError("Schema has no query type")

    schema = SchemaData(
        queryType=query_type,
        mutationType=rootName_get("mutationType"),
        subscriptionType=rootName_get("subscriptionType"),
        parsedTypes=list(root["types"]),
    )
    LOG(f"Parsed {len(schema.parsedTypes)} types", level=2)
    return schema


def schemaFile_load(path: Path) -> SchemaData:
    """
    Load a saved introspection result from a JSON file

    Raises:
        IntrospectionError: If the file cannot be read or decoded
    """
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise IntrospectionError(f"Cannot load schema file {path}: {e}") from e

    if not isinstance(payload, dict):
        raise IntrospectionError(f"Schema file {path} must hold a JSON object")
    return schema_parse(payload)


def typeRef_format(ref: Optional[Mapping[str, Any]]) -> str:
    """
    Render an introspection type reference in GraphQL notation

    Example:
        {"kind": "NON_NULL", "ofType": {"kind": "LIST", "ofType":
            {"kind": "OBJECT", "name": "User"}}}
        -> "[User]!"
    """
    if not ref:
        return ""

    kind = ref.get("kind")
    if kind == "NON_NULL":
        return f"{typeRef_format(ref.get('ofType'))}!"
    if kind == "LIST":
        return f"[{typeRef_format(ref.get('ofType'))}]"
    return ref.get("name") or ""
