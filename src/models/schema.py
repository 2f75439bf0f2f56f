"""
Schema data model

Holds the summary of an introspected GraphQL schema that page templates
receive as their rendering context.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass
class SchemaData:
    """
    Introspected schema, in the shape templates consume.

    Field names are camelCase on purpose: they are the template context keys
    (``{{ queryType }}``, ``{% for t in parsedTypes %}``).

    Attributes:
        queryType: Name of the query root type
        mutationType: Name of the mutation root type, if any
        subscriptionType: Name of the subscription root type, if any
        parsedTypes: Introspection type records (kind, name, description,
                     fields, inputFields, interfaces, enumValues, possibleTypes)
    """

    queryType: str
    mutationType: Optional[str] = None
    subscriptionType: Optional[str] = None
    parsedTypes: List[Dict[str, Any]] = field(default_factory=list)

    def context_make(self) -> Dict[str, Any]:
        """Template context for schema-level pages"""
        return asdict(self)

    def type_get(self, name: str) -> Optional[Dict[str, Any]]:
        """Look up a type record by name"""
        for parsed_type in self.parsedTypes:
            if parsed_type.get("name") == name:
                return parsed_type
        return None
