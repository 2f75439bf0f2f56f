"""
Schema description annotator

Runs split_directives() over every description in an introspected schema
and attaches the results to the records that templates render:

    description     cleaned prose (annotation markers removed)
    rawDescription  the original text, untouched
    annotations     list of Annotation, in order of appearance

Records are copied, never mutated. A description whose annotation argument
list is never closed is either fatal (strict mode) or left as-is with no
annotations, with a warning naming the element.
"""

from typing import Any, Dict, List, Optional

from ..config import appsettings
from ..models.schema import SchemaData
from .brackets import MismatchedBracketsError
from .directives import split_directives
from .log import LOG, WARN


class AnnotationError(RuntimeError):
    """Raised in strict mode when a description holds a malformed annotation"""
    pass


# Child collections of a type record that hold described elements, and
# the nested collections each of those can carry in turn
CHILD_COLLECTIONS: Dict[str, List[str]] = {
    'fields': ['args'],
    'inputFields': [],
    'enumValues': [],
}


class SchemaAnnotator:
    """
    Annotates every described element of a schema

    Attributes:
        strict: Raise AnnotationError on malformed annotations
        annotation_count: Total annotations extracted so far
        malformed: Element paths whose description could not be split
    """

    def __init__(self, strict: Optional[bool] = None) -> None:
        self.strict = appsettings.strict_mode if strict is None else strict
        self.annotation_count = 0
        self.malformed: List[str] = []

    def element_annotate(self, element: Dict[str, Any], path: str) -> Dict[str, Any]:
        """
        Return a copy of element with description/annotations split out

        Args:
            element: Introspection record with an optional "description"
            path: Dotted location of the element, for messages (e.g. "User.email")

        Raises:
            AnnotationError: In strict mode, if the description is malformed
        """
        annotated = dict(element)
        raw = element.get('description')
        annotated['rawDescription'] = raw
        annotated['annotations'] = []

        if raw is None:
            return annotated

        try:
            result = split_directives(raw)
        except MismatchedBracketsError as e:
            if self.strict:
                raise AnnotationError(f"Malformed annotation in {path}: {e}") from e
            WARN(f"Malformed annotation in {path}, keeping raw description: {e}")
            self.malformed.append(path)
            return annotated

        annotated['description'] = result.description
        annotated['annotations'] = result.annotations
        self.annotation_count += len(result.annotations)
        if result.annotations:
            names = ', '.join(f"@{a.name}" for a in result.annotations)
            LOG(f"{path}: {names}", level=3)
        return annotated

    def type_annotate(self, parsed_type: Dict[str, Any]) -> Dict[str, Any]:
        """Annotate a type record and all of its described children"""
        type_name = parsed_type.get('name') or '?'
        annotated = self.element_annotate(parsed_type, type_name)

        for collection, nested in CHILD_COLLECTIONS.items():
            children = parsed_type.get(collection)
            if not children:
                continue

            annotated_children = []
            for child in children:
                child_path = f"{type_name}.{child.get('name')}"
                annotated_child = self.element_annotate(child, child_path)
                for nested_collection in nested:
                    annotated_child[nested_collection] = [
                        self.element_annotate(grandchild, f"{child_path}({grandchild.get('name')})")
                        for grandchild in child.get(nested_collection) or []
                    ]
                annotated_children.append(annotated_child)
            annotated[collection] = annotated_children

        return annotated

    def schema_annotate(self, schema: SchemaData) -> SchemaData:
        """Return a new SchemaData whose type records are annotated"""
        parsed_types = [self.type_annotate(t) for t in schema.parsedTypes]
        LOG(f"Extracted {self.annotation_count} annotations", level=2)
        return SchemaData(
            queryType=schema.queryType,
            mutationType=schema.mutationType,
            subscriptionType=schema.subscriptionType,
            parsedTypes=parsed_types,
        )


def schema_annotate(schema: SchemaData, strict: Optional[bool] = None) -> SchemaData:
    """
    Annotate every description in schema

    Args:
        schema: Introspected schema
        strict: Raise on malformed annotations (defaults to appsettings.strict_mode)

    Returns:
        New SchemaData with annotated records

    Raises:
        AnnotationError: In strict mode, on the first malformed annotation
    """
    return SchemaAnnotator(strict=strict).schema_annotate(schema)
