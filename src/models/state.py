"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

import dataclasses
from functools import reduce
from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Dict, Callable
from dataclasses import dataclass, field

from .schema import SchemaData


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the documentation pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, endpoint, schemaFile,
          partialBaseDir, templateBaseDir, typeTemplate, strict
        - env_check: templatesInputdir, partialsInputdir, schemaInputFile,
          htmlOutputdir, envOK
        - schema_fetch: schemaData
        - descriptions_split: schemaData (annotated), annotationCount
        - html_render: renderResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory holding templates/, partials/ and schema files
        outputdir: Directory receiving the rendered pages
        verbosity: Logging verbosity level (1-3)
        endpoint: GraphQL endpoint to introspect
        schemaFile: Saved introspection JSON (relative to inputdir)
        partialBaseDir: Partial directory (relative to inputdir)
        templateBaseDir: Template directory (relative to inputdir)
        typeTemplate: Template rendered once per type
        strict: Abort on malformed annotations
        envOK: Environment validation passed
        schemaData: Introspected (then annotated) schema
        annotationCount: Number of annotations extracted from descriptions
        renderResult: Render results (status, page_count, pages, output_dir)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    endpoint: Optional[str] = field(default=None)
    schemaFile: Optional[str] = field(default=None)
    partialBaseDir: str = field(default="partials")
    templateBaseDir: str = field(default="templates")
    typeTemplate: str = field(default="Type.html")
    strict: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    templatesInputdir: Path = field(default=Path("/"))
    partialsInputdir: Optional[Path] = field(default=None)
    schemaInputFile: Optional[Path] = field(default=None)
    htmlOutputdir: Path = field(default=Path("/"))
    schemaData: Optional[SchemaData] = field(default=None)
    annotationCount: int = field(default=0)
    renderResult: Optional[Dict[str, Any]] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (endpoint, templateBaseDir, etc.)
            inputdir: Directory containing templates and partials
            outputdir: Directory for rendered pages

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Keep only options that are ProgramState fields
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            schema_fetch,
            descriptions_split,
            html_render,
            results_report
        )

    This is equivalent to:
        results_report(html_render(descriptions_split(schema_fetch(env_check(initial_state)))))
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
