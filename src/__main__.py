#!/usr/bin/env python3
"""
gqldocs - GraphQL schema documentation generator

Fetches a GraphQL schema through introspection and renders it through
user-supplied HTML templates and partials.

Descriptions in the schema may carry inline annotations such as
@deprecated(reason: "use X instead") or @internal. These are split out of
the prose before rendering, so templates receive a clean ``description``
plus an ordered ``annotations`` list on every type, field, argument, input
field and enum value.

Layout of inputdir:
    templates/   page templates; Type.html is rendered once per type,
                 every other file once with the schema summary
    partials/    fragments, included by filename stem ({% include "TypeRef" %})

Usage:
    gqldocs inputdir/ outputdir/ --endpoint https://example.com/graphql

Examples:
    # Introspect a live endpoint
    gqldocs . site/ -e http://localhost:4000/graphql

    # Render from a saved introspection result
    gqldocs . site/ --schemaFile schema.json

    # Custom directories and type template, abort on malformed annotations
    gqldocs . site/ -e http://localhost:4000 --templateBaseDir tpl/ \\
        --partialBaseDir parts/ -t Object.html --strict -vv

The entry point follows the ChRIS plugin pattern: @chris_plugin supplies the
positional inputdir/outputdir arguments and hands main() the parsed options
along with both directories as Path objects.
"""

import sys
import traceback
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import (
    __version__,
    LOG,
    state_connectToLogger,
    IntrospectionClient,
    IntrospectionError,
    schemaFile_load,
    SchemaAnnotator,
    AnnotationError,
    Renderer,
    RenderError,
)
from .models import ProgramState, pipeline


# Define CLI arguments
parser = ArgumentParser(
    description="gqldocs - GraphQL schema documentation generator",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

source_group = parser.add_mutually_exclusive_group(required=True)
source_group.add_argument(
    "-e", "--endpoint", default=None, type=str, help="GraphQL endpoint to introspect"
)
source_group.add_argument(
    "--schemaFile",
    default=None,
    type=str,
    help="Saved introspection JSON (relative to inputdir), used instead of --endpoint",
)

parser.add_argument(
    "--partialBaseDir", default="partials", type=str, help="Partial directory (relative to inputdir)"
)

parser.add_argument(
    "--templateBaseDir", default="templates", type=str, help="Template directory (relative to inputdir)"
)

parser.add_argument(
    "-t",
    "--typeTemplate",
    default=appsettings.type_template,
    type=str,
    help="Template rendered once per schema type",
)

parser.add_argument(
    "--strict",
    action="store_true",
    default=appsettings.strict_mode,
    help="Abort when a description holds a malformed annotation",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all directory paths.

    Returns:
        ProgramState with added fields:
            - templatesInputdir: Resolved template directory
            - partialsInputdir: Resolved partial directory (None if absent)
            - schemaInputFile: Resolved schema file (None with --endpoint)
            - htmlOutputdir: Created output directory
            - envOK: True if environment is valid

    Exits:
        1 if the template directory or the schema file is missing
    """
    state = inputstate.copy()

    LOG("[Generate GQLDocs]", level=1)
    LOG("Checking environment...", level=2)

    state.templatesInputdir = state.inputdir / state.templateBaseDir
    if not state.templatesInputdir.is_dir():
        print(f"Error: Template directory not found: {state.templatesInputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    LOG(f"Templates: {state.templatesInputdir}/*", level=1)

    partials = state.inputdir / state.partialBaseDir
    if partials.is_dir():
        state.partialsInputdir = partials
        LOG(f"Partials: {partials}/*", level=1)
    else:
        state.partialsInputdir = None
        LOG(f"No partial directory at {partials}, rendering without partials", level=1)

    if state.schemaFile:
        state.schemaInputFile = state.inputdir / state.schemaFile
        if not state.schemaInputFile.is_file():
            print(f"Error: Schema file not found: {state.schemaInputFile}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        LOG(f"Schema file: {state.schemaInputFile}", level=1)
    else:
        LOG(f"Endpoint: {state.endpoint}", level=1)

    state.htmlOutputdir = state.outputdir
    state.htmlOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.htmlOutputdir}", level=2)

    state.envOK = True
    return state


def schema_fetch(inputstate: ProgramState) -> ProgramState:
    """
    Introspect the endpoint (or load the schema file) into SchemaData.

    Returns:
        ProgramState with added field:
            - schemaData: Introspected schema

    Exits:
        1 if the schema cannot be fetched or is invalid
    """
    state = inputstate.copy()

    try:
        if state.schemaInputFile is not None:
            LOG("Loading saved introspection result...", level=1)
            state.schemaData = schemaFile_load(state.schemaInputFile)
        else:
            LOG("Running introspection query...", level=1)
            state.schemaData = IntrospectionClient(state.endpoint).schema_fetch()
    except IntrospectionError as e:
        print(f"Introspection error: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Schema has {len(state.schemaData.parsedTypes)} types", level=2)
    return state


def descriptions_split(inputstate: ProgramState) -> ProgramState:
    """
    Split @directive annotations out of every schema description.

    Returns:
        ProgramState with updated/added fields:
            - schemaData: Schema with annotated records
            - annotationCount: Number of annotations extracted

    Exits:
        1 in strict mode if a description holds a malformed annotation
    """
    state = inputstate.copy()

    if not appsettings.split_descriptions:
        LOG("Annotation extraction disabled, descriptions left as-is", level=2)
        return state

    LOG("Extracting description annotations...", level=1)
    annotator = SchemaAnnotator(strict=state.strict)
    try:
        state.schemaData = annotator.schema_annotate(state.schemaData)
    except AnnotationError as e:
        print(f"Annotation error: {e}", file=sys.stderr)
        sys.exit(1)

    state.annotationCount = annotator.annotation_count
    if annotator.malformed:
        LOG(f"{len(annotator.malformed)} descriptions kept raw (malformed annotations)", level=1)
    return state


def html_render(inputstate: ProgramState) -> ProgramState:
    """
    Render every template against the schema.

    Returns:
        ProgramState with added field:
            - renderResult: dict with status, page_count, pages, output_dir

    Exits:
        1 if schemaData is None or rendering fails
    """
    state = inputstate.copy()

    if state.schemaData is None:
        print("Error: No schema available", file=sys.stderr)
        sys.exit(1)

    LOG("Rendering templates...", level=1)
    try:
        renderer = Renderer(
            templates_dir=str(state.templatesInputdir),
            partials_dir=str(state.partialsInputdir) if state.partialsInputdir else None,
            output_dir=str(state.htmlOutputdir),
            type_template=state.typeTemplate,
        )
        state.renderResult = renderer.render(state.schemaData)
    except RenderError as e:
        print(f"Render error: {e}", file=sys.stderr)
        if state.verbosity >= 3:
            traceback.print_exc()
        sys.exit(1)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display the generation summary.

    Exits:
        1 if renderResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.renderResult:
        print("Error: Rendering failed", file=sys.stderr)
        sys.exit(1)

    LOG("✓ Documentation generated", level=1)
    LOG(f"  Output: {state.renderResult['output_dir']}", level=1)
    LOG(f"  Pages: {state.renderResult['page_count']}", level=1)
    LOG(f"  Annotations: {state.annotationCount}", level=1)
    return state


def generate(options: Namespace, inputdir: Path, outputdir: Path) -> ProgramState:
    """
    Generate documentation pages for a GraphQL schema.

    Orchestrates the full pipeline:
        1. env_check: Validate paths and environment
        2. schema_fetch: Introspect endpoint or load schema file
        3. descriptions_split: Extract annotations from descriptions
        4. html_render: Render templates and partials
        5. results_report: Display results

    Args:
        options: Parsed CLI arguments
        inputdir: Directory holding templates, partials and schema files
        outputdir: Directory receiving the rendered pages

    Returns:
        Final ProgramState
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    return pipeline(state, env_check, schema_fetch, descriptions_split, html_render, results_report)


@chris_plugin(
    parser=parser,
    title="gqldocs - GraphQL schema documentation generator",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - render GraphQL schema documentation to HTML pages.

    Note:
        This function is wrapped by @chris_plugin which adds the positional
        inputdir/outputdir arguments, parses the CLI and invokes this
        function with parsed values.
    """
    generate(options, inputdir, outputdir)


if __name__ == "__main__":
    main()
