"""
Builder runner — top-level orchestration: solution → per-context builds.

Phases run strictly in sequence and the first failure aborts the run:

    init → selection → [pack install] → convert → context 1..n

Nothing is rolled back: packs already installed and contexts already
built stay as they are.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from csolution_builder.config import Settings
from csolution_builder.core.catalog import CompilerTool
from csolution_builder.core.configurations import list_configurations
from csolution_builder.core.context import parse_context
from csolution_builder.core.errors import BuildError
from csolution_builder.core.packs import install_missing_packs
from csolution_builder.core.paths import context_dirs, index_file_path
from csolution_builder.core.project_builder import CprjBuilder, ProjectBuilder
from csolution_builder.core.selector import select_contexts
from csolution_builder.core.tool_runner import ToolRunner, update_env_vars
from csolution_builder.io.index_loader import locate_descriptor
from csolution_builder.io.schema import BuildSummary, ContextResult
from csolution_builder.io.writer import write_summary
from csolution_builder.policy.options import BuildOptions, InstallConfig

logger = logging.getLogger(__name__)


class CSolutionBuilder:
    """Builds every selected context of one csolution file."""

    def __init__(
        self,
        input_file: str,
        options: BuildOptions,
        install_config: Optional[InstallConfig] = None,
        runner: Optional[ToolRunner] = None,
        project_builder: Optional[ProjectBuilder] = None,
    ):
        self.input_file = input_file
        self.options = options
        self.install_config = install_config or Settings().install_config()
        self.runner = runner or ToolRunner()
        self.project_builder = project_builder or CprjBuilder(self.runner, self.install_config)
        self.summary = BuildSummary(solution=input_file)

    def _tool(self, options: Optional[BuildOptions] = None) -> CompilerTool:
        return CompilerTool(self.runner, self.install_config, self.input_file, options or self.options)

    # ── List commands ────────────────────────────────────────────────

    def list_contexts_command(self) -> None:
        self._tool().list_contexts(quiet=False)

    def list_toolchains_command(self) -> None:
        self._tool().list_toolchains(quiet=False)

    def list_configurations_command(self) -> List[str]:
        configurations = list_configurations(self._tool())
        if configurations:
            print("\n".join(configurations))
        return configurations

    # ── Build ────────────────────────────────────────────────────────

    def process_context(self, context: str, options: BuildOptions) -> ContextResult:
        """
        Locate the descriptor generated for *context*, derive its
        output/intermediate directories and hand it to the project builder.
        """
        info = f'Processing context: "{context}"'
        print("=" * (len(info) + 13))
        logger.info(info)

        result = ContextResult(context=context)
        self.summary.results.append(result)

        if options.output and (options.outdir or options.intdir):
            logger.warning(
                'output files are generated under: "%s". '
                "Options --outdir and --intdir shall be ignored.",
                options.output,
            )

        try:
            index_path = index_file_path(self.input_file, options.output)
            descriptor = locate_descriptor(index_path, context)
            item = parse_context(context)
        except BuildError as e:
            logger.error("error getting cprj file: %s", e)
            result.status = "FAILED"
            result.error = str(e)
            raise

        outdir, intdir = context_dirs(descriptor, item)
        result.descriptor = str(descriptor)
        result.outdir = str(outdir)
        result.intdir = str(intdir)

        logger.debug("outdir: %s", outdir)
        logger.debug("intdir: %s", intdir)

        try:
            self.project_builder.build(descriptor, options.for_context(context, outdir, intdir))
        except BuildError as e:
            logger.error("error processing '%s'", descriptor)
            result.status = "FAILED"
            e.annotate(str(descriptor))
            result.error = str(e)
            raise

        result.status = "SUCCESS"
        return result

    def build(self) -> BuildSummary:
        """
        Run all phases.  Returns the summary; raises the first BuildError.
        """
        try:
            self._build()
        except BuildError as e:
            self.summary.status = "FAILED"
            self.summary.error = str(e)
            raise
        self.summary.status = "SUCCESS"
        return self.summary

    def _build(self) -> None:
        # ── Init: best effort, never fatal ───────────────────────────
        try:
            update_env_vars(self.install_config.bin_path, self.install_config.etc_path)
        except (OSError, ValueError) as e:
            logger.debug("could not update environment: %s", e)

        # ── Selection ────────────────────────────────────────────────
        self.options.check_exclusive()
        tool = self._tool()
        try:
            catalog = tool.list_contexts(quiet=True, declaration_order=True)
        except BuildError as e:
            logger.error('error getting list of contexts: "%s"', e)
            raise
        selection = select_contexts(catalog, self.options)
        options = selection.options
        self.summary.selected_contexts = list(selection.contexts)

        # ── Arguments for convert ────────────────────────────────────
        tool = self._tool(options)
        convert_args = tool.args(["convert"])

        # ── Packs ────────────────────────────────────────────────────
        if options.packs:
            try:
                self.summary.installed_packs = install_missing_packs(tool)
            except BuildError as e:
                logger.error('error installing missing packs: "%s"', e)
                raise

        # ── Convert: once for the whole solution ─────────────────────
        tool.convert(convert_args)
        self.summary.converted = True

        # ── Per-context processing, fail fast ────────────────────────
        for context in selection.contexts:
            self.process_context(context, options)


# ── CLI ──────────────────────────────────────────────────────────────────────

def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="csolution-build",
        description="Build the contexts of a csolution project",
    )
    parser.add_argument("solution", help="Path to <name>.csolution.yml")

    parser.add_argument("-c", "--context", default="", help="Build a single context")
    parser.add_argument("--configuration", default="", help="Build all contexts of a configuration, e.g. .Debug+Board")
    parser.add_argument("-O", "--output", default="", help="Output directory for generated files")
    parser.add_argument("-l", "--load", default="", help="Pack version selection: latest|all|required")
    parser.add_argument("-f", "--filter", default="", help="Substring filter for list commands")
    parser.add_argument("--no-schema-check", dest="schema", action="store_false", help="Skip schema check")
    parser.add_argument("--no-update-rte", dest="update_rte", action="store_false", help="Skip RTE update")
    parser.add_argument("-p", "--packs", action="store_true", help="Install missing packs")
    parser.add_argument("--outdir", default="", help="Output directory for binaries")
    parser.add_argument("--intdir", default="", help="Directory for intermediate files")

    parser.add_argument("-t", "--toolchain", default="", help="Toolchain to build with")
    parser.add_argument("-j", "--jobs", type=int, default=0, help="Parallel build jobs")
    parser.add_argument("-C", "--clean", action="store_true", help="Remove intermediate and output directories")
    parser.add_argument("-r", "--rebuild", action="store_true", help="Clean before building")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress tool output")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose tool output")

    listing = parser.add_mutually_exclusive_group()
    listing.add_argument("--list-contexts", action="store_true", help="List contexts and exit")
    listing.add_argument("--list-configurations", action="store_true", help="List configurations and exit")
    listing.add_argument("--list-toolchains", action="store_true", help="List toolchains and exit")

    parser.add_argument("--summary", type=Path, default=None, help="Write a JSON build summary to this path")
    return parser.parse_args(argv)


def options_from_args(args: argparse.Namespace) -> BuildOptions:
    return BuildOptions(
        output=args.output,
        load=args.load,
        schema=args.schema,
        update_rte=args.update_rte,
        configuration=args.configuration,
        context=args.context,
        filter=args.filter,
        verbose=args.verbose,
        packs=args.packs,
        outdir=args.outdir,
        intdir=args.intdir,
        toolchain=args.toolchain,
        jobs=args.jobs,
        clean=args.clean,
        rebuild=args.rebuild,
        quiet=args.quiet,
        debug=args.debug,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for csolution-build."""
    args = _parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    builder = CSolutionBuilder(args.solution, options_from_args(args))
    try:
        if args.list_contexts:
            builder.list_contexts_command()
        elif args.list_configurations:
            builder.list_configurations_command()
        elif args.list_toolchains:
            builder.list_toolchains_command()
        else:
            builder.build()
            logger.info("Built %d context(s)", len(builder.summary.results))
    except BuildError as e:
        logger.error("%s", e)
        return 1
    finally:
        if args.summary:
            write_summary(builder.summary, args.summary)

    return 0


if __name__ == "__main__":
    sys.exit(main())
