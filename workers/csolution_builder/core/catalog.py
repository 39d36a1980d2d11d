"""
Catalog — everything obtained from the csolution compiler tool.

Wraps the ``list packs|contexts|toolchains`` and ``convert`` operations.
Tool output is plain text, one entry per line.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from csolution_builder.core.errors import BuildError
from csolution_builder.core.tool_runner import ToolRunner, locate_tool
from csolution_builder.policy.options import BuildOptions, InstallConfig

logger = logging.getLogger(__name__)

CSOLUTION = "csolution"


def formulate_args(
    command: Sequence[str],
    input_file: str,
    options: BuildOptions,
) -> List[str]:
    """
    Translate *options* into the compiler's flag vector for *command*.

    Raises ConfigurationError when context and configuration are both set.
    """
    options.check_exclusive()

    args = list(command)
    if input_file:
        args.append(f"--solution={input_file}")
    if options.output:
        args.append(f"--output={options.output}")
    if options.load:
        args.append(f"--load={options.load}")
    if not options.schema:
        args.append("--no-check-schema")
    if not options.update_rte:
        args.append("--no-update-rte")
    if options.configuration:
        args.append(f"--context=*{options.configuration}")
    if options.context:
        args.append(f"--context={options.context}")
    if options.filter:
        args.append(f"--filter={options.filter}")
    if options.verbose:
        args.append("--verbose")
    return args


def split_tool_output(output: str) -> List[str]:
    """
    Normalize line-oriented tool output into a list of entries.

    CRLF becomes LF, spaces inside entries are removed and blank lines
    are dropped.  Order is preserved.
    """
    text = output.replace("\r\n", "\n")
    entries = []
    for line in text.split("\n"):
        entry = "".join(line.split())
        if entry:
            entries.append(entry)
    return entries


class CompilerTool:
    """The csolution binary bound to one solution file and one options value."""

    def __init__(
        self,
        runner: ToolRunner,
        install_config: InstallConfig,
        input_file: str,
        options: BuildOptions,
    ):
        self.runner = runner
        self.install_config = install_config
        self.input_file = input_file
        self.options = options

    def args(self, command: Sequence[str], options: Optional[BuildOptions] = None) -> List[str]:
        return formulate_args(command, self.input_file, options or self.options)

    def run(self, args: Sequence[str], quiet: bool) -> str:
        binary = locate_tool(self.install_config, CSOLUTION)
        return self.runner.execute(str(binary), quiet, *args)

    def list_contexts(
        self,
        quiet: bool = True,
        declaration_order: bool = False,
        options: Optional[BuildOptions] = None,
    ) -> List[str]:
        """
        Contexts of the solution.

        With *declaration_order* the tool reports them as authored in
        the solution file instead of its default ordering.
        """
        args = self.args(["list", "contexts"], options)
        if declaration_order:
            args.append("--yml-order")
        try:
            output = self.run(args, quiet)
        except BuildError:
            logger.error("error executing 'csolution list contexts'")
            raise
        return split_tool_output(output)

    def list_toolchains(self, quiet: bool = True) -> List[str]:
        """Toolchains the solution can be built with."""
        args = self.args(["list", "toolchains"])
        try:
            output = self.run(args, quiet)
        except BuildError:
            logger.error("error executing 'csolution list toolchains'")
            raise
        return split_tool_output(output)

    def list_missing_packs(self) -> List[str]:
        """Identifiers of packs the solution needs but which are not installed."""
        args = self.args(["list", "packs"])
        args.append("-m")
        try:
            output = self.run(args, False)
        except BuildError:
            logger.error("error in getting list of missing packs")
            raise
        return split_tool_output(output)

    def convert(self, args: Optional[Sequence[str]] = None) -> None:
        """Generate the per-context descriptors and the index document."""
        if args is None:
            args = self.args(["convert"])
        self.run(args, False)
