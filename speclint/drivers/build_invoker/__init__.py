"""Build invoker drivers."""

from speclint.drivers.build_invoker.command_invoker import (
    CommandBuildInvoker,
    parse_compiler_output,
    render_command,
)

__all__ = ["CommandBuildInvoker", "parse_compiler_output", "render_command"]
