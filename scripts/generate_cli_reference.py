#!/usr/bin/env python3
"""Generate the continhas CLI reference from the typer app."""

import inspect
from pathlib import Path
from typing import Any

from continhas.cli import app


def format_option(param_name: str, option: Any) -> str:
    """Render one option as a markdown bullet."""
    flags = list(getattr(option, "param_decls", None) or []) or [f"--{param_name.replace('_', '-')}"]
    line = "- " + ", ".join(f"`{flag}`" for flag in flags)

    if getattr(option, "help", None):
        line += f": {option.help}"

    default = getattr(option, "default", None)
    if default is not None and default is not False and default is not Ellipsis:
        line += f" (default: {default})"

    return line


def generate_command_doc(command_name: str, command_obj: Any) -> str:
    """Document one command: description, usage, arguments and options."""
    callback = command_obj.callback
    signature = inspect.signature(callback)

    arguments = [name for name, param in signature.parameters.items() if param.default is inspect.Parameter.empty]
    options = [
        (name, param.default)
        for name, param in signature.parameters.items()
        if param.default is not inspect.Parameter.empty and hasattr(param.default, "help")
    ]

    usage = " ".join(["continhas", command_name, *(arg.upper() for arg in arguments)])
    lines = [
        f"### {command_name}",
        "",
        (callback.__doc__ or "No description available.").strip(),
        "",
        "```bash",
        usage + (" [OPTIONS]" if options else ""),
        "```",
        "",
    ]

    if arguments:
        lines += ["**Arguments:**", ""]
        lines += [f"- `{arg.upper()}` (required)" for arg in arguments]
        lines.append("")

    if options:
        lines += ["**Options:**", ""]
        lines += [format_option(name, option) for name, option in options]
        lines.append("")

    return "\n".join(lines)


def generate_cli_reference() -> str:
    """Build the full markdown reference."""
    lines = [
        "# continhas CLI reference",
        "",
        "Months are given as `YYYY-MM` and default to the current month.",
        "Amounts accept `5000`, `5.000,00` and `R$ 5.000,00`.",
        "",
        "## Global options",
        "",
        "| Option | Description |",
        "|--------|-------------|",
        "| `--verbose`, `-v` | Log debug output to stderr |",
        "| `--help` | Show help message and exit |",
        "",
        "## Commands",
        "",
    ]

    commands = sorted(app.registered_commands, key=lambda command: command.name or "")
    for command_obj in commands:
        name = command_obj.name or (command_obj.callback.__name__ if command_obj.callback else "unknown")
        lines.append(generate_command_doc(name, command_obj))

    return "\n".join(lines)


def main() -> None:
    output_path = Path(__file__).parent.parent / "docs" / "cli-commands.md"
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(generate_cli_reference())
    print(f"Generated CLI reference at {output_path}")


if __name__ == "__main__":
    main()
