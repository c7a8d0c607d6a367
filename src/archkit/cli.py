"""Command-line interface for archkit."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import INTERPOLATION_POLICIES, settings


def configure_logging(verbose: bool = False):
    """Configure root logging from settings."""
    level = logging.DEBUG if verbose or settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def parse_vars(pairs: Optional[list[str]]) -> dict[str, str]:
    """Parse NAME=VALUE pairs into render variables.

    Raises:
        ValueError: If a pair has no '=' or an empty name
    """
    variables: dict[str, str] = {}
    for pair in pairs or []:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise ValueError(f"Invalid variable '{pair}', expected NAME=VALUE")
        variables[name] = value
    return variables


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="archkit",
        description="archkit - Extract prompt templates from source and render them",
    )
    parser.add_argument(
        "--templates", type=Path, default=None,
        help=f"Templates JSON file (default: {settings.templates_path})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Convert command
    convert_parser = subparsers.add_parser(
        "convert", help="Extract the template library from a source file into JSON"
    )
    convert_parser.add_argument("input", type=Path, help="Source file containing the library")
    convert_parser.add_argument(
        "output", type=Path, nargs="?", default=None,
        help="Output JSON file (default: --templates or configured path)",
    )
    convert_parser.add_argument(
        "--marker", default=None,
        help=f"Identifier the library is assigned to (default: {settings.source_marker})",
    )
    convert_parser.add_argument(
        "--interpolation", choices=INTERPOLATION_POLICIES, default=None,
        help="How to treat ${...} in backtick strings (default: strict)",
    )

    # List command
    subparsers.add_parser("list", help="List available templates and their variables")

    # Render command
    render_parser = subparsers.add_parser("render", help="Render a template to stdout")
    render_parser.add_argument("template", help="Template key")
    render_parser.add_argument("input", nargs="?", default=None, help="Text for {{INPUT}}")
    render_parser.add_argument(
        "--var", action="append", metavar="NAME=VALUE", help="Value for a {{VAR:NAME:...}}"
    )

    # Analyze command
    analyze_parser = subparsers.add_parser(
        "analyze", help="Render a template interactively and optionally send it to the LLM"
    )
    analyze_parser.add_argument("template", nargs="?", default=None, help="Template key")
    analyze_parser.add_argument("input", nargs="?", default=None, help="Text to analyze")
    analyze_parser.add_argument(
        "--var", action="append", metavar="NAME=VALUE", help="Value for a {{VAR:NAME:...}}"
    )
    analyze_parser.add_argument(
        "--send", action="store_true", help="Send the rendered prompt to the configured LLM"
    )

    # Models command
    models_parser = subparsers.add_parser("models", help="List models available on OpenRouter")
    models_parser.add_argument("--filter", default="", help="Only show ids containing this text")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging(args.verbose)

    if args.command == "convert":
        return run_convert(args.input, args.output or args.templates, args.marker, args.interpolation)
    if args.command == "list":
        return run_list(args.templates)

    if args.command in ("render", "analyze"):
        try:
            variables = parse_vars(args.var)
        except ValueError as e:
            parser.error(str(e))
        if args.command == "render":
            return run_render(args.templates, args.template, args.input, variables)
        return asyncio.run(
            run_analyze(args.templates, args.template, args.input, variables, args.send)
        )

    if args.command == "models":
        return run_models(args.filter)

    parser.print_help()
    return 1


def run_convert(
    input_path: Path,
    output_path: Optional[Path],
    marker: Optional[str],
    interpolation: Optional[str],
) -> int:
    """Run the extraction pipeline and write the templates file."""
    from .extraction import ExtractionError, LibraryConverter

    output_path = output_path or settings.templates_path
    converter = LibraryConverter(marker=marker, interpolation=interpolation)
    try:
        templates = converter.convert(input_path, output_path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ExtractionError as e:
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        if "interpolation" in str(e):
            print(
                "Templates that use ${...} referencing outside values cannot be "
                "evaluated; retry with --interpolation literal to keep them as text.",
                file=sys.stderr,
            )
        return 1
    except (OSError, UnicodeError) as e:
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    print(f"Converted {len(templates)} templates: {output_path}")
    return 0


def _open_store(templates_path: Optional[Path]):
    from .templates import TemplateStore

    return TemplateStore(templates_path)


def run_list(templates_path: Optional[Path]) -> int:
    """Print template keys and their variables."""
    from .templates import StoreError, TemplateParser

    store = _open_store(templates_path)
    try:
        templates = store.load()
    except StoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    parser = TemplateParser()
    print(f"{len(templates)} templates available:")
    for key, body in templates.items():
        details = []
        if parser.uses_input(body):
            details.append("INPUT")
        for name, options in parser.variables(body).items():
            details.append(f"{name}={'|'.join(options)}")
        suffix = f"  [{', '.join(details)}]" if details else ""
        print(f"  {key}{suffix}")
    return 0


def run_render(
    templates_path: Optional[Path],
    template_key: str,
    input_text: Optional[str],
    variables: dict[str, str],
) -> int:
    """Render one template and print it."""
    from .templates import StoreError, TemplateNotFoundError, TemplateRenderer

    if input_text is not None:
        variables = {**variables, "input": input_text}

    store = _open_store(templates_path)
    try:
        print(TemplateRenderer(store).render(template_key, variables))
    except (StoreError, TemplateNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def _prompt_for_template(keys: list[str]) -> Optional[str]:
    """Ask the user to pick a template from a numbered menu."""
    print(f"Select analysis template ({len(keys)} available):")
    for index, key in enumerate(keys, start=1):
        print(f"  {index:>3}. {key}")

    while True:
        try:
            choice = input("Template: ").strip()
        except EOFError:
            return None
        if choice.isdigit() and 1 <= int(choice) <= len(keys):
            return keys[int(choice) - 1]
        if choice in keys:
            return choice
        print(f"Enter a number between 1 and {len(keys)} or a template name.")


async def run_analyze(
    templates_path: Optional[Path],
    template_key: Optional[str],
    input_text: Optional[str],
    variables: dict[str, str],
    send: bool,
) -> int:
    """Interactive analysis: choose a template, enter input, render, optionally send."""
    from .analysis import analyze_with_template
    from .llm import create_client
    from .templates import StoreError

    store = _open_store(templates_path)

    print("Arch Analysis Tool")
    print("=" * 40)

    if not template_key:
        try:
            keys = store.keys()
        except StoreError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        template_key = _prompt_for_template(keys)
        if template_key is None:
            print("Operation cancelled.")
            return 0

    if input_text is None:
        try:
            input_text = input("Enter text to analyze: ")
        except EOFError:
            print("Operation cancelled.")
            return 0

    client = None
    if send:
        try:
            client = create_client()
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        if client is None:
            print("Error: --send requires LLM_PROVIDER to be set", file=sys.stderr)
            return 1

    print(f"Analyzing with template: {template_key}...")
    result = await analyze_with_template(
        store, template_key, {**variables, "input": input_text}, client=client
    )

    if not result.success:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1

    print()
    print("=" * 40)
    print(f"RESULT ({template_key}):")
    print("=" * 40)
    print(result.response if result.response is not None else result.prompt)
    print("=" * 40)
    if settings.debug:
        print(json.dumps(result.model_dump(), indent=2, ensure_ascii=False))
    print("Analysis complete.")
    return 0


def run_models(name_filter: str) -> int:
    """List models available to the configured OpenRouter key."""
    import httpx

    from .llm import OpenRouterClient

    if not settings.openrouter_api_key:
        print("Error: OPENROUTER_API_KEY is not set", file=sys.stderr)
        return 1

    client = OpenRouterClient(api_key=settings.openrouter_api_key)
    try:
        models = client.list_models(name_filter)
    except httpx.HTTPError as e:
        print(f"Error: could not list models: {e}", file=sys.stderr)
        return 1

    if not models:
        print("No models found.")
        return 0
    for model in models:
        print(model)
    return 0


if __name__ == "__main__":
    sys.exit(main())
