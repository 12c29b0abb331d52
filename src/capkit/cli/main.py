"""
Main CLI module with argument parsing and command execution.

This module provides the main CLI interface including:
- Command line argument parsing
- Command routing and execution
- Error reporting with exit codes
"""
import argparse
import os
import sys
from typing import Any, Dict, List, Optional, Tuple

from capkit import __version__
from capkit.bootstrap import Application
from capkit.cli.formatters import format_output
from capkit.config import LogLevel, get_config_manager
from capkit.domain.capability import unwrap
from capkit.domain.base.exceptions import DomainException, MissingDependencyError, ValidationError
from capkit.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments with resource-action structure."""
    parser = argparse.ArgumentParser(
        prog=os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "capkit",
        description="capkit - compose objects from registered capability implementations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s capabilities list                     # List registered capabilities
  %(prog)s capabilities show Door                # Show implementations of Door
  %(prog)s compose door=Door bowl=Bowl           # Compose from default implementations
  %(prog)s compose door=Door:IronDoor            # Select an implementation explicitly
  %(prog)s demo zoo                              # Run a catalog scenario
        """,
    )

    # Global options
    parser.add_argument("--config", help="Configuration file path")
    parser.add_argument("--log-level", choices=[level.value for level in LogLevel],
                        help="Set logging level")
    parser.add_argument("--format", choices=["json", "yaml", "table"], default="json",
                        help="Output format")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="resource", help="Available commands")

    capabilities_parser = subparsers.add_parser("capabilities", help="Inspect registered capabilities")
    capabilities_subparsers = capabilities_parser.add_subparsers(dest="action", help="Capability actions")
    capabilities_subparsers.add_parser("list", help="List capabilities and implementations")
    show_parser = capabilities_subparsers.add_parser("show", help="Show registrations for a capability")
    show_parser.add_argument("name", help="Capability name")

    compose_parser = subparsers.add_parser("compose", help="Compose an object from roles")
    compose_parser.add_argument("roles", nargs="+", metavar="ROLE=CAPABILITY[:IMPL]",
                                help="Role to capability mapping with optional implementation")

    from capkit.catalog import SCENARIOS

    demo_parser = subparsers.add_parser("demo", help="Run a catalog scenario")
    demo_parser.add_argument("scenario", choices=sorted(SCENARIOS), help="Scenario name")

    return parser.parse_args(argv)


def parse_roles(values: List[str]) -> Tuple[Dict[str, str], Dict[str, str]]:
    """
    Parse ROLE=CAPABILITY[:IMPL] arguments.

    Returns:
        Role -> capability mapping and role -> implementation selections

    Raises:
        ValidationError: If an argument is malformed
    """
    spec: Dict[str, str] = {}
    selections: Dict[str, str] = {}

    for value in values:
        role, separator, target = value.partition("=")
        if not separator or not role or not target:
            raise ValidationError(f"Invalid role '{value}', expected ROLE=CAPABILITY[:IMPL]")

        capability_name, _, implementation = target.partition(":")
        spec[role] = capability_name
        if implementation:
            selections[role] = implementation

    return spec, selections


def execute_command(args: argparse.Namespace, app: Application) -> Dict[str, Any]:
    """Route parsed arguments to the matching command."""
    registry = app.registry

    if args.resource == "capabilities":
        if args.action == "show":
            registrations = [r.to_dict() for r in registry.get_registrations().get(args.name, [])]
            if not registrations:
                raise ValidationError(f"Capability '{args.name}' is not registered")
            registrations[-1]["default"] = True
            return {"capability": args.name, "registrations": registrations}

        return {
            "capabilities": [
                {"capability": name, "implementations": registry.get_implementations(name),
                 "default": registry.get_implementations(name)[-1]}
                for name in registry.get_registered_capabilities()
            ]
        }

    if args.resource == "compose":
        spec, selections = parse_roles(args.roles)
        composite = app.compose(spec, selections=selections)
        return {
            "composite": composite.name,
            "parts": {
                role: {"capability": spec[role], "implementation": type(unwrap(composite[role])).__name__}
                for role in composite.roles
            },
        }

    if args.resource == "demo":
        from capkit.catalog import SCENARIOS

        return SCENARIOS[args.scenario](app.composer)

    raise ValidationError(f"Unknown command '{args.resource}'")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)

    if not args.resource:
        print("Error: No command specified. Use --help for usage information.", file=sys.stderr)
        return 1

    if args.resource == "capabilities" and not args.action:
        args.action = "list"

    try:
        config = get_config_manager(args.config).app_config
        if args.log_level:
            config = config.model_copy(
                update={"logging": config.logging.model_copy(update={"level": LogLevel(args.log_level)})}
            )
        app = Application(args.config, config=config)
        app.initialize()

        result = execute_command(args, app)
        print(format_output(result, args.format))
        return 0

    except MissingDependencyError as e:
        logger.error(f"Composition failed: {e}")
        print(f"Error: {e.message}", file=sys.stderr)
        for role, capability_name in e.missing.items():
            cause = e.causes.get(role)
            detail = f": {cause}" if cause else ""
            print(f"  missing: {role} -> {capability_name}{detail}", file=sys.stderr)
        return 1
    except DomainException as e:
        logger.error(f"Domain error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        return 130


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
