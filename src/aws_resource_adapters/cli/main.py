"""
Main CLI module with argument parsing and command execution.

This module provides the main CLI interface including:
- Command line argument parsing
- Command routing to the resource adapters and sweepers
- Output formatting
"""
import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from aws_resource_adapters import __version__
from aws_resource_adapters.cli.formatters import FORMATS, format_output
from aws_resource_adapters.config import AppConfig, ConfigurationManager
from aws_resource_adapters.domain.core.exceptions import DomainException
from aws_resource_adapters.helpers.logger import setup_logging
from aws_resource_adapters.infrastructure.exceptions import InfrastructureError, SweepError
from aws_resource_adapters.infrastructure.sweep import SweeperRegistry, run_sweepers
from aws_resource_adapters.providers.aws.aws_client import AWSClient
from aws_resource_adapters.providers.aws.registration import (
    build_adapter,
    get_definition,
    register_sweepers,
    resource_types,
)

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog=os.path.basename(sys.argv[0]),
        description="AWS resource adapters - read, delete and sweep managed AWS resources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s types                                      # List supported resource types
  %(prog)s read aws_sesv2_tenant my-tenant            # Read a tenant by name
  %(prog)s delete aws_cleanrooms_configured_table ID  # Delete a configured table
  %(prog)s sweep --type aws_sesv2_tenant --dry-run    # List tenants a sweep would delete
        """
    )

    # Global options
    parser.add_argument('--config', help='Configuration file path (JSON or YAML)')
    parser.add_argument('--region', help='AWS region')
    parser.add_argument('--profile', help='AWS profile')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Set logging level')
    parser.add_argument('--format', choices=FORMATS, default='json', help='Output format')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    subparsers.add_parser('types', help='List supported resource types')

    read_parser = subparsers.add_parser('read', help='Read a resource by its import identifier')
    read_parser.add_argument('type_name', help='Resource type name')
    read_parser.add_argument('identifier', help='Import identifier')

    delete_parser = subparsers.add_parser('delete', help='Delete a resource by its identifier')
    delete_parser.add_argument('type_name', help='Resource type name')
    delete_parser.add_argument('identifier', help='Resource identifier')

    sweep_parser = subparsers.add_parser('sweep', help='Delete every resource of the selected types')
    sweep_parser.add_argument('--type', dest='types', action='append', metavar='TYPE',
                              help='Resource type to sweep (repeatable, default: all)')
    sweep_parser.add_argument('--dry-run', action='store_true', help='List without deleting')

    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> AppConfig:
    manager = ConfigurationManager(
        args.config,
        overrides={
            "aws": {"region": args.region, "profile": args.profile},
            "logging": {"level": args.log_level},
        },
    )
    return manager.app_config


def list_types(config: AppConfig) -> List[Dict[str, Any]]:
    types = []
    for type_name in resource_types():
        definition = get_definition(type_name, config)
        types.append({
            "type": type_name,
            "service": definition.service,
            "import_identifier": definition.import_identifier,
        })
    return types


def execute_command(args: argparse.Namespace, config: AppConfig,
                    aws_client: Optional[AWSClient] = None) -> Any:
    """Execute the parsed command and return data for formatting."""
    if args.command == 'types':
        return list_types(config)

    aws_client = aws_client or AWSClient(config.aws)

    if args.command == 'read':
        adapter = build_adapter(args.type_name, aws_client, config)
        record = adapter.import_state(args.identifier)
        return record.model_dump(mode="json")

    if args.command == 'delete':
        adapter = build_adapter(args.type_name, aws_client, config)
        adapter.delete_by_identifier(args.identifier)
        return {"type": args.type_name, "identifier": args.identifier, "deleted": True}

    if args.command == 'sweep':
        registry = register_sweepers(SweeperRegistry(), aws_client, config)
        selected = args.types or config.sweep.resource_types or None
        return run_sweepers(registry, selected, dry_run=args.dry_run)

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    if not args.command:
        print("Error: No command specified. Use --help for usage information.", file=sys.stderr)
        return 1

    try:
        config = load_config(args)
        setup_logging(config.logging)
        result = execute_command(args, config)
        print(format_output(result, args.format))
        return 0
    except SweepError as e:
        logger.error("Sweep failed: %s", e)
        for type_name, identifier, error in e.failures:
            print(f"Error: {type_name} ({identifier}): {error}", file=sys.stderr)
        return 1
    except (DomainException, InfrastructureError) as e:
        logger.error("Command %s failed: %s", args.command, e)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
