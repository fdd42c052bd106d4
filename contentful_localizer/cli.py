"""Command-line interface for the Contentful localizer."""

import argparse
import asyncio
import os
import sys
from typing import List, Optional

from .config import ConfigurationError, Settings, load_settings, resolve_locales
from .exporter import LabelExporter
from .importer import LabelImporter
from .stores import ContentfulStore
from .utils import default_log_file, get_data_file_path, setup_logging
from .validator import SchemaMismatchError

OPERATIONS = ("import", "export")


class InvalidOperationError(ValueError):
    """The requested operation is missing or unknown."""


def parse_operation(value: Optional[str]) -> str:
    """Validate the operation argument.

    Args:
        value: Raw positional argument, ``None`` when absent

    Returns:
        The operation name

    Raises:
        InvalidOperationError: If the value is missing or not supported
    """
    valid = " | ".join(OPERATIONS)
    if value is None:
        raise InvalidOperationError(f"Specify the operation type. Valid types: {valid}")
    if value not in OPERATIONS:
        raise InvalidOperationError(
            f"Invalid operation type. Valid types: {valid}. Received {value}"
        )
    return value


async def run_operation(operation: str, settings: Settings, data_file: str, show_progress: bool = True) -> None:
    """Run an export or an import against Contentful.

    Args:
        operation: ``import`` or ``export``
        settings: Connection and locale settings
        data_file: Workbook path
        show_progress: Whether to display progress bars
    """
    async with ContentfulStore(
        access_token=settings.access_token,
        space_id=settings.space_id,
        environment=settings.environment,
        base_url=settings.api_url
    ) as store:
        default_locale, locales = await resolve_locales(settings, store)

        if operation == "export":
            exporter = LabelExporter(
                store,
                default_locale,
                excluded_content_types=settings.excluded_content_types,
                show_progress=show_progress
            )
            await exporter.export_labels(data_file)
        else:
            importer = LabelImporter(
                store,
                default_locale,
                locales,
                excluded_content_types=settings.excluded_content_types,
                show_progress=show_progress
            )
            await importer.import_labels(data_file)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Contentful Localizer - Sync translatable entry texts with an Excel workbook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export default-locale texts into the workbook
  python -m contentful_localizer export

  # Import translated columns back and publish the entries
  python -m contentful_localizer import --environment staging

Environment variables:
  CONTENTFUL_MANAGEMENT_TOKEN        Required Content Management API token
  CONTENTFUL_SPACE_ID                Required space id
  CONTENTFUL_ENVIRONMENT             Environment name (default: master)
  CONTENTFUL_DEFAULT_LOCALE          Default locale (default: read from the space)
  CONTENTFUL_LOCALES                 Comma separated locales (default: read from the space)
  CONTENTFUL_EXCLUDED_CONTENT_TYPES  Comma separated content types to skip
        """
    )

    parser.add_argument(
        "operation",
        nargs="?",
        help="Operation to run: import | export"
    )

    parser.add_argument(
        "--data-file",
        default=get_data_file_path(),
        help="Workbook path (default: data/ContentfulData.xlsx in the package directory)"
    )

    parser.add_argument(
        "--environment",
        help="Contentful environment, overrides CONTENTFUL_ENVIRONMENT"
    )

    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Hide the per-page progress bar"
    )

    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)"
    )

    parser.add_argument(
        "--log-file",
        help="Optional log file path (default: timestamped file in the working directory)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        operation = parse_operation(args.operation)
    except InvalidOperationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if not args.log_file:
        args.log_file = default_log_file(operation)
    setup_logging(args.log_level, args.log_file)

    data_file = args.data_file.strip("\"'")
    if operation == "import" and not os.path.exists(data_file):
        print(f"Error: Data file '{data_file}' does not exist")
        sys.exit(1)

    try:
        settings = load_settings(environment=args.environment)
    except ConfigurationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    try:
        asyncio.run(run_operation(operation, settings, data_file, show_progress=not args.no_progress))
    except KeyboardInterrupt:
        print(f"\n{operation.capitalize()} interrupted by user")
        sys.exit(1)
    except SchemaMismatchError as e:
        print(f"Schema error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"{operation.capitalize()} failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
