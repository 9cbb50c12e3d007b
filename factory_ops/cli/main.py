"""
Command-line interface for factory operations data.

Usage:
    factory-ops sample <kind> [--output FILE]
    factory-ops validate <kind> <file>
    factory-ops import <kind> <file> [--memory | db options]
    factory-ops batches <kind> [--memory | db options]
    factory-ops delete-batch <batch_id> [--memory | db options]
    factory-ops insights [--memory | db options] [--insights-config FILE]
    factory-ops kpis [--memory | db options]

Every command that reads or writes records accepts --demo.
"""

import argparse
import json
import sys
from contextlib import contextmanager
from pathlib import Path

from factory_ops.analytics import compute_kpis, daily_production
from factory_ops.batch import ImportPipeline, generate_sample, parse_file, sample_file_name
from factory_ops.core.models import DataKind
from factory_ops.core.rules import load_thresholds
from factory_ops.insights import InsightsService
from factory_ops.observability import get_logger
from factory_ops.utils import InputValidationError, validate_record_id, validate_upload_path
from factory_ops.warehouse import BatchNotFoundError, InMemoryCollectionStore, seed_demo_data

logger = get_logger(__name__)

KIND_CHOICES = [kind.value for kind in DataKind]


@contextmanager
def open_store(args):
    """
    Yield the collection store selected on the command line.

    --memory gives an empty ephemeral store; otherwise a PostgreSQL store is
    opened with the --db-* flags (falling back to DB_* env vars) and closed
    on exit. --demo fills a store without production data with demo records.
    """
    if args.memory:
        store = InMemoryCollectionStore()
        if args.demo:
            seed_demo_data(store)
        yield store
        return

    from factory_ops.warehouse.connection import DatabaseConnectionPool
    from factory_ops.warehouse.postgres_store import PostgresCollectionStore

    pool = DatabaseConnectionPool(
        host=args.db_host,
        port=args.db_port,
        database=args.db_name,
        user=args.db_user,
        password=args.db_password,
    )
    try:
        pool.open()
        store = PostgresCollectionStore(pool)
        store.ensure_schema()
        if args.demo:
            seed_demo_data(store)
        yield store
    finally:
        pool.close()


def print_messages(title: str, messages: list[str]) -> None:
    if not messages:
        return
    print(f"{title}:")
    for message in messages:
        print(f"  - {message}")


def sample_command(args):
    """Write the sample CSV for a data kind to --output or stdout."""
    text = generate_sample(args.kind)
    if args.output:
        output = Path(args.output)
        if output.is_dir():
            output = output / sample_file_name(args.kind)
        output.write_text(text + "\n", encoding="utf-8")
        logger.info(f"Sample written to {output}")
    else:
        print(text)


def validate_command(args):
    """Validate a file without writing anything."""
    path = validate_upload_path(args.file)
    result = parse_file(path, args.kind)
    summary = result.summarize()

    print(f"{path.name}: {summary['records']} valid records")
    print_messages("Errors", summary["errors"])
    print_messages("Warnings", summary["warnings"])

    if result.has_errors:
        sys.exit(1)


def import_command(args):
    """Validate a file and, when it has no errors, import it as one batch."""
    path = validate_upload_path(args.file)

    with open_store(args) as store:
        outcome = ImportPipeline(store).import_file(path, args.kind)
        summary = outcome.result.summarize()

        logger.info("=" * 60)
        logger.info(f"File: {path.name} ({args.kind})")
        logger.info(f"Valid records: {summary['records']}")
        logger.info(f"Errors: {len(outcome.result.errors)}")
        logger.info(f"Warnings: {len(outcome.result.warnings)}")
        logger.info("=" * 60)

        print_messages("Errors", summary["errors"])
        print_messages("Warnings", summary["warnings"])

        if outcome.blocked:
            print("Import blocked: fix the errors above and try again")
            sys.exit(1)

        print(f"Successfully imported {outcome.imported} records (batch {outcome.batch.id})")


def batches_command(args):
    """List the import batches of a data kind, newest first."""
    with open_store(args) as store:
        batches = ImportPipeline(store).list_batches(args.kind)

    if not batches:
        print(f"No imports yet for {args.kind}")
        return

    print(f"{'ID':>6}  {'IMPORTED AT':<20}  {'RECORDS':>7}  FILE")
    for batch in batches:
        print(
            f"{batch.id:>6}  {batch.imported_at.strftime('%Y-%m-%d %H:%M:%S'):<20}  "
            f"{batch.record_count:>7}  {batch.file_name}"
        )


def delete_batch_command(args):
    """Delete an import batch and every record it created."""
    batch_id = validate_record_id(args.batch_id, field_name="batch_id")
    with open_store(args) as store:
        removed = ImportPipeline(store).delete_batch(batch_id)
    print(f"Deleted batch {batch_id}: {removed} records removed")


def insights_command(args):
    """Print the insights report as JSON."""
    thresholds = load_thresholds(args.insights_config)
    with open_store(args) as store:
        insights = InsightsService(store, thresholds).refresh()
    print(json.dumps(insights.model_dump(mode="json", by_alias=True), indent=2))


def kpis_command(args):
    """Print dashboard KPIs and the recent daily production series as JSON."""
    with open_store(args) as store:
        production = store.to_array(DataKind.PRODUCTION)
        inventory = store.to_array(DataKind.INVENTORY)
        sales = store.to_array(DataKind.SALES)

    report = {
        "kpis": compute_kpis(production, inventory, sales).model_dump(),
        "dailyProduction": [point.model_dump() for point in daily_production(production)],
    }
    print(json.dumps(report, indent=2))


COMMANDS = {
    "sample": sample_command,
    "validate": validate_command,
    "import": import_command,
    "batches": batches_command,
    "delete-batch": delete_batch_command,
    "insights": insights_command,
    "kpis": kpis_command,
}


def add_store_arguments(parser: argparse.ArgumentParser) -> None:
    """Store selection flags shared by every command that touches records."""
    parser.add_argument(
        "--memory",
        action="store_true",
        help="Use an ephemeral in-memory store instead of PostgreSQL"
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Add 30 days of demo data when the store has no production records"
    )
    parser.add_argument("--db-host", default=None, help="Database host (default: $DB_HOST or localhost)")
    parser.add_argument("--db-port", type=int, default=None, help="Database port (default: $DB_PORT or 5432)")
    parser.add_argument("--db-name", default=None, help="Database name (default: $DB_NAME or factory_ops)")
    parser.add_argument("--db-user", default=None, help="Database user (default: $DB_USER or factory_ops)")
    parser.add_argument("--db-password", default=None, help="Database password (default: $DB_PASSWORD)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="factory-ops",
        description="Factory operations data: imports, batches, KPIs and insights",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Download a sample file
  factory-ops sample production --output production-sample.csv

  # Check a file before importing it
  factory-ops validate inventory data/inventory.xlsx

  # Import into PostgreSQL and list the batches
  factory-ops import production data/october.csv --db-host localhost
  factory-ops batches production

  # Undo an import
  factory-ops delete-batch 12

  # Try the dashboard figures on demo data
  factory-ops kpis --memory --demo

  # Insights with custom thresholds
  factory-ops insights --insights-config config/insights.yaml
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    sample_parser = subparsers.add_parser("sample", help="Print or save a sample CSV file")
    sample_parser.add_argument("kind", choices=KIND_CHOICES, help="Data kind")
    sample_parser.add_argument("--output", help="File or directory to write the sample to")

    validate_parser = subparsers.add_parser("validate", help="Validate a file without importing it")
    validate_parser.add_argument("kind", choices=KIND_CHOICES, help="Data kind")
    validate_parser.add_argument("file", help="CSV or Excel file")

    import_parser = subparsers.add_parser("import", help="Import a file as a new batch")
    import_parser.add_argument("kind", choices=KIND_CHOICES, help="Data kind")
    import_parser.add_argument("file", help="CSV or Excel file")
    add_store_arguments(import_parser)

    batches_parser = subparsers.add_parser("batches", help="List import batches")
    batches_parser.add_argument("kind", choices=KIND_CHOICES, help="Data kind")
    add_store_arguments(batches_parser)

    delete_parser = subparsers.add_parser("delete-batch", help="Delete an import batch and its records")
    delete_parser.add_argument("batch_id", type=int, help="Import batch ID")
    add_store_arguments(delete_parser)

    insights_parser = subparsers.add_parser("insights", help="Generate the insights report")
    insights_parser.add_argument(
        "--insights-config",
        default=None,
        help="Threshold YAML file (default: $INSIGHTS_CONFIG or config/insights.yaml)"
    )
    add_store_arguments(insights_parser)

    kpis_parser = subparsers.add_parser("kpis", help="Show dashboard KPIs")
    add_store_arguments(kpis_parser)

    return parser


def main(argv: list[str] | None = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        COMMANDS[args.command](args)
    except (InputValidationError, BatchNotFoundError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Error during {args.command}: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
