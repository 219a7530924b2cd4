"""
StockPulse - Command Line Runner
================================

Run the inventory core against the seeded mock data source and print
results as JSON.

Usage:
    stockpulse summary
    stockpulse alerts --unread
    stockpulse reorder prod-0003
    stockpulse plan
    stockpulse trending --limit 5
    stockpulse report monthly --range last3months --format csv
    stockpulse --seed 42 --products 20 summary
    stockpulse --log-level WARNING plan
"""

import argparse
import json
import sys
from typing import Any, List, Optional

from stockpulse.context import InventoryContext
from stockpulse.models.errors import StockPulseError
from stockpulse.utils.constants import REPORT_CONFIG
from stockpulse.utils.logger import get_logger, set_log_level

logger = get_logger(__name__)

REPORT_KINDS = REPORT_CONFIG["sales_kinds"] + ["inventory", "supplier"]
DATE_RANGES = list(REPORT_CONFIG["date_ranges"]) + ["ytd", "all"]


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='stockpulse',
        description='StockPulse inventory decision core'
    )
    parser.add_argument('--seed', type=int, default=None, help='Seed for the mock data source')
    parser.add_argument('--products', type=int, default=None, help='Number of mock products')
    parser.add_argument(
        '--log-level', default=None,
        help='Logging level for the stderr log, e.g. WARNING'
    )

    commands = parser.add_subparsers(dest='command', required=True)

    commands.add_parser('summary', help='Dashboard KPIs')

    alerts = commands.add_parser('alerts', help='Current alerts, newest first')
    alerts.add_argument('--unread', action='store_true', help='Only unread alerts')

    reorder = commands.add_parser('reorder', help='Reorder recommendation for one product')
    reorder.add_argument('product_id')

    commands.add_parser('plan', help='Reorder plan (urgent / recommended / optimal)')

    trending = commands.add_parser('trending', help='Products ranked by social momentum')
    trending.add_argument('--limit', type=int, default=5)

    report = commands.add_parser('report', help='Build and export a report')
    report.add_argument('kind', choices=REPORT_KINDS)
    report.add_argument('--range', dest='date_range', choices=DATE_RANGES, default='last30days')
    report.add_argument('--format', dest='fmt', choices=REPORT_CONFIG["formats"], default='csv')
    report.add_argument('--output-dir', default=None)

    return parser


def run(args: argparse.Namespace, context: InventoryContext) -> None:
    """Execute one parsed command against a context."""
    if args.command == 'summary':
        _print_json(context.dashboard_summary().to_dict())

    elif args.command == 'alerts':
        context.alerts()
        alerts = context.alert_store.sorted_by_recency()
        if args.unread:
            alerts = [a for a in alerts if not a.read]
        _print_json([a.to_dict() for a in alerts])

    elif args.command == 'reorder':
        rec = context.reorder_recommendation(args.product_id)
        payload = rec.to_dict()
        payload["externalFactorAdjustment"] = (
            context.reorder_engine.external_factor_adjustment(rec.reasoning)
        )
        _print_json(payload)

    elif args.command == 'plan':
        _print_json(context.reorder_plan().to_dict())

    elif args.command == 'trending':
        _print_json([t.to_dict() for t in context.trending_products(args.limit)])

    elif args.command == 'report':
        builder = context.report_builder(args.output_dir)
        if args.kind == 'inventory':
            table = builder.inventory_status_report()
            name = 'inventory_status'
        elif args.kind == 'supplier':
            table = builder.supplier_report()
            name = 'supplier_summary'
        else:
            table = builder.sales_report(args.kind, args.date_range)
            name = f'sales_{args.kind}_{args.date_range}'
        path = builder.export(table, name, args.fmt)
        _print_json({"report": name, "rows": len(table), "path": str(path)})


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    if args.log_level:
        set_log_level(args.log_level)

    context = InventoryContext(seed=args.seed, product_count=args.products)

    try:
        run(args, context)
    except StockPulseError as e:
        logger.error(str(e))
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
