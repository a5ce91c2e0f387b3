import argparse
import json
import sys

from .columns import default_mapping
from .config import ExportSettings
from .core.engine import OrderFlattener
from .core.io import serialize_csv
from .job import ExportJob
from .logging_config import setup_logger
from .scheduler import serve


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="order_export", description="Weekly Shopify order export to SFTP.")
    parser.add_argument("--once", action="store_true", help="run the export immediately and exit")
    parser.add_argument("--dry-run", metavar="ORDERS_JSON",
                        help="flatten orders from a local JSON file and print the CSV; no network access")
    parser.add_argument("--trace", action="store_true", help="with --dry-run, print per-column rule traces instead of CSV")
    args = parser.parse_args(argv)

    if args.dry_run:
        with open(args.dry_run, "r", encoding="utf-8") as f:
            data = json.load(f)
        orders = data.get("orders", []) if isinstance(data, dict) else data
        flattener = OrderFlattener(default_mapping())
        if args.trace:
            traces = [flattener.trace(order) for order in orders]
            sys.stdout.write(json.dumps(traces, indent=2, ensure_ascii=False) + "\n")
            return 0
        sys.stdout.write(serialize_csv(flattener.flatten(orders), flattener.columns))
        return 0

    settings = ExportSettings()
    setup_logger("order_export", settings.log_file, settings.log_level)

    if args.once:
        result = ExportJob.from_settings(settings).run()
        return 0 if result.ok else 1

    serve(settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
