import argparse
import logging
import sys
from pathlib import Path

from musicals import __version__
import musicals.config as cfg_module
import musicals.db as db_module
from musicals.cron import count_active
from musicals.csv_io import export_csv, parse_csv
from musicals.importer import backfill_run_ids, reconcile
from musicals.samples import seed


def _connect(cfg):
    return db_module.connect(cfg_module.get_database_path(cfg))


def _init_db(args, cfg):
    db_path = cfg_module.get_database_path(cfg)
    _connect(cfg).close()
    print(f"Database ready at '{db_path}'.")


def _seed(args, cfg):
    conn = _connect(cfg)
    result = seed(conn)
    print(f"Sample data: {result.inserted} inserted, {result.updated} updated.")


def _import(args, cfg):
    path = Path(args.path)
    if not path.exists():
        print(f"Error: no such file '{path}'.", file=sys.stderr)
        sys.exit(1)

    records = parse_csv(path.read_text(encoding="utf-8-sig"))
    if not records:
        print("Error: no records found in CSV.", file=sys.stderr)
        sys.exit(1)

    result = reconcile(_connect(cfg), records)
    print(f"Inserted: {result.inserted}")
    print(f"Updated:  {result.updated}")
    if result.errors:
        print(f"Errors:   {len(result.errors)}")
        for err in result.errors:
            print(f"  {err['row']}: {err['error']}")


def _export(args, cfg):
    musicals = db_module.get_all_musicals(_connect(cfg))
    text = export_csv(musicals)
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        print(f"Exported {len(musicals)} musicals to '{args.output}'.")
    else:
        sys.stdout.write(text)


def _migrate_run_ids(args, cfg):
    migrated = backfill_run_ids(_connect(cfg))
    print(f"Migrated {migrated} records.")


def _cron(args, cfg):
    count_active(_connect(cfg))


def _serve(args, cfg):
    from musicals.server import create_app

    server_cfg = cfg_module.get_server(cfg)
    host = args.host or server_cfg.get("host", "127.0.0.1")
    port = args.port or server_cfg.get("port", 8000)
    username, password = cfg_module.get_admin_credentials(cfg)
    if not (username and password):
        print("Warning: ADMIN_USERNAME / ADMIN_PASSWORD not set; the admin panel will refuse every login.")
    print(f"Serving at http://{host}:{port}")
    create_app(cfg).run(host=host, port=port, debug=server_cfg.get("debug", False))


def main():
    parser = argparse.ArgumentParser(
        prog="lm",
        description="London Musicals listing site",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--config", default="config.toml", metavar="PATH",
        help="Path to config.toml (default: config.toml)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create the database and schema")
    subparsers.add_parser("seed", help="Load the demo listings")

    sp_import = subparsers.add_parser("import", help="Upsert listings from a CSV file")
    sp_import.add_argument("path", help="CSV file with a header row")

    sp_export = subparsers.add_parser("export", help="Write every listing as CSV")
    sp_export.add_argument("-o", "--output", metavar="PATH", help="Write to PATH instead of stdout")

    subparsers.add_parser("migrate-run-ids", help="Fill in run ids for listings that lack one")
    subparsers.add_parser("cron", help="Log today's running-show count (run daily)")

    sp_serve = subparsers.add_parser("serve", help="Run the web server")
    sp_serve.add_argument("--host", help="Bind address (default from config, else 127.0.0.1)")
    sp_serve.add_argument("--port", type=int, help="Port (default from config, else 8000)")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cfg = cfg_module.load(Path(args.config))

    commands = {
        "init-db": _init_db,
        "seed": _seed,
        "import": _import,
        "export": _export,
        "migrate-run-ids": _migrate_run_ids,
        "cron": _cron,
        "serve": _serve,
    }
    commands[args.command](args, cfg)


if __name__ == "__main__":
    main()
