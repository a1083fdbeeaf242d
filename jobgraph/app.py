import argparse
from pathlib import Path

from . import __version__
from .catalog import load_catalog, run_demo, seed_catalog
from .cleanup import reset_graph
from .config import get_settings, load_env
from .database import JOB_LABEL, GraphStore
from .errors import GraphError
from .events import EventKind, click
from .ingest import add_job
from .logger import get_logger
from .ranking import format_report, rank_by_weight

DEFAULT_RESET_TITLE = "Systems Analyst"


def open_store(args: argparse.Namespace) -> GraphStore:
    return GraphStore(args.db)


def cmd_init(args: argparse.Namespace) -> None:
    with open_store(args) as store:
        name = store.create_index(JOB_LABEL, "weight")
        store.await_index_online(name, timeout=args.timeout)
        print(f"Index {name}: {store.index_population_progress(name):.0f}% complete")


def cmd_add(args: argparse.Namespace) -> None:
    with open_store(args) as store:
        node = add_job(store, args.company, args.title)
        print(f"Added: {node.job_id} (weight {node.weight})")


def cmd_load(args: argparse.Namespace) -> None:
    input_path = Path(args.input)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    records = load_catalog(input_path)
    with open_store(args) as store:
        nodes = seed_catalog(store, records)
    print(f"Loaded {len(nodes)} jobs from {input_path}")


def cmd_click(args: argparse.Namespace) -> None:
    with open_store(args) as store:
        node = click(store, args.company, args.title, args.kind)
        if node is None:
            raise SystemExit(2)
        print(f"{args.kind}: {node.job_id} -> {node.weight}")


def cmd_rank(args: argparse.Namespace) -> None:
    with open_store(args) as store:
        ranked = rank_by_weight(store)
    if args.limit is not None:
        ranked = ranked[:args.limit]
    for line in format_report(ranked):
        print(line)


def cmd_stats(args: argparse.Namespace) -> None:
    with open_store(args) as store:
        with store.unit_of_work():
            nodes = store.count_nodes()
            relationships = store.count_relationships()
    print(f"Jobs: {nodes}")
    print(f"Relationships: {relationships}")


def cmd_reset(args: argparse.Namespace) -> None:
    job_title = None if args.all else args.title
    with open_store(args) as store:
        relationships, nodes = reset_graph(store, job_title)
    print(f"Deleted {relationships} relationships and {nodes} jobs")


def cmd_demo(args: argparse.Namespace) -> None:
    # Throwaway in-memory graph unless the result should be kept
    url = args.db if args.keep else "sqlite://"
    with GraphStore(url) as store:
        for line in format_report(run_demo(store)):
            print(line)
        if not args.keep:
            reset_graph(store, None)
    get_logger().log_metrics_summary()


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="jobgraph", description="Job similarity graph and ranking")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument(
        "--db",
        default=settings.database_url,
        help=f"SQLAlchemy database URL (default: {settings.database_url})",
    )

    subparsers = parser.add_subparsers(dest="command")

    ini = subparsers.add_parser("init", help="Create the graph tables and the weight index")
    ini.add_argument("--timeout", type=float, default=10.0, help="Seconds to wait for the index (default 10)")
    ini.set_defaults(func=cmd_init)

    add = subparsers.add_parser("add", help="Add a job and connect it to every existing job")
    add.add_argument("--company", required=True, help="Company name")
    add.add_argument("--title", required=True, help="Job title")
    add.set_defaults(func=cmd_add)

    lod = subparsers.add_parser("load", help="Add every job from a JSON catalog")
    lod.add_argument("--input", required=True, help="Path to catalog JSON")
    lod.set_defaults(func=cmd_load)

    clk = subparsers.add_parser("click", help="Apply an interaction to a job")
    clk.add_argument("--company", required=True, help="Company name")
    clk.add_argument("--title", required=True, help="Job title")
    clk.add_argument(
        "--kind",
        default=EventKind.CLICK.value,
        choices=[k.value for k in EventKind],
        help="Interaction kind (default: click)",
    )
    clk.set_defaults(func=cmd_click)

    rnk = subparsers.add_parser("rank", help="Print jobs ordered by weight")
    rnk.add_argument("--limit", type=int, help="Only print the top N jobs")
    rnk.set_defaults(func=cmd_rank)

    sts = subparsers.add_parser("stats", help="Count jobs and relationships")
    sts.set_defaults(func=cmd_stats)

    rst = subparsers.add_parser("reset", help="Delete all relationships and the jobs with a title")
    rst.add_argument("--title", default=DEFAULT_RESET_TITLE, help=f"Job title to delete (default: {DEFAULT_RESET_TITLE})")
    rst.add_argument("--all", action="store_true", help="Delete every job")
    rst.set_defaults(func=cmd_reset)

    dmo = subparsers.add_parser("demo", help="Seed the demo catalog, replay demo events and print the ranking")
    dmo.add_argument("--keep", action="store_true", help="Build the demo graph in --db and keep it")
    dmo.set_defaults(func=cmd_demo)

    return parser


def main(argv=None):
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        try:
            args.func(args)
        except GraphError as e:
            raise SystemExit(f"Error: {e}")
        return

    parser.print_help()


if __name__ == "__main__":
    main()
