import argparse
import json
import logging
import sys

from abilityscout.config import ScanConfig, load_config
from abilityscout.errors import AbilityScoutError
from abilityscout.export.drafts import generate_multiple_stubs
from abilityscout.export.report import export, filter_by_confidence, generate_summary
from abilityscout.scanner import Scanner
from abilityscout.utils.plugin_header import read_plugin_info


def build_config(args) -> ScanConfig:
    config = load_config(args.config) if args.config else ScanConfig()
    overrides = {}
    if args.max_files is not None:
        overrides["max_files"] = args.max_files
    if args.max_file_size is not None:
        overrides["max_file_size"] = args.max_file_size
    if args.progress:
        overrides["show_progress"] = True
    return config.replace(**overrides) if overrides else config


def write_output(content, output_path):
    if not output_path:
        print(content)
        return
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(content)
        if not content.endswith("\n"):
            f.write("\n")
    print(f"Wrote {output_path}")


def run_scan(args):
    result = Scanner(build_config(args)).scan(args.root_dir)
    result.potential_abilities = filter_by_confidence(result.potential_abilities, args.confidence)
    result.stats.potential_abilities_count = len(result.potential_abilities)

    if args.format == "summary":
        content = generate_summary(result)
    else:
        content = export(result, args.format, read_plugin_info(args.root_dir))
    write_output(content, args.output)


def run_draft(args):
    result = Scanner(build_config(args)).scan(args.root_dir)
    stubs = generate_multiple_stubs(result, args.confidence)
    if not stubs:
        print(f"No {args.confidence}-confidence abilities found in {args.root_dir}", file=sys.stderr)
        return
    if args.json:
        write_output(json.dumps(stubs, indent=2, ensure_ascii=False), args.output)
    else:
        write_output("\n".join(s["code"] for s in stubs), args.output)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Discover ability candidates in a WordPress plugin")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase log verbosity (-v info, -vv debug)")
    subparsers = parser.add_subparsers(dest="function", help="Available functions")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("root_dir", help="Plugin directory to scan")
    common.add_argument("--config", help="TOML file with a [scan] table of settings")
    common.add_argument("--max_files", "--max-files", type=int, dest="max_files",
                        help="Maximum number of files to scan")
    common.add_argument("--max_file_size", "--max-file-size", type=int, dest="max_file_size",
                        help="Skip files larger than this many bytes")
    common.add_argument("--output", "-o", help="Write the result to this file instead of stdout")
    common.add_argument("--progress", action="store_true", help="Show a progress bar")

    parser_scan = subparsers.add_parser("scan", parents=[common],
                                        help="Scan a plugin and report potential abilities")
    parser_scan.add_argument("--format", choices=["summary", "json", "markdown"], default="summary",
                             help="Output format (default: summary)")
    parser_scan.add_argument("--confidence", choices=["high", "medium", "low"], default="low",
                             help="Minimum confidence to include (default: low)")

    parser_draft = subparsers.add_parser("draft", parents=[common],
                                         help="Generate PHP registration stubs for potential abilities")
    parser_draft.add_argument("--confidence", choices=["high", "medium", "low"], default="high",
                              help="Minimum confidence to include (default: high)")
    parser_draft.add_argument("--json", action="store_true", help="Emit stubs as a JSON list")

    args = parser.parse_args(argv)

    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if not args.function:
        parser.print_help()
        return 0

    try:
        if args.function == "scan":
            run_scan(args)
        elif args.function == "draft":
            run_draft(args)
    except (AbilityScoutError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
