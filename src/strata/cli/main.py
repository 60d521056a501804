#!/usr/bin/env python3
"""
Strata CLI - rebuild complete hierarchies from sparse clustering output
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from strata.config import (
    StrataConfig,
    configure_logging,
    load_config,
    validate_config,
)
from strata.core.hierarchy import Hierarchy
from strata.core.node import Node
from strata.io import read_csv, write_csv, write_rows
from strata.utils.json_utils import dumps_numpy, write_json


class StrataCLI:
    """Main CLI interface for Strata."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser."""
        parser = argparse.ArgumentParser(
            prog="strata",
            description="Rebuild complete hierarchies from sparse clustering output",
        )
        parser.add_argument(
            "-v", "--verbose", action="store_true", help="Enable debug logging"
        )
        parser.add_argument("--config", help="Path to a strata.toml config file")

        subparsers = parser.add_subparsers(dest="command", help="Available commands")

        # Repair command
        repair_parser = subparsers.add_parser(
            "repair", help="Fill gaps in a hierarchy file and write the result"
        )
        self._add_input_arguments(repair_parser)
        repair_parser.add_argument("-o", "--output", help="Output file (default: stdout)")
        repair_parser.add_argument(
            "--format",
            choices=["csv", "json"],
            default="csv",
            help="Output format",
        )

        # Show command
        show_parser = subparsers.add_parser("show", help="Print the repaired tree")
        self._add_input_arguments(show_parser)
        show_parser.add_argument(
            "--max-depth", type=int, default=None, help="Deepest level to print"
        )

        # Stats command
        stats_parser = subparsers.add_parser("stats", help="Show hierarchy statistics")
        self._add_input_arguments(stats_parser)
        stats_parser.add_argument("--json", action="store_true", help="Output as JSON")

        # Config command
        config_parser = subparsers.add_parser("config", help="Inspect configuration")
        config_parser.add_argument(
            "-l", "--list", action="store_true", help="List all settings"
        )
        config_parser.add_argument("--get", metavar="KEY", help="Show a single setting")
        config_parser.add_argument(
            "--validate", action="store_true", help="Validate the configuration"
        )

        return parser

    def _add_input_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Arguments shared by commands that read a hierarchy file."""
        parser.add_argument("input", help="Hierarchy CSV file")
        parser.add_argument(
            "--fix-breadth",
            dest="fix_breadth_gaps",
            action="store_true",
            default=None,
            help="Also fill missing siblings",
        )
        parser.add_argument(
            "--use-subtree",
            action="store_true",
            default=None,
            help="Include descendant instances in centroids",
        )
        parser.add_argument(
            "--no-header",
            dest="with_header",
            action="store_false",
            default=None,
            help="Input has no header row",
        )
        parser.add_argument(
            "--true-class",
            dest="with_true_class",
            action="store_true",
            default=None,
            help="Input has a ground-truth class column",
        )
        parser.add_argument(
            "--instance-names",
            dest="with_instance_names",
            action="store_true",
            default=None,
            help="Input has an instance name column",
        )
        parser.add_argument("--delimiter", default=None, help="Column delimiter")

    def run(self, args=None) -> int:
        """Run the CLI."""
        args = self.parser.parse_args(args)

        if not args.command:
            self.parser.print_help()
            return 0

        try:
            config = load_config(
                project_path=Path.cwd(),
                config_file=Path(args.config) if args.config else None,
            )
            configure_logging(config.logging, "DEBUG" if args.verbose else None)
            self._apply_overrides(config, args)

            if args.command == "repair":
                return self._cmd_repair(args, config)
            elif args.command == "show":
                return self._cmd_show(args, config)
            elif args.command == "stats":
                return self._cmd_stats(args, config)
            elif args.command == "config":
                return self._cmd_config(args, config)
            else:
                print(f"Error: Unknown command '{args.command}'", file=sys.stderr)
                return 1
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    def _apply_overrides(self, config: StrataConfig, args: argparse.Namespace) -> None:
        """Command-line flags take precedence over every config source."""
        overrides = {
            "builder.fix_breadth_gaps": getattr(args, "fix_breadth_gaps", None),
            "builder.use_subtree": getattr(args, "use_subtree", None),
            "csv.with_header": getattr(args, "with_header", None),
            "csv.with_true_class": getattr(args, "with_true_class", None),
            "csv.with_instance_names": getattr(args, "with_instance_names", None),
            "csv.delimiter": getattr(args, "delimiter", None),
        }
        for key, value in overrides.items():
            if value is not None:
                config.set_nested(key, value)

    def _load(self, args: argparse.Namespace, config: StrataConfig) -> Hierarchy:
        return read_csv(
            args.input,
            delimiter=config.csv.delimiter,
            with_header=config.csv.with_header,
            with_true_class=config.csv.with_true_class,
            with_instance_names=config.csv.with_instance_names,
            fix_breadth_gaps=config.builder.fix_breadth_gaps,
            use_subtree=config.builder.use_subtree,
            scheme=config.identifiers.to_scheme(),
        )

    def _cmd_repair(self, args, config: StrataConfig) -> int:
        """Fill gaps and write the result."""
        hierarchy = self._load(args, config)

        if args.output is None:
            if args.format == "json":
                print(dumps_numpy(hierarchy.to_dict(), indent=2))
            else:
                write_rows(
                    hierarchy,
                    sys.stdout,
                    delimiter=config.csv.delimiter,
                    with_header=config.csv.with_header,
                    with_true_class=config.csv.with_true_class,
                    with_instance_names=config.csv.with_instance_names,
                )
            return 0

        if args.format == "json":
            write_json(hierarchy, args.output)
        else:
            write_csv(
                hierarchy,
                args.output,
                delimiter=config.csv.delimiter,
                with_header=config.csv.with_header,
                with_true_class=config.csv.with_true_class,
                with_instance_names=config.csv.with_instance_names,
            )

        created = len(hierarchy.artificial_nodes())
        print(f"Wrote {len(hierarchy)} nodes ({created} artificial) to {args.output}")
        return 0

    def _cmd_show(self, args, config: StrataConfig) -> int:
        """Print the tree, marking artificial nodes with '*'."""
        hierarchy = self._load(args, config)
        for line in self._format_tree(hierarchy.root, args.max_depth):
            print(line)
        return 0

    def _format_tree(
        self, node: Node, max_depth: Optional[int], depth: int = 0
    ) -> List[str]:
        marker = " *" if node.is_artificial else ""
        lines = [f"{'  ' * depth}{node.id}{marker} ({len(node.instances)})"]
        if max_depth is not None and depth >= max_depth:
            return lines
        for child in node.children:
            lines.extend(self._format_tree(child, max_depth, depth + 1))
        return lines

    def _cmd_stats(self, args, config: StrataConfig) -> int:
        """Show hierarchy statistics."""
        hierarchy = self._load(args, config)
        stats = hierarchy.stats()

        if args.json:
            print(dumps_numpy(stats.to_dict(), indent=2))
            return 0

        print(f"Nodes:            {stats.total_nodes}")
        print(f"  artificial:     {stats.artificial_nodes}")
        print(f"  leaves:         {stats.leaf_nodes}")
        print(f"Depth:            {stats.depth}")
        print(f"Instances:        {stats.total_instances}")
        print(f"Dimensions:       {stats.dimensions}")
        print(f"Branching factor: {stats.avg_branching_factor:.2f}")
        for level, count in stats.level_distribution.items():
            print(f"  level {level}: {count} nodes")
        return 0

    def _cmd_config(self, args, config: StrataConfig) -> int:
        """Inspect the effective configuration."""
        if args.get:
            sentinel = object()
            value = config.get_nested(args.get, sentinel)
            if value is sentinel:
                print(f"Error: Unknown configuration key '{args.get}'", file=sys.stderr)
                return 1
            print(value)
            return 0

        if args.validate:
            result = validate_config(config)
            for error in result.errors:
                print(f"error: {error}")
            for warning in result.warnings:
                print(f"warning: {warning}")
            if result.valid:
                print("Configuration is valid")
                return 0
            return 1

        for key, value in _flatten(config.to_dict()).items():
            print(f"{key} = {value!r}")
        return 0


def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, dict):
            result.update(_flatten(value, f"{full_key}."))
        else:
            result[full_key] = value
    return result


def main():
    """Main entry point."""
    cli = StrataCLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
