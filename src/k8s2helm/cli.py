"""Command line entry point."""

import argparse
import os
import sys

from k8s2helm.core.convert import convert
from k8s2helm.core.errors import ConflictError
from k8s2helm.core.meta import AppMetadata, sanitize_chart_name
from k8s2helm.io.config import CONFIG_FILENAME, load_config, save_config
from k8s2helm.io.output import emit_warnings, write_chart
from k8s2helm.io.parsing import parse_manifests, parse_stream


def main(argv: list[str] | None = None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Generate a Helm chart from plain Kubernetes manifests"
    )
    parser.add_argument(
        "chart_dir",
        help="Directory to write the chart into (created if missing)",
    )
    parser.add_argument(
        "-f", "--file", action="append", default=[],
        help="Manifest file or directory (repeatable; default: read stdin)",
    )
    parser.add_argument(
        "--chart-name",
        help="Chart name (default: config chartName, else chart directory name)",
    )
    parser.add_argument(
        "--trim-prefix",
        help="Prefix removed from object names (default: detected common prefix)",
    )
    args = parser.parse_args(argv)

    os.makedirs(args.chart_dir, exist_ok=True)

    # Step 1: load config
    config_path = os.path.join(args.chart_dir, CONFIG_FILENAME)
    config = load_config(config_path)
    if args.chart_name:
        config["chartName"] = args.chart_name
    if args.trim_prefix is not None:
        config["trimPrefix"] = args.trim_prefix
    if not config["chartName"]:
        config["chartName"] = os.path.basename(os.path.realpath(args.chart_dir))
    chart_name = sanitize_chart_name(config["chartName"])

    # Step 2: parse
    if args.file:
        manifests = parse_manifests(args.file)
    else:
        manifests = parse_stream(sys.stdin)
    print(f"Parsed manifests: {len(manifests)}", file=sys.stderr)

    # Step 3: convert
    app_meta = AppMetadata(chart_name, trim_prefix=config["trimPrefix"])
    try:
        templates, values, warnings = convert(manifests, app_meta, exclude=config["exclude"])
    except ConflictError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    # Step 4: emit warnings
    emit_warnings(warnings)

    # Step 5: write outputs
    if not templates:
        print("No templates generated — nothing to write.", file=sys.stderr)
        sys.exit(1)

    write_chart(args.chart_dir, chart_name, templates, values)
    save_config(config_path, config)
    print(f"Wrote {config_path}", file=sys.stderr)


if __name__ == "__main__":
    main()
