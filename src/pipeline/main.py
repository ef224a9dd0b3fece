#!/usr/bin/env python3
"""
Service Insights - command line entry point

Builds the dependency graph around one central service, either from a span
or trace file or from traces collected from Jaeger, prints the summary and
optionally saves the result as JSON and a PNG drawing.
"""

import logging
import os
import sys
from typing import Optional

from service_insights import ServiceInsightsError
from service_insights.visualize_graph import print_graph_table, print_node_summary, visualize_graph

from .cli import CLI
from .insights import ServiceInsightsPipeline

logger = logging.getLogger("main-pipeline")


def run(args) -> int:
    """Run one extraction for parsed arguments; returns the process exit code."""
    pipeline = ServiceInsightsPipeline()

    if args.spans_file:
        logger.info("SERVICE INSIGHTS: Local File")
        result = pipeline.analyze_from_file(args.spans_file, args.service)
    else:
        logger.info("SERVICE INSIGHTS: Jaeger Backend")
        result = pipeline.analyze_from_jaeger(args.service, args.past_interval)

    print_graph_table(result)
    print_node_summary(result)

    if args.export:
        pipeline.save_result(result, args.service, args.output)

    if args.visualize:
        output_name = args.output or f"service_insights_{args.service}"
        output_img = os.path.join(pipeline.config.OUTPUT_DIR, f"{output_name}_graph.png")
        os.makedirs(pipeline.config.OUTPUT_DIR, exist_ok=True)
        visualize_graph(result, output_img)

    return 0


def main(argv: Optional[list] = None) -> int:
    """Main entry point with command-line argument parsing."""
    cli = CLI()
    args = cli.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format='%(name)s - %(levelname)s - %(message)s'
    )

    if not cli.validate_args(args):
        return 1

    try:
        return run(args)
    except (FileNotFoundError, ValueError, ServiceInsightsError) as e:
        logger.error(f"Operation failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
