#!/usr/bin/env python3
"""
CLI Module - Handles command-line interface and argument parsing
"""

import argparse
import logging
from typing import Optional

logger = logging.getLogger("cli")


class CLI:
    """Command Line Interface handler"""

    def __init__(self):
        self.parser = self._create_parser()

    def parse_args(self, args: Optional[list] = None):
        """Parse command line arguments"""
        return self.parser.parse_args(args)

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser"""
        parser = argparse.ArgumentParser(
            description='Service Insights - Dependency graph around a central service',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog='''
SOURCES:
  python main.py --spans-file /path/to/traces.json --service SERVICE
      Build the graph from a Jaeger trace export or a flat span list

  python main.py --jaeger --service SERVICE --past-interval 3600
      Build the graph from traces collected from Jaeger
            '''
        )

        source_group = parser.add_mutually_exclusive_group()
        source_group.add_argument('--spans-file', type=str, metavar='SPANS_FILE',
                                  help='Build graph from an existing span or trace file')
        source_group.add_argument('--jaeger', action='store_true',
                                  help='Build graph from traces fetched from Jaeger')

        parser.add_argument('--service', type=str,
                            help='Central service the graph is built for')
        parser.add_argument('--past-interval', type=int, metavar='SECONDS',
                            help='How far back to collect traces from Jaeger')
        parser.add_argument('--output', '-o', type=str,
                            help='Base filename for output files')
        parser.add_argument('--export', '-e', action='store_true',
                            help='Save the extraction result as JSON')
        parser.add_argument('--visualize', '-v', action='store_true',
                            help='Save a PNG drawing of the graph')
        parser.add_argument('--debug', action='store_true',
                            help='Enable debug logging')

        return parser

    def validate_args(self, args) -> bool:
        """Validate argument combinations"""
        if not args.spans_file and not args.jaeger:
            logger.error("No span source specified. Use --help for usage information.")
            self.parser.print_help()
            return False

        if not args.service:
            logger.error("--service is required")
            return False

        if args.past_interval is not None and not args.jaeger:
            logger.error("--past-interval only applies to --jaeger")
            return False

        return True
