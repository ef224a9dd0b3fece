#!/usr/bin/env python3
"""
Service Insights - Dependency graph around a central service

Usage Examples:
    python main.py --spans-file output/traces/traces.json --service frontend
    python main.py --spans-file output/traces/traces.json --service frontend --export --visualize
    python main.py --jaeger --service frontend --past-interval 3600
"""

import os
import sys

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from pipeline.main import main

if __name__ == "__main__":
    sys.exit(main())
