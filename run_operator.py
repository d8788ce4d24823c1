#!/usr/bin/env python3
"""
Wrapper script to run the work status agent with Kopf.

Usage:
    python run_operator.py [any kopf run arguments]

Examples:
    python run_operator.py --verbose --all-namespaces
    python run_operator.py -n cluster1 --log-format=json
"""

import sys

if __name__ == '__main__':
    import kopf.cli

    # Registers the startup, cleanup, probe and ManifestWork handlers
    import kwork.app  # noqa: F401

    # Behave as if called as: kopf run <args>
    sys.argv.insert(1, 'run')

    sys.exit(kopf.cli.main(prog_name="kopf"))
